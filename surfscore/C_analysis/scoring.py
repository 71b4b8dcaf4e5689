"""Rúbrica de puntuación de las dos fases de la maniobra (bottom turn y top turn).

Ambas funciones son puras y solo se invocan en los instantes en que la máquina
de estados cierra una fase. Devuelven el total y un detalle
``{criterio: (puntos, valor_bruto)}`` para poder explicar la nota.

Todas las bandas son inclusivas en sus extremos: un torso de exactamente 20°
en el bottom turn recibe los 3 puntos.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Sequence, Tuple

from surfscore.B_pose_estimation.signal import std_or_zero
from surfscore.config.models import ScoringConfig

logger = logging.getLogger(__name__)

ScoreDetail = Dict[str, Tuple[int, float]]

BOTTOM_TURN_MAX_SCORE = 10
TOP_TURN_MAX_SCORE = 10

# Nombres de criterio tal y como aparecen en el detalle serializado.
COMPRESSION = "compression"
TORSO_LEAN = "torso_lean"
ROTATION = "rotation"
SMOOTHNESS = "smoothness_std"
EXTENSION = "extension_delta_vs_bottom"
UPRIGHT_TORSO = "upright_torso"


def _band_points(value: float, bands: Sequence[Tuple[float, float]], points: Sequence[int] = (3, 2, 1)) -> int:
    """Puntos de la primera banda ``[min, max]`` (inclusiva) que contiene ``value``."""
    for (low, high), pts in zip(bands, points):
        if low <= value <= high:
            return pts
    return 0


def _points_at_least(value: float, tiers: Sequence[float], top: int) -> int:
    """``top`` puntos al superar el primer umbral, uno menos por cada escalón."""
    for idx, threshold in enumerate(tiers):
        if value >= threshold:
            return top - idx
    return 0


def _points_at_most(value: float, tiers: Sequence[float], top: int) -> int:
    for idx, threshold in enumerate(tiers):
        if value <= threshold:
            return top - idx
    return 0


def smoothness_proxy(
    knee_hist: Iterable[float],
    torso_hist: Iterable[float],
    rot_hist: Iterable[float],
    *,
    min_samples: int,
) -> float:
    """Media de las desviaciones típicas poblacionales de los tres históricos.

    Un histórico con menos de ``min_samples`` valores aporta 0.
    """
    stds = [std_or_zero(hist, min_samples) for hist in (knee_hist, torso_hist, rot_hist)]
    return sum(stds) / 3.0


def _smoothness_points(proxy: float, cfg: ScoringConfig) -> int:
    if proxy <= cfg.smooth_std_max:
        return 2
    if proxy <= cfg.smooth_std_max * cfg.smooth_std_relaxed_factor:
        return 1
    return 0


def _raw(value: float, cfg: ScoringConfig) -> float:
    return round(float(value), int(cfg.detail_decimals))


def score_bottom_turn(
    knee: float,
    torso: float,
    rot: float,
    knee_hist: Iterable[float],
    torso_hist: Iterable[float],
    rot_hist: Iterable[float],
    *,
    cfg: Optional[ScoringConfig] = None,
) -> Tuple[int, ScoreDetail]:
    """Puntúa el bottom turn (máximo 10) a partir de la instantánea de compresión.

    Criterios: compresión de rodilla (3), inclinación del torso (3), rotación
    hombros/caderas (2) y suavidad de los históricos (2).
    """
    cfg = cfg or ScoringConfig()
    detail: ScoreDetail = {}

    compression = _band_points(knee, cfg.compression_bands)
    detail[COMPRESSION] = (compression, _raw(knee, cfg))

    lean = _band_points(torso, cfg.torso_lean_bands)
    detail[TORSO_LEAN] = (lean, _raw(torso, cfg))

    rotation = _points_at_least(rot, cfg.bt_rotation_tiers, top=2)
    detail[ROTATION] = (rotation, _raw(rot, cfg))

    proxy = smoothness_proxy(knee_hist, torso_hist, rot_hist, min_samples=cfg.smooth_min_samples)
    smooth = _smoothness_points(proxy, cfg)
    detail[SMOOTHNESS] = (smooth, _raw(proxy, cfg))

    total = compression + lean + rotation + smooth
    logger.debug("Bottom turn: total=%d detail=%s", total, detail)
    return total, detail


def score_top_turn(
    knee_now: float,
    knee_at_bottom: Optional[float],
    torso: float,
    rot: float,
    knee_hist: Iterable[float],
    torso_hist: Iterable[float],
    rot_hist: Iterable[float],
    *,
    cfg: Optional[ScoringConfig] = None,
) -> Tuple[int, ScoreDetail]:
    """Puntúa el top turn (máximo 10) con el fotograma actual y el histórico de la fase.

    Criterios: extensión de rodilla frente al bottom turn (3), torso erguido (2),
    rotación mantenida (3) y suavidad (2). Sin rodilla de referencia la
    extensión se mide contra 0.
    """
    cfg = cfg or ScoringConfig()
    detail: ScoreDetail = {}

    delta = knee_now - (knee_at_bottom if knee_at_bottom is not None else 0.0)
    extension = _points_at_least(delta, cfg.knee_ext_tiers, top=3)
    detail[EXTENSION] = (extension, _raw(delta, cfg))

    upright = _points_at_most(torso, cfg.tt_upright_tiers, top=2)
    detail[UPRIGHT_TORSO] = (upright, _raw(torso, cfg))

    rotation = _points_at_least(rot, cfg.tt_rotation_tiers, top=3)
    detail[ROTATION] = (rotation, _raw(rot, cfg))

    proxy = smoothness_proxy(knee_hist, torso_hist, rot_hist, min_samples=cfg.smooth_min_samples)
    smooth = _smoothness_points(proxy, cfg)
    detail[SMOOTHNESS] = (smooth, _raw(proxy, cfg))

    total = extension + upright + rotation + smooth
    logger.debug("Top turn: total=%d detail=%s", total, detail)
    return total, detail


__all__ = [
    "BOTTOM_TURN_MAX_SCORE",
    "TOP_TURN_MAX_SCORE",
    "ScoreDetail",
    "smoothness_proxy",
    "score_bottom_turn",
    "score_top_turn",
]
