"""Análisis por lotes de una secuencia ordenada de poses.

Recorre los fotogramas con un ``TurnAnalyzer`` nuevo y guarda una traza por
fotograma en un ``DataFrame`` (señales brutas y suavizadas, métricas de surf,
estado y si se emitió un resultado) junto con los resultados de cada maniobra.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

import numpy as np
import pandas as pd

from surfscore.B_pose_estimation.constants import REQUIRED_JOINTS
from surfscore.B_pose_estimation.metrics import compute_surf_metrics
from surfscore.config.models import TurnConfig
from surfscore.utils.json_safety import json_safe

from .turn_analyzer import TurnAnalyzer
from .turn_fsm import TurnResult

logger = logging.getLogger(__name__)

TRACE_COLUMNS = [
    "frame_idx",
    "time_s",
    "pose_ok",
    "pose_confidence",
    "knee_raw",
    "torso_raw",
    "rot_raw",
    "knee",
    "torso",
    "rot",
    "body_rotation",
    "cog_x",
    "cog_y",
    "stance_width",
    "knee_flexion",
    "state",
    "result_emitted",
]


@dataclass
class TurnSessionReport:
    """Resultados y traza por fotograma de una sesión analizada."""

    results: List[TurnResult]
    frames: pd.DataFrame
    config_sha1: str
    fps: Optional[float] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def maneuver_count(self) -> int:
        return len(self.results)

    def summary(self) -> Dict[str, Any]:
        """Totales de la sesión: fotogramas, maniobras y puntuaciones medias y máximas."""

        bottom = [r.bottom_turn.score for r in self.results]
        top = [r.top_turn.score for r in self.results]
        totals = [r.total_score for r in self.results]
        return {
            "frames_processed": int(len(self.frames)),
            "maneuvers": self.maneuver_count,
            "best_total": max(totals) if totals else None,
            "mean_bottom_score": float(np.mean(bottom)) if bottom else None,
            "mean_top_score": float(np.mean(top)) if top else None,
        }

    def to_dict(self, *, include_frames: bool = False) -> Dict[str, Any]:
        """Representación serializable en JSON; la traza por fotograma solo si se pide."""

        payload = {
            "config_sha1": self.config_sha1,
            "fps": self.fps,
            "summary": self.summary(),
            "results": [result.to_dict() for result in self.results],
        }
        if self.extra:
            payload["extra"] = self.extra
        if include_frames:
            payload["frames"] = self.frames
        return json_safe(payload)


def analyze_frames(
    frames: Iterable[Any],
    cfg: Optional[TurnConfig] = None,
    *,
    fps: Optional[float] = None,
) -> TurnSessionReport:
    """Analiza una secuencia ordenada de poses y devuelve el informe de la sesión.

    Args:
        frames: poses en orden temporal; ``None`` representa un fotograma sin detección.
        cfg: configuración opcional; por defecto ``TurnConfig()``.
        fps: fotogramas por segundo, solo para rellenar la columna ``time_s``.

    Returns:
        ``TurnSessionReport`` con los resultados y la traza por fotograma.
    """

    analyzer = TurnAnalyzer(cfg)
    rows: List[Dict[str, Any]] = []
    for idx, frame in enumerate(frames):
        result = analyzer.process_frame(frame)
        raw = analyzer.last_raw_signals
        smoothed = analyzer.last_smoothed_signals
        pose = analyzer.last_pose
        metrics = compute_surf_metrics(pose)
        rows.append(
            {
                "frame_idx": idx,
                "time_s": idx / fps if fps else np.nan,
                "pose_ok": pose.has_all(REQUIRED_JOINTS),
                "pose_confidence": pose.mean_confidence,
                "knee_raw": raw.knee,
                "torso_raw": raw.torso,
                "rot_raw": raw.rot,
                "knee": smoothed.knee,
                "torso": smoothed.torso,
                "rot": smoothed.rot,
                "body_rotation": metrics.body_rotation,
                "cog_x": metrics.center_of_gravity[0],
                "cog_y": metrics.center_of_gravity[1],
                "stance_width": metrics.stance_width,
                "knee_flexion": metrics.knee_flexion,
                "state": analyzer.state.value,
                "result_emitted": result is not None,
            }
        )

    trace = pd.DataFrame(rows, columns=TRACE_COLUMNS)
    report = TurnSessionReport(
        results=analyzer.turn_results,
        frames=trace,
        config_sha1=analyzer.cfg.fingerprint(),
        fps=float(fps) if fps else None,
    )
    logger.info(
        "Sesión analizada: %d fotogramas, %d maniobras, CONFIG_SHA1=%s",
        len(trace),
        report.maneuver_count,
        report.config_sha1,
    )
    return report


__all__ = ["TRACE_COLUMNS", "TurnSessionReport", "analyze_frames"]
