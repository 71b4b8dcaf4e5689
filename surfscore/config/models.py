"""Modelos ``dataclass`` que describen la configuración del analizador de maniobras."""
from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Dict, Tuple
import copy
import hashlib
import json

from .constants import HISTORY_CAPACITY
from .settings import (
    BT_EXIT_KNEE_DELTA,
    BT_EXIT_TORSO_DROP,
    BT_EXIT_TORSO_FLOOR,
    BT_EXIT_TORSO_MARGIN,
    BT_KNEE_MAX,
    BT_KNEE_MIN,
    BT_KNEE_TARGET,
    BT_ROTATION_TIERS,
    BT_TORSO_MAX,
    BT_TORSO_MIN,
    COMPRESSION_BANDS,
    COOLDOWN_FRAMES,
    DETAIL_DECIMALS,
    KNEE_EXT_TIERS,
    MIN_JOINT_CONFIDENCE,
    MIN_STATE_FRAMES,
    ROT_MIN,
    SMOOTH_MIN_SAMPLES,
    SMOOTH_STD_MAX,
    SMOOTH_STD_RELAXED_FACTOR,
    SMOOTHING_ALPHA,
    TORSO_LEAN_BANDS,
    TRANSITION_FRAMES,
    TT_KNEE_EXT_MIN,
    TT_ROT_MIN,
    TT_ROTATION_TIERS,
    TT_TORSO_TOLERANCE,
    TT_TORSO_UPRIGHT_MAX,
    TT_UPRIGHT_TIERS,
)

Band = Tuple[float, float]


@dataclass
class SignalConfig:
    """Suavizado y filtrado de las señales angulares por fotograma."""
    smoothing_alpha: float = SMOOTHING_ALPHA
    min_joint_confidence: float = MIN_JOINT_CONFIDENCE
    history_capacity: int = HISTORY_CAPACITY


@dataclass
class DetectionConfig:
    """Umbrales de la máquina de estados que detecta bottom y top turn."""
    min_state_frames: int = MIN_STATE_FRAMES
    transition_frames: int = TRANSITION_FRAMES
    cooldown_frames: int = COOLDOWN_FRAMES
    bt_knee_min: float = BT_KNEE_MIN
    bt_knee_max: float = BT_KNEE_MAX
    bt_torso_min: float = BT_TORSO_MIN
    bt_torso_max: float = BT_TORSO_MAX
    rot_min: float = ROT_MIN
    bt_knee_target: float = BT_KNEE_TARGET
    bt_exit_knee_delta: float = BT_EXIT_KNEE_DELTA
    bt_exit_torso_margin: float = BT_EXIT_TORSO_MARGIN
    bt_exit_torso_floor: float = BT_EXIT_TORSO_FLOOR
    bt_exit_torso_drop: float = BT_EXIT_TORSO_DROP
    tt_torso_upright_max: float = TT_TORSO_UPRIGHT_MAX
    tt_torso_tolerance: float = TT_TORSO_TOLERANCE
    tt_rot_min: float = TT_ROT_MIN
    tt_knee_ext_min: float = TT_KNEE_EXT_MIN

    @property
    def bt_exit_torso_threshold(self) -> float:
        """Torso por debajo del cual se considera que el surfista se endereza."""
        return max(self.bt_torso_min - self.bt_exit_torso_margin, self.bt_exit_torso_floor)

    @property
    def tt_torso_max(self) -> float:
        return self.tt_torso_upright_max + self.tt_torso_tolerance


@dataclass
class ScoringConfig:
    """Bandas inclusivas de la rúbrica de puntuación de cada fase."""
    compression_bands: Tuple[Band, Band, Band] = COMPRESSION_BANDS
    torso_lean_bands: Tuple[Band, Band, Band] = TORSO_LEAN_BANDS
    bt_rotation_tiers: Tuple[float, float] = BT_ROTATION_TIERS
    knee_ext_tiers: Tuple[float, float, float] = KNEE_EXT_TIERS
    tt_upright_tiers: Tuple[float, float] = TT_UPRIGHT_TIERS
    tt_rotation_tiers: Tuple[float, float, float] = TT_ROTATION_TIERS
    smooth_std_max: float = SMOOTH_STD_MAX
    smooth_std_relaxed_factor: float = SMOOTH_STD_RELAXED_FACTOR
    smooth_min_samples: int = SMOOTH_MIN_SAMPLES
    detail_decimals: int = DETAIL_DECIMALS


@dataclass
class TurnConfig:
    """Configuración de alto nivel consumida por el analizador de maniobras."""
    signal: SignalConfig = field(default_factory=SignalConfig)
    detection: DetectionConfig = field(default_factory=DetectionConfig)
    scoring: ScoringConfig = field(default_factory=ScoringConfig)

    def copy(self) -> "TurnConfig":
        """Devuelve una copia profunda del objeto de configuración."""
        return copy.deepcopy(self)

    def validate(self) -> "TurnConfig":
        """Comprueba que los parámetros son coherentes; lanza ``InvalidConfigError`` si no."""
        from surfscore.C_analysis.errors import InvalidConfigError

        alpha = self.signal.smoothing_alpha
        if not 0.0 <= float(alpha) <= 1.0:
            raise InvalidConfigError(f"smoothing_alpha debe estar en [0, 1] (recibido {alpha!r})")
        if not 0.0 <= float(self.signal.min_joint_confidence) <= 1.0:
            raise InvalidConfigError(
                f"min_joint_confidence debe estar en [0, 1] (recibido {self.signal.min_joint_confidence!r})"
            )
        if int(self.signal.history_capacity) <= 0:
            raise InvalidConfigError("history_capacity debe ser un entero positivo")

        det = self.detection
        for name in ("min_state_frames", "transition_frames", "cooldown_frames"):
            if int(getattr(det, name)) <= 0:
                raise InvalidConfigError(f"{name} debe ser un entero positivo")
        if det.bt_knee_min > det.bt_knee_max:
            raise InvalidConfigError("bt_knee_min no puede superar bt_knee_max")
        if det.bt_torso_min > det.bt_torso_max:
            raise InvalidConfigError("bt_torso_min no puede superar bt_torso_max")

        if int(self.scoring.smooth_min_samples) < 1:
            raise InvalidConfigError("smooth_min_samples debe ser al menos 1")
        return self

    # --- Serialisation helpers -------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        """Entrega la configuración como diccionario de Python."""
        return _dataclass_to_dict(self)

    # --- Fingerprint -----------------------------------------------------------
    def fingerprint(self) -> str:
        """Calcula un hash SHA1 de todos los parámetros que afectan a la puntuación."""
        encoded = json.dumps(self.to_dict(), sort_keys=True, ensure_ascii=False).encode("utf-8")
        return hashlib.sha1(encoded).hexdigest()


# --- Internal utilities -------------------------------------------------------

def _dataclass_to_dict(obj: Any) -> Any:
    """Convierte recursivamente ``dataclasses`` (y anidados) en diccionarios."""
    if is_dataclass(obj):
        return {key: _dataclass_to_dict(value) for key, value in obj.__dict__.items()}
    if isinstance(obj, dict):
        return {key: _dataclass_to_dict(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_dataclass_to_dict(value) for value in obj]
    if isinstance(obj, Path):
        return str(obj)
    return obj


def _coerce_like(current: Any, value: Any) -> Any:
    """Adapta listas leídas de YAML a la forma de tupla que usa el valor por defecto."""
    if isinstance(current, tuple) and isinstance(value, (list, tuple)):
        if len(current) != len(value):
            return tuple(value)
        return tuple(_coerce_like(cur, val) for cur, val in zip(current, value))
    return value


def _update_dataclass(instance: Any, updates: Dict[str, Any]) -> Any:
    """Actualiza recursivamente ``instance`` respetando los límites de cada ``dataclass``."""
    known = {f.name for f in fields(instance)}
    for key, value in updates.items():
        if key not in known:
            continue
        current = getattr(instance, key)
        if is_dataclass(current):
            # Una sección vacía en YAML llega como ``None``: no sobrescribe nada.
            if value is None:
                continue
            if not isinstance(value, dict):
                from surfscore.C_analysis.errors import InvalidConfigError

                raise InvalidConfigError(
                    f"La sección '{key}' debe ser un mapeo, no {type(value).__name__}"
                )
            _update_dataclass(current, value)
        else:
            setattr(instance, key, _coerce_like(current, value))
    return instance
