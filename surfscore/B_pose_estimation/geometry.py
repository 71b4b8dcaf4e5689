"""Utilidades geométricas que convierten una pose en las señales de la maniobra.

Todas las funciones son puras: si faltan articulaciones devuelven el valor por
defecto documentado en lugar de lanzar una excepción, de forma que el flujo por
fotograma nunca se detiene por una detección incompleta.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence, Union

import numpy as np

from surfscore.config.constants import (
    ANGLE_EPS,
    DEFAULT_KNEE_FLEXION_DEG,
    DEFAULT_ROTATION_DEG,
    DEFAULT_TORSO_LEAN_DEG,
    VERTICAL_UP,
)

from .constants import (
    KNEE_TRIPLETS,
    LEFT_HIP,
    LEFT_SHOULDER,
    RIGHT_HIP,
    RIGHT_SHOULDER,
    TORSO_JOINTS,
)
from .types import FramePose

PointLike = Union[Mapping[str, Any], Sequence[float], np.ndarray]


@dataclass(frozen=True)
class TurnSignals:
    """Terna de ángulos (en grados) que alimenta la máquina de estados."""

    knee: float
    torso: float
    rot: float

    def as_tuple(self) -> tuple[float, float, float]:
        return self.knee, self.torso, self.rot


def _xy(point: PointLike) -> np.ndarray:
    if isinstance(point, Mapping):
        return np.array([float(point["x"]), float(point["y"])], dtype=float)
    arr = np.asarray(point, dtype=float)
    return arr[:2]


def _angle_between(v1: np.ndarray, v2: np.ndarray) -> float:
    denom = float(np.linalg.norm(v1) * np.linalg.norm(v2)) + ANGLE_EPS
    cosine = float(np.clip(np.dot(v1, v2) / denom, -1.0, 1.0))
    return float(np.degrees(np.arccos(cosine)))


def angle_at_vertex(a: PointLike, b: PointLike, c: PointLike) -> float:
    """Ángulo en ``b`` (0-180°) entre los rayos ``b→a`` y ``b→c``.

    El denominador se protege con ``ANGLE_EPS`` y el coseno se recorta a
    ``[-1, 1]``; con un vector nulo el resultado es 90°.
    """

    pb = _xy(b)
    return _angle_between(_xy(a) - pb, _xy(c) - pb)


def _midpoint(frame: FramePose, left: str, right: str) -> np.ndarray:
    return (_xy(frame[left]) + _xy(frame[right])) / 2.0


def _line_angle_deg(frame: FramePose, left: str, right: str) -> float:
    dx, dy = _xy(frame[left]) - _xy(frame[right])
    return float(np.degrees(np.arctan2(dy, dx)))


def torso_lean_angle(frame: FramePose) -> float:
    """Inclinación del tronco respecto a la vertical de la imagen (0-180°).

    Usa el vector cadera→hombro entre puntos medios. Sin ambos hombros y ambas
    caderas devuelve ``DEFAULT_TORSO_LEAN_DEG``.
    """

    if not frame.has_all(TORSO_JOINTS):
        return DEFAULT_TORSO_LEAN_DEG
    torso = _midpoint(frame, LEFT_SHOULDER, RIGHT_SHOULDER) - _midpoint(frame, LEFT_HIP, RIGHT_HIP)
    return _angle_between(torso, np.asarray(VERTICAL_UP, dtype=float))


def rotation_differential(frame: FramePose) -> float:
    """Diferencia angular entre la línea de hombros y la de caderas (0-180°)."""

    if not frame.has_all(TORSO_JOINTS):
        return DEFAULT_ROTATION_DEG
    shoulders = _line_angle_deg(frame, LEFT_SHOULDER, RIGHT_SHOULDER)
    hips = _line_angle_deg(frame, LEFT_HIP, RIGHT_HIP)
    diff = abs(shoulders - hips)
    return diff if diff <= 180.0 else 360.0 - diff


def average_knee_flexion(frame: FramePose) -> float:
    """Media del ángulo cadera-rodilla-tobillo de ambas piernas.

    Si falta cualquiera de las seis articulaciones devuelve
    ``DEFAULT_KNEE_FLEXION_DEG``.
    """

    if not all(frame.has_all(triplet) for triplet in KNEE_TRIPLETS.values()):
        return DEFAULT_KNEE_FLEXION_DEG
    angles = [angle_at_vertex(*(frame[name] for name in triplet)) for triplet in KNEE_TRIPLETS.values()]
    return float(np.mean(angles))


def extract_turn_signals(frame: FramePose) -> TurnSignals:
    """Calcula de una vez la terna (rodilla, torso, rotación) del fotograma."""

    return TurnSignals(
        knee=average_knee_flexion(frame),
        torso=torso_lean_angle(frame),
        rot=rotation_differential(frame),
    )


__all__ = [
    "TurnSignals",
    "angle_at_vertex",
    "torso_lean_angle",
    "rotation_differential",
    "average_knee_flexion",
    "extract_turn_signals",
]
