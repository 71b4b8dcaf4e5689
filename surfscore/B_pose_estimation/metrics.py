"""Métricas de surf por fotograma pensadas para el panel de resultados.

Son independientes de la máquina de estados: describen la postura instantánea
(rotación de hombros, centro de gravedad, apertura de pies y flexión de la
rodilla izquierda) con valores por defecto cuando faltan articulaciones.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from surfscore.config.constants import PERCENT_SCALE

from .constants import HIP_PAIR, KNEE_TRIPLETS, LEFT_ANKLE, RIGHT_ANKLE, SHOULDER_PAIR
from .types import FramePose, JointSample

DEFAULT_BODY_ROTATION = 0.0
DEFAULT_CENTER_OF_GRAVITY = (50.0, 50.0)
DEFAULT_STANCE_WIDTH = 0.5
DEFAULT_KNEE_BEND = 45.0


@dataclass(frozen=True)
class SurfMetrics:
    """Resumen postural de un fotograma."""

    body_rotation: float
    center_of_gravity: Tuple[float, float]
    stance_width: float
    knee_flexion: float

    def to_dict(self) -> dict[str, object]:
        return {
            "body_rotation": self.body_rotation,
            "center_of_gravity": {"x": self.center_of_gravity[0], "y": self.center_of_gravity[1]},
            "stance_width": self.stance_width,
            "knee_flexion": self.knee_flexion,
        }


def body_rotation(frame: FramePose) -> float:
    """Ángulo absoluto de la línea de hombros respecto a la horizontal."""

    if not frame.has_all(SHOULDER_PAIR):
        return DEFAULT_BODY_ROTATION
    left, right = (frame[name] for name in SHOULDER_PAIR)
    return float(abs(np.degrees(np.arctan2(right.y - left.y, right.x - left.x))))


def center_of_gravity(frame: FramePose) -> Tuple[float, float]:
    """Punto medio de las caderas en porcentaje del fotograma."""

    if not frame.has_all(HIP_PAIR):
        return DEFAULT_CENTER_OF_GRAVITY
    left, right = (frame[name] for name in HIP_PAIR)
    return (left.x + right.x) / 2.0, (left.y + right.y) / 2.0


def stance_width(frame: FramePose) -> float:
    """Distancia entre tobillos normalizada a 0-1."""

    if not frame.has_all((LEFT_ANKLE, RIGHT_ANKLE)):
        return DEFAULT_STANCE_WIDTH
    left, right = frame[LEFT_ANKLE], frame[RIGHT_ANKLE]
    return float(np.hypot(right.x - left.x, right.y - left.y)) / PERCENT_SCALE


def joint_sweep_angle(a: JointSample, b: JointSample, c: JointSample) -> float:
    """Valor absoluto de la diferencia de orientación de ``b→c`` y ``b→a``.

    A diferencia de ``angle_at_vertex`` no se pliega a 0-180°: puede superar
    180° y llegar hasta 360°.
    """

    radians = np.arctan2(c.y - b.y, c.x - b.x) - np.arctan2(a.y - b.y, a.x - b.x)
    return float(abs(np.degrees(radians)))


def knee_bend(frame: FramePose) -> float:
    """Flexión de la rodilla izquierda (180° menos el ángulo de barrido).

    Con el tobillo al otro lado de la línea cadera-rodilla el resultado es negativo.
    """

    if not frame.has_all(KNEE_TRIPLETS["left_knee"]):
        return DEFAULT_KNEE_BEND
    return 180.0 - joint_sweep_angle(*(frame[name] for name in KNEE_TRIPLETS["left_knee"]))


def compute_surf_metrics(frame: FramePose) -> SurfMetrics:
    return SurfMetrics(
        body_rotation=body_rotation(frame),
        center_of_gravity=center_of_gravity(frame),
        stance_width=stance_width(frame),
        knee_flexion=knee_bend(frame),
    )


__all__ = [
    "SurfMetrics",
    "body_rotation",
    "center_of_gravity",
    "stance_width",
    "joint_sweep_angle",
    "knee_bend",
    "compute_surf_metrics",
]
