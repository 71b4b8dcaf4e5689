# tests/conftest.py
"""Utilidades de configuración comunes para la batería de pruebas."""
from __future__ import annotations

import math
import sys
from pathlib import Path
from typing import Callable

import pytest

# Repo root = parent de 'tests'
ROOT = Path(__file__).resolve().parents[1]

# Asegura que el paquete ``surfscore`` es importable sin instalarlo
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

from surfscore.B_pose_estimation.types import FramePose, JointSample  # noqa: E402

SEGMENT = 20.0
HALF_WIDTH = 5.0


def build_pose(knee: float, torso: float, rot: float, *, confidence: float = 0.9) -> FramePose:
    """Construye una pose sintética cuyas señales valen ``(knee, torso, rot)`` en grados.

    - Cadera centrada en (50, 50) con la línea de caderas horizontal.
    - Hombros a ``SEGMENT`` unidades inclinados ``torso`` grados respecto a la vertical
      y girados ``rot`` grados respecto a la línea de caderas.
    - Cada pierna: rodilla justo debajo de la cadera y tobillo formando ``knee`` grados.
    """

    hip_mid = (50.0, 50.0)
    t = math.radians(torso)
    sh_mid = (hip_mid[0] + SEGMENT * math.sin(t), hip_mid[1] - SEGMENT * math.cos(t))
    r = math.radians(rot)
    sh_dx, sh_dy = HALF_WIDTH * math.cos(r), HALF_WIDTH * math.sin(r)
    k = math.radians(knee)

    joints = {
        "left_shoulder": (sh_mid[0] + sh_dx, sh_mid[1] + sh_dy),
        "right_shoulder": (sh_mid[0] - sh_dx, sh_mid[1] - sh_dy),
        "left_hip": (hip_mid[0] + HALF_WIDTH, hip_mid[1]),
        "right_hip": (hip_mid[0] - HALF_WIDTH, hip_mid[1]),
    }
    for side in ("left", "right"):
        hx, hy = joints[f"{side}_hip"]
        knee_xy = (hx, hy + SEGMENT)
        joints[f"{side}_knee"] = knee_xy
        joints[f"{side}_ankle"] = (knee_xy[0] + SEGMENT * math.sin(k), knee_xy[1] - SEGMENT * math.cos(k))

    return FramePose.from_samples(
        JointSample(name=name, x=x, y=y, confidence=confidence) for name, (x, y) in joints.items()
    )


@pytest.fixture
def make_pose() -> Callable[..., FramePose]:
    return build_pose


# Maniobra de referencia: (repeticiones, (rodilla, torso, rotación)).
TURN_SCENARIO = [
    (8, (85.0, 30.0, 20.0)),   # compresión del bottom turn
    (2, (110.0, 15.0, 20.0)),  # extensión: BOTTOM -> TRANSITION
    (3, (120.0, 20.0, 18.0)),  # subida al labio: TRANSITION -> TOP
    (8, (130.0, 15.0, 20.0)),  # top turn: salida de TOP
]


def expand_scenario(scenario=TURN_SCENARIO) -> list[tuple[float, float, float]]:
    frames: list[tuple[float, float, float]] = []
    for repeats, triple in scenario:
        frames.extend([triple] * repeats)
    return frames


@pytest.fixture
def turn_frames() -> list[tuple[float, float, float]]:
    """Secuencia de tríos que completa exactamente una maniobra."""
    return expand_scenario()


# Pose erguida y sin rotación: nunca cumple las condiciones de entrada.
FILLER = (170.0, 5.0, 0.0)


@pytest.fixture
def turn_cycle() -> list[tuple[float, float, float]]:
    """Maniobra completa más el enfriamiento restante hasta volver a IDLE.

    Tras el escenario quedan 3 fotogramas de COOLDOWN; 9 más completan los 12.
    """
    return expand_scenario() + [FILLER] * 9
