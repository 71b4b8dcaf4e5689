"""Constantes compartidas de *landmarks* empleadas por la extracción de señales."""

from __future__ import annotations

from typing import Dict, Tuple

LANDMARK_COUNT: int = 33

# Nombres en el orden de índices de MediaPipe Pose.
LANDMARK_NAMES: Tuple[str, ...] = (
    "nose",
    "left_eye_inner",
    "left_eye",
    "left_eye_outer",
    "right_eye_inner",
    "right_eye",
    "right_eye_outer",
    "left_ear",
    "right_ear",
    "mouth_left",
    "mouth_right",
    "left_shoulder",
    "right_shoulder",
    "left_elbow",
    "right_elbow",
    "left_wrist",
    "right_wrist",
    "left_pinky",
    "right_pinky",
    "left_index",
    "right_index",
    "left_thumb",
    "right_thumb",
    "left_hip",
    "right_hip",
    "left_knee",
    "right_knee",
    "left_ankle",
    "right_ankle",
    "left_heel",
    "right_heel",
    "left_foot_index",
    "right_foot_index",
)

LEFT_SHOULDER = "left_shoulder"
RIGHT_SHOULDER = "right_shoulder"
LEFT_HIP = "left_hip"
RIGHT_HIP = "right_hip"
LEFT_KNEE = "left_knee"
RIGHT_KNEE = "right_knee"
LEFT_ANKLE = "left_ankle"
RIGHT_ANKLE = "right_ankle"

SHOULDER_PAIR = (LEFT_SHOULDER, RIGHT_SHOULDER)
HIP_PAIR = (LEFT_HIP, RIGHT_HIP)
TORSO_JOINTS = SHOULDER_PAIR + HIP_PAIR

# Tríos (cadera, rodilla, tobillo) cuyo vértice es la rodilla.
KNEE_TRIPLETS: Dict[str, Tuple[str, str, str]] = {
    "left_knee": (LEFT_HIP, LEFT_KNEE, LEFT_ANKLE),
    "right_knee": (RIGHT_HIP, RIGHT_KNEE, RIGHT_ANKLE),
}

# Articulaciones que necesita el analizador de maniobras.
REQUIRED_JOINTS: Tuple[str, ...] = (
    LEFT_SHOULDER,
    RIGHT_SHOULDER,
    LEFT_HIP,
    RIGHT_HIP,
    LEFT_KNEE,
    RIGHT_KNEE,
    LEFT_ANKLE,
    RIGHT_ANKLE,
)


def landmark_name(index: int) -> str:
    """Nombre del landmark ``index`` o ``landmark_<index>`` si está fuera del catálogo."""

    if 0 <= index < LANDMARK_COUNT:
        return LANDMARK_NAMES[index]
    return f"landmark_{index}"
