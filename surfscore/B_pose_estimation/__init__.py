"""Exportaciones principales del paquete de extracción de señales de pose."""

from .constants import LANDMARK_COUNT, LANDMARK_NAMES, REQUIRED_JOINTS, landmark_name
from .geometry import (
    TurnSignals,
    angle_at_vertex,
    average_knee_flexion,
    extract_turn_signals,
    rotation_differential,
    torso_lean_angle,
)
from .metrics import SurfMetrics, compute_surf_metrics
from .signal import ExponentialSmoother, RollingHistory, SignalHistory, std_or_zero
from .types import FramePose, JointSample, as_frame_pose

__all__ = [
    "JointSample",
    "FramePose",
    "as_frame_pose",
    "LANDMARK_COUNT",
    "LANDMARK_NAMES",
    "REQUIRED_JOINTS",
    "landmark_name",
    "TurnSignals",
    "angle_at_vertex",
    "torso_lean_angle",
    "rotation_differential",
    "average_knee_flexion",
    "extract_turn_signals",
    "SurfMetrics",
    "compute_surf_metrics",
    "ExponentialSmoother",
    "RollingHistory",
    "SignalHistory",
    "std_or_zero",
]
