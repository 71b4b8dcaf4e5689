"""Detección y puntuación de maniobras de surf (bottom turn + top turn) a partir de poses."""

from .B_pose_estimation import FramePose, JointSample
from .C_analysis import (
    TurnAnalyzer,
    TurnResult,
    TurnSessionReport,
    TurnStateMachine,
    analyze_frames,
)
from .config import TurnConfig
from .core.types import TurnState

__all__ = [
    "FramePose",
    "JointSample",
    "TurnAnalyzer",
    "TurnConfig",
    "TurnResult",
    "TurnSessionReport",
    "TurnState",
    "TurnStateMachine",
    "analyze_frames",
]

__version__ = "0.1.0"
