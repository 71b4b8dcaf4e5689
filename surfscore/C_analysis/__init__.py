"""Paquete que agrupa la detección y puntuación de maniobras."""

from .errors import InvalidConfigError, InvalidFrameError, TurnAnalysisError
from .scoring import score_bottom_turn, score_top_turn, smoothness_proxy
from .session import TurnSessionReport, analyze_frames
from .turn_analyzer import TurnAnalyzer
from .turn_fsm import BottomTurnScore, TopTurnScore, TurnResult, TurnSnapshot, TurnStateMachine

__all__ = [
    "TurnAnalyzer",
    "TurnStateMachine",
    "TurnResult",
    "TurnSnapshot",
    "BottomTurnScore",
    "TopTurnScore",
    "score_bottom_turn",
    "score_top_turn",
    "smoothness_proxy",
    "analyze_frames",
    "TurnSessionReport",
    "TurnAnalysisError",
    "InvalidConfigError",
    "InvalidFrameError",
]
