"""Reexportaciones para poder usar ``from surfscore import config``."""

from __future__ import annotations

from .constants import HISTORY_CAPACITY
from .models import DetectionConfig, ScoringConfig, SignalConfig, TurnConfig
from .utils import from_dict, from_yaml, load_default

__all__ = [
    # Models
    "TurnConfig",
    "SignalConfig",
    "DetectionConfig",
    "ScoringConfig",

    # Utilities
    "load_default",
    "from_dict",
    "from_yaml",

    # Constants
    "HISTORY_CAPACITY",
]
