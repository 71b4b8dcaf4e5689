"""Utilities to guarantee strict JSON-serializable payloads."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import asdict, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd


def json_safe(value: Any) -> Any:
    """Recursively convert ``value`` into a JSON-serializable structure.

    - NumPy scalars/arrays are converted to Python types/lists.
    - ``Path`` and ``Enum`` become strings.
    - ``DataFrame`` becomes a list of row records and ``Series`` a plain list.
    - Objects exposing ``to_dict()`` and plain dataclasses become dictionaries.
    - Non-finite floats (NaN/Inf) are converted to ``None``.
    - Mapping keys are stringified to avoid invalid JSON objects.
    """

    if isinstance(value, Enum):
        return json_safe(value.value)

    if value is None or isinstance(value, (str, bool)):
        return value

    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return value

    if isinstance(value, np.generic):
        return json_safe(value.item())

    if isinstance(value, np.ndarray):
        return [json_safe(v) for v in value.tolist()]

    if isinstance(value, Path):
        return str(value)

    if isinstance(value, pd.DataFrame):
        return [json_safe(row) for row in value.to_dict(orient="records")]

    if isinstance(value, pd.Series):
        return [json_safe(v) for v in value.tolist()]

    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict) and not isinstance(value, dict):
        return json_safe(to_dict())

    if is_dataclass(value) and not isinstance(value, type):
        return json_safe(asdict(value))

    if isinstance(value, Mapping):
        return {str(k): json_safe(v) for k, v in value.items()}

    if isinstance(value, (list, tuple, set)):
        return [json_safe(v) for v in value]

    return value
