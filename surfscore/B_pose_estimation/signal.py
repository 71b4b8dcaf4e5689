"""Filtros de señal por fotograma: media móvil exponencial e históricos acotados."""

from __future__ import annotations

from collections import deque
from typing import Iterable, Iterator, Optional

import numpy as np

from surfscore.config.constants import HISTORY_CAPACITY
from surfscore.config.settings import SMOOTHING_ALPHA


class ExponentialSmoother:
    """Media móvil exponencial de un único parámetro.

    El primer valor observado se guarda tal cual; después
    ``valor = alpha * anterior + (1 - alpha) * bruto``. La salida queda siempre
    dentro del rango de las entradas vistas y converge de forma monótona hacia
    una entrada constante.
    """

    __slots__ = ("alpha", "_value")

    def __init__(self, alpha: float = SMOOTHING_ALPHA) -> None:
        from surfscore.C_analysis.errors import InvalidConfigError

        alpha = float(alpha)
        if not 0.0 <= alpha <= 1.0:
            raise InvalidConfigError(f"alpha debe estar en [0, 1] (recibido {alpha!r})")
        self.alpha = alpha
        self._value: Optional[float] = None

    @property
    def value(self) -> Optional[float]:
        return self._value

    def update(self, raw: float) -> float:
        raw = float(raw)
        if self._value is None:
            self._value = raw
        else:
            # alpha*prev + (1-alpha)*raw; si raw == prev el valor queda intacto.
            self._value = self._value + (1.0 - self.alpha) * (raw - self._value)
        return self._value

    def reset(self) -> None:
        self._value = None


class RollingHistory:
    """Cola FIFO acotada; al superar la capacidad se descarta el valor más antiguo."""

    __slots__ = ("_values",)

    def __init__(self, capacity: int = HISTORY_CAPACITY, values: Iterable[float] = ()) -> None:
        self._values: deque[float] = deque((float(v) for v in values), maxlen=int(capacity))

    @property
    def capacity(self) -> int:
        return int(self._values.maxlen or 0)

    def append(self, value: float) -> None:
        self._values.append(float(value))

    def clear(self) -> None:
        self._values.clear()

    def to_list(self) -> list[float]:
        """Copia en orden de llegada (el más antiguo primero)."""
        return list(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[float]:
        return iter(self._values)

    def __repr__(self) -> str:
        return f"RollingHistory({list(self._values)!r}, capacity={self.capacity})"


class SignalHistory:
    """Históricos paralelos de rodilla, torso y rotación de una fase de la maniobra."""

    __slots__ = ("knee", "torso", "rot")

    def __init__(self, capacity: int = HISTORY_CAPACITY) -> None:
        self.knee = RollingHistory(capacity)
        self.torso = RollingHistory(capacity)
        self.rot = RollingHistory(capacity)

    def append(self, knee: float, torso: float, rot: float) -> None:
        self.knee.append(knee)
        self.torso.append(torso)
        self.rot.append(rot)

    def clear(self) -> None:
        self.knee.clear()
        self.torso.clear()
        self.rot.clear()

    def __len__(self) -> int:
        return len(self.knee)


def std_or_zero(values: Iterable[float], min_samples: int) -> float:
    """Desviación típica poblacional de ``values`` o 0 con menos de ``min_samples``."""

    arr = np.asarray(list(values), dtype=float)
    if arr.size < min_samples:
        return 0.0
    return float(np.std(arr))


__all__ = ["ExponentialSmoother", "RollingHistory", "SignalHistory", "std_or_zero"]
