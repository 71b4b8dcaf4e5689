"""Tipos ligeros que describen las articulaciones detectadas en un fotograma."""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import numpy as np

from surfscore.config.constants import DEFAULT_JOINT_CONFIDENCE, PERCENT_SCALE

from .constants import landmark_name


def _coerce(value: Any, default: float = float("nan")) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class JointSample(Mapping[str, float]):
    """Articulación con nombre en unidades de porcentaje del fotograma (0-100).

    Se comporta como ``Mapping`` con las claves ``x``, ``y``, ``z`` y
    ``confidence`` para poder pasarla a las mismas utilidades que un diccionario.
    """

    name: str
    x: float
    y: float
    z: Optional[float] = None
    confidence: float = 1.0

    def __getitem__(self, key: str) -> float:  # type: ignore[override]
        if key == "x":
            return float(self.x)
        if key == "y":
            return float(self.y)
        if key == "z":
            return float(self.z) if self.z is not None else float("nan")
        if key in ("confidence", "visibility"):
            return float(self.confidence)
        raise KeyError(key)

    def __iter__(self):  # type: ignore[override]
        yield from ("x", "y", "z", "confidence")

    def __len__(self) -> int:  # type: ignore[override]
        return 4

    @property
    def xy(self) -> Tuple[float, float]:
        return float(self.x), float(self.y)

    def to_dict(self) -> dict[str, Any]:
        """Exporta la articulación a un diccionario simple."""

        return {
            "name": self.name,
            "x": float(self.x),
            "y": float(self.y),
            "z": None if self.z is None else float(self.z),
            "confidence": float(self.confidence),
        }

    @classmethod
    def from_mapping(cls, name: str, data: Mapping[str, Any]) -> "JointSample":
        """Crea una ``JointSample`` desde cualquier ``Mapping`` con ``x``/``y``.

        ``visibility`` se acepta como alias de ``confidence`` (nomenclatura de MediaPipe).
        """

        confidence = data.get("confidence", data.get("visibility", DEFAULT_JOINT_CONFIDENCE))
        z = data.get("z")
        return cls(
            name=str(name),
            x=_coerce(data.get("x")),
            y=_coerce(data.get("y")),
            z=None if z is None else _coerce(z),
            confidence=_coerce(confidence, DEFAULT_JOINT_CONFIDENCE),
        )

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)


class FramePose(Mapping[str, JointSample]):
    """Conjunto inmutable de articulaciones con nombre único para un instante.

    Pueden faltar articulaciones; los consumidores deciden qué valor por
    defecto usar en ese caso.
    """

    __slots__ = ("_joints",)

    def __init__(self, joints: Optional[Mapping[str, JointSample]] = None) -> None:
        self._joints: Dict[str, JointSample] = dict(joints or {})

    def __getitem__(self, name: str) -> JointSample:
        return self._joints[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._joints)

    def __len__(self) -> int:
        return len(self._joints)

    def __repr__(self) -> str:
        return f"FramePose({sorted(self._joints)!r})"

    def has_all(self, names: Iterable[str]) -> bool:
        """Indica si están presentes todas las articulaciones de ``names``."""

        return all(name in self._joints for name in names)

    def filtered(self, min_confidence: float) -> "FramePose":
        """Copia sin las articulaciones cuya confianza es menor que ``min_confidence``."""

        if min_confidence <= 0.0:
            return self
        return FramePose(
            {name: joint for name, joint in self._joints.items() if joint.confidence >= min_confidence}
        )

    @property
    def mean_confidence(self) -> float:
        """Confianza media de las articulaciones presentes (0 si no hay ninguna)."""

        if not self._joints:
            return 0.0
        return float(np.mean([joint.confidence for joint in self._joints.values()]))

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return {name: joint.to_dict() for name, joint in self._joints.items()}

    # --- Constructores ---------------------------------------------------------
    @classmethod
    def from_samples(cls, samples: Iterable[Any]) -> "FramePose":
        """Agrupa ``JointSample`` (o mapeos con clave ``name``) por nombre.

        Si un nombre se repite prevalece la última muestra recibida.
        """

        joints: Dict[str, JointSample] = {}
        for sample in samples:
            if isinstance(sample, JointSample):
                joint = sample
            elif isinstance(sample, Mapping) and "name" in sample:
                joint = JointSample.from_mapping(str(sample["name"]), sample)
            else:
                continue
            if joint.is_finite():
                joints[joint.name] = joint
        return cls(joints)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "FramePose":
        """Construye la pose desde ``{nombre: {"x": .., "y": .., ...}}``."""

        joints: Dict[str, JointSample] = {}
        for name, value in data.items():
            if isinstance(value, JointSample):
                joint = value
            elif isinstance(value, Mapping):
                joint = JointSample.from_mapping(str(name), value)
            else:
                continue
            if joint.is_finite():
                joints[str(name)] = joint
        return cls(joints)

    @classmethod
    def from_landmark_array(cls, landmarks: "np.ndarray", *, normalized: bool = True) -> "FramePose":
        """Convierte un array ``(N, 3|4)`` en orden de MediaPipe en una ``FramePose``.

        Con ``normalized`` las coordenadas 0-1 se escalan a porcentaje del
        fotograma. Las filas con ``x``/``y`` no finitos se tratan como ausentes
        y, si falta la visibilidad o vale 0, se asume una confianza de 0.5.
        """

        arr = np.asarray(landmarks, dtype=float)
        if arr.ndim != 2 or arr.shape[1] < 2:
            return cls()

        scale = PERCENT_SCALE if normalized else 1.0
        joints: Dict[str, JointSample] = {}
        for idx, row in enumerate(arr):
            x, y = float(row[0]), float(row[1])
            if not (np.isfinite(x) and np.isfinite(y)):
                continue
            z = float(row[2]) if arr.shape[1] >= 3 and np.isfinite(row[2]) else None
            confidence = DEFAULT_JOINT_CONFIDENCE
            # Visibilidad 0 equivale a "no informada".
            if arr.shape[1] >= 4 and np.isfinite(row[3]) and row[3] != 0.0:
                confidence = float(row[3])
            name = landmark_name(idx)
            joints[name] = JointSample(name=name, x=x * scale, y=y * scale, z=z, confidence=confidence)
        return cls(joints)


def as_frame_pose(frame: Any) -> FramePose:
    """Normaliza las entradas admitidas por el analizador a ``FramePose``.

    Acepta ``FramePose``, ``None`` (fotograma sin detección), mapeos por nombre,
    listas de muestras con nombre y arrays de landmarks normalizados. Cualquier
    otra cosa lanza ``InvalidFrameError``.
    """

    from surfscore.C_analysis.errors import InvalidFrameError

    if isinstance(frame, FramePose):
        return frame
    if frame is None:
        return FramePose()
    if isinstance(frame, Mapping):
        return FramePose.from_mapping(frame)
    if isinstance(frame, np.ndarray):
        return FramePose.from_landmark_array(frame)
    if isinstance(frame, (list, tuple)):
        return FramePose.from_samples(frame)
    raise InvalidFrameError(f"Tipo de fotograma no soportado: {type(frame).__name__}")


__all__ = ["JointSample", "FramePose", "as_frame_pose"]
