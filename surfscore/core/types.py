"""Tipos y utilidades comunes para etiquetar los estados de la maniobra.

El objetivo del módulo es normalizar las etiquetas que circulan entre la
máquina de estados, los informes por sesión y la capa de presentación,
evitando comparar cadenas sueltas en cada consumidor."""

from __future__ import annotations

from enum import Enum
from typing import Union


class TurnState(str, Enum):
    """Estados de la máquina que detecta un bottom turn seguido de un top turn."""

    IDLE = "idle"
    BOTTOM = "bottom"
    TRANSITION = "transition"
    TOP = "top"
    COOLDOWN = "cooldown"


TURN_STATE_HUMAN_LABEL = {
    TurnState.IDLE: "Idle: looking for Bottom Turn",
    TurnState.BOTTOM: "Bottom Turn: compress/lean/rotate",
    TurnState.TRANSITION: "Transition: rising to lip",
    TurnState.TOP: "Top Turn: extend/redirect",
    TurnState.COOLDOWN: "Cooldown",
}

UNKNOWN_STATE_LABEL = "Unknown"


def _normalize_label(value: str) -> str:
    """Limpiar una etiqueta textual para compararla de forma consistente."""

    normalized = value.strip().lower().replace("-", "_").replace(" ", "_")
    while "__" in normalized:
        normalized = normalized.replace("__", "_")
    return normalized


def as_state(value: Union[str, "TurnState", None]) -> "TurnState":
    """Convertir una entrada libre en un ``TurnState`` reconocido.

    Acepta el nombre del miembro (``"BOTTOM"``) o su valor (``"bottom"``).
    Los valores desconocidos se degradan a ``IDLE``, el estado inicial."""

    if isinstance(value, TurnState):
        return value
    if not value:
        return TurnState.IDLE
    normalized = _normalize_label(str(value))
    try:
        return TurnState(normalized)
    except ValueError:
        return TurnState.IDLE


def human_label(state: Union[str, "TurnState", None]) -> str:
    """Texto legible para mostrar el estado actual en la interfaz."""

    if state is None:
        return UNKNOWN_STATE_LABEL
    return TURN_STATE_HUMAN_LABEL.get(as_state(state), UNKNOWN_STATE_LABEL)


__all__ = [
    "TurnState",
    "TURN_STATE_HUMAN_LABEL",
    "as_state",
    "human_label",
]
