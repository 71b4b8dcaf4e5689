"""Utilidades para cargar configuraciones por defecto o desde archivos YAML.

Los valores leídos se mezclan sobre la configuración base, de modo que un YAML
parcial solo sobrescribe los umbrales que menciona."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import yaml

from .models import TurnConfig, _update_dataclass


def load_default() -> TurnConfig:
    """Obtener la configuración por defecto del analizador."""
    return TurnConfig()


def from_dict(data: Mapping[str, Any] | None) -> TurnConfig:
    """Construir una configuración validada a partir de un diccionario anidado."""
    from surfscore.C_analysis.errors import InvalidConfigError

    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise InvalidConfigError(
            f"La configuración debe ser un mapeo, no {type(data).__name__}"
        )
    cfg = load_default()
    _update_dataclass(cfg, dict(data))
    return cfg.validate()


def from_yaml(path: str | Path) -> TurnConfig:
    """Cargar una configuración desde un YAML y mezclarla con los valores base."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    return from_dict(data)
