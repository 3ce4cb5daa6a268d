"""Utilidades para cargar configuraciones por defecto o desde archivos YAML.

Los YAML solo necesitan declarar las claves que cambian; el resto se toma de
los valores por defecto y las claves desconocidas se ignoran."""
from pathlib import Path

import yaml

from .models import Config, _update_dataclass


def load_default() -> Config:
    """Obtener la configuración por defecto empleada por el visor."""
    return Config()


def from_yaml(path: str | Path) -> Config:
    """Cargar una configuración desde un YAML y mezclarla con los valores base."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"El YAML de configuración debe ser un mapeo: {path}")
    cfg = load_default()
    _update_dataclass(cfg, data)
    return cfg
