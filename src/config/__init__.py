"""Reexportaciones para mantener compatibilidad con ``from src import config``."""

from __future__ import annotations

# Dataclasses principales de configuración --------------------------------------
from .models import (
    Config,
    PoseConfig,
    CaptureConfig,
    OverlayConfig,
    DisplayConfig,
)

# Funciones auxiliares de carga --------------------------------------------------
from .utils import load_default, from_yaml

# Constantes compartidas ---------------------------------------------------------
from .constants import (
    APP_NAME,
    REF_WIDTH,
    REF_HEIGHT,
    MIN_DETECTION_CONFIDENCE,
)

# Utilidades de visualización ----------------------------------------------------
from .video_landmarks_visualization import (
    POSE_CONNECTIONS,
    LANDMARK_NAMES,
)

__all__ = [
    # Models
    "Config",
    "PoseConfig",
    "CaptureConfig",
    "OverlayConfig",
    "DisplayConfig",

    # Utilities
    "load_default",
    "from_yaml",

    # Constants
    "APP_NAME",
    "REF_WIDTH",
    "REF_HEIGHT",
    "MIN_DETECTION_CONFIDENCE",

    # Visualization
    "POSE_CONNECTIONS",
    "LANDMARK_NAMES",
]
