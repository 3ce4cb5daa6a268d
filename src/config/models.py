"""Modelos ``dataclass`` que describen la configuración del overlay en vivo."""
from __future__ import annotations
from dataclasses import dataclass, field, is_dataclass
from typing import Any, Dict, Optional, Union
import copy
import hashlib
import json

# Importa valores por defecto definidos en los módulos de configuración central.
from .constants import (
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    DEFAULT_VIDEO_HEIGHT,
    DEFAULT_VIDEO_WIDTH,
    MIN_DETECTION_CONFIDENCE,
    MIN_TRACKING_CONFIDENCE,
    WINDOW_NAME,
)
from .settings import (
    BG_COLOR,
    CONFIDENCE_THRESHOLD,
    COORD_SCALE,
    DEFAULT_ASYNC_DETECTION,
    DEFAULT_FULLSCREEN,
    DEFAULT_SHOW_GRID,
    DEFAULT_SHOW_LINES,
    DEFAULT_SHOW_VIDEO,
    DOT_COLOR,
    DOT_SIZE,
    FULLSCREEN_SETTLE_MS,
    GRID_GRAY,
    GRID_SPACING,
    GRID_THICKNESS,
    LABEL_BORDER,
    LABEL_GAP,
    LABEL_PAD_X,
    LABEL_PAD_Y,
    LINE_COLOR,
    LINE_THICKNESS,
    MODEL_COMPLEXITY,
    POSE_SMOOTH_LANDMARKS,
    TEXT_COLOR,
    TEXT_SIZE_PX,
)


@dataclass
class PoseConfig:
    """Parámetros del grafo de pose y del modo de inferencia."""
    model_complexity: int = MODEL_COMPLEXITY
    min_detection_confidence: float = float(MIN_DETECTION_CONFIDENCE)
    min_tracking_confidence: float = float(MIN_TRACKING_CONFIDENCE)
    smooth_landmarks: bool = POSE_SMOOTH_LANDMARKS
    async_detection: bool = DEFAULT_ASYNC_DETECTION


@dataclass
class CaptureConfig:
    """Origen de vídeo: índice de cámara o ruta a un archivo."""
    source: Union[int, str] = 0
    request_width: Optional[int] = None
    request_height: Optional[int] = None
    default_width: int = DEFAULT_VIDEO_WIDTH
    default_height: int = DEFAULT_VIDEO_HEIGHT


@dataclass
class OverlayConfig:
    """Colores, tamaños y umbrales del dibujo (en píxeles de referencia 1920x1080)."""
    bg_color: int = BG_COLOR
    confidence_threshold: float = CONFIDENCE_THRESHOLD
    line_color: str = LINE_COLOR
    line_thickness: float = LINE_THICKNESS
    dot_color: str = DOT_COLOR
    dot_size: float = DOT_SIZE
    text_color: str = TEXT_COLOR
    text_size_px: float = TEXT_SIZE_PX
    coord_scale: float = COORD_SCALE
    label_gap: float = LABEL_GAP
    label_pad_x: float = LABEL_PAD_X
    label_pad_y: float = LABEL_PAD_Y
    label_border: float = LABEL_BORDER
    grid_spacing: float = GRID_SPACING
    grid_gray: int = GRID_GRAY
    grid_thickness: float = GRID_THICKNESS


@dataclass
class DisplayConfig:
    """Ventana y estado inicial de los interruptores."""
    window_name: str = WINDOW_NAME
    canvas_width: int = DEFAULT_CANVAS_WIDTH
    canvas_height: int = DEFAULT_CANVAS_HEIGHT
    show_lines: bool = DEFAULT_SHOW_LINES
    show_video: bool = DEFAULT_SHOW_VIDEO
    show_grid: bool = DEFAULT_SHOW_GRID
    fullscreen: bool = DEFAULT_FULLSCREEN
    fullscreen_settle_ms: int = FULLSCREEN_SETTLE_MS


@dataclass
class Config:
    """Configuración de alto nivel consumida por el visor."""
    pose: PoseConfig = field(default_factory=PoseConfig)
    capture: CaptureConfig = field(default_factory=CaptureConfig)
    overlay: OverlayConfig = field(default_factory=OverlayConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    def copy(self) -> "Config":
        """Devuelve una copia profunda del objeto de configuración."""
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        """Entrega la configuración como diccionario de Python."""
        return _dataclass_to_dict(self)

    # --- Fingerprint -----------------------------------------------------------
    def fingerprint(self) -> str:
        """Calcula un hash SHA1 de los parámetros que cambian el aspecto del overlay."""
        payload = {
            "pose": _dataclass_to_dict(self.pose),
            "overlay": _dataclass_to_dict(self.overlay),
        }
        encoded = json.dumps(payload, sort_keys=True, ensure_ascii=False).encode("utf-8")
        return hashlib.sha1(encoded).hexdigest()


# --- Internal utilities -------------------------------------------------------

def _dataclass_to_dict(obj: Any) -> Any:
    """Convierte recursivamente ``dataclasses`` (y anidados) en diccionarios."""
    if is_dataclass(obj):
        return {key: _dataclass_to_dict(value) for key, value in obj.__dict__.items()}
    if isinstance(obj, dict):
        return {key: _dataclass_to_dict(value) for key, value in obj.items()}
    if isinstance(obj, list):
        return [_dataclass_to_dict(value) for value in obj]
    return obj


def _update_dataclass(instance: Any, updates: Dict[str, Any]) -> Any:
    """Actualiza recursivamente ``instance`` respetando los límites de cada ``dataclass``."""
    for key, value in updates.items():
        if not hasattr(instance, key):
            continue
        current = getattr(instance, key)
        if is_dataclass(current) and isinstance(value, dict):
            _update_dataclass(current, value)
        else:
            setattr(instance, key, value)
    return instance
