"""Fuente de frames basada en ``cv2.VideoCapture``.

Describe cómo se abre la cámara, cómo se leen los frames y qué tamaño
intrínseco se asume cuando el dispositivo todavía no informa sus dimensiones.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, Optional, Tuple, Union

import cv2
import numpy as np

from src.config.constants import DEFAULT_VIDEO_HEIGHT, DEFAULT_VIDEO_WIDTH
from src.services.errors import CaptureOpenError

logger = logging.getLogger(__name__)

__all__ = ["WebcamSource", "parse_source"]

Source = Union[int, str]


def parse_source(value: Source) -> Source:
    """Convierte ``"0"`` en el índice de cámara ``0``; cualquier otra cadena es una ruta."""

    if isinstance(value, int):
        return value
    text = str(value).strip()
    if text.isdigit():
        return int(text)
    return text


def _positive_dimension(value: Any) -> Optional[int]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return int(round(number))


class WebcamSource:
    """Envuelve un ``VideoCapture`` y recuerda el último tamaño de vídeo válido."""

    def __init__(
        self,
        source: Source = 0,
        *,
        request_width: Optional[int] = None,
        request_height: Optional[int] = None,
        default_size: Tuple[int, int] = (DEFAULT_VIDEO_WIDTH, DEFAULT_VIDEO_HEIGHT),
        capture_factory: Callable[[Source], Any] = cv2.VideoCapture,
    ) -> None:
        self.source = parse_source(source)
        self.request_width = request_width
        self.request_height = request_height
        self._capture_factory = capture_factory
        self._capture: Any = None
        self._size: Tuple[int, int] = (int(default_size[0]), int(default_size[1]))
        self.frames_read = 0

    @property
    def is_open(self) -> bool:
        return self._capture is not None

    def open(self) -> "WebcamSource":
        if self._capture is not None:
            return self
        capture = self._capture_factory(self.source)
        if capture is None or not capture.isOpened():
            if capture is not None:
                capture.release()
            raise CaptureOpenError(f"Could not open the video source: {self.source!r}")

        # Las cámaras ignoran en silencio los tamaños que no soportan.
        if self.request_width:
            capture.set(cv2.CAP_PROP_FRAME_WIDTH, float(self.request_width))
        if self.request_height:
            capture.set(cv2.CAP_PROP_FRAME_HEIGHT, float(self.request_height))

        self._capture = capture
        self._refresh_size_from_properties()
        logger.info("Opened video source %r (%dx%d)", self.source, *self._size)
        return self

    def read(self) -> Optional[np.ndarray]:
        """Devuelve el siguiente frame BGR o ``None`` si la fuente se agotó."""

        if self._capture is None:
            raise CaptureOpenError("The video source is not open")
        ok, frame = self._capture.read()
        if not ok or frame is None:
            return None
        self.frames_read += 1
        height, width = frame.shape[:2]
        self._update_size(width, height)
        return frame

    def intrinsic_size(self) -> Tuple[int, int]:
        """Último tamaño ``(ancho, alto)`` conocido del vídeo."""

        return self._size

    def release(self) -> None:
        capture, self._capture = self._capture, None
        if capture is not None:
            capture.release()
            logger.info("Released video source %r after %d frames", self.source, self.frames_read)

    def _refresh_size_from_properties(self) -> None:
        width = self._capture.get(cv2.CAP_PROP_FRAME_WIDTH)
        height = self._capture.get(cv2.CAP_PROP_FRAME_HEIGHT)
        self._update_size(width, height)

    def _update_size(self, width: Any, height: Any) -> None:
        # Un valor ausente o nulo conserva el tamaño anterior.
        w = _positive_dimension(width)
        h = _positive_dimension(height)
        if w is None or h is None:
            return
        self._size = (w, h)

    def __enter__(self) -> "WebcamSource":
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb) -> Optional[bool]:
        self.release()
        return None
