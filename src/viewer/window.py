"""Ventana de OpenCV redimensionable donde se muestra el lienzo.

El tamaño del lienzo sigue al de la ventana en cada frame. Tras cambiar a
pantalla completa se espera un breve intervalo antes de volver a medirla,
porque el gestor de ventanas tarda en aplicar el nuevo tamaño."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Tuple

import cv2
import numpy as np

logger = logging.getLogger(__name__)

__all__ = ["OverlayWindow"]


class OverlayWindow:
    """Envuelve ``cv2.namedWindow`` con soporte de clics y pantalla completa."""

    def __init__(
        self,
        name: str,
        size: Tuple[int, int],
        *,
        settle_ms: int = 60,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.name = name
        self._size = (max(1, int(size[0])), max(1, int(size[1])))
        self._settle_s = max(0, int(settle_ms)) / 1000.0
        self._clock = clock
        self._resize_after = 0.0
        self._pending_clicks = 0
        self._opened = False

    @property
    def is_open(self) -> bool:
        return self._opened

    def open(self) -> "OverlayWindow":
        if self._opened:
            return self
        cv2.namedWindow(self.name, cv2.WINDOW_NORMAL)
        cv2.resizeWindow(self.name, self._size[0], self._size[1])
        cv2.setMouseCallback(self.name, self._on_mouse)
        self._opened = True
        logger.info("Opened window %r (%dx%d)", self.name, *self._size)
        return self

    def _on_mouse(self, event: int, x: int, y: int, flags: int, param: object) -> None:
        if event == cv2.EVENT_LBUTTONUP:
            self._pending_clicks += 1

    def consume_clicks(self) -> int:
        """Clics acumulados desde la última llamada."""

        clicks, self._pending_clicks = self._pending_clicks, 0
        return clicks

    def set_fullscreen(self, enabled: bool) -> None:
        mode = cv2.WINDOW_FULLSCREEN if enabled else cv2.WINDOW_NORMAL
        cv2.setWindowProperty(self.name, cv2.WND_PROP_FULLSCREEN, mode)
        self._resize_after = self._clock() + self._settle_s
        logger.info("Fullscreen %s", "on" if enabled else "off")

    def canvas_size(self) -> Tuple[int, int]:
        """Tamaño ``(ancho, alto)`` actual del área de imagen de la ventana."""

        if not self._opened or self._clock() < self._resize_after:
            return self._size
        try:
            _, _, width, height = cv2.getWindowImageRect(self.name)
        except cv2.error:
            return self._size
        if width > 0 and height > 0:
            self._size = (int(width), int(height))
        return self._size

    def is_visible(self) -> bool:
        if not self._opened:
            return False
        try:
            return cv2.getWindowProperty(self.name, cv2.WND_PROP_VISIBLE) >= 1
        except cv2.error:
            return False

    def show(self, canvas: np.ndarray) -> None:
        cv2.imshow(self.name, canvas)

    def poll_key(self, delay_ms: int = 1) -> int:
        """Procesa eventos de la GUI y devuelve el código de tecla (``-1`` si no hubo).

        Se usa ``waitKeyEx`` para no confundir las flechas con letras.
        """

        return int(cv2.waitKeyEx(max(1, int(delay_ms))))

    def close(self) -> None:
        if not self._opened:
            return
        self._opened = False
        try:
            cv2.destroyWindow(self.name)
        except cv2.error:
            logger.debug("Window %r was already destroyed", self.name)
