"""Composición por frame del overlay de pose sobre un lienzo nuevo."""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple

import numpy as np

from src.B_pose_estimation.types import Connection, Pose
from src.config.constants import DEFAULT_VIDEO_HEIGHT, DEFAULT_VIDEO_WIDTH

from .overlay_drawing import draw_frame_layers
from .overlay_geometry import CoverFit, cover_fit, ui_scale
from .overlay_styles import OverlayStyle, RenderFlags

logger = logging.getLogger(__name__)

__all__ = ["OverlayRenderer"]


class OverlayRenderer:
    """Dibuja vídeo, rejilla, esqueleto, puntos y etiquetas en un lienzo del tamaño pedido."""

    def __init__(self, style: Optional[OverlayStyle] = None) -> None:
        self.style = style or OverlayStyle()
        self.last_fit: Optional[CoverFit] = None
        self.last_scale: float = 1.0

    def render(
        self,
        frame: Optional[np.ndarray],
        poses: Optional[Sequence[Pose]],
        connections: Sequence[Connection],
        canvas_size: Tuple[int, int],
        flags: Optional[RenderFlags] = None,
        *,
        video_size: Optional[Tuple[int, int]] = None,
    ) -> np.ndarray:
        """Devuelve un lienzo BGR ``(alto, ancho, 3)`` con el overlay del frame actual.

        ``video_size`` es el tamaño del espacio en que vienen las coordenadas de
        ``poses``; si falta se usa el del frame y, en último término, 640x480.
        """

        flags = flags or RenderFlags()
        canvas_w = max(1, int(canvas_size[0]))
        canvas_h = max(1, int(canvas_size[1]))
        vid_w, vid_h = self._resolve_video_size(frame, video_size)

        scale = ui_scale(canvas_w, canvas_h)
        fit = cover_fit(canvas_w, canvas_h, vid_w, vid_h)
        self.last_fit = fit
        self.last_scale = scale

        canvas = np.empty((canvas_h, canvas_w, 3), dtype=np.uint8)
        canvas[:] = self.style.bg_bgr
        draw_frame_layers(
            canvas,
            frame,
            list(poses or []),
            connections,
            fit,
            self.style,
            scale,
            show_video=flags.show_video,
            show_grid=flags.show_grid,
            show_lines=flags.show_lines,
        )
        return canvas

    @staticmethod
    def _resolve_video_size(
        frame: Optional[np.ndarray],
        video_size: Optional[Tuple[int, int]],
    ) -> Tuple[int, int]:
        if video_size and video_size[0] and video_size[1]:
            return int(video_size[0]), int(video_size[1])
        if frame is not None and getattr(frame, "size", 0):
            height, width = frame.shape[:2]
            return int(width), int(height)
        return DEFAULT_VIDEO_WIDTH, DEFAULT_VIDEO_HEIGHT
