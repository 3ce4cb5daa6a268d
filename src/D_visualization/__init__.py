"""Paquete de visualización del overlay de pose.

Reexporta la API pública mientras los módulos internos se organizan por
responsabilidad: geometría, estilos, primitivas de dibujo y composición."""

from .overlay_drawing import (
    draw_coordinate_labels,
    draw_grid,
    draw_keypoints,
    draw_skeleton,
    draw_video_background,
)
from .overlay_geometry import CoverFit, coordinate_label, cover_fit, js_round, mirror_x, ui_scale
from .overlay_renderer import OverlayRenderer
from .overlay_styles import OverlayStyle, RenderFlags, hex_to_bgr

__all__ = [
    "CoverFit",
    "OverlayRenderer",
    "OverlayStyle",
    "RenderFlags",
    "coordinate_label",
    "cover_fit",
    "draw_coordinate_labels",
    "draw_grid",
    "draw_keypoints",
    "draw_skeleton",
    "draw_video_background",
    "hex_to_bgr",
    "js_round",
    "mirror_x",
    "ui_scale",
]
