"""Rutinas de dibujo del overlay sobre un lienzo BGR.

Todas las capas salvo las etiquetas se dibujan en espejo (como si el lienzo
se hubiese volteado horizontalmente): el usuario se ve como en un espejo. Las
etiquetas se escriben sin voltear para que el texto sea legible, situadas a la
derecha del punto ya reflejado."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence, Tuple

import cv2
import numpy as np

from src.B_pose_estimation.types import Connection, Keypoint, Pose

from .overlay_geometry import CoverFit, coordinate_label, grid_positions, js_round, label_anchor, mirror_x
from .overlay_styles import OverlayStyle, scaled_px

# Exponemos las utilidades de dibujo más relevantes.
__all__ = [
    "draw_coordinate_labels",
    "draw_frame_layers",
    "draw_grid",
    "draw_keypoints",
    "draw_skeleton",
    "draw_video_background",
    "fill_black",
    "font_scale_for_height",
    "mirrored_screen_point",
]

FONT = cv2.FONT_HERSHEY_SIMPLEX
# Altura de las mayúsculas respecto al tamaño nominal de la fuente.
_CAP_HEIGHT_RATIO = 0.7


def _canvas_size(canvas: np.ndarray) -> Tuple[int, int]:
    height, width = canvas.shape[:2]
    return int(width), int(height)


def mirrored_screen_point(fit: CoverFit, canvas_w: float, kp: Keypoint) -> Tuple[float, float]:
    """Posición en pantalla de ``kp`` tras el ajuste *cover-fit* y el espejo."""

    mapped_x, mapped_y = fit.map_point(kp.x, kp.y)
    return mirror_x(canvas_w, mapped_x), mapped_y


def _px(point: Tuple[float, float]) -> Tuple[int, int]:
    return js_round(point[0]), js_round(point[1])


def fill_black(canvas: np.ndarray) -> None:
    canvas[:] = 0


def draw_video_background(canvas: np.ndarray, frame: np.ndarray, fit: CoverFit) -> None:
    """Pinta ``frame`` reflejado y escalado con *cover-fit*, recortando lo que sobresale."""

    if frame is None or getattr(frame, "size", 0) == 0:
        return
    canvas_w, canvas_h = _canvas_size(canvas)
    if frame.ndim == 2:
        frame = cv2.cvtColor(frame, cv2.COLOR_GRAY2BGR)

    draw_w = max(1, js_round(fit.draw_w))
    draw_h = max(1, js_round(fit.draw_h))
    resized = cv2.resize(frame, (draw_w, draw_h), interpolation=cv2.INTER_LINEAR)
    mirrored = cv2.flip(resized, 1)

    # En el contexto reflejado el rectángulo empieza en ``offset_x``; en pantalla
    # su borde izquierdo queda en ``ancho - offset_x - draw_w``.
    x0 = js_round(mirror_x(canvas_w, fit.offset_x) - fit.draw_w)
    y0 = js_round(fit.offset_y)
    cx0, cy0 = max(0, x0), max(0, y0)
    cx1, cy1 = min(canvas_w, x0 + draw_w), min(canvas_h, y0 + draw_h)
    if cx1 <= cx0 or cy1 <= cy0:
        return
    canvas[cy0:cy1, cx0:cx1] = mirrored[cy0 - y0:cy1 - y0, cx0 - x0:cx1 - x0, :3]


def draw_grid(canvas: np.ndarray, style: OverlayStyle, scale: float) -> None:
    """Rejilla de depuración anclada al borde derecho (origen del contexto reflejado)."""

    canvas_w, canvas_h = _canvas_size(canvas)
    spacing = style.grid_spacing * scale
    thickness = scaled_px(style.grid_thickness, scale)
    for x in grid_positions(canvas_w, spacing):
        sx = js_round(mirror_x(canvas_w, x))
        cv2.line(canvas, (sx, 0), (sx, canvas_h), style.grid_bgr, thickness)
    for y in grid_positions(canvas_h, spacing):
        sy = js_round(y)
        cv2.line(canvas, (0, sy), (canvas_w, sy), style.grid_bgr, thickness)


def draw_skeleton(
    canvas: np.ndarray,
    poses: Iterable[Pose],
    connections: Sequence[Connection],
    fit: CoverFit,
    style: OverlayStyle,
    scale: float,
) -> int:
    """Une los pares de ``connections`` cuyos dos extremos superan el umbral.

    Devuelve el número de líneas trazadas."""

    canvas_w, _ = _canvas_size(canvas)
    thickness = scaled_px(style.line_thickness, scale)
    drawn = 0
    for pose in poses:
        for a_idx, b_idx in connections:
            a = pose.get(a_idx)
            b = pose.get(b_idx)
            if a is None or b is None:
                continue
            if not (a.is_confident(style.confidence_threshold) and b.is_confident(style.confidence_threshold)):
                continue
            pa = _px(mirrored_screen_point(fit, canvas_w, a))
            pb = _px(mirrored_screen_point(fit, canvas_w, b))
            cv2.line(canvas, pa, pb, style.line_bgr, thickness, cv2.LINE_AA)
            drawn += 1
    return drawn


def draw_keypoints(
    canvas: np.ndarray,
    poses: Iterable[Pose],
    fit: CoverFit,
    style: OverlayStyle,
    scale: float,
) -> int:
    """Dibuja un círculo relleno por punto clave fiable; devuelve cuántos."""

    canvas_w, _ = _canvas_size(canvas)
    radius = scaled_px(style.dot_size / 2.0, scale)
    drawn = 0
    for pose in poses:
        for kp in pose.confident_keypoints(style.confidence_threshold):
            center = _px(mirrored_screen_point(fit, canvas_w, kp))
            cv2.circle(canvas, center, radius, style.dot_bgr, -1, cv2.LINE_AA)
            drawn += 1
    return drawn


def font_scale_for_height(pixel_size: float, thickness: int = 1) -> float:
    """Escala de ``FONT`` que produce texto de ``pixel_size`` píxeles nominales."""

    (_, base_h), _ = cv2.getTextSize("0", FONT, 1.0, thickness)
    target = max(1.0, float(pixel_size)) * _CAP_HEIGHT_RATIO
    return target / float(base_h) if base_h > 0 else target / 22.0


def draw_coordinate_labels(
    canvas: np.ndarray,
    poses: Iterable[Pose],
    fit: CoverFit,
    style: OverlayStyle,
    scale: float,
) -> list[str]:
    """Escribe ``"X, Y"`` junto a cada punto fiable dentro de un recuadro.

    Las coordenadas son las de pantalla (ya reflejadas) multiplicadas por
    ``coord_scale``. Devuelve los textos en el orden en que se dibujaron."""

    canvas_w, _ = _canvas_size(canvas)
    text_h = style.text_size_px * scale
    pad_x = style.label_pad_x * scale
    pad_y = style.label_pad_y * scale
    border = scaled_px(style.label_border, scale)
    text_thickness = 1
    font_scale = font_scale_for_height(text_h, text_thickness)

    labels: list[str] = []
    for pose in poses:
        for kp in pose.confident_keypoints(style.confidence_threshold):
            screen_x, screen_y = mirrored_screen_point(fit, canvas_w, kp)
            label_x, label_y = label_anchor(
                screen_x,
                screen_y,
                dot_size=style.dot_size,
                gap=style.label_gap,
                scale=scale,
            )
            text = coordinate_label(screen_x, screen_y, style.coord_scale)
            (text_w, glyph_h), _ = cv2.getTextSize(text, FONT, font_scale, text_thickness)

            top_left = (js_round(label_x - pad_x / 2.0), js_round(label_y - text_h / 2.0 - pad_y / 2.0))
            bottom_right = (
                js_round(label_x - pad_x / 2.0 + text_w + pad_x),
                js_round(label_y - text_h / 2.0 - pad_y / 2.0 + text_h + pad_y),
            )
            cv2.rectangle(canvas, top_left, bottom_right, style.text_bgr, border)
            # Centramos verticalmente: ``putText`` recibe la línea base.
            origin = (js_round(label_x), js_round(label_y + glyph_h / 2.0))
            cv2.putText(canvas, text, origin, FONT, font_scale, style.text_bgr, text_thickness, cv2.LINE_AA)
            labels.append(text)
    return labels


def draw_frame_layers(
    canvas: np.ndarray,
    frame: Optional[np.ndarray],
    poses: Sequence[Pose],
    connections: Sequence[Connection],
    fit: CoverFit,
    style: OverlayStyle,
    scale: float,
    *,
    show_video: bool,
    show_grid: bool,
    show_lines: bool,
) -> None:
    """Compone todas las capas en el orden fijo: vídeo o negro, rejilla, líneas, puntos, etiquetas."""

    if show_video and frame is not None:
        draw_video_background(canvas, frame, fit)
    else:
        fill_black(canvas)
    if show_grid:
        draw_grid(canvas, style, scale)
    if show_lines:
        draw_skeleton(canvas, poses, connections, fit, style, scale)
    draw_keypoints(canvas, poses, fit, style, scale)
    draw_coordinate_labels(canvas, poses, fit, style, scale)
