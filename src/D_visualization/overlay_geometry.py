"""Utilidades geométricas para llevar puntos del vídeo al lienzo.

Agrupa el ajuste *cover-fit*, el espejo horizontal y el escalado de la interfaz
sin depender de OpenCV para que puedan probarse de forma aislada."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Tuple

from src.config.constants import REF_HEIGHT, REF_WIDTH

# Declaramos la API pública del módulo.
__all__ = [
    "CoverFit",
    "coordinate_label",
    "cover_fit",
    "grid_positions",
    "js_round",
    "label_anchor",
    "mirror_x",
    "ui_scale",
]


def js_round(value: float) -> int:
    """Redondea al entero más cercano resolviendo los empates hacia arriba.

    ``round`` de Python usa redondeo bancario (``round(2.5) == 2``); las
    etiquetas deben mostrar ``3`` en ese caso, igual que ``Math.round``.
    """

    return int(math.floor(float(value) + 0.5))


def ui_scale(
    canvas_w: float,
    canvas_h: float,
    *,
    ref_w: float = REF_WIDTH,
    ref_h: float = REF_HEIGHT,
) -> float:
    """Factor que adapta los tamaños de referencia (1920x1080) al lienzo actual."""

    return min(float(canvas_w) / float(ref_w), float(canvas_h) / float(ref_h))


@dataclass(frozen=True)
class CoverFit:
    """Rectángulo en el lienzo que ocupa el vídeo escalado y sus factores."""

    draw_w: float
    draw_h: float
    offset_x: float
    offset_y: float
    sx: float
    sy: float

    def map_point(self, x: float, y: float) -> Tuple[float, float]:
        """Lleva ``(x, y)`` de píxeles del vídeo a píxeles del lienzo (sin espejo)."""

        return self.offset_x + x * self.sx, self.offset_y + y * self.sy


def cover_fit(canvas_w: float, canvas_h: float, vid_w: float, vid_h: float) -> CoverFit:
    """Calcula el rectángulo que cubre todo el lienzo preservando la proporción.

    El sobrante se recorta a partes iguales en ambos lados del eje que desborda.
    """

    canvas_w = float(canvas_w)
    canvas_h = float(canvas_h)
    vid_w = float(vid_w)
    vid_h = float(vid_h)

    canvas_ar = canvas_w / canvas_h if canvas_h > 0 else 1.0
    video_ar = vid_w / vid_h if vid_w > 0 and vid_h > 0 else 1.0
    if not math.isfinite(video_ar) or video_ar <= 0:
        video_ar = 1.0

    if video_ar > canvas_ar:
        draw_h = canvas_h
        draw_w = canvas_h * video_ar
    else:
        draw_w = canvas_w
        draw_h = canvas_w / video_ar

    offset_x = (canvas_w - draw_w) / 2.0
    offset_y = (canvas_h - draw_h) / 2.0
    sx = draw_w / vid_w if vid_w > 0 else 0.0
    sy = draw_h / vid_h if vid_h > 0 else 0.0
    return CoverFit(draw_w=draw_w, draw_h=draw_h, offset_x=offset_x, offset_y=offset_y, sx=sx, sy=sy)


def mirror_x(canvas_w: float, x: float) -> float:
    """Refleja ``x`` respecto al centro vertical del lienzo."""

    return float(canvas_w) - float(x)


def coordinate_label(screen_x: float, screen_y: float, coord_scale: float) -> str:
    """Texto ``"X, Y"`` con la coordenada de pantalla escalada y redondeada."""

    return f"{js_round(screen_x * coord_scale)}, {js_round(screen_y * coord_scale)}"


def label_anchor(
    screen_x: float,
    screen_y: float,
    *,
    dot_size: float,
    gap: float,
    scale: float,
) -> Tuple[float, float]:
    """Punto de anclaje (borde izquierdo, centro vertical) de la etiqueta de un punto."""

    return screen_x + (dot_size * 0.6 + gap) * scale, screen_y


def grid_positions(extent: float, spacing: float) -> List[float]:
    """Posiciones ``0, spacing, 2*spacing...`` estrictamente menores que ``extent``."""

    if spacing <= 0 or not math.isfinite(spacing) or extent <= 0:
        return []
    count = int(math.ceil(float(extent) / float(spacing)))
    return [i * spacing for i in range(count) if i * spacing < extent]
