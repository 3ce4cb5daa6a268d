"""Estilos de superposición para el overlay de puntos clave.

Define dataclasses que documentan cómo trazamos huesos, puntos y etiquetas,
ya resueltos a colores BGR de OpenCV."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from src.config.models import OverlayConfig

from .overlay_geometry import js_round

# Exportamos explícitamente los elementos principales del módulo.
__all__ = ["OverlayStyle", "RenderFlags", "gray_to_bgr", "hex_to_bgr", "scaled_px"]

BGR = Tuple[int, int, int]


def hex_to_bgr(value: str) -> BGR:
    """Convierte ``"#RRGGBB"`` (o ``"#RGB"``) en una tupla BGR para OpenCV."""

    text = str(value).strip().lstrip("#")
    if len(text) == 3:
        text = "".join(ch * 2 for ch in text)
    if len(text) != 6:
        raise ValueError(f"Invalid hex colour: {value!r}")
    try:
        r, g, b = (int(text[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError as exc:
        raise ValueError(f"Invalid hex colour: {value!r}") from exc
    return b, g, r


def gray_to_bgr(value: int) -> BGR:
    level = max(0, min(255, int(value)))
    return level, level, level


@dataclass(frozen=True)
class OverlayStyle:
    """Parámetros visuales del overlay en píxeles de referencia (1920x1080).

    Los tamaños se multiplican por el factor de escala de la interfaz en el
    momento de dibujar."""

    # Fondo del lienzo.
    bg_bgr: BGR = (0, 0, 0)
    # Conexiones del esqueleto.
    line_bgr: BGR = (0, 255, 0)
    line_thickness: float = 1.9
    # Puntos clave (``dot_size`` es el diámetro).
    dot_bgr: BGR = (0, 255, 0)
    dot_size: float = 25.0
    # Etiquetas de coordenadas.
    text_bgr: BGR = (245, 245, 245)
    text_size_px: float = 19.0
    coord_scale: float = 0.25
    label_gap: float = 7.0
    label_pad_x: float = 6.0
    label_pad_y: float = 4.0
    label_border: float = 1.0
    # Rejilla.
    grid_bgr: BGR = (100, 100, 100)
    grid_spacing: float = 100.0
    grid_thickness: float = 1.0
    # Confianza mínima (estricta) para dibujar.
    confidence_threshold: float = 0.09

    @classmethod
    def from_config(cls, cfg: Optional[OverlayConfig] = None) -> "OverlayStyle":
        cfg = cfg or OverlayConfig()
        return cls(
            bg_bgr=gray_to_bgr(cfg.bg_color),
            line_bgr=hex_to_bgr(cfg.line_color),
            line_thickness=float(cfg.line_thickness),
            dot_bgr=hex_to_bgr(cfg.dot_color),
            dot_size=float(cfg.dot_size),
            text_bgr=hex_to_bgr(cfg.text_color),
            text_size_px=float(cfg.text_size_px),
            coord_scale=float(cfg.coord_scale),
            label_gap=float(cfg.label_gap),
            label_pad_x=float(cfg.label_pad_x),
            label_pad_y=float(cfg.label_pad_y),
            label_border=float(cfg.label_border),
            grid_bgr=gray_to_bgr(cfg.grid_gray),
            grid_spacing=float(cfg.grid_spacing),
            grid_thickness=float(cfg.grid_thickness),
            confidence_threshold=float(cfg.confidence_threshold),
        )


def scaled_px(value: float, scale: float, *, minimum: int = 1) -> int:
    """Tamaño entero en píxeles tras aplicar ``scale``; OpenCV no acepta grosores nulos."""

    return max(minimum, js_round(value * scale))


@dataclass
class RenderFlags:
    """Interruptores que deciden qué capas se dibujan en cada frame."""

    show_lines: bool = True
    show_video: bool = False
    show_grid: bool = False
