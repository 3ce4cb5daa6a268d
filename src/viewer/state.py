"""Estado mutable de los interruptores del visor y su mapeo de teclas."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union

from src.config.models import DisplayConfig
from src.D_visualization.overlay_styles import RenderFlags

__all__ = ["KeyAction", "KEY_BINDINGS", "ESC_KEY", "ToggleState", "normalize_key"]

ESC_KEY = 27


class KeyAction(str, Enum):
    """Acciones que puede disparar una tecla."""

    NONE = "none"
    TOGGLE_LINES = "toggle_lines"
    TOGGLE_VIDEO = "toggle_video"
    TOGGLE_GRID = "toggle_grid"
    QUIT = "quit"


# Teclas en minúscula; las mayúsculas se normalizan antes de buscar.
KEY_BINDINGS: Dict[str, KeyAction] = {
    "h": KeyAction.TOGGLE_LINES,
    "b": KeyAction.TOGGLE_VIDEO,
    "g": KeyAction.TOGGLE_GRID,
    "q": KeyAction.QUIT,
}


def normalize_key(key: Union[int, str, None]) -> Optional[str]:
    """Convierte el código de ``cv2.waitKeyEx`` (o un carácter) en una tecla en minúscula."""

    if key is None:
        return None
    if isinstance(key, str):
        return key[:1].lower() or None
    code = int(key)
    if code < 0:
        return None
    # ``waitKeyEx`` pone los modificadores en los bits altos; las teclas
    # especiales (flechas, F1...) no tienen carácter asociado.
    code &= 0xFFFF
    if code == 0 or code > 0xFF:
        return None
    if code == ESC_KEY:
        return "\x1b"
    return chr(code).lower()


@dataclass
class ToggleState:
    """Qué capas se muestran y si la ventana está a pantalla completa."""

    show_lines: bool = True
    show_video: bool = False
    show_grid: bool = False
    fullscreen: bool = False

    @classmethod
    def from_config(cls, cfg: Optional[DisplayConfig] = None) -> "ToggleState":
        cfg = cfg or DisplayConfig()
        return cls(
            show_lines=bool(cfg.show_lines),
            show_video=bool(cfg.show_video),
            show_grid=bool(cfg.show_grid),
            fullscreen=bool(cfg.fullscreen),
        )

    def handle_key(self, key: Union[int, str, None]) -> KeyAction:
        """Aplica la tecla pulsada y devuelve la acción resultante."""

        name = normalize_key(key)
        if name is None:
            return KeyAction.NONE
        if name == "\x1b":
            return KeyAction.QUIT
        action = KEY_BINDINGS.get(name, KeyAction.NONE)
        if action is KeyAction.TOGGLE_LINES:
            self.show_lines = not self.show_lines
        elif action is KeyAction.TOGGLE_VIDEO:
            self.show_video = not self.show_video
        elif action is KeyAction.TOGGLE_GRID:
            self.show_grid = not self.show_grid
        return action

    def toggle_fullscreen(self) -> bool:
        self.fullscreen = not self.fullscreen
        return self.fullscreen

    def render_flags(self) -> RenderFlags:
        return RenderFlags(
            show_lines=self.show_lines,
            show_video=self.show_video,
            show_grid=self.show_grid,
        )
