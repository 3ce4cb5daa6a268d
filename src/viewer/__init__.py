"""Visor interactivo en vivo."""

from .app import LiveOverlayApp
from .state import KeyAction, ToggleState
from .window import OverlayWindow

__all__ = ["KeyAction", "LiveOverlayApp", "OverlayWindow", "ToggleState"]
