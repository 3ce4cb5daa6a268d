# tests/conftest.py
"""Utilidades de configuración comunes para la batería de pruebas."""
from __future__ import annotations

from pathlib import Path
import sys

from typing import Any

import numpy as np
import pytest

# Repo root = parent de 'tests'
ROOT = Path(__file__).resolve().parents[1]

# Asegura que ``src.*`` es importable sin instalar el paquete.
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

from src.B_pose_estimation.types import Keypoint, Pose  # noqa: E402


def make_pose(*points: tuple[float, float, float]) -> Pose:
    """Construye una pose a partir de tuplas ``(x, y, confianza)``."""

    return Pose(keypoints=tuple(Keypoint(name=str(i), x=x, y=y, confidence=c) for i, (x, y, c) in enumerate(points)))


@pytest.fixture
def pose_factory():
    return make_pose


@pytest.fixture
def black_canvas():
    def _make(width: int = 640, height: int = 480) -> np.ndarray:
        return np.zeros((height, width, 3), dtype=np.uint8)

    return _make


class FakeCapture:
    """Sustituto de ``cv2.VideoCapture`` con propiedades y frames predefinidos."""

    def __init__(self, frames: list[Any] | None = None, *, opened: bool = True, props: dict[int, float] | None = None):
        self.frames = list(frames or [])
        self.opened = opened
        self.props: dict[int, float] = dict(props or {})
        self.released = False
        self.set_calls: list[tuple[int, float]] = []

    def isOpened(self) -> bool:
        return self.opened

    def read(self):
        if not self.frames:
            return False, None
        return True, self.frames.pop(0)

    def get(self, prop: int) -> float:
        return self.props.get(prop, 0.0)

    def set(self, prop: int, value: float) -> bool:
        self.set_calls.append((prop, value))
        return True

    def release(self) -> None:
        self.released = True


@pytest.fixture
def fake_capture_cls():
    return FakeCapture
