from __future__ import annotations

import cv2
import numpy as np
import pytest

from src.viewer.window import OverlayWindow


class _Clock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def highgui(monkeypatch):
    """Sustituye la GUI de OpenCV y registra las llamadas recibidas."""

    calls: dict[str, list] = {"fullscreen": [], "destroyed": [], "callbacks": []}
    state = {"rect": (0, 0, 1280, 720), "visible": 1.0, "key": -1}

    def _rect(name):
        value = state["rect"]
        if isinstance(value, Exception):
            raise value
        return value

    monkeypatch.setattr(cv2, "namedWindow", lambda name, flags=0: None)
    monkeypatch.setattr(cv2, "resizeWindow", lambda name, w, h: None)
    monkeypatch.setattr(cv2, "setMouseCallback", lambda name, cb: calls["callbacks"].append(cb))
    monkeypatch.setattr(
        cv2, "setWindowProperty", lambda name, prop, value: calls["fullscreen"].append(value)
    )
    monkeypatch.setattr(cv2, "getWindowImageRect", _rect)
    monkeypatch.setattr(cv2, "getWindowProperty", lambda name, prop: state["visible"])
    monkeypatch.setattr(cv2, "waitKeyEx", lambda delay: state["key"])
    monkeypatch.setattr(cv2, "imshow", lambda name, canvas: None)
    monkeypatch.setattr(cv2, "destroyWindow", lambda name: calls["destroyed"].append(name))
    return calls, state


def test_canvas_size_follows_the_window_rect(highgui) -> None:
    _, state = highgui
    window = OverlayWindow("test", (640, 360)).open()

    assert window.canvas_size() == (1280, 720)
    state["rect"] = (0, 0, 800, 600)
    assert window.canvas_size() == (800, 600)


def test_canvas_size_before_open_is_the_configured_size(highgui) -> None:
    assert OverlayWindow("test", (640, 360)).canvas_size() == (640, 360)


@pytest.mark.parametrize("rect", [(0, 0, 0, 0), (0, 0, 1280, 0), cv2.error("no window")])
def test_invalid_rect_keeps_the_last_known_size(highgui, rect) -> None:
    _, state = highgui
    window = OverlayWindow("test", (640, 360)).open()
    state["rect"] = rect

    assert window.canvas_size() == (640, 360)


def test_fullscreen_waits_for_the_window_to_settle(highgui) -> None:
    calls, state = highgui
    clock = _Clock()
    window = OverlayWindow("test", (640, 360), settle_ms=60, clock=clock).open()

    window.set_fullscreen(True)
    state["rect"] = (0, 0, 1920, 1080)

    assert calls["fullscreen"] == [cv2.WINDOW_FULLSCREEN]
    clock.now += 0.05
    assert window.canvas_size() == (640, 360)
    clock.now += 0.011
    assert window.canvas_size() == (1920, 1080)

    window.set_fullscreen(False)
    assert calls["fullscreen"][-1] == cv2.WINDOW_NORMAL


def test_only_left_button_release_counts_as_click(highgui) -> None:
    calls, _ = highgui
    window = OverlayWindow("test", (640, 360)).open()
    (on_mouse,) = calls["callbacks"]

    on_mouse(cv2.EVENT_LBUTTONDOWN, 5, 5, 0, None)
    on_mouse(cv2.EVENT_MOUSEMOVE, 6, 6, 0, None)
    on_mouse(cv2.EVENT_RBUTTONUP, 6, 6, 0, None)
    on_mouse(cv2.EVENT_LBUTTONUP, 5, 5, 0, None)
    on_mouse(cv2.EVENT_LBUTTONUP, 5, 5, 0, None)

    assert window.consume_clicks() == 2
    assert window.consume_clicks() == 0


def test_poll_key_returns_extended_codes(highgui) -> None:
    _, state = highgui
    window = OverlayWindow("test", (640, 360)).open()
    state["key"] = 0xFF51

    assert window.poll_key() == 0xFF51


def test_visibility_and_close(highgui) -> None:
    calls, state = highgui
    window = OverlayWindow("test", (640, 360))

    assert window.is_visible() is False
    window.open()
    window.show(np.zeros((360, 640, 3), dtype=np.uint8))
    assert window.is_visible() is True
    state["visible"] = 0.0
    assert window.is_visible() is False

    window.close()
    window.close()
    assert calls["destroyed"] == ["test"]
