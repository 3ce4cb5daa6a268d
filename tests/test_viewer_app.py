from __future__ import annotations

import numpy as np

from src.B_pose_estimation.estimators.base import PoseEstimatorBase
from src.B_pose_estimation.types import Keypoint, Pose
from src.config.models import Config
from src.viewer.app import LiveOverlayApp


class _FakeSource:
    def __init__(self, frames: int) -> None:
        self._frames = [np.zeros((48, 64, 3), dtype=np.uint8) for _ in range(frames)]
        self.opened = False
        self.released = False

    def open(self):
        self.opened = True
        return self

    def read(self):
        return self._frames.pop(0) if self._frames else None

    def intrinsic_size(self):
        return 64, 48

    def release(self) -> None:
        self.released = True


class _FakeEstimator(PoseEstimatorBase):
    def __init__(self) -> None:
        self.closed = False
        self.frames = 0

    def estimate(self, image_bgr):
        self.frames += 1
        return [Pose(keypoints=(Keypoint("nose", 32.0, 24.0, 0.9), Keypoint("eye", 40.0, 24.0, 0.9)))]

    def skeleton(self):
        return ((0, 1),)

    def close(self) -> None:
        self.closed = True


class _FakeWindow:
    def __init__(self, keys, clicks=None, visible=True) -> None:
        self.keys = list(keys)
        self.clicks = list(clicks or [])
        self.visible = visible
        self.shown: list[np.ndarray] = []
        self.fullscreen_calls: list[bool] = []
        self.opened = False
        self.closed = False

    def open(self):
        self.opened = True
        return self

    def canvas_size(self):
        return 320, 180

    def show(self, canvas) -> None:
        self.shown.append(canvas)

    def poll_key(self, delay_ms: int = 1) -> int:
        return self.keys.pop(0) if self.keys else -1

    def consume_clicks(self) -> int:
        return self.clicks.pop(0) if self.clicks else 0

    def set_fullscreen(self, enabled: bool) -> None:
        self.fullscreen_calls.append(enabled)

    def is_visible(self) -> bool:
        return self.visible

    def close(self) -> None:
        self.closed = True


def _sync_config() -> Config:
    cfg = Config()
    cfg.pose.async_detection = False
    return cfg


def test_run_until_quit_key_and_release_everything() -> None:
    source, estimator = _FakeSource(10), _FakeEstimator()
    window = _FakeWindow(keys=[ord("b"), -1, ord("q")])
    app = LiveOverlayApp(_sync_config(), source=source, estimator=estimator, window=window)

    frames = app.run()

    assert frames == 3
    assert app.state.show_video is True
    assert estimator.frames == 3
    assert len(window.shown) == 3
    assert window.shown[0].shape == (180, 320, 3)
    assert source.released and estimator.closed and window.closed


def test_run_stops_when_the_source_is_exhausted() -> None:
    source = _FakeSource(2)
    app = LiveOverlayApp(_sync_config(), source=source, estimator=_FakeEstimator(), window=_FakeWindow(keys=[]))

    assert app.run() == 2
    assert app.latest.updates == 2


def test_clicks_toggle_fullscreen_and_grid_key_draws_grid() -> None:
    window = _FakeWindow(keys=[ord("g"), -1], clicks=[1, 1])
    app = LiveOverlayApp(_sync_config(), source=_FakeSource(3), estimator=_FakeEstimator(), window=window)

    assert app.run(max_frames=3) == 3
    assert window.fullscreen_calls == [True, False]
    assert app.state.show_grid is True
    assert app.state.fullscreen is False
    # La rejilla aparece a partir del segundo frame (línea horizontal en y = 0).
    assert not window.shown[0][0].any()
    assert (window.shown[1][0] == 100).all()


def test_closed_window_ends_the_loop() -> None:
    window = _FakeWindow(keys=[], visible=False)
    app = LiveOverlayApp(_sync_config(), source=_FakeSource(5), estimator=_FakeEstimator(), window=window)

    assert app.run() == 1


def test_fullscreen_on_start() -> None:
    cfg = _sync_config()
    cfg.display.fullscreen = True
    window = _FakeWindow(keys=[ord("q")])

    LiveOverlayApp(cfg, source=_FakeSource(1), estimator=_FakeEstimator(), window=window).run()

    assert window.fullscreen_calls == [True]


def test_asynchronous_detection_runs_and_stops() -> None:
    source, estimator = _FakeSource(5), _FakeEstimator()
    app = LiveOverlayApp(Config(), source=source, estimator=estimator, window=_FakeWindow(keys=[]))

    assert app.run() == 5
    assert estimator.closed
    assert source.released
