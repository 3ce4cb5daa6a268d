"""Bucle principal del visor: cámara, detección, dibujo y eventos de teclado/ratón."""

from __future__ import annotations

import logging
import time
from typing import Optional

from src.A_capture.webcam import WebcamSource
from src.B_pose_estimation.detection import LatestPoses, detect_start
from src.B_pose_estimation.estimators import MediaPipePoseEstimator, PoseEstimatorBase
from src.config.models import Config
from src.D_visualization.overlay_renderer import OverlayRenderer
from src.D_visualization.overlay_styles import OverlayStyle

from .state import KeyAction, ToggleState
from .window import OverlayWindow

logger = logging.getLogger(__name__)

__all__ = ["LiveOverlayApp"]


def _build_estimator(cfg: Config) -> PoseEstimatorBase:
    return MediaPipePoseEstimator(
        model_complexity=cfg.pose.model_complexity,
        min_detection_confidence=cfg.pose.min_detection_confidence,
        min_tracking_confidence=cfg.pose.min_tracking_confidence,
        smooth_landmarks=cfg.pose.smooth_landmarks,
    )


class LiveOverlayApp:
    """Orquesta un visor en vivo a partir de una :class:`Config`.

    Los colaboradores (fuente, estimador, ventana) pueden inyectarse; si no se
    pasan se construyen a partir de la configuración al llamar a :meth:`run`.
    """

    def __init__(
        self,
        cfg: Optional[Config] = None,
        *,
        source: Optional[WebcamSource] = None,
        estimator: Optional[PoseEstimatorBase] = None,
        window: Optional[OverlayWindow] = None,
        renderer: Optional[OverlayRenderer] = None,
    ) -> None:
        self.cfg = cfg or Config()
        self.source = source or WebcamSource(
            self.cfg.capture.source,
            request_width=self.cfg.capture.request_width,
            request_height=self.cfg.capture.request_height,
            default_size=(self.cfg.capture.default_width, self.cfg.capture.default_height),
        )
        self._estimator = estimator
        self.window = window or OverlayWindow(
            self.cfg.display.window_name,
            (self.cfg.display.canvas_width, self.cfg.display.canvas_height),
            settle_ms=self.cfg.display.fullscreen_settle_ms,
        )
        self.renderer = renderer or OverlayRenderer(OverlayStyle.from_config(self.cfg.overlay))
        self.state = ToggleState.from_config(self.cfg.display)
        self.latest = LatestPoses()

    def run(self, max_frames: Optional[int] = None) -> int:
        """Ejecuta el bucle hasta salir; devuelve el número de frames mostrados."""

        self.source.open()
        estimator: Optional[PoseEstimatorBase] = None
        detector = None
        frames = 0
        t0 = time.perf_counter()
        try:
            estimator = self._estimator or _build_estimator(self.cfg)
            detector = detect_start(estimator, self.latest, asynchronous=self.cfg.pose.async_detection)
            connections = detector.skeleton()

            self.window.open()
            if self.state.fullscreen:
                self.window.set_fullscreen(True)

            while True:
                frame = self.source.read()
                if frame is None:
                    logger.info("Video source exhausted after %d frames", frames)
                    break
                detector.submit(frame, frames)

                result = self.latest.snapshot()
                poses = result.poses if result is not None else []
                canvas = self.renderer.render(
                    frame,
                    poses,
                    connections,
                    self.window.canvas_size(),
                    self.state.render_flags(),
                    video_size=self.source.intrinsic_size(),
                )
                self.window.show(canvas)
                frames += 1

                if self._handle_events(self.window.poll_key(1)):
                    break
                if not self.window.is_visible():
                    logger.info("Window closed by the user")
                    break
                if max_frames is not None and frames >= max_frames:
                    break
        finally:
            if detector is not None:
                detector.stop()
            if estimator is not None:
                estimator.close()
            self.source.release()
            self.window.close()

        elapsed = time.perf_counter() - t0
        logger.info(
            "Overlay finished: frames=%d pose_updates=%d fps=%.1f",
            frames,
            self.latest.updates,
            frames / elapsed if elapsed > 0 else 0.0,
        )
        return frames

    def _handle_events(self, key: int) -> bool:
        """Aplica clics y teclas pendientes; devuelve ``True`` si hay que salir."""

        for _ in range(self.window.consume_clicks()):
            self.window.set_fullscreen(self.state.toggle_fullscreen())

        action = self.state.handle_key(key)
        if action is KeyAction.QUIT:
            return True
        if action is not KeyAction.NONE:
            logger.info(
                "%s -> lines=%s video=%s grid=%s",
                action.value,
                self.state.show_lines,
                self.state.show_video,
                self.state.show_grid,
            )
        return False
