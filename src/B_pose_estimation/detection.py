"""Entrega de poses al bucle de dibujo.

El estimador escribe el último resultado en :class:`LatestPoses` y el bucle de
dibujo lo lee en el siguiente frame (gana la última escritura). En modo
asíncrono la inferencia corre en un hilo propio con un buzón de una sola
plaza: si llegan frames más rápido de lo que el modelo procesa, los antiguos se
descartan y siempre se infiere sobre el más reciente.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional, Sequence

import numpy as np

from .estimators.base import PoseEstimatorBase
from .types import Connection, PoseResult

logger = logging.getLogger(__name__)

PoseCallback = Callable[[PoseResult], None]

__all__ = [
    "InlinePoseDetector",
    "LatestPoses",
    "PoseDetectionWorker",
    "PoseCallback",
    "detect_start",
]


class LatestPoses:
    """Ranura protegida por *lock* con el último :class:`PoseResult` recibido."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._result: Optional[PoseResult] = None
        self._updates = 0

    def update(self, result: PoseResult) -> None:
        with self._lock:
            self._result = result
            self._updates += 1

    # Permite pasar la instancia directamente como *callback* del detector.
    __call__ = update

    def snapshot(self) -> Optional[PoseResult]:
        with self._lock:
            return self._result

    @property
    def updates(self) -> int:
        with self._lock:
            return self._updates


def _run_estimator(estimator: PoseEstimatorBase, frame: np.ndarray, frame_index: int) -> PoseResult:
    height, width = frame.shape[:2]
    poses = estimator.estimate(frame)
    return PoseResult(poses=list(poses), frame_width=int(width), frame_height=int(height), frame_index=frame_index)


class InlinePoseDetector:
    """Detector síncrono: infiere y notifica dentro de ``submit``."""

    def __init__(self, estimator: PoseEstimatorBase, callback: PoseCallback) -> None:
        self._estimator = estimator
        self._callback = callback

    def skeleton(self) -> Sequence[Connection]:
        return self._estimator.skeleton()

    def submit(self, frame: np.ndarray, frame_index: int = 0) -> None:
        if frame is None:
            return
        self._callback(_run_estimator(self._estimator, frame, frame_index))

    def wait_idle(self, timeout: Optional[float] = None) -> bool:
        return True

    def stop(self, timeout: Optional[float] = None) -> None:
        """No hay hilo que detener; se mantiene por simetría con el modo asíncrono."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> Optional[bool]:
        self.stop()
        return None


class PoseDetectionWorker:
    """Hilo de inferencia que procesa siempre el frame más reciente."""

    def __init__(
        self,
        estimator: PoseEstimatorBase,
        callback: PoseCallback,
        *,
        name: str = "pose-detection",
    ) -> None:
        self._estimator = estimator
        self._callback = callback
        self._cond = threading.Condition()
        self._pending: Optional[tuple[np.ndarray, int]] = None
        self._busy = False
        self._stopping = False
        self._dropped = 0
        self._processed = 0
        self._thread = threading.Thread(target=self._loop, name=name, daemon=True)

    @property
    def dropped(self) -> int:
        """Frames sustituidos en el buzón antes de llegar a inferirse."""
        with self._cond:
            return self._dropped

    @property
    def processed(self) -> int:
        with self._cond:
            return self._processed

    def skeleton(self) -> Sequence[Connection]:
        return self._estimator.skeleton()

    def start(self) -> "PoseDetectionWorker":
        self._thread.start()
        logger.debug("Pose detection worker started")
        return self

    def submit(self, frame: np.ndarray, frame_index: int = 0) -> None:
        if frame is None:
            return
        with self._cond:
            if self._stopping:
                return
            if self._pending is not None:
                self._dropped += 1
            # Copiamos: el lector de la cámara puede reutilizar el buffer.
            self._pending = (np.array(frame, copy=True), int(frame_index))
            self._cond.notify_all()

    def wait_idle(self, timeout: Optional[float] = None) -> bool:
        """Espera a que no quede ningún frame pendiente ni en curso."""

        with self._cond:
            return self._cond.wait_for(lambda: self._pending is None and not self._busy, timeout=timeout)

    def stop(self, timeout: Optional[float] = 2.0) -> None:
        with self._cond:
            self._stopping = True
            self._pending = None
            self._cond.notify_all()
        if self._thread.is_alive():
            self._thread.join(timeout)
            if self._thread.is_alive():
                logger.warning("Pose detection worker did not stop within %.1fs", timeout or 0.0)
        logger.debug(
            "Pose detection worker stopped: processed=%d dropped=%d",
            self._processed,
            self._dropped,
        )

    def _loop(self) -> None:
        while True:
            with self._cond:
                self._cond.wait_for(lambda: self._stopping or self._pending is not None)
                if self._stopping:
                    return
                frame, frame_index = self._pending  # type: ignore[misc]
                self._pending = None
                self._busy = True
            try:
                result = _run_estimator(self._estimator, frame, frame_index)
                self._callback(result)
            except Exception:
                logger.exception("Pose estimation failed on frame %d", frame_index)
            finally:
                with self._cond:
                    self._busy = False
                    self._processed += 1
                    self._cond.notify_all()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> Optional[bool]:
        self.stop()
        return None


def detect_start(
    estimator: PoseEstimatorBase,
    callback: PoseCallback,
    *,
    asynchronous: bool = True,
) -> InlinePoseDetector | PoseDetectionWorker:
    """Arranca la detección continua y devuelve el objeto al que enviar frames."""

    if asynchronous:
        return PoseDetectionWorker(estimator, callback).start()
    return InlinePoseDetector(estimator, callback)
