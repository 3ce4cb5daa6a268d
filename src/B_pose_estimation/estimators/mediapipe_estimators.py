"""Estimador de pose basado en MediaPipe listo para usar en vivo."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import cv2
import numpy as np

from src.config import LANDMARK_NAMES, POSE_CONNECTIONS
from src.config.constants import MIN_DETECTION_CONFIDENCE, MIN_TRACKING_CONFIDENCE
from src.config.settings import MODEL_COMPLEXITY, POSE_SMOOTH_LANDMARKS, build_pose_kwargs
from src.services.errors import PoseBackendUnavailable

from ..geometry import landmarks_to_keypoints
from ..types import Connection, Pose
from .base import PoseEstimatorBase

logger = logging.getLogger(__name__)


def _create_pose_graph(pose_kwargs: dict[str, object]) -> object:
    """Importa MediaPipe de forma diferida y construye el grafo ``Pose``."""

    try:
        from mediapipe.python.solutions import pose as mp_pose
    except (ImportError, AttributeError) as exc:
        raise PoseBackendUnavailable(
            "MediaPipe Pose is not available. Install it with: pip install mediapipe"
        ) from exc
    logger.info("Creating MediaPipe Pose graph: %s", pose_kwargs)
    return mp_pose.Pose(**pose_kwargs)  # type: ignore[arg-type]


class MediaPipePoseEstimator(PoseEstimatorBase):
    """Detecta una persona por frame y devuelve sus 33 puntos en píxeles del frame."""

    def __init__(
        self,
        *,
        model_complexity: int = MODEL_COMPLEXITY,
        min_detection_confidence: float = MIN_DETECTION_CONFIDENCE,
        min_tracking_confidence: float = MIN_TRACKING_CONFIDENCE,
        smooth_landmarks: bool = POSE_SMOOTH_LANDMARKS,
        pose_graph: Optional[object] = None,
        connections: Sequence[Connection] = tuple(POSE_CONNECTIONS),
        names: Sequence[str] = tuple(LANDMARK_NAMES),
    ) -> None:
        if pose_graph is None:
            pose_graph = _create_pose_graph(
                build_pose_kwargs(
                    static_image_mode=False,
                    model_complexity=int(model_complexity),
                    min_detection_confidence=float(min_detection_confidence),
                    min_tracking_confidence=float(min_tracking_confidence),
                    smooth_landmarks=smooth_landmarks,
                )
            )
        self._pose = pose_graph
        self._connections = tuple((int(a), int(b)) for a, b in connections)
        self._names = tuple(names)

    def estimate(self, image_bgr: np.ndarray) -> List[Pose]:
        if image_bgr is None or getattr(image_bgr, "size", 0) == 0:
            return []
        if self._pose is None:
            raise RuntimeError("The estimator has already been closed")

        height, width = image_bgr.shape[:2]
        rgb = cv2.cvtColor(image_bgr, cv2.COLOR_BGR2RGB)
        # MediaPipe puede evitar una copia si la imagen es de solo lectura.
        rgb.flags.writeable = False
        results = self._pose.process(rgb)
        pose_landmarks = getattr(results, "pose_landmarks", None)
        if not pose_landmarks:
            return []

        keypoints = landmarks_to_keypoints(pose_landmarks.landmark, width, height, self._names)
        return [Pose(keypoints=tuple(keypoints))]

    def skeleton(self) -> Sequence[Connection]:
        return self._connections

    def close(self) -> None:
        pose, self._pose = self._pose, None
        if pose is None:
            return
        try:
            pose.close()
        except Exception:
            logger.debug("Ignoring error while closing the MediaPipe graph", exc_info=True)


__all__ = ["MediaPipePoseEstimator"]
