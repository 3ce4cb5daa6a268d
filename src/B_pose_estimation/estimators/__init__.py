"""API pública de estimadores de pose disponibles en el paquete."""

from .base import PoseEstimatorBase
from .mediapipe_estimators import MediaPipePoseEstimator

__all__ = [
    "PoseEstimatorBase",
    "MediaPipePoseEstimator",
]
