"""Exportaciones principales del paquete de estimación de pose."""

from .detection import InlinePoseDetector, LatestPoses, PoseDetectionWorker, detect_start
from .estimators import MediaPipePoseEstimator, PoseEstimatorBase
from .geometry import landmarks_to_keypoints
from .types import Keypoint, Pose, PoseResult, poses_from_records

__all__ = [
    "Keypoint",
    "Pose",
    "PoseResult",
    "poses_from_records",
    "landmarks_to_keypoints",
    "PoseEstimatorBase",
    "MediaPipePoseEstimator",
    "InlinePoseDetector",
    "LatestPoses",
    "PoseDetectionWorker",
    "detect_start",
]
