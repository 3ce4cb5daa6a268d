"""Domain-specific exceptions for the live overlay."""


class OverlayError(Exception):
    """Base exception for fatal overlay failures."""


class CaptureOpenError(OverlayError):
    """Raised when the camera or video source cannot be opened for reading."""


class PoseBackendUnavailable(OverlayError):
    """Raised when the pose-estimation library cannot be loaded."""
