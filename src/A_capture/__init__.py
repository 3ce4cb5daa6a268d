"""Acceso a la cámara o a un vídeo de entrada para el visor en vivo."""

from .webcam import WebcamSource, parse_source

__all__ = ["WebcamSource", "parse_source"]
