"""Conversión de landmarks normalizados del modelo a puntos clave en píxeles."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Sequence

from .types import Keypoint


def landmarks_to_keypoints(
    landmarks: Iterable[object],
    width: int,
    height: int,
    names: Sequence[str] = (),
) -> list[Keypoint]:
    """Convierte landmarks de MediaPipe (``[0, 1]``) en :class:`Keypoint` en píxeles.

    Cada landmark pasa por :meth:`Keypoint.from_record`, así que la confianza
    sale de ``visibility`` (MediaPipe no publica ``confidence`` ni ``score``) y
    un valor ausente o ``NaN`` se queda en ``0``.
    """

    converted: list[Keypoint] = []
    for idx, lm in enumerate(landmarks):
        keypoint = Keypoint.from_record(lm, names[idx] if idx < len(names) else str(idx))
        converted.append(replace(keypoint, x=keypoint.x * float(width), y=keypoint.y * float(height)))
    return converted


__all__ = ["landmarks_to_keypoints"]
