"""Tipos ligeros que describen los puntos clave y las poses detectadas.

Los resultados del modelo llegan como objetos opacos cuyo esquema cambia entre
versiones de la librería (``x`` frente a ``position.x``, ``confidence`` frente a
``score`` o ``visibility``). Estas conversiones resuelven esos nombres alternativos
en un único lugar para que el resto del código trabaje con tipos propios.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Tuple

# Nombres alternativos de la confianza, en orden de preferencia.
CONFIDENCE_FIELDS: Tuple[str, ...] = ("confidence", "score", "visibility")

Connection = Tuple[int, int]


def _lookup(record: Any, key: str) -> Any:
    """Lee ``key`` como clave de ``Mapping`` o como atributo, devolviendo ``None`` si falta."""

    if record is None:
        return None
    if isinstance(record, Mapping):
        return record.get(key)
    return getattr(record, key, None)


def _first_present(*values: Any) -> Any:
    """Primer valor distinto de ``None`` (``0`` cuenta como valor presente)."""

    for value in values:
        if value is not None:
            return value
    return None


def _as_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return float("nan")


@dataclass(frozen=True)
class Keypoint:
    """Punto clave 2D en píxeles del vídeo con su confianza asociada."""

    name: str
    x: float
    y: float
    confidence: float = 0.0

    @property
    def has_position(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def is_confident(self, threshold: float) -> bool:
        """``True`` si la confianza supera estrictamente ``threshold``."""

        return self.has_position and self.confidence > threshold

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "x": float(self.x), "y": float(self.y), "confidence": float(self.confidence)}

    @classmethod
    def from_record(cls, record: Any, name: str = "") -> "Keypoint":
        """Crea un ``Keypoint`` a partir de cualquier registro compatible.

        Las coordenadas se buscan en ``x``/``y`` y, si faltan, en
        ``position.x``/``position.y``. La confianza toma el primer campo presente
        de :data:`CONFIDENCE_FIELDS` y vale ``0`` cuando no hay ninguno.
        """

        position = _lookup(record, "position")
        raw_x = _first_present(_lookup(record, "x"), _lookup(position, "x"))
        raw_y = _first_present(_lookup(record, "y"), _lookup(position, "y"))
        raw_conf = _first_present(*(_lookup(record, key) for key in CONFIDENCE_FIELDS))
        confidence = _as_float(raw_conf) if raw_conf is not None else 0.0
        if not math.isfinite(confidence):
            confidence = 0.0
        resolved_name = _first_present(_lookup(record, "name"), _lookup(record, "part"), name)
        return cls(
            name=str(resolved_name or ""),
            x=_as_float(raw_x),
            y=_as_float(raw_y),
            confidence=confidence,
        )


@dataclass(frozen=True)
class Pose:
    """Una persona detectada: lista ordenada de puntos clave (índice = índice del modelo)."""

    keypoints: Tuple[Keypoint, ...] = field(default_factory=tuple)
    score: float = float("nan")

    def __len__(self) -> int:
        return len(self.keypoints)

    def get(self, index: int) -> Optional[Keypoint]:
        """Devuelve el punto ``index`` o ``None`` si queda fuera del esquema."""

        if 0 <= index < len(self.keypoints):
            return self.keypoints[index]
        return None

    def confident_keypoints(self, threshold: float) -> List[Keypoint]:
        return [kp for kp in self.keypoints if kp.is_confident(threshold)]

    @classmethod
    def from_record(cls, record: Any, names: Sequence[str] = ()) -> "Pose":
        """Convierte un registro de pose externo (objeto con ``keypoints`` o lista)."""

        if isinstance(record, Pose):
            return record
        raw_keypoints = _lookup(record, "keypoints")
        if raw_keypoints is None and isinstance(record, Iterable) and not isinstance(record, Mapping):
            raw_keypoints = record
        keypoints = []
        for idx, raw in enumerate(raw_keypoints or []):
            if isinstance(raw, Keypoint):
                keypoints.append(raw)
                continue
            default_name = names[idx] if idx < len(names) else str(idx)
            keypoints.append(Keypoint.from_record(raw, default_name))
        raw_score = _lookup(record, "score") if not isinstance(record, (list, tuple)) else None
        return cls(keypoints=tuple(keypoints), score=_as_float(raw_score))


def poses_from_records(records: Optional[Iterable[Any]], names: Sequence[str] = ()) -> List[Pose]:
    """Normaliza la salida completa de un detector; ``None`` equivale a ninguna pose."""

    if records is None:
        return []
    return [Pose.from_record(record, names) for record in records]


@dataclass
class PoseResult:
    """Contenedor con las poses producidas para un frame concreto."""

    poses: List[Pose]
    frame_width: int
    frame_height: int
    frame_index: int = 0


__all__ = [
    "CONFIDENCE_FIELDS",
    "Connection",
    "Keypoint",
    "Pose",
    "PoseResult",
    "poses_from_records",
]
