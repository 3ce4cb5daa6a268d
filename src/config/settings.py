"""Parámetros por defecto del overlay y utilidades de configuración del entorno."""

from __future__ import annotations

import os

from .constants import MIN_DETECTION_CONFIDENCE, MIN_TRACKING_CONFIDENCE


def configure_environment() -> None:
    """Ajusta variables de entorno antes de cargar MediaPipe."""

    os.environ.setdefault("TF_CPP_MIN_LOG_LEVEL", "2")
    os.environ.setdefault("GLOG_minloglevel", "2")

    try:
        from absl import logging as absl_logging  # type: ignore[import-not-found]
    except Exception:
        pass
    else:
        # Forzamos a ``absl`` a emitir solo errores para no saturar la consola.
        absl_logging.set_verbosity(absl_logging.ERROR)


# --- PARÁMETROS DEL MODELO ---
# Complejidad del grafo de MediaPipe (0/1/2). En vivo priorizamos la latencia,
# así que el modelo intermedio es suficiente.
MODEL_COMPLEXITY = 1

# Solo necesitamos los puntos clave: la segmentación queda desactivada.
POSE_ENABLE_SEGMENTATION = False
POSE_SMOOTH_SEGMENTATION = False

# Suavizado temporal de MediaPipe entre frames consecutivos de la webcam.
POSE_SMOOTH_LANDMARKS = True

# Entrada de vídeo: habilita el seguimiento entre frames.
POSE_STATIC_IMAGE_MODE = False

# --- ESTILO DEL OVERLAY ---
# Gris del fondo del lienzo (0 = negro).
BG_COLOR = 0

# Confianza mínima (estricta) para dibujar un punto o una conexión.
CONFIDENCE_THRESHOLD = 0.09

LINE_COLOR = "#00ff00"
# Grosor de las líneas del esqueleto en píxeles de referencia.
LINE_THICKNESS = 1.9

DOT_COLOR = "#00ff00"
# Diámetro de los puntos en píxeles de referencia.
DOT_SIZE = 25

TEXT_COLOR = "#F5F5F5"
TEXT_SIZE_PX = 19

# Las etiquetas muestran la coordenada de pantalla multiplicada por este factor.
COORD_SCALE = 0.25

# Separación entre el borde del punto y la etiqueta.
LABEL_GAP = 7
LABEL_PAD_X = 6
LABEL_PAD_Y = 4
LABEL_BORDER = 1

# Rejilla de depuración.
GRID_SPACING = 100
GRID_GRAY = 100
GRID_THICKNESS = 1

# --- ESTADO INICIAL DE LOS INTERRUPTORES ---
DEFAULT_SHOW_LINES = True
# El vídeo de la webcam arranca oculto: el lienzo muestra solo el esqueleto.
DEFAULT_SHOW_VIDEO = False
DEFAULT_SHOW_GRID = False
DEFAULT_FULLSCREEN = False

# Tras cambiar a pantalla completa esperamos un poco antes de leer el nuevo
# tamaño de ventana (milisegundos).
FULLSCREEN_SETTLE_MS = 60

# Ejecuta la inferencia en un hilo aparte para no frenar el bucle de dibujo.
DEFAULT_ASYNC_DETECTION = True


def build_pose_kwargs(
    *,
    static_image_mode: bool | None = None,
    model_complexity: int | None = None,
    min_detection_confidence: float | None = None,
    min_tracking_confidence: float | None = None,
    smooth_landmarks: bool | None = None,
    enable_segmentation: bool | None = None,
) -> dict[str, object]:
    """Configuración estándar para el grafo ``Pose`` de MediaPipe.

    Los valores ``None`` se sustituyen por los predeterminados del módulo para
    que todos los puntos de entrada creen el grafo con los mismos parámetros.
    """

    return {
        "static_image_mode": POSE_STATIC_IMAGE_MODE if static_image_mode is None else static_image_mode,
        "model_complexity": MODEL_COMPLEXITY if model_complexity is None else model_complexity,
        "smooth_landmarks": POSE_SMOOTH_LANDMARKS if smooth_landmarks is None else bool(smooth_landmarks),
        "enable_segmentation": POSE_ENABLE_SEGMENTATION
        if enable_segmentation is None
        else bool(enable_segmentation),
        "smooth_segmentation": POSE_SMOOTH_SEGMENTATION,
        "min_detection_confidence": (
            MIN_DETECTION_CONFIDENCE if min_detection_confidence is None else float(min_detection_confidence)
        ),
        "min_tracking_confidence": (
            MIN_TRACKING_CONFIDENCE if min_tracking_confidence is None else float(min_tracking_confidence)
        ),
    }
