"""Constantes globales de la aplicación, tamaños de referencia y umbrales del modelo."""
# --- CONFIGURACIÓN GENERAL ---
APP_NAME = "POSE OVERLAY"
WINDOW_NAME = APP_NAME

# --- ESCALADO DE LA INTERFAZ ---
# Resolución de referencia sobre la que se diseñaron tamaños de punto, texto y
# rejilla; el factor de escala final es ``min(ancho / REF_WIDTH, alto / REF_HEIGHT)``.
REF_WIDTH = 1920
REF_HEIGHT = 1080

# Tamaño intrínseco supuesto del vídeo mientras la cámara no informa el real.
DEFAULT_VIDEO_WIDTH = 640
DEFAULT_VIDEO_HEIGHT = 480

# Lienzo inicial de la ventana antes de conocer su tamaño real.
DEFAULT_CANVAS_WIDTH = 1280
DEFAULT_CANVAS_HEIGHT = 720

# --- CONSTANTES DEL MODELO ---
MIN_DETECTION_CONFIDENCE = 0.5
MIN_TRACKING_CONFIDENCE = 0.5
