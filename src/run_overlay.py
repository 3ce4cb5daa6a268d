"""Command-line runner for the live pose overlay."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable

import yaml

from src import config
from src.A_capture.webcam import parse_source
from src.config.settings import configure_environment
from src.D_visualization.overlay_styles import OverlayStyle
from src.services.errors import OverlayError

LOGGER = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:  # pragma: no cover - defensive guard
        raise argparse.ArgumentTypeError(f"{value!r} no es un entero válido") from exc
    if number <= 0:
        raise argparse.ArgumentTypeError("El valor debe ser un entero positivo")
    return number


def _unit_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError as exc:  # pragma: no cover - defensive guard
        raise argparse.ArgumentTypeError(f"{value!r} no es un número válido") from exc
    if not 0.0 <= number <= 1.0:
        raise argparse.ArgumentTypeError("El valor debe estar entre 0 y 1")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Muestra en vivo los puntos clave de la pose sobre la imagen de la webcam.",
        epilog="Teclas: h líneas, b vídeo, g rejilla, q/ESC salir. Clic: pantalla completa.",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--camera", type=int, default=None, help="Índice de la cámara (por defecto 0)")
    source.add_argument("--video", default=None, help="Ruta a un archivo de vídeo en lugar de la cámara")
    parser.add_argument("--config", default=None, help="YAML con valores que sobrescriben la configuración")
    parser.add_argument("--width", type=_positive_int, default=None, help="Ancho inicial del lienzo")
    parser.add_argument("--height", type=_positive_int, default=None, help="Alto inicial del lienzo")
    parser.add_argument("--show-video", action="store_true", help="Arranca mostrando la imagen de la webcam")
    parser.add_argument("--hide-lines", action="store_true", help="Arranca sin las líneas del esqueleto")
    parser.add_argument("--grid", action="store_true", help="Arranca mostrando la rejilla")
    parser.add_argument("--fullscreen", action="store_true", help="Arranca a pantalla completa")
    parser.add_argument(
        "--threshold",
        type=_unit_float,
        default=None,
        help="Confianza mínima para dibujar un punto (por defecto 0.09)",
    )
    parser.add_argument(
        "--model-complexity",
        type=int,
        choices=(0, 1, 2),
        default=None,
        help="Complejidad del modelo de MediaPipe",
    )
    parser.add_argument(
        "--sync",
        action="store_true",
        help="Infiere en el mismo hilo que dibuja en vez de en segundo plano",
    )
    parser.add_argument(
        "--max-frames",
        type=_positive_int,
        default=None,
        help="Detiene el visor tras N frames (útil para pruebas de humo)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Muestra mensajes de log detallados durante la ejecución.",
    )
    return parser


def _configure_logging(verbose: bool) -> None:
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(level=level, format="[%(levelname)s] %(name)s: %(message)s")


def build_config(args: argparse.Namespace) -> config.Config:
    """Mezcla valores por defecto, YAML opcional y argumentos de línea de comandos."""

    cfg = config.from_yaml(Path(args.config).expanduser()) if args.config else config.load_default()

    if args.video is not None:
        cfg.capture.source = str(Path(args.video).expanduser())
    elif args.camera is not None:
        cfg.capture.source = int(args.camera)
    else:
        cfg.capture.source = parse_source(cfg.capture.source)

    if args.width is not None:
        cfg.display.canvas_width = int(args.width)
    if args.height is not None:
        cfg.display.canvas_height = int(args.height)
    if args.show_video:
        cfg.display.show_video = True
    if args.hide_lines:
        cfg.display.show_lines = False
    if args.grid:
        cfg.display.show_grid = True
    if args.fullscreen:
        cfg.display.fullscreen = True
    if args.threshold is not None:
        cfg.overlay.confidence_threshold = float(args.threshold)
    if args.model_complexity is not None:
        cfg.pose.model_complexity = int(args.model_complexity)
    if args.sync:
        cfg.pose.async_detection = False
    return cfg


def main(argv: Iterable[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)

    if args.video is not None and not Path(args.video).expanduser().is_file():
        parser.error(f"No se encontró el vídeo: {args.video}")
    if args.config is not None and not Path(args.config).expanduser().is_file():
        parser.error(f"No se encontró el archivo de configuración: {args.config}")

    try:
        cfg = build_config(args)
        # Valida colores y números del YAML antes de abrir la cámara.
        OverlayStyle.from_config(cfg.overlay)
    except (TypeError, ValueError, yaml.YAMLError) as exc:
        parser.error(f"Configuración inválida: {exc}")
    LOGGER.info("CONFIG_SHA1: %s", cfg.fingerprint())

    configure_environment()
    # Importación diferida: el visor solo se carga cuando los argumentos son válidos.
    from src.viewer.app import LiveOverlayApp

    try:
        frames = LiveOverlayApp(cfg).run(max_frames=args.max_frames)
    except OverlayError as exc:
        LOGGER.error("%s", exc)
        return 1
    except KeyboardInterrupt:  # pragma: no cover - interactive exit
        return 0

    LOGGER.info("Frames shown: %d", frames)
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
