import numpy as np
import pytest

from src.D_visualization.overlay_drawing import (
    draw_coordinate_labels,
    draw_grid,
    draw_keypoints,
    draw_skeleton,
    draw_video_background,
    font_scale_for_height,
)
from src.D_visualization.overlay_geometry import cover_fit
from src.D_visualization.overlay_styles import OverlayStyle

GREEN = (0, 255, 0)


@pytest.fixture
def identity_fit():
    return cover_fit(640, 480, 640, 480)


def test_keypoint_is_drawn_at_the_mirrored_position(black_canvas, pose_factory, identity_fit) -> None:
    canvas = black_canvas()
    pose = pose_factory((100.0, 200.0, 0.9))

    drawn = draw_keypoints(canvas, [pose], identity_fit, OverlayStyle(), 1.0)

    assert drawn == 1
    assert tuple(canvas[200, 540]) == GREEN
    assert tuple(canvas[200, 100]) == (0, 0, 0)


def test_low_confidence_keypoints_are_skipped(black_canvas, pose_factory, identity_fit) -> None:
    canvas = black_canvas()
    pose = pose_factory((100.0, 200.0, 0.05), (300.0, 300.0, 0.09))

    assert draw_keypoints(canvas, [pose], identity_fit, OverlayStyle(), 1.0) == 0
    assert not canvas.any()


def test_dot_diameter_follows_ui_scale(black_canvas, pose_factory, identity_fit) -> None:
    canvas = black_canvas()
    pose = pose_factory((320.0, 240.0, 1.0))

    draw_keypoints(canvas, [pose], identity_fit, OverlayStyle(), 0.5)

    # Diámetro 25 * 0.5 -> radio 6.25 -> 6 píxeles.
    assert tuple(canvas[240, 320 + 5]) == GREEN
    assert tuple(canvas[240, 320 + 9]) == (0, 0, 0)


def test_skeleton_line_requires_both_endpoints(black_canvas, pose_factory, identity_fit) -> None:
    style = OverlayStyle()
    canvas = black_canvas()
    pose = pose_factory((100.0, 100.0, 0.9), (300.0, 100.0, 0.9), (300.0, 400.0, 0.01))

    drawn = draw_skeleton(canvas, [pose], [(0, 1), (1, 2)], identity_fit, style, 1.0)

    assert drawn == 1
    # La línea (100..300, 100) aparece reflejada en x = 340..540.
    assert np.any(canvas[97:104, 440, 1] > 0)
    assert not np.any(canvas[150:380, 340, 1] > 0)


def test_skeleton_ignores_connections_outside_the_pose(black_canvas, pose_factory, identity_fit) -> None:
    canvas = black_canvas()
    pose = pose_factory((100.0, 100.0, 0.9))

    assert draw_skeleton(canvas, [pose], [(0, 99)], identity_fit, OverlayStyle(), 1.0) == 0
    assert not canvas.any()


def test_grid_is_anchored_to_the_mirrored_origin(black_canvas) -> None:
    canvas = black_canvas(300, 200)

    draw_grid(canvas, OverlayStyle(), 1.0)

    gray = (100, 100, 100)
    assert tuple(canvas[50, 200]) == gray
    assert tuple(canvas[50, 100]) == gray
    assert tuple(canvas[100, 50]) == gray
    assert tuple(canvas[50, 150]) == (0, 0, 0)


def test_video_background_is_mirrored() -> None:
    frame = np.zeros((2, 4, 3), dtype=np.uint8)
    frame[:, :2] = (0, 0, 255)
    frame[:, 2:] = (255, 0, 0)
    canvas = np.zeros((2, 4, 3), dtype=np.uint8)

    draw_video_background(canvas, frame, cover_fit(4, 2, 4, 2))

    assert (canvas[:, :2] == (255, 0, 0)).all()
    assert (canvas[:, 2:] == (0, 0, 255)).all()


def test_video_background_covers_the_whole_canvas() -> None:
    frame = np.full((48, 64, 3), 255, dtype=np.uint8)
    canvas = np.zeros((180, 320, 3), dtype=np.uint8)

    draw_video_background(canvas, frame, cover_fit(320, 180, 64, 48))

    assert canvas.min() == 255


def test_coordinate_labels_use_mirrored_screen_coordinates(black_canvas, pose_factory, identity_fit) -> None:
    canvas = black_canvas()
    pose = pose_factory((100.0, 200.0, 0.9), (10.0, 10.0, 0.0))

    labels = draw_coordinate_labels(canvas, [pose], identity_fit, OverlayStyle(), 1.0)

    assert labels == ["135, 50"]
    # Borde izquierdo del recuadro: 540 + (25 * 0.6 + 7) - 6 / 2 = 559.
    assert tuple(canvas[200, 559]) == (245, 245, 245)


def test_font_scale_grows_with_pixel_size() -> None:
    small = font_scale_for_height(10)
    large = font_scale_for_height(40)

    assert small > 0
    assert large == pytest.approx(small * 4, rel=1e-6)
