"""外接矩形の算出（solve_arc_rect）と弧のポリライン化のテスト。"""

from __future__ import annotations

import numpy as np
import pytest

from ringchart.core.geometry import Padding, RectF, arc_polyline, solve_arc_rect


def test_solve_arc_rect_centers_square_and_insets_half_stroke() -> None:
    rect = solve_arc_rect(200, 100, Padding(), 10)

    assert rect == RectF(left=55.0, top=5.0, right=145.0, bottom=95.0)
    assert rect.center == (100.0, 50.0)
    assert rect.width == pytest.approx(90.0)
    assert rect.height == pytest.approx(90.0)


def test_solve_arc_rect_shifts_center_by_asymmetric_padding() -> None:
    rect = solve_arc_rect(200, 100, Padding(left=10, right=30), 4)

    assert rect == RectF(left=42.0, top=2.0, right=138.0, bottom=98.0)


def test_solve_arc_rect_uses_thinner_stroke_for_inset() -> None:
    rect = solve_arc_rect(100, 100, Padding(), 10, background_stroke_width=4)

    assert rect == RectF(left=2.0, top=2.0, right=98.0, bottom=98.0)


@pytest.mark.parametrize(
    ("width", "height", "padding"),
    [
        (10, 100, Padding(left=5, right=5)),
        (100, 10, Padding(top=8, bottom=3)),
        (0, 0, Padding()),
    ],
)
def test_solve_arc_rect_returns_none_without_drawable_area(width, height, padding) -> None:
    assert solve_arc_rect(width, height, padding, 2) is None


def test_solve_arc_rect_returns_none_when_stroke_fills_the_square() -> None:
    assert solve_arc_rect(10, 10, Padding(), 10) is None


@pytest.mark.parametrize("stroke", [0.0, -1.0])
def test_solve_arc_rect_rejects_non_positive_stroke(stroke: float) -> None:
    with pytest.raises(ValueError):
        solve_arc_rect(100, 100, Padding(), stroke)
    with pytest.raises(ValueError):
        solve_arc_rect(100, 100, Padding(), 4, background_stroke_width=stroke)


def test_arc_polyline_runs_clockwise_in_screen_coordinates() -> None:
    rect = RectF(0.0, 0.0, 100.0, 100.0)

    polyline = arc_polyline(rect, 0.0, 90.0, segments_per_turn=4)

    assert polyline.dtype == np.float32
    np.testing.assert_allclose(polyline, [[100.0, 50.0], [50.0, 100.0]], atol=1e-4)


def test_arc_polyline_respects_start_angle() -> None:
    rect = RectF(0.0, 0.0, 100.0, 100.0)

    polyline = arc_polyline(rect, 270.0, 90.0, segments_per_turn=360)

    np.testing.assert_allclose(polyline[0], [50.0, 0.0], atol=1e-4)
    np.testing.assert_allclose(polyline[-1], [100.0, 50.0], atol=1e-4)
    assert polyline.shape == (91, 2)


def test_arc_polyline_is_empty_for_zero_sweep() -> None:
    polyline = arc_polyline(RectF(0.0, 0.0, 10.0, 10.0), 45.0, 0.0)

    assert polyline.shape == (0, 2)


def test_arc_polyline_clamps_sweep_to_one_turn() -> None:
    rect = RectF(0.0, 0.0, 10.0, 10.0)

    full = arc_polyline(rect, 0.0, 360.0)
    over = arc_polyline(rect, 0.0, 720.0)

    np.testing.assert_array_equal(full, over)
    np.testing.assert_allclose(full[0], full[-1], atol=1e-4)
