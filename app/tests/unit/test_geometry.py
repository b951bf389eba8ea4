"""Tests for models.geometry: coordinate transforms and the view transform."""

import pytest
from models.geometry import (
    BOARD_OFFSET,
    PITCH,
    ZOOM_FACTOR,
    ZOOM_MAX,
    ZOOM_MIN,
    ViewTransform,
    board_rect,
    cell_rect,
    grid_to_world,
    point_to_segment_distance,
    rect_contains,
    round_half_up,
    world_to_grid,
)


class TestGridWorld:
    def test_origin_hole(self):
        assert grid_to_world(0, 0) == (100, 100)

    def test_pitch_spacing(self):
        assert grid_to_world(3, 2) == (100 + 3 * PITCH, 100 + 2 * PITCH)

    def test_world_to_grid_exact(self):
        assert world_to_grid(160, 140) == (3, 2)

    def test_world_to_grid_rounds_to_nearest(self):
        assert world_to_grid(108, 111) == (0, 1)

    def test_halfway_rounds_up(self):
        # 110 is exactly half a pitch from hole 0 and hole 1
        assert world_to_grid(110, 110) == (1, 1)

    def test_negative_half_rounds_up(self):
        assert round_half_up(-0.5) == 0
        assert round_half_up(-1.5) == -1

    def test_outside_board_still_maps(self):
        assert world_to_grid(BOARD_OFFSET[0] - 2 * PITCH, 0) == (-2, -5)

    @pytest.mark.parametrize("gx,gy", [(0, 0), (5, 7), (-3, 12)])
    def test_roundtrip(self, gx, gy):
        assert world_to_grid(*grid_to_world(gx, gy)) == (gx, gy)


class TestRects:
    def test_cell_rect_extends_half_pitch(self):
        assert cell_rect(0, 0, 1, 1) == (90, 90, 110, 110)

    def test_cell_rect_block(self):
        left, top, right, bottom = cell_rect(2, 2, 4, 2)
        assert (right - left, bottom - top) == (4 * PITCH, 2 * PITCH)

    def test_board_rect_padding(self):
        # padding = pitch / 2 + 10 = 20
        assert board_rect(10, 10) == (80, 80, 300, 300)

    def test_rect_contains_inclusive(self):
        rect = (0, 0, 10, 10)
        assert rect_contains(rect, 10, 0)
        assert not rect_contains(rect, 10.1, 5)


class TestSegmentDistance:
    def test_perpendicular(self):
        assert point_to_segment_distance(5, 3, 0, 0, 10, 0) == pytest.approx(3)

    def test_beyond_end_clamps(self):
        assert point_to_segment_distance(13, 4, 0, 0, 10, 0) == pytest.approx(5)

    def test_zero_length_segment(self):
        assert point_to_segment_distance(3, 4, 0, 0, 0, 0) == pytest.approx(5)


class TestViewTransform:
    def test_identity(self):
        view = ViewTransform()
        assert view.screen_to_world(123, 45) == (123, 45)

    def test_screen_to_world_formula(self):
        view = ViewTransform(scale=2.0, pan_x=10, pan_y=20)
        assert view.screen_to_world(110, 220) == (50, 100)

    def test_world_to_screen_inverse(self):
        view = ViewTransform(scale=1.5, pan_x=-30, pan_y=12)
        sx, sy = view.world_to_screen(80, 40)
        assert view.screen_to_world(sx, sy) == pytest.approx((80, 40))

    def test_zoom_in_one_notch(self):
        view = ViewTransform()
        view.zoom(1)
        assert view.scale == pytest.approx(ZOOM_FACTOR)

    def test_zoom_clamped_high(self):
        view = ViewTransform()
        view.zoom(100)
        assert view.scale == ZOOM_MAX

    def test_zoom_clamped_low(self):
        view = ViewTransform()
        view.zoom(-100)
        assert view.scale == ZOOM_MIN

    def test_zoom_keeps_pan(self):
        view = ViewTransform(pan_x=40, pan_y=-10)
        view.zoom(2)
        assert (view.pan_x, view.pan_y) == (40, -10)

    def test_pan_and_reset(self):
        view = ViewTransform()
        view.pan_by(15, -5)
        view.set_scale(3)
        assert (view.pan_x, view.pan_y, view.scale) == (15, -5, 3)
        view.reset()
        assert (view.pan_x, view.pan_y, view.scale) == (0, 0, 1.0)
