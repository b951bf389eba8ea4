"""Tests for models.pin_layout: pin slots, rotation and strip placement."""

import pytest
from models.component import ComponentData
from models.geometry import cell_rect, grid_to_world
from models.pin_layout import (
    BOTTOM,
    FIXED_PAD_SIZE,
    STRIP_PAD_DEPTH,
    STRIP_PAD_FILL,
    TOP,
    active_pin_at,
    iter_active_pins,
    pin_placement,
    point_position,
    slot_at,
)


def make_component(component_id="U1", x=0, y=0, w=4, h=2, **kwargs):
    return ComponentData(component_id=component_id, x=x, y=y, w=w, h=h, **kwargs)


class TestSlots:
    def test_top_edge_slot(self):
        chip = make_component(x=2, y=2, w=4, h=2, pins_top=["A", "", "B"])
        slot = slot_at(chip, 4, 2)
        assert (slot.side, slot.index, slot.name) == (TOP, 2, "B")

    def test_bottom_edge_slot(self):
        chip = make_component(x=2, y=2, w=4, h=3, pins_bottom=["X", "Y"])
        slot = slot_at(chip, 3, 4)
        assert (slot.side, slot.index, slot.name) == (BOTTOM, 1, "Y")

    def test_interior_cell_has_no_slot(self):
        chip = make_component(x=2, y=2, w=4, h=3, pins_top=["A"], pins_bottom=["B"])
        assert slot_at(chip, 3, 3) is None

    def test_off_component(self):
        chip = make_component(x=2, y=2, w=4, h=2)
        assert slot_at(chip, 6, 2) is None

    def test_gap_is_inactive(self):
        chip = make_component(x=2, y=2, w=4, h=2, pins_top=["A", "", "B"])
        assert slot_at(chip, 3, 2) is not None
        assert active_pin_at(chip, 3, 2) is None

    def test_slot_beyond_pin_list_is_inactive(self):
        chip = make_component(x=2, y=2, w=4, h=2, pins_top=["A"])
        assert active_pin_at(chip, 5, 2) is None

    def test_single_row_top_wins(self):
        chip = make_component(x=0, y=0, w=3, h=1, pins_top=["T1", "", ""], pins_bottom=["B1", "B2", ""])
        slot = slot_at(chip, 0, 0)
        assert slot.side == TOP
        # Bottom pin at a cell the top edge owns is shadowed
        assert active_pin_at(chip, 1, 0) is None
        assert [s.name for s in iter_active_pins(chip)] == ["T1"]

    def test_board_has_no_pins(self):
        board = make_component(x=0, y=0, w=4, h=2, pins_top=["A", "B"], is_board=True)
        assert active_pin_at(board, 0, 0) is None
        assert list(iter_active_pins(board)) == []


class TestRotation:
    def test_rotated_top_is_right_edge(self):
        # 2 wide, 4 tall after rotation; top pins run down the right column
        chip = make_component(x=2, y=2, w=2, h=4, pins_top=["A", "B"], rotate=True)
        assert active_pin_at(chip, 3, 2).name == "A"
        assert active_pin_at(chip, 3, 3).name == "B"

    def test_rotated_bottom_is_left_edge(self):
        chip = make_component(x=2, y=2, w=2, h=4, pins_bottom=["", "G"], rotate=True)
        assert active_pin_at(chip, 2, 3).name == "G"
        assert active_pin_at(chip, 3, 3) is None

    def test_rotate_quarter_swaps_size(self):
        chip = make_component(x=2, y=2, w=4, h=2, pins_top=["A", "B"])
        chip.rotate_quarter()
        assert (chip.w, chip.h, chip.rotate) == (2, 4, True)
        # Former top row now runs down the right edge
        assert active_pin_at(chip, 3, 2).name == "A"
        assert active_pin_at(chip, 3, 3).name == "B"
        chip.rotate_quarter()
        assert (chip.w, chip.h, chip.rotate) == (4, 2, False)


class TestPlacement:
    def test_fixed_mode_on_lattice(self):
        chip = make_component(x=2, y=2, w=4, h=2, pins_top=["A"])
        slot = active_pin_at(chip, 2, 2)
        placement = pin_placement(chip, slot)
        assert (placement.x, placement.y) == grid_to_world(2, 2)
        assert placement.width == placement.height == FIXED_PAD_SIZE

    def test_strip_single_pin_centred(self):
        # 10x10 grid, w=2 h=1 at (2, 2), pinsTop ['VCC', ''] in strip mode
        chip = make_component(x=2, y=2, w=2, h=1, pins_top=["VCC", ""], relative=True)
        placement = pin_placement(chip, active_pin_at(chip, 2, 2))
        left, top, right, _ = cell_rect(2, 2, 2, 1)
        assert placement.x == pytest.approx((left + right) / 2)
        assert placement.y == pytest.approx(top + STRIP_PAD_DEPTH / 2)

    def test_strip_ignores_gaps(self):
        chip = make_component(x=0, y=0, w=6, h=2, pins_top=["A", "", "", "", "", "B"], relative=True)
        left, _, right, _ = cell_rect(0, 0, 6, 2)
        a = pin_placement(chip, active_pin_at(chip, 0, 0))
        b = pin_placement(chip, active_pin_at(chip, 5, 0))
        quarter = (right - left) / 4
        assert a.x == pytest.approx(left + quarter)
        assert b.x == pytest.approx(left + 3 * quarter)

    def test_strip_bottom_flush_with_edge(self):
        chip = make_component(x=0, y=0, w=3, h=3, pins_bottom=["G"], relative=True)
        placement = pin_placement(chip, active_pin_at(chip, 0, 2))
        _, _, _, bottom = cell_rect(0, 0, 3, 3)
        assert placement.y == pytest.approx(bottom - STRIP_PAD_DEPTH / 2)

    def test_strip_rotated_runs_vertically(self):
        chip = make_component(x=0, y=0, w=2, h=4, pins_top=["A", "B"], relative=True, rotate=True)
        left, top, right, bottom = cell_rect(0, 0, 2, 4)
        a = pin_placement(chip, active_pin_at(chip, 1, 0))
        b = pin_placement(chip, active_pin_at(chip, 1, 1))
        assert a.x == pytest.approx(right - STRIP_PAD_DEPTH / 2)
        assert a.y == pytest.approx(top + (bottom - top) / 4)
        assert b.y == pytest.approx(top + 3 * (bottom - top) / 4)

    @pytest.mark.parametrize("pins", [["A"], ["A", "B", "C"], ["", "A", "", "B", ""], ["A", "", "", "", "", "", "B"]])
    def test_strip_pads_tile_the_edge(self, pins):
        chip = make_component(x=0, y=0, w=7, h=2, pins_top=pins, relative=True)
        left, _, right, _ = cell_rect(0, 0, 7, 2)
        placements = [pin_placement(chip, slot) for slot in iter_active_pins(chip)]
        slot_width = (right - left) / len(placements)

        assert placements[0].x == pytest.approx(left + slot_width / 2)
        assert placements[-1].x == pytest.approx(right - slot_width / 2)
        for a, b in zip(placements, placements[1:]):
            assert b.x - a.x == pytest.approx(slot_width)
        assert all(p.width == pytest.approx(slot_width * STRIP_PAD_FILL) for p in placements)

    def test_gaps_only_edge_has_no_pads(self):
        chip = make_component(x=0, y=0, w=3, h=2, pins_top=["", ""], relative=True)
        assert list(iter_active_pins(chip)) == []


class TestPointPosition:
    def test_free_hole(self):
        assert point_position([], 4, 5) == grid_to_world(4, 5)

    def test_strip_pin_moves_point(self):
        chip = make_component(x=2, y=2, w=2, h=1, pins_top=["VCC", ""], relative=True)
        left, _, right, _ = cell_rect(2, 2, 2, 1)
        x, _ = point_position([chip], 2, 2)
        assert x == pytest.approx((left + right) / 2)

    def test_fixed_pin_keeps_lattice(self):
        chip = make_component(x=2, y=2, w=2, h=1, pins_top=["VCC"])
        assert point_position([chip], 2, 2) == grid_to_world(2, 2)

    def test_topmost_component_decides(self):
        strip = make_component("U1", x=2, y=2, w=2, h=1, pins_top=["VCC", ""], relative=True)
        fixed = make_component("U2", x=2, y=2, w=1, h=1, pins_top=["P"])
        assert point_position([strip, fixed], 2, 2) == grid_to_world(2, 2)
