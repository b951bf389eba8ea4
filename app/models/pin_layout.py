"""
Pin layout - Where a component's pins sit and how big their pads are.

This module contains no Qt dependencies. Every function is a pure function
of the component's current fields and a grid coordinate; there is no cached
layout state.

Edges and rotation:
    rotation 0:  "top" is row y, "bottom" is row y+h-1, indexed along x.
    rotation 90: "top" is column x+w-1 (right edge), "bottom" is column x
                 (left edge), both indexed along y.

Two position modes:
    Fixed (relative=False): pins sit on their hole's lattice position with
        a constant pad size.
    Strip (relative=True): the active pins of one edge share the full edge
        length evenly, whatever gaps exist between them in the pin list.
        Pads are flush with the outer edge of the body.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from .component import ComponentData
from .geometry import PITCH, cell_rect, grid_to_world

TOP = "top"
BOTTOM = "bottom"

FIXED_PAD_SIZE = 6.0           # Square pad edge in fixed mode (pixels)
STRIP_PAD_DEPTH = PITCH * 0.4  # Pad extent across the edge in strip mode
STRIP_PAD_FILL = 0.8           # Share of the slot width a strip pad covers


@dataclass(frozen=True)
class PinSlot:
    """One pin position on a component edge."""

    side: str
    index: int
    name: str
    gx: int
    gy: int

    @property
    def active(self) -> bool:
        return bool(self.name)


@dataclass(frozen=True)
class PinPlacement:
    """Pixel centre and pad size of a pin in world space."""

    x: float
    y: float
    width: float
    height: float


def _pin_names(component: ComponentData, side: str) -> list[str]:
    return component.pins_top if side == TOP else component.pins_bottom


def _name_at(component: ComponentData, side: str, index: int) -> str:
    names = _pin_names(component, side)
    return names[index] if 0 <= index < len(names) else ""


def slot_at(component: ComponentData, gx: int, gy: int) -> Optional[PinSlot]:
    """
    Find the pin slot at a grid coordinate, active or not.

    Returns None if the coordinate is off the component or inside its body.
    When the two edges coincide (a one-cell-thick component) the top side
    owns the cell.
    """
    if not component.contains_cell(gx, gy):
        return None

    if component.rotate:
        index = gy - component.y
        if gx == component.right:
            side = TOP
        elif gx == component.x:
            side = BOTTOM
        else:
            return None
    else:
        index = gx - component.x
        if gy == component.y:
            side = TOP
        elif gy == component.bottom:
            side = BOTTOM
        else:
            return None

    return PinSlot(side, index, _name_at(component, side, index), gx, gy)


def active_pin_at(component: ComponentData, gx: int, gy: int) -> Optional[PinSlot]:
    """Like slot_at(), but only for named pins. Boards have no pins."""
    if component.is_board:
        return None
    slot = slot_at(component, gx, gy)
    if slot is None or not slot.active:
        return None
    return slot


def slot_cell(component: ComponentData, side: str, index: int) -> tuple[int, int]:
    """Grid coordinate of the slot at *index* on *side*."""
    if component.rotate:
        gx = component.right if side == TOP else component.x
        return (gx, component.y + index)
    gy = component.y if side == TOP else component.bottom
    return (component.x + index, gy)


def active_slots(component: ComponentData, side: str) -> list[PinSlot]:
    """Named slots on one edge, in index order."""
    if component.is_board:
        return []
    slots = []
    for index, name in enumerate(_pin_names(component, side)):
        if name:
            gx, gy = slot_cell(component, side, index)
            slots.append(PinSlot(side, index, name, gx, gy))
    return slots


def iter_active_pins(component: ComponentData) -> Iterator[PinSlot]:
    """
    Yield the pins a wire can attach to: top edge first, then bottom.

    Bottom pins shadowed by the top edge (one-cell-thick components) are
    skipped because their cell resolves to the top slot.
    """
    for side in (TOP, BOTTOM):
        for slot in active_slots(component, side):
            resolved = slot_at(component, slot.gx, slot.gy)
            if resolved is not None and resolved.side == side:
                yield slot


def _strip_placement(component: ComponentData, slot: PinSlot) -> Optional[PinPlacement]:
    actives = [s.index for s in active_slots(component, slot.side)]
    if slot.index not in actives:
        return None

    k = actives.index(slot.index)
    count = len(actives)
    left, top, right, bottom = cell_rect(component.x, component.y, component.w, component.h)

    if component.rotate:
        length = bottom - top
        slot_width = length / count
        cy = top + k * slot_width + slot_width / 2
        if slot.side == TOP:
            cx = right - STRIP_PAD_DEPTH / 2
        else:
            cx = left + STRIP_PAD_DEPTH / 2
        return PinPlacement(cx, cy, STRIP_PAD_DEPTH, slot_width * STRIP_PAD_FILL)

    length = right - left
    slot_width = length / count
    cx = left + k * slot_width + slot_width / 2
    if slot.side == TOP:
        cy = top + STRIP_PAD_DEPTH / 2
    else:
        cy = bottom - STRIP_PAD_DEPTH / 2
    return PinPlacement(cx, cy, slot_width * STRIP_PAD_FILL, STRIP_PAD_DEPTH)


def pin_placement(component: ComponentData, slot: PinSlot) -> PinPlacement:
    """
    Pixel centre and pad size for a slot.

    Strip-mode components spread their active pins along the edge; inactive
    slots and fixed-mode components use the plain lattice position.
    """
    if component.relative and slot.active:
        placement = _strip_placement(component, slot)
        if placement is not None:
            return placement
    x, y = grid_to_world(slot.gx, slot.gy)
    return PinPlacement(x, y, FIXED_PAD_SIZE, FIXED_PAD_SIZE)


def point_position(components: Iterable[ComponentData], gx: int, gy: int) -> tuple[float, float]:
    """
    Pixel position of a grid coordinate as seen by wires.

    The topmost component with a named pin on this cell decides: a
    strip-mode pin moves the point to the pin's spread-out position, any
    other case keeps the lattice position.
    """
    for component in reversed(list(components)):
        slot = active_pin_at(component, gx, gy)
        if slot is not None:
            placement = pin_placement(component, slot)
            return (placement.x, placement.y)
    return grid_to_world(gx, gy)
