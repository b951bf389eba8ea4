"""
Hit testing - Resolve a world-space pointer position to a scene entity.

This module contains no Qt dependencies. The priority order on pointer
down is: component body, pin of that component, grid hole, wire, nothing.
Scans run topmost-first, so the most recently added entity wins ties.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .component import ComponentData
from .geometry import (
    PITCH,
    cell_rect,
    distance,
    grid_to_world,
    point_to_segment_distance,
    rect_contains,
    world_to_grid,
)
from .pin_layout import PinSlot, active_pin_at, iter_active_pins, pin_placement, point_position
from .scene import SceneModel
from .wire import WireData

# Click/selection radius settings (in world pixels)
PIN_HIT_RADIUS = 8.0            # Pin inside a clicked component starts a wire
HOLE_SNAP_RADIUS = PITCH * 0.4  # Pointer-down snapping to a free hole
WIRE_HIT_THRESHOLD = 10.0       # Distance to a wire segment that selects it
RELEASE_SNAP_RADIUS = 20.0      # Pin/hole search when a wire is released


class HitKind(Enum):
    COMPONENT = "component"
    PIN = "pin"
    HOLE = "hole"
    WIRE = "wire"
    NONE = "none"


@dataclass(frozen=True, eq=False)
class HitResult:
    """
    Outcome of a pointer-down hit test.

    ``grid`` is set for PIN and HOLE hits (the cell a wire starts from);
    ``component`` for COMPONENT and PIN hits; ``wire`` for WIRE hits.
    """

    kind: HitKind
    component: Optional[ComponentData] = None
    wire: Optional[WireData] = None
    grid: Optional[tuple[int, int]] = None
    pin: Optional[PinSlot] = None


MISS = HitResult(HitKind.NONE)


def hit_order(components: list[ComponentData]) -> list[ComponentData]:
    """
    Components topmost first.

    Board substrates render beneath everything else, so ordinary
    components are tried first; each group runs in reverse insertion order.
    """
    parts = [c for c in reversed(components) if not c.is_board]
    boards = [c for c in reversed(components) if c.is_board]
    return parts + boards


def _near_own_hole(component: ComponentData, wx: float, wy: float) -> bool:
    gx, gy = world_to_grid(wx, wy)
    if not component.contains_cell(gx, gy):
        return False
    hx, hy = grid_to_world(gx, gy)
    return distance(wx, wy, hx, hy) <= HOLE_SNAP_RADIUS


def component_at(scene: SceneModel, wx: float, wy: float) -> Optional[ComponentData]:
    """
    Topmost component whose body contains the point.

    The body covers half a pitch around the outer holes. On a board
    substrate the area right around its holes is left to hole hits so
    wires can be started on it.
    """
    for component in hit_order(scene.components):
        rect = cell_rect(component.x, component.y, component.w, component.h)
        if not rect_contains(rect, wx, wy):
            continue
        if component.is_board and _near_own_hole(component, wx, wy):
            continue
        return component
    return None


def nearest_pin(component: ComponentData, wx: float, wy: float,
                radius: float = PIN_HIT_RADIUS) -> Optional[PinSlot]:
    """Closest connectable pin of *component* within *radius*."""
    best = None
    best_dist = radius
    for slot in iter_active_pins(component):
        placement = pin_placement(component, slot)
        d = distance(wx, wy, placement.x, placement.y)
        if d <= best_dist and (best is None or d < best_dist):
            best = slot
            best_dist = d
    return best


def nearest_hole(wx: float, wy: float, radius: float = HOLE_SNAP_RADIUS) -> Optional[tuple[int, int]]:
    """Nearest lattice point within *radius*, or None."""
    gx, gy = world_to_grid(wx, wy)
    hx, hy = grid_to_world(gx, gy)
    if distance(wx, wy, hx, hy) <= radius:
        return (gx, gy)
    return None


def hole_on_wire(scene: SceneModel, gx: int, gy: int) -> bool:
    """Check whether a hole coincides with an endpoint or lies on a wire."""
    return any(wire.contains_point(gx, gy) for wire in scene.wires)


def hole_on_substrate(scene: SceneModel, gx: int, gy: int) -> bool:
    return any(c.is_board and c.contains_cell(gx, gy) for c in scene.components)


def can_start_wire_at(scene: SceneModel, gx: int, gy: int) -> bool:
    """
    Free holes only start wires on the board, on a board substrate, or on
    an existing wire (so wires running off the board can be extended).
    """
    return (scene.in_grid(gx, gy)
            or hole_on_substrate(scene, gx, gy)
            or hole_on_wire(scene, gx, gy))


def is_blocked_cell(scene: SceneModel, gx: int, gy: int) -> bool:
    """
    Check whether a cell is covered by a component body without being one
    of its pins. Wire endpoints may not land on such cells.
    """
    for component in hit_order(scene.components):
        if component.is_board or not component.contains_cell(gx, gy):
            continue
        return active_pin_at(component, gx, gy) is None
    return False


def wire_at(scene: SceneModel, wx: float, wy: float,
            threshold: float = WIRE_HIT_THRESHOLD) -> Optional[WireData]:
    """Nearest wire within *threshold*; most recently added wins ties."""
    best = None
    best_dist = threshold
    for wire in reversed(scene.wires):
        x1, y1 = point_position(scene.components, wire.x1, wire.y1)
        x2, y2 = point_position(scene.components, wire.x2, wire.y2)
        d = point_to_segment_distance(wx, wy, x1, y1, x2, y2)
        if d < best_dist:
            best = wire
            best_dist = d
    return best


def hit_test(scene: SceneModel, wx: float, wy: float) -> HitResult:
    """Resolve a pointer-down position using the fixed priority order."""
    component = component_at(scene, wx, wy)
    if component is not None:
        slot = nearest_pin(component, wx, wy)
        if slot is not None:
            return HitResult(HitKind.PIN, component=component, grid=(slot.gx, slot.gy), pin=slot)
        return HitResult(HitKind.COMPONENT, component=component)

    hole = nearest_hole(wx, wy)
    if hole is not None and can_start_wire_at(scene, *hole):
        return HitResult(HitKind.HOLE, grid=hole)

    wire = wire_at(scene, wx, wy)
    if wire is not None:
        return HitResult(HitKind.WIRE, wire=wire)

    return MISS


def resolve_wire_end(scene: SceneModel, wx: float, wy: float,
                     radius: float = RELEASE_SNAP_RADIUS) -> Optional[tuple[int, int]]:
    """
    Grid coordinate a wire released at (wx, wy) connects to.

    Pins of any component within *radius* win over holes; a hole is only
    accepted if no component body blocks it.
    """
    best = None
    best_dist = radius
    for component in hit_order(scene.components):
        slot = nearest_pin(component, wx, wy, radius)
        if slot is None:
            continue
        placement = pin_placement(component, slot)
        d = distance(wx, wy, placement.x, placement.y)
        if best is None or d < best_dist:
            best = (slot.gx, slot.gy)
            best_dist = d
    if best is not None:
        return best

    hole = nearest_hole(wx, wy, radius)
    if hole is not None and not is_blocked_cell(scene, *hole):
        return hole
    return None
