"""
Render order - Draw order and export bounds for the board renderer.

This module contains no Qt dependencies; the renderer in GUI.board_renderer
follows the order given here, which keeps it deterministic and testable.
"""

from .component import ComponentData
from .geometry import board_rect, cell_rect, expand_rect, rect_union
from .pin_layout import point_position
from .scene import SceneModel
from .wire import WIRE_BACK, WireData

EXPORT_BORDER = 20.0    # Added around the board backing in exported images
EXPORT_PADDING = 10.0   # Added around components and wires that stick out
WIRE_WIDTH = 3.0


def ordered_wires(scene: SceneModel) -> list[WireData]:
    """Back wires first, then front wires; insertion order within each."""
    back = [w for w in scene.wires if w.wire_type == WIRE_BACK]
    front = [w for w in scene.wires if w.wire_type != WIRE_BACK]
    return back + front


def ordered_components(scene: SceneModel) -> list[ComponentData]:
    """Board substrates first, then ordinary components; insertion order within each."""
    boards = [c for c in scene.components if c.is_board]
    parts = [c for c in scene.components if not c.is_board]
    return boards + parts


def wire_segment(scene: SceneModel, wire: WireData) -> tuple[float, float, float, float]:
    """World-space segment (x1, y1, x2, y2) of a wire, honoring strip pins."""
    x1, y1 = point_position(scene.components, wire.x1, wire.y1)
    x2, y2 = point_position(scene.components, wire.x2, wire.y2)
    return (x1, y1, x2, y2)


def content_bounds(scene: SceneModel) -> tuple[float, float, float, float]:
    """
    World rectangle (left, top, right, bottom) an image export covers.

    The board backing plus a border, grown to include every component and
    wire that extends past it.
    """
    bounds = expand_rect(board_rect(scene.grid_width, scene.grid_height), EXPORT_BORDER)
    for component in scene.components:
        rect = cell_rect(component.x, component.y, component.w, component.h)
        bounds = rect_union(bounds, expand_rect(rect, EXPORT_PADDING))
    for wire in scene.wires:
        x1, y1, x2, y2 = wire_segment(scene, wire)
        rect = (min(x1, x2), min(y1, y2), max(x1, x2), max(y1, y2))
        bounds = rect_union(bounds, expand_rect(rect, EXPORT_PADDING + WIRE_WIDTH / 2))
    return bounds
