"""
InteractionController - Pointer state machine for the board canvas.

This module contains no Qt dependencies. The canvas widget forwards raw
screen coordinates; this controller converts them with the view transform,
runs hit tests and drives the SceneController. Transient state (mode,
drag offset, wire start, pointer position) lives in InteractionState,
apart from both the scene and the view transform.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from models.component import ComponentData
from models.geometry import ViewTransform, board_rect, rect_contains, world_to_grid
from models.hit_testing import HitKind, hit_test, resolve_wire_end
from models.pin_layout import point_position

logger = logging.getLogger(__name__)

# Qt reports wheel rotation in eighths of a degree; one notch is 120 units
WHEEL_NOTCH = 120.0


class InteractionMode(Enum):
    IDLE = "idle"
    PANNING = "panning"
    DRAGGING_COMPONENT = "dragging_component"
    DRAWING_WIRE = "drawing_wire"


@dataclass
class InteractionState:
    """Transient gesture state; never serialized."""

    mode: InteractionMode = InteractionMode.IDLE
    drag_component: Optional[ComponentData] = None
    drag_offset: tuple[int, int] = (0, 0)
    wire_start: Optional[tuple[int, int]] = None
    last_screen: tuple[float, float] = (0.0, 0.0)
    pointer_world: tuple[float, float] = (0.0, 0.0)

    def reset(self) -> None:
        self.mode = InteractionMode.IDLE
        self.drag_component = None
        self.drag_offset = (0, 0)
        self.wire_start = None


class InteractionController:
    """
    Turns pointer events into scene operations.

    Each method returns True when the canvas should repaint.
    """

    def __init__(self, scene_ctrl, view: Optional[ViewTransform] = None):
        self.scene_ctrl = scene_ctrl
        self.view = view or ViewTransform()
        self.state = InteractionState()

    @property
    def mode(self) -> InteractionMode:
        return self.state.mode

    def mouse_down(self, sx: float, sy: float) -> bool:
        wx, wy = self.view.screen_to_world(sx, sy)
        self.state.last_screen = (sx, sy)
        self.state.pointer_world = (wx, wy)
        scene = self.scene_ctrl.model

        hit = hit_test(scene, wx, wy)
        if hit.kind == HitKind.COMPONENT:
            component = hit.component
            self.scene_ctrl.select(component)
            gx, gy = world_to_grid(wx, wy)
            self.state.mode = InteractionMode.DRAGGING_COMPONENT
            self.state.drag_component = component
            self.state.drag_offset = (gx - component.x, gy - component.y)
            self.scene_ctrl.begin_drag(component)
        elif hit.kind in (HitKind.PIN, HitKind.HOLE):
            self.scene_ctrl.select(None)
            self.state.mode = InteractionMode.DRAWING_WIRE
            self.state.wire_start = hit.grid
        elif hit.kind == HitKind.WIRE:
            self.scene_ctrl.select(hit.wire)
        else:
            self.scene_ctrl.select(None)
            board = board_rect(scene.grid_width, scene.grid_height)
            if not rect_contains(board, wx, wy):
                self.state.mode = InteractionMode.PANNING
        return True

    def mouse_move(self, sx: float, sy: float) -> bool:
        wx, wy = self.view.screen_to_world(sx, sy)
        last_sx, last_sy = self.state.last_screen
        self.state.last_screen = (sx, sy)
        self.state.pointer_world = (wx, wy)
        mode = self.state.mode

        if mode == InteractionMode.DRAGGING_COMPONENT:
            gx, gy = world_to_grid(wx, wy)
            ox, oy = self.state.drag_offset
            return self.scene_ctrl.drag_to(gx - ox, gy - oy)
        if mode == InteractionMode.PANNING:
            self.view.pan_by(sx - last_sx, sy - last_sy)
            return True
        return mode == InteractionMode.DRAWING_WIRE

    def mouse_up(self, sx: float, sy: float) -> bool:
        wx, wy = self.view.screen_to_world(sx, sy)
        self.state.pointer_world = (wx, wy)
        mode = self.state.mode

        if mode == InteractionMode.DRAGGING_COMPONENT:
            self.scene_ctrl.end_drag()
        elif mode == InteractionMode.DRAWING_WIRE:
            start = self.state.wire_start
            end = resolve_wire_end(self.scene_ctrl.model, wx, wy)
            if start is not None and end is not None and end != start:
                self.scene_ctrl.add_wire(start, end)
            else:
                logger.debug("Wire from %s released without a new endpoint", start)

        self.state.reset()
        return mode != InteractionMode.IDLE

    def mouse_leave(self) -> bool:
        """
        The pointer left the canvas.

        A wire being drawn is dropped and panning stops. A component drag
        keeps its live position and is recorded as one undoable move.
        """
        mode = self.state.mode
        if mode == InteractionMode.DRAGGING_COMPONENT:
            self.scene_ctrl.end_drag()
        self.state.reset()
        return mode != InteractionMode.IDLE

    def wheel(self, delta: float) -> bool:
        """Zoom by a wheel rotation given in Qt angle-delta units."""
        if delta == 0:
            return False
        self.view.zoom(delta / WHEEL_NOTCH)
        return True

    def preview_segment(self) -> Optional[tuple[float, float, float, float]]:
        """
        World-space line of the wire being drawn, or None.

        The free end snaps like a release would; with nothing in range it
        follows the pointer.
        """
        if self.state.mode != InteractionMode.DRAWING_WIRE or self.state.wire_start is None:
            return None
        scene = self.scene_ctrl.model
        x1, y1 = point_position(scene.components, *self.state.wire_start)
        wx, wy = self.state.pointer_world
        end = resolve_wire_end(scene, wx, wy)
        if end is None:
            x2, y2 = wx, wy
        else:
            x2, y2 = point_position(scene.components, *end)
        return (x1, y1, x2, y2)

    def pointer_grid(self) -> tuple[int, int]:
        """Grid coordinate under the pointer (for the status bar)."""
        return world_to_grid(*self.state.pointer_world)

    def reset_view(self) -> None:
        self.view.reset()

