"""
SceneController - Orchestrates every mutation of the board diagram.

This module contains no Qt dependencies. It owns the SceneModel, the
selection and the snapshot history, and notifies views of changes through
an observer pattern. Every mutating operation records one snapshot of the
scene as it was before the change.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from models.component import DEFAULT_ANCHOR, ComponentData, parse_pin_list
from models.entity import is_component
from models.hit_testing import is_blocked_cell
from models.pin_layout import active_pin_at
from models.scene import SceneModel
from models.wire import DEFAULT_WIRE_COLOR, WIRE_FRONT, WIRE_TYPES, WireData

from controllers.file_controller import validate_library_data, validate_scene_data
from controllers.history_manager import HistoryManager

logger = logging.getLogger(__name__)

# Spacing used when laying out an imported component library
LIBRARY_COLUMN_GAP = 2
LIBRARY_ROW_GAP = 3

Entity = Union[ComponentData, WireData]
PinsArg = Union[str, list[str], None]


def _coerce_pins(pins: PinsArg) -> list[str]:
    if pins is None:
        return []
    if isinstance(pins, str):
        return parse_pin_list(pins)
    return [str(p) for p in pins]


@dataclass
class DragSession:
    """A component drag in progress and the scene as it was when it began."""

    component: ComponentData
    start_x: int
    start_y: int
    snapshot: str


class SceneController:
    """
    Controller for board diagram operations.

    Manages the SceneModel and notifies registered observers when
    the model changes. Views register callbacks to stay in sync.

    Observer events:
        board_resized (tuple[int, int]) - The grid size changed
        component_added (ComponentData) - A new component was added
        component_updated (ComponentData) - A component's fields changed
        component_removed (ComponentData) - A component was removed
        component_moved (ComponentData) - A component moved during a drag
        wire_added (WireData) - A new wire was added
        wire_removed (WireData) - A wire was removed
        scene_cleared (None) - All components and wires were removed
        scene_loaded (None) - The scene was replaced (load, undo, redo)
        library_imported (list[ComponentData]) - Library components were added
        selection_changed (ComponentData | WireData | None) - Selection changed
        history_changed (None) - Undo/redo availability may have changed
        wire_style_changed (tuple[str, str]) - Drawing color or type changed
    """

    def __init__(self, model: Optional[SceneModel] = None,
                 history: Optional[HistoryManager] = None):
        self.model = model or SceneModel()
        self.history = history or HistoryManager()
        self._observers: list[Callable[[str, Any], None]] = []

        self.selection: Optional[Entity] = None
        # Called with the selected component, or None, on every selection change
        self.on_selection_changed: Optional[Callable[[Optional[ComponentData]], None]] = None

        self.wire_color = DEFAULT_WIRE_COLOR
        self.wire_type = WIRE_FRONT

        self._id_counter = 0
        self._drag: Optional[DragSession] = None
        self._assign_missing_ids()

    def add_observer(self, callback: Callable[[str, Any], None]) -> None:
        """Register a callback for model change events."""
        if callback not in self._observers:
            self._observers.append(callback)

    def remove_observer(self, callback: Callable[[str, Any], None]) -> None:
        """Unregister a previously registered callback."""
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify(self, event: str, data: Any) -> None:
        """Notify all observers of a model change."""
        for observer in self._observers:
            try:
                observer(event, data)
            except (TypeError, AttributeError, RuntimeError) as e:
                logger.error("Error notifying observer: %s", e)

    # --- Identity ---

    def _new_component_id(self) -> str:
        """
        Next unused component id.

        The counter only moves forward, so ids of deleted components are
        never handed out again.
        """
        existing = self.model.component_ids()
        while True:
            self._id_counter += 1
            candidate = f"U{self._id_counter}"
            if candidate not in existing:
                return candidate

    def _assign_missing_ids(self) -> None:
        for component in self.model.components:
            if not component.component_id:
                component.component_id = self._new_component_id()

    # --- History ---

    def serialize(self) -> str:
        """Serialize the scene to a JSON string (the saved file format)."""
        return json.dumps(self.model.to_dict(), indent=2)

    def _record(self) -> None:
        """
        Push the pre-mutation scene onto the undo stack.

        An open drag is finished first so the gesture keeps its own entry.
        """
        self.end_drag()
        self.history.push(self.serialize())
        self._notify("history_changed", None)

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    def undo(self) -> bool:
        """
        Restore the scene before the last mutation.

        Returns:
            True if an action was undone, False if there was nothing to undo
        """
        self.end_drag()
        snapshot = self.history.undo(self.serialize())
        if snapshot is None:
            return False
        self.load_scene(snapshot, reset_history=False)
        self._notify("history_changed", None)
        return True

    def redo(self) -> bool:
        """
        Re-apply the last undone mutation.

        Returns:
            True if an action was redone, False if there was nothing to redo
        """
        self.end_drag()
        snapshot = self.history.redo(self.serialize())
        if snapshot is None:
            return False
        self.load_scene(snapshot, reset_history=False)
        self._notify("history_changed", None)
        return True

    # --- Loading ---

    def load_scene(self, text: str, reset_history: bool = True) -> bool:
        """
        Replace the live scene with a serialized one.

        Undo and redo reuse this with reset_history=False; loading a
        document clears both stacks.

        Returns:
            True on success. On malformed input nothing changes and False
            is returned.
        """
        try:
            data = json.loads(text)
            validate_scene_data(data)
            new_model = SceneModel.from_dict(data)
        except (json.JSONDecodeError, ValueError, TypeError, KeyError) as e:
            logger.warning("Failed to load scene: %s", e)
            return False

        self._drag = None
        self.model.replace_with(new_model)
        self._assign_missing_ids()
        if reset_history:
            self.history.clear()
            self._notify("history_changed", None)
        self.select(None)
        self._notify("scene_loaded", None)
        return True

    def new_scene(self) -> None:
        """Replace the scene with an empty one of the same board size."""
        self._drag = None
        self.model.replace_with(SceneModel(self.model.grid_width, self.model.grid_height))
        self.history.clear()
        self._notify("history_changed", None)
        self.select(None)
        self._notify("scene_loaded", None)

    # --- Selection ---

    def select(self, entity: Optional[Entity]) -> None:
        """
        Select a component or wire, or clear the selection with None.

        Clearing an already empty selection is not a change.
        """
        if entity is None and self.selection is None:
            return
        self.selection = entity
        self._notify("selection_changed", entity)
        self._fire_selection_callback()

    def _fire_selection_callback(self) -> None:
        if self.on_selection_changed is not None:
            self.on_selection_changed(self.selected_component)

    @property
    def selected_component(self) -> Optional[ComponentData]:
        return self.selection if is_component(self.selection) else None

    # --- Drawing settings ---

    def set_wire_color(self, color: str) -> None:
        """Set the color used for newly drawn wires."""
        self.wire_color = color
        self._notify("wire_style_changed", (self.wire_color, self.wire_type))

    def set_wire_type(self, wire_type: str) -> bool:
        """Set 'front' or 'back' for newly drawn wires."""
        if wire_type not in WIRE_TYPES:
            logger.warning("Ignoring unknown wire type %r", wire_type)
            return False
        self.wire_type = wire_type
        self._notify("wire_style_changed", (self.wire_color, self.wire_type))
        return True

    # --- Board operations ---

    def resize_board(self, width: int, height: int) -> bool:
        """Change the grid size. Non-positive sizes are rejected."""
        if width <= 0 or height <= 0:
            logger.warning("Ignoring invalid board size %sx%s", width, height)
            return False
        self._record()
        self.model.resize(width, height)
        logger.debug("Board resized to %dx%d", width, height)
        self._notify("board_resized", (width, height))
        return True

    def clear_all(self) -> None:
        """Remove every component and wire."""
        self._record()
        self.model.clear()
        self.select(None)
        self._notify("scene_cleared", None)

    # --- Component operations ---

    def add_component(self, w: int, h: int, label: str = "",
                      pins_top: PinsArg = None, pins_bottom: PinsArg = None,
                      relative: bool = False, rotate: bool = False,
                      is_board: bool = False,
                      x: Optional[int] = None, y: Optional[int] = None) -> Optional[ComponentData]:
        """
        Create, add and select a new component.

        Pins may be given as lists or comma separated strings. Components
        appear at the default anchor unless a position is given.

        Returns:
            The new ComponentData, or None if the size is not positive.
        """
        if w <= 0 or h <= 0:
            logger.warning("Ignoring component with invalid size %sx%s", w, h)
            return None

        self._record()
        component = ComponentData(
            component_id=self._new_component_id(),
            x=DEFAULT_ANCHOR[0] if x is None else x,
            y=DEFAULT_ANCHOR[1] if y is None else y,
            w=w,
            h=h,
            label=label,
            pins_top=_coerce_pins(pins_top),
            pins_bottom=_coerce_pins(pins_bottom),
            relative=relative,
            rotate=rotate,
            is_board=is_board,
        )
        self.model.add_component(component)
        logger.debug("Added %r", component)
        self._notify("component_added", component)
        self.select(component)
        return component

    def update_selected_component(self, w: int, h: int, label: str = "",
                                  pins_top: PinsArg = None, pins_bottom: PinsArg = None,
                                  relative: Optional[bool] = None,
                                  rotate: Optional[bool] = None,
                                  is_board: Optional[bool] = None) -> bool:
        """
        Overwrite the selected component's fields.

        Flags left as None keep their current value. Changing the rotate
        flag turns the component a quarter, swapping the given w and h.
        Nothing happens when no component is selected or the size is not
        positive.
        """
        component = self.selected_component
        if component is None:
            return False
        if w <= 0 or h <= 0:
            logger.warning("Ignoring invalid component size %sx%s", w, h)
            return False

        self._record()
        component.w = w
        component.h = h
        component.label = label
        component.pins_top = _coerce_pins(pins_top)
        component.pins_bottom = _coerce_pins(pins_bottom)
        if relative is not None:
            component.relative = relative
        if rotate is not None and rotate != component.rotate:
            component.rotate_quarter()
        if is_board is not None:
            component.is_board = is_board
        component.fit_pins_to_edge()

        self._notify("component_updated", component)
        self._fire_selection_callback()
        return True

    def rotate_selected(self) -> bool:
        """Rotate the selected component a quarter turn (swaps w and h)."""
        component = self.selected_component
        if component is None:
            return False
        self._record()
        component.rotate_quarter()
        self._notify("component_updated", component)
        self._fire_selection_callback()
        return True

    def delete_selected(self) -> bool:
        """
        Delete the selected component or wire.

        Wires attached to a deleted component stay where they are.
        """
        entity = self.selection
        if entity is None:
            return False

        self._record()
        if is_component(entity):
            self.model.remove_component(entity)
            self._notify("component_removed", entity)
        else:
            self.model.remove_wire(entity)
            self._notify("wire_removed", entity)
        self.select(None)
        return True

    # --- Dragging ---

    @property
    def is_dragging(self) -> bool:
        return self._drag is not None

    def begin_drag(self, component: ComponentData) -> None:
        """Start moving a component; the history entry is made by end_drag()."""
        self.end_drag()
        self._drag = DragSession(component, component.x, component.y, self.serialize())

    def drag_to(self, x: int, y: int) -> bool:
        """
        Move the dragged component's anchor to (x, y).

        Every wire endpoint sitting on one of the component's pins moves by
        the same offset so wires stay attached.
        """
        session = self._drag
        if session is None:
            return False
        component = session.component
        dx = x - component.x
        dy = y - component.y
        if dx == 0 and dy == 0:
            return False

        self._translate_attached_wires(component, dx, dy)
        component.move_to(x, y)
        self._notify("component_moved", component)
        return True

    def end_drag(self) -> bool:
        """
        Finish a drag gesture.

        Records a single history entry for the whole gesture if the
        component ended somewhere other than where it started.
        """
        session = self._drag
        if session is None:
            return False
        self._drag = None

        component = session.component
        if (component.x, component.y) == (session.start_x, session.start_y):
            return False
        self.history.push(session.snapshot)
        logger.debug("Moved %s from (%d, %d) to (%d, %d)", component.component_id,
                     session.start_x, session.start_y, component.x, component.y)
        self._notify("history_changed", None)
        return True

    def move_component(self, component: ComponentData, x: int, y: int) -> bool:
        """Move a component in one step, as a single undoable action."""
        self.begin_drag(component)
        self.drag_to(x, y)
        return self.end_drag()

    def _translate_attached_wires(self, component: ComponentData, dx: int, dy: int) -> None:
        for wire in self.model.wires:
            start_attached = active_pin_at(component, wire.x1, wire.y1) is not None
            end_attached = active_pin_at(component, wire.x2, wire.y2) is not None
            if start_attached:
                wire.set_start(wire.x1 + dx, wire.y1 + dy)
            if end_attached:
                wire.set_end(wire.x2 + dx, wire.y2 + dy)

    # --- Wire operations ---

    def add_wire(self, start: tuple[int, int], end: tuple[int, int],
                 color: Optional[str] = None,
                 wire_type: Optional[str] = None) -> Optional[WireData]:
        """
        Add a wire between two grid coordinates using the current style.

        Returns:
            The new WireData, or None if both ends are the same hole or an
            end lands on a component body where there is no pin.
        """
        start = (int(start[0]), int(start[1]))
        end = (int(end[0]), int(end[1]))
        if start == end:
            return None
        for point in (start, end):
            if is_blocked_cell(self.model, *point):
                logger.warning("Wire endpoint %s is covered by a component without a pin", point)
                return None

        wire_type = wire_type or self.wire_type
        if wire_type not in WIRE_TYPES:
            wire_type = WIRE_FRONT

        self._record()
        wire = WireData(*start, *end, color=color or self.wire_color, wire_type=wire_type)
        self.model.add_wire(wire)
        logger.debug("Added %r", wire)
        self._notify("wire_added", wire)
        return wire

    # --- Component libraries ---

    def import_library(self, records: Union[str, list]) -> list[ComponentData]:
        """
        Add a batch of library components as one undoable action.

        Components are laid out left to right from the default anchor,
        wrapping to a new row when the next one would run past the board's
        right edge.

        Returns:
            The created components (empty if the input was invalid or empty).
        """
        if isinstance(records, str):
            try:
                records = json.loads(records)
            except json.JSONDecodeError as e:
                logger.warning("Library is not valid JSON: %s", e)
                return []
        try:
            validate_library_data(records)
        except ValueError as e:
            logger.warning("Invalid library: %s", e)
            return []
        if not records:
            return []

        self._record()
        created = []
        cursor_x, cursor_y = DEFAULT_ANCHOR
        row_height = 0
        for record in records:
            component = ComponentData.from_dict(record, component_id=self._new_component_id())
            if cursor_x + component.w > self.model.grid_width and cursor_x > DEFAULT_ANCHOR[0]:
                cursor_x = DEFAULT_ANCHOR[0]
                cursor_y += row_height + LIBRARY_ROW_GAP
                row_height = 0
            component.move_to(cursor_x, cursor_y)
            cursor_x += component.w + LIBRARY_COLUMN_GAP
            row_height = max(row_height, component.h)
            self.model.add_component(component)
            created.append(component)

        logger.debug("Imported %d library components", len(created))
        self._notify("library_imported", created)
        return created

    def export_library(self) -> str:
        """Serialize the scene's components as a library (no ids or positions)."""
        return json.dumps([c.to_library_dict() for c in self.model.components], indent=2)
