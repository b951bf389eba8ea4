"""
FileController - Handles scene file I/O, component libraries and autosave.

File dialog interaction is the responsibility of the view layer. This
controller reads and writes complete files and hands whole strings to the
scene controller, which never sees partial input.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from models.wire import WIRE_TYPES

logger = logging.getLogger(__name__)

AUTOSAVE_FILE = ".autosave_recovery.json"


def _is_int(value) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


def _validate_pin_list(value, where: str, key: str) -> None:
    if not isinstance(value, list) or not all(isinstance(p, str) for p in value):
        raise ValueError(f"{where} has an invalid '{key}' list (expected strings).")


def _validate_component_record(comp, where: str, require_position: bool) -> None:
    if not isinstance(comp, dict):
        raise ValueError(f"{where} is not an object.")

    keys = ("x", "y", "w", "h") if require_position else ("w", "h")
    for key in keys:
        if key not in comp:
            raise ValueError(f"{where} is missing required field '{key}'.")
        if not _is_int(comp[key]):
            raise ValueError(f"{where} field '{key}' must be an integer.")
    if comp["w"] <= 0 or comp["h"] <= 0:
        raise ValueError(f"{where} must have a positive width and height.")

    for key in ("pinsTop", "pinsBottom", "pinLabels"):
        if key in comp and comp[key] is not None:
            _validate_pin_list(comp[key], where, key)
    if "label" in comp and comp["label"] is not None and not isinstance(comp["label"], str):
        raise ValueError(f"{where} label must be a string.")


def validate_scene_data(data) -> None:
    """
    Validate JSON structure before loading.

    Raises ValueError with a descriptive message if anything is wrong.
    A missing grid falls back to the default board size and missing
    component or wire lists to empty ones.
    """
    if not isinstance(data, dict):
        raise ValueError("File does not contain a valid scene object.")

    for key in ("components", "wires"):
        if not isinstance(data.get(key, []), list):
            raise ValueError(f"Invalid '{key}' list.")

    grid = data.get("grid")
    if grid is not None:
        if not isinstance(grid, dict):
            raise ValueError("Invalid 'grid' object.")
        for key in ("w", "h"):
            if key in grid and not (_is_int(grid[key]) and grid[key] > 0):
                raise ValueError(f"Grid '{key}' must be a positive integer.")

    seen_ids = set()
    for i, comp in enumerate(data.get("components", [])):
        _validate_component_record(comp, f"Component #{i + 1}", require_position=True)
        comp_id = comp.get("id")
        if comp_id is not None and not isinstance(comp_id, str):
            raise ValueError(f"Component #{i + 1} id must be a string.")
        if comp_id:
            if comp_id in seen_ids:
                raise ValueError(f"Duplicate component id '{comp_id}'.")
            seen_ids.add(comp_id)

    for i, wire in enumerate(data.get("wires", [])):
        if not isinstance(wire, dict):
            raise ValueError(f"Wire #{i + 1} is not an object.")
        for key in ("x1", "y1", "x2", "y2"):
            if key not in wire:
                raise ValueError(f"Wire #{i + 1} is missing required field '{key}'.")
            if not _is_int(wire[key]):
                raise ValueError(f"Wire #{i + 1} field '{key}' must be an integer.")
        if "color" in wire and not isinstance(wire["color"], str):
            raise ValueError(f"Wire #{i + 1} color must be a string.")
        if "type" in wire and wire["type"] not in WIRE_TYPES:
            raise ValueError(f"Wire #{i + 1} has unknown type '{wire['type']}'.")


def validate_library_data(data) -> None:
    """
    Validate a component library (a list of component records without
    id or position). Raises ValueError on the first problem found.
    """
    if not isinstance(data, list):
        raise ValueError("Library file must contain a list of components.")
    for i, record in enumerate(data):
        _validate_component_record(record, f"Library entry #{i + 1}", require_position=False)


class FileController:
    """
    Manages scene file I/O and crash recovery.

    Handles saving/loading scenes as JSON, importing and exporting
    component libraries, and tracking the current file path for quick-save.
    """

    def __init__(self, scene_ctrl, autosave_file: Optional[str] = None):
        self.scene_ctrl = scene_ctrl
        self.current_file: Optional[Path] = None
        if autosave_file is None:
            self._autosave_file = Path(__file__).resolve().parent.parent / AUTOSAVE_FILE
        else:
            self._autosave_file = Path(autosave_file)

    def new_scene(self) -> None:
        """Start an empty scene and reset file state."""
        self.scene_ctrl.new_scene()
        self.current_file = None

    def save_scene(self, filepath) -> None:
        """
        Save the scene to a JSON file.

        Raises:
            OSError: If the file cannot be written.
        """
        filepath = Path(filepath)
        filepath.write_text(self.scene_ctrl.serialize())
        self.current_file = filepath
        logger.info("Saved scene to %s", filepath)

    def load_scene(self, filepath) -> None:
        """
        Load a scene from a JSON file, resetting undo history.

        Validates the JSON structure first so errors carry a useful message.
        The live scene is untouched when anything fails.

        Raises:
            json.JSONDecodeError: If file is not valid JSON.
            ValueError: If file structure is invalid.
            OSError: If the file cannot be read.
        """
        filepath = Path(filepath)
        text = filepath.read_text()
        validate_scene_data(json.loads(text))

        if not self.scene_ctrl.load_scene(text, reset_history=True):
            raise ValueError(f"Could not load scene from {filepath.name}.")

        self.current_file = filepath
        logger.info("Loaded scene from %s", filepath)

    def import_library(self, filepath) -> int:
        """
        Add every component of a library file to the scene.

        Returns:
            The number of components added.

        Raises:
            json.JSONDecodeError: If file is not valid JSON.
            ValueError: If the library structure is invalid.
            OSError: If the file cannot be read.
        """
        filepath = Path(filepath)
        records = json.loads(filepath.read_text())
        validate_library_data(records)
        added = self.scene_ctrl.import_library(records)
        logger.info("Imported %d components from %s", len(added), filepath)
        return len(added)

    def export_library(self, filepath) -> None:
        """
        Write the scene's components as a reusable library file.

        Raises:
            OSError: If the file cannot be written.
        """
        Path(filepath).write_text(self.scene_ctrl.export_library())

    def has_file(self) -> bool:
        """Return whether a current file path is set (for quick-save)."""
        return self.current_file is not None

    def get_window_title(self, base: str = "Perfboard Designer") -> str:
        """Get window title based on current file."""
        if self.current_file:
            return f"{base} - {self.current_file.name}"
        return base

    # ------------------------------------------------------------------
    # Auto-save and crash recovery
    # ------------------------------------------------------------------

    def auto_save(self) -> None:
        """Save the scene to the auto-save recovery file.

        Unlike save_scene(), this does NOT update current_file.
        """
        try:
            data = json.loads(self.scene_ctrl.serialize())
            data["_autosave_source"] = str(self.current_file) if self.current_file else ""
            self._autosave_file.write_text(json.dumps(data, indent=2))
        except OSError as e:
            logger.warning("Auto-save failed: %s", e)

    def has_auto_save(self) -> bool:
        """Return True if an auto-save recovery file exists."""
        return self._autosave_file.exists()

    def load_auto_save(self) -> Optional[str]:
        """Load the scene from the auto-save recovery file.

        Returns:
            The original file path (str) the auto-save was based on,
            or empty string if it was an unsaved scene. Returns None
            on failure.
        """
        try:
            data = json.loads(self._autosave_file.read_text())
            source_path = data.pop("_autosave_source", "")
            validate_scene_data(data)
        except (OSError, json.JSONDecodeError, ValueError) as e:
            logger.warning("Could not recover auto-save: %s", e)
            return None

        if not self.scene_ctrl.load_scene(json.dumps(data), reset_history=True):
            return None

        self.current_file = Path(source_path) if source_path else None
        return source_path

    def clear_auto_save(self) -> None:
        """Delete the auto-save recovery file if it exists."""
        try:
            self._autosave_file.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not remove auto-save file: %s", e)
