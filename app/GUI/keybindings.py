"""
keybindings.py — Registry of configurable keyboard shortcuts.

Defaults live here; the user's overrides are kept in a small JSON file
in the per-user config directory.
"""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# Default keybindings: action_name -> shortcut string
DEFAULTS = {
    # File
    "file.new": "Ctrl+N",
    "file.open": "Ctrl+O",
    "file.save": "Ctrl+S",
    "file.save_as": "Ctrl+Shift+S",
    "file.import_library": "Ctrl+I",
    "file.export_library": "Ctrl+Shift+E",
    "file.export_image": "Ctrl+E",
    "file.exit": "Ctrl+Q",
    # Edit
    "edit.undo": "Ctrl+Z",
    "edit.redo": "Ctrl+Y",
    "edit.delete": "Del",
    "edit.rotate": "R",
    "edit.clear": "",
    # Wire drawing
    "wire.front": "W",
    "wire.back": "B",
    # View
    "view.zoom_in": "Ctrl+=",
    "view.zoom_out": "Ctrl+-",
    "view.zoom_reset": "Ctrl+0",
}

_CONFIG_DIR = Path.home() / ".perfboard-designer"
_CONFIG_FILE = _CONFIG_DIR / "keybindings.json"


class KeybindingsRegistry:
    """Shortcut lookup with defaults and persisted user overrides."""

    def __init__(self, config_path=None):
        self._bindings = dict(DEFAULTS)
        self._config_path = Path(config_path) if config_path else _CONFIG_FILE
        self.load()

    def get(self, action_name: str) -> str:
        """Return the shortcut for an action ("" if unbound or unknown)."""
        return self._bindings.get(action_name, "")

    def load(self) -> None:
        """Apply overrides from the config file; unknown actions are skipped."""
        if not self._config_path.exists():
            return
        try:
            with open(self._config_path) as f:
                overrides = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Failed to load keybindings config: %s", e)
            return
        if not isinstance(overrides, dict):
            logger.warning("Ignoring keybindings config that is not an object")
            return
        for key, value in overrides.items():
            if key in self._bindings and isinstance(value, str):
                self._bindings[key] = value
