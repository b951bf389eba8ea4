"""
Pure Python data models for Perfboard Designer.

This package contains Qt-free data classes and geometry for the board
diagram. All models use only Python standard library types (no PyQt6
dependencies).
"""

from .component import DEFAULT_ANCHOR, ComponentData, format_pin_list, parse_pin_list
from .entity import EntityKind, is_component, is_wire
from .geometry import PITCH, ViewTransform, grid_to_world, world_to_grid
from .scene import SCENE_FORMAT_VERSION, SceneModel
from .wire import DEFAULT_WIRE_COLOR, WIRE_COLORS, WIRE_TYPES, WireData

__all__ = [
    "SceneModel",
    "SCENE_FORMAT_VERSION",
    "ComponentData",
    "DEFAULT_ANCHOR",
    "parse_pin_list",
    "format_pin_list",
    "WireData",
    "WIRE_COLORS",
    "WIRE_TYPES",
    "DEFAULT_WIRE_COLOR",
    "EntityKind",
    "is_component",
    "is_wire",
    "PITCH",
    "ViewTransform",
    "grid_to_world",
    "world_to_grid",
]
