"""
Entity tags shared by the scene's selectable objects.

Components and wires both carry a class-level ``kind`` so selection code
dispatches on an explicit discriminant instead of probing for fields.
"""

from enum import Enum


class EntityKind(Enum):
    COMPONENT = "component"
    WIRE = "wire"


def is_component(entity) -> bool:
    """Return True if *entity* is a component (None-safe)."""
    return entity is not None and entity.kind is EntityKind.COMPONENT


def is_wire(entity) -> bool:
    """Return True if *entity* is a wire (None-safe)."""
    return entity is not None and entity.kind is EntityKind.WIRE
