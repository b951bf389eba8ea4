"""
SceneModel - Central data store for the board diagram.

This module contains no Qt dependencies. It holds everything that is
saved to disk: the grid size and the ordered component and wire lists.
View state (pan, zoom) and interaction state live elsewhere.
"""

from dataclasses import dataclass, field
from typing import Optional

from .component import ComponentData
from .geometry import DEFAULT_GRID_HEIGHT, DEFAULT_GRID_WIDTH
from .wire import WireData

SCENE_FORMAT_VERSION = 1.4


@dataclass
class SceneModel:
    """
    Central data store holding the persisted diagram.

    List order is insertion order: later entries draw on top and win
    hit-tests.
    """

    grid_width: int = DEFAULT_GRID_WIDTH
    grid_height: int = DEFAULT_GRID_HEIGHT
    components: list[ComponentData] = field(default_factory=list)
    wires: list[WireData] = field(default_factory=list)

    # --- Component operations ---

    def add_component(self, component: ComponentData) -> None:
        self.components.append(component)

    def remove_component(self, component: ComponentData) -> bool:
        """Remove a component by identity. Returns True if it was present."""
        for i, existing in enumerate(self.components):
            if existing is component:
                del self.components[i]
                return True
        return False

    def find_component(self, component_id: str) -> Optional[ComponentData]:
        for component in self.components:
            if component.component_id == component_id:
                return component
        return None

    def component_ids(self) -> set[str]:
        return {c.component_id for c in self.components}

    # --- Wire operations ---

    def add_wire(self, wire: WireData) -> None:
        self.wires.append(wire)

    def remove_wire(self, wire: WireData) -> bool:
        """Remove a wire by identity. Returns True if it was present."""
        for i, existing in enumerate(self.wires):
            if existing is wire:
                del self.wires[i]
                return True
        return False

    # --- Board operations ---

    def resize(self, width: int, height: int) -> None:
        self.grid_width = width
        self.grid_height = height

    def in_grid(self, gx: int, gy: int) -> bool:
        """Check whether a grid coordinate is one of the board's holes."""
        return 0 <= gx < self.grid_width and 0 <= gy < self.grid_height

    def clear(self) -> None:
        """Remove all components and wires. The board size is kept."""
        self.components.clear()
        self.wires.clear()

    def replace_with(self, other: "SceneModel") -> None:
        """Take over another scene's contents, keeping this object's identity."""
        self.grid_width = other.grid_width
        self.grid_height = other.grid_height
        self.components = other.components
        self.wires = other.wires

    def is_empty(self) -> bool:
        return not self.components and not self.wires

    # --- Serialization ---

    def to_dict(self) -> dict:
        """Serialize scene to dictionary (saved file format)."""
        return {
            "version": SCENE_FORMAT_VERSION,
            "grid": {"w": self.grid_width, "h": self.grid_height},
            "wires": [w.to_dict() for w in self.wires],
            "components": [c.to_dict() for c in self.components],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SceneModel":
        """
        Deserialize scene from dictionary.

        A missing grid falls back to the default board size. The data is
        expected to have passed validate_scene_data().
        """
        grid = data.get("grid") or {}
        model = cls(
            grid_width=int(grid.get("w") or DEFAULT_GRID_WIDTH),
            grid_height=int(grid.get("h") or DEFAULT_GRID_HEIGHT),
        )
        for comp_data in data.get("components", []):
            model.components.append(ComponentData.from_dict(comp_data))
        for wire_data in data.get("wires", []):
            model.wires.append(WireData.from_dict(wire_data))
        return model
