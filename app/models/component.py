"""
ComponentData - Pure Python data model for board components.

This module contains no Qt dependencies. Positions and sizes are in grid
units; pixel geometry lives in models.geometry and models.pin_layout.

A component is a w x h block of grid cells anchored at its top-left cell
(x, y). Pins sit on the top and bottom edges (right and left edges when
rotated); an empty pin name marks a slot without a pin.
"""

import logging
from dataclasses import dataclass, field
from typing import ClassVar, Optional

from .entity import EntityKind

logger = logging.getLogger(__name__)

# Where new components appear when no position is given
DEFAULT_ANCHOR = (2, 2)


def parse_pin_list(text: Optional[str]) -> list[str]:
    """
    Split a comma separated pin string into pin names.

    Blank entries are kept as empty strings so "VCC,,GND" leaves a gap
    in the middle slot. An empty or None string gives no pins.
    """
    if not text:
        return []
    return [name.strip() for name in text.split(",")]


def format_pin_list(pins: list[str]) -> str:
    """Inverse of parse_pin_list."""
    return ",".join(pins)


@dataclass
class ComponentData:
    """
    Pure Python data class representing a rectangular board component.

    ``rotation`` is derived from ``rotate`` so the two can never disagree.
    Board substrates (``is_board``) draw as a backing panel and expose no pins.
    """

    kind: ClassVar[EntityKind] = EntityKind.COMPONENT

    component_id: str
    x: int
    y: int
    w: int
    h: int
    label: str = ""
    pins_top: list[str] = field(default_factory=list)
    pins_bottom: list[str] = field(default_factory=list)
    relative: bool = False  # Strip layout: active pins share the edge evenly
    rotate: bool = False
    is_board: bool = False

    def __post_init__(self):
        if self.w <= 0 or self.h <= 0:
            raise ValueError(f"Component size must be positive, got {self.w}x{self.h}.")
        self.fit_pins_to_edge()

    @property
    def rotation(self) -> int:
        """Rotation in degrees (0 or 90)."""
        return 90 if self.rotate else 0

    @property
    def edge_length(self) -> int:
        """Number of grid slots along a pin edge."""
        return self.h if self.rotate else self.w

    @property
    def right(self) -> int:
        """Grid x of the rightmost column."""
        return self.x + self.w - 1

    @property
    def bottom(self) -> int:
        """Grid y of the bottom row."""
        return self.y + self.h - 1

    def contains_cell(self, gx: int, gy: int) -> bool:
        """Check whether a grid coordinate lies on this component."""
        return self.x <= gx <= self.right and self.y <= gy <= self.bottom

    def fit_pins_to_edge(self) -> None:
        """Drop pin names that do not fit on their edge."""
        length = self.edge_length
        for attr in ("pins_top", "pins_bottom"):
            pins = getattr(self, attr)
            if len(pins) > length:
                logger.warning(
                    "Component %s: %d %s entries exceed edge length %d, truncating",
                    self.component_id, len(pins), attr, length,
                )
                setattr(self, attr, list(pins[:length]))

    def rotate_quarter(self) -> None:
        """Toggle between 0 and 90 degrees, swapping width and height."""
        self.w, self.h = self.h, self.w
        self.rotate = not self.rotate

    def move_to(self, x: int, y: int) -> None:
        self.x = x
        self.y = y

    def to_dict(self) -> dict:
        """
        Serialize component to dictionary.

        Keys follow the saved file format (camelCase) so files written by
        older versions of the editor stay readable.
        """
        return {
            "id": self.component_id,
            "x": self.x,
            "y": self.y,
            "w": self.w,
            "h": self.h,
            "label": self.label,
            "pinsTop": list(self.pins_top),
            "pinsBottom": list(self.pins_bottom),
            "relative": self.relative,
            "rotate": self.rotate,
            "rotation": self.rotation,
            "isBoard": self.is_board,
        }

    def to_library_dict(self) -> dict:
        """Serialize as a library record (no identity or position)."""
        data = self.to_dict()
        for key in ("id", "x", "y"):
            del data[key]
        return data

    @classmethod
    def from_dict(cls, data: dict, component_id: Optional[str] = None) -> "ComponentData":
        """
        Deserialize component from dictionary.

        Handles the legacy single ``pinLabels`` list (loaded as the bottom
        pins) and files that only carry ``rotation``. *component_id*
        overrides the stored id; records without one get an empty id for
        the controller to fill in.
        """
        if "pinsTop" in data or "pinsBottom" in data:
            pins_top = list(data.get("pinsTop") or [])
            pins_bottom = list(data.get("pinsBottom") or [])
        else:
            pins_top = []
            pins_bottom = list(data.get("pinLabels") or [])

        if "rotate" in data:
            rotate = bool(data["rotate"])
        else:
            rotate = data.get("rotation", 0) == 90

        return cls(
            component_id=component_id if component_id is not None else str(data.get("id") or ""),
            x=int(data.get("x", DEFAULT_ANCHOR[0])),
            y=int(data.get("y", DEFAULT_ANCHOR[1])),
            w=int(data["w"]),
            h=int(data["h"]),
            label=data.get("label") or "",
            pins_top=[str(p) for p in pins_top],
            pins_bottom=[str(p) for p in pins_bottom],
            relative=bool(data.get("relative", False)),
            rotate=rotate,
            is_board=bool(data.get("isBoard", False)),
        )

    def copy(self) -> "ComponentData":
        return ComponentData.from_dict(self.to_dict())

    def __repr__(self) -> str:
        return (
            f"ComponentData(id={self.component_id!r}, label={self.label!r}, "
            f"pos=({self.x}, {self.y}), size={self.w}x{self.h}, rot={self.rotation})"
        )
