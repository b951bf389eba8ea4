"""
WireData - Pure Python data model for board wires.

This module contains no Qt dependencies. A wire is a straight segment
between two grid coordinates. It has no id: the scene tells wires apart
by object identity.
"""

from dataclasses import dataclass
from typing import ClassVar

from .entity import EntityKind

WIRE_FRONT = "front"
WIRE_BACK = "back"
WIRE_TYPES = (WIRE_FRONT, WIRE_BACK)

# Resistor color code plus tinned copper
WIRE_COLORS = [
    ("Black", "#000000"),
    ("Brown", "#8B4513"),
    ("Red", "#FF0000"),
    ("Orange", "#FFA500"),
    ("Yellow", "#FFFF00"),
    ("Green", "#008000"),
    ("Blue", "#0000FF"),
    ("Purple", "#800080"),
    ("Gray", "#808080"),
    ("White", "#FFFFFF"),
    ("Tinned", "#C0C0C0"),
]

DEFAULT_WIRE_COLOR = "#FF0000"


@dataclass
class WireData:
    """
    Pure Python data class representing a wire between two grid holes.

    ``wire_type`` only changes how the wire is drawn ('back' wires run on
    the underside and are drawn dashed).
    """

    kind: ClassVar[EntityKind] = EntityKind.WIRE

    x1: int
    y1: int
    x2: int
    y2: int
    color: str = DEFAULT_WIRE_COLOR
    wire_type: str = WIRE_FRONT

    @property
    def start(self) -> tuple[int, int]:
        return (self.x1, self.y1)

    @property
    def end(self) -> tuple[int, int]:
        return (self.x2, self.y2)

    def endpoints(self) -> list[tuple[int, int]]:
        return [self.start, self.end]

    def set_start(self, gx: int, gy: int) -> None:
        self.x1 = gx
        self.y1 = gy

    def set_end(self, gx: int, gy: int) -> None:
        self.x2 = gx
        self.y2 = gy

    def contains_point(self, gx: int, gy: int) -> bool:
        """
        Check whether a grid coordinate lies exactly on this segment.

        Uses integer cross products, so only lattice points the straight
        segment passes through count.
        """
        dx = self.x2 - self.x1
        dy = self.y2 - self.y1
        if dx * (gy - self.y1) - dy * (gx - self.x1) != 0:
            return False
        return (min(self.x1, self.x2) <= gx <= max(self.x1, self.x2)
                and min(self.y1, self.y2) <= gy <= max(self.y1, self.y2))

    def to_dict(self) -> dict:
        """Serialize wire to dictionary (saved file format)."""
        return {
            "x1": self.x1,
            "y1": self.y1,
            "x2": self.x2,
            "y2": self.y2,
            "color": self.color,
            "type": self.wire_type,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WireData":
        """Deserialize wire from dictionary."""
        wire_type = data.get("type", WIRE_FRONT)
        if wire_type not in WIRE_TYPES:
            wire_type = WIRE_FRONT
        return cls(
            x1=int(data["x1"]),
            y1=int(data["y1"]),
            x2=int(data["x2"]),
            y2=int(data["y2"]),
            color=data.get("color") or DEFAULT_WIRE_COLOR,
            wire_type=wire_type,
        )

    def __repr__(self) -> str:
        return f"WireData(({self.x1}, {self.y1}) -> ({self.x2}, {self.y2}), {self.color}, {self.wire_type})"
