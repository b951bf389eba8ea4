"""
Geometry - Coordinate transforms between screen, world and grid space.

This module contains no Qt dependencies. World space is the unzoomed,
unpanned pixel space the board is laid out in; screen space is world space
after the view transform; grid space is the integer hole lattice.
"""

import math
from dataclasses import dataclass

# Board lattice settings
PITCH = 20                      # Pixels between adjacent holes
BOARD_OFFSET = (100, 100)       # World position of hole (0, 0)
HOLE_SIZE = 4                   # Hole diameter in pixels
BOARD_PADDING = PITCH / 2 + 10  # Backing margin around the outermost holes

# Default board size (used when a loaded file has no grid)
DEFAULT_GRID_WIDTH = 30
DEFAULT_GRID_HEIGHT = 20

# Zoom settings
ZOOM_FACTOR = 1.15              # Multiplier per wheel notch
ZOOM_MIN = 0.5
ZOOM_MAX = 5.0


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity."""
    return math.floor(value + 0.5)


def grid_to_world(gx: float, gy: float) -> tuple[float, float]:
    """Lattice position of a grid coordinate."""
    return (gx * PITCH + BOARD_OFFSET[0], gy * PITCH + BOARD_OFFSET[1])


def world_to_grid(wx: float, wy: float) -> tuple[int, int]:
    """
    Nearest grid coordinate to a world position.

    No snapping radius is applied; callers check distance themselves.
    """
    return (
        round_half_up((wx - BOARD_OFFSET[0]) / PITCH),
        round_half_up((wy - BOARD_OFFSET[1]) / PITCH),
    )


def cell_rect(gx: int, gy: int, w: int, h: int) -> tuple[float, float, float, float]:
    """
    Pixel rectangle covering a block of w x h grid cells anchored at (gx, gy).

    Returns (left, top, right, bottom). Each cell extends half a pitch
    around its hole.
    """
    cx, cy = grid_to_world(gx, gy)
    left = cx - PITCH / 2
    top = cy - PITCH / 2
    return (left, top, left + w * PITCH, top + h * PITCH)


def board_rect(grid_width: int, grid_height: int) -> tuple[float, float, float, float]:
    """Board backing rectangle (left, top, right, bottom) in world space."""
    x1, y1 = grid_to_world(0, 0)
    x2, y2 = grid_to_world(grid_width - 1, grid_height - 1)
    return (x1 - BOARD_PADDING, y1 - BOARD_PADDING, x2 + BOARD_PADDING, y2 + BOARD_PADDING)


def rect_contains(rect: tuple[float, float, float, float], x: float, y: float) -> bool:
    """Inclusive point-in-rectangle test."""
    left, top, right, bottom = rect
    return left <= x <= right and top <= y <= bottom


def rect_union(a: tuple[float, float, float, float],
               b: tuple[float, float, float, float]) -> tuple[float, float, float, float]:
    return (min(a[0], b[0]), min(a[1], b[1]), max(a[2], b[2]), max(a[3], b[3]))


def expand_rect(rect: tuple[float, float, float, float], amount: float) -> tuple[float, float, float, float]:
    return (rect[0] - amount, rect[1] - amount, rect[2] + amount, rect[3] + amount)


def distance(ax: float, ay: float, bx: float, by: float) -> float:
    return math.hypot(bx - ax, by - ay)


def point_to_segment_distance(px: float, py: float,
                              x1: float, y1: float, x2: float, y2: float) -> float:
    """
    Distance from a point to the segment (x1, y1)-(x2, y2).

    The projection parameter is clamped to [0, 1] so points beyond either
    end measure to the closest endpoint. A zero-length segment measures to
    its single point.
    """
    dx = x2 - x1
    dy = y2 - y1
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return distance(px, py, x1, y1)

    t = ((px - x1) * dx + (py - y1) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    return distance(px, py, x1 + t * dx, y1 + t * dy)


@dataclass
class ViewTransform:
    """
    Transient pan/zoom state of the canvas.

    Kept apart from the scene so serialization never touches it.
    """

    scale: float = 1.0
    pan_x: float = 0.0
    pan_y: float = 0.0

    def screen_to_world(self, sx: float, sy: float) -> tuple[float, float]:
        return ((sx - self.pan_x) / self.scale, (sy - self.pan_y) / self.scale)

    def world_to_screen(self, wx: float, wy: float) -> tuple[float, float]:
        return (wx * self.scale + self.pan_x, wy * self.scale + self.pan_y)

    def set_scale(self, scale: float) -> None:
        """Set the zoom factor, clamped to [ZOOM_MIN, ZOOM_MAX]."""
        self.scale = max(ZOOM_MIN, min(ZOOM_MAX, scale))

    def zoom(self, steps: float) -> None:
        """
        Zoom by a number of wheel notches (positive zooms in).

        Only the scale changes; the zoom is not centred on the pointer.
        """
        self.set_scale(self.scale * (ZOOM_FACTOR ** steps))

    def pan_by(self, dx: float, dy: float) -> None:
        self.pan_x += dx
        self.pan_y += dy

    def reset(self) -> None:
        self.scale = 1.0
        self.pan_x = 0.0
        self.pan_y = 0.0
