"""
Shared test fixtures for the Perfboard Designer test suite.

Most fixtures build pure-Python model objects (no Qt dependencies).
Widget tests use pytest-qt's ``qtbot`` on the offscreen platform.
"""

import os
import sys
from pathlib import Path

# Ensure app/ is on sys.path so bare imports (models, controllers, GUI)
# work when running individual test files (e.g., python -m pytest app/tests/unit/test_foo.py).
_app_dir = str(Path(__file__).resolve().parent.parent)
if _app_dir not in sys.path:
    sys.path.insert(0, _app_dir)

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from controllers.history_manager import HistoryManager
from controllers.scene_controller import SceneController
from models.component import ComponentData
from models.scene import SceneModel


def make_component(component_id="U1", x=2, y=2, w=4, h=2, label="", pins_top=None,
                   pins_bottom=None, relative=False, rotate=False, is_board=False):
    """Helper to create a ComponentData with minimal boilerplate."""
    return ComponentData(
        component_id=component_id,
        x=x,
        y=y,
        w=w,
        h=h,
        label=label,
        pins_top=list(pins_top or []),
        pins_bottom=list(pins_bottom or []),
        relative=relative,
        rotate=rotate,
        is_board=is_board,
    )


@pytest.fixture
def scene():
    """An empty 30x20 board."""
    return SceneModel()


@pytest.fixture
def controller():
    """A SceneController over an empty 30x20 board."""
    return SceneController(SceneModel(), HistoryManager())


@pytest.fixture
def chip_scene():
    """
    10x10 board with one 4x2 chip at (2, 2).

    Top pins: A at (2, 2), gap at (3, 2), B at (4, 2), C at (5, 2).
    Bottom pins: D at (2, 3) only.
    """
    model = SceneModel(grid_width=10, grid_height=10)
    model.add_component(make_component("U1", 2, 2, 4, 2, label="CHIP",
                                       pins_top=["A", "", "B", "C"], pins_bottom=["D"]))
    return model


@pytest.fixture
def sample_scene_dict():
    """A saved board with a chip, a substrate and two wires."""
    return {
        "version": 1.4,
        "grid": {"w": 12, "h": 8},
        "wires": [
            {"x1": 0, "y1": 0, "x2": 2, "y2": 2, "color": "#0000FF", "type": "front"},
            {"x1": 5, "y1": 2, "x2": 5, "y2": 6, "color": "#FF0000", "type": "back"},
        ],
        "components": [
            {"id": "U1", "x": 2, "y": 2, "w": 4, "h": 2, "label": "NE555",
             "pinsTop": ["VCC", "", "", "OUT"], "pinsBottom": ["GND", "TRIG"],
             "relative": False, "rotate": False, "rotation": 0, "isBoard": False},
            {"id": "U2", "x": 8, "y": 1, "w": 3, "h": 5, "label": "proto",
             "pinsTop": [], "pinsBottom": [],
             "relative": False, "rotate": False, "rotation": 0, "isBoard": True},
        ],
    }
