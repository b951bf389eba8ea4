"""
End-to-end editing, save and load.

Builds a board through the pointer state machine, saves it with the
FileController and loads it into a fresh controller stack. No Qt.
"""

import json

import pytest
from controllers.file_controller import FileController
from controllers.history_manager import HistoryManager
from controllers.interaction_controller import InteractionController
from controllers.scene_controller import SceneController
from models.geometry import grid_to_world
from models.scene import SceneModel


def _stack(tmp_path, name="autosave.json"):
    scene_ctrl = SceneController(SceneModel(grid_width=16, grid_height=12), HistoryManager())
    return scene_ctrl, FileController(scene_ctrl, autosave_file=tmp_path / name)


def _drag(interaction, start, end):
    interaction.mouse_down(*grid_to_world(*start))
    interaction.mouse_move(*grid_to_world(*end))
    interaction.mouse_up(*grid_to_world(*end))


@pytest.fixture
def edited(tmp_path):
    """A board with a chip, a substrate and wires drawn by pointer gestures."""
    scene_ctrl, file_ctrl = _stack(tmp_path)
    interaction = InteractionController(scene_ctrl)

    scene_ctrl.add_component(4, 2, label="NE555", pins_top="VCC,,,OUT", pins_bottom="GND,TRIG")
    scene_ctrl.add_component(3, 3, label="proto", is_board=True, x=10, y=6)
    scene_ctrl.set_wire_color("#0000FF")
    _drag(interaction, (2, 2), (2, 8))          # VCC down to a free hole
    scene_ctrl.set_wire_type("back")
    _drag(interaction, (3, 3), (11, 7))         # TRIG onto the substrate
    _drag(interaction, (3, 2), (6, 2))          # grab the chip body and move it
    return scene_ctrl, file_ctrl


class TestEditSaveLoad:
    def test_gestures_build_expected_scene(self, edited):
        scene_ctrl, _ = edited
        chip = scene_ctrl.model.find_component("U1")
        assert (chip.x, chip.y) == (5, 2)
        vcc, trig = scene_ctrl.model.wires
        # Both wires started on chip pins and followed the move
        assert vcc.endpoints() == [(5, 2), (2, 8)]
        assert trig.endpoints() == [(6, 3), (11, 7)]
        assert (vcc.color, vcc.wire_type) == ("#0000FF", "front")
        assert trig.wire_type == "back"

    def test_every_gesture_is_one_undo_step(self, edited):
        scene_ctrl, _ = edited
        assert scene_ctrl.history.get_undo_count() == 5

    def test_save_then_load_round_trip(self, edited, tmp_path):
        scene_ctrl, file_ctrl = edited
        path = tmp_path / "board.json"
        file_ctrl.save_scene(path)

        other_ctrl, other_file = _stack(tmp_path, "other.json")
        other_file.load_scene(path)
        assert other_ctrl.model.to_dict() == scene_ctrl.model.to_dict()
        assert not other_ctrl.can_undo()

    def test_ids_continue_after_load(self, edited, tmp_path):
        _, file_ctrl = edited
        path = tmp_path / "board.json"
        file_ctrl.save_scene(path)

        other_ctrl, other_file = _stack(tmp_path, "other.json")
        other_file.load_scene(path)
        assert other_ctrl.add_component(1, 1).component_id == "U3"

    def test_undo_all_returns_to_empty(self, edited):
        scene_ctrl, _ = edited
        while scene_ctrl.undo():
            pass
        assert scene_ctrl.model.is_empty()


class TestLibraryExchange:
    def test_library_moves_parts_between_boards(self, edited, tmp_path):
        _, file_ctrl = edited
        library = tmp_path / "parts.json"
        file_ctrl.export_library(library)

        other_ctrl, other_file = _stack(tmp_path, "other.json")
        assert other_file.import_library(library) == 2
        labels = [c.label for c in other_ctrl.model.components]
        assert labels == ["NE555", "proto"]
        assert other_ctrl.model.wires == []
        other_ctrl.undo()
        assert other_ctrl.model.is_empty()


class TestLegacyFiles:
    def test_single_pin_list_and_rotation_only(self, tmp_path):
        path = tmp_path / "old.json"
        path.write_text(json.dumps({
            "grid": {"w": 10, "h": 10},
            "components": [
                {"id": "U1", "x": 1, "y": 1, "w": 1, "h": 3, "label": "POT",
                 "pinLabels": ["1", "W", "2"], "rotation": 90},
            ],
            "wires": [{"x1": 0, "y1": 0, "x2": 1, "y2": 1, "color": "#FF0000"}],
        }))
        scene_ctrl, file_ctrl = _stack(tmp_path)
        file_ctrl.load_scene(path)

        pot = scene_ctrl.model.components[0]
        assert pot.rotate is True
        assert pot.pins_bottom == ["1", "W", "2"]
        assert scene_ctrl.model.wires[0].wire_type == "front"
        saved = json.loads(scene_ctrl.serialize())
        assert saved["components"][0]["pinsBottom"] == ["1", "W", "2"]
        assert "pinLabels" not in saved["components"][0]
