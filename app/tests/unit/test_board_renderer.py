"""
Tests for BoardRenderer image output.

Rendering runs on the offscreen platform; assertions check image size
and a few sampled pixels rather than exact artwork.
"""

import math

import pytest

pytest.importorskip("PyQt6")

from GUI.board_renderer import BoardRenderer
from GUI.styles import BACKGROUND_COLOR, BOARD_COLOR
from models.component import ComponentData
from models.geometry import grid_to_world
from models.render_order import content_bounds
from models.scene import SceneModel
from models.wire import WireData
from PyQt6.QtGui import QColor, QImage


def _pixel(image, scene, wx, wy):
    """Color of the image pixel at a world coordinate."""
    left, top, _, _ = content_bounds(scene)
    return image.pixelColor(int(wx - left), int(wy - top))


class TestRenderImage:
    def test_size_matches_content_bounds(self, qapp):
        scene = SceneModel(grid_width=10, grid_height=6)
        image = BoardRenderer().render_image(scene)
        left, top, right, bottom = content_bounds(scene)
        assert image.width() == math.ceil(right - left)
        assert image.height() == math.ceil(bottom - top)

    def test_component_off_board_grows_image(self, qapp):
        scene = SceneModel(grid_width=10, grid_height=6)
        small = BoardRenderer().render_image(scene)
        scene.add_component(ComponentData(component_id="U1", x=14, y=2, w=2, h=1))
        large = BoardRenderer().render_image(scene)
        assert large.width() > small.width()
        assert large.height() == small.height()

    def test_border_and_board_colors(self, qapp):
        scene = SceneModel(grid_width=10, grid_height=6)
        image = BoardRenderer().render_image(scene)
        assert image.pixelColor(2, 2).name() == QColor(BACKGROUND_COLOR).name()
        # Between four holes is plain board
        x, y = grid_to_world(3, 3)
        assert _pixel(image, scene, x + 10, y + 10).name() == QColor(BOARD_COLOR).name()

    def test_wire_is_drawn_in_its_color(self, qapp):
        scene = SceneModel(grid_width=10, grid_height=6)
        scene.add_wire(WireData(1, 1, 6, 1, color="#0000FF"))
        image = BoardRenderer().render_image(scene)
        x, y = grid_to_world(3, 1)
        assert _pixel(image, scene, x + 10, y).name() == "#0000ff"

    def test_components_and_pins_render(self, qapp, chip_scene):
        chip_scene.add_component(ComponentData(component_id="U2", x=0, y=6, w=6, h=3,
                                               pins_top=["A", "B"], relative=True, rotate=True))
        chip_scene.add_component(ComponentData(component_id="U3", x=7, y=6, w=2, h=2, is_board=True))
        chip_scene.add_wire(WireData(2, 2, 8, 8, wire_type="back"))
        image = BoardRenderer().render_image(chip_scene)
        assert not image.isNull()


class TestExportImage:
    def test_export_writes_png(self, qapp, chip_scene, tmp_path):
        filename = tmp_path / "board.png"
        assert BoardRenderer().export_image(chip_scene, filename)
        loaded = QImage(str(filename))
        assert not loaded.isNull()
        assert loaded.width() == BoardRenderer().render_image(chip_scene).width()

    def test_export_to_missing_directory_fails(self, qapp, chip_scene, tmp_path):
        assert not BoardRenderer().export_image(chip_scene, tmp_path / "missing" / "board.png")
