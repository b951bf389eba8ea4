"""
board_renderer.py - QPainter drawing of a board scene.

All drawing happens in world coordinates; the caller sets up the view
transform (the canvas) or an offset onto an image (exports). Draw order
comes from models.render_order: board backing, back wires, front wires,
board substrates, components, then the wire being drawn.
"""

import logging
import math

from models.component import ComponentData
from models.entity import is_component, is_wire
from models.geometry import HOLE_SIZE, PITCH, board_rect, cell_rect, grid_to_world
from models.pin_layout import BOTTOM, TOP, active_pin_at, pin_placement, slot_at, slot_cell
from models.render_order import content_bounds, ordered_components, ordered_wires, wire_segment
from models.scene import SceneModel
from models.wire import WIRE_BACK, WireData
from PyQt6.QtCore import QLineF, QPointF, QRectF, Qt
from PyQt6.QtGui import QBrush, QColor, QFont, QImage, QPainter, QPen

from .styles import (BACK_WIRE_DASH, BACK_WIRE_OPACITY, BACKGROUND_COLOR,
                     BOARD_COLOR, COMPONENT_FILL, COMPONENT_OUTLINE,
                     HOLE_COLOR, INACTIVE_SLOT_COLOR, LABEL_FONT, PAD_COLOR,
                     PAD_HIGHLIGHT, PIN_FONT, PREVIEW_BACK_OPACITY,
                     PREVIEW_FRONT_OPACITY, SELECTED_WIRE_PEN_WIDTH,
                     SELECTION_COLOR, SUBSTRATE_COLOR,
                     SUBSTRATE_OUTLINE_COLOR, TEXT_COLOR, WIRE_END_COLOR,
                     WIRE_PEN_WIDTH, WIRE_SELECTION_COLOR)

logger = logging.getLogger(__name__)

BODY_INSET = 2.0       # Gap between a component body and its cell boundary
WIRE_END_RADIUS = 2.0


def _rect(left, top, right, bottom) -> QRectF:
    return QRectF(left, top, right - left, bottom - top)


class BoardRenderer:
    """Paints a SceneModel with a QPainter."""

    def __init__(self):
        self._pin_font = QFont(*PIN_FONT)
        self._label_font = QFont(*LABEL_FONT)
        self._label_font.setBold(True)

    def paint(self, painter: QPainter, scene: SceneModel, selection=None,
              preview=None, preview_style=None) -> None:
        """
        Draw the scene.

        Args:
            painter: Painter already transformed into world space
            scene: The scene to draw
            selection: Selected ComponentData or WireData, highlighted
            preview: World segment (x1, y1, x2, y2) of the wire being drawn
            preview_style: (color, wire_type) for the preview wire
        """
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        self._draw_board(painter, scene)
        for wire in ordered_wires(scene):
            self._draw_wire(painter, scene, wire, selected=is_wire(selection) and wire is selection)
        for component in ordered_components(scene):
            selected = is_component(selection) and component is selection
            if component.is_board:
                self._draw_substrate(painter, component, selected)
            else:
                self._draw_component(painter, component, selected)
        if preview is not None and preview_style is not None:
            self._draw_preview(painter, preview, *preview_style)

    def render_image(self, scene: SceneModel) -> QImage:
        """Render the scene's content bounds at 1:1 scale onto a new image."""
        left, top, right, bottom = content_bounds(scene)
        width = max(1, math.ceil(right - left))
        height = max(1, math.ceil(bottom - top))

        image = QImage(width, height, QImage.Format.Format_ARGB32_Premultiplied)
        image.fill(QColor(BACKGROUND_COLOR))
        painter = QPainter(image)
        painter.translate(-left, -top)
        self.paint(painter, scene)
        painter.end()
        return image

    def export_image(self, scene: SceneModel, filename) -> bool:
        """Save the scene as a PNG image. Returns False if writing failed."""
        image = self.render_image(scene)
        if not image.save(str(filename), "PNG"):
            logger.error("Could not write image to %s", filename)
            return False
        logger.info("Exported %dx%d image to %s", image.width(), image.height(), filename)
        return True

    # --- Board ---

    def _draw_holes(self, painter: QPainter, x: int, y: int, w: int, h: int) -> None:
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(QColor(HOLE_COLOR)))
        radius = HOLE_SIZE / 2
        for gy in range(y, y + h):
            for gx in range(x, x + w):
                cx, cy = grid_to_world(gx, gy)
                painter.drawEllipse(QPointF(cx, cy), radius, radius)

    def _draw_board(self, painter: QPainter, scene: SceneModel) -> None:
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(QColor(BOARD_COLOR)))
        painter.drawRect(_rect(*board_rect(scene.grid_width, scene.grid_height)))
        self._draw_holes(painter, 0, 0, scene.grid_width, scene.grid_height)

    # --- Wires ---

    def _wire_pen(self, color: str, width: float, wire_type: str) -> QPen:
        pen = QPen(QColor(color), width)
        pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        if wire_type == WIRE_BACK:
            pen.setDashPattern(BACK_WIRE_DASH)
        return pen

    def _draw_wire(self, painter: QPainter, scene: SceneModel, wire: WireData, selected: bool) -> None:
        x1, y1, x2, y2 = wire_segment(scene, wire)
        if selected:
            pen = self._wire_pen(WIRE_SELECTION_COLOR, SELECTED_WIRE_PEN_WIDTH, wire.wire_type)
        else:
            pen = self._wire_pen(wire.color, WIRE_PEN_WIDTH, wire.wire_type)

        painter.save()
        if wire.wire_type == WIRE_BACK:
            painter.setOpacity(BACK_WIRE_OPACITY)
        painter.setPen(pen)
        painter.drawLine(QLineF(x1, y1, x2, y2))
        painter.restore()

        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(QColor(WIRE_END_COLOR)))
        painter.drawEllipse(QPointF(x1, y1), WIRE_END_RADIUS, WIRE_END_RADIUS)
        painter.drawEllipse(QPointF(x2, y2), WIRE_END_RADIUS, WIRE_END_RADIUS)

    def _draw_preview(self, painter: QPainter, segment, color: str, wire_type: str) -> None:
        painter.save()
        painter.setOpacity(PREVIEW_BACK_OPACITY if wire_type == WIRE_BACK else PREVIEW_FRONT_OPACITY)
        painter.setPen(self._wire_pen(color, WIRE_PEN_WIDTH, wire_type))
        painter.drawLine(QLineF(*segment))
        painter.restore()

    # --- Components ---

    def _body_rect(self, component: ComponentData) -> QRectF:
        rect = _rect(*cell_rect(component.x, component.y, component.w, component.h))
        return rect.adjusted(BODY_INSET, BODY_INSET, -BODY_INSET, -BODY_INSET)

    def _outline_pen(self, selected: bool, color: str) -> QPen:
        if selected:
            return QPen(QColor(SELECTION_COLOR), 2)
        return QPen(QColor(color), 1)

    def _draw_substrate(self, painter: QPainter, component: ComponentData, selected: bool) -> None:
        painter.setPen(self._outline_pen(selected, SUBSTRATE_OUTLINE_COLOR))
        painter.setBrush(QBrush(QColor(SUBSTRATE_COLOR)))
        painter.drawRect(self._body_rect(component))
        self._draw_holes(painter, component.x, component.y, component.w, component.h)
        self._draw_label(painter, component)

    def _draw_component(self, painter: QPainter, component: ComponentData, selected: bool) -> None:
        painter.setPen(self._outline_pen(selected, COMPONENT_OUTLINE))
        painter.setBrush(QBrush(QColor(*COMPONENT_FILL)))
        body = self._body_rect(component)
        painter.drawRect(body)

        for side in (TOP, BOTTOM):
            for index in range(component.edge_length):
                gx, gy = slot_cell(component, side, index)
                slot = slot_at(component, gx, gy)
                if slot is None or slot.side != side:
                    continue
                if active_pin_at(component, gx, gy) is not None:
                    self._draw_pad(painter, component, slot)
                else:
                    self._draw_empty_slot(painter, gx, gy)

        self._draw_label(painter, component)

    def _draw_pad(self, painter: QPainter, component: ComponentData, slot) -> None:
        placement = pin_placement(component, slot)
        pad = QRectF(placement.x - placement.width / 2, placement.y - placement.height / 2,
                     placement.width, placement.height)
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(QColor(PAD_COLOR)))
        painter.drawRect(pad)
        painter.setBrush(QBrush(QColor(PAD_HIGHLIGHT)))
        painter.drawEllipse(QPointF(placement.x - 1, placement.y - 1), 1, 1)

        # Pin names sit just inside the body, next to their pad
        inward = 1 if slot.side == TOP else -1
        if component.rotate:
            text_center = QPointF(placement.x - inward * PITCH * 0.6, placement.y)
        else:
            text_center = QPointF(placement.x, placement.y + inward * PITCH * 0.6)
        painter.setFont(self._pin_font)
        painter.setPen(QPen(QColor(TEXT_COLOR)))
        text_rect = QRectF(text_center.x() - PITCH, text_center.y() - PITCH / 4, PITCH * 2, PITCH / 2)
        painter.drawText(text_rect, Qt.AlignmentFlag.AlignCenter, slot.name)

    def _draw_empty_slot(self, painter: QPainter, gx: int, gy: int) -> None:
        cx, cy = grid_to_world(gx, gy)
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(QColor(INACTIVE_SLOT_COLOR)))
        painter.drawEllipse(QPointF(cx, cy), 1.5, 1.5)

    def _draw_label(self, painter: QPainter, component: ComponentData) -> None:
        if not component.label:
            return
        painter.setFont(self._label_font)
        painter.setPen(QPen(QColor(TEXT_COLOR)))
        painter.drawText(self._body_rect(component), Qt.AlignmentFlag.AlignCenter, component.label)
