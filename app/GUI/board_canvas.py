from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QColor, QPainter
from PyQt6.QtWidgets import QSizePolicy, QWidget

from controllers.interaction_controller import InteractionController

from .board_renderer import BoardRenderer
from .styles import BACKGROUND_COLOR


class BoardCanvas(QWidget):
    """Board drawing surface.

    Forwards pointer events to an InteractionController and repaints when
    the scene controller reports a change.
    """

    # Emitted with the grid coordinate under the pointer
    pointerMoved = pyqtSignal(int, int)
    # Emitted with the zoom factor after a wheel event
    zoomChanged = pyqtSignal(float)

    def __init__(self, scene_ctrl, parent=None):
        super().__init__(parent)
        self.scene_ctrl = scene_ctrl
        self.interaction = InteractionController(scene_ctrl)
        self.renderer = BoardRenderer()

        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMinimumSize(400, 300)

        self.scene_ctrl.add_observer(self._on_model_changed)

    @property
    def view(self):
        return self.interaction.view

    def _on_model_changed(self, event, data):
        self.update()

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(BACKGROUND_COLOR))
        view = self.view
        painter.translate(view.pan_x, view.pan_y)
        painter.scale(view.scale, view.scale)
        self.renderer.paint(
            painter,
            self.scene_ctrl.model,
            selection=self.scene_ctrl.selection,
            preview=self.interaction.preview_segment(),
            preview_style=(self.scene_ctrl.wire_color, self.scene_ctrl.wire_type),
        )
        painter.end()

    def mousePressEvent(self, event):
        if event is None or event.button() != Qt.MouseButton.LeftButton:
            return
        pos = event.position()
        if self.interaction.mouse_down(pos.x(), pos.y()):
            self.update()

    def mouseMoveEvent(self, event):
        if event is None:
            return
        pos = event.position()
        changed = self.interaction.mouse_move(pos.x(), pos.y())
        self.pointerMoved.emit(*self.interaction.pointer_grid())
        if changed:
            self.update()

    def mouseReleaseEvent(self, event):
        if event is None or event.button() != Qt.MouseButton.LeftButton:
            return
        pos = event.position()
        if self.interaction.mouse_up(pos.x(), pos.y()):
            self.update()

    def leaveEvent(self, event):
        if self.interaction.mouse_leave():
            self.update()
        super().leaveEvent(event)

    def wheelEvent(self, event):
        if event is None:
            return
        if self.interaction.wheel(event.angleDelta().y()):
            self.zoomChanged.emit(self.view.scale)
            self.update()
        event.accept()

    def zoom_in(self):
        self.view.zoom(1)
        self.zoomChanged.emit(self.view.scale)
        self.update()

    def zoom_out(self):
        self.view.zoom(-1)
        self.zoomChanged.emit(self.view.scale)
        self.update()

    def reset_view(self):
        self.interaction.reset_view()
        self.zoomChanged.emit(self.view.scale)
        self.update()

    def export_image(self, filename) -> bool:
        """Save the whole scene as PNG at 1:1, independent of pan and zoom."""
        return self.renderer.export_image(self.scene_ctrl.model, filename)
