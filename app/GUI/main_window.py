"""Main application window with MVC architecture"""

import logging

from controllers.file_controller import FileController
from controllers.scene_controller import SceneController
from models.wire import WIRE_BACK, WIRE_FRONT
from PyQt6.QtCore import QSettings, QTimer
from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import QFileDialog, QHBoxLayout, QLabel, QMainWindow, QMessageBox, QWidget

from .board_canvas import BoardCanvas
from .keybindings import KeybindingsRegistry
from .properties_panel import PropertiesPanel
from .styles import AUTOSAVE_INTERVAL_MS, DEFAULT_WINDOW_SIZE, PANEL_WIDTH

logger = logging.getLogger(__name__)

APP_TITLE = "Perfboard Designer"
SETTINGS_ORG = "Perfboard"
SETTINGS_APP = "Perfboard Designer"
JSON_FILTER = "JSON Files (*.json);;All Files (*)"


class MainWindow(QMainWindow):
    """Main application window

    Builds the canvas and side panel and routes their requests to the
    controllers. Scene changes reach the views through the controller's
    observer callbacks.
    """

    def __init__(self, scene_ctrl=None, file_ctrl=None):
        super().__init__()
        self.setWindowTitle(APP_TITLE)
        self.setGeometry(100, 100, *DEFAULT_WINDOW_SIZE)

        # Keybindings registry (load before UI so shortcuts are applied)
        self.keybindings = KeybindingsRegistry()

        self.scene_ctrl = scene_ctrl or SceneController()
        self.file_ctrl = file_ctrl or FileController(self.scene_ctrl)

        self._dirty = False
        self._bound_actions = {}

        self.init_ui()
        self.create_menu_bar()
        self._connect_signals()

        self._restore_settings()
        self._check_auto_save_recovery()

        self._autosave_timer = QTimer(self)
        self._autosave_timer.timeout.connect(self._auto_save)
        self._start_autosave_timer()

        self._update_undo_redo_actions()
        self._update_title_bar()

    def init_ui(self):
        """Initialize user interface"""
        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        main_layout = QHBoxLayout(central_widget)

        self.canvas = BoardCanvas(self.scene_ctrl)
        main_layout.addWidget(self.canvas, 1)

        self.properties_panel = PropertiesPanel()
        self.properties_panel.setFixedWidth(PANEL_WIDTH)
        model = self.scene_ctrl.model
        self.properties_panel.show_board_size(model.grid_width, model.grid_height)
        main_layout.addWidget(self.properties_panel)

        self.position_label = QLabel("")
        self.zoom_label = QLabel("100%")
        status_bar = self.statusBar()
        if status_bar:
            status_bar.addPermanentWidget(self.position_label)
            status_bar.addPermanentWidget(self.zoom_label)

    def _connect_signals(self):
        """Connect signals between UI components"""
        panel = self.properties_panel
        panel.boardResizeRequested.connect(self.scene_ctrl.resize_board)
        panel.addComponentRequested.connect(self._on_add_component)
        panel.updateComponentRequested.connect(self._on_update_component)
        panel.wireColorChanged.connect(self.scene_ctrl.set_wire_color)
        panel.wireTypeChanged.connect(self.scene_ctrl.set_wire_type)

        self.canvas.pointerMoved.connect(self._on_pointer_moved)
        self.canvas.zoomChanged.connect(self._on_zoom_changed)

        self.scene_ctrl.on_selection_changed = panel.show_component
        self.scene_ctrl.add_observer(self._on_model_event)

    def _add_action(self, menu, text, action_name, slot):
        action = QAction(text, self)
        action.setShortcut(self.keybindings.get(action_name))
        action.triggered.connect(slot)
        menu.addAction(action)
        self._bound_actions[action_name] = action
        return action

    def create_menu_bar(self):
        """Create menu bar with File, Edit, Wire and View menus"""
        menubar = self.menuBar()
        if menubar is None:
            return

        file_menu = menubar.addMenu("&File")
        if file_menu is None:
            return
        self._add_action(file_menu, "&New", "file.new", self._on_new)
        self._add_action(file_menu, "&Open...", "file.open", self._on_load)
        self._add_action(file_menu, "&Save", "file.save", self._on_save)
        self._add_action(file_menu, "Save &As...", "file.save_as", self._on_save_as)
        file_menu.addSeparator()
        self._add_action(file_menu, "&Import Library...", "file.import_library", self._on_import_library)
        self._add_action(file_menu, "Export &Library...", "file.export_library", self._on_export_library)
        self._add_action(file_menu, "Export I&mage...", "file.export_image", self.export_image)
        file_menu.addSeparator()
        self._add_action(file_menu, "E&xit", "file.exit", self.close)

        edit_menu = menubar.addMenu("&Edit")
        if edit_menu is None:
            return
        self.undo_action = self._add_action(edit_menu, "&Undo", "edit.undo", self._on_undo)
        self.redo_action = self._add_action(edit_menu, "&Redo", "edit.redo", self._on_redo)
        edit_menu.addSeparator()
        self._add_action(edit_menu, "&Delete Selected", "edit.delete", self._on_delete)
        self._add_action(edit_menu, "&Rotate Component", "edit.rotate", self._on_rotate)
        edit_menu.addSeparator()
        self._add_action(edit_menu, "&Clear Board", "edit.clear", self.clear_board)

        wire_menu = menubar.addMenu("&Wire")
        if wire_menu:
            self._add_action(wire_menu, "&Front", "wire.front", lambda: self._set_wire_type(WIRE_FRONT))
            self._add_action(wire_menu, "&Back", "wire.back", lambda: self._set_wire_type(WIRE_BACK))

        view_menu = menubar.addMenu("&View")
        if view_menu:
            self._add_action(view_menu, "Zoom &In", "view.zoom_in", self.canvas.zoom_in)
            self._add_action(view_menu, "Zoom &Out", "view.zoom_out", self.canvas.zoom_out)
            self._add_action(view_menu, "&Reset View", "view.zoom_reset", self.canvas.reset_view)

    # Scene operations

    def _on_add_component(self, values: dict):
        component = self.scene_ctrl.add_component(**values)
        if component is not None:
            self._show_status(f"Added {component.component_id}")

    def _on_update_component(self, values: dict):
        self.scene_ctrl.update_selected_component(**values)

    def _on_delete(self):
        self.scene_ctrl.delete_selected()

    def _on_rotate(self):
        self.scene_ctrl.rotate_selected()

    def _set_wire_type(self, wire_type: str):
        if self.scene_ctrl.set_wire_type(wire_type):
            self.properties_panel.set_wire_type(wire_type)

    def _on_undo(self):
        """Undo the last action."""
        if self.scene_ctrl.undo():
            self._set_dirty(True)

    def _on_redo(self):
        """Redo the last undone action."""
        if self.scene_ctrl.redo():
            self._set_dirty(True)

    def _update_undo_redo_actions(self):
        """Update the enabled state of undo/redo actions."""
        if hasattr(self, "undo_action"):
            self.undo_action.setEnabled(self.scene_ctrl.can_undo())
        if hasattr(self, "redo_action"):
            self.redo_action.setEnabled(self.scene_ctrl.can_redo())

    def clear_board(self):
        """Remove every component and wire after confirmation"""
        reply = QMessageBox.question(
            self,
            "Clear Board",
            "Remove all components and wires?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        )
        if reply == QMessageBox.StandardButton.Yes:
            self.scene_ctrl.clear_all()

    # File Operations (delegated to FileController)

    def _on_new(self):
        """Start a new board"""
        if self._dirty:
            reply = QMessageBox.question(
                self,
                "New Board",
                "Unsaved changes will be lost. Continue?",
                QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            )
            if reply == QMessageBox.StandardButton.No:
                return
        self.file_ctrl.new_scene()
        self._set_dirty(False)

    def _on_save(self):
        """Quick save to current file"""
        if self.file_ctrl.current_file:
            try:
                self.file_ctrl.save_scene(self.file_ctrl.current_file)
                self.file_ctrl.clear_auto_save()
                self._set_dirty(False)
                self._show_status(f"Saved to {self.file_ctrl.current_file}")
            except OSError as e:
                QMessageBox.critical(self, "Error", f"Failed to save: {e}")
        else:
            self._on_save_as()

    def _on_save_as(self):
        """Save the board to a new file"""
        filename, _ = QFileDialog.getSaveFileName(self, "Save Board", "", JSON_FILTER)
        if filename:
            try:
                self.file_ctrl.save_scene(filename)
                self.file_ctrl.clear_auto_save()
                self._set_dirty(False)
                self._show_status(f"Saved to {filename}")
            except OSError as e:
                QMessageBox.critical(self, "Error", f"Failed to save: {e}")

    def _on_load(self):
        """Load a board from file"""
        filename, _ = QFileDialog.getOpenFileName(self, "Open Board", "", JSON_FILTER)
        if filename:
            try:
                self.file_ctrl.load_scene(filename)
                self._set_dirty(False)
                model = self.scene_ctrl.model
                self.properties_panel.show_board_size(model.grid_width, model.grid_height)
            except (OSError, ValueError) as e:
                QMessageBox.critical(self, "Error", f"Failed to load: {e}")

    def _on_import_library(self):
        filename, _ = QFileDialog.getOpenFileName(self, "Import Library", "", JSON_FILTER)
        if filename:
            try:
                count = self.file_ctrl.import_library(filename)
                self._show_status(f"Imported {count} components")
            except (OSError, ValueError) as e:
                QMessageBox.critical(self, "Error", f"Failed to import library: {e}")

    def _on_export_library(self):
        filename, _ = QFileDialog.getSaveFileName(self, "Export Library", "", JSON_FILTER)
        if filename:
            try:
                self.file_ctrl.export_library(filename)
                self._show_status(f"Library exported to {filename}")
            except OSError as e:
                QMessageBox.critical(self, "Error", f"Failed to export library: {e}")

    def export_image(self):
        """Export the board as a PNG image"""
        filename, _ = QFileDialog.getSaveFileName(self, "Export Image", "", "PNG Images (*.png)")
        if not filename:
            return
        if not filename.lower().endswith(".png"):
            filename += ".png"
        if self.canvas.export_image(filename):
            QMessageBox.information(self, "Export Image", f"Board exported to:\n{filename}")
        else:
            QMessageBox.critical(self, "Error", f"Failed to write image:\n{filename}")

    # Observer and status

    def _on_model_event(self, event: str, data) -> None:
        """Track unsaved changes and keep menus in sync with the scene."""
        if event == "history_changed":
            self._update_undo_redo_actions()
        elif event == "board_resized":
            self.properties_panel.show_board_size(*data)
            self._set_dirty(True)
        elif event == "wire_style_changed":
            color, wire_type = data
            self.properties_panel.set_wire_color(color)
            self.properties_panel.set_wire_type(wire_type)
        elif event in ("component_added", "component_updated", "component_removed",
                       "component_moved", "wire_added", "wire_removed",
                       "scene_cleared", "library_imported"):
            self._set_dirty(True)

    def _set_dirty(self, dirty: bool):
        self._dirty = dirty
        self._update_title_bar()

    def _update_title_bar(self):
        """Update window title to show dirty indicator."""
        title = self.file_ctrl.get_window_title(APP_TITLE)
        if self._dirty:
            title += " *"
        self.setWindowTitle(title)

    def _on_pointer_moved(self, gx: int, gy: int):
        self.position_label.setText(f"({gx}, {gy})")

    def _on_zoom_changed(self, scale: float):
        self.zoom_label.setText(f"{scale * 100:.0f}%")

    def _show_status(self, message: str, timeout: int = 3000):
        status_bar = self.statusBar()
        if status_bar:
            status_bar.showMessage(message, timeout)

    # Settings Persistence

    def _save_settings(self):
        """Save user preferences via QSettings"""
        settings = QSettings(SETTINGS_ORG, SETTINGS_APP)
        settings.setValue("window/geometry", self.saveGeometry())
        settings.setValue("wire/color", self.scene_ctrl.wire_color)
        settings.setValue("wire/type", self.scene_ctrl.wire_type)
        if settings.value("autosave/interval") is None:
            settings.setValue("autosave/interval", AUTOSAVE_INTERVAL_MS // 1000)
        if settings.value("autosave/enabled") is None:
            settings.setValue("autosave/enabled", True)

    def _restore_settings(self):
        """Restore user preferences from QSettings"""
        settings = QSettings(SETTINGS_ORG, SETTINGS_APP)

        geometry = settings.value("window/geometry")
        if geometry:
            self.restoreGeometry(geometry)

        color = settings.value("wire/color")
        if color:
            self.scene_ctrl.set_wire_color(str(color))
        wire_type = settings.value("wire/type")
        if wire_type:
            self.scene_ctrl.set_wire_type(str(wire_type))

    def closeEvent(self, event):
        """Save settings before closing"""
        self._save_settings()
        self.file_ctrl.clear_auto_save()
        super().closeEvent(event)

    # Auto-save and crash recovery

    def _start_autosave_timer(self):
        """Start the auto-save timer using the configured interval."""
        settings = QSettings(SETTINGS_ORG, SETTINGS_APP)
        interval = int(settings.value("autosave/interval", AUTOSAVE_INTERVAL_MS // 1000))
        enabled = settings.value("autosave/enabled", True)
        if enabled == "false" or enabled is False:
            self._autosave_timer.stop()
            return
        self._autosave_timer.start(interval * 1000)

    def _auto_save(self):
        """Periodic auto-save callback, saves to the recovery file."""
        if self.scene_ctrl.model.is_empty():
            return
        self.file_ctrl.auto_save()

    def _check_auto_save_recovery(self):
        """On startup, check for auto-save file and offer recovery."""
        if not self.file_ctrl.has_auto_save():
            return
        reply = QMessageBox.question(
            self,
            "Recover Unsaved Changes",
            "An auto-save recovery file was found.\n\n"
            "This may contain unsaved work from a previous session "
            "that was not closed cleanly.\n\n"
            "Would you like to recover it?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        )
        if reply == QMessageBox.StandardButton.Yes:
            source = self.file_ctrl.load_auto_save()
            if source is not None:
                self._set_dirty(True)
                model = self.scene_ctrl.model
                self.properties_panel.show_board_size(model.grid_width, model.grid_height)
                self._show_status("Auto-save recovered", 5000)
        self.file_ctrl.clear_auto_save()
