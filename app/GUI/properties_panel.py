from models.component import format_pin_list, parse_pin_list
from models.geometry import DEFAULT_GRID_HEIGHT, DEFAULT_GRID_WIDTH
from models.wire import DEFAULT_WIRE_COLOR, WIRE_BACK, WIRE_COLORS, WIRE_FRONT
from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import (QButtonGroup, QCheckBox, QFormLayout, QGridLayout,
                             QGroupBox, QHBoxLayout, QLabel, QLineEdit,
                             QPushButton, QRadioButton, QSpinBox, QVBoxLayout,
                             QWidget)

MAX_GRID_SIZE = 200
MAX_COMPONENT_SIZE = 100


class PropertiesPanel(QWidget):
    """Side panel for board size, the component form and wire style.

    The panel never touches the scene itself; it emits signals that the
    main window routes to the SceneController.
    """

    boardResizeRequested = pyqtSignal(int, int)        # width, height
    addComponentRequested = pyqtSignal(dict)           # form values
    updateComponentRequested = pyqtSignal(dict)        # form values
    wireColorChanged = pyqtSignal(str)                 # hex color
    wireTypeChanged = pyqtSignal(str)                  # 'front' or 'back'

    def __init__(self, parent=None):
        super().__init__(parent)
        self.current_component = None
        self.color_buttons = {}
        self.init_ui()

    def init_ui(self):
        """Initialize the properties panel UI"""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(5, 5, 5, 5)

        title = QLabel("Properties")
        title_font = QFont()
        title_font.setBold(True)
        title_font.setPointSize(10)
        title.setFont(title_font)
        layout.addWidget(title)

        layout.addWidget(self._build_board_group())
        layout.addWidget(self._build_component_group())
        layout.addWidget(self._build_wire_group())

        help_text = QLabel(
            "Click a hole or pin and drag to draw a wire.\n"
            "Drag a component to move it; attached wires follow.\n"
            "Drag outside the board to pan, scroll to zoom."
        )
        help_text.setWordWrap(True)
        help_text.setStyleSheet(
            "QLabel { background-color: #f9f9f9; padding: 8px; "
            "border: 1px solid #ddd; border-radius: 3px; font-size: 9pt; }"
        )
        layout.addWidget(help_text)
        layout.addStretch()

        self.show_no_selection()

    def _build_board_group(self):
        group = QGroupBox("Board")
        form = QFormLayout(group)
        form.setLabelAlignment(Qt.AlignmentFlag.AlignRight)

        self.board_width_spin = QSpinBox()
        self.board_width_spin.setRange(1, MAX_GRID_SIZE)
        self.board_width_spin.setValue(DEFAULT_GRID_WIDTH)
        form.addRow("Width:", self.board_width_spin)

        self.board_height_spin = QSpinBox()
        self.board_height_spin.setRange(1, MAX_GRID_SIZE)
        self.board_height_spin.setValue(DEFAULT_GRID_HEIGHT)
        form.addRow("Height:", self.board_height_spin)

        self.resize_button = QPushButton("Resize Board")
        self.resize_button.clicked.connect(self.request_resize)
        form.addRow(self.resize_button)
        return group

    def _build_component_group(self):
        self.component_group = QGroupBox("Component")
        form = QFormLayout(self.component_group)
        form.setLabelAlignment(Qt.AlignmentFlag.AlignRight)

        self.id_label = QLabel("-")
        self.id_label.setStyleSheet("QLabel { color: #666; }")
        form.addRow("ID:", self.id_label)

        self.width_spin = QSpinBox()
        self.width_spin.setRange(1, MAX_COMPONENT_SIZE)
        self.width_spin.setValue(4)
        form.addRow("Width:", self.width_spin)

        self.height_spin = QSpinBox()
        self.height_spin.setRange(1, MAX_COMPONENT_SIZE)
        self.height_spin.setValue(2)
        form.addRow("Height:", self.height_spin)

        self.label_input = QLineEdit()
        self.label_input.setPlaceholderText("e.g., NE555")
        form.addRow("Label:", self.label_input)

        self.pins_top_input = QLineEdit()
        self.pins_top_input.setPlaceholderText("e.g., VCC,,OUT (blank = no pin)")
        form.addRow("Top pins:", self.pins_top_input)

        self.pins_bottom_input = QLineEdit()
        self.pins_bottom_input.setPlaceholderText("e.g., GND,TRIG")
        form.addRow("Bottom pins:", self.pins_bottom_input)

        self.relative_check = QCheckBox("Spread pins along edge (strip)")
        form.addRow(self.relative_check)
        self.rotate_check = QCheckBox("Rotated 90°")
        form.addRow(self.rotate_check)
        self.board_check = QCheckBox("Board substrate")
        form.addRow(self.board_check)

        buttons = QHBoxLayout()
        self.add_button = QPushButton("Add")
        self.add_button.clicked.connect(self.request_add)
        buttons.addWidget(self.add_button)
        self.update_button = QPushButton("Update")
        self.update_button.clicked.connect(self.request_update)
        buttons.addWidget(self.update_button)
        form.addRow(buttons)
        return self.component_group

    def _build_wire_group(self):
        group = QGroupBox("Wire")
        layout = QVBoxLayout(group)

        palette = QGridLayout()
        for i, (name, color) in enumerate(WIRE_COLORS):
            button = QPushButton()
            button.setToolTip(name)
            button.setCheckable(True)
            button.setFixedSize(22, 22)
            button.setStyleSheet(
                f"QPushButton {{ background-color: {color}; border: 1px solid #888; }}"
                "QPushButton:checked { border: 2px solid #4a90e2; }"
            )
            button.clicked.connect(lambda checked, c=color: self.set_wire_color(c, emit=True))
            palette.addWidget(button, i // 6, i % 6)
            self.color_buttons[color] = button
        layout.addLayout(palette)

        types = QHBoxLayout()
        self.front_radio = QRadioButton("Front")
        self.back_radio = QRadioButton("Back")
        self.front_radio.setChecked(True)
        self.wire_type_group = QButtonGroup(self)
        self.wire_type_group.addButton(self.front_radio)
        self.wire_type_group.addButton(self.back_radio)
        self.front_radio.toggled.connect(self._on_wire_type_toggled)
        types.addWidget(self.front_radio)
        types.addWidget(self.back_radio)
        layout.addLayout(types)

        self.set_wire_color(DEFAULT_WIRE_COLOR)
        return group

    # --- Form access ---

    def form_values(self) -> dict:
        """Current component form as keyword arguments for the controller."""
        return {
            "w": self.width_spin.value(),
            "h": self.height_spin.value(),
            "label": self.label_input.text().strip(),
            "pins_top": parse_pin_list(self.pins_top_input.text()),
            "pins_bottom": parse_pin_list(self.pins_bottom_input.text()),
            "relative": self.relative_check.isChecked(),
            "rotate": self.rotate_check.isChecked(),
            "is_board": self.board_check.isChecked(),
        }

    def request_resize(self):
        self.boardResizeRequested.emit(self.board_width_spin.value(), self.board_height_spin.value())

    def request_add(self):
        values = self.form_values()
        if values["w"] <= 0 or values["h"] <= 0:
            return
        self.addComponentRequested.emit(values)

    def request_update(self):
        if self.current_component is None:
            return
        values = self.form_values()
        if values["w"] <= 0 or values["h"] <= 0:
            return
        self.updateComponentRequested.emit(values)

    # --- Display ---

    def show_board_size(self, width: int, height: int):
        self.board_width_spin.setValue(width)
        self.board_height_spin.setValue(height)

    def show_no_selection(self):
        """Keep the form for adding, but nothing to update"""
        self.current_component = None
        self.id_label.setText("-")
        self.update_button.setEnabled(False)

    def show_component(self, component):
        """Fill the form from the selected component (None clears the selection)"""
        if component is None:
            self.show_no_selection()
            return

        self.current_component = component
        self.id_label.setText(component.component_id)
        self.width_spin.setValue(component.w)
        self.height_spin.setValue(component.h)
        self.label_input.setText(component.label)
        self.pins_top_input.setText(format_pin_list(component.pins_top))
        self.pins_bottom_input.setText(format_pin_list(component.pins_bottom))
        self.relative_check.setChecked(component.relative)
        self.rotate_check.setChecked(component.rotate)
        self.board_check.setChecked(component.is_board)
        self.update_button.setEnabled(True)

    def set_wire_color(self, color: str, emit: bool = False):
        for button_color, button in self.color_buttons.items():
            button.setChecked(button_color == color)
        if emit:
            self.wireColorChanged.emit(color)

    def set_wire_type(self, wire_type: str):
        """Reflect the drawing wire type without emitting a change"""
        self.front_radio.blockSignals(True)
        self.back_radio.blockSignals(True)
        self.front_radio.setChecked(wire_type == WIRE_FRONT)
        self.back_radio.setChecked(wire_type == WIRE_BACK)
        self.front_radio.blockSignals(False)
        self.back_radio.blockSignals(False)

    def _on_wire_type_toggled(self, front_checked: bool):
        self.wireTypeChanged.emit(WIRE_FRONT if front_checked else WIRE_BACK)
