"""
constants.py - Colors, fonts and window layout for the board view.

Board geometry (pitch, offsets, hit radii) lives with the Qt-free models
in models.geometry, models.pin_layout and models.hit_testing.
"""

# Window layout
DEFAULT_WINDOW_SIZE = (1200, 800)
PANEL_WIDTH = 280               # Fixed width of the properties panel
AUTOSAVE_INTERVAL_MS = 60000    # Default autosave period

# Canvas colors
BACKGROUND_COLOR = "#222222"
BOARD_COLOR = "#252525"
HOLE_COLOR = "#111111"
SUBSTRATE_COLOR = "#2E4A2E"
SUBSTRATE_OUTLINE_COLOR = "#4F7A4F"
COMPONENT_FILL = (60, 60, 80, 230)
COMPONENT_OUTLINE = "#CCCCCC"
SELECTION_COLOR = "#4A90E2"
WIRE_SELECTION_COLOR = "#00FF00"
WIRE_END_COLOR = "#AAAAAA"
PAD_COLOR = "#FFD700"
PAD_HIGHLIGHT = "#FFFFFF"
INACTIVE_SLOT_COLOR = "#555555"
TEXT_COLOR = "#FFFFFF"

# Wire styles
WIRE_PEN_WIDTH = 3.0
SELECTED_WIRE_PEN_WIDTH = 4.0
BACK_WIRE_OPACITY = 0.7
PREVIEW_FRONT_OPACITY = 0.8
PREVIEW_BACK_OPACITY = 0.6
BACK_WIRE_DASH = [5.0 / 3.0, 5.0 / 3.0]  # Qt dash lengths are in pen widths

# Fonts
PIN_FONT = ("Arial", 7)
LABEL_FONT = ("Sans Serif", 9)
