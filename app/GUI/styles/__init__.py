"""
Styles module - Colors and layout constants for the Perfboard Designer GUI.

Usage:
    from GUI.styles import BOARD_COLOR, DEFAULT_WINDOW_SIZE
"""

from .constants import (AUTOSAVE_INTERVAL_MS, BACK_WIRE_DASH,
                        BACK_WIRE_OPACITY, BACKGROUND_COLOR, BOARD_COLOR,
                        COMPONENT_FILL, COMPONENT_OUTLINE,
                        DEFAULT_WINDOW_SIZE, HOLE_COLOR, INACTIVE_SLOT_COLOR,
                        LABEL_FONT, PAD_COLOR, PAD_HIGHLIGHT, PANEL_WIDTH,
                        PIN_FONT, PREVIEW_BACK_OPACITY, PREVIEW_FRONT_OPACITY,
                        SELECTED_WIRE_PEN_WIDTH, SELECTION_COLOR,
                        SUBSTRATE_COLOR, SUBSTRATE_OUTLINE_COLOR, TEXT_COLOR,
                        WIRE_END_COLOR, WIRE_PEN_WIDTH, WIRE_SELECTION_COLOR)

__all__ = [
    "DEFAULT_WINDOW_SIZE",
    "PANEL_WIDTH",
    "AUTOSAVE_INTERVAL_MS",
    "BACKGROUND_COLOR",
    "BOARD_COLOR",
    "HOLE_COLOR",
    "SUBSTRATE_COLOR",
    "SUBSTRATE_OUTLINE_COLOR",
    "COMPONENT_FILL",
    "COMPONENT_OUTLINE",
    "SELECTION_COLOR",
    "WIRE_SELECTION_COLOR",
    "WIRE_END_COLOR",
    "PAD_COLOR",
    "PAD_HIGHLIGHT",
    "INACTIVE_SLOT_COLOR",
    "TEXT_COLOR",
    "WIRE_PEN_WIDTH",
    "SELECTED_WIRE_PEN_WIDTH",
    "BACK_WIRE_OPACITY",
    "PREVIEW_FRONT_OPACITY",
    "PREVIEW_BACK_OPACITY",
    "BACK_WIRE_DASH",
    "PIN_FONT",
    "LABEL_FONT",
]
