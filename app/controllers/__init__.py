"""
Controllers for Perfboard Designer.

This package contains Qt-free controller classes that orchestrate
operations between models and views using an observer pattern.
"""

from .file_controller import FileController, validate_library_data, validate_scene_data
from .history_manager import HistoryManager
from .interaction_controller import InteractionController, InteractionMode, InteractionState
from .scene_controller import SceneController

__all__ = [
    "SceneController",
    "HistoryManager",
    "InteractionController",
    "InteractionMode",
    "InteractionState",
    "FileController",
    "validate_scene_data",
    "validate_library_data",
]
