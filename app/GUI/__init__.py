from .board_canvas import BoardCanvas
from .board_renderer import BoardRenderer
from .keybindings import KeybindingsRegistry
from .main_window import MainWindow
from .properties_panel import PropertiesPanel

__all__ = [
    'BoardCanvas',
    'BoardRenderer',
    'KeybindingsRegistry',
    'MainWindow',
    'PropertiesPanel',
]
