"""Expose core UI widgets for convenient imports."""

from .main_window import MainWindow
from .palette import Palette, PaletteEntry
from .counts_bar import CountsBar
from .title_edit import TitleEdit
from .logs_dock import LogsWidget
from .settings_dialog import SettingsDialog
from .paintings_dialog import PaintingsDialog

__all__ = [
    "MainWindow",
    "Palette",
    "PaletteEntry",
    "CountsBar",
    "TitleEdit",
    "LogsWidget",
    "SettingsDialog",
    "PaintingsDialog",
]
