"""
GUI modules for the widget gallery.
"""

from .main_window import MainWindow
from .qt_context import QtContext, QtUi, WindowFrame

__all__ = [
    'MainWindow',
    'QtContext',
    'QtUi',
    'WindowFrame'
]
