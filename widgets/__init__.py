"""
Widget components for the GUI.
"""

from .float_slider import FloatSlider
from .drag_value import DragValueSpinBox
from .progress_bar import PulsingProgressBar
from .color_button import ColorButton

__all__ = [
    'FloatSlider',
    'DragValueSpinBox',
    'PulsingProgressBar',
    'ColorButton'
]
