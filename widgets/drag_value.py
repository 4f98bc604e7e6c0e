"""
Numeric field that changes value while the mouse is dragged across it.
"""

import math
from PyQt5.QtWidgets import QDoubleSpinBox, QAbstractSpinBox
from PyQt5.QtCore import Qt, pyqtSignal


class DragValueSpinBox(QDoubleSpinBox):
    """QDoubleSpinBox edited by horizontal drags at ``speed`` units per pixel."""

    valueEdited = pyqtSignal(float)

    UNBOUNDED = 1e9
    MIN_DECIMALS = 1

    def __init__(self, parent=None):
        super().__init__(parent)
        self._speed = 1.0
        self._decimals_set = False
        self._drag_origin = None
        self._drag_start_value = 0.0

        self.setButtonSymbols(QAbstractSpinBox.NoButtons)
        self.setAlignment(Qt.AlignCenter)
        self.setCursor(Qt.SizeHorCursor)
        self.setRange(-self.UNBOUNDED, self.UNBOUNDED)
        self.set_speed(1.0)
        self.valueChanged.connect(self.valueEdited.emit)

    def speed(self) -> float:
        return self._speed

    def set_speed(self, speed: float):
        if speed == self._speed and self._decimals_set:
            return
        self._speed = speed
        self._decimals_set = True
        self.blockSignals(True)
        self.setSingleStep(speed)
        # Enough decimals to show one step and the values a FloatSlider produces
        step_decimals = math.ceil(-math.log10(speed)) if speed > 0 else 2
        self.setDecimals(max(self.MIN_DECIMALS, step_decimals))
        self.blockSignals(False)

    def set_value_range(self, value_range):
        """Limit the range; None means unbounded."""
        low, high = value_range if value_range is not None else (-self.UNBOUNDED, self.UNBOUNDED)
        self.blockSignals(True)
        self.setRange(low, high)
        self.blockSignals(False)

    def set_value(self, value: float):
        """Show a value without emitting valueEdited."""
        self.blockSignals(True)
        self.setValue(value)
        self.blockSignals(False)

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self._drag_origin = event.globalPos().x()
            self._drag_start_value = self.value()
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        if self._drag_origin is not None and event.buttons() & Qt.LeftButton:
            delta = event.globalPos().x() - self._drag_origin
            self.setValue(self._drag_start_value + delta * self._speed)
            event.accept()
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event):
        self._drag_origin = None
        super().mouseReleaseEvent(event)
