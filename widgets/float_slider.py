"""
Slider over a floating point range with an editable value box.
"""

from PyQt5.QtWidgets import QWidget, QHBoxLayout, QSlider, QDoubleSpinBox
from PyQt5.QtCore import Qt, pyqtSignal


class FloatSlider(QWidget):
    """QSlider paired with a QDoubleSpinBox showing the value and suffix."""

    valueEdited = pyqtSignal(float)

    STEPS = 3600

    def __init__(self, parent=None):
        super().__init__(parent)
        self._low = 0.0
        self._high = 1.0

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.slider = QSlider(Qt.Horizontal)
        self.slider.setRange(0, self.STEPS)
        self.slider.valueChanged.connect(self._on_slider_moved)
        layout.addWidget(self.slider, 1)

        self.spinbox = QDoubleSpinBox()
        self.spinbox.setDecimals(1)
        self.spinbox.setButtonSymbols(QDoubleSpinBox.NoButtons)
        self.spinbox.valueChanged.connect(self._on_spinbox_edited)
        layout.addWidget(self.spinbox)

    def set_range(self, low: float, high: float):
        self._low, self._high = float(low), float(high)
        self.spinbox.blockSignals(True)
        self.spinbox.setRange(self._low, self._high)
        self.spinbox.blockSignals(False)

    def set_suffix(self, suffix: str):
        self.spinbox.setSuffix(suffix)

    def value(self) -> float:
        return self.spinbox.value()

    def set_value(self, value: float):
        """Show a value without emitting valueEdited."""
        for widget in (self.slider, self.spinbox):
            widget.blockSignals(True)
        self.spinbox.setValue(value)
        self.slider.setValue(self._to_steps(value))
        for widget in (self.slider, self.spinbox):
            widget.blockSignals(False)

    def _to_steps(self, value: float) -> int:
        span = self._high - self._low
        if span <= 0:
            return 0
        return round((value - self._low) / span * self.STEPS)

    def _on_slider_moved(self, steps: int):
        value = self._low + (self._high - self._low) * steps / self.STEPS
        self.spinbox.blockSignals(True)
        self.spinbox.setValue(value)
        self.spinbox.blockSignals(False)
        self.valueEdited.emit(value)

    def _on_spinbox_edited(self, value: float):
        self.slider.blockSignals(True)
        self.slider.setValue(self._to_steps(value))
        self.slider.blockSignals(False)
        self.valueEdited.emit(value)
