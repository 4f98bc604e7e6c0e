"""
Progress bar with explicit percentage text and a pulsing animation.
"""

import math
import time
from PyQt5.QtWidgets import QProgressBar
from PyQt5.QtCore import QTimer


class PulsingProgressBar(QProgressBar):
    """QProgressBar whose chunk brightness pulses while animated."""

    RESOLUTION = 1000
    PULSE_PERIOD = 1.2  # seconds

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setRange(0, self.RESOLUTION)
        self.setTextVisible(False)
        self._animated = False

        self._pulse_timer = QTimer(self)
        self._pulse_timer.timeout.connect(self._pulse)

    def set_progress(self, progress: float, text: str = None):
        self.setValue(round(progress * self.RESOLUTION))
        self.setTextVisible(text is not None)
        if text is not None:
            self.setFormat(text)

    def is_animated(self) -> bool:
        return self._animated

    def set_animated(self, animated: bool):
        if animated == self._animated:
            return
        self._animated = animated
        if animated:
            self._pulse_timer.start(50)
        else:
            self._pulse_timer.stop()
            self.setStyleSheet("")

    def _pulse(self):
        phase = (time.monotonic() % self.PULSE_PERIOD) / self.PULSE_PERIOD
        alpha = int(140 + 115 * (0.5 + 0.5 * math.sin(2 * math.pi * phase)))
        self.setStyleSheet(
            f"QProgressBar::chunk {{ background-color: rgba(90, 140, 230, {alpha}); }}"
        )
