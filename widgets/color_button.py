"""
Color swatch button with a non-modal RGBA color editor.
"""

from PyQt5.QtWidgets import QPushButton, QColorDialog
from PyQt5.QtCore import pyqtSignal
from PyQt5.QtGui import QColor

from core.color import Color32


class ColorButton(QPushButton):
    """Shows a Color32 swatch and emits colorEdited while the editor is open."""

    colorEdited = pyqtSignal(object)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._color = Color32(0, 0, 0, 255)
        self._dialog = None
        self.setFixedWidth(48)
        self.clicked.connect(self.open_editor)
        self._update_swatch()

    def color(self) -> Color32:
        return self._color

    def set_color(self, color: Color32):
        """Show a color without emitting colorEdited."""
        if color == self._color:
            return
        self._color = color
        self._update_swatch()
        if self._dialog is not None and self._dialog.isVisible():
            self._dialog.blockSignals(True)
            self._dialog.setCurrentColor(QColor(*color.to_rgba_unmultiplied()))
            self._dialog.blockSignals(False)

    def open_editor(self):
        if self._dialog is None:
            self._dialog = QColorDialog(self)
            self._dialog.setOption(QColorDialog.ShowAlphaChannel, True)
            self._dialog.setOption(QColorDialog.NoButtons, True)
            self._dialog.setWindowTitle("Color")
            self._dialog.currentColorChanged.connect(self._on_color_changed)
        self._dialog.blockSignals(True)
        self._dialog.setCurrentColor(QColor(*self._color.to_rgba_unmultiplied()))
        self._dialog.blockSignals(False)
        self._dialog.show()
        self._dialog.raise_()

    def _on_color_changed(self, qcolor: QColor):
        color = Color32.from_rgba_unmultiplied(
            qcolor.red(), qcolor.green(), qcolor.blue(), qcolor.alpha())
        self._color = color
        self._update_swatch()
        self.colorEdited.emit(color)

    def _update_swatch(self):
        r, g, b, a = self._color.to_rgba_unmultiplied()
        self.setStyleSheet(f"background-color: rgba({r}, {g}, {b}, {a});")
        self.setToolTip(self._color.to_hex())
