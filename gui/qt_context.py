"""
PyQt5 backend for the immediate-mode frame contract.

Widgets are created the first time an id is drawn and cached. Every frame
re-synchronises them from the values passed by the panel. Qt signals only
record pending input on the widget's slot; the next frame consumes it.
Anything not drawn during a frame is hidden when the frame ends.
"""

from typing import Any, Callable, Dict, Optional, Set, Tuple
import logging

from PyQt5.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGridLayout, QLabel, QPushButton,
    QCheckBox, QFrame, QGraphicsOpacityEffect
)
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QPalette

from core.frame_context import FrameContext, Response, Ui, ValueRange, Window
from widgets import FloatSlider, DragValueSpinBox, PulsingProgressBar, ColorButton


logger = logging.getLogger(__name__)


class _WidgetSlot:
    """A cached Qt widget plus the input recorded since the last frame."""

    def __init__(self, kind: str):
        self.kind = kind
        self.widget: Optional[QWidget] = None
        self.clicked = False
        self.pending_value: Any = None

    def on_clicked(self, *args):
        self.clicked = True

    def on_value(self, value):
        self.pending_value = value

    def take_input(self) -> Tuple[bool, Any]:
        clicked, value = self.clicked, self.pending_value
        self.clicked = False
        self.pending_value = None
        return clicked, value


class WindowFrame(QWidget):
    """Top-level tool window hosting one immediate-mode window."""

    def __init__(self, title: str, parent: Optional[QWidget] = None):
        super().__init__(parent, Qt.Tool)
        self.setWindowTitle(title)
        self.close_requested = False
        self.resizable = (True, True)

        self.content_layout = QVBoxLayout(self)
        self.content_layout.setSpacing(6)

    def closeEvent(self, event):
        self.close_requested = True
        event.accept()

    def fit_height(self):
        """Pin the height to the contents when vertical resizing is off."""
        if self.resizable[1]:
            return
        self.content_layout.activate()
        self.setFixedHeight(self.sizeHint().height())


def _separator(layout: str) -> QFrame:
    line = QFrame()
    line.setFrameShape(QFrame.VLine if layout == 'horizontal' else QFrame.HLine)
    line.setFrameShadow(QFrame.Sunken)
    return line


def _container(layout: str) -> QWidget:
    widget = QWidget()
    if layout == 'grid':
        qt_layout = QGridLayout(widget)
    elif layout == 'horizontal':
        qt_layout = QHBoxLayout(widget)
    else:
        qt_layout = QVBoxLayout(widget)
    qt_layout.setContentsMargins(0, 0, 0, 0)
    return widget


class QtUi(Ui):
    """Region backed by a Qt layout."""

    def __init__(self, context: 'QtContext', id_path: str, container: QWidget,
                 layout: str = 'vertical', enabled: bool = True, visible: bool = True,
                 opacity: float = 1.0, striped: bool = False):
        super().__init__(context, id_path, layout=layout, enabled=enabled,
                         visible=visible, opacity=opacity)
        self.container = container
        self.qt_layout = container.layout()
        self.striped = striped

    # Placement

    def _place(self, widget: QWidget):
        layout = self.qt_layout
        index = layout.indexOf(widget)

        if isinstance(layout, QGridLayout):
            if index >= 0 and layout.getItemPosition(index)[:2] == (self.row, self.column):
                return
            if index >= 0:
                layout.removeWidget(widget)
            layout.addWidget(widget, self.row, self.column)
            return

        position = self.row if self.layout == 'vertical' else self.column
        if index != position:
            if index >= 0:
                layout.removeWidget(widget)
            layout.insertWidget(position, widget)

    def _sync_common(self, widget: QWidget, leaf: bool = True):
        widget.setEnabled(self.enabled)

        policy = widget.sizePolicy()
        policy.setRetainSizeWhenHidden(not self.visible)
        widget.setSizePolicy(policy)
        widget.setVisible(self.visible)

        if self.striped:
            odd = self.row % 2 == 1
            widget.setAutoFillBackground(odd)
            widget.setBackgroundRole(QPalette.AlternateBase if odd else QPalette.Window)

        if leaf:
            effect = widget.graphicsEffect()
            if self.opacity < 1.0:
                if not isinstance(effect, QGraphicsOpacityEffect):
                    effect = QGraphicsOpacityEffect(widget)
                    widget.setGraphicsEffect(effect)
                effect.setOpacity(self.opacity)
            elif isinstance(effect, QGraphicsOpacityEffect):
                widget.setGraphicsEffect(None)

    # Backend hooks

    def _make_child(self, layout: str, child_id: str, enabled: bool, visible: bool,
                    opacity: float, **options) -> 'QtUi':
        slot = self.context.slot(child_id, f'container:{layout}', lambda s: _container(layout))
        container = slot.widget
        self._place(container)
        self._sync_common(container, leaf=False)

        if layout == 'grid':
            spacing = options.get('spacing', (8.0, 4.0))
            grid = container.layout()
            grid.setHorizontalSpacing(int(spacing[0]))
            grid.setVerticalSpacing(int(spacing[1]))

        return QtUi(self.context, child_id, container, layout=layout, enabled=enabled,
                    visible=visible, opacity=opacity, striped=options.get('striped', False))

    def _widget(self, kind: str, widget_id: str, value: Any = None,
                value_range: Optional[ValueRange] = None, **options) -> Response:
        slot = self.context.slot(widget_id, kind, self._factory(kind))
        widget = slot.widget
        self._place(widget)
        self._sync_common(widget)

        clicked, proposed = slot.take_input()
        if proposed is None:
            self._show_value(kind, widget, value, value_range, options)
        else:
            self._show_options(kind, widget, value_range, options)

        return Response(
            clicked=clicked,
            hovered=widget.underMouse(),
            value=proposed,
            ids=(widget_id,)
        )

    def set_hover_text(self, widget_id: str, text: str):
        widget = self.context.widget_for(widget_id)
        if widget is not None and widget.toolTip() != text:
            widget.setToolTip(text)

    # Widget construction and synchronisation

    def _factory(self, kind: str) -> Callable[[_WidgetSlot], QWidget]:
        def build(slot: _WidgetSlot) -> QWidget:
            if kind == 'label':
                return QLabel()
            if kind == 'separator':
                return _separator(self.layout)
            if kind == 'button':
                widget = QPushButton()
                widget.clicked.connect(slot.on_clicked)
                return widget
            if kind == 'checkbox':
                widget = QCheckBox()
                widget.clicked.connect(slot.on_value)
                return widget
            if kind == 'slider':
                widget = FloatSlider()
                widget.valueEdited.connect(slot.on_value)
                return widget
            if kind == 'drag_value':
                widget = DragValueSpinBox()
                widget.valueEdited.connect(slot.on_value)
                return widget
            if kind == 'progress_bar':
                return PulsingProgressBar()
            if kind == 'color_edit':
                widget = ColorButton()
                widget.colorEdited.connect(slot.on_value)
                return widget
            raise ValueError(f"Unknown widget kind: {kind}")
        return build

    def _show_options(self, kind: str, widget: QWidget, value_range: Optional[ValueRange],
                      options: Dict[str, Any]):
        """Apply per-frame widget options other than the bound value."""
        text = options.get('text')
        if kind in ('label', 'button', 'checkbox') and widget.text() != text:
            widget.setText(text)
        elif kind == 'slider':
            widget.set_range(*value_range)
            widget.set_suffix(options.get('suffix', ''))
        elif kind == 'drag_value':
            widget.set_speed(options.get('speed', 1.0))
            widget.set_value_range(value_range)
        elif kind == 'progress_bar':
            widget.set_progress(options['progress'], text)
            widget.set_animated(options.get('animate', False))

    def _show_value(self, kind: str, widget: QWidget, value: Any,
                    value_range: Optional[ValueRange], options: Dict[str, Any]):
        self._show_options(kind, widget, value_range, options)
        if kind == 'checkbox':
            widget.setChecked(bool(value))
        elif kind in ('slider', 'drag_value'):
            widget.set_value(value)
        elif kind == 'color_edit':
            widget.set_color(value)


class QtContext(FrameContext):
    """Frame context drawing into cached Qt widgets."""

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__()
        self.parent = parent
        self._slots: Dict[str, _WidgetSlot] = {}
        self._windows: Dict[str, WindowFrame] = {}
        self._touched: Set[str] = set()
        self._shown_windows: Dict[str, bool] = {}

    def slot(self, widget_id: str, kind: str,
             factory: Callable[[_WidgetSlot], QWidget]) -> _WidgetSlot:
        """Cached slot for an id, rebuilt if the widget kind changed."""
        slot = self._slots.get(widget_id)
        if slot is None or slot.kind != kind:
            if slot is not None:
                slot.widget.deleteLater()
            slot = _WidgetSlot(kind)
            slot.widget = factory(slot)
            slot.widget.setObjectName(widget_id)
            self._slots[widget_id] = slot
            logger.debug(f"Created {kind} widget {widget_id}")
        self._touched.add(widget_id)
        return slot

    def widget_for(self, widget_id: str) -> Optional[QWidget]:
        slot = self._slots.get(widget_id)
        return slot.widget if slot is not None else None

    def window_frame(self, title: str) -> Optional[WindowFrame]:
        return self._windows.get(title)

    def begin_frame(self):
        self._touched = set()
        self._shown_windows = {}

    def end_frame(self) -> int:
        for widget_id, slot in self._slots.items():
            if widget_id not in self._touched and not slot.widget.isHidden():
                policy = slot.widget.sizePolicy()
                policy.setRetainSizeWhenHidden(False)
                slot.widget.setSizePolicy(policy)
                slot.widget.hide()

        for title, frame in self._windows.items():
            if self._shown_windows.get(title, False):
                frame.fit_height()
                if not frame.isVisible():
                    frame.show()
            elif frame.isVisible():
                frame.hide()

        return self.frame_number

    def _begin_window(self, title: str, resizable: Tuple[bool, bool],
                      default_width: Optional[float]) -> Window:
        frame = self._windows.get(title)
        if frame is None:
            frame = WindowFrame(title, self.parent)
            if default_width is not None:
                frame.resize(int(default_width), frame.sizeHint().height())
            self._windows[title] = frame
            logger.debug(f"Created window {title}")
        frame.resizable = resizable

        is_open = not frame.close_requested
        frame.close_requested = False
        self._shown_windows[title] = is_open

        ui = QtUi(self, title, frame)
        return Window(title=title, ui=ui, open=is_open)

    def close_all(self):
        """Hide every window without recording close requests."""
        for frame in self._windows.values():
            frame.hide()
