"""
Immediate-mode host contract consumed by the widget gallery.

A FrameContext is driven once per frame by a host loop. Panels describe
their windows and widgets by calling methods on Ui objects; every widget call
returns a Response that carries what happened to that widget this frame.
Backends (headless recorder, Qt) implement the abstract hooks.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Optional, Tuple
import logging


logger = logging.getLogger(__name__)

ValueRange = Tuple[float, float]


def clamp_value(value: float, value_range: Optional[ValueRange]) -> float:
    """Clamp a numeric widget value into its inclusive range."""
    value = float(value)
    if value_range is None:
        return value
    low, high = value_range
    return max(low, min(high, value))


def progress_text(progress: float) -> str:
    """Percentage label shown on progress bars."""
    return f"{int(max(0.0, min(1.0, progress)) * 100)}%"


@dataclass
class Response:
    """Outcome of one widget call for the current frame."""
    clicked: bool = False
    hovered: bool = False
    changed: bool = False
    value: Any = None
    ids: Tuple[str, ...] = ()
    ui: Optional['Ui'] = field(default=None, repr=False, compare=False)

    def __or__(self, other: 'Response') -> 'Response':
        return Response(
            clicked=self.clicked or other.clicked,
            hovered=self.hovered or other.hovered,
            changed=self.changed or other.changed,
            value=self.value,
            ids=self.ids + tuple(i for i in other.ids if i not in self.ids),
            ui=self.ui or other.ui
        )

    def on_hover_text(self, text: str) -> 'Response':
        """Attach a tooltip to every widget this response covers."""
        if self.ui is not None:
            for widget_id in self.ids:
                self.ui.set_hover_text(widget_id, text)
        return self


class Ui(ABC):
    """
    One layout region of a window.

    Enabled, visible and opacity are inherited from the parent region.
    Widgets in a disabled or invisible region are still emitted but never
    report clicks, changes or hover.
    """

    def __init__(self, context: 'FrameContext', id_path: str, layout: str = 'vertical',
                 enabled: bool = True, visible: bool = True, opacity: float = 1.0):
        self.context = context
        self.id_path = id_path
        self.layout = layout
        self.enabled = enabled
        self.visible = visible
        self.opacity = opacity
        self.row = 0
        self.column = 0
        self._auto_ids = 0

    @property
    def interactive(self) -> bool:
        return self.enabled and self.visible

    def make_id(self, kind: str, id_salt: Optional[str] = None) -> str:
        """Id for the next widget: the salt if given, else kind plus ordinal."""
        self._auto_ids += 1
        if id_salt is not None:
            widget_id = id_salt
        else:
            widget_id = f"{self.id_path}/{kind}#{self._auto_ids}"
        return self.context.unique_id(widget_id)

    def _advance(self):
        if self.layout == 'vertical':
            self.row += 1
        else:
            self.column += 1

    def end_row(self):
        """Finish the current grid row."""
        self.row += 1
        self.column = 0

    def multiply_opacity(self, factor: float):
        """Scale the alpha of everything drawn from now on in this region."""
        self.opacity *= clamp_value(factor, (0.0, 1.0))

    # Layout

    @contextmanager
    def _child(self, layout: str, child_id: str, enabled: bool = True,
               visible: bool = True, **options) -> Iterator['Ui']:
        child = self._make_child(
            layout, child_id,
            enabled=self.enabled and enabled,
            visible=self.visible and visible,
            opacity=self.opacity,
            **options
        )
        yield child
        self._finish_child(child)
        self._advance()

    def scope(self, enabled: bool = True, visible: bool = True) -> Iterator['Ui']:
        """Nested region that can be disabled or made invisible."""
        return self._child('vertical', self.make_id('scope'), enabled=enabled, visible=visible)

    def horizontal(self) -> Iterator['Ui']:
        """Nested region laying widgets out left to right."""
        return self._child('horizontal', self.make_id('horizontal'))

    def grid(self, grid_id: str, num_columns: int = 2, spacing: Tuple[float, float] = (8.0, 4.0),
             striped: bool = False) -> Iterator['Ui']:
        """Nested region laying widgets out in rows; call end_row() after each row."""
        return self._child('grid', self.make_id('grid', grid_id), num_columns=num_columns,
                           spacing=spacing, striped=striped)

    # Widgets

    def _interact(self, kind: str, widget_id: str, value: Any = None,
                  value_range: Optional[ValueRange] = None, **options) -> Response:
        raw = self._widget(kind, widget_id, value=value, value_range=value_range, **options)
        self._advance()

        if not self.interactive:
            if raw.clicked or (raw.value is not None and raw.value != value):
                logger.debug(f"Dropped input for inactive widget {widget_id}")
            return Response(value=value, ids=(widget_id,), ui=self)

        new_value = raw.value if raw.value is not None else value
        if value_range is not None and new_value is not None:
            new_value = clamp_value(new_value, value_range)

        return Response(
            clicked=raw.clicked,
            hovered=raw.hovered,
            changed=new_value != value,
            value=new_value,
            ids=(widget_id,),
            ui=self
        )

    def label(self, text: str, id_salt: Optional[str] = None) -> Response:
        return self._interact('label', self.make_id('label', id_salt), text=text)

    def separator(self, id_salt: Optional[str] = None) -> Response:
        return self._interact('separator', self.make_id('separator', id_salt))

    def button(self, text: str, id_salt: Optional[str] = None) -> Response:
        return self._interact('button', self.make_id('button', id_salt), text=text)

    def checkbox(self, value: bool, text: str, id_salt: Optional[str] = None) -> Response:
        """Checkbox; ``response.value`` is the new checked state."""
        response = self._interact('checkbox', self.make_id('checkbox', id_salt),
                                  value=bool(value), text=text)
        response.value = bool(response.value)
        return response

    def slider(self, value: float, value_range: ValueRange, suffix: str = "",
               id_salt: Optional[str] = None) -> Response:
        """Slider over a closed range; ``response.value`` is the new value."""
        return self._interact('slider', self.make_id('slider', id_salt),
                              value=clamp_value(value, value_range),
                              value_range=value_range, suffix=suffix)

    def drag_value(self, value: float, speed: float = 1.0,
                   value_range: Optional[ValueRange] = None,
                   id_salt: Optional[str] = None) -> Response:
        """Number edited by dragging ``speed`` units per pixel."""
        return self._interact('drag_value', self.make_id('drag_value', id_salt),
                              value=clamp_value(value, value_range),
                              value_range=value_range, speed=speed)

    def progress_bar(self, progress: float, show_percentage: bool = False,
                     animate: bool = False, id_salt: Optional[str] = None) -> Response:
        progress = clamp_value(progress, (0.0, 1.0))
        response = self._interact(
            'progress_bar', self.make_id('progress_bar', id_salt),
            text=progress_text(progress) if show_percentage else None,
            progress=progress, animate=animate
        )
        response.value = progress
        return response

    def color_edit_button_srgba(self, color, id_salt: Optional[str] = None) -> Response:
        """Button that opens an RGBA color editor; ``response.value`` is a Color32."""
        return self._interact('color_edit', self.make_id('color_edit', id_salt), value=color)

    # Backend hooks

    @abstractmethod
    def _make_child(self, layout: str, child_id: str, enabled: bool, visible: bool,
                    opacity: float, **options) -> 'Ui':
        """Create the backend region for a nested layout."""

    def _finish_child(self, child: 'Ui'):
        """Called when a nested region's block ends."""

    @abstractmethod
    def _widget(self, kind: str, widget_id: str, value: Any = None,
                value_range: Optional[ValueRange] = None, **options) -> Response:
        """
        Emit a widget and report raw input.

        The returned value is the value proposed by user input this frame,
        or None when there was none. Masking and clamping happen in _interact.
        """

    @abstractmethod
    def set_hover_text(self, widget_id: str, text: str):
        """Attach a tooltip to a widget emitted this frame."""


@dataclass
class Window:
    """A window drawn during the current frame."""
    title: str
    ui: Ui
    open: bool = True


class FrameContext(ABC):
    """Drives one immediate-mode frame at a time."""

    def __init__(self):
        self.frame_number = 0
        self._frame_ids = set()

    def unique_id(self, widget_id: str) -> str:
        """Disambiguate ids reused within one frame."""
        candidate = widget_id
        suffix = 1
        while candidate in self._frame_ids:
            suffix += 1
            candidate = f"{widget_id}#{suffix}"
        self._frame_ids.add(candidate)
        return candidate

    @contextmanager
    def window(self, title: str, resizable: Tuple[bool, bool] = (True, True),
               default_width: Optional[float] = None) -> Iterator[Window]:
        window = self._begin_window(title, resizable, default_width)
        yield window
        self._end_window(window)

    def run(self, ui_fn: Callable[['FrameContext'], Any]):
        """Run one frame and return the backend's frame output."""
        self._frame_ids = set()
        self.begin_frame()
        ui_fn(self)
        output = self.end_frame()
        self.frame_number += 1
        return output

    def begin_frame(self):
        """Prepare backend state for a new frame."""

    @abstractmethod
    def end_frame(self):
        """Finish the frame and return its output."""

    @abstractmethod
    def _begin_window(self, title: str, resizable: Tuple[bool, bool],
                      default_width: Optional[float]) -> Window:
        """Open a window region for this frame."""

    def _end_window(self, window: Window):
        """Close a window region for this frame."""
