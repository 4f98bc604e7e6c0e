"""
Headless frame context that records every frame and replays scripted input.

Used by the test-suite and by ``main.py --headless``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple
import logging

from .frame_context import FrameContext, Response, Ui, ValueRange, Window


logger = logging.getLogger(__name__)


@dataclass
class WidgetRecord:
    """One widget as emitted during a frame."""
    kind: str
    widget_id: str
    text: Optional[str] = None
    value: Any = None
    enabled: bool = True
    visible: bool = True
    opacity: float = 1.0
    row: int = 0
    column: int = 0
    hover_text: Optional[str] = None
    options: Dict[str, Any] = field(default_factory=dict)


@dataclass
class FrameRecord:
    """Everything drawn during one frame."""
    frame_number: int
    windows: List[str] = field(default_factory=list)
    widgets: List[WidgetRecord] = field(default_factory=list)

    def find(self, widget_id: str) -> Optional[WidgetRecord]:
        """Widget with the given id, or None if it was not emitted."""
        for widget in self.widgets:
            if widget.widget_id == widget_id:
                return widget
        return None

    def ids(self) -> List[str]:
        return [widget.widget_id for widget in self.widgets]

    def of_kind(self, kind: str) -> List[WidgetRecord]:
        return [widget for widget in self.widgets if widget.kind == kind]


class HeadlessUi(Ui):
    """Region of a headless window."""

    def _make_child(self, layout: str, child_id: str, enabled: bool, visible: bool,
                    opacity: float, **options) -> 'HeadlessUi':
        return HeadlessUi(self.context, child_id, layout=layout,
                          enabled=enabled, visible=visible, opacity=opacity)

    def _widget(self, kind: str, widget_id: str, value: Any = None,
                value_range: Optional[ValueRange] = None, **options) -> Response:
        context = self.context
        text = options.pop('text', None)
        record = WidgetRecord(
            kind=kind,
            widget_id=widget_id,
            text=text,
            value=value if value is not None else options.get('progress'),
            enabled=self.enabled,
            visible=self.visible,
            opacity=self.opacity,
            row=self.row,
            column=self.column,
            options=options
        )
        context.record.widgets.append(record)

        clicked = widget_id in context.pending_clicks
        proposed = context.pending_values.get(widget_id)
        if kind == 'checkbox' and clicked and proposed is None:
            proposed = not value

        return Response(
            clicked=clicked,
            hovered=self.visible and widget_id in context.hovered,
            value=proposed,
            ids=(widget_id,)
        )

    def set_hover_text(self, widget_id: str, text: str):
        record = self.context.record.find(widget_id)
        if record is not None:
            record.hover_text = text


class HeadlessContext(FrameContext):
    """
    Frame context without a display.

    Clicks, value edits and window-close requests are applied on the next
    frame and then consumed. Hover persists until unhover() is called.
    """

    def __init__(self):
        super().__init__()
        self.pending_clicks: Set[str] = set()
        self.pending_values: Dict[str, Any] = {}
        self.pending_closes: Set[str] = set()
        self.hovered: Set[str] = set()
        self.record = FrameRecord(frame_number=0)
        self.history: List[FrameRecord] = []

    # Scripted input

    def click(self, widget_id: str) -> 'HeadlessContext':
        self.pending_clicks.add(widget_id)
        return self

    def set_value(self, widget_id: str, value: Any) -> 'HeadlessContext':
        self.pending_values[widget_id] = value
        return self

    def hover(self, widget_id: str) -> 'HeadlessContext':
        self.hovered.add(widget_id)
        return self

    def unhover(self, widget_id: str) -> 'HeadlessContext':
        self.hovered.discard(widget_id)
        return self

    def close_window(self, title: str) -> 'HeadlessContext':
        self.pending_closes.add(title)
        return self

    # Frame lifecycle

    def begin_frame(self):
        self.record = FrameRecord(frame_number=self.frame_number)

    def end_frame(self) -> FrameRecord:
        emitted = set(self.record.ids())
        unused = (self.pending_clicks | set(self.pending_values)) - emitted
        for widget_id in sorted(unused):
            logger.debug(f"Input for {widget_id} ignored: widget not drawn this frame")

        self.pending_clicks.clear()
        self.pending_values.clear()
        self.pending_closes.clear()
        self.history.append(self.record)
        return self.record

    def _begin_window(self, title: str, resizable: Tuple[bool, bool],
                      default_width: Optional[float]) -> Window:
        self.record.windows.append(title)
        ui = HeadlessUi(self, title)
        return Window(title=title, ui=ui, open=title not in self.pending_closes)
