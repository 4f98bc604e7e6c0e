"""
Widget gallery panel: one example of each major type of widget.
"""

from typing import Optional

from .frame_context import FrameContext, Ui
from .gallery_state import GalleryState, SCALAR_RANGE, OPACITY_RANGE


class WidgetGallery:
    """Shows off one example of each major type of widget."""

    TITLE = "🗄 Widget Gallery"

    def __init__(self, state: Optional[GalleryState] = None):
        self.state = state if state is not None else GalleryState.default()

    def name(self) -> str:
        """Fixed window title."""
        return self.TITLE

    def show(self, ctx: FrameContext, open: bool = True) -> bool:
        """
        Draw the gallery window for this frame.

        Args:
            ctx: Frame context of the host toolkit
            open: Whether the window is shown at all

        Returns:
            Whether the window is still open after this frame
        """
        if not open:
            return False

        with ctx.window(self.name(), resizable=(True, False), default_width=280.0) as window:
            self.ui(window.ui)

        return window.open

    def ui(self, ui: Ui):
        """Draw the gallery grid and the panel-level controls."""
        state = self.state

        with ui.scope(enabled=state.enabled, visible=state.visible) as scoped:
            scoped.multiply_opacity(state.opacity)

            with scoped.grid("my_grid", num_columns=2, spacing=(40.0, 4.0), striped=True) as grid:
                self._gallery_grid_contents(grid)

        ui.separator()

        with ui.horizontal() as row:
            state.visible = row.checkbox(state.visible, "Visible", id_salt="visible") \
                .on_hover_text("Uncheck to hide all widgets.").value
            if state.visible:
                state.enabled = row.checkbox(state.enabled, "Interactive", id_salt="interactive") \
                    .on_hover_text("Uncheck to inspect how widgets look when disabled.").value

                opacity = row.drag_value(state.opacity, speed=0.01, value_range=OPACITY_RANGE,
                                         id_salt="opacity")
                (opacity | row.label("Opacity", id_salt="opacity_label")) \
                    .on_hover_text("Reduce this value to make widgets semi-transparent")
                state.opacity = opacity.value

    def _gallery_grid_contents(self, ui: Ui):
        state = self.state

        ui.label("Label")
        ui.label("Welcome to the widget gallery!")
        ui.end_row()

        ui.label("Button")
        if ui.button("Click me!", id_salt="button").clicked:
            state.boolean = not state.boolean
        ui.end_row()

        ui.label("Checkbox")
        state.boolean = ui.checkbox(state.boolean, "Checkbox", id_salt="checkbox").value
        ui.end_row()

        ui.label("Slider")
        state.scalar = ui.slider(state.scalar, SCALAR_RANGE, suffix="°", id_salt="slider").value
        ui.end_row()

        ui.label("DragValue")
        state.scalar = ui.drag_value(state.scalar, speed=1.0, value_range=SCALAR_RANGE,
                                     id_salt="drag_value").value
        ui.end_row()

        ui.label("ProgressBar")
        progress_bar = ui.progress_bar(state.progress(), show_percentage=True,
                                       animate=state.animate_progress_bar,
                                       id_salt="progress_bar")
        state.animate_progress_bar = progress_bar \
            .on_hover_text("The progress bar can be animated!").hovered
        ui.end_row()

        ui.label("Color picker")
        state.color = ui.color_edit_button_srgba(state.color, id_salt="color").value
        ui.end_row()

        ui.label("Separator")
        ui.separator()
        ui.end_row()
