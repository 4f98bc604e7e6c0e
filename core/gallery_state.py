"""
State owned by the widget gallery panel.
"""

from dataclasses import dataclass, field, fields
from typing import Dict, Any, Tuple

from .color import Color32, LIGHT_BLUE
from .frame_context import clamp_value


SCALAR_RANGE: Tuple[float, float] = (0.0, 360.0)
OPACITY_RANGE: Tuple[float, float] = (0.0, 1.0)


def default_color() -> Color32:
    """Light blue at half intensity."""
    return LIGHT_BLUE.linear_multiply(0.5)


@dataclass
class GalleryState:
    """Values bound to the widgets of the gallery."""
    enabled: bool = True
    visible: bool = True
    opacity: float = 1.0
    boolean: bool = False
    scalar: float = 42.0
    text: str = ""  # kept for the settings schema, no widget reads it
    color: Color32 = field(default_factory=default_color)
    animate_progress_bar: bool = False  # recomputed every frame from hover

    @classmethod
    def default(cls) -> 'GalleryState':
        """Fresh state with all defaults."""
        return cls()

    def progress(self) -> float:
        """Progress bar fill, 0.0 at 0° and 1.0 at 360°."""
        return self.scalar / SCALAR_RANGE[1]

    def to_dict(self) -> Dict[str, Any]:
        """Explicit-field mapping used for persistence."""
        return {
            'enabled': self.enabled,
            'visible': self.visible,
            'opacity': self.opacity,
            'boolean': self.boolean,
            'scalar': self.scalar,
            'text': self.text,
            'color': list(self.color.to_tuple()),
            'animate_progress_bar': self.animate_progress_bar
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GalleryState':
        """
        Build state from a persisted mapping.

        Missing keys fall back to their defaults and unknown keys are
        ignored. Numeric fields are clamped into their ranges.
        """
        state = cls()
        known = {f.name for f in fields(cls)}
        for name, value in data.items():
            if name not in known:
                continue
            if name == 'color':
                state.color = Color32(*[int(c) for c in value])
            elif name in ('opacity', 'scalar'):
                setattr(state, name, float(value))
            elif name == 'text':
                state.text = str(value)
            else:
                setattr(state, name, bool(value))

        state.opacity = clamp_value(state.opacity, OPACITY_RANGE)
        state.scalar = clamp_value(state.scalar, SCALAR_RANGE)
        return state
