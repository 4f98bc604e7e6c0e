"""
RGBA8 color type used by the widget gallery.

Colors are stored premultiplied in gamma (sRGB) space, one byte per channel.
Blending math happens in linear space via the vectorised sRGB transfer
functions below.
"""

from dataclasses import dataclass
import string
from typing import Tuple, Union
import numpy as np


ArrayLike = Union[float, np.ndarray]


def linear_from_gamma(srgb: ArrayLike) -> np.ndarray:
    """Convert sRGB values in [0, 1] to linear values in [0, 1]."""
    srgb = np.asarray(srgb, dtype=np.float64)
    return np.where(
        srgb <= 0.04045,
        srgb / 12.92,
        np.power((np.maximum(srgb, 0.0) + 0.055) / 1.055, 2.4)
    )


def gamma_from_linear(linear: ArrayLike) -> np.ndarray:
    """Convert linear values in [0, 1] to sRGB values in [0, 1]."""
    linear = np.clip(np.asarray(linear, dtype=np.float64), 0.0, 1.0)
    return np.where(
        linear <= 0.0031308,
        12.92 * linear,
        1.055 * np.power(linear, 1.0 / 2.4) - 0.055
    )


def _round_u8(values: np.ndarray) -> Tuple[int, ...]:
    """Round [0, 255] floats half-up and saturate into bytes."""
    rounded = np.floor(np.clip(values, 0.0, 255.0) + 0.5)
    return tuple(int(v) for v in np.clip(rounded, 0, 255))


@dataclass(frozen=True)
class Color32:
    """Premultiplied sRGBA color with 8 bits per channel."""
    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self):
        for name in ('r', 'g', 'b', 'a'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise ValueError(f"Channel {name} must be an integer, got {value!r}")
            if not 0 <= value <= 255:
                raise ValueError(f"Channel {name}={value} is outside 0..255")

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> 'Color32':
        """Opaque color from sRGB bytes."""
        return cls(r, g, b, 255)

    @classmethod
    def from_rgba_premultiplied(cls, r: int, g: int, b: int, a: int) -> 'Color32':
        """Color from premultiplied sRGBA bytes."""
        return cls(r, g, b, a)

    @classmethod
    def from_rgba_unmultiplied(cls, r: int, g: int, b: int, a: int) -> 'Color32':
        """Color from straight (non-premultiplied) sRGBA bytes."""
        if a == 255:
            return cls(r, g, b, 255)
        if a == 0:
            return TRANSPARENT

        alpha = a / 255.0
        linear = linear_from_gamma(np.array([r, g, b]) / 255.0) * alpha
        rgb = _round_u8(gamma_from_linear(linear) * 255.0)
        return cls(rgb[0], rgb[1], rgb[2], a)

    @classmethod
    def from_hex(cls, text: str) -> 'Color32':
        """
        Parse ``#rrggbb`` or ``#rrggbbaa`` (unmultiplied alpha).

        Raises:
            ValueError: if the text is not a valid hex color
        """
        digits = text.strip()
        if digits.startswith('#'):
            digits = digits[1:]
        if len(digits) not in (6, 8) or not all(c in string.hexdigits for c in digits):
            raise ValueError(f"Invalid hex color: {text!r}")
        channels = [int(digits[i:i + 2], 16) for i in range(0, len(digits), 2)]
        if len(channels) == 3:
            return cls.from_rgb(*channels)
        return cls.from_rgba_unmultiplied(*channels)

    def to_tuple(self) -> Tuple[int, int, int, int]:
        """Premultiplied channels as a tuple."""
        return (self.r, self.g, self.b, self.a)

    def to_rgba_unmultiplied(self) -> Tuple[int, int, int, int]:
        """Straight-alpha channels, as color dialogs expect them."""
        if self.a in (0, 255):
            return self.to_tuple()

        alpha = self.a / 255.0
        linear = linear_from_gamma(np.array([self.r, self.g, self.b]) / 255.0) / alpha
        rgb = _round_u8(gamma_from_linear(linear) * 255.0)
        return (rgb[0], rgb[1], rgb[2], self.a)

    def to_hex(self) -> str:
        """Unmultiplied ``#rrggbbaa`` string."""
        return '#' + ''.join(f'{c:02x}' for c in self.to_rgba_unmultiplied())

    def linear_multiply(self, factor: float) -> 'Color32':
        """
        Multiply every channel by ``factor`` in linear space.

        With ``factor=0.5`` this makes the color half as opaque: alpha is
        halved along with the (premultiplied) color channels.
        """
        rgb = linear_from_gamma(np.array([self.r, self.g, self.b]) / 255.0) * factor
        alpha = (self.a / 255.0) * factor
        r, g, b = _round_u8(gamma_from_linear(rgb) * 255.0)
        a, = _round_u8(np.array([alpha * 255.0]))
        return Color32(r, g, b, a)

    def is_opaque(self) -> bool:
        return self.a == 255

    def __repr__(self) -> str:
        return f"Color32(r={self.r}, g={self.g}, b={self.b}, a={self.a})"


TRANSPARENT = Color32(0, 0, 0, 0)
BLACK = Color32.from_rgb(0, 0, 0)
WHITE = Color32.from_rgb(255, 255, 255)
GRAY = Color32.from_rgb(160, 160, 160)
DARK_GRAY = Color32.from_rgb(96, 96, 96)
RED = Color32.from_rgb(255, 0, 0)
GREEN = Color32.from_rgb(0, 255, 0)
BLUE = Color32.from_rgb(0, 0, 255)
LIGHT_BLUE = Color32.from_rgb(140, 180, 255)
