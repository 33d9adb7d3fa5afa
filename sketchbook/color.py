"""Color utilities.

Colors are plain ``(r, g, b)`` or ``(r, g, b, a)`` tuples of numbers in
0-255. Values may be floats while a sketch computes them; the compositor
rounds and clamps when it finally draws.
"""

import colorsys
from typing import Sequence, Tuple

from sketchbook.math_utils import clamp, lerp

Color = Tuple[float, ...]

# Pastel rainbow shared by the golden ratio spiral sketches
PASTEL_RAINBOW: Tuple[Color, ...] = (
    (255, 180, 180),  # red
    (255, 210, 160),  # orange
    (255, 255, 180),  # yellow
    (180, 255, 180),  # green
    (180, 240, 255),  # cyan
    (180, 180, 255),  # blue
    (210, 180, 255),  # violet
)


def with_alpha(color: Sequence[float], alpha: float) -> Color:
    """Return ``color`` with its alpha channel replaced."""
    return (color[0], color[1], color[2], clamp(alpha, 0.0, 255.0))


def scale_rgb(color: Sequence[float], factor: float) -> Color:
    """Multiply the RGB channels by ``factor`` (alpha untouched)."""
    scaled = tuple(clamp(c * factor, 0.0, 255.0) for c in color[:3])
    return scaled + tuple(color[3:])


def lerp_color(start: Sequence[float], stop: Sequence[float], amount: float) -> Color:
    """Blend two colors channel by channel; ``amount`` is clamped to [0, 1]."""
    amount = clamp(amount, 0.0, 1.0)
    if len(start) != len(stop):
        start = tuple(start[:3]) + (255,) if len(start) == 3 else tuple(start)
        stop = tuple(stop[:3]) + (255,) if len(stop) == 3 else tuple(stop)
    return tuple(lerp(a, b, amount) for a, b in zip(start, stop))


def hsb_to_rgb(hue: float, saturation: float, brightness: float) -> Color:
    """Convert HSB in p5 ranges (0-360, 0-100, 0-100) to RGB 0-255."""
    r, g, b = colorsys.hsv_to_rgb(
        (hue % 360.0) / 360.0,
        clamp(saturation / 100.0, 0.0, 1.0),
        clamp(brightness / 100.0, 0.0, 1.0),
    )
    return (r * 255.0, g * 255.0, b * 255.0)


def to_rgba_ints(color: Sequence[float]) -> Tuple[int, int, int, int]:
    """Round and clamp a color to integer RGBA for drawing."""
    r, g, b = (int(round(clamp(c, 0.0, 255.0))) for c in color[:3])
    a = int(round(clamp(color[3], 0.0, 255.0))) if len(color) > 3 else 255
    return (r, g, b, a)
