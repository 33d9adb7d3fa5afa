"""Quadratic easing curves mapping progress in [0, 1] to [0, 1].

Inputs outside [0, 1] are clamped first so a late frame never
overshoots the eased parameter.
"""

from sketchbook.math_utils import clamp


def ease_in(t: float) -> float:
    t = clamp(t, 0.0, 1.0)
    return t * t


def ease_out(t: float) -> float:
    t = clamp(t, 0.0, 1.0)
    return t * (2.0 - t)


def ease_in_out(t: float) -> float:
    t = clamp(t, 0.0, 1.0)
    if t < 0.5:
        return 2.0 * t * t
    return -1.0 + (4.0 - 2.0 * t) * t

