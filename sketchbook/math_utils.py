"""Scalar and 2D vector helpers shared by the sketches.

The scalar helpers follow the p5-style conventions the sketches were
designed around: ``map_range`` does not clamp unless asked, ``lerp`` is
unclamped, and ``heading`` of a zero vector is 0.
"""

from __future__ import annotations

import math

TWO_PI = 2.0 * math.pi


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp ``value`` into ``[lower, upper]``."""
    if value < lower:
        return lower
    if value > upper:
        return upper
    return value


def lerp(start: float, stop: float, amount: float) -> float:
    """Linear interpolation between ``start`` and ``stop``."""
    return start + (stop - start) * amount


def map_range(
    value: float,
    in_min: float,
    in_max: float,
    out_min: float,
    out_max: float,
    clamped: bool = False,
) -> float:
    """Re-map ``value`` from one range to another."""
    if in_max == in_min:
        return out_min
    result = out_min + (value - in_min) * (out_max - out_min) / (in_max - in_min)
    if clamped:
        lo, hi = (out_min, out_max) if out_min <= out_max else (out_max, out_min)
        return clamp(result, lo, hi)
    return result


def dist(x1: float, y1: float, x2: float, y2: float) -> float:
    return math.hypot(x2 - x1, y2 - y1)


class Vector2:
    """A small mutable 2D vector."""

    __slots__ = ("x", "y")

    def __init__(self, x: float = 0.0, y: float = 0.0) -> None:
        self.x: float = float(x)
        self.y: float = float(y)

    @classmethod
    def from_angle(cls, angle: float, length: float = 1.0) -> "Vector2":
        return cls(math.cos(angle) * length, math.sin(angle) * length)

    def __add__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vector2":
        return Vector2(self.x * scalar, self.y * scalar)

    def __truediv__(self, scalar: float) -> "Vector2":
        return Vector2(self.x / scalar, self.y / scalar)

    def __eq__(self, other: object) -> bool:
        if other.__class__ is not Vector2:
            return False
        return abs(self.x - other.x) < 1e-9 and abs(self.y - other.y) < 1e-9

    def __repr__(self) -> str:
        return f"Vector2({self.x}, {self.y})"

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def normalize(self) -> "Vector2":
        length = self.length()
        if length == 0:
            return Vector2(0, 0)
        return Vector2(self.x / length, self.y / length)

    def heading(self) -> float:
        """Angle of the vector in radians (0 for the zero vector)."""
        if self.x == 0 and self.y == 0:
            return 0.0
        return math.atan2(self.y, self.x)

    def copy(self) -> "Vector2":
        return Vector2(self.x, self.y)

    def add_inplace(self, other: "Vector2") -> "Vector2":
        """Add another vector to this one in-place."""
        self.x += other.x
        self.y += other.y
        return self

    def mul_inplace(self, scalar: float) -> "Vector2":
        """Multiply this vector by a scalar in-place."""
        self.x *= scalar
        self.y *= scalar
        return self

    def div_inplace(self, scalar: float) -> "Vector2":
        """Divide this vector by a scalar in-place."""
        self.x /= scalar
        self.y /= scalar
        return self

    def normalize_inplace(self) -> "Vector2":
        """Normalize this vector in-place (zero stays zero)."""
        length = math.sqrt(self.x * self.x + self.y * self.y)
        if length > 0:
            self.x /= length
            self.y /= length
        return self


__all__ = ["TWO_PI", "Vector2", "clamp", "dist", "lerp", "map_range"]
