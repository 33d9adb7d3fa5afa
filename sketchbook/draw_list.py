"""Draw-operation recorder.

Sketches and entities never touch pixels. They describe a frame through
a ``DrawList`` with a p5-flavoured API (fill/stroke state, push/pop
transforms, shapes), and the list stores flat, world-space operations
that a compositor replays. Axis-aligned ellipses and rects stay
primitive; anything rotated or sheared is flattened to a polygon.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from sketchbook.color import Color

Point = Tuple[float, float]

_EPS = 1e-9
BEZIER_SEGMENTS = 16


@dataclass(frozen=True)
class BackgroundOp:
    color: Color


@dataclass(frozen=True)
class ShapeOp:
    """A polygon or polyline. ``closed`` only affects the outline."""

    points: Tuple[Point, ...]
    closed: bool
    fill: Optional[Color]
    stroke: Optional[Color]
    stroke_weight: float


@dataclass(frozen=True)
class EllipseOp:
    """Axis-aligned ellipse given by its center and full width/height."""

    cx: float
    cy: float
    width: float
    height: float
    fill: Optional[Color]
    stroke: Optional[Color]
    stroke_weight: float


@dataclass(frozen=True)
class RectOp:
    x: float
    y: float
    width: float
    height: float
    fill: Optional[Color]
    stroke: Optional[Color]
    stroke_weight: float
    corner_radius: float = 0.0


@dataclass(frozen=True)
class TextOp:
    text: str
    x: float
    y: float
    size: float
    color: Color


DrawOp = Union[BackgroundOp, ShapeOp, EllipseOp, RectOp, TextOp]


class Transform:
    """2D affine matrix ``[[a, c, e], [b, d, f]]``."""

    __slots__ = ("a", "b", "c", "d", "e", "f")

    def __init__(self, a=1.0, b=0.0, c=0.0, d=1.0, e=0.0, f=0.0) -> None:
        self.a, self.b, self.c, self.d, self.e, self.f = a, b, c, d, e, f

    def copy(self) -> "Transform":
        return Transform(self.a, self.b, self.c, self.d, self.e, self.f)

    def translate(self, tx: float, ty: float) -> None:
        self.e += self.a * tx + self.c * ty
        self.f += self.b * tx + self.d * ty

    def rotate(self, angle: float) -> None:
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        a, b, c, d = self.a, self.b, self.c, self.d
        self.a = a * cos_a + c * sin_a
        self.b = b * cos_a + d * sin_a
        self.c = -a * sin_a + c * cos_a
        self.d = -b * sin_a + d * cos_a

    def scale(self, sx: float, sy: float) -> None:
        self.a *= sx
        self.b *= sx
        self.c *= sy
        self.d *= sy

    def apply(self, x: float, y: float) -> Point:
        return (self.a * x + self.c * y + self.e, self.b * x + self.d * y + self.f)

    @property
    def axis_aligned(self) -> bool:
        return abs(self.b) < _EPS and abs(self.c) < _EPS

    @property
    def stroke_scale(self) -> float:
        return math.sqrt(abs(self.a * self.d - self.b * self.c))


def cubic_bezier_points(
    p0: Point, p1: Point, p2: Point, p3: Point, segments: int = BEZIER_SEGMENTS
) -> List[Point]:
    """Sample a cubic bezier into ``segments + 1`` points."""
    points = []
    for i in range(segments + 1):
        t = i / segments
        mt = 1.0 - t
        w0, w1, w2, w3 = mt * mt * mt, 3 * mt * mt * t, 3 * mt * t * t, t * t * t
        points.append(
            (
                w0 * p0[0] + w1 * p1[0] + w2 * p2[0] + w3 * p3[0],
                w0 * p0[1] + w1 * p1[1] + w2 * p2[1] + w3 * p3[1],
            )
        )
    return points


def _ellipse_segments(width: float, height: float) -> int:
    return max(12, min(48, int(max(abs(width), abs(height)) / 2)))


class DrawList:
    """Records one frame's worth of draw operations."""

    def __init__(self) -> None:
        self.ops: List[DrawOp] = []
        self._fill: Optional[Color] = (255, 255, 255)
        self._stroke: Optional[Color] = (0, 0, 0)
        self._stroke_weight: float = 1.0
        self._transform = Transform()
        self._stack: List[tuple] = []

    def __len__(self) -> int:
        return len(self.ops)

    # -- style -----------------------------------------------------------

    def fill(self, color: Sequence[float]) -> None:
        self._fill = tuple(color)

    def no_fill(self) -> None:
        self._fill = None

    def stroke(self, color: Sequence[float]) -> None:
        self._stroke = tuple(color)

    def no_stroke(self) -> None:
        self._stroke = None

    def stroke_weight(self, weight: float) -> None:
        self._stroke_weight = float(weight)

    # -- transforms ------------------------------------------------------

    def push(self) -> None:
        self._stack.append((self._fill, self._stroke, self._stroke_weight, self._transform.copy()))

    def pop(self) -> None:
        self._fill, self._stroke, self._stroke_weight, self._transform = self._stack.pop()

    def translate(self, x: float, y: float) -> None:
        self._transform.translate(x, y)

    def rotate(self, angle: float) -> None:
        self._transform.rotate(angle)

    def scale(self, sx: float, sy: Optional[float] = None) -> None:
        self._transform.scale(sx, sx if sy is None else sy)

    # -- shapes ----------------------------------------------------------

    def background(self, color: Sequence[float]) -> None:
        self.ops.append(BackgroundOp(tuple(color)))

    def _weight(self) -> float:
        return self._stroke_weight * self._transform.stroke_scale

    def _shape(self, local_points: Sequence[Point], closed: bool, filled: bool = True) -> None:
        fill = self._fill if filled else None
        if fill is None and self._stroke is None:
            return
        points = tuple(self._transform.apply(x, y) for x, y in local_points)
        self.ops.append(ShapeOp(points, closed, fill, self._stroke, self._weight()))

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        if self._stroke is None:
            return
        self._shape([(x1, y1), (x2, y2)], closed=False, filled=False)

    def bezier(self, x1, y1, x2, y2, x3, y3, x4, y4) -> None:
        """Cubic bezier curve (outline only)."""
        if self._stroke is None:
            return
        points = cubic_bezier_points((x1, y1), (x2, y2), (x3, y3), (x4, y4))
        self._shape(points, closed=False, filled=False)

    def polyline(self, points: Sequence[Point]) -> None:
        self._shape(list(points), closed=False, filled=False)

    def polygon(self, points: Sequence[Point]) -> None:
        self._shape(list(points), closed=True)

    def triangle(self, x1, y1, x2, y2, x3, y3) -> None:
        self._shape([(x1, y1), (x2, y2), (x3, y3)], closed=True)

    def ellipse(self, x: float, y: float, width: float, height: Optional[float] = None) -> None:
        """Ellipse centred on ``(x, y)``."""
        height = width if height is None else height
        if self._fill is None and self._stroke is None:
            return
        t = self._transform
        if t.axis_aligned:
            cx, cy = t.apply(x, y)
            self.ops.append(
                EllipseOp(
                    cx,
                    cy,
                    abs(width * t.a),
                    abs(height * t.d),
                    self._fill,
                    self._stroke,
                    self._weight(),
                )
            )
            return
        segments = _ellipse_segments(width, height)
        rx, ry = width / 2.0, height / 2.0
        points = [
            (x + math.cos(2 * math.pi * i / segments) * rx, y + math.sin(2 * math.pi * i / segments) * ry)
            for i in range(segments)
        ]
        self._shape(points, closed=True)

    def circle(self, x: float, y: float, diameter: float) -> None:
        self.ellipse(x, y, diameter, diameter)

    def rect(self, x: float, y: float, width: float, height: float, radius: float = 0.0) -> None:
        """Rectangle from its top-left corner."""
        if self._fill is None and self._stroke is None:
            return
        t = self._transform
        if t.axis_aligned:
            x1, y1 = t.apply(x, y)
            x2, y2 = t.apply(x + width, y + height)
            self.ops.append(
                RectOp(
                    min(x1, x2),
                    min(y1, y2),
                    abs(x2 - x1),
                    abs(y2 - y1),
                    self._fill,
                    self._stroke,
                    self._weight(),
                    radius * abs(t.a),
                )
            )
            return
        self._shape(
            [(x, y), (x + width, y), (x + width, y + height), (x, y + height)], closed=True
        )

    def arc(self, x: float, y: float, width: float, height: float, start: float, stop: float) -> None:
        """Elliptical arc; the fill closes along the chord."""
        segments = max(6, int(_ellipse_segments(width, height) * abs(stop - start) / (2 * math.pi)))
        rx, ry = width / 2.0, height / 2.0
        points = [
            (
                x + math.cos(start + (stop - start) * i / segments) * rx,
                y + math.sin(start + (stop - start) * i / segments) * ry,
            )
            for i in range(segments + 1)
        ]
        self._shape(points, closed=False)

    def text(self, text: str, x: float, y: float, size: float = 16) -> None:
        """Centre-aligned text in the current fill colour."""
        if self._fill is None:
            return
        tx, ty = self._transform.apply(x, y)
        self.ops.append(TextOp(text, tx, ty, size * self._transform.stroke_scale, self._fill))
