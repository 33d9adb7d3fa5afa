"""Golden ratio spiral entities.

``PingPongParameter`` is the scalar that drives the tracing spirals: it
sweeps between two bounds and reverses exactly when it lands on one.
Color and stroke thickness are pure functions of that scalar and of a
separately increasing counter, so the same ``(a, counter)`` pair always
produces the same style.
"""

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Sequence, Tuple

from sketchbook.color import PASTEL_RAINBOW, Color, scale_rgb
from sketchbook.config.display import PHI
from sketchbook.entities.base import AnimatedEntity
from sketchbook.exceptions import ConfigurationError
from sketchbook.math_utils import TWO_PI, clamp, map_range

if TYPE_CHECKING:
    from sketchbook.draw_list import DrawList
    from sketchbook.update_phases import TickContext

Point = Tuple[float, float]

UPPER = "max"
LOWER = "min"


class PingPongParameter:
    """A scalar bouncing between ``minimum`` and ``maximum``.

    Each step computes ``clamp(value + direction * step, min, max)``; when
    the clamped value sits on the bound it was heading toward, the
    direction flips. The value never leaves its bounds.
    """

    def __init__(
        self,
        minimum: float,
        maximum: float,
        value: Optional[float] = None,
        direction: int = 1,
        step: float = 1,
    ) -> None:
        if minimum >= maximum:
            raise ConfigurationError(f"Ping-pong bounds must satisfy min < max, got [{minimum}, {maximum}]")
        if direction not in (1, -1):
            raise ConfigurationError(f"Direction must be +1 or -1, got {direction}")
        if step <= 0:
            raise ConfigurationError(f"Step must be positive, got {step}")
        self.minimum = minimum
        self.maximum = maximum
        self.value = clamp(minimum if value is None else value, minimum, maximum)
        self.direction = direction
        self.step_size = step

    def step(self) -> Optional[str]:
        """Advance once. Returns ``"max"``/``"min"`` when the direction flipped."""
        self.value = clamp(self.value + self.direction * self.step_size, self.minimum, self.maximum)
        if self.direction > 0 and self.value >= self.maximum:
            self.direction = -1
            return UPPER
        if self.direction < 0 and self.value <= self.minimum:
            self.direction = 1
            return LOWER
        return None


def spiral_position(a: float, center: Point, radius_scale: float) -> Point:
    """Golden-angle spiral point for parameter ``a``."""
    angle = a * TWO_PI / PHI
    radius = a * radius_scale
    return (center[0] + math.cos(angle) * radius, center[1] + math.sin(angle) * radius)


def spiral_style(
    a: float,
    counter: int,
    palette: Sequence[Color] = PASTEL_RAINBOW,
    a_min: float = 1,
    bucket_size: float = 100,
    colors_every: int = 10,
    darken_per_bucket: float = 0.15,
) -> Tuple[Color, int]:
    """Color and stroke thickness for a spiral point.

    The palette color advances every ``colors_every`` points; ``a`` picks a
    brightness/thickness bucket (darker and thicker further out).
    """
    color_index = (counter // colors_every) % len(palette)
    bucket = int(math.floor((a - a_min) / bucket_size))
    bucket = max(bucket, 0)
    multiplier = max(0.0, 1.0 - bucket * darken_per_bucket)
    return scale_rgb(palette[color_index], multiplier), bucket + 1


@dataclass(frozen=True)
class SpiralSegment:
    """The piece of curve produced by one spiral update."""

    start: Point
    end: Point
    control1: Optional[Point]
    control2: Optional[Point]
    color: Color
    thickness: int


class SpiralTracer(AnimatedEntity):
    """Traces a golden spiral onto a persistent canvas, one point per update.

    Attributes:
        parameter: The ping-pong scalar ``a``
        counter: Points drawn so far (drives the color cycle)
        max_loops: Complete round trips before stopping; a ``.5`` fraction
            stops at the outermost point. None runs forever.
        loops_completed: Returns to the minimum so far
        segment: Curve produced by the latest update, None if not updated
    """

    def __init__(
        self,
        center: Point,
        a_max: float,
        radius_scale: float,
        max_loops: Optional[float] = None,
        dot_size: float = 6,
        curve_tension: float = 0.3,
        palette: Sequence[Color] = PASTEL_RAINBOW,
    ) -> None:
        self.center = center
        self.radius_scale = radius_scale
        self.parameter = PingPongParameter(1, a_max)
        self.counter = 0
        self.max_loops = max_loops
        self.loops_completed = 0
        self.dot_size = dot_size
        self.curve_tension = curve_tension
        self.palette = tuple(palette)
        self.last_point: Optional[Point] = None
        self.second_last_point: Optional[Point] = None
        self.segment: Optional[SpiralSegment] = None
        self.dot: Optional[Point] = None
        self._dot_color: Color = palette[0] if palette else (255, 255, 255)
        self.complete = False
        self._finish_after_next = False

    def clear_output(self) -> None:
        """Forget the previous update's curve so nothing is redrawn."""
        self.segment = None
        self.dot = None

    def update(self, tick: "TickContext") -> None:
        if self.complete:
            return

        a = self.parameter.value
        x, y = spiral_position(a, self.center, self.radius_scale)
        color, thickness = spiral_style(a, self.counter, self.palette)

        if self.last_point is not None:
            control1 = control2 = None
            if self.second_last_point is not None:
                lx, ly = self.last_point
                sx, sy = self.second_last_point
                k = self.curve_tension
                control1 = (lx + (lx - sx) * k, ly + (ly - sy) * k)
                control2 = (x - (x - lx) * k, y - (y - ly) * k)
            self.segment = SpiralSegment(self.last_point, (x, y), control1, control2, color, thickness)
        self.dot = (x, y)
        self._dot_color = color

        self.second_last_point = self.last_point
        self.last_point = (x, y)
        self.counter += 1

        if self._finish_after_next:
            self.complete = True
            return

        flipped = self.parameter.step()
        if self.max_loops is None or flipped is None:
            return
        if flipped == LOWER:
            self.loops_completed += 1
            if self.loops_completed >= self.max_loops:
                self._finish_after_next = True
        elif self.loops_completed + 0.5 >= self.max_loops:
            self._finish_after_next = True

    def render(self, canvas: "DrawList") -> None:
        segment = self.segment
        if segment is not None:
            canvas.stroke(segment.color)
            canvas.stroke_weight(segment.thickness)
            canvas.no_fill()
            if segment.control1 is not None and segment.control2 is not None:
                canvas.bezier(*segment.start, *segment.control1, *segment.control2, *segment.end)
            else:
                canvas.line(*segment.start, *segment.end)
        if self.dot is not None:
            canvas.fill(self._dot_color)
            canvas.no_stroke()
            canvas.circle(self.dot[0], self.dot[1], self.dot_size)


class GoldenSpiralGrowth(AnimatedEntity):
    """A golden spiral of ovals whose sweep grows linearly over a fixed frame count.

    Dots sit every ``angle_step`` radians at ``r = base_radius * phi^(theta/(4*pi))``
    and grow at the same rate, three times taller than wide.
    """

    def __init__(
        self,
        total_frames: int,
        turns: float = 25,
        angle_step: float = 0.02,
        base_radius: float = 3.0,
        base_dot_width: float = 1.5,
    ) -> None:
        if total_frames <= 0:
            raise ConfigurationError(f"total_frames must be positive, got {total_frames}")
        self.total_frames = total_frames
        self.max_angle = TWO_PI * turns
        self.angle_step = angle_step
        self.base_radius = base_radius
        self.base_dot_width = base_dot_width
        self.current_frame = 0
        self.current_angle = 0.0
        self.complete = False

    def update(self, tick: "TickContext") -> None:
        if self.complete:
            return
        if self.current_frame < self.total_frames:
            self.current_frame += 1
            self.current_angle = map_range(self.current_frame, 0, self.total_frames, 0, self.max_angle)
        else:
            self.complete = True

    def dot_count(self) -> int:
        return int(math.ceil(self.current_angle / self.angle_step)) if self.current_angle > 0 else 0

    def render(self, canvas: "DrawList") -> None:
        canvas.stroke((0, 0, 0))
        canvas.stroke_weight(1)
        canvas.fill((255, 255, 255))
        growth_rate = math.pi * 4
        for i in range(self.dot_count()):
            angle = i * self.angle_step
            growth = PHI ** (angle / growth_rate)
            radius = self.base_radius * growth
            dot_width = self.base_dot_width * growth
            canvas.ellipse(radius * math.cos(angle), radius * math.sin(angle), dot_width, dot_width * 3)
