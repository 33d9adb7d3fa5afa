"""Tests for the golden ratio spiral entities."""

import math

import pytest

from sketchbook.color import PASTEL_RAINBOW
from sketchbook.draw_list import DrawList, EllipseOp, ShapeOp
from sketchbook.entities.spiral import (
    GoldenSpiralGrowth,
    PingPongParameter,
    SpiralTracer,
    spiral_position,
    spiral_style,
)
from sketchbook.exceptions import ConfigurationError


class TestPingPongParameter:
    """Tests for the bouncing scalar."""

    def test_reaches_max_after_499_ticks(self):
        """Starting at 1 going up, 499 ticks land on 500 and reverse."""
        param = PingPongParameter(1, 500)
        for _ in range(499):
            param.step()
        assert param.value == 500
        assert param.direction == -1

    def test_full_period_returns_to_start(self):
        """998 ticks make one full round trip."""
        param = PingPongParameter(1, 500)
        for _ in range(998):
            param.step()
        assert param.value == 1
        assert param.direction == 1

    def test_never_leaves_bounds(self):
        """Values stay inside [min, max] for many periods."""
        param = PingPongParameter(1, 20, step=3)
        for _ in range(500):
            param.step()
            assert 1 <= param.value <= 20

    def test_step_reports_flips(self):
        """step() names the bound it bounced off, and nothing otherwise."""
        param = PingPongParameter(1, 3)
        assert param.step() is None
        assert param.step() == "max"
        assert param.step() is None
        assert param.step() == "min"

    def test_starting_on_bound_flips_immediately(self):
        """Sitting on the bound it heads toward reverses on the next step."""
        param = PingPongParameter(1, 10, value=10, direction=1)
        assert param.step() == "max"
        assert param.value == 10
        assert param.direction == -1

    def test_initial_value_is_clamped(self):
        assert PingPongParameter(1, 10, value=50).value == 10

    @pytest.mark.parametrize("minimum,maximum", [(5, 5), (10, 1)])
    def test_invalid_bounds_rejected(self, minimum, maximum):
        with pytest.raises(ConfigurationError):
            PingPongParameter(minimum, maximum)

    def test_invalid_direction_rejected(self):
        with pytest.raises(ConfigurationError):
            PingPongParameter(1, 10, direction=0)


class TestSpiralStyle:
    """Color and thickness are pure functions of (a, counter)."""

    def test_same_inputs_same_style(self):
        assert spiral_style(250, 42) == spiral_style(250, 42)

    def test_color_advances_every_ten_points(self):
        """Palette index is floor(counter / 10) % 7."""
        assert spiral_style(1, 0)[0] == PASTEL_RAINBOW[0]
        assert spiral_style(1, 9)[0] == PASTEL_RAINBOW[0]
        assert spiral_style(1, 10)[0] == PASTEL_RAINBOW[1]
        assert spiral_style(1, 70)[0] == PASTEL_RAINBOW[0]

    def test_brightness_and_thickness_buckets(self):
        """Every 100 units of a darken by 15% and thicken by 1."""
        color, thickness = spiral_style(100, 0)
        assert thickness == 1
        assert color == PASTEL_RAINBOW[0]

        color, thickness = spiral_style(101, 0)
        assert thickness == 2
        assert color[0] == pytest.approx(255 * 0.85)

    def test_brightness_never_negative(self):
        """Far buckets clamp to black instead of going negative."""
        color, thickness = spiral_style(1000, 0)
        assert thickness == 10
        assert all(channel == 0 for channel in color)


class TestSpiralPosition:
    def test_radius_grows_with_a(self):
        x, y = spiral_position(100, (0, 0), 1.2)
        assert math.hypot(x, y) == pytest.approx(120)


class TestSpiralTracer:
    """Tests for the tracing entity."""

    def test_first_segment_is_a_straight_line(self, tick):
        tracer = SpiralTracer((400, 300), a_max=500, radius_scale=1.2)
        tracer.update(tick)
        assert tracer.segment is None
        assert tracer.dot is not None

        tracer.clear_output()
        tracer.update(tick)
        assert tracer.segment is not None
        assert tracer.segment.control1 is None

        tracer.clear_output()
        tracer.update(tick)
        assert tracer.segment.control1 is not None
        assert tracer.segment.control2 is not None

    def test_control_points_extrapolate_previous_direction(self, tick):
        """First control point continues the previous segment by 30%."""
        tracer = SpiralTracer((0, 0), a_max=500, radius_scale=1.0)
        for _ in range(3):
            tracer.update(tick)
        seg = tracer.segment
        p1 = spiral_position(1, (0, 0), 1.0)
        p2 = spiral_position(2, (0, 0), 1.0)
        assert seg.start == pytest.approx(p2)
        assert seg.control1[0] == pytest.approx(p2[0] + (p2[0] - p1[0]) * 0.3)
        assert seg.control1[1] == pytest.approx(p2[1] + (p2[1] - p1[1]) * 0.3)

    def test_whole_loop_budget_stops_at_minimum(self, tick):
        """One loop on [1, 5] draws 1..5..1 and then stops."""
        tracer = SpiralTracer((0, 0), a_max=5, radius_scale=1.0, max_loops=1)
        for _ in range(20):
            tracer.update(tick)
        assert tracer.complete
        assert tracer.loops_completed == 1
        assert tracer.counter == 9
        assert tracer.dot == pytest.approx(spiral_position(1, (0, 0), 1.0))

    def test_half_loop_budget_stops_at_maximum(self, tick):
        tracer = SpiralTracer((0, 0), a_max=5, radius_scale=1.0, max_loops=0.5)
        for _ in range(20):
            tracer.update(tick)
        assert tracer.complete
        assert tracer.counter == 5
        assert tracer.dot == pytest.approx(spiral_position(5, (0, 0), 1.0))

    def test_unbounded_tracer_never_completes(self, tick):
        tracer = SpiralTracer((0, 0), a_max=5, radius_scale=1.0)
        for _ in range(100):
            tracer.update(tick)
        assert not tracer.complete

    def test_render_after_clear_draws_nothing(self, tick):
        tracer = SpiralTracer((0, 0), a_max=5, radius_scale=1.0)
        tracer.update(tick)
        tracer.update(tick)
        canvas = DrawList()
        tracer.render(canvas)
        assert any(isinstance(op, ShapeOp) for op in canvas.ops)
        assert any(isinstance(op, EllipseOp) for op in canvas.ops)

        tracer.clear_output()
        canvas = DrawList()
        tracer.render(canvas)
        assert len(canvas) == 0


class TestGoldenSpiralGrowth:
    """Tests for the Fibonacci spiral sweep."""

    def test_sweep_reaches_25_turns(self, tick):
        growth = GoldenSpiralGrowth(total_frames=300)
        for _ in range(300):
            growth.update(tick)
        assert growth.current_angle == pytest.approx(2 * math.pi * 25)
        assert not growth.complete
        growth.update(tick)
        assert growth.complete

    def test_dot_count_grows(self, tick):
        growth = GoldenSpiralGrowth(total_frames=300)
        assert growth.dot_count() == 0
        growth.update(tick)
        first = growth.dot_count()
        growth.update(tick)
        assert growth.dot_count() > first > 0

    def test_rejects_empty_duration(self):
        with pytest.raises(ConfigurationError):
            GoldenSpiralGrowth(total_frames=0)
