"""Tests for color, easing and scalar math helpers."""

import math

import pytest

from sketchbook.color import hsb_to_rgb, lerp_color, scale_rgb, to_rgba_ints, with_alpha
from sketchbook.easing import ease_in, ease_in_out, ease_out
from sketchbook.math_utils import Vector2, clamp, dist, lerp, map_range


class TestMath:
    def test_map_range_is_unclamped_by_default(self):
        assert map_range(15, 0, 10, 0, 100) == 150
        assert map_range(15, 0, 10, 0, 100, clamped=True) == 100

    def test_map_range_reversed_output(self):
        assert map_range(5, 0, 10, 255, 0) == pytest.approx(127.5)
        assert map_range(20, 10, 30, 255, 0, clamped=True) == pytest.approx(127.5)
        assert map_range(40, 10, 30, 255, 0, clamped=True) == 0

    def test_degenerate_input_range(self):
        assert map_range(3, 1, 1, 7, 9) == 7

    def test_lerp_and_clamp(self):
        assert lerp(0, 10, 0.25) == 2.5
        assert clamp(-1, 0, 1) == 0
        assert dist(0, 0, 3, 4) == 5

    def test_vector_heading_and_normalize(self):
        assert Vector2(0, 0).heading() == 0
        assert Vector2(0, 2).heading() == pytest.approx(math.pi / 2)
        assert Vector2(3, 4).normalize().length() == pytest.approx(1)


class TestEasing:
    @pytest.mark.parametrize("curve", [ease_in, ease_out, ease_in_out])
    def test_endpoints(self, curve):
        assert curve(0) == 0
        assert curve(1) == 1

    @pytest.mark.parametrize("curve", [ease_in, ease_out, ease_in_out])
    def test_clamps_outside_unit_interval(self, curve):
        assert curve(-0.5) == 0
        assert curve(1.5) == 1

    def test_ease_in_out_midpoint(self):
        assert ease_in_out(0.5) == pytest.approx(0.5)
        assert ease_in(0.5) < 0.5 < ease_out(0.5)


class TestColor:
    def test_hsb_primaries(self):
        assert hsb_to_rgb(0, 100, 100) == pytest.approx((255, 0, 0))
        assert hsb_to_rgb(120, 100, 100) == pytest.approx((0, 255, 0))
        assert hsb_to_rgb(0, 0, 5) == pytest.approx((12.75, 12.75, 12.75))

    def test_scale_keeps_alpha(self):
        assert scale_rgb((100, 200, 50, 128), 0.5) == (50, 100, 25, 128)
        assert scale_rgb((200, 200, 200), 2) == (255, 255, 255)

    def test_lerp_color_mixes_channels(self):
        assert lerp_color((0, 0, 0), (100, 200, 50), 0.5) == (50, 100, 25)
        assert lerp_color((0, 0, 0), (100, 100, 100, 0), 1.0) == (100, 100, 100, 0)

    def test_alpha_helpers(self):
        assert with_alpha((1, 2, 3), 300) == (1, 2, 3, 255)
        assert to_rgba_ints((10.4, 300, -5)) == (10, 255, 0, 255)
        assert to_rgba_ints((1, 2, 3, 127.6)) == (1, 2, 3, 128)
