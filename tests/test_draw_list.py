"""Tests for the draw-operation recorder."""

import math

import pytest

from sketchbook.draw_list import (
    BEZIER_SEGMENTS,
    BackgroundOp,
    DrawList,
    EllipseOp,
    RectOp,
    ShapeOp,
    TextOp,
)


class TestDrawList:
    """Tests for style state and primitive ops."""

    def test_background_is_recorded_in_order(self):
        canvas = DrawList()
        canvas.background((1, 2, 3))
        canvas.rect(0, 0, 10, 10)
        assert isinstance(canvas.ops[0], BackgroundOp)
        assert isinstance(canvas.ops[1], RectOp)

    def test_translate_moves_primitives(self):
        canvas = DrawList()
        canvas.translate(100, 50)
        canvas.rect(10, 10, 20, 30)
        canvas.circle(0, 0, 8)
        rect, circle = canvas.ops
        assert (rect.x, rect.y, rect.width, rect.height) == (110, 60, 20, 30)
        assert (circle.cx, circle.cy, circle.width) == (100, 50, 8)

    def test_scale_scales_sizes_and_strokes(self):
        canvas = DrawList()
        canvas.stroke_weight(2)
        canvas.scale(3)
        canvas.ellipse(1, 1, 4, 2)
        op = canvas.ops[0]
        assert isinstance(op, EllipseOp)
        assert (op.cx, op.cy, op.width, op.height) == (3, 3, 12, 6)
        assert op.stroke_weight == pytest.approx(6)

    def test_rotation_flattens_to_polygon(self):
        canvas = DrawList()
        canvas.rotate(math.pi / 4)
        canvas.rect(0, 0, 10, 10)
        op = canvas.ops[0]
        assert isinstance(op, ShapeOp)
        assert op.closed
        assert len(op.points) == 4

    def test_push_pop_restores_style_and_transform(self):
        canvas = DrawList()
        canvas.fill((1, 1, 1))
        canvas.push()
        canvas.fill((9, 9, 9))
        canvas.translate(50, 50)
        canvas.pop()
        canvas.rect(0, 0, 1, 1)
        op = canvas.ops[0]
        assert op.fill == (1, 1, 1)
        assert (op.x, op.y) == (0, 0)

    def test_invisible_shapes_are_skipped(self):
        canvas = DrawList()
        canvas.no_fill()
        canvas.no_stroke()
        canvas.ellipse(0, 0, 10)
        canvas.rect(0, 0, 10, 10)
        canvas.text("hidden", 0, 0)
        canvas.line(0, 0, 1, 1)
        assert len(canvas) == 0

    def test_line_has_no_fill(self):
        canvas = DrawList()
        canvas.line(0, 0, 5, 5)
        op = canvas.ops[0]
        assert op.fill is None
        assert op.points == ((0, 0), (5, 5))

    def test_bezier_is_sampled(self):
        canvas = DrawList()
        canvas.bezier(0, 0, 10, 0, 20, 10, 30, 10)
        op = canvas.ops[0]
        assert len(op.points) == BEZIER_SEGMENTS + 1
        assert op.points[0] == pytest.approx((0, 0))
        assert op.points[-1] == pytest.approx((30, 10))

    def test_text_uses_fill_color(self):
        canvas = DrawList()
        canvas.fill((10, 20, 30))
        canvas.text("+12%", 5, 5, size=20)
        op = canvas.ops[0]
        assert isinstance(op, TextOp)
        assert op.color == (10, 20, 30)
        assert op.size == 20

    def test_arc_spans_requested_angle(self):
        canvas = DrawList()
        canvas.arc(0, 0, 20, 20, 0, math.pi)
        op = canvas.ops[0]
        assert op.points[0] == pytest.approx((10, 0))
        assert op.points[-1][0] == pytest.approx(-10)
