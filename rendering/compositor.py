"""Replays DrawLists onto a pygame surface.

The surface persists between frames: a frame that emits no background
draws on top of the previous one, which is how the spiral sketches keep
their trail. Translucent colors are drawn onto a temporary per-shape
SRCALPHA layer that is then blended onto the frame.
"""

import logging
from typing import Callable, Dict, Optional, Sequence, Tuple

import pygame

from sketchbook.color import to_rgba_ints
from sketchbook.draw_list import BackgroundOp, DrawList, EllipseOp, RectOp, ShapeOp, TextOp

logger = logging.getLogger(__name__)

Origin = Tuple[int, int]
DrawFn = Callable[[pygame.Surface, Tuple[int, ...], Origin], None]


class PygameCompositor:
    """Draws sketch output into ``surface``.

    Attributes:
        size: Canvas size in pixels
        surface: The frame buffer (exported as-is)
        frames_rendered: Number of DrawLists replayed
    """

    def __init__(self, size: Tuple[int, int], surface: Optional[pygame.Surface] = None) -> None:
        self.size = size
        self.surface = surface if surface is not None else pygame.Surface(size)
        self.frames_rendered = 0
        self._fonts: Dict[int, pygame.font.Font] = {}

    def render(self, canvas: DrawList) -> None:
        for op in canvas.ops:
            if isinstance(op, ShapeOp):
                self._draw_shape(op)
            elif isinstance(op, EllipseOp):
                self._draw_ellipse(op)
            elif isinstance(op, RectOp):
                self._draw_rect(op)
            elif isinstance(op, BackgroundOp):
                self._draw_background(op)
            elif isinstance(op, TextOp):
                self._draw_text(op)
        self.frames_rendered += 1

    def _blend(self, color: Sequence[float], bounds: pygame.Rect, draw: DrawFn) -> None:
        """Draw opaque colors directly, translucent ones through a temporary layer."""
        r, g, b, a = to_rgba_ints(color)
        if a == 0:
            return
        if a == 255:
            draw(self.surface, (r, g, b), (0, 0))
            return
        area = bounds.clip(self.surface.get_rect())
        if area.width <= 0 or area.height <= 0:
            return
        layer = pygame.Surface(area.size, pygame.SRCALPHA)
        draw(layer, (r, g, b, a), (area.x, area.y))
        self.surface.blit(layer, area.topleft)

    @staticmethod
    def _line_width(weight: float) -> int:
        return max(1, int(round(weight)))

    def _draw_background(self, op: BackgroundOp) -> None:
        self._blend(op.color, self.surface.get_rect(), lambda surf, color, origin: surf.fill(color))

    def _draw_shape(self, op: ShapeOp) -> None:
        points = op.points
        if not points:
            return
        pad = self._line_width(op.stroke_weight) + 1
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        bounds = pygame.Rect(
            int(min(xs)) - pad, int(min(ys)) - pad, int(max(xs) - min(xs)) + 2 * pad + 1, int(max(ys) - min(ys)) + 2 * pad + 1
        )

        if op.fill is not None and len(points) >= 3:
            def fill(surf, color, origin):
                pygame.draw.polygon(surf, color, [(x - origin[0], y - origin[1]) for x, y in points])

            self._blend(op.fill, bounds, fill)

        if op.stroke is not None and len(points) >= 2:
            width = self._line_width(op.stroke_weight)

            def outline(surf, color, origin):
                shifted = [(x - origin[0], y - origin[1]) for x, y in points]
                pygame.draw.lines(surf, color, op.closed, shifted, width)

            self._blend(op.stroke, bounds, outline)

    def _ellipse_rect(self, op: EllipseOp, origin: Origin) -> pygame.Rect:
        return pygame.Rect(
            int(round(op.cx - op.width / 2)) - origin[0],
            int(round(op.cy - op.height / 2)) - origin[1],
            max(1, int(round(op.width))),
            max(1, int(round(op.height))),
        )

    def _draw_ellipse(self, op: EllipseOp) -> None:
        pad = self._line_width(op.stroke_weight) + 1
        bounds = self._ellipse_rect(op, (0, 0)).inflate(2 * pad, 2 * pad)
        if op.fill is not None:
            self._blend(
                op.fill, bounds, lambda surf, color, origin: pygame.draw.ellipse(surf, color, self._ellipse_rect(op, origin))
            )
        if op.stroke is not None:
            width = self._line_width(op.stroke_weight)
            self._blend(
                op.stroke,
                bounds,
                lambda surf, color, origin: pygame.draw.ellipse(surf, color, self._ellipse_rect(op, origin), width),
            )

    def _draw_rect(self, op: RectOp) -> None:
        radius = int(round(op.corner_radius))
        pad = self._line_width(op.stroke_weight) + 1

        def shifted(origin: Origin) -> pygame.Rect:
            return pygame.Rect(
                int(round(op.x)) - origin[0],
                int(round(op.y)) - origin[1],
                max(1, int(round(op.width))),
                max(1, int(round(op.height))),
            )

        bounds = shifted((0, 0)).inflate(2 * pad, 2 * pad)
        if op.fill is not None:
            self._blend(
                op.fill,
                bounds,
                lambda surf, color, origin: pygame.draw.rect(surf, color, shifted(origin), 0, border_radius=radius),
            )
        if op.stroke is not None:
            width = self._line_width(op.stroke_weight)
            self._blend(
                op.stroke,
                bounds,
                lambda surf, color, origin: pygame.draw.rect(surf, color, shifted(origin), width, border_radius=radius),
            )

    def _font(self, size: int) -> pygame.font.Font:
        font = self._fonts.get(size)
        if font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            font = pygame.font.Font(None, size)
            self._fonts[size] = font
        return font

    def _draw_text(self, op: TextOp) -> None:
        r, g, b, a = to_rgba_ints(op.color)
        if a == 0:
            return
        # pygame's default font renders smaller than CSS pixel sizes
        rendered = self._font(max(1, int(round(op.size * 1.3)))).render(op.text, True, (r, g, b))
        if a < 255:
            rendered.set_alpha(a)
        self.surface.blit(rendered, rendered.get_rect(center=(int(round(op.x)), int(round(op.y)))))
