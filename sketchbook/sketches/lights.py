"""Lights On / Lights Off: a country field seen through a window.

A wall switch flips the scene between night and day every five seconds.
The day/night blend and the switch toggle both ease toward their targets
instead of snapping.
"""

import math
from dataclasses import dataclass, field
from typing import List, Tuple

from sketchbook.color import lerp_color
from sketchbook.config.recording import DEFAULT_RECORDING_FRAMES
from sketchbook.config.sketch_config import RecordingConfig, SketchConfig
from sketchbook.math_utils import TWO_PI, lerp, map_range
from sketchbook.sketch import Sketch
from sketchbook.timebase import LoopTimer

LOOP_DURATION = DEFAULT_RECORDING_FRAMES
LIGHTS_OFF_AT = 0
LIGHTS_ON_AT = 150
DAYLIGHT_EASING = 0.05
SWITCH_EASING = 0.15
STAR_COUNT = 150
GRASS_BLADES = 50

WALL = (220, 210, 190)
FRAME_WOOD = (60, 40, 20)


@dataclass
class Star:
    x: float
    y: float
    size: float
    twinkle: float
    brightness: float


@dataclass
class LightsState:
    timer: LoopTimer
    stars: List[Star]
    lights_on: bool = False
    daylight: float = 0.0
    switch_position: float = 0.0
    grass: List[Tuple[float, float, float]] = field(default_factory=list)


class LightsOnOff(Sketch[LightsState]):
    name = "lights"
    title = "Lights On Lights Off"

    @classmethod
    def default_config(cls) -> SketchConfig:
        return SketchConfig(recording=RecordingConfig(prefix="LightsOnOff"))

    @property
    def window(self) -> Tuple[float, float, float, float]:
        display = self.config.display
        return (display.width * 0.15, display.height * 0.2, display.width * 0.5, display.height * 0.5)

    def setup(self, rng) -> LightsState:
        display = self.config.display
        stars = [
            Star(
                x=rng.uniform(display.width * 0.1, display.width * 0.9),
                y=rng.uniform(display.height * 0.1, display.height * 0.4),
                size=rng.uniform(1, 3),
                twinkle=rng.uniform(0, TWO_PI),
                brightness=rng.uniform(0.4, 1),
            )
            for _ in range(STAR_COUNT)
        ]
        return LightsState(timer=LoopTimer(LOOP_DURATION), stars=stars)

    def step(self, state: LightsState, tick) -> LightsState:
        if tick.recording:
            restarted = state.timer.sync(tick.recorded_frames)
        else:
            restarted = state.timer.advance()
        if restarted:
            state.lights_on = False

        if state.timer.frame == LIGHTS_OFF_AT:
            state.lights_on = False
        elif state.timer.frame == LIGHTS_ON_AT:
            state.lights_on = True

        target = 1.0 if state.lights_on else 0.0
        state.daylight = lerp(state.daylight, target, DAYLIGHT_EASING)
        state.switch_position = lerp(state.switch_position, target, SWITCH_EASING)

        state.grass = []
        if state.daylight > 0.3:
            x, y, w, h = self.window
            horizon = y + h * 0.55
            for _ in range(GRASS_BLADES):
                gx = x + tick.rng.uniform(0, w)
                gy = horizon + tick.rng.uniform(0, y + h - horizon)
                state.grass.append((gx, gy, tick.rng.uniform(5, 15)))
        return state

    def compose(self, state: LightsState, canvas, tick) -> None:
        canvas.background(WALL)
        self._draw_window_frame(canvas)
        self._draw_scene(state, canvas, tick.frame)
        self._draw_switch(state, canvas)

    def _draw_window_frame(self, canvas) -> None:
        x, y, w, h = self.window
        t = 40
        canvas.push()
        canvas.fill(FRAME_WOOD)
        canvas.no_stroke()
        canvas.rect(x - t, y - t, w + t * 2, t)
        canvas.rect(x - t, y + h, w + t * 2, t)
        canvas.rect(x - t, y, t, h)
        canvas.rect(x + w, y, t, h)
        canvas.rect(x, y + h / 2 - 15, w, 30)
        canvas.rect(x + w / 2 - 15, y, 30, h)
        canvas.pop()

    def _draw_scene(self, state: LightsState, canvas, frame: int) -> None:
        x, y, w, h = self.window
        daylight = state.daylight
        canvas.no_stroke()
        canvas.fill(lerp_color((20, 20, 25), (135, 206, 250), daylight))
        canvas.rect(x, y, w, h)

        if daylight < 0.6:
            alpha = map_range(daylight, 0, 0.6, 255, 0)
            for star in state.stars:
                twinkle = math.sin(frame * 0.05 + star.twinkle) * 0.3 + 0.7
                canvas.fill((255, 255, 255, alpha * star.brightness * twinkle))
                canvas.circle(star.x, star.y, star.size)

        horizon = y + h * 0.55
        canvas.fill(lerp_color((40, 45, 40), (80, 180, 80), daylight))
        canvas.rect(x, horizon, w, y + h - horizon)

        if state.grass:
            canvas.stroke((60, 160, 60, map_range(daylight, 0.3, 1, 0, 100)))
            canvas.stroke_weight(2)
            for gx, gy, blade in state.grass:
                canvas.line(gx, gy, gx, gy - blade)
            canvas.no_stroke()

        self._draw_streetlight(canvas, x + w * 0.65, horizon, daylight)
        if daylight > 0.5:
            self._draw_kite_flyer(canvas, x, y, w, h, horizon, daylight, frame)

    def _draw_streetlight(self, canvas, lx: float, ly: float, daylight: float) -> None:
        pole = lerp_color((60, 60, 65), (100, 100, 105), daylight)
        canvas.fill(pole)
        canvas.rect(lx - 5, ly, 10, 100)
        canvas.ellipse(lx, ly, 25, 15)
        canvas.rect(lx - 15, ly - 10, 30, 10)

        if daylight < 0.5:
            glow = map_range(daylight, 0, 0.5, 255, 0)
            canvas.fill((255, 255, 200, glow))
            canvas.circle(lx, ly + 5, 12)
            canvas.fill((255, 255, 200, glow * 0.2))
            canvas.triangle(lx - 15, ly, lx + 15, ly, lx, ly + 120)
            canvas.fill((255, 255, 150, glow * 0.1))
            canvas.triangle(lx - 25, ly, lx + 25, ly, lx, ly + 150)

    def _draw_kite_flyer(self, canvas, x, y, w, h, horizon, daylight, frame) -> None:
        alpha = map_range(daylight, 0.5, 1, 0, 255)
        fx = x + w * 0.25
        fy = horizon + 30
        s = 25

        canvas.stroke((50, 50, 50, alpha))
        canvas.stroke_weight(3)
        canvas.no_fill()
        canvas.circle(fx, fy, s * 0.4)
        canvas.line(fx, fy + s * 0.2, fx, fy + s * 0.7)
        canvas.line(fx, fy + s * 0.35, fx - s * 0.3, fy + s * 0.5)
        canvas.line(fx, fy + s * 0.35, fx + s * 0.4, fy + s * 0.15)
        canvas.line(fx, fy + s * 0.7, fx - s * 0.25, fy + s)
        canvas.line(fx, fy + s * 0.7, fx + s * 0.25, fy + s)

        kite_x = x + w * 0.4
        kite_y = y + h * 0.2
        canvas.stroke((50, 50, 50, alpha * 0.5))
        canvas.stroke_weight(1.5)
        canvas.bezier(
            fx + s * 0.4, fy + s * 0.15,
            fx + w * 0.1, fy - h * 0.15,
            kite_x - 20, kite_y + 30,
            kite_x, kite_y,
        )

        kite_x += math.sin(frame * 0.08) * 8
        kite_y += math.cos(frame * 0.06) * 5
        canvas.push()
        canvas.translate(kite_x, kite_y)
        canvas.rotate(math.sin(frame * 0.08) * 0.15)
        canvas.fill((255, 100, 100, alpha))
        canvas.stroke((200, 50, 50, alpha))
        canvas.stroke_weight(2)
        canvas.polygon([(0, -12), (9, 0), (0, 12), (-9, 0)])
        canvas.stroke_weight(1.5)
        canvas.line(0, -12, 0, 12)
        canvas.line(-9, 0, 9, 0)

        prev = (0.0, 12.0)
        for i in range(4):
            tail = (math.sin(frame * 0.08 + i * 0.5) * 4, 12 + i * 10)
            canvas.stroke((255, 100, 100, alpha))
            canvas.stroke_weight(2)
            canvas.line(prev[0], prev[1], tail[0], tail[1])
            canvas.no_stroke()
            canvas.fill((255, 150, 150, alpha))
            canvas.circle(tail[0], tail[1], 5)
            prev = tail
        canvas.pop()

    def _draw_switch(self, state: LightsState, canvas) -> None:
        display = self.config.display
        sx = display.width * 0.75
        sy = display.height * 0.45
        sw, sh = 60, 100

        canvas.push()
        canvas.fill((230, 225, 210))
        canvas.stroke((180, 175, 160))
        canvas.stroke_weight(2)
        canvas.rect(sx, sy, sw, sh, 5)

        canvas.fill((160, 160, 165))
        canvas.no_stroke()
        for cx, cy in ((15, 15), (sw - 15, 15), (15, sh - 15), (sw - 15, sh - 15)):
            canvas.circle(sx + cx, sy + cy, 6)

        toggle_x = sx + sw / 2
        toggle_y = lerp(sy + sh * 0.65, sy + sh * 0.35, state.switch_position)
        canvas.fill((100, 100, 100))
        canvas.rect(toggle_x - 10, sy + sh * 0.3, 20, sh * 0.4, 3)
        canvas.fill((200, 200, 190))
        canvas.stroke((120, 120, 115))
        canvas.stroke_weight(2)
        canvas.rect(toggle_x - 8, toggle_y - 15, 16, 30, 2)

        canvas.no_stroke()
        canvas.fill((100, 100, 100))
        canvas.text("ON", toggle_x, sy + sh * 0.25, size=12)
        canvas.text("OFF", toggle_x, sy + sh * 0.75, size=12)
        canvas.pop()
