"""Short-lived particles: water splashes, ripples and rising bubbles."""

import math
import random
from typing import TYPE_CHECKING

from sketchbook.entities.base import AnimatedEntity
from sketchbook.math_utils import TWO_PI, lerp, map_range

if TYPE_CHECKING:
    from sketchbook.draw_list import DrawList
    from sketchbook.update_phases import TickContext

SPLASH_GRAVITY = 0.3
SPLASH_LIFE = 35
RIPPLE_GROWTH = 2
RIPPLE_FADE = 5
BUBBLE_TOP_MARGIN = -20


class SplashParticle(AnimatedEntity):
    """A droplet thrown from the water surface; falls under gravity."""

    def __init__(self, x: float, y: float, vx: float, vy: float, size: float, life: int = SPLASH_LIFE) -> None:
        self.x = x
        self.y = y
        self.vx = vx
        self.vy = vy
        self.size = size
        self.life = life

    @classmethod
    def burst(cls, x: float, y: float, rng: random.Random, count: int = 30):
        """A fan of droplets thrown upward between 0.15 and 0.85 pi."""
        particles = []
        for i in range(count):
            angle = map_range(i, 0, count, math.pi * 0.15, math.pi * 0.85)
            speed = rng.uniform(4, 10)
            particles.append(
                cls(x, y, math.cos(angle) * speed, -math.sin(angle) * speed, rng.uniform(4, 12))
            )
        return particles

    def update(self, tick: "TickContext") -> None:
        self.x += self.vx
        self.y += self.vy
        self.vy += SPLASH_GRAVITY
        self.life -= 1

    def render(self, canvas: "DrawList") -> None:
        canvas.no_stroke()
        canvas.fill((50, 150, 200, map_range(self.life, 0, 30, 0, 200, clamped=True)))
        canvas.circle(self.x, self.y, self.size)

    def is_expired(self) -> bool:
        return self.life <= 0


class Ripple(AnimatedEntity):
    """A flattened ring spreading across the water surface."""

    def __init__(self, x: float, y: float, alpha: float = 100, size: float = 0) -> None:
        self.x = x
        self.y = y
        self.size = size
        self.alpha = alpha

    def update(self, tick: "TickContext") -> None:
        self.size += RIPPLE_GROWTH
        self.alpha -= RIPPLE_FADE

    def render(self, canvas: "DrawList") -> None:
        canvas.no_fill()
        canvas.stroke((100, 180, 220, max(self.alpha, 0)))
        canvas.stroke_weight(2)
        canvas.ellipse(self.x, self.y, self.size, self.size * 0.3)

    def is_expired(self) -> bool:
        return self.alpha <= 0


class Bubble(AnimatedEntity):
    """An air bubble that eases up to its rise speed and wobbles sideways.

    Removed once it has risen past the top edge.
    """

    def __init__(self, x: float, y: float, rng: random.Random) -> None:
        self.x = x + rng.uniform(-10, 10)
        self.y = y
        self.size = rng.uniform(5, 12)
        self.current_size = self.size
        self.base_speed = rng.uniform(1.2, 2.5)
        self.speed = 0.0
        self.wobble = rng.uniform(0.015, 0.035)
        self.wobble_offset = rng.uniform(0, TWO_PI)
        self.wobble_amplitude = rng.uniform(0.8, 1.5)
        self.age = 0
        self.max_age = rng.uniform(120, 180)

    def update(self, tick: "TickContext") -> None:
        self.age += 1
        self.speed = lerp(self.speed, self.base_speed, 0.05)
        self.y -= self.speed

        frame = tick.frame
        wobble_x = math.sin(frame * self.wobble + self.wobble_offset) * self.wobble_amplitude
        wobble_x += (
            math.sin(frame * self.wobble * 0.5 + self.wobble_offset * 1.3) * self.wobble_amplitude * 0.3
        )
        self.x += wobble_x
        self.current_size = self.size * (1 + math.sin(self.age * 0.1) * 0.1)

    def render(self, canvas: "DrawList") -> None:
        size = self.current_size
        canvas.no_stroke()
        canvas.fill((255, 255, 255, map_range(self.age, 0, self.max_age, 80, 120)))
        canvas.circle(self.x, self.y, size)
        shimmer = math.sin(self.age * 0.15) * 30 + 200
        canvas.fill((255, 255, 255, shimmer))
        canvas.circle(self.x - size * 0.25, self.y - size * 0.25, size * 0.35)
        canvas.fill((255, 255, 255, shimmer * 0.7))
        canvas.circle(self.x + size * 0.15, self.y - size * 0.15, size * 0.15)

    def is_expired(self) -> bool:
        return self.y < BUBBLE_TOP_MARGIN
