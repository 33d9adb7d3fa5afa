"""Animation principles demo.

A character presses a button, a trap door opens, a ball bounces once on
the floor and splashes into a pool, the character frowns at its wet leg
and the ball sinks. Then the whole thing replays. Each stage is a phase
of a ``PhaseMachine`` with its own local frame counter.
"""

import logging
import math
import random
from dataclasses import dataclass, field
from typing import Optional

from sketchbook.config.sketch_config import RecordingConfig, SketchConfig
from sketchbook.easing import ease_in, ease_in_out
from sketchbook.entities.particles import Ripple, SplashParticle
from sketchbook.entity_store import EntityStore
from sketchbook.math_utils import TWO_PI, dist, lerp, map_range
from sketchbook.phase_machine import AnimationPhase, PhaseMachine
from sketchbook.sketch import Sketch
from sketchbook.systems.entity_lifecycle import EntityLifecycleSystem, EntityStepSystem

logger = logging.getLogger(__name__)

AUTO_START_MS = 500
BUTTON_HIT_RADIUS = 30
GRAVITY = 1.0
FLOOR_RATIO = 0.85

IDLE = "idle"
LOOK_AT_BUTTON = "lookAtButton"
BUTTON_PRESS = "buttonPress"
DOOR_OPEN = "doorOpen"
BALL_FALL = "ballFall"
SPLASH = "splash"
SPLASH_REACTION = "splashReaction"
SINK = "sink"

HIDDEN_BALL_PHASES = (IDLE, BUTTON_PRESS, DOOR_OPEN)

SKIN = (255, 200, 150)


@dataclass
class Character:
    x: float
    y: float
    right_arm_angle: float = 0.0
    left_arm_angle: float = 0.0
    anticipation: float = 0.0
    head_rotation: float = 0.0
    expression: str = "neutral"
    right_leg_lift: float = 0.0


@dataclass
class Button:
    x: float
    y: float
    press_depth: float = 0.0


@dataclass
class TrapDoor:
    x: float
    y: float
    angle: float = 0.0


@dataclass
class Ball:
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    radius: float = 30
    squash_x: float = 1.0
    squash_y: float = 1.0
    bounce_count: int = 0
    rotation: float = 0.0
    rotation_speed: float = 0.0
    alpha: float = 255


@dataclass
class Pool:
    x: float
    y: float
    width: float
    height: float

    def covers(self, x: float) -> bool:
        return self.x - self.width / 2 < x < self.x + self.width / 2


@dataclass
class DemoState:
    character: Character
    button: Button
    trap_door: TrapDoor
    ball: Ball
    pool: Pool
    floor_y: float
    canvas_height: float
    rng: random.Random
    splashes: EntityStore = field(default_factory=lambda: EntityStore("splash"))
    ripples: EntityStore = field(default_factory=lambda: EntityStore("ripples"))
    machine: Optional[PhaseMachine] = None
    auto_started: bool = False

    def reset_ball(self) -> None:
        self.ball = Ball(self.trap_door.x, self.trap_door.y + 50)
        self.trap_door.angle = 0.0
        self.splashes.clear()
        self.ripples.clear()


def build_phases(state: DemoState) -> PhaseMachine:
    """Wire every phase's frame handler to ``state``."""
    character = state.character
    button = state.button

    def look_at_button(f: int) -> None:
        if f < 10:
            t = ease_in_out(map_range(f, 0, 10, 0, 1))
            character.head_rotation = map_range(t, 0, 1, 0, 0.3)
            character.expression = "smile"
        else:
            t = ease_in_out(map_range(f, 10, 20, 0, 1))
            character.head_rotation = map_range(t, 0, 1, 0.3, 0)

    def button_press(f: int) -> None:
        character.expression = "smile"
        if f < 8:
            # Anticipation: wind up before pressing
            character.anticipation = map_range(f, 0, 8, 0, -15)
            character.right_arm_angle = map_range(f, 0, 8, 0, -0.3)
        elif f < 13:
            t = ease_in_out(map_range(f, 8, 13, 0, 1))
            character.right_arm_angle = map_range(t, 0, 1, -0.3, 0.5)
            button.press_depth = map_range(t, 0, 1, 0, 10)
            character.anticipation = map_range(t, 0, 1, -15, 0)
        else:
            # Follow through
            t = map_range(f, 13, 18, 0, 1)
            character.right_arm_angle = map_range(t, 0, 1, 0.5, 0)
            button.press_depth = map_range(t, 0, 1, 10, 0)

    def door_open_enter() -> None:
        character.expression = "neutral"

    def door_open(f: int) -> None:
        t = ease_in_out(map_range(f, 0, 10, 0, 1))
        state.trap_door.angle = map_range(t, 0, 1, 0, math.pi / 2)

    def ball_fall_enter() -> None:
        ball = state.ball
        ball.vy = 0.0
        ball.vx = 8.0
        ball.rotation_speed = 0.2

    def ball_fall(f: int) -> Optional[str]:
        ball = state.ball
        ball.vy += GRAVITY
        ball.y += ball.vy
        ball.x += ball.vx
        ball.rotation += ball.rotation_speed

        speed = abs(ball.vy)
        ball.squash_y = map_range(speed, 0, 20, 1, 1.3)
        ball.squash_x = map_range(speed, 0, 20, 1, 0.8)

        over_water = state.pool.covers(ball.x)
        next_phase = None
        if over_water and ball.y + ball.radius >= state.pool.y and ball.bounce_count >= 1:
            next_phase = SPLASH
        elif not over_water and ball.y + ball.radius >= state.floor_y and ball.bounce_count < 1:
            ball.vy *= -0.55
            ball.vx *= 0.88
            ball.y = state.floor_y - ball.radius
            ball.bounce_count += 1
            ball.rotation_speed *= 0.8
            # Exaggerated squash on impact
            ball.squash_y = 0.5
            ball.squash_x = 1.5

        ball.squash_y = lerp(ball.squash_y, 1, 0.15)
        ball.squash_x = lerp(ball.squash_x, 1, 0.15)
        return next_phase

    def splash_enter() -> None:
        state.splashes.extend(SplashParticle.burst(state.ball.x, state.pool.y, state.rng))
        state.ripples.add(Ripple(state.pool.x, state.pool.y, alpha=100))

    def splash(f: int) -> None:
        ball = state.ball
        ball.y = state.pool.y + math.sin(f * 0.4) * 3
        ball.squash_y = lerp(ball.squash_y, 1, 0.2)
        ball.squash_x = lerp(ball.squash_x, 1, 0.2)
        if f % 4 == 0:
            state.ripples.add(Ripple(state.pool.x, state.pool.y, alpha=80))

    def splash_reaction(f: int) -> None:
        if f < 10:
            t = ease_in_out(map_range(f, 0, 10, 0, 1))
            character.head_rotation = map_range(t, 0, 1, 0, -0.4)
            character.right_leg_lift = map_range(t, 0, 1, 0, -20)
            character.expression = "frown"
        elif f < 25:
            character.head_rotation = -0.4
            character.right_leg_lift = -20
            character.expression = "frown"
        else:
            t = ease_in_out(map_range(f, 25, 35, 0, 1))
            character.head_rotation = map_range(t, 0, 1, -0.4, 0)
            character.right_leg_lift = map_range(t, 0, 1, -20, 0)
            character.expression = "neutral"

    def sink(f: int) -> None:
        ball = state.ball
        t = ease_in(map_range(f, 0, 30, 0, 1))
        ball.y = lerp(state.pool.y, state.canvas_height + ball.radius * 2, t)
        ball.alpha = map_range(f, 10, 30, 255, 0, clamped=True)

    def restart() -> None:
        state.reset_ball()

    phases = [
        AnimationPhase(IDLE),
        AnimationPhase(LOOK_AT_BUTTON, 20, BUTTON_PRESS, look_at_button, restart),
        AnimationPhase(BUTTON_PRESS, 18, DOOR_OPEN, button_press),
        AnimationPhase(DOOR_OPEN, 10, BALL_FALL, door_open, door_open_enter),
        AnimationPhase(BALL_FALL, None, None, ball_fall, ball_fall_enter),
        AnimationPhase(SPLASH, 15, SPLASH_REACTION, splash, splash_enter),
        AnimationPhase(SPLASH_REACTION, 35, SINK, splash_reaction),
        AnimationPhase(SINK, 30, LOOK_AT_BUTTON, sink),
    ]
    return PhaseMachine(phases, initial=IDLE, loop_start=LOOK_AT_BUTTON)


class AnimationPrinciples(Sketch[DemoState]):
    name = "animation-principles"
    title = "Animation Principles"

    @classmethod
    def default_config(cls) -> SketchConfig:
        return SketchConfig(recording=RecordingConfig(prefix="AnimationPrinciples"))

    def setup(self, rng: random.Random) -> DemoState:
        display = self.config.display
        w, h = display.width, display.height
        floor_y = h * FLOOR_RATIO
        trap_door = TrapDoor(80, h * 0.45)
        state = DemoState(
            character=Character(w - 200, floor_y - 95),
            button=Button(w - 110, floor_y - 75),
            trap_door=trap_door,
            ball=Ball(trap_door.x, trap_door.y + 50),
            pool=Pool(w * 0.55, floor_y, 200, h * 0.15),
            floor_y=floor_y,
            canvas_height=h,
            rng=rng,
        )
        state.machine = build_phases(state)
        return state

    def build_systems(self, state: DemoState):
        return [
            EntityStepSystem(state.splashes),
            EntityStepSystem(state.ripples),
            EntityLifecycleSystem([state.splashes, state.ripples]),
        ]

    def step(self, state: DemoState, tick) -> DemoState:
        machine = state.machine
        if machine.current == IDLE and not state.auto_started and tick.elapsed_ms >= AUTO_START_MS:
            state.auto_started = True
            logger.info("Starting animation...")
            machine.enter(LOOK_AT_BUTTON)
        machine.tick()
        return state

    def mouse_pressed(self, state: DemoState, x: float, y: float) -> None:
        if state.machine.current != IDLE:
            return
        if dist(x, y, state.button.x, state.button.y) < BUTTON_HIT_RADIUS:
            state.auto_started = True
            state.machine.enter(LOOK_AT_BUTTON)

    def compose(self, state: DemoState, canvas, tick) -> None:
        display = self.config.display
        canvas.background((30, 35, 45))
        canvas.no_stroke()
        canvas.fill((40, 45, 55))
        canvas.rect(0, state.floor_y, display.width, display.height * 0.15)

        draw_trap_door(state.trap_door, canvas)
        draw_pool(state, canvas)
        if state.machine.current not in HIDDEN_BALL_PHASES:
            draw_ball(state.ball, canvas)
        draw_character(state.character, canvas)
        draw_button(state.button, canvas)
        state.splashes.render_all(canvas)


def draw_trap_door(door: TrapDoor, canvas) -> None:
    canvas.push()
    canvas.translate(door.x, door.y)
    canvas.no_stroke()
    canvas.fill((80, 60, 40))
    canvas.rect(-60, -10, 120, 20)
    canvas.rect(-60, -10, 20, 100)
    canvas.rect(40, -10, 20, 100)
    canvas.push()
    canvas.rotate(door.angle)
    canvas.fill((100, 80, 60))
    canvas.rect(-50, 0, 100, 15)
    canvas.fill((60, 50, 40))
    canvas.rect(-40, 3, 20, 8)
    canvas.rect(20, 3, 20, 8)
    canvas.pop()
    canvas.pop()


def draw_pool(state: DemoState, canvas) -> None:
    pool = state.pool
    canvas.no_stroke()
    canvas.fill((50, 150, 200, 150))
    canvas.rect(pool.x - pool.width / 2, pool.y, pool.width, pool.height, 10)
    state.ripples.render_all(canvas)


def draw_ball(ball: Ball, canvas) -> None:
    canvas.push()
    canvas.translate(ball.x, ball.y)
    canvas.rotate(ball.rotation)
    canvas.scale(ball.squash_x, ball.squash_y)
    canvas.no_stroke()
    canvas.fill((255, 100, 50, ball.alpha))
    canvas.circle(0, 0, ball.radius * 2)
    canvas.fill((255, 150, 100, ball.alpha * 0.6))
    canvas.circle(-ball.radius * 0.3, -ball.radius * 0.3, ball.radius * 0.8)
    canvas.pop()


def draw_character(character: Character, canvas) -> None:
    canvas.push()
    canvas.translate(character.x, character.y + character.anticipation)
    canvas.scale(1.5)
    body_squash = map_range(character.anticipation, -15, 0, 0.9, 1)

    # Left arm, behind the body
    canvas.stroke(SKIN)
    canvas.stroke_weight(8)
    canvas.no_fill()
    canvas.push()
    canvas.translate(-10, 0)
    canvas.rotate(character.left_arm_angle)
    canvas.bezier(0, -5, -15, 0, -25, 15, -30, 35)
    canvas.fill(SKIN)
    canvas.no_stroke()
    canvas.ellipse(-30, 35, 10, 12)
    canvas.pop()

    canvas.fill((60, 80, 120))
    canvas.stroke((50, 70, 110))
    canvas.stroke_weight(2)
    canvas.rect(2, 25, 10, 35, 2)
    canvas.push()
    canvas.translate(0, character.right_leg_lift)
    canvas.rect(-12, 25, 10, 35, 2)
    canvas.fill((40, 40, 40))
    canvas.ellipse(-7, 62, 14, 8)
    canvas.pop()
    canvas.fill((40, 40, 40))
    canvas.ellipse(7, 62, 14, 8)

    canvas.no_stroke()
    canvas.fill((80, 100, 140))
    canvas.rect(-15, -5, 30, 35 * body_squash, 5)
    canvas.fill(SKIN)
    canvas.rect(-5, -15, 10, 15)

    canvas.push()
    canvas.translate(0, -25)
    canvas.rotate(character.head_rotation)
    canvas.fill(SKIN)
    canvas.ellipse(0, 0, 30, 35)
    canvas.fill((60, 40, 30))
    canvas.arc(0, -3, 32, 30, math.pi, TWO_PI)
    canvas.fill((50, 50, 50))
    canvas.ellipse(-6, -1, 3, 4)
    canvas.ellipse(6, -1, 3, 4)
    canvas.fill((240, 180, 130))
    canvas.ellipse(0, 5, 4, 5)

    canvas.stroke((50, 50, 50))
    canvas.stroke_weight(1)
    canvas.no_fill()
    if character.expression == "smile":
        canvas.arc(0, 9, 10, 8, 0, math.pi)
    elif character.expression == "frown":
        canvas.arc(0, 13, 10, 6, math.pi, TWO_PI)
    else:
        canvas.line(-4, 11, 4, 11)
    canvas.no_stroke()
    canvas.pop()

    canvas.stroke(SKIN)
    canvas.stroke_weight(8)
    canvas.no_fill()
    canvas.push()
    canvas.translate(10, 0)
    canvas.rotate(character.right_arm_angle)
    canvas.bezier(0, -5, 15, 0, 25, 15, 30, 35)
    canvas.fill(SKIN)
    canvas.no_stroke()
    canvas.ellipse(30, 35, 10, 12)
    canvas.pop()
    canvas.pop()


def draw_button(button: Button, canvas) -> None:
    depth = button.press_depth
    canvas.push()
    canvas.translate(button.x, button.y)
    canvas.no_stroke()
    canvas.fill((80, 80, 90))
    canvas.rect(-5, -20, 35, 40, 3)
    canvas.fill((60, 60, 70))
    canvas.circle(12, 0, 25)
    canvas.fill((200, 50, 50))
    canvas.stroke((180, 40, 40))
    canvas.stroke_weight(2)
    canvas.circle(12 - depth * 0.3, depth, 18 - depth * 0.2)
    canvas.no_stroke()
    canvas.fill((255, 100, 100, 150))
    canvas.circle(12 - depth * 0.3 - 3, depth - 3, 6)
    canvas.pop()
