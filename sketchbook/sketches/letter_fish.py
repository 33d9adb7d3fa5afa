"""Genuary letter fish: an aquarium where food flakes settle into the
word GENUARY and a school of guppies crowds around each letter.

The ten-second loop: fish swim for one second, a first wave of food is
dropped (eaten quickly), a second wave follows at four seconds (eaten
slowly so the letters stay legible), and at nine seconds the leftovers
are cleared so the last frame flows back into the first.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import List, Tuple

from sketchbook.color import lerp_color
from sketchbook.config.recording import DEFAULT_RECORDING_FRAMES
from sketchbook.config.sketch_config import RecordingConfig, SketchConfig
from sketchbook.entities.aquarium import (
    GRAVEL_DEPTH,
    WORD,
    Clam,
    Guppy,
    School,
    TreasureChest,
    drop_food_wave,
)
from sketchbook.entity_store import EntityStore
from sketchbook.math_utils import TWO_PI
from sketchbook.random_utils import fixed_seed
from sketchbook.sketch import Sketch
from sketchbook.systems.entity_lifecycle import EntityLifecycleSystem, EntityStepSystem
from sketchbook.systems.school import SchoolSystem
from sketchbook.timebase import LoopTimer

logger = logging.getLogger(__name__)

LOOP_DURATION = DEFAULT_RECORDING_FRAMES
FEEDING_START = 30
SECOND_WAVE_START = 120
FEEDING_END = 270
MAX_WAVES = 2
GRAVEL_SEED = 12345
GRAVEL_STONES = 200

SWIMMING = "swimming"
FEEDING = "feeding"

WATER_TOP = (135, 206, 235)
WATER_BOTTOM = (25, 60, 90)
GRAVEL_BASE = (101, 67, 33)
GRAVEL_COLORS = (
    (180, 140, 100),
    (150, 120, 90),
    (200, 160, 120),
    (100, 100, 100),
    (80, 120, 160),
    (160, 100, 140),
)
# (x, color, height) of each swaying plant
PLANTS = (
    (120, (34, 139, 34), 1200),
    (350, (50, 150, 50), 960),
    (700, (40, 130, 40), 1400),
    (900, (45, 140, 45), 1100),
    (500, (60, 160, 60), 1000),
    (650, (55, 145, 55), 1300),
)

Stone = Tuple[float, float, float, Tuple[int, int, int]]


@dataclass
class AquariumState:
    timer: LoopTimer
    school: School
    flakes: EntityStore
    bubbles: EntityStore
    ornaments: EntityStore
    gravel: List[Stone] = field(default_factory=list)
    mode: str = SWIMMING
    waves_dropped: int = 0


def scatter_gravel(rng, width: float, height: float) -> List[Stone]:
    """The gravel layer; always the same stones regardless of ``rng``'s state."""
    stones = []
    with fixed_seed(rng, GRAVEL_SEED) as seeded:
        for _ in range(GRAVEL_STONES):
            x = seeded.uniform(0, width)
            y = height - GRAVEL_DEPTH + seeded.uniform(0, GRAVEL_DEPTH)
            size = seeded.uniform(5, 15)
            stones.append((x, y, size, seeded.choice(GRAVEL_COLORS)))
    return stones


class LetterFish(Sketch[AquariumState]):
    name = "letter-fish"
    title = "Genuary Letter Fish"

    @classmethod
    def default_config(cls) -> SketchConfig:
        return SketchConfig(recording=RecordingConfig(prefix="GenuaryFishes"))

    def setup(self, rng) -> AquariumState:
        display = self.config.display
        w, h = display.width, display.height
        flakes = EntityStore("flakes")
        bubbles = EntityStore("bubbles")
        school = School(w, h, flakes)

        total_fish = rng.randint(400, 499)
        for i in range(total_fish):
            school.add(
                Guppy(
                    rng.uniform(0, w),
                    rng.uniform(h / 2, h - 200),
                    rng.uniform(0, TWO_PI),
                    i,
                    i % len(WORD),
                    rng,
                )
            )
        logger.debug("Aquarium stocked with %d guppies", total_fish)

        ornaments = EntityStore(
            "ornaments",
            [Clam(280, h - GRAVEL_DEPTH, bubbles), TreasureChest(w - 350, h - GRAVEL_DEPTH, bubbles)],
        )
        return AquariumState(
            timer=LoopTimer(LOOP_DURATION),
            school=school,
            flakes=flakes,
            bubbles=bubbles,
            ornaments=ornaments,
            gravel=scatter_gravel(rng, w, h),
        )

    def build_systems(self, state: AquariumState):
        return [
            EntityStepSystem(state.bubbles),
            EntityStepSystem(state.flakes),
            SchoolSystem(state.school),
            EntityStepSystem(state.ornaments),
            EntityLifecycleSystem([state.bubbles, state.flakes]),
        ]

    def _end_feeding(self, state: AquariumState) -> None:
        state.mode = SWIMMING
        state.flakes.clear()
        state.school.release_all()

    def step(self, state: AquariumState, tick) -> AquariumState:
        if tick.recording:
            restarted = state.timer.sync(tick.recorded_frames)
        else:
            restarted = state.timer.advance()
        if restarted:
            state.waves_dropped = 0
            self._end_feeding(state)

        frame = state.timer.frame
        if frame == FEEDING_START:
            state.mode = FEEDING
        elif frame == FEEDING_END:
            self._end_feeding(state)

        if state.mode == FEEDING:
            display = self.config.display
            due = (frame == FEEDING_START and state.waves_dropped == 0) or (
                frame == SECOND_WAVE_START and state.waves_dropped == 1
            )
            if due and state.waves_dropped < MAX_WAVES:
                state.waves_dropped += 1
                state.flakes.extend(
                    drop_food_wave(tick.rng, display.width, display.height, state.waves_dropped)
                )

        state.school.feeding = state.mode == FEEDING
        return state

    def compose(self, state: AquariumState, canvas, tick) -> None:
        display = self.config.display
        w, h = display.width, display.height
        frame = tick.frame

        canvas.stroke_weight(1)
        for y in range(h):
            canvas.stroke(lerp_color(WATER_TOP, WATER_BOTTOM, y / h))
            canvas.line(0, y, w, y)

        canvas.push()
        canvas.no_stroke()
        canvas.fill(GRAVEL_BASE)
        canvas.rect(0, h - GRAVEL_DEPTH, w, GRAVEL_DEPTH)
        for x, y, size, color in state.gravel:
            canvas.fill(color)
            canvas.ellipse(x, y, size, size * 0.8)
        canvas.pop()

        draw_cave(canvas, 200, h - GRAVEL_DEPTH)
        state.ornaments[0].render(canvas)
        draw_castle(canvas, w - 200, h - GRAVEL_DEPTH)
        state.ornaments[1].render(canvas)

        state.bubbles.render_all(canvas)
        for x, color, height in PLANTS:
            draw_plant(canvas, x, h - GRAVEL_DEPTH, color, height, frame)
        state.flakes.render_all(canvas)
        for fish in state.school.fish:
            fish.render(canvas)
        draw_light_rays(canvas, w, h, frame)


def draw_cave(canvas, x: float, y: float) -> None:
    canvas.push()
    canvas.translate(x, y)
    canvas.fill((80, 70, 60))
    canvas.stroke((60, 50, 40))
    canvas.stroke_weight(2)
    canvas.polygon([(-80, 0), (-90, -80), (-60, -130), (0, -140), (60, -130), (90, -80), (80, 0)])
    canvas.fill((20, 20, 25))
    canvas.ellipse(0, -50, 70, 80)
    canvas.no_stroke()
    canvas.fill((100, 90, 80, 100))
    canvas.ellipse(-40, -70, 30, 25)
    canvas.ellipse(35, -90, 25, 20)
    canvas.ellipse(-20, -110, 20, 18)
    canvas.fill((40, 80, 40, 120))
    canvas.ellipse(-50, -30, 35, 20)
    canvas.ellipse(40, -40, 30, 18)
    canvas.pop()


def draw_castle(canvas, x: float, y: float) -> None:
    canvas.push()
    canvas.translate(x, y)
    canvas.fill((160, 160, 180))
    canvas.stroke((120, 120, 140))
    canvas.stroke_weight(2)
    canvas.rect(-100, -80, 200, 80)
    canvas.rect(-90, -180, 60, 100)
    canvas.rect(30, -180, 60, 100)
    canvas.rect(-30, -140, 60, 60)

    canvas.fill((140, 140, 160))
    for start, stop, top in ((-90, -30, -190), (30, 90, -190), (-30, 30, -150)):
        for bx in range(start, stop, 15):
            canvas.rect(bx, top, 10, 10)

    canvas.fill((60, 60, 80))
    canvas.rect(-70, -150, 20, 30)
    canvas.rect(50, -150, 20, 30)
    canvas.rect(-10, -120, 20, 25)

    canvas.fill((80, 60, 40))
    canvas.arc(0, -40, 40, 60, math.pi, TWO_PI)
    canvas.rect(-20, -40, 40, 40)

    canvas.no_stroke()
    canvas.fill((40, 80, 40, 120))
    canvas.ellipse(-80, -50, 30, 20)
    canvas.ellipse(60, -60, 35, 22)
    canvas.pop()


def plant_sway(j: float, tallness: float, phase: float, frame: int) -> float:
    amount = (j / tallness) * 20
    sway = math.sin(frame * 0.015 + phase + j * 0.003) * amount
    return sway + math.sin(frame * 0.008 + phase * 2 + j * 0.002) * amount * 0.5


def draw_plant(canvas, x: float, y: float, color, tallness: int, frame: int) -> None:
    canvas.push()
    canvas.stroke(color)
    canvas.no_fill()
    for i in range(3):
        offset_x = (i - 1) * 15
        phase = i * 1.5
        canvas.stroke_weight(4)
        canvas.polyline(
            [(x + offset_x + plant_sway(j, tallness, phase, frame), y - j) for j in range(0, tallness + 1, 10)]
        )

        canvas.stroke_weight(2)
        for j in range(20, tallness, 25):
            stem_x = x + offset_x + plant_sway(j, tallness, phase, frame)
            leaf = math.sin(frame * 0.025 + i + j * 0.01) * 5
            for side in (-1, 1):
                canvas.bezier(
                    stem_x, y - j,
                    stem_x + side * (20 - leaf), y - j - 5,
                    stem_x + side * (25 - leaf), y - j - 10,
                    stem_x + side * (20 - leaf * 0.5), y - j - 15,
                )
    canvas.pop()


def draw_light_rays(canvas, width: float, height: float, frame: int) -> None:
    canvas.push()
    canvas.no_stroke()
    canvas.fill((255, 255, 255, 10))
    for i in range(5):
        x = (width / 6) * (i + 0.5)
        offset = math.sin(frame * 0.01 + i) * 30
        canvas.triangle(
            x + offset, 0,
            x - 50 + offset, height - GRAVEL_DEPTH,
            x + 50 + offset, height - GRAVEL_DEPTH,
        )
    canvas.pop()
