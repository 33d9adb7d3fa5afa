"""Aquarium inhabitants: a school of guppies, food flakes that settle into
letter shapes, and hinged ornaments that puff out bubbles.
"""

import logging
import math
import random
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Tuple

from sketchbook.color import hsb_to_rgb, scale_rgb
from sketchbook.entities.base import AnimatedEntity
from sketchbook.entities.particles import Bubble
from sketchbook.entity_store import EntityStore
from sketchbook.flocking import (
    NEIGHBOR_RADIUS,
    SpatialGrid,
    alignment_force,
    cohesion_force,
    separation_total,
    steering_angle,
)
from sketchbook.math_utils import TWO_PI, dist, lerp

if TYPE_CHECKING:
    from sketchbook.draw_list import DrawList
    from sketchbook.update_phases import TickContext

logger = logging.getLogger(__name__)

WORD = "GENUARY"
PIECES_PER_LETTER = 15
LETTER_SPACING = 150
LETTER_SCALE = 60
DETECTION_HEIGHT_RATIO = 0.33
EATING_DISTANCE = 20
FIRST_WAVE_EAT_RATE = 0.015
LATER_WAVE_EAT_RATE = 0.003
GRAVEL_DEPTH = 150
SWIM_FLOOR_MARGIN = 170

# Settle points per letter in units of LETTER_SCALE, relative to the letter center
LETTER_SHAPES: Dict[str, Tuple[Tuple[float, float], ...]] = {
    "G": (
        (-2, -3), (-2, -1.5), (-2, 0), (-2, 1.5), (-2, 3),
        (0, -3), (1, -3), (2, -3),
        (0, 3), (1, 3), (2, 3),
        (2, 1.5), (0, 0), (1, 0), (0.5, 1.5),
    ),
    "E": (
        (-2, -3), (-2, -1.5), (-2, 0), (-2, 1.5), (-2, 3),
        (0, -3), (1, -3), (1.5, -3),
        (0, 0), (0.5, 0), (1, 0),
        (0, 3), (1, 3), (1.5, 3), (-1, -1.5),
    ),
    "N": (
        (-2, -3), (-2, -1.5), (-2, 0), (-2, 1.5), (-2, 3),
        (2, -3), (2, -1.5), (2, 0), (2, 1.5), (2, 3),
        (-1, -2), (0, -1), (0, 0), (0, 1), (1, 2),
    ),
    "U": (
        (-2, -3), (-2, -1.5), (-2, 0), (-2, 1.5),
        (2, -3), (2, -1.5), (2, 0), (2, 1.5),
        (-1.5, 3), (-1, 3), (-0.5, 3),
        (0.5, 3), (1, 3), (1.5, 3), (0, 2.5),
    ),
    "A": (
        (0, -3), (-0.5, -2.5), (0.5, -2.5),
        (-1, -1.5), (1, -1.5),
        (-1.5, 0), (-0.5, 0), (0, 0), (0.5, 0), (1.5, 0),
        (-2, 1.5), (2, 1.5),
        (-2, 3), (-2.5, 2.5), (2, 3),
    ),
    "R": (
        (-2, -3), (-2, -1.5), (-2, 0), (-2, 1.5), (-2, 3),
        (0, -3), (1, -3), (1.5, -3),
        (2, -2), (2, -1.5),
        (1, 0), (0.5, 0),
        (0, 1.5), (0.5, 2), (1, 3),
    ),
    "Y": (
        (-2, -3), (-1.5, -2.5), (-1, -1.5),
        (2, -3), (1.5, -2.5), (1, -1.5),
        (-0.5, -0.5), (0, 0), (0.5, -0.5),
        (0, 1), (-0.5, 1), (0.5, 1),
        (0, 1.5), (0, 2.5), (0, 3),
    ),
}

GUPPY_PALETTES = (
    ((255, 100, 50), (255, 150, 0)),
    ((50, 150, 255), (100, 200, 255)),
    ((255, 200, 50), (255, 220, 100)),
    ((150, 50, 200), (200, 100, 255)),
    ((255, 50, 150), (255, 100, 200)),
    ((50, 200, 150), (100, 255, 200)),
)


def letter_cluster_positions(letter: str, scale: float = LETTER_SCALE) -> List[Tuple[float, float]]:
    """Offsets (from the letter center) where the pieces of ``letter`` settle.

    Unknown letters have no shape and return an empty list.
    """
    return [(ux * scale, uy * scale) for ux, uy in LETTER_SHAPES.get(letter.upper(), ())]


def letter_center(letter_index: int, width: float, height: float, count: int = len(WORD)) -> Tuple[float, float]:
    """Center of a letter in the word, spread evenly across the canvas at half height."""
    total_width = (count - 1) * LETTER_SPACING
    first_x = (width - total_width) / 2
    return (first_x + letter_index * LETTER_SPACING, height * 0.5)


class FoodFlake(AnimatedEntity):
    """One piece of a letter. Falls, drifts to its slot and gets nibbled.

    Attributes:
        letter_index: Which letter of the word this piece belongs to
        wave: 1 for the first drop (eaten fast), 2+ for later drops
        fish_eating: Number of fish currently eating this piece
        eaten_amount: 0 (whole) to 1 (gone)
    """

    def __init__(
        self,
        x: float,
        y: float,
        letter: str,
        letter_index: int,
        piece_index: int,
        wave: int,
        rng: random.Random,
        width: float,
        height: float,
    ) -> None:
        self.start_x = x
        self.x = x
        self.y = y
        self.letter = letter
        self.letter_index = letter_index
        self.piece_index = piece_index
        self.wave = wave

        shape = letter_cluster_positions(letter) or [(0.0, 0.0)]
        offset_x, offset_y = shape[piece_index % len(shape)]
        center_x, center_y = letter_center(letter_index, width, height)
        self.target_x = center_x + offset_x
        self.target_y = center_y + offset_y

        self.size = rng.uniform(6, 9)
        self.fall_speed = rng.uniform(2.5, 3.2)
        self.wobble = rng.uniform(0.01, 0.03)
        self.wobble_offset = rng.uniform(0, TWO_PI)
        self.color = hsb_to_rgb(rng.uniform(20, 40), rng.uniform(70, 90), rng.uniform(60, 80))
        self.fish_eating = 0
        self.eaten_amount = 0.0
        self.settled = False

    @property
    def eat_rate(self) -> float:
        return FIRST_WAVE_EAT_RATE if self.wave == 1 else LATER_WAVE_EAT_RATE

    def update(self, tick: "TickContext") -> None:
        if not self.settled:
            self.y += self.fall_speed
            fall_progress = min(1.0, self.y / self.target_y) if self.target_y > 0 else 1.0
            current_target_x = lerp(self.start_x, self.target_x, fall_progress)
            self.x += (current_target_x - self.x) * 0.02
            self.x += math.sin(tick.frame * self.wobble + self.wobble_offset) * 0.5

            if self.y >= self.target_y:
                self.y = self.target_y
                self.x = lerp(self.x, self.target_x, 0.15)
                if abs(self.x - self.target_x) < 2:
                    self.settled = True
                    self.x = self.target_x

        if self.fish_eating > 0:
            self.eaten_amount = min(1.0, self.eaten_amount + self.eat_rate * self.fish_eating)

    def render(self, canvas: "DrawList") -> None:
        if self.is_eaten():
            return
        canvas.no_stroke()
        canvas.fill(self.color)
        canvas.circle(self.x, self.y, self.size * (1 - self.eaten_amount))

    def is_eaten(self) -> bool:
        return self.eaten_amount >= 1

    def is_expired(self) -> bool:
        return self.is_eaten()

    def claim_fish(self) -> None:
        self.fish_eating += 1

    def release_fish(self) -> None:
        self.fish_eating = max(0, self.fish_eating - 1)


def drop_food_wave(
    rng: random.Random, width: float, height: float, wave: int, word: str = WORD, base_y: float = 50
) -> List[FoodFlake]:
    """Flakes for every letter of ``word``, clustered near the top of the tank."""
    total_width = len(word) * LETTER_SPACING
    start_x = (width - total_width) / 2 + LETTER_SPACING / 2
    flakes = []
    for letter_index, letter in enumerate(word):
        center_x = start_x + letter_index * LETTER_SPACING
        for piece in range(PIECES_PER_LETTER):
            flakes.append(
                FoodFlake(
                    center_x + rng.uniform(-15, 15),
                    base_y + rng.uniform(-10, 10),
                    letter,
                    letter_index,
                    piece,
                    wave,
                    rng,
                    width,
                    height,
                )
            )
    logger.debug("Dropped food wave %d: %d flakes", wave, len(flakes))
    return flakes


class School:
    """Shared surroundings for a school of guppies.

    Holds the neighbour grid (rebuilt once per tick), the tank size, the
    flake store the fish feed from and whether feeding is on.
    """

    def __init__(self, width: float, height: float, flakes: EntityStore) -> None:
        self.width = width
        self.height = height
        self.flakes = flakes
        self.feeding = False
        self.fish: List["Guppy"] = []
        self.grid: SpatialGrid["Guppy"] = SpatialGrid(
            width, height, NEIGHBOR_RADIUS, lambda fish: (fish.x, fish.y)
        )

    def add(self, fish: "Guppy") -> None:
        fish.school = self
        self.fish.append(fish)

    def rebuild(self) -> None:
        self.grid.rebuild(self.fish)

    def neighbors_of(self, fish: "Guppy", radius: float = NEIGHBOR_RADIUS) -> List["Guppy"]:
        return [other for other in self.grid.query_radius(fish.x, fish.y, radius) if other is not fish]

    def release_all(self) -> None:
        """Drop every fish's target (used when the feeding window closes)."""
        for fish in self.fish:
            fish.drop_target()


class Guppy(AnimatedEntity):
    """A small tropical fish that flocks, and feeds on its assigned letter."""

    def __init__(
        self,
        x: float,
        y: float,
        angle: float,
        index: int,
        assigned_letter: int,
        rng: random.Random,
    ) -> None:
        self.x = x
        self.y = y
        self.angle = angle
        self.index = index
        self.assigned_letter = assigned_letter
        self.speed = rng.uniform(1.5, 2.5)
        self.wobble = rng.uniform(0.03, 0.06)
        self.size = rng.uniform(8, 14)
        self.body_color, self.tail_color = rng.choice(GUPPY_PALETTES)
        self.fin_offset = rng.uniform(0, TWO_PI)
        self.wiggle = 0.0
        self.target: Optional[FoodFlake] = None
        self.eating = False
        self.school: Optional[School] = None

    def update(self, tick: "TickContext") -> None:
        school = self.school
        if school is not None and school.feeding and len(school.flakes) > 0:
            self.feed(school.flakes, tick)
        else:
            self.swim(tick)

    def drop_target(self) -> None:
        if self.target is not None:
            self.target.release_fish()
        self.target = None
        self.eating = False

    def swim(self, tick: "TickContext") -> None:
        school = self.school
        width = school.width if school else 0
        height = school.height if school else 0
        nearby = school.neighbors_of(self) if school else []

        if nearby:
            positions = [(other.x, other.y) for other in nearby]
            alignment = alignment_force([other.angle for other in nearby])
            cohesion = cohesion_force(self.x, self.y, positions)
            separation = separation_total(self.x, self.y, positions)
            self.angle = steering_angle(self.angle, alignment, cohesion, separation)
        self.angle += tick.rng.uniform(-0.2, 0.2)

        speed = self.speed * (1 + math.sin(tick.frame * 0.05 + self.index) * 0.3)
        self.x += math.cos(self.angle) * speed
        self.y += math.sin(self.angle) * speed

        if school is not None:
            if self.x < -self.size:
                self.x = width + self.size
            if self.x > width + self.size:
                self.x = -self.size
            if self.y < height * 0.5:
                self.y = height * 0.5 + tick.rng.uniform(0, 20)
                self.angle = tick.rng.uniform(0, math.pi)
            if self.y > height - SWIM_FLOOR_MARGIN:
                self.y = height - SWIM_FLOOR_MARGIN - tick.rng.uniform(0, 20)
                self.angle = tick.rng.uniform(math.pi, TWO_PI)

        self.wiggle += self.wobble

    def find_target(self, flakes: Sequence[FoodFlake], detection_height: float) -> Optional[FoodFlake]:
        """Closest uneaten flake of this fish's letter that has sunk into view."""
        closest = None
        closest_dist = math.inf
        for flake in flakes:
            if flake.letter_index != self.assigned_letter:
                continue
            if flake.y < detection_height or flake.is_eaten():
                continue
            d = dist(self.x, self.y, flake.x, flake.y)
            if d < closest_dist:
                closest_dist = d
                closest = flake
        return closest

    def feed(self, flakes: Sequence[FoodFlake], tick: "TickContext") -> None:
        if self.target is not None and self.target.is_eaten():
            self.drop_target()

        if self.target is None:
            height = self.school.height if self.school else 0
            self.target = self.find_target(flakes, height * DETECTION_HEIGHT_RATIO)
            self.eating = False
            if self.target is None:
                self.swim(tick)
                return

        dx = self.target.x - self.x
        dy = self.target.y - self.y
        target_angle = math.atan2(dy, dx)
        if math.hypot(dx, dy) < EATING_DISTANCE:
            if not self.eating:
                self.target.claim_fish()
                self.eating = True
            self.x = lerp(self.x, self.target.x, 0.1)
            self.y = lerp(self.y, self.target.y, 0.1)
            self.angle = lerp(self.angle, target_angle, 0.1)
            self.wiggle += self.wobble * 0.5
        else:
            self.angle = lerp(self.angle, target_angle, 0.1)
            self.x += math.cos(self.angle) * self.speed * 2
            self.y += math.sin(self.angle) * self.speed * 2
            self.wiggle += self.wobble

    def render(self, canvas: "DrawList") -> None:
        s = self.size
        canvas.push()
        canvas.translate(self.x, self.y)
        canvas.rotate(self.angle)

        tail_wiggle = math.sin(self.wiggle * 2) * 0.25 + math.sin(self.wiggle * 3.5) * 0.15
        canvas.fill(self.tail_color)
        canvas.stroke(scale_rgb(self.tail_color, 0.7))
        canvas.stroke_weight(1)
        canvas.polygon(
            [
                (-s * 0.8, 0),
                (-s * 1.4, -s * 0.6 + tail_wiggle),
                (-s * 1.5, tail_wiggle * 0.3),
                (-s * 1.4, s * 0.6 - tail_wiggle),
            ]
        )

        stretch = 1 + math.sin(self.wiggle * 2) * 0.05
        canvas.fill(self.body_color)
        canvas.stroke(scale_rgb(self.body_color, 0.7))
        canvas.ellipse(0, 0, s * 1.5 * stretch, s / stretch)

        fin_wave = math.sin(self.wiggle * 1.5 + self.fin_offset) * 0.15
        fin_wave += math.sin(self.wiggle * 2.8 + self.fin_offset * 1.3) * 0.08
        canvas.fill(self.tail_color)
        canvas.no_stroke()
        canvas.triangle(-s * 0.2, -s * 0.5, s * 0.1, -s * 0.8 + fin_wave, s * 0.3, -s * 0.5)

        fin_flap = math.sin(self.wiggle * 1.2) * 0.1
        for side in (1, -1):
            canvas.push()
            canvas.translate(s * 0.2, side * s * 0.4)
            canvas.rotate(side * fin_flap)
            canvas.ellipse(0, 0, s * 0.4, s * 0.6)
            canvas.pop()

        eye_shift = math.sin(self.wiggle * 0.5) * 0.02
        canvas.fill((255, 255, 255))
        canvas.circle(s * 0.4 + eye_shift, -s * 0.15, s * 0.3)
        canvas.fill((0, 0, 0))
        canvas.circle(s * 0.45 + eye_shift, -s * 0.15, s * 0.15)
        canvas.pop()


class HingedOrnament(AnimatedEntity):
    """An ornament with a lid: closed -> opening -> open -> closing -> closed.

    The lid angle eases toward its target by 5% per tick. Entering the
    open state releases a burst of bubbles into ``bubbles``.
    """

    CLOSED = "closed"
    OPENING = "opening"
    OPEN = "open"
    CLOSING = "closing"

    def __init__(
        self,
        x: float,
        y: float,
        open_angle: float,
        closed_ticks: int,
        open_ticks: int,
        bubble_count: int,
        bubbles: EntityStore,
    ) -> None:
        self.x = x
        self.y = y
        self.open_angle = open_angle
        self.closed_ticks = closed_ticks
        self.open_ticks = open_ticks
        self.bubble_count = bubble_count
        self.bubbles = bubbles
        self.state = self.CLOSED
        self.open_amount = 0.0
        self.timer = 0

    def update(self, tick: "TickContext") -> None:
        self.timer += 1
        if self.state == self.CLOSED and self.timer > self.closed_ticks:
            self.state = self.OPENING
            self.timer = 0
        elif self.state == self.OPENING:
            self.open_amount = lerp(self.open_amount, self.open_angle, 0.05)
            if self.open_amount > self.open_angle - 0.1:
                self.state = self.OPEN
                self.timer = 0
                self.bubbles.extend(Bubble(self.x, self.y, tick.rng) for _ in range(self.bubble_count))
        elif self.state == self.OPEN and self.timer > self.open_ticks:
            self.state = self.CLOSING
            self.timer = 0
        elif self.state == self.CLOSING:
            self.open_amount = lerp(self.open_amount, 0.0, 0.05)
            if self.open_amount < 0.1:
                self.open_amount = 0.0
                self.state = self.CLOSED
                self.timer = 0


class Clam(HingedOrnament):
    def __init__(self, x: float, y: float, bubbles: EntityStore) -> None:
        super().__init__(x, y, math.pi / 3, 180, 90, 10, bubbles)

    def render(self, canvas: "DrawList") -> None:
        canvas.push()
        canvas.translate(self.x, self.y)
        canvas.fill((180, 160, 140))
        canvas.stroke((140, 120, 100))
        canvas.stroke_weight(2)
        canvas.arc(0, 0, 80, 50, 0, math.pi)

        canvas.push()
        canvas.rotate(-self.open_amount)
        canvas.fill((190, 170, 150))
        canvas.stroke((150, 130, 110))
        canvas.arc(0, 0, 80, 50, math.pi, TWO_PI)
        canvas.stroke((130, 110, 90))
        canvas.stroke_weight(1)
        for ridge_x in range(-30, 30, 10):
            canvas.line(ridge_x, -5, ridge_x, -20)
        canvas.pop()

        if self.open_amount > 0.3:
            canvas.no_stroke()
            canvas.fill((255, 250, 240))
            canvas.circle(0, -5, 15)
            canvas.fill((255, 255, 255, 200))
            canvas.circle(-2, -7, 6)
        canvas.pop()


class TreasureChest(HingedOrnament):
    def __init__(self, x: float, y: float, bubbles: EntityStore) -> None:
        super().__init__(x, y, math.pi / 2.5, 200, 100, 12, bubbles)

    def render(self, canvas: "DrawList") -> None:
        canvas.push()
        canvas.translate(self.x, self.y)
        canvas.fill((101, 67, 33))
        canvas.stroke((70, 45, 20))
        canvas.stroke_weight(2)
        canvas.rect(-40, -20, 80, 40, 5)

        canvas.push()
        canvas.translate(0, -20)
        canvas.rotate(-self.open_amount)
        canvas.fill((110, 75, 38))
        canvas.stroke((75, 50, 23))
        canvas.arc(0, 0, 80, 40, math.pi, TWO_PI)
        canvas.rect(-40, 0, 80, 10)
        canvas.stroke((180, 160, 100))
        canvas.stroke_weight(3)
        for band_x in (-30, 30, 0):
            canvas.line(band_x, -15, band_x, 5)
        canvas.pop()

        canvas.fill((180, 160, 100))
        canvas.stroke((140, 120, 70))
        canvas.stroke_weight(2)
        canvas.circle(0, -10, 12)

        if self.open_amount > 0.5:
            canvas.no_stroke()
            canvas.fill((255, 215, 0))
            canvas.circle(-10, -25, 12)
            canvas.circle(5, -28, 10)
            canvas.circle(-5, -30, 11)
            canvas.fill((255, 50, 100))
            canvas.circle(10, -26, 8)
            canvas.fill((50, 150, 255))
            canvas.circle(15, -23, 7)
        canvas.pop()
