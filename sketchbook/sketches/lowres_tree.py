"""Lowres One Tree Hill: a pixel-art tree growing on a hill at sunset.

Everything is laid out on a coarse grid of ``PIXEL_SIZE`` pixel cells.
The sky, ground, hill and flowers never change, so they are computed
once at setup as a list of filled cells.
"""

from dataclasses import dataclass, field
from typing import List, Tuple

from sketchbook.config.sketch_config import RecordingConfig, SketchConfig
from sketchbook.entities.tree import BranchArena
from sketchbook.math_utils import map_range
from sketchbook.sketch import Sketch

PIXEL_SIZE = 8
FLOWER_COUNT = 30
FLOWER_COLORS = {
    "red": (220, 20, 60),
    "yellow": (255, 215, 0),
    "pink": (255, 182, 193),
    "purple": (147, 112, 219),
    "white": (255, 255, 255),
}
FLOWER_CENTER = (255, 215, 0)
STEM = (34, 100, 34)

Cell = Tuple[float, float, float, float, Tuple[float, ...]]


def sky_color(t: float) -> Tuple[float, float, float]:
    """Sunset gradient: orange at the top, through pink and purple to dark blue."""
    if t < 0.3:
        return (255, map_range(t, 0, 0.3, 140, 100), map_range(t, 0, 0.3, 50, 150))
    if t < 0.6:
        return (
            map_range(t, 0.3, 0.6, 255, 150),
            map_range(t, 0.3, 0.6, 100, 50),
            map_range(t, 0.3, 0.6, 150, 200),
        )
    return (map_range(t, 0.6, 1.0, 150, 50), 50, map_range(t, 0.6, 1.0, 200, 150))


def grass_variation(col: int, row: int) -> int:
    return (col * 3 + row * 5) % 10 - 5


@dataclass
class LowresState:
    tree: BranchArena
    scenery: List[Cell] = field(default_factory=list)


class LowresTree(Sketch[LowresState]):
    name = "lowres"
    title = "Lowres One Tree Hill"

    @classmethod
    def default_config(cls) -> SketchConfig:
        return SketchConfig(recording=RecordingConfig(prefix="lowres", digits=4, max_frames=None))

    def setup(self, rng) -> LowresState:
        display = self.config.display
        cols = display.width // PIXEL_SIZE
        rows = display.height // PIXEL_SIZE
        horizon = rows * 0.85
        hill_center = cols * 0.6
        hill_peak = rows * 0.55
        hill_width = cols * 0.8

        cells: List[Cell] = []
        px = PIXEL_SIZE
        for row in range(rows):
            cells.append((0, row * px, display.width, px, sky_color(row / rows)))

        first_ground_row = int(horizon) if horizon == int(horizon) else int(horizon) + 1
        for row in range(first_ground_row, rows):
            for col in range(cols):
                v = grass_variation(col, row)
                cells.append((col * px, row * px, px, px, (34 + v, 139 + v, 34 + v)))

        row = hill_peak
        while row < horizon:
            for col in range(cols):
                hill_top = hill_peak + ((col - hill_center) / (hill_width / 2)) ** 2 * (horizon - hill_peak)
                if row >= hill_top:
                    v = (col * 3 + int(row) * 5) % 10 - 5
                    cells.append((col * px, row * px, px, px, (44 + v, 149 + v, 44 + v)))
            row += 1

        for _ in range(FLOWER_COUNT):
            fx = rng.uniform(5, cols - 5)
            fy = horizon + rng.uniform(0, rows - horizon - 5)
            petal = FLOWER_COLORS[rng.choice(list(FLOWER_COLORS))]
            for dx, dy in ((-1, 0), (1, 0), (0, -1), (0, 1)):
                cells.append(((fx + dx) * px, (fy + dy) * px, px, px, petal))
            cells.append((fx * px, fy * px, px, px, FLOWER_CENTER))
            cells.append((fx * px, (fy + 2) * px, px, px, STEM))
            cells.append((fx * px, (fy + 3) * px, px, px, STEM))

        return LowresState(tree=BranchArena(hill_center, hill_peak), scenery=cells)

    def step(self, state: LowresState, tick) -> LowresState:
        state.tree.update(tick)
        return state

    def compose(self, state: LowresState, canvas, tick) -> None:
        canvas.no_stroke()
        for x, y, w, h, color in state.scenery:
            canvas.fill(color)
            canvas.rect(x, y, w, h)
        state.tree.render(canvas, PIXEL_SIZE)
