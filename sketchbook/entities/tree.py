"""Procedurally growing low-resolution tree.

Branches live in a flat arena and refer to their children by index, so
the whole tree is one entity with no parent/child object graph. Positions
and segments are in grid cells, not pixels; the renderer multiplies by
the pixel size.
"""

import math
import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Tuple

from sketchbook.entities.base import AnimatedEntity

if TYPE_CHECKING:
    from sketchbook.draw_list import DrawList
    from sketchbook.update_phases import TickContext

MAX_DEPTH = 5
TRUNK_SEGMENTS = 20
BRANCH_SEGMENTS = 8
GROWTH_PER_TICK = 0.2
BRANCH_PROBABILITY = 0.3
MIN_SEGMENTS_BEFORE_BRANCHING = 3
ANGLE_JITTER = 5.0
BRANCH_SPREAD = (25.0, 35.0)
LEAF_MIN_DEPTH = 2

BARK = (101, 67, 33)
LEAVES = (34, 100, 34)


@dataclass
class Branch:
    """One branch: a growing tip plus the cells it has laid down.

    ``angle`` is in degrees; -90 points straight up.
    """

    x: float
    y: float
    angle: float
    depth: int
    max_segments: int
    growth: float = 0.0
    growing: bool = True
    segments: List[Tuple[float, float]] = field(default_factory=list)
    children: List[int] = field(default_factory=list)


class BranchArena(AnimatedEntity):
    """A whole tree, grown one tick at a time from a single trunk."""

    def __init__(self, x: float, y: float, angle: float = -90.0, max_depth: int = MAX_DEPTH) -> None:
        self.max_depth = max_depth
        self.branches: List[Branch] = []
        self.root = self._add_branch(x, y, angle, 0)

    def _add_branch(self, x: float, y: float, angle: float, depth: int) -> int:
        quota = TRUNK_SEGMENTS if depth == 0 else BRANCH_SEGMENTS
        self.branches.append(Branch(x, y, angle, depth, quota))
        return len(self.branches) - 1

    def __len__(self) -> int:
        return len(self.branches)

    @property
    def growing(self) -> bool:
        return any(branch.growing for branch in self.branches)

    @property
    def depth(self) -> int:
        return max(branch.depth for branch in self.branches)

    def update(self, tick: "TickContext") -> None:
        self._grow(self.root, tick.rng)

    def _grow(self, index: int, rng: random.Random) -> None:
        branch = self.branches[index]
        if branch.growing:
            branch.growth += GROWTH_PER_TICK
            if branch.growth >= 1 and len(branch.segments) < branch.max_segments:
                rad = math.radians(branch.angle)
                branch.x += math.cos(rad)
                branch.y += math.sin(rad)
                branch.segments.append((branch.x, branch.y))
                branch.growth = 0.0
                branch.angle += rng.uniform(-ANGLE_JITTER, ANGLE_JITTER)

                if (
                    rng.random() < BRANCH_PROBABILITY
                    and branch.depth < self.max_depth
                    and len(branch.segments) > MIN_SEGMENTS_BEFORE_BRANCHING
                ):
                    self._split(index, rng)

            if len(branch.segments) >= branch.max_segments:
                branch.growing = False

        # Children spawned above are grown in this same pass
        for child in list(branch.children):
            self._grow(child, rng)

    def _split(self, index: int, rng: random.Random) -> None:
        branch = self.branches[index]
        left = branch.angle - rng.uniform(*BRANCH_SPREAD)
        right = branch.angle + rng.uniform(*BRANCH_SPREAD)
        for angle in (left, right):
            child = self._add_branch(branch.x, branch.y, angle, branch.depth + 1)
            branch.children.append(child)

    def render(self, canvas: "DrawList", pixel_size: float = 8) -> None:
        canvas.no_stroke()
        self._render_branch(self.root, canvas, pixel_size)

    def _render_branch(self, index: int, canvas: "DrawList", px: float) -> None:
        branch = self.branches[index]
        canvas.fill(BARK)
        for sx, sy in branch.segments:
            canvas.rect(sx * px, sy * px, px, px)

        for child in branch.children:
            self._render_branch(child, canvas, px)

        if not branch.growing and branch.depth >= LEAF_MIN_DEPTH:
            canvas.fill(LEAVES)
            canvas.rect(branch.x * px, branch.y * px, px * 2, px * 2)
            canvas.rect((branch.x - 1) * px, branch.y * px, px, px)
            canvas.rect((branch.x + 1) * px, branch.y * px, px, px)
