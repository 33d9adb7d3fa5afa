"""Flocking forces and the neighbour grid behind them.

The forces are plain functions of positions and headings so they can be
tested without a flock. ``SpatialGrid`` buckets positions into square
cells; a radius query only inspects the cells overlapping the query box.
"""

import math
from collections import defaultdict
from typing import Callable, Dict, Generic, Iterable, List, Sequence, Tuple, TypeVar

from sketchbook.math_utils import Vector2

T = TypeVar("T")

NEIGHBOR_RADIUS = 100.0
SEPARATION_RADIUS = 60.0
ALIGNMENT_WEIGHT = 0.02
COHESION_WEIGHT = 0.01
SEPARATION_WEIGHT = 0.15


class SpatialGrid(Generic[T]):
    """
    Uniform grid for proximity queries.

    Items are located through ``position_of``; positions outside the grid
    bounds are clamped into the edge cells, so wrapped entities sitting
    just off-canvas are still found.
    """

    def __init__(
        self,
        width: float,
        height: float,
        cell_size: float,
        position_of: Callable[[T], Tuple[float, float]],
    ) -> None:
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}")
        self.width = width
        self.height = height
        self.cell_size = cell_size
        self.cols = max(1, math.ceil(width / cell_size))
        self.rows = max(1, math.ceil(height / cell_size))
        self.position_of = position_of
        self.grid: Dict[Tuple[int, int], List[T]] = defaultdict(list)

    def _get_cell(self, x: float, y: float) -> Tuple[int, int]:
        col = max(0, min(self.cols - 1, int(x // self.cell_size)))
        row = max(0, min(self.rows - 1, int(y // self.cell_size)))
        return (col, row)

    def _get_cell_range(self, x: float, y: float, radius: float) -> Tuple[int, int, int, int]:
        """Returns (min_col, max_col, min_row, max_row) covering the query box."""
        min_col, min_row = self._get_cell(x - radius, y - radius)
        max_col, max_row = self._get_cell(x + radius, y + radius)
        return (min_col, max_col, min_row, max_row)

    def rebuild(self, items: Iterable[T]) -> None:
        """Re-bucket every item from its current position."""
        self.grid.clear()
        for item in items:
            x, y = self.position_of(item)
            self.grid[self._get_cell(x, y)].append(item)

    def query_radius(self, x: float, y: float, radius: float) -> List[T]:
        """Items strictly closer than ``radius`` to ``(x, y)``."""
        min_col, max_col, min_row, max_row = self._get_cell_range(x, y, radius)
        radius_sq = radius * radius
        found: List[T] = []
        for col in range(min_col, max_col + 1):
            for row in range(min_row, max_row + 1):
                for item in self.grid.get((col, row), ()):
                    ix, iy = self.position_of(item)
                    dx = ix - x
                    dy = iy - y
                    if dx * dx + dy * dy < radius_sq:
                        found.append(item)
        return found

    def __len__(self) -> int:
        return sum(len(items) for items in self.grid.values())


def alignment_force(headings: Sequence[float], weight: float = ALIGNMENT_WEIGHT) -> Vector2:
    """Mean of the neighbours' unit heading vectors, scaled by ``weight``."""
    if not headings:
        return Vector2(0.0, 0.0)
    total = Vector2(0.0, 0.0)
    for angle in headings:
        total.add_inplace(Vector2.from_angle(angle))
    return total.div_inplace(len(headings)).mul_inplace(weight)


def cohesion_force(
    x: float, y: float, positions: Sequence[Tuple[float, float]], weight: float = COHESION_WEIGHT
) -> Vector2:
    """Unit vector toward the neighbours' centroid, scaled by ``weight``."""
    if not positions:
        return Vector2(0.0, 0.0)
    cx = sum(p[0] for p in positions) / len(positions)
    cy = sum(p[1] for p in positions) / len(positions)
    return Vector2(cx - x, cy - y).normalize_inplace().mul_inplace(weight)


def separation_force(dx: float, dy: float, radius: float = SEPARATION_RADIUS) -> Vector2:
    """Repulsion from one neighbour offset by ``(dx, dy)`` (pointing away from it).

    The magnitude is ``1/d - 1/radius``: it grows as the neighbour gets
    closer and is zero at or beyond ``radius``. Coincident points push
    with no direction.
    """
    d = math.hypot(dx, dy)
    if d <= 0.0 or d >= radius:
        return Vector2(0.0, 0.0)
    magnitude = 1.0 / d - 1.0 / radius
    return Vector2(dx / d * magnitude, dy / d * magnitude)


def separation_total(
    x: float,
    y: float,
    positions: Sequence[Tuple[float, float]],
    radius: float = SEPARATION_RADIUS,
    weight: float = SEPARATION_WEIGHT,
) -> Vector2:
    """Sum of per-neighbour repulsions averaged over all neighbours."""
    if not positions:
        return Vector2(0.0, 0.0)
    total = Vector2(0.0, 0.0)
    for ox, oy in positions:
        total.add_inplace(separation_force(x - ox, y - oy, radius))
    return total.div_inplace(len(positions)).mul_inplace(weight)


def steering_angle(
    angle: float,
    alignment: Vector2,
    cohesion: Vector2,
    separation: Vector2,
    smoothing: float = 0.08,
) -> float:
    """Smoothed heading after blending the three flocking forces."""
    target = angle + alignment.heading() * 0.2 + cohesion.heading() * 0.1 + separation.heading() * 0.5
    return angle + (target - angle) * smoothing
