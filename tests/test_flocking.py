"""Tests for flocking forces and the neighbour grid."""

import math

import pytest

from sketchbook.flocking import (
    SpatialGrid,
    alignment_force,
    cohesion_force,
    separation_force,
    separation_total,
    steering_angle,
)
from sketchbook.math_utils import Vector2


class TestSeparationForce:
    """Tests for the per-neighbour repulsion."""

    def test_points_away_from_neighbour(self):
        force = separation_force(10.0, 0.0, 60.0)
        assert force.x > 0
        assert force.y == pytest.approx(0.0)

    def test_magnitude_is_inverse_distance_minus_inverse_radius(self):
        force = separation_force(0.0, -20.0, 60.0)
        assert force.length() == pytest.approx(1 / 20 - 1 / 60)

    def test_monotonic_decreasing_with_distance(self):
        """Closer neighbours always push harder."""
        magnitudes = [separation_force(float(d), 0.0, 60.0).length() for d in range(1, 60)]
        assert all(a > b for a, b in zip(magnitudes, magnitudes[1:]))

    @pytest.mark.parametrize("distance", [60.0, 61.0, 500.0])
    def test_zero_at_or_beyond_radius(self, distance):
        assert separation_force(distance, 0.0, 60.0) == Vector2(0.0, 0.0)

    def test_coincident_points_do_not_divide_by_zero(self):
        assert separation_force(0.0, 0.0) == Vector2(0.0, 0.0)

    def test_total_is_averaged_over_all_neighbours(self):
        """Far neighbours contribute nothing but still count in the average."""
        near_only = separation_total(0.0, 0.0, [(-10.0, 0.0)])
        with_far = separation_total(0.0, 0.0, [(-10.0, 0.0), (-90.0, 0.0)])
        assert with_far.x == pytest.approx(near_only.x / 2)
        assert near_only.x == pytest.approx((1 / 10 - 1 / 60) * 0.15)


class TestAlignmentAndCohesion:
    def test_alignment_of_parallel_headings(self):
        force = alignment_force([0.0, 0.0])
        assert force.x == pytest.approx(0.02)
        assert force.y == pytest.approx(0.0)

    def test_opposite_headings_cancel(self):
        force = alignment_force([0.0, math.pi])
        assert force.length() == pytest.approx(0.0, abs=1e-12)

    def test_cohesion_points_to_centroid(self):
        force = cohesion_force(0.0, 0.0, [(10.0, 0.0), (30.0, 0.0)])
        assert force.x == pytest.approx(0.01)
        assert force.y == pytest.approx(0.0)

    def test_no_neighbours_no_force(self):
        assert alignment_force([]) == Vector2(0.0, 0.0)
        assert cohesion_force(5.0, 5.0, []) == Vector2(0.0, 0.0)

    def test_steering_without_forces_keeps_heading(self):
        zero = Vector2(0.0, 0.0)
        assert steering_angle(1.25, zero, zero, zero) == pytest.approx(1.25)


class TestSpatialGrid:
    """Tests for radius queries."""

    @pytest.fixture
    def grid(self):
        return SpatialGrid(400, 400, 100, position_of=lambda p: p)

    def test_query_is_strictly_inside_radius(self, grid):
        points = [(0.0, 0.0), (50.0, 0.0), (100.0, 0.0), (300.0, 300.0)]
        grid.rebuild(points)
        found = grid.query_radius(0.0, 0.0, 100.0)
        assert sorted(found) == [(0.0, 0.0), (50.0, 0.0)]

    def test_query_crosses_cell_boundaries(self, grid):
        grid.rebuild([(99.0, 99.0), (101.0, 101.0)])
        assert len(grid.query_radius(100.0, 100.0, 5.0)) == 2

    def test_off_canvas_items_are_bucketed(self, grid):
        """Items just outside the bounds land in the edge cells."""
        grid.rebuild([(-10.0, -10.0), (410.0, 200.0)])
        assert len(grid) == 2
        assert grid.query_radius(0.0, 0.0, 20.0) == [(-10.0, -10.0)]

    def test_rebuild_replaces_contents(self, grid):
        grid.rebuild([(1.0, 1.0)])
        grid.rebuild([(200.0, 200.0)])
        assert grid.query_radius(1.0, 1.0, 10.0) == []
        assert len(grid) == 1

    def test_rejects_non_positive_cell_size(self):
        with pytest.raises(ValueError):
            SpatialGrid(100, 100, 0, position_of=lambda p: p)
