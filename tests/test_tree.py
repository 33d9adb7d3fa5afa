"""Tests for the growing pixel tree."""

import pytest

from sketchbook.draw_list import DrawList
from sketchbook.entities.tree import BRANCH_SEGMENTS, MAX_DEPTH, TRUNK_SEGMENTS, BranchArena


def grow(tree, tick, ticks):
    for _ in range(ticks):
        tree.update(tick)


class TestBranchArena:
    """Tests for growth limits and branching."""

    def test_trunk_grows_one_cell_every_five_ticks(self, tick):
        tree = BranchArena(50, 50)
        grow(tree, tick, 4)
        assert tree.branches[tree.root].segments == []
        grow(tree, tick, 1)
        assert len(tree.branches[tree.root].segments) == 1

    def test_first_segment_points_up(self, tick):
        tree = BranchArena(50, 50)
        grow(tree, tick, 5)
        x, y = tree.branches[tree.root].segments[0]
        assert x == pytest.approx(50)
        assert y == pytest.approx(49)

    def test_depth_and_segment_quotas(self, tick):
        tree = BranchArena(50, 80)
        grow(tree, tick, 600)
        assert tree.depth <= MAX_DEPTH
        for branch in tree.branches:
            quota = TRUNK_SEGMENTS if branch.depth == 0 else BRANCH_SEGMENTS
            assert len(branch.segments) <= quota
            assert branch.max_segments == quota

    def test_growth_eventually_stops(self, tick):
        tree = BranchArena(50, 80)
        grow(tree, tick, 600)
        assert not tree.growing
        count = len(tree)
        grow(tree, tick, 10)
        assert len(tree) == count

    def test_new_children_grow_in_the_same_tick(self, tick):
        tree = BranchArena(50, 80)
        for _ in range(600):
            tree.update(tick)
            if len(tree) > 1:
                break
        root = tree.branches[tree.root]
        assert len(root.children) == 2
        for child_index in root.children:
            child = tree.branches[child_index]
            assert child.depth == 1
            assert child.growth == pytest.approx(0.2)
            assert (child.x, child.y) == (root.x, root.y)

    def test_branches_only_after_three_segments(self, tick):
        tree = BranchArena(50, 80)
        grow(tree, tick, 600)
        for branch in tree.branches:
            if branch.children:
                assert len(branch.segments) > 3

    def test_render_draws_cells(self, tick):
        tree = BranchArena(50, 80)
        grow(tree, tick, 10)
        canvas = DrawList()
        tree.render(canvas, pixel_size=8)
        assert len(canvas) == 2
        assert canvas.ops[0].width == 8
