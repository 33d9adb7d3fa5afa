"""Tests for guppies, food flakes and ornaments."""

import math

import pytest

from sketchbook.entities.aquarium import (
    LETTER_SHAPES,
    PIECES_PER_LETTER,
    WORD,
    Clam,
    FoodFlake,
    Guppy,
    HingedOrnament,
    School,
    drop_food_wave,
    letter_center,
    letter_cluster_positions,
)
from sketchbook.entity_store import EntityStore
from sketchbook.systems.school import SchoolSystem

WIDTH, HEIGHT = 1080, 1920


def make_flake(rng, letter_index=0, wave=1, x=None, y=None):
    flake = FoodFlake(500, 50, WORD[letter_index], letter_index, 0, wave, rng, WIDTH, HEIGHT)
    if x is not None:
        flake.x = x
    if y is not None:
        flake.y = y
    return flake


class TestLetterLayout:
    def test_every_letter_has_a_full_shape(self):
        for letter in WORD:
            assert len(letter_cluster_positions(letter)) == PIECES_PER_LETTER

    def test_unknown_letter_has_no_shape(self):
        assert letter_cluster_positions("Q") == []

    def test_positions_are_scaled(self):
        assert letter_cluster_positions("G", scale=10)[0] == (-20, -30)
        assert set(LETTER_SHAPES) == set(WORD)

    def test_word_is_centered_at_half_height(self):
        first = letter_center(0, WIDTH, HEIGHT)
        last = letter_center(len(WORD) - 1, WIDTH, HEIGHT)
        assert first == (90, 960)
        assert (first[0] + last[0]) / 2 == pytest.approx(WIDTH / 2)


class TestFoodFlake:
    """Tests for falling and being eaten."""

    def test_target_is_letter_slot(self, seeded_rng):
        flake = make_flake(seeded_rng)
        assert flake.target_x == 90 - 120
        assert flake.target_y == 960 - 180

    def test_first_wave_eaten_fast(self, seeded_rng, tick):
        flake = make_flake(seeded_rng, wave=1)
        flake.claim_fish()
        flake.claim_fish()
        flake.update(tick)
        assert flake.eaten_amount == pytest.approx(0.03)

    def test_later_waves_eaten_slowly(self, seeded_rng, tick):
        flake = make_flake(seeded_rng, wave=2)
        flake.claim_fish()
        flake.update(tick)
        assert flake.eaten_amount == pytest.approx(0.003)

    def test_fully_eaten_flake_expires(self, seeded_rng, tick):
        flake = make_flake(seeded_rng)
        flake.claim_fish()
        for _ in range(100):
            flake.update(tick)
        assert flake.eaten_amount == 1.0
        assert flake.is_expired()

    def test_release_never_goes_negative(self, seeded_rng):
        flake = make_flake(seeded_rng)
        flake.release_fish()
        assert flake.fish_eating == 0

    def test_flake_settles_on_target(self, seeded_rng, tick_factory):
        flake = make_flake(seeded_rng)
        for frame in range(1, 3000):
            flake.update(tick_factory(frame=frame))
            if flake.settled:
                break
        assert flake.settled
        assert (flake.x, flake.y) == (flake.target_x, flake.target_y)

    def test_wave_has_every_piece_of_every_letter(self, seeded_rng):
        flakes = drop_food_wave(seeded_rng, WIDTH, HEIGHT, wave=1)
        assert len(flakes) == len(WORD) * PIECES_PER_LETTER
        for index in range(len(WORD)):
            assert sum(1 for f in flakes if f.letter_index == index) == PIECES_PER_LETTER


class TestGuppy:
    """Tests for target selection and feeding."""

    @pytest.fixture
    def school(self):
        return School(WIDTH, HEIGHT, EntityStore("flakes"))

    def make_guppy(self, school, rng, x=500, y=1000, letter=0, index=0):
        fish = Guppy(x, y, 0.0, index, letter, rng)
        school.add(fish)
        return fish

    def test_ignores_other_letters_and_unsunk_flakes(self, school, seeded_rng):
        fish = self.make_guppy(school, seeded_rng)
        other_letter = make_flake(seeded_rng, letter_index=1, x=501, y=1000)
        too_high = make_flake(seeded_rng, x=500, y=100)
        wanted = make_flake(seeded_rng, x=700, y=1200)
        assert fish.find_target([other_letter, too_high, wanted], HEIGHT * 0.33) is wanted

    def test_picks_closest(self, school, seeded_rng):
        fish = self.make_guppy(school, seeded_rng)
        far = make_flake(seeded_rng, x=900, y=1000)
        near = make_flake(seeded_rng, x=550, y=1000)
        assert fish.find_target([far, near], 0) is near

    def test_claims_flake_once(self, school, seeded_rng, tick):
        fish = self.make_guppy(school, seeded_rng)
        flake = make_flake(seeded_rng, x=505, y=1000)
        fish.feed([flake], tick)
        fish.feed([flake], tick)
        assert fish.eating
        assert flake.fish_eating == 1

        fish.drop_target()
        assert flake.fish_eating == 0
        assert fish.target is None

    def test_swims_when_not_feeding(self, school, seeded_rng, tick):
        fish = self.make_guppy(school, seeded_rng)
        school.flakes.add(make_flake(seeded_rng, x=505, y=1000))
        school.rebuild()
        fish.update(tick)
        assert fish.target is None

    def test_stays_inside_swim_band(self, school, seeded_rng, tick_factory):
        fish = self.make_guppy(school, seeded_rng, y=1700)
        for frame in range(1, 200):
            school.rebuild()
            fish.update(tick_factory(frame=frame))
            assert HEIGHT * 0.5 <= fish.y <= HEIGHT - 170 + 20

    def test_neighbors_exclude_self(self, school, seeded_rng):
        a = self.make_guppy(school, seeded_rng, index=0)
        b = self.make_guppy(school, seeded_rng, x=520, index=1)
        self.make_guppy(school, seeded_rng, x=900, index=2)
        school.rebuild()
        assert school.neighbors_of(a) == [b]

    def test_school_system_reports_eating(self, school, seeded_rng, tick):
        fish = self.make_guppy(school, seeded_rng)
        school.flakes.add(make_flake(seeded_rng, x=505, y=1000))
        school.feeding = True
        result = SchoolSystem(school).update(tick)
        assert result.entities_affected == 1
        assert result.details == {"feeding": True, "eating": 1}
        assert fish.eating


class TestHingedOrnament:
    """Tests for the clam's open/close cycle."""

    def test_clam_opens_after_rest_and_releases_bubbles(self, tick):
        bubbles = EntityStore("bubbles")
        clam = Clam(100, 100, bubbles)
        states = []
        for _ in range(181):
            clam.update(tick)
            states.append(clam.state)
        assert states[179] == HingedOrnament.CLOSED
        assert states[180] == HingedOrnament.OPENING
        assert len(bubbles) == 0

        while clam.state == HingedOrnament.OPENING:
            clam.update(tick)
        assert clam.state == HingedOrnament.OPEN
        assert clam.open_amount > math.pi / 3 - 0.1
        assert len(bubbles) == 10

    def test_full_cycle_closes_again(self, tick):
        clam = Clam(100, 100, EntityStore("bubbles"))
        seen = set()
        for _ in range(600):
            clam.update(tick)
            seen.add(clam.state)
            if clam.state == HingedOrnament.CLOSED and HingedOrnament.CLOSING in seen:
                break
        assert seen == {"closed", "opening", "open", "closing"}
        assert clam.open_amount == 0.0
