"""Tests for entity stores, particles and the lifecycle system."""

import pytest

from sketchbook.entities.base import AnimatedEntity
from sketchbook.entities.particles import Bubble, Ripple, SplashParticle
from sketchbook.entity_store import EntityStore
from sketchbook.systems.entity_lifecycle import EntityLifecycleSystem, EntityStepSystem
from sketchbook.update_phases import PhaseRunner, UpdatePhase


class Marker(AnimatedEntity):
    """Entity whose expiry is set by the test."""

    def __init__(self, name, expired=False):
        self.name = name
        self.expired = expired
        self.updates = 0

    def update(self, tick):
        self.updates += 1

    def render(self, canvas):
        pass

    def is_expired(self):
        return self.expired


class TestEntityStore:
    """Tests for ordered storage and pruning."""

    def test_prune_removes_exactly_the_expired(self):
        store = EntityStore("markers", [Marker("a"), Marker("b", True), Marker("c"), Marker("d", True)])
        removed = store.prune()
        assert [m.name for m in removed] == ["b", "d"]
        assert [m.name for m in store] == ["a", "c"]

    def test_prune_leaves_survivors_untouched(self):
        survivor = Marker("a")
        store = EntityStore("markers", [survivor, Marker("b", True)])
        store.prune()
        assert store[0] is survivor
        assert survivor.updates == 0

    def test_step_all_updates_each_once(self, tick):
        markers = [Marker("a"), Marker("b")]
        store = EntityStore("markers", markers)
        assert store.step_all(tick) == 2
        assert [m.updates for m in markers] == [1, 1]

    def test_extend_and_clear(self):
        store = EntityStore("markers")
        assert store.extend([Marker("a"), Marker("b")]) == 2
        assert store.clear() == 2
        assert len(store) == 0


class TestLifecycleSystems:
    """Tests for the step and cleanup systems."""

    def test_systems_declare_their_phases(self):
        store = EntityStore("markers")
        assert EntityStepSystem(store).phase == UpdatePhase.ENTITY_ACT
        assert EntityLifecycleSystem([store]).phase == UpdatePhase.CLEANUP

    def test_lifecycle_reports_removals_per_store(self, tick):
        ripples = EntityStore("ripples", [Marker("a", True), Marker("b")])
        bubbles = EntityStore("bubbles", [Marker("c", True), Marker("d", True)])
        system = EntityLifecycleSystem([ripples, bubbles])

        result = system.update(tick)

        assert result.entities_removed == 3
        assert result.details == {"ripples_removed": 1, "bubbles_removed": 2}
        assert system.total_removed == 3
        assert len(ripples) == 1 and len(bubbles) == 0

    def test_disabled_system_is_skipped(self, tick):
        store = EntityStore("markers", [Marker("a", True)])
        system = EntityLifecycleSystem([store])
        system.enabled = False
        assert system.update(tick).skipped
        assert len(store) == 1

    def test_runner_steps_before_cleanup_whatever_the_registration_order(self, tick):
        marker = Marker("a", expired=True)
        store = EntityStore("markers", [marker])
        runner = PhaseRunner()
        runner.register(EntityLifecycleSystem([store]))
        runner.register(EntityStepSystem(store))

        result = runner.run_all(tick)

        assert marker.updates == 1
        assert len(store) == 0
        assert result.entities_affected == 1
        assert result.entities_removed == 1
        assert tick.phase == UpdatePhase.CLEANUP


class TestParticles:
    """Tests for splash particles, ripples and bubbles."""

    def test_splash_particle_lives_35_ticks(self, tick):
        particle = SplashParticle(0, 0, 1, -5, 6)
        for _ in range(34):
            particle.update(tick)
        assert not particle.is_expired()
        particle.update(tick)
        assert particle.is_expired()

    def test_splash_particle_falls_under_gravity(self, tick):
        particle = SplashParticle(0, 0, 0, 0, 6)
        particle.update(tick)
        particle.update(tick)
        assert particle.vy == pytest.approx(0.6)
        assert particle.y == pytest.approx(0.3)

    def test_burst_throws_particles_upward(self, seeded_rng):
        particles = SplashParticle.burst(100, 100, seeded_rng)
        assert len(particles) == 30
        assert all(p.vy < 0 for p in particles)

    def test_ripple_grows_and_fades(self, tick):
        ripple = Ripple(10, 10)
        for _ in range(19):
            ripple.update(tick)
        assert ripple.size == 38
        assert ripple.alpha == 5
        assert not ripple.is_expired()
        ripple.update(tick)
        assert ripple.is_expired()

    def test_bubble_rises_until_past_top_edge(self, seeded_rng, tick_factory):
        bubble = Bubble(100, 0, seeded_rng)
        for frame in range(1, 500):
            if bubble.is_expired():
                break
            bubble.update(tick_factory(frame=frame))
        assert bubble.is_expired()
        assert bubble.y < -20

    def test_bubble_eases_up_to_speed(self, seeded_rng, tick):
        bubble = Bubble(100, 500, seeded_rng)
        bubble.update(tick)
        first = bubble.speed
        bubble.update(tick)
        assert 0 < first < bubble.speed < bubble.base_speed
