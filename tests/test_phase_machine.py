"""Tests for the animation phase machine."""

import pytest

from sketchbook.exceptions import ConfigurationError
from sketchbook.phase_machine import AnimationPhase, PhaseMachine


def make_machine(log=None):
    def record(name):
        def on_frame(local):
            if log is not None:
                log.append((name, local))
            return None

        return on_frame

    return PhaseMachine(
        [
            AnimationPhase("idle"),
            AnimationPhase("a", duration=3, next_phase="b", on_frame=record("a")),
            AnimationPhase("b", duration=2, next_phase="a", on_frame=record("b")),
        ],
        initial="idle",
        loop_start="a",
    )


class TestPhaseMachine:
    """Tests for timed transitions and local counters."""

    def test_handler_sees_counter_after_increment(self):
        log = []
        machine = make_machine(log)
        machine.enter("a")
        assert machine.local_frame == 0
        machine.tick()
        assert log == [("a", 1)]
        assert machine.local_frame == 1

    def test_fixed_duration_transitions_exactly_once(self):
        """A 3-frame phase hands over on its third tick and only then."""
        machine = make_machine()
        machine.enter("a")
        entered = [machine.tick() for _ in range(3)]
        assert entered == [None, None, "b"]
        assert machine.current == "b"
        assert machine.local_frame == 0

    def test_successor_sees_fresh_counter(self):
        log = []
        machine = make_machine(log)
        machine.enter("a")
        for _ in range(5):
            machine.tick()
        assert log == [("a", 1), ("a", 2), ("a", 3), ("b", 1), ("b", 2)]
        assert machine.current == "a"

    def test_loop_counts_cycles(self):
        """Returning to the loop start from the terminal phase is one cycle."""
        machine = make_machine()
        machine.enter("a")
        assert machine.cycles_completed == 0
        for _ in range(10):
            machine.tick()
        assert machine.cycles_completed == 2

    def test_idle_phase_waits_forever(self):
        machine = make_machine()
        for _ in range(100):
            assert machine.tick() is None
        assert machine.current == "idle"

    def test_handler_can_request_transition(self):
        machine = PhaseMachine(
            [
                AnimationPhase("fall", on_frame=lambda local: "land" if local == 4 else None),
                AnimationPhase("land"),
            ],
            initial="fall",
        )
        results = [machine.tick() for _ in range(4)]
        assert results[-1] == "land"
        assert results[:-1] == [None] * 3

    def test_on_enter_runs_on_entry(self):
        entered = []
        machine = PhaseMachine(
            [AnimationPhase("x"), AnimationPhase("y", on_enter=lambda: entered.append("y"))],
            initial="x",
        )
        machine.enter("y")
        assert entered == ["y"]

    def test_reset_returns_to_initial(self):
        machine = make_machine()
        machine.enter("b")
        machine.tick()
        machine.reset()
        assert machine.current == "idle"
        assert machine.local_frame == 0


class TestPhaseMachineValidation:
    """Tests for configuration errors."""

    def test_duplicate_names(self):
        with pytest.raises(ConfigurationError):
            PhaseMachine([AnimationPhase("a"), AnimationPhase("a")], initial="a")

    def test_unknown_successor(self):
        with pytest.raises(ConfigurationError):
            PhaseMachine([AnimationPhase("a", duration=2, next_phase="zzz")], initial="a")

    def test_duration_without_successor(self):
        with pytest.raises(ConfigurationError):
            PhaseMachine([AnimationPhase("a", duration=2)], initial="a")

    def test_non_positive_duration(self):
        with pytest.raises(ConfigurationError):
            PhaseMachine([AnimationPhase("a", duration=0, next_phase="a")], initial="a")

    def test_unknown_initial(self):
        with pytest.raises(ConfigurationError):
            PhaseMachine([AnimationPhase("a")], initial="b")

    def test_enter_unknown_phase(self):
        machine = make_machine()
        with pytest.raises(ConfigurationError):
            machine.enter("nowhere")
