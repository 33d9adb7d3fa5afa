"""Pytest configuration and fixtures for sketch tests."""

import os
import random

# pygame surfaces and fonts must work without a display
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def tick_factory(seeded_rng):
    """Build TickContexts sharing the seeded RNG."""
    from sketchbook.update_phases import TickContext

    def make(frame=1, elapsed_ms=0.0, recording=False, recorded_frames=0):
        return TickContext(
            frame=frame,
            elapsed_ms=elapsed_ms,
            rng=seeded_rng,
            recording=recording,
            recorded_frames=recorded_frames,
        )

    return make


@pytest.fixture
def tick(tick_factory):
    return tick_factory()


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo handlers and levels installed by configure_logging."""
    import logging

    from sketchbook.logging_config import set_sketch_context

    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)
    set_sketch_context(sketch="-", frame=0)
