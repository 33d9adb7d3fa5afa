"""Helpers around injected ``random.Random`` generators."""

import random
from contextlib import contextmanager
from typing import Iterator


@contextmanager
def fixed_seed(rng: random.Random, seed: int) -> Iterator[random.Random]:
    """Temporarily reseed ``rng`` and restore its previous state on exit.

    Used for deterministic background layers (e.g. aquarium gravel) drawn
    every frame without disturbing the unseeded randomness around them.
    """
    saved_state = rng.getstate()
    rng.seed(seed)
    try:
        yield rng
    finally:
        rng.setstate(saved_state)
