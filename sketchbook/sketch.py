"""Base class for sketches.

A sketch is a pure description of an animation: it builds an explicit
state object in ``setup``, advances it in ``step`` and projects it to
draw operations in ``compose``. The engine owns the state and hands it
back in on every call, so sketches keep no module-level animation state.
"""

import random
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Generic, List, Optional, TypeVar

from sketchbook.config.sketch_config import SketchConfig

if TYPE_CHECKING:
    from sketchbook.draw_list import DrawList
    from sketchbook.systems.base import BaseSystem
    from sketchbook.update_phases import TickContext

S = TypeVar("S")


class Sketch(ABC, Generic[S]):
    """One self-contained animation.

    Attributes:
        name: Registry key used by the runner
        title: Window caption
        loop: False for sketches drawn once (static charts)
        halt_on_complete: Stop the engine when ``is_complete`` turns True,
            even when not recording
    """

    name: str = "sketch"
    title: str = "Sketch"
    loop: bool = True
    halt_on_complete: bool = False

    def __init__(self, config: Optional[SketchConfig] = None) -> None:
        self.config = config or self.default_config()

    @classmethod
    def default_config(cls) -> SketchConfig:
        return SketchConfig()

    @abstractmethod
    def setup(self, rng: random.Random) -> S:
        """Create the initial state."""

    def build_systems(self, state: S) -> List["BaseSystem"]:
        """Systems the engine runs (by phase) after ``step`` each tick."""
        return []

    @abstractmethod
    def step(self, state: S, tick: "TickContext") -> S:
        """Advance the state by one tick and return it."""

    @abstractmethod
    def compose(self, state: S, canvas: "DrawList", tick: "TickContext") -> None:
        """Draw the current state, back to front."""

    def is_complete(self, state: S) -> bool:
        return False

    def key_pressed(self, state: S, key: str) -> None:
        """Handle a key press forwarded by the runner."""

    def mouse_pressed(self, state: S, x: float, y: float) -> None:
        """Handle a mouse click forwarded by the runner."""

    def describe(self) -> str:
        display = self.config.display
        return f"{self.name}: {self.title} ({display.width}x{display.height} @ {display.frame_rate}fps)"
