"""Base class for animated entities (pure logic plus a draw-op projection)."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sketchbook.draw_list import DrawList
    from sketchbook.update_phases import TickContext


class AnimatedEntity(ABC):
    """One independently evolving visual element.

    ``update`` is only ever called by the Stepper; ``render`` must not
    mutate the entity, it only projects the current state to draw ops.
    """

    @abstractmethod
    def update(self, tick: "TickContext") -> None:
        """Advance the entity by one tick."""

    @abstractmethod
    def render(self, canvas: "DrawList") -> None:
        """Emit draw operations for the current state."""

    def is_expired(self) -> bool:
        """Whether the entity should be removed at the end of this tick."""
        return False
