"""Ordered entity collections."""

import logging
from typing import TYPE_CHECKING, Generic, Iterable, Iterator, List, TypeVar

from sketchbook.entities.base import AnimatedEntity

if TYPE_CHECKING:
    from sketchbook.draw_list import DrawList
    from sketchbook.update_phases import TickContext

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=AnimatedEntity)


class EntityStore(Generic[E]):
    """An ordered, homogeneous collection of animated entities.

    Insertion order is draw order (back to front). Only the Stepper
    mutates a store; the compositor iterates it read-only.
    """

    def __init__(self, name: str, entities: Iterable[E] = ()) -> None:
        self.name = name
        self._entities: List[E] = list(entities)

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[E]:
        return iter(self._entities)

    def __getitem__(self, index: int) -> E:
        return self._entities[index]

    def add(self, entity: E) -> None:
        self._entities.append(entity)

    def extend(self, entities: Iterable[E]) -> int:
        before = len(self._entities)
        self._entities.extend(entities)
        return len(self._entities) - before

    def clear(self) -> int:
        removed = len(self._entities)
        self._entities = []
        return removed

    def step_all(self, tick: "TickContext") -> int:
        """Update every entity once; returns the number updated."""
        for entity in self._entities:
            entity.update(tick)
        return len(self._entities)

    def prune(self) -> List[E]:
        """Remove expired entities and return them.

        Survivors keep their relative order and are not touched.
        """
        kept: List[E] = []
        removed: List[E] = []
        for entity in self._entities:
            (removed if entity.is_expired() else kept).append(entity)
        if removed:
            self._entities = kept
            logger.debug("Pruned %d expired entities from %s", len(removed), self.name)
        return removed

    def render_all(self, canvas: "DrawList") -> None:
        for entity in self._entities:
            entity.render(canvas)
