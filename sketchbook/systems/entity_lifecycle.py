"""Systems that step and retire entities held in EntityStores.

``EntityLifecycleSystem`` is the single owner of entity removal: sketches
flag entities as expired (``is_expired``) and this system prunes them
during CLEANUP, after everything else in the tick has seen them.
"""

import logging
from typing import TYPE_CHECKING, Sequence

from sketchbook.entity_store import EntityStore
from sketchbook.systems.base import BaseSystem, SystemResult
from sketchbook.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from sketchbook.update_phases import TickContext

logger = logging.getLogger(__name__)


@runs_in_phase(UpdatePhase.ENTITY_ACT)
class EntityStepSystem(BaseSystem):
    """Advances every entity of one store once per tick."""

    def __init__(self, store: EntityStore) -> None:
        super().__init__(f"Step[{store.name}]")
        self.store = store

    def _do_update(self, tick: "TickContext") -> SystemResult:
        return SystemResult(entities_affected=self.store.step_all(tick))


@runs_in_phase(UpdatePhase.CLEANUP)
class EntityLifecycleSystem(BaseSystem):
    """Removes expired entities from a set of stores.

    Attributes:
        stores: Stores pruned each tick, in order
        total_removed: Entities removed since the system was created
    """

    def __init__(self, stores: Sequence[EntityStore]) -> None:
        super().__init__("EntityLifecycle")
        self.stores = list(stores)
        self.total_removed = 0

    def _do_update(self, tick: "TickContext") -> SystemResult:
        details = {}
        removed_total = 0
        for store in self.stores:
            removed = len(store.prune())
            if removed:
                details[f"{store.name}_removed"] = removed
            removed_total += removed
        self.total_removed += removed_total
        return SystemResult(entities_removed=removed_total, details=details)
