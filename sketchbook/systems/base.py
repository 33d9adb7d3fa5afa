"""Base class and result type for sketch systems.

A system owns one per-tick responsibility (step a store, prune expired
entities, flock the school) and reports what it did through a
``SystemResult``. Systems may declare their phase with
``@runs_in_phase``; the PhaseRunner uses it when no phase is given at
registration.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional

__all__ = ["SystemResult", "BaseSystem"]

if TYPE_CHECKING:
    from sketchbook.update_phases import TickContext, UpdatePhase


@dataclass
class SystemResult:
    """Result of a system update.

    Attributes:
        entities_affected: Number of entities that were modified
        entities_spawned: Number of new entities created
        entities_removed: Number of entities removed
        skipped: Whether the update was skipped (system disabled)
        details: System-specific details
    """

    entities_affected: int = 0
    entities_spawned: int = 0
    entities_removed: int = 0
    skipped: bool = False
    details: Dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def skipped_result() -> "SystemResult":
        return SystemResult(skipped=True)

    @staticmethod
    def empty() -> "SystemResult":
        return SystemResult()

    def __add__(self, other: "SystemResult") -> "SystemResult":
        """Combine two results (numeric details are summed)."""
        if other.skipped:
            return self
        if self.skipped:
            return other

        combined_details = {**self.details}
        for key, value in other.details.items():
            if key in combined_details and isinstance(value, (int, float)):
                combined_details[key] = combined_details[key] + value
            else:
                combined_details[key] = value

        return SystemResult(
            entities_affected=self.entities_affected + other.entities_affected,
            entities_spawned=self.entities_spawned + other.entities_spawned,
            entities_removed=self.entities_removed + other.entities_removed,
            skipped=False,
            details=combined_details,
        )


class BaseSystem(ABC):
    """Abstract base class for all sketch systems.

    Subclasses implement ``_do_update``; ``update`` handles the enabled
    flag.
    """

    _phase: Optional["UpdatePhase"] = None

    def __init__(self, name: str) -> None:
        self._name = name
        self._enabled = True

    @property
    def name(self) -> str:
        return self._name

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._enabled = value

    @property
    def phase(self) -> Optional["UpdatePhase"]:
        return self._phase

    def update(self, tick: "TickContext") -> SystemResult:
        """Perform the system's per-tick logic if enabled."""
        if not self._enabled:
            return SystemResult.skipped_result()

        result = self._do_update(tick)
        if result is None:
            return SystemResult.empty()
        return result

    @abstractmethod
    def _do_update(self, tick: "TickContext") -> Optional[SystemResult]:
        """Implement system-specific update logic."""
