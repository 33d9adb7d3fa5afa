"""Flocking step for a school of fish."""

from typing import TYPE_CHECKING

from sketchbook.entities.aquarium import School
from sketchbook.systems.base import BaseSystem, SystemResult
from sketchbook.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from sketchbook.update_phases import TickContext


@runs_in_phase(UpdatePhase.ENTITY_ACT)
class SchoolSystem(BaseSystem):
    """Rebuilds the neighbour grid, then moves every fish once.

    Fish are moved in order, each seeing the positions its predecessors
    already moved to this tick.
    """

    def __init__(self, school: School) -> None:
        super().__init__("School")
        self.school = school

    def _do_update(self, tick: "TickContext") -> SystemResult:
        self.school.rebuild()
        eating = 0
        for fish in self.school.fish:
            fish.update(tick)
            if fish.eating:
                eating += 1
        return SystemResult(
            entities_affected=len(self.school.fish),
            details={"feeding": self.school.feeding, "eating": eating},
        )
