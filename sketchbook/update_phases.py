"""Update phase definitions for explicit execution ordering.

After a sketch's own ``step`` has advanced its timeline, the engine runs
the sketch's systems phase by phase:

    1. ENTITY_ACT: Advance entities (bubbles, flakes, the school)
    2. CLEANUP: Remove expired entities

Within a phase, systems run in registration order.
"""

import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

from sketchbook.systems.base import SystemResult

__all__ = [
    "UpdatePhase",
    "TickContext",
    "PhaseRunner",
    "runs_in_phase",
    "get_system_phase",
]

if TYPE_CHECKING:
    from sketchbook.systems.base import BaseSystem


class UpdatePhase(Enum):
    """Phases of a sketch update tick."""

    ENTITY_ACT = auto()
    CLEANUP = auto()


@dataclass
class TickContext:
    """Everything a system or sketch needs to know about the current tick.

    Attributes:
        frame: Engine frame index (1 on the first tick, like p5's frameCount)
        elapsed_ms: Milliseconds on the engine clock
        rng: The run's random generator
        recording: Whether frames are currently being exported
        recorded_frames: Frames exported before this tick
        phase: Phase currently executing (set by PhaseRunner)
    """

    frame: int
    elapsed_ms: float
    rng: random.Random
    recording: bool = False
    recorded_frames: int = 0
    phase: UpdatePhase = UpdatePhase.ENTITY_ACT


@dataclass
class PhaseRunner:
    """Executes systems in their designated phases.

    Example:
        runner = PhaseRunner()
        runner.register(lifecycle_system)  # declared CLEANUP
        runner.register(EntityStepSystem(flakes))  # declared ENTITY_ACT
        result = runner.run_all(tick)  # flakes move before the prune
    """

    _systems_by_phase: Dict[UpdatePhase, List["BaseSystem"]] = field(
        default_factory=lambda: {phase: [] for phase in UpdatePhase}
    )

    def register(self, system: "BaseSystem", phase: Optional[UpdatePhase] = None) -> None:
        """Register a system, defaulting to the phase it declares."""
        resolved = phase or get_system_phase(system) or UpdatePhase.ENTITY_ACT
        self._systems_by_phase[resolved].append(system)

    def run_all(self, tick: TickContext) -> SystemResult:
        """Run every phase in order and return the combined result."""
        total = SystemResult.empty()
        for phase in UpdatePhase:
            total = total + self.run_phase(phase, tick)
        return total

    def run_phase(self, phase: UpdatePhase, tick: TickContext) -> SystemResult:
        tick.phase = phase
        total = SystemResult.empty()
        for system in self._systems_by_phase[phase]:
            total = total + system.update(tick)
        return total


def runs_in_phase(phase: UpdatePhase) -> Callable:
    """Decorator to declare which phase a system runs in.

    Example:
        @runs_in_phase(UpdatePhase.CLEANUP)
        class EntityLifecycleSystem(BaseSystem):
            ...
    """

    def decorator(cls):
        cls._phase = phase
        return cls

    return decorator


def get_system_phase(system: "BaseSystem") -> Optional[UpdatePhase]:
    """Get the phase a system is declared to run in."""
    return getattr(system, "_phase", None)
