"""Finite-state animation phases with phase-local frame counters.

Each phase owns a local frame counter that is 0 on entry and is counted
up before the frame handler runs, so handlers see 1 on their first tick
and the duration itself on the last tick of a timed phase. A phase either
has a fixed duration (it transitions exactly once, on the tick its
counter reaches the duration) or decides for itself by returning the
next phase name from its frame handler. The terminal phase names the
loop's start phase as its successor so the animation replays forever.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

from sketchbook.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

FrameHandler = Callable[[int], Optional[str]]


@dataclass
class AnimationPhase:
    """One named stage of a sketch's state machine.

    Attributes:
        name: Phase id
        duration: Local frames before the automatic transition, or None
        next_phase: Successor used when ``duration`` elapses
        on_frame: Called with the local frame each tick; may return the
            name of a phase to switch to immediately
        on_enter: Called when the phase is entered
    """

    name: str
    duration: Optional[int] = None
    next_phase: Optional[str] = None
    on_frame: Optional[FrameHandler] = None
    on_enter: Optional[Callable[[], None]] = None


class PhaseMachine:
    """Drives a set of AnimationPhases one tick at a time."""

    def __init__(
        self,
        phases: Iterable[AnimationPhase],
        initial: str,
        loop_start: Optional[str] = None,
    ) -> None:
        self._phases: Dict[str, AnimationPhase] = {}
        for phase in phases:
            if phase.name in self._phases:
                raise ConfigurationError(f"Duplicate animation phase {phase.name!r}")
            self._phases[phase.name] = phase

        for phase in self._phases.values():
            if phase.duration is not None:
                if phase.duration <= 0:
                    raise ConfigurationError(
                        f"Phase {phase.name!r} needs a positive duration, got {phase.duration}"
                    )
                if phase.next_phase is None:
                    raise ConfigurationError(f"Phase {phase.name!r} has a duration but no successor")
            if phase.next_phase is not None and phase.next_phase not in self._phases:
                raise ConfigurationError(
                    f"Phase {phase.name!r} transitions to unknown phase {phase.next_phase!r}"
                )

        if initial not in self._phases:
            raise ConfigurationError(f"Unknown initial phase {initial!r}")
        self.initial = initial
        self.loop_start = loop_start or initial
        if self.loop_start not in self._phases:
            raise ConfigurationError(f"Unknown loop start phase {self.loop_start!r}")

        self.current: str = initial
        self.local_frame: int = 0
        self.cycles_completed: int = 0
        self.transition_count: int = 0

    @property
    def phase_names(self) -> List[str]:
        return list(self._phases)

    def tick(self) -> Optional[str]:
        """Run one frame of the current phase.

        Returns:
            The name of the phase entered this tick, or None
        """
        phase = self._phases[self.current]
        self.local_frame += 1
        requested = phase.on_frame(self.local_frame) if phase.on_frame else None

        if requested is None and phase.duration is not None and self.local_frame >= phase.duration:
            requested = phase.next_phase

        if requested is not None:
            self.enter(requested)
            return requested
        return None

    def enter(self, name: str) -> None:
        """Switch to ``name`` with a fresh local counter."""
        if name not in self._phases:
            raise ConfigurationError(f"Unknown animation phase {name!r}")
        previous = self.current
        self.current = name
        self.local_frame = 0
        self.transition_count += 1
        if name == self.loop_start and previous != self.initial and previous != name:
            self.cycles_completed += 1
        logger.debug("Animation phase %s -> %s", previous, name)
        on_enter = self._phases[name].on_enter
        if on_enter is not None:
            on_enter()

    def reset(self) -> None:
        """Explicit reset back to the initial phase."""
        self.current = self.initial
        self.local_frame = 0
