"""Frame clocks and elapsed-time gates.

The engine asks a clock for elapsed milliseconds once per tick. While
previewing, that is wall-clock time; while recording or running headless
it is the fixed video timeline, so exported frames do not depend on how
fast the host renders them.
"""

from __future__ import annotations

import time
from typing import Callable, Optional

from sketchbook.exceptions import ConfigurationError


class RealTimeClock:
    """Wall-clock frame clock.

    Notes:
        ``elapsed_ms`` is the ``perf_counter()`` difference since creation.
        ``tick`` only counts frames.
    """

    def __init__(self, time_source: Callable[[], float] = time.perf_counter) -> None:
        self._time_source = time_source
        self._start = float(time_source())
        self.frame_index: int = 0

    def elapsed_ms(self) -> float:
        return (float(self._time_source()) - self._start) * 1000.0

    def tick(self) -> None:
        self.frame_index += 1


class FixedStepClock:
    """Video-timeline frame clock: ``elapsed_ms = frame_index * 1000 / fps``."""

    def __init__(self, fps: float) -> None:
        fps = float(fps)
        if fps <= 0:
            raise ConfigurationError(f"fps must be positive, got {fps}")
        self.fps = fps
        self.frame_index: int = 0

    def elapsed_ms(self) -> float:
        return self.frame_index * 1000.0 / self.fps

    def tick(self) -> None:
        self.frame_index += 1


class IntervalGate:
    """Allow at most one logical update per callback once an interval has passed.

    Leftover time is discarded rather than accumulated, so a slow host
    makes the animation run slower than real time but never jump ahead.
    """

    def __init__(self, interval_ms: float, last_ms: float = 0.0) -> None:
        if interval_ms < 0:
            raise ConfigurationError(f"interval_ms must not be negative, got {interval_ms}")
        self.interval_ms = float(interval_ms)
        self.last_ms = float(last_ms)

    def ready(self, now_ms: float) -> bool:
        """Return True (and restart the interval) if an update is due."""
        if now_ms - self.last_ms >= self.interval_ms:
            self.last_ms = now_ms
            return True
        return False


class LoopTimer:
    """Frame counter for a seamlessly looping animation of ``duration`` frames."""

    def __init__(self, duration: int, start: int = 0) -> None:
        if duration <= 0:
            raise ConfigurationError(f"Loop duration must be positive, got {duration}")
        self.duration = duration
        self.frame = start % duration

    def advance(self) -> bool:
        """Move one frame forward. Returns True when the loop wrapped to 0."""
        self.frame += 1
        if self.frame >= self.duration:
            self.frame = 0
            return True
        return False

    def sync(self, frame: int) -> bool:
        """Pin the timer to an externally driven frame (the recording timeline).

        Returns True when the timeline jumped back to an earlier frame, as it
        does when a recording starts part way through the loop.
        """
        previous = self.frame
        self.frame = frame % self.duration
        return self.frame < previous

    @property
    def progress(self) -> float:
        return self.frame / self.duration


def make_clock(fps: float, realtime: bool, time_source: Optional[Callable[[], float]] = None):
    """Pick the clock for a run: wall clock for previews, fixed steps otherwise."""
    if realtime:
        return RealTimeClock(time_source) if time_source is not None else RealTimeClock()
    return FixedStepClock(fps)
