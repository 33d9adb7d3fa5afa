"""The animation engine: one sketch, one state, one tick at a time.

Control flow per tick:

    clock tick -> sketch.step (Stepper) -> systems by phase
    -> sketch.compose into a DrawList -> compositor -> exporter

The engine is single-threaded. ``running`` is checked at the top of each
tick; halting (end of recording, completed animation, window closed)
simply flips it.
"""

import logging
import random
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from sketchbook.draw_list import DrawList
from sketchbook.exceptions import SketchRuntimeError
from sketchbook.logging_config import set_sketch_context
from sketchbook.recording import FrameExportRequest, RecordingController
from sketchbook.sketch import Sketch
from sketchbook.systems.base import SystemResult
from sketchbook.timebase import FixedStepClock
from sketchbook.update_phases import PhaseRunner, TickContext

logger = logging.getLogger(__name__)


class Compositor(Protocol):
    """Replays a DrawList onto a frame buffer."""

    def render(self, canvas: DrawList) -> None:
        ...


class Exporter(Protocol):
    """Persists the compositor's current frame buffer."""

    def export(self, request: FrameExportRequest, compositor: Any) -> None:
        ...


class Clock(Protocol):
    frame_index: int

    def elapsed_ms(self) -> float:
        ...

    def tick(self) -> None:
        ...


@dataclass
class FrameOutcome:
    """What happened during one engine tick."""

    frame: int
    draw_ops: int
    systems: SystemResult
    exported: Optional[FrameExportRequest] = None
    halted: bool = False


class SketchEngine:
    """Drives a single sketch.

    Attributes:
        sketch: The sketch being animated
        state: The sketch's state object (None before setup)
        recorder: Recording state and export numbering
        running: False once the engine has halted
        paused: While True, ticks are skipped without advancing time
        halt_reason: Why the engine stopped, if it did
    """

    def __init__(
        self,
        sketch: Sketch,
        *,
        compositor: Optional[Compositor] = None,
        exporter: Optional[Exporter] = None,
        clock: Optional[Clock] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        record: Optional[bool] = None,
    ) -> None:
        self.sketch = sketch
        self.compositor = compositor
        self.exporter = exporter
        self.clock: Clock = clock or FixedStepClock(sketch.config.display.frame_rate)
        if rng is None:
            seed = seed if seed is not None else sketch.config.seed
            rng = random.Random(seed)
        self.rng = rng
        self.recorder = RecordingController(sketch.config.recording)
        self._record_at_start = sketch.config.recording.enabled if record is None else record
        self.systems = PhaseRunner()
        self.state: Any = None
        self.running = True
        self.paused = False
        self.halt_reason: Optional[str] = None

    @property
    def frame(self) -> int:
        return self.clock.frame_index

    def setup(self) -> None:
        """Build the sketch state and register its systems."""
        set_sketch_context(sketch=self.sketch.name, frame=self.frame)
        self.state = self.sketch.setup(self.rng)
        self.systems = PhaseRunner()
        for system in self.sketch.build_systems(self.state):
            self.systems.register(system)
        logger.info("Sketch ready: %s", self.sketch.describe())
        if self._record_at_start:
            self.recorder.start("startup flag")

    def tick(self) -> Optional[FrameOutcome]:
        """Run one frame. Returns None if halted or paused."""
        if not self.running:
            return None
        if self.state is None:
            self.setup()
        if self.paused:
            return None

        self.clock.tick()
        frame = self.clock.frame_index
        set_sketch_context(frame=frame)
        tick = TickContext(
            frame=frame,
            elapsed_ms=self.clock.elapsed_ms(),
            rng=self.rng,
            recording=self.recorder.is_recording,
            recorded_frames=self.recorder.frames_written,
        )

        state = self.sketch.step(self.state, tick)
        if state is None:
            raise SketchRuntimeError(f"{self.sketch.name}.step() returned no state at frame {frame}")
        self.state = state
        systems_result = self.systems.run_all(tick)

        canvas = DrawList()
        self.sketch.compose(self.state, canvas, tick)
        if self.compositor is not None:
            self.compositor.render(canvas)

        exported = self._export(frame)

        if self.recorder.finished:
            self.halt("recording complete")
        elif not self.sketch.loop:
            self.halt("static sketch drawn")
        elif self.sketch.is_complete(self.state) and (
            self.sketch.halt_on_complete or self.recorder.is_recording
        ):
            self.halt("animation complete")

        return FrameOutcome(
            frame=frame,
            draw_ops=len(canvas),
            systems=systems_result,
            exported=exported,
            halted=not self.running,
        )

    def _export(self, frame: int) -> Optional[FrameExportRequest]:
        request = self.recorder.next_request(frame)
        if request is None:
            return None
        if self.exporter is not None:
            self.exporter.export(request, self.compositor)
        else:
            logger.debug("No exporter attached; dropping %s", request.filename)
        self.recorder.mark_written()
        return request

    def run(self, max_frames: Optional[int] = None) -> int:
        """Tick until halted or ``max_frames`` ticks have run; returns ticks run."""
        frames = 0
        while self.running and (max_frames is None or frames < max_frames):
            if self.tick() is None and self.paused:
                break
            frames += 1
        return frames

    def halt(self, reason: str) -> None:
        if not self.running:
            return
        self.running = False
        self.halt_reason = reason
        if self.recorder.is_recording:
            self.recorder.stop(reason)
        logger.info("Engine halted at frame %d: %s", self.frame, reason)

    def start_recording(self, source: str = "runner") -> bool:
        return self.recorder.start(source)

    def stop_recording(self) -> bool:
        return self.recorder.stop("stopped")

    def toggle_recording(self, source: str = "key") -> bool:
        return self.recorder.toggle(source)

    def key_pressed(self, key: str) -> None:
        if self.state is not None:
            self.sketch.key_pressed(self.state, key)

    def mouse_pressed(self, x: float, y: float) -> None:
        if self.state is not None:
            self.sketch.mouse_pressed(self.state, x, y)
