"""Golden ratio spirals traced point by point onto a persistent canvas."""

from dataclasses import dataclass
from typing import Optional

from sketchbook.config.display import CLASSIC_HEIGHT, CLASSIC_WIDTH, FRAME_RATE
from sketchbook.config.sketch_config import DisplayConfig, RecordingConfig, SketchConfig
from sketchbook.entities.spiral import SpiralTracer
from sketchbook.sketch import Sketch
from sketchbook.timebase import IntervalGate


@dataclass
class SpiralState:
    tracer: SpiralTracer
    gate: IntervalGate


class SpiralSketch(Sketch[SpiralState]):
    """Shared behaviour; subclasses pick range, scale, speed and colors."""

    a_max: float = 500
    radius_scale: float = 1.2
    update_interval_ms: float = 6.67
    max_loops: Optional[float] = None
    background_color = (255, 255, 255)

    @classmethod
    def default_config(cls) -> SketchConfig:
        return SketchConfig(
            display=DisplayConfig(CLASSIC_WIDTH, CLASSIC_HEIGHT, FRAME_RATE),
            recording=RecordingConfig(prefix=cls.title.replace(" ", "")),
        )

    def setup(self, rng) -> SpiralState:
        display = self.config.display
        tracer = SpiralTracer(
            center=(display.width / 2, display.height / 2),
            a_max=self.a_max,
            radius_scale=self.radius_scale,
            max_loops=self.max_loops,
        )
        return SpiralState(tracer=tracer, gate=IntervalGate(self.update_interval_ms))

    def step(self, state: SpiralState, tick) -> SpiralState:
        state.tracer.clear_output()
        if state.gate.ready(tick.elapsed_ms):
            state.tracer.update(tick)
        return state

    def compose(self, state: SpiralState, canvas, tick) -> None:
        # The canvas is never cleared; each frame only adds the newest segment
        if tick.frame == 1:
            canvas.background(self.background_color)
        state.tracer.render(canvas)

    def is_complete(self, state: SpiralState) -> bool:
        return state.tracer.complete


class GoldenRatioSpiral(SpiralSketch):
    """A single spiral sweeping out to a=500 and back forever, on white."""

    name = "golden-ratio-spiral"
    title = "Golden Ratio Spiral"


class MultipleGoldies(SpiralSketch):
    """Ten fast round trips out to a=1000 on black, then the trace stops."""

    name = "multiple-goldies"
    title = "Multiple Goldies"
    a_max = 1000
    radius_scale = 0.6
    update_interval_ms = 2.0
    max_loops = 10
    background_color = (0, 0, 0)
