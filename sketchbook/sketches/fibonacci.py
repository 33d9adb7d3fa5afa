"""Fibonacci golden spiral of white ovals growing over ten seconds."""

from dataclasses import dataclass

from sketchbook.color import hsb_to_rgb
from sketchbook.config.recording import DEFAULT_RECORDING_FRAMES
from sketchbook.config.sketch_config import RecordingConfig, SketchConfig
from sketchbook.entities.spiral import GoldenSpiralGrowth
from sketchbook.sketch import Sketch

BACKGROUND = hsb_to_rgb(0, 0, 5)


@dataclass
class FibonacciState:
    spiral: GoldenSpiralGrowth


class FibonacciSpiral(Sketch[FibonacciState]):
    name = "fibonacci"
    title = "Fibonacci"

    @classmethod
    def default_config(cls) -> SketchConfig:
        return SketchConfig(recording=RecordingConfig(prefix="Fibonacci"))

    def setup(self, rng) -> FibonacciState:
        return FibonacciState(spiral=GoldenSpiralGrowth(total_frames=DEFAULT_RECORDING_FRAMES))

    def step(self, state: FibonacciState, tick) -> FibonacciState:
        state.spiral.update(tick)
        return state

    def compose(self, state: FibonacciState, canvas, tick) -> None:
        display = self.config.display
        canvas.background(BACKGROUND)
        canvas.push()
        canvas.translate(display.width / 2, display.height / 2)
        state.spiral.render(canvas)
        canvas.pop()

    def is_complete(self, state: FibonacciState) -> bool:
        return state.spiral.complete
