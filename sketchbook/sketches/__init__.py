"""Registry of the available sketches, keyed by runner name."""

from typing import Dict, List, Type

from sketchbook.exceptions import ConfigurationError
from sketchbook.sketch import Sketch
from sketchbook.sketches.animation_principles import AnimationPrinciples
from sketchbook.sketches.fibonacci import FibonacciSpiral
from sketchbook.sketches.golden_spiral import GoldenRatioSpiral, MultipleGoldies
from sketchbook.sketches.letter_fish import LetterFish
from sketchbook.sketches.lights import LightsOnOff
from sketchbook.sketches.lowres_tree import LowresTree
from sketchbook.sketches.market_triangles import MarketTriangles

SKETCHES: Dict[str, Type[Sketch]] = {
    sketch.name: sketch
    for sketch in (
        AnimationPrinciples,
        FibonacciSpiral,
        GoldenRatioSpiral,
        LetterFish,
        LightsOnOff,
        LowresTree,
        MarketTriangles,
        MultipleGoldies,
    )
}


def get_sketch(name: str) -> Type[Sketch]:
    try:
        return SKETCHES[name]
    except KeyError:
        known = ", ".join(sorted(SKETCHES))
        raise ConfigurationError(f"Unknown sketch {name!r} (available: {known})") from None


def list_sketches() -> List[str]:
    return sorted(SKETCHES)


__all__ = ["SKETCHES", "get_sketch", "list_sketches"]
