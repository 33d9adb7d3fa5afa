"""Genuary 1: yearly gains of a handful of tickers drawn as green triangles.

Drawn once; triangle size is proportional to the gain relative to the
largest one.
"""

import math
from dataclasses import dataclass
from typing import Sequence, Tuple

from sketchbook.config.display import CLASSIC_HEIGHT, CLASSIC_WIDTH
from sketchbook.config.sketch_config import DisplayConfig, RecordingConfig, SketchConfig
from sketchbook.sketch import Sketch

GREEN = (0, 255, 0)
COLUMNS = 5

STOCK_GAINS: Tuple[Tuple[str, int], ...] = (
    ("SNDK", 587),
    ("WDC", 292),
    ("MU", 226),
    ("STX", 226),
    ("PLTR", 155),
    ("AMD", 99),
    ("INTC", 80),
    ("GOOG", 66),
    ("AMAT", 63),
    ("AVGO", 48),
    ("NVDA", 41),
    ("SHOP", 40),
    ("NFLX", 36),
)


@dataclass(frozen=True)
class TriangleCell:
    ticker: str
    percent: int
    x: float
    y: float
    size: float


def layout_triangles(
    stocks: Sequence[Tuple[str, int]], width: float, height: float, columns: int = COLUMNS
) -> Tuple[TriangleCell, ...]:
    """Grid positions and sizes for each ticker, largest gain = 15% of the short side."""
    if not stocks:
        return ()
    max_percent = max(percent for _, percent in stocks)
    max_size = min(width, height) * 0.15
    rows = math.ceil(len(stocks) / columns)
    spacing_x = width / (columns + 1)
    spacing_y = height / (rows + 1)
    return tuple(
        TriangleCell(
            ticker,
            percent,
            spacing_x * (index % columns + 1),
            spacing_y * (index // columns + 1),
            percent / max_percent * max_size,
        )
        for index, (ticker, percent) in enumerate(stocks)
    )


class MarketTriangles(Sketch[Tuple[TriangleCell, ...]]):
    name = "genuary1"
    title = "Market Triangles"
    loop = False

    @classmethod
    def default_config(cls) -> SketchConfig:
        return SketchConfig(
            display=DisplayConfig(CLASSIC_WIDTH, CLASSIC_HEIGHT),
            recording=RecordingConfig(prefix="genuary1", max_frames=1),
        )

    def setup(self, rng):
        display = self.config.display
        return layout_triangles(STOCK_GAINS, display.width, display.height)

    def step(self, state, tick):
        return state

    def compose(self, state, canvas, tick) -> None:
        canvas.background((0, 0, 0))
        canvas.no_stroke()
        for cell in state:
            half = cell.size / 2
            canvas.fill(GREEN)
            canvas.triangle(cell.x, cell.y - half, cell.x - half, cell.y + half, cell.x + half, cell.y + half)
            canvas.fill((0, 0, 0))
            canvas.text(cell.ticker, cell.x, cell.y + cell.size / 6)
            canvas.fill(GREEN)
            canvas.text(f"{cell.percent}%", cell.x, cell.y + half + 20)
