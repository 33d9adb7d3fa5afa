"""Main entry point for the sketch runner.

This module provides command-line options to run a sketch:
- Window mode (default): live preview in a pygame window
- Headless mode: no window, fixed-step clock, optionally exporting frames
"""

import argparse
import logging
import sys

from sketchbook.config.display import SEPARATOR_WIDTH
from sketchbook.exceptions import ConfigurationError, SketchError
from sketchbook.logging_config import configure_logging
from sketchbook.sketches import SKETCHES, get_sketch, list_sketches

logger = logging.getLogger(__name__)

DEFAULT_HEADLESS_FRAMES = 300


def build_engine(name, record=False, seed=None, output_dir="frames", realtime=False):
    """Create the sketch, its compositor, exporter and engine."""
    from rendering.compositor import PygameCompositor
    from rendering.exporter import PygameFrameExporter
    from sketchbook.engine import SketchEngine
    from sketchbook.timebase import make_clock

    sketch_cls = get_sketch(name)
    config = sketch_cls.default_config().with_overrides(record=record or None, seed=seed)
    sketch = sketch_cls(config)
    compositor = PygameCompositor(config.display.size)
    engine = SketchEngine(
        sketch,
        compositor=compositor,
        exporter=PygameFrameExporter(output_dir),
        clock=make_clock(config.display.frame_rate, realtime=realtime and not config.recording.enabled),
    )
    return engine, compositor


def run_headless(name, frames, record=False, seed=None, output_dir="frames"):
    """Run a sketch without a window.

    Args:
        name: Registered sketch name
        frames: Maximum number of ticks to run
        record: Export every frame (until the sketch's recording budget)
        seed: Optional random seed for deterministic output
        output_dir: Where exported frames are written
    """
    engine, _ = build_engine(name, record=record, seed=seed, output_dir=output_dir)
    ticks = engine.run(max_frames=frames)
    logger.info(
        "Ran %d frames of %s; %d exported%s",
        ticks,
        name,
        engine.recorder.frames_written,
        f" ({engine.halt_reason})" if engine.halt_reason else "",
    )
    return engine


def run_window(name, record=False, seed=None, output_dir="frames", scale=1.0):
    """Run a sketch in an interactive pygame window."""
    import pygame

    from rendering.window import SketchWindow

    pygame.init()
    try:
        engine, compositor = build_engine(
            name, record=record, seed=seed, output_dir=output_dir, realtime=True
        )
        logger.info("=" * SEPARATOR_WIDTH)
        logger.info(engine.sketch.describe())
        logger.info("Keys: R record, SPACE pause, ESC quit")
        logger.info("=" * SEPARATOR_WIDTH)
        SketchWindow(engine, compositor, scale=scale).run()
    finally:
        pygame.quit()


def main(argv=None):
    """Parse command-line arguments and run the selected sketch."""
    parser = argparse.ArgumentParser(
        description="Generative art sketches",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Preview a sketch (half size so a 1080x1920 reel fits on screen)
  python main.py letter-fish --scale 0.5

  # Record the 300 reel frames without opening a window
  python main.py fibonacci --headless --record --output-dir out/

  # Reproducible run
  python main.py lights --headless --frames 600 --seed 42
        """,
    )
    parser.add_argument("sketch", nargs="?", help="Sketch to run (see --list)")
    parser.add_argument("--list", action="store_true", help="List available sketches and exit")
    parser.add_argument("--record", action="store_true", help="Export numbered frames from the start")
    parser.add_argument("--headless", action="store_true", help="Run without a window")
    parser.add_argument(
        "--frames",
        type=int,
        default=DEFAULT_HEADLESS_FRAMES,
        help=f"Frames to run in headless mode (default: {DEFAULT_HEADLESS_FRAMES})",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed (optional)")
    parser.add_argument("--output-dir", default="frames", help="Directory for exported frames")
    parser.add_argument("--scale", type=float, default=1.0, help="Window scale factor (default: 1.0)")
    parser.add_argument("--log-level", default=None, help="Log level (default: SKETCHBOOK_LOG_LEVEL or INFO)")

    args = parser.parse_args(argv)
    try:
        configure_logging(level=args.log_level)
    except ConfigurationError as e:
        parser.error(str(e))

    if args.list:
        for name in list_sketches():
            print(SKETCHES[name](None).describe())
        return 0

    if not args.sketch:
        parser.error("a sketch name is required (use --list to see them)")
    if args.frames <= 0:
        parser.error("--frames must be positive")
    if args.scale <= 0:
        parser.error("--scale must be positive")

    try:
        if args.headless:
            run_headless(args.sketch, args.frames, args.record, args.seed, args.output_dir)
        else:
            run_window(args.sketch, args.record, args.seed, args.output_dir, args.scale)
    except SketchError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
