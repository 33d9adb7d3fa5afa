"""Log output for sketch runs.

Every line names the running sketch and the engine frame it was logged
on, so the log of a long export lines up with the numbered files it
wrote:

    INFO:sketchbook.recording:[letter-fish #451] Recording complete! 300 frames saved.
"""

import logging
import os
from typing import Optional

from sketchbook.exceptions import ConfigurationError

LOG_LEVEL_ENV = "SKETCHBOOK_LOG_LEVEL"
DEFAULT_FORMAT = "%(levelname)s:%(name)s:[%(sketch)s #%(frame)d] %(message)s"


class SketchContextFilter(logging.Filter):
    """Stamps the current sketch name and frame onto each record."""

    def __init__(self) -> None:
        super().__init__()
        self.sketch = "-"
        self.frame = 0

    def filter(self, record: logging.LogRecord) -> bool:
        record.sketch = self.sketch
        record.frame = self.frame
        return True


sketch_context = SketchContextFilter()
_handler: Optional[logging.Handler] = None


def set_sketch_context(sketch: Optional[str] = None, frame: Optional[int] = None) -> None:
    """Update what subsequent log lines report; None leaves a field as is."""
    if sketch is not None:
        sketch_context.sketch = sketch
    if frame is not None:
        sketch_context.frame = frame


def resolve_level(level: Optional[str] = None) -> int:
    """Explicit level, else ``SKETCHBOOK_LOG_LEVEL``, else INFO."""
    raw = level if level is not None else os.getenv(LOG_LEVEL_ENV)
    name = (raw or "INFO").upper()
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        raise ConfigurationError(f"Unknown log level {raw!r}")
    return resolved


def configure_logging(level: Optional[str] = None, fmt: str = DEFAULT_FORMAT) -> logging.Handler:
    """Install the sketch-aware stderr handler on the root logger.

    Calling it again swaps the handler rather than stacking a second one.
    """
    global _handler

    resolved = resolve_level(level)
    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)

    _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter(fmt))
    _handler.addFilter(sketch_context)
    root.addHandler(_handler)
    root.setLevel(resolved)

    logging.getLogger("sketchbook").debug("Logging at %s", logging.getLevelName(resolved))
    return _handler
