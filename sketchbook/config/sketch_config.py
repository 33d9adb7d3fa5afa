"""Per-sketch configuration dataclasses."""

from dataclasses import dataclass, field, replace
from typing import Any, Optional

from sketchbook.config.display import FRAME_RATE, REEL_HEIGHT, REEL_WIDTH
from sketchbook.config.recording import (
    DEFAULT_FRAME_DIGITS,
    DEFAULT_IMAGE_EXTENSION,
    DEFAULT_RECORDING_FRAMES,
    FIRST_FRAME_NUMBER,
)
from sketchbook.exceptions import ConfigurationError


@dataclass(frozen=True)
class DisplayConfig:
    """Canvas size and target frame rate."""

    width: int = REEL_WIDTH
    height: int = REEL_HEIGHT
    frame_rate: int = FRAME_RATE

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(
                f"Canvas size must be positive, got {self.width}x{self.height}"
            )
        if self.frame_rate <= 0:
            raise ConfigurationError(f"Frame rate must be positive, got {self.frame_rate}")

    @property
    def size(self) -> tuple:
        return (self.width, self.height)


@dataclass(frozen=True)
class RecordingConfig:
    """How recorded frames are named and when recording stops.

    Attributes:
        prefix: Filename prefix, e.g. ``"GenuaryFishes"``
        digits: Width of the zero-padded frame counter
        max_frames: Frames to record before halting; None records forever
        enabled: Start recording as soon as the sketch starts
        extension: Image file extension
        first_number: Number of the first exported frame
    """

    prefix: str = "frame"
    digits: int = DEFAULT_FRAME_DIGITS
    max_frames: Optional[int] = DEFAULT_RECORDING_FRAMES
    enabled: bool = False
    extension: str = DEFAULT_IMAGE_EXTENSION
    first_number: int = FIRST_FRAME_NUMBER

    def __post_init__(self) -> None:
        if not self.prefix:
            raise ConfigurationError("Recording prefix must not be empty")
        if self.digits < 1:
            raise ConfigurationError(f"Frame counter needs at least one digit, got {self.digits}")
        if self.max_frames is not None and self.max_frames <= 0:
            raise ConfigurationError(f"max_frames must be positive, got {self.max_frames}")

    def filename(self, number: int) -> str:
        """Build the exported filename for a frame number."""
        return f"{self.prefix}{number:0{self.digits}d}.{self.extension}"


@dataclass(frozen=True)
class SketchConfig:
    """Aggregate configuration for one sketch run."""

    display: DisplayConfig = field(default_factory=DisplayConfig)
    recording: RecordingConfig = field(default_factory=RecordingConfig)
    seed: Optional[int] = None

    def with_overrides(self, **overrides: Any) -> "SketchConfig":
        """Return a copy with top-level or nested recording fields replaced.

        ``record=True`` is accepted as a shorthand for enabling recording.
        """
        record = overrides.pop("record", None)
        config = replace(self, **overrides) if overrides else self
        if record is not None:
            config = replace(config, recording=replace(config.recording, enabled=bool(record)))
        return config
