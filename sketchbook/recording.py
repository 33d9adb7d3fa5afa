"""Recording state and frame export requests.

Recording can be switched on from the sketch's configuration (the
"source flag"), from the runner's ``--record`` option, or with a key
press. Starting is idempotent: the first start wins and later start
requests are ignored while recording. Frame numbers continue from where
they left off if recording is stopped and started again, so exported
filenames stay monotonic within one run.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from sketchbook.config.sketch_config import RecordingConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameExportRequest:
    """A rendered frame destined for an image file.

    Attributes:
        frame_index: Engine frame that produced the image
        number: Sequential export number (zero-padded in the filename)
        filename: Target filename, relative to the output directory
    """

    frame_index: int
    number: int
    filename: str


class RecordingController:
    """Tracks whether frames are exported and when recording is complete."""

    def __init__(self, config: RecordingConfig) -> None:
        self.config = config
        self.is_recording: bool = False
        self.frames_written: int = 0
        self.finished: bool = False
        self.started_by: Optional[str] = None

    def start(self, source: str = "flag") -> bool:
        """Start recording. Returns False if already recording or finished."""
        if self.is_recording or self.finished:
            logger.debug("Ignoring recording start from %s", source)
            return False
        self.is_recording = True
        self.started_by = source
        logger.info(
            "Recording started (%s): %s, budget=%s frames",
            source,
            self.config.filename(self.next_number),
            self.config.max_frames if self.config.max_frames is not None else "unlimited",
        )
        return True

    def stop(self, reason: str = "stopped") -> bool:
        if not self.is_recording:
            return False
        self.is_recording = False
        logger.info("Recording %s after %d frames", reason, self.frames_written)
        return True

    def toggle(self, source: str = "key") -> bool:
        """Flip recording on or off; returns the new recording state."""
        if self.is_recording:
            self.stop("stopped by " + source)
        else:
            self.start(source)
        return self.is_recording

    @property
    def next_number(self) -> int:
        return self.config.first_number + self.frames_written

    def next_request(self, frame_index: int) -> Optional[FrameExportRequest]:
        """Build the export request for this frame, if recording."""
        if not self.is_recording:
            return None
        number = self.next_number
        return FrameExportRequest(
            frame_index=frame_index,
            number=number,
            filename=self.config.filename(number),
        )

    def mark_written(self) -> None:
        """Count an exported frame and finish once the budget is used up."""
        self.frames_written += 1
        max_frames = self.config.max_frames
        if max_frames is not None and self.frames_written >= max_frames:
            self.is_recording = False
            self.finished = True
            logger.info("Recording complete! %d frames saved.", self.frames_written)
