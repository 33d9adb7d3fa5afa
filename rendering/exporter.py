"""Writes the compositor's frame buffer to numbered image files."""

import logging
import os

import pygame

from sketchbook.exceptions import ExportError
from sketchbook.recording import FrameExportRequest

logger = logging.getLogger(__name__)


class PygameFrameExporter:
    """Saves frames with ``pygame.image.save`` into ``output_dir``.

    Attributes:
        output_dir: Directory the frames are written to (created on demand)
        frames_saved: Frames written by this exporter
    """

    def __init__(self, output_dir: str = "frames") -> None:
        self.output_dir = output_dir
        self.frames_saved = 0

    def path_for(self, request: FrameExportRequest) -> str:
        return os.path.join(self.output_dir, request.filename)

    def export(self, request: FrameExportRequest, compositor) -> str:
        if compositor is None:
            raise ExportError(f"Cannot export {request.filename}: no frame buffer attached")
        path = self.path_for(request)
        try:
            os.makedirs(self.output_dir, exist_ok=True)
            pygame.image.save(compositor.surface, path)
        except (pygame.error, OSError) as e:
            raise ExportError(f"Failed to write frame {path}: {e}") from e
        self.frames_saved += 1
        logger.debug("Saved frame %d as %s", request.frame_index, path)
        return path
