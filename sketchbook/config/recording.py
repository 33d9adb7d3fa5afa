"""Frame export configuration constants."""

# 10 seconds at 30fps
DEFAULT_RECORDING_FRAMES = 300

# Width of the zero-padded frame counter in exported filenames
DEFAULT_FRAME_DIGITS = 3

# Exported frames are numbered from 1 (001, 002, ...)
FIRST_FRAME_NUMBER = 1

DEFAULT_IMAGE_EXTENSION = "png"
