"""Display and timing configuration constants."""

# Vertical video (Instagram Reels) canvas in pixels
REEL_WIDTH = 1080
REEL_HEIGHT = 1920

# Classic landscape canvas used by the spiral sketches
CLASSIC_WIDTH = 800
CLASSIC_HEIGHT = 600

# The frame rate for the animation loop, in frames per second
FRAME_RATE = 30

# Golden ratio, shared by every spiral sketch
PHI = 1.618033988749895

# Console output
SEPARATOR_WIDTH = 60
