"""Sketchbook exception hierarchy.

Numeric routines clamp instead of raising; these exceptions cover the
few places where a caller handed us something unusable or the host
environment refused a write.
"""


class SketchError(Exception):
    """Root of all sketchbook exceptions."""


class ConfigurationError(SketchError):
    """Invalid or missing configuration (sizes, fps, unknown sketch names)."""


class SketchRuntimeError(SketchError):
    """Errors raised while driving the animation loop."""


class ExportError(SketchError):
    """A frame could not be written by the exporter."""
