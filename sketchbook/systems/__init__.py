"""Systems run by the engine's PhaseRunner."""

from sketchbook.systems.base import BaseSystem, SystemResult

__all__ = ["BaseSystem", "SystemResult"]
