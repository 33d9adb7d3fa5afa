"""Animated entity kinds."""

from sketchbook.entities.base import AnimatedEntity

__all__ = ["AnimatedEntity"]
