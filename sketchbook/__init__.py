"""Generative-art animation sketches and the small engine that drives them."""

__version__ = "0.1.0"
