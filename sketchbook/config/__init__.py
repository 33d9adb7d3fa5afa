"""Configuration package for the sketch engine.

Display and recording constants live in their own modules; the dataclass
wrappers in ``sketch_config`` bundle them per sketch.
"""
