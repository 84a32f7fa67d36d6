"""Brainvita peg solitaire game engine."""

__version__ = "1.0.4"
