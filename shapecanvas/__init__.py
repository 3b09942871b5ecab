"""Shape Canvas: place, move and save simple shapes on a 2-D canvas."""

__version__ = "0.1.0"
