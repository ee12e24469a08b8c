"""
Core package for locating a needle image inside a haystack image.
"""

from .buffer import PixelBuffer
from .geometry import ZERO_RECT, Rectangle
from .io import decode_rgba, load_rgba, load_searchable_png
from .matching import ExactMatcher, Searchable, ToleranceMatcher, new_searchable

__all__ = [
    "ExactMatcher",
    "PixelBuffer",
    "Rectangle",
    "Searchable",
    "ToleranceMatcher",
    "ZERO_RECT",
    "decode_rgba",
    "load_rgba",
    "load_searchable_png",
    "new_searchable",
]
