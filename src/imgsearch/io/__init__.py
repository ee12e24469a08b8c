"""
IO helpers for decoding needle and haystack images into pixel buffers.
"""

from .image_loader import decode_rgba, load_rgba, load_searchable_png

__all__ = ["decode_rgba", "load_rgba", "load_searchable_png"]
