from __future__ import annotations

import logging

import numpy as np

from ..buffer import PixelBuffer
from ..geometry import Rectangle
from .searchable import scan

logger = logging.getLogger(__name__)


class ExactMatcher:
    """
    Finds regions whose RGB values equal the needle's. Alpha is ignored.
    """

    __slots__ = ("_snapshot",)

    def __init__(self, needle: PixelBuffer | np.ndarray) -> None:
        # owned copy, independent of the caller's image
        self._snapshot = PixelBuffer.from_image(needle)
        logger.debug("exact matcher ready for %dx%d needle", self.width, self.height)

    @property
    def width(self) -> int:
        return self._snapshot.width

    @property
    def height(self) -> int:
        return self._snapshot.height

    def search_in(self, haystack: PixelBuffer) -> Rectangle:
        result = scan(haystack, self.width, self.height, self._check)
        logger.debug("exact search in %dx%d haystack -> %s", haystack.width, haystack.height, result)
        return result

    def _check(self, haystack: PixelBuffer, x: int, y: int) -> bool:
        window = haystack.as_array()
        needle = self._snapshot.as_array()
        for row in range(self.height):
            # rows are compared whole; the first differing row ends the check
            if not np.array_equal(window[y + row, x : x + self.width, :3], needle[row, :, :3]):
                return False
        return True

    def __repr__(self) -> str:
        return f"ExactMatcher(width={self.width}, height={self.height})"
