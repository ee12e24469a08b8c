from __future__ import annotations

import logging
from typing import Tuple

import numpy as np

from ..buffer import PixelBuffer
from ..channel import CHANNEL_MAX, check_tolerance, saturating_add, saturating_sub
from ..geometry import Rectangle
from .searchable import scan

logger = logging.getLogger(__name__)


class ToleranceMatcher:
    """
    Finds regions whose RGB values stay within a per-pixel band around the needle.

    Each needle pixel allows a deviation of ``max(tolerance, 255 - alpha)`` per
    channel, so transparent pixels accept progressively more and fully
    transparent ones accept anything.
    """

    __slots__ = ("_tolerance", "_min_pix", "_max_pix")

    def __init__(self, needle: PixelBuffer | np.ndarray, tolerance: int) -> None:
        self._tolerance = check_tolerance(tolerance)
        self._min_pix, self._max_pix = derive_bounds(PixelBuffer.from_image(needle), self._tolerance)
        logger.debug(
            "tolerance matcher ready for %dx%d needle (tolerance=%d)",
            self.width,
            self.height,
            self._tolerance,
        )

    @property
    def width(self) -> int:
        return self._min_pix.width

    @property
    def height(self) -> int:
        return self._min_pix.height

    @property
    def tolerance(self) -> int:
        return self._tolerance

    @property
    def min_pix(self) -> PixelBuffer:
        return self._min_pix

    @property
    def max_pix(self) -> PixelBuffer:
        return self._max_pix

    def search_in(self, haystack: PixelBuffer) -> Rectangle:
        result = scan(haystack, self.width, self.height, self._check)
        logger.debug("tolerance search in %dx%d haystack -> %s", haystack.width, haystack.height, result)
        return result

    def _check(self, haystack: PixelBuffer, x: int, y: int) -> bool:
        window = haystack.as_array()
        lower = self._min_pix.as_array()
        upper = self._max_pix.as_array()
        for row in range(self.height):
            values = window[y + row, x : x + self.width, :3]
            if np.any(values < lower[row, :, :3]) or np.any(values > upper[row, :, :3]):
                return False
        return True

    def __repr__(self) -> str:
        return f"ToleranceMatcher(width={self.width}, height={self.height}, tolerance={self._tolerance})"


def derive_bounds(needle: PixelBuffer, tolerance: int) -> Tuple[PixelBuffer, PixelBuffer]:
    """
    Build the inclusive lower and upper RGB bounds for every needle pixel.

    The alpha channel of both returned buffers is zero and carries no meaning.
    """
    pixels = needle.as_array()
    rgb = pixels[:, :, :3]
    alpha_tolerance = CHANNEL_MAX - pixels[:, :, 3].astype(np.int16)
    effective = np.maximum(alpha_tolerance, tolerance)[:, :, np.newaxis]

    lower = np.zeros(pixels.shape, dtype=np.uint8)
    upper = np.zeros(pixels.shape, dtype=np.uint8)
    lower[:, :, :3] = saturating_sub(rgb, effective)
    upper[:, :, :3] = saturating_add(rgb, effective)

    return (
        PixelBuffer(lower.reshape(-1), needle.width, needle.height),
        PixelBuffer(upper.reshape(-1), needle.width, needle.height),
    )
