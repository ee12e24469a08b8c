from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable

from ..buffer import PixelBuffer
from ..geometry import ZERO_RECT, Rectangle

PositionCheck = Callable[[PixelBuffer, int, int], bool]


@runtime_checkable
class Searchable(Protocol):
    """
    Anything that can be located inside a haystack image.
    """

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def search_in(self, haystack: PixelBuffer) -> Rectangle:
        """
        Return the rectangle covering the first match, or ``ZERO_RECT``.
        """
        ...


def scan(haystack: PixelBuffer, width: int, height: int, check: PositionCheck) -> Rectangle:
    """
    Slide a ``width`` x ``height`` window over ``haystack`` in row-major order.

    Returns the window at the first top-left position accepted by ``check``.
    Positions where the window would leave the haystack are never visited, so a
    window larger than the haystack yields ``ZERO_RECT`` without any checks. An
    empty window never matches.
    """
    if width == 0 or height == 0:
        return ZERO_RECT
    last_x = haystack.width - width
    last_y = haystack.height - height
    for y in range(last_y + 1):
        for x in range(last_x + 1):
            if check(haystack, x, y):
                return Rectangle.from_size(x, y, width, height)
    return ZERO_RECT
