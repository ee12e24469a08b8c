from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class Rectangle:
    """
    Axis-aligned rectangle with an inclusive min corner and exclusive max corner.
    """

    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @classmethod
    def from_size(cls, x: int, y: int, width: int, height: int) -> "Rectangle":
        return cls(x, y, x + width, y + height)

    @property
    def width(self) -> int:
        return self.max_x - self.min_x

    @property
    def height(self) -> int:
        return self.max_y - self.min_y

    @property
    def area(self) -> int:
        if self.is_empty():
            return 0
        return self.width * self.height

    @property
    def top_left(self) -> Tuple[int, int]:
        return self.min_x, self.min_y

    def is_empty(self) -> bool:
        return self.min_x >= self.max_x or self.min_y >= self.max_y

    def intersect(self, other: "Rectangle") -> "Rectangle":
        result = Rectangle(
            max(self.min_x, other.min_x),
            max(self.min_y, other.min_y),
            min(self.max_x, other.max_x),
            min(self.max_y, other.max_y),
        )
        if result.is_empty():
            return ZERO_RECT
        return result


# Returned by every search that finds nothing.
ZERO_RECT = Rectangle(0, 0, 0, 0)
