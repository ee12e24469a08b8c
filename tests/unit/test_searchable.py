from __future__ import annotations

import numpy as np
import pytest

from imgsearch import ZERO_RECT, ExactMatcher, PixelBuffer, Rectangle, Searchable, ToleranceMatcher, new_searchable
from imgsearch.matching import scan


def test_zero_tolerance_selects_exact_matcher() -> None:
    needle = np.full((2, 2, 4), 200, dtype=np.uint8)

    matcher = new_searchable(needle, 0)

    assert isinstance(matcher, ExactMatcher)
    assert isinstance(matcher, Searchable)


def test_positive_tolerance_selects_tolerance_matcher() -> None:
    needle = np.full((2, 2, 4), 200, dtype=np.uint8)

    matcher = new_searchable(needle, 12)

    assert isinstance(matcher, ToleranceMatcher)
    assert matcher.tolerance == 12
    assert isinstance(matcher, Searchable)


@pytest.mark.parametrize("tolerance", [-1, 256, 1.5, True, "3"])
def test_invalid_tolerance_is_rejected(tolerance: object) -> None:
    with pytest.raises(ValueError):
        new_searchable(np.zeros((1, 1, 4), dtype=np.uint8), tolerance)  # type: ignore[arg-type]


def test_numpy_integer_tolerance_is_accepted() -> None:
    matcher = new_searchable(np.zeros((1, 1, 4), dtype=np.uint8), np.uint8(4))

    assert isinstance(matcher, ToleranceMatcher)
    assert matcher.tolerance == 4


def test_scan_visits_positions_in_row_major_order() -> None:
    visited: list[tuple[int, int]] = []

    def record(_: PixelBuffer, x: int, y: int) -> bool:
        visited.append((x, y))
        return False

    result = scan(PixelBuffer.new(4, 3), 3, 2, record)

    assert result == ZERO_RECT
    assert visited == [(0, 0), (1, 0), (0, 1), (1, 1)]


def test_scan_returns_window_at_first_accepted_position() -> None:
    result = scan(PixelBuffer.new(6, 6), 2, 3, lambda _, x, y: (x, y) == (4, 2))

    assert result == Rectangle(4, 2, 6, 5)


def test_scan_skips_checks_when_window_does_not_fit() -> None:
    def fail(_: PixelBuffer, x: int, y: int) -> bool:
        raise AssertionError("no position should be checked")

    assert scan(PixelBuffer.new(3, 3), 4, 1, fail) == ZERO_RECT
    assert scan(PixelBuffer.new(3, 3), 1, 4, fail) == ZERO_RECT


@pytest.mark.parametrize("shape", [(3, 0, 4), (0, 3, 4)])
@pytest.mark.parametrize("tolerance", [0, 10])
def test_empty_needle_is_never_found(shape: tuple[int, int, int], tolerance: int) -> None:
    matcher = new_searchable(np.zeros(shape, dtype=np.uint8), tolerance)

    assert matcher.search_in(PixelBuffer.new(5, 5)) == ZERO_RECT
    assert matcher.search_in(PixelBuffer.new(0, 0)) == ZERO_RECT


def test_scan_with_empty_window_checks_nothing() -> None:
    def fail(_: PixelBuffer, x: int, y: int) -> bool:
        raise AssertionError("no position should be checked")

    assert scan(PixelBuffer.new(3, 3), 0, 2, fail) == ZERO_RECT
    assert scan(PixelBuffer.new(3, 3), 2, 0, fail) == ZERO_RECT
