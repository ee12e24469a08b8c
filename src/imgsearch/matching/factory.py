from __future__ import annotations

import numpy as np

from ..buffer import PixelBuffer
from ..channel import check_tolerance
from .exact import ExactMatcher
from .searchable import Searchable
from .tolerance import ToleranceMatcher


def new_searchable(needle: PixelBuffer | np.ndarray, tolerance: int = 0) -> Searchable:
    """
    Build a matcher for ``needle``.

    A tolerance of 0 selects exact RGB matching, anything up to 255 selects
    tolerance-band matching.
    """
    tolerance = check_tolerance(tolerance)
    if tolerance == 0:
        return ExactMatcher(needle)
    return ToleranceMatcher(needle, tolerance)
