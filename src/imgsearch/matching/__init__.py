"""
Matching subpackage exposes the exact and tolerance needle matchers.
"""

from .exact import ExactMatcher
from .factory import new_searchable
from .searchable import Searchable, scan
from .tolerance import ToleranceMatcher, derive_bounds

__all__ = [
    "ExactMatcher",
    "Searchable",
    "ToleranceMatcher",
    "derive_bounds",
    "new_searchable",
    "scan",
]
