"""
Dataset helpers for batches of haystacks with known needle locations.
"""

from .search_dataset import SearchCase, SearchDataset, load_search_dataset

__all__ = ["SearchCase", "SearchDataset", "load_search_dataset"]
