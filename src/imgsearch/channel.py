"""
Clamped arithmetic on 8-bit channel values.

The saturating helpers accept plain integers or numpy arrays and return uint8 data.
"""

from __future__ import annotations

import numbers

import numpy as np

CHANNEL_MAX = 0xFF


def saturating_add(value, amount):
    """
    Return ``value + amount`` clamped to 255.
    """
    widened = np.asarray(value, dtype=np.int16) + np.asarray(amount, dtype=np.int16)
    return np.minimum(widened, CHANNEL_MAX).astype(np.uint8)


def saturating_sub(value, amount):
    """
    Return ``value - amount`` clamped to 0.
    """
    widened = np.asarray(value, dtype=np.int16) - np.asarray(amount, dtype=np.int16)
    return np.maximum(widened, 0).astype(np.uint8)


def check_tolerance(tolerance) -> int:
    """
    Validate a per-channel tolerance and return it as a plain ``int``.
    """
    if isinstance(tolerance, bool) or not isinstance(tolerance, numbers.Integral):
        raise ValueError(f"tolerance must be an integer, got {tolerance!r}")
    if not 0 <= tolerance <= CHANNEL_MAX:
        raise ValueError(f"tolerance must be between 0 and {CHANNEL_MAX}, got {tolerance}")
    return int(tolerance)
