"""
Core utility functions for text cleanup and basic numeric operations.
"""

import math
import re

from constants import MARKUP_CHARS

_MARKUP_RE = re.compile(f"[{re.escape(MARKUP_CHARS)}]")
_BULLET_RE = re.compile(r"^\s*(?:#{1,6}\s+|[-•>+]\s+|\d+[.)]\s+)")


def strip_markup(text) -> str:
    """
    Remove emphasis markup (``**bold**``, backticks) and surrounding whitespace.

    Returns an empty string for None.
    """
    if text is None:
        return ""
    return _MARKUP_RE.sub("", str(text)).strip()


def clean_line(line: str) -> str:
    """Strip markup plus a leading bullet, heading marker or list number."""
    return _BULLET_RE.sub("", strip_markup(line)).strip()


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves away from zero.

    Python's round() uses banker's rounding, which would turn 2.5 into 2.
    """
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def clamp(value: float, min_val: float, max_val: float) -> float:
    """
    Constrain a value within a min and max range.
    Works with floats, ints, and comparable types.

    Examples:
        clamp(50, 0, 100)      # → 50
        clamp(-10, 0, 100)     # → 0
        clamp(150, 0, 100)     # → 100
        clamp(4.2, 0, 3.5)     # → 3.5
    """
    return max(min_val, min(value, max_val))
