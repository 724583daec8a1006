"""
Number and string formatting utilities.
"""

import math
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from constants import MAX_PARSED_NUMBER, UNIT_MULTIPLIERS

from .core import round_half_up, strip_markup

_NUMBER_RE = re.compile(
    r"(\d+(?:\.\d+)?|\.\d+)(?:\s*(thousand|million|billion|[kmb])(?![a-z]))?",
    re.IGNORECASE,
)
_DECIMAL_RE = re.compile(r"\d+(?:\.\d+)?|\.\d+")


def format_number(num: float) -> str:
    """
    Convert a large number into a human-readable string (e.g., 1.2M, 3.4K).

    Args:
        num (float): The input number.

    Returns:
        str: Human-readable formatted string.
    """
    if not num:
        return "0"
    if num >= 1_000_000_000:
        return f"{num / 1_000_000_000:.1f}B"
    elif num >= 1_000_000:
        return f"{num / 1_000_000:.1f}M"
    elif num >= 1_000:
        return f"{num / 1_000:.1f}K"
    return f"{num:,.0f}"


def parse_number(val) -> int:
    """
    Parse formatted numbers (e.g., 12.3M, 540K, 1,234) into raw ints.

    Markup and thousands separators are ignored. A K/M/B suffix (or the words
    thousand/million/billion) directly after the first number scales it, with
    the result rounded half-up. Without a suffix the integer part of the first
    number is returned. Anything without a digit yields 0. Results are capped
    at MAX_PARSED_NUMBER so downstream float arithmetic stays finite.

    Args:
        val: String representation of a number (can include M, K, B suffixes)

    Returns:
        Parsed integer value
    """
    if val is None or isinstance(val, bool):
        return 0
    if isinstance(val, int):
        return min(val, MAX_PARSED_NUMBER)
    if isinstance(val, float):
        if not math.isfinite(val):
            return 0
        return min(round_half_up(val), MAX_PARSED_NUMBER)

    s = strip_markup(val).replace(",", "")
    match = _NUMBER_RE.search(s)
    if not match:
        return 0

    number, suffix = match.group(1), match.group(2)
    try:
        value = Decimal(number)
    except InvalidOperation:
        return 0

    if suffix:
        value = value * UNIT_MULTIPLIERS[suffix.lower()]
    value = min(value, Decimal(MAX_PARSED_NUMBER))
    if suffix:
        value = value.quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return int(value)


def parse_percentage(val) -> float:
    """
    Extract the numeric part of a percentage string ("8.7%" -> 8.7).

    Returns 0.0 when no number is present ("N/A", empty, None).
    """
    if val is None:
        return 0.0
    match = _DECIMAL_RE.search(strip_markup(val))
    if not match:
        return 0.0
    value = float(match.group(0))
    return value if math.isfinite(value) else 0.0


def format_currency(amount: float) -> str:
    """Format a dollar amount without cents, e.g. 3753 -> "$3,753"."""
    return f"${round_half_up(amount or 0):,}"


def format_growth_rate(rate: float) -> str:
    """Format a monthly growth percentage, e.g. 14.96 -> "+15.0%"."""
    return f"+{rate:.1f}%"


def format_channel_age(age_years: float, age_known: bool = True) -> str:
    """
    Format channel age in human-readable format.

    Returns: "5.2 years", "8 months", or "Unknown"
    """
    if not age_known:
        return "Unknown"
    if age_years >= 1:
        return f"{age_years:.1f} years"
    return f"{round_half_up(age_years * 12)} months"
