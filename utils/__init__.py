"""
Utility functions for the channel statistics engine.

This package contains pure utility functions organized by domain:
- core: Markup cleanup, rounding and clamping
- formatting: Number parsing and display formatting
- dates: Join-date parsing and month arithmetic
"""

from .core import clamp, clean_line, round_half_up, strip_markup
from .dates import parse_join_date, trailing_month_labels, utc_now, years_between
from .formatting import (
    format_channel_age,
    format_currency,
    format_growth_rate,
    format_number,
    parse_number,
    parse_percentage,
)

__all__ = [
    # From core
    "clamp",
    "clean_line",
    "round_half_up",
    "strip_markup",
    # From dates
    "parse_join_date",
    "trailing_month_labels",
    "utc_now",
    "years_between",
    # From formatting
    "format_channel_age",
    "format_currency",
    "format_growth_rate",
    "format_number",
    "parse_number",
    "parse_percentage",
]
