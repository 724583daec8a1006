"""
Date and time parsing utilities.
"""

import logging
import re
from datetime import datetime, timezone
from typing import List, Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from constants import DAYS_PER_YEAR

logger = logging.getLogger(__name__)

_YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")
_PAREN_RE = re.compile(r"\(.*?\)")

# Fills components missing from partial dates ("March 2015" -> 2015-03-01)
_DEFAULT_DATE = datetime(2000, 1, 1)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_join_date(date_str: Optional[str]) -> Optional[datetime]:
    """
    Parse a free-form channel join date into a UTC datetime.

    Accepts the shapes the text generator tends to produce: "Mar 15, 2019",
    "2019-03-15", "15 March 2019", "March 2019", optionally followed by a
    parenthetical remark. A four-digit year is required so that relative
    phrases ("5 years ago") are not mistaken for calendar dates.

    Args:
        date_str: Raw joined-date text

    Returns:
        Timezone-aware datetime, or None if the text holds no usable date
    """
    if not date_str:
        return None

    text = _PAREN_RE.sub(" ", date_str).strip()
    if not _YEAR_RE.search(text):
        return None

    try:
        parsed = date_parser.parse(text, fuzzy=True, default=_DEFAULT_DATE)
    except (ValueError, OverflowError) as e:
        logger.debug(f"Could not parse join date '{date_str}': {e}")
        return None

    return _as_utc(parsed)


def years_between(start: datetime, end: datetime) -> float:
    """Elapsed time in years of 365.25 days."""
    return (_as_utc(end) - _as_utc(start)).total_seconds() / (DAYS_PER_YEAR * 86400)


def trailing_month_labels(now: Optional[datetime] = None, count: int = 6) -> List[str]:
    """
    Abbreviated month names for the `count` months ending at `now`, oldest first.

    Example:
        >>> trailing_month_labels(datetime(2024, 3, 10), 4)
        ['Dec', 'Jan', 'Feb', 'Mar']
    """
    anchor = (now or utc_now()).replace(day=1)
    return [
        (anchor - relativedelta(months=offset)).strftime("%b")
        for offset in range(count - 1, -1, -1)
    ]
