"""
Channel statistics extraction from free-form text.

The upstream text generator answers with loosely structured lines such as::

    **Channel Name:** DemoChan
    - Subscribers: 1.2M subscribers
    All-time Views: 45,600,000 (approx.)

There is no schema, so extraction is driven by a declarative rule table.
Each FieldRule lists, most specific first:

1. label spellings that must start the line and be followed by a colon
2. a fallback "label contains keywords" colon split

For each field the first rule that matches any line wins, and within a rule
the first matching line wins. ``channel_name`` additionally falls back to an
``@handle`` found anywhere in the text. Nothing here raises: unmatched fields
keep their defaults, and lines that are not "label: value" pairs are ignored.
"""

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, List, Optional, Tuple

from constants import PARSED_DEFAULTS
from services.stats_models import FieldMatch, ParsedStats
from utils.core import clean_line, strip_markup

logger = logging.getLogger(__name__)

NUMERIC = "numeric"
TEXT = "text"

# Digits with separators, optional fraction, optional unit suffix
NUMBER_TOKEN = (
    r"(\d(?:[\d,]*\d)?(?:\.\d+)?"
    r"(?:\s?(?:thousand|million|billion|[kmb])(?![a-z]))?)"
)
_APPROX = r"(?:(?:about|around|approx\.?|approximately|over|nearly|~|≈)\s*)?"
_HANDLE_RE = re.compile(r"(?<![\w.])@([A-Za-z0-9_-]+)")


@dataclass(frozen=True)
class FieldRule:
    """
    Extraction rules for one ParsedStats field.

    Attributes:
        field: ParsedStats attribute name
        labels: Regex fragments for accepted labels, most specific first
        kind: NUMERIC captures a number token, TEXT the rest of the line
        keywords: All must appear in the label text for the colon fallback
        exclude: None may appear in the label text for the colon fallback
        keep_trailing_period: Keep a final "." on the value
    """

    field: str
    labels: Tuple[str, ...]
    kind: str = TEXT
    keywords: Tuple[str, ...] = ()
    exclude: Tuple[str, ...] = ()
    keep_trailing_period: bool = False


FIELD_RULES: List[FieldRule] = [
    FieldRule(
        field="channel_name",
        labels=(r"Channel\s+Name", r"Channel\s+Title", r"Channel", r"Name"),
        keywords=("name",),
        exclude=("user", "file", "video"),
    ),
    FieldRule(
        field="subscribers",
        labels=(
            r"Subscriber\s+Count",
            r"Total\s+Subscribers",
            r"Subscribers?",
            r"Subs",
        ),
        kind=NUMERIC,
        keywords=("subscriber",),
        exclude=("per", "ratio", "growth", "gain", "rate", "month", "week"),
    ),
    FieldRule(
        field="total_views",
        labels=(
            r"All[-\s]?time\s+Views",
            r"Total\s+Views",
            r"View\s+Count",
            r"Views",
        ),
        kind=NUMERIC,
        keywords=("views",),
        exclude=("avg", "average", "per", "ratio", "month", "daily", "week"),
    ),
    FieldRule(
        field="total_videos",
        labels=(
            r"Total\s+Videos",
            r"All\s+Videos",
            r"Video\s+Count",
            r"Videos",
            r"Uploads",
        ),
        kind=NUMERIC,
        keywords=("videos",),
        exclude=(
            "avg", "average", "per", "frequency", "views", "length", "week", "month", "daily",
        ),
    ),
    FieldRule(
        field="joined_date",
        labels=(
            r"Joined\s+YouTube",
            r"Join\s+Date",
            r"Date\s+Joined",
            r"Channel\s+Created",
            r"Creation\s+Date",
            r"Joined",
            r"Created",
        ),
        keywords=("joined",),
    ),
    FieldRule(
        field="location",
        labels=(r"Location", r"Country", r"Region"),
        keywords=("location",),
    ),
    FieldRule(
        field="engagement_rate",
        labels=(r"Engagement\s+Rate", r"Engagement"),
        keywords=("engagement",),
        keep_trailing_period=True,
    ),
    FieldRule(
        field="like_to_view_ratio",
        labels=(r"Like[\w\s/-]*Ratio",),
        keywords=("like", "ratio"),
    ),
    FieldRule(
        field="comment_to_view_ratio",
        labels=(r"Comment[\w\s/-]*Ratio",),
        keywords=("comment", "ratio"),
    ),
    FieldRule(
        field="viral_score",
        labels=(r"Viral\s+Score", r"Virality\s+Score", r"Viral\s+Potential"),
        keywords=("viral",),
    ),
    FieldRule(
        field="content_score",
        labels=(r"Content\s+Score", r"Content\s+Quality\s+Score", r"Content\s+Quality"),
        keywords=("content", "score"),
    ),
    FieldRule(
        field="upload_frequency",
        labels=(r"Upload\s+Frequency", r"Upload\s+Schedule", r"Posting\s+Frequency"),
        keywords=("upload", "frequency"),
    ),
]


@lru_cache(maxsize=None)
def _label_patterns(rule: FieldRule) -> Tuple[re.Pattern, ...]:
    value = _APPROX + NUMBER_TOKEN if rule.kind == NUMERIC else r"(.+)$"
    return tuple(
        re.compile(rf"^(?:{label})\s*:\s*{value}", re.IGNORECASE)
        for label in rule.labels
    )


def _split_lines(raw_text: Optional[str]) -> List[str]:
    """Split on line breaks, strip markup and bullets, drop empty lines."""
    if not raw_text:
        return []
    lines = (clean_line(line) for line in str(raw_text).splitlines())
    return [line for line in lines if line]


def _finish(rule: FieldRule, value: str) -> Optional[str]:
    """Tidy a captured value; None when nothing usable is left."""
    value = strip_markup(value)
    if not rule.keep_trailing_period and value.endswith("."):
        value = value[:-1].rstrip()
    if not value:
        return None
    if rule.kind == NUMERIC and not any(ch.isdigit() for ch in value):
        return None
    return value


def _match_labels(rule: FieldRule, lines: List[str]) -> Optional[str]:
    for pattern in _label_patterns(rule):
        for line in lines:
            m = pattern.search(line)
            if m:
                value = _finish(rule, m.group(1))
                if value:
                    return value
    return None


def _match_colon_fallback(rule: FieldRule, lines: List[str]) -> Optional[str]:
    if not rule.keywords:
        return None
    for line in lines:
        if ":" not in line:
            continue
        label, _, rest = line.partition(":")
        label = label.lower()
        if not all(k in label for k in rule.keywords):
            continue
        if any(x in label for x in rule.exclude):
            continue
        if rule.kind == NUMERIC:
            rest = rest.split("(")[0]
        value = _finish(rule, rest)
        if value:
            return value
    return None


def _match_handle(lines: List[str]) -> Optional[str]:
    for line in lines:
        m = _HANDLE_RE.search(line)
        if m:
            return m.group(1)
    return None


def match_rule(rule: FieldRule, lines: List[str]) -> FieldMatch:
    """Apply one field's rules in precedence order to pre-cleaned lines."""
    for strategy in (_match_labels, _match_colon_fallback):
        value = strategy(rule, lines)
        if value is not None:
            logger.debug(f"Matched {rule.field}={value!r} via {strategy.__name__}")
            return FieldMatch(value, present=True)

    if rule.field == "channel_name":
        handle = _match_handle(lines)
        if handle:
            logger.debug(f"Recovered channel_name from handle @{handle}")
            return FieldMatch(handle, present=True)

    return FieldMatch(PARSED_DEFAULTS[rule.field], present=False)


def match_fields(raw_text: Optional[str]) -> Dict[str, FieldMatch]:
    """
    Extract every known field from raw text as tagged outcomes.

    Args:
        raw_text: Free-form text from the generator (None is treated as empty)

    Returns:
        Mapping of ParsedStats field name -> FieldMatch
    """
    lines = _split_lines(raw_text)
    matches = {rule.field: match_rule(rule, lines) for rule in FIELD_RULES}
    found = sum(1 for m in matches.values() if m.present)
    logger.debug(f"Extracted {found}/{len(matches)} fields from {len(lines)} lines")
    return matches


def match(raw_text: Optional[str]) -> ParsedStats:
    """Extract a ParsedStats record from free-form text. Never raises."""
    return ParsedStats.from_matches(match_fields(raw_text))
