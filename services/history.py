"""
Synthetic six-month channel history.

When no real history exists, charts still need a series. This module projects
backwards from the current subscriber count with compound monthly growth, a
fixed seasonal shape and bounded random variance. The newest month is pinned
to the current subscriber count exactly; earlier months are plausible, not
accurate.

Randomness comes from an injected ``random.Random`` so that a seed reproduces
the same series.
"""

import logging
import random
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from constants import (
    HISTORY_FALLBACK_TIER,
    HISTORY_MONTHS,
    HISTORY_TIERS,
    LATE_CPM_BOOST,
    LATE_CPM_MONTHS,
    MIN_SYNTHETIC_REVENUE,
    MIN_SYNTHETIC_SUBSCRIBERS,
    MIN_SYNTHETIC_VIEWS,
    SEASONAL_GROWTH,
    SEASONAL_VIEWS,
    SUBSCRIBER_VARIANCE,
    VIEWS_RATIO_JITTER,
)
from services.stats_metrics import lookup_cpm_rate
from services.stats_models import DerivedStats, GrowthRow, HistoricalPoint, ParsedStats
from utils.core import round_half_up
from utils.dates import trailing_month_labels
from utils.formatting import parse_number

logger = logging.getLogger(__name__)


def history_tier(subscribers: int) -> Tuple[float, float]:
    """
    Pick (monthly growth rate, views per subscriber) for a channel size.

    Larger channels grow more slowly and get fewer views per subscriber.
    """
    for ceiling, growth_rate, views_ratio in HISTORY_TIERS:
        if subscribers < ceiling:
            return growth_rate, views_ratio
    return HISTORY_FALLBACK_TIER


def synthesize(
    parsed: ParsedStats,
    derived: Optional[DerivedStats] = None,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> List[HistoricalPoint]:
    """
    Generate the trailing six months of subscribers, views and revenue.

    Args:
        parsed: Parsed channel record (subscribers and location are used)
        derived: Derived metrics; its CPM rate is reused when available
        rng: Random source for variance (a fresh unseeded one if omitted)
        now: End of the series (defaults to current UTC time)

    Returns:
        Six HistoricalPoint entries, oldest first; the last one's subscribers
        equals the parsed subscriber count
    """
    rng = rng or random.Random()
    current = parse_number(parsed.subscribers)
    growth_rate, views_ratio = history_tier(current)
    if derived is not None and derived.cpm_rate > 0:
        cpm = derived.cpm_rate
    else:
        cpm = lookup_cpm_rate(parsed.location)

    months = trailing_month_labels(now, HISTORY_MONTHS)
    last = HISTORY_MONTHS - 1
    series = []

    for index, month in enumerate(months):
        if index == last:
            subscribers = current
        else:
            compound = (1 + growth_rate) ** -(last - index)
            variance = rng.uniform(1 - SUBSCRIBER_VARIANCE, 1 + SUBSCRIBER_VARIANCE)
            subscribers = max(
                MIN_SYNTHETIC_SUBSCRIBERS,
                round_half_up(current * compound * SEASONAL_GROWTH[index] * variance),
            )

        views_per_sub = views_ratio * SEASONAL_VIEWS[index] + rng.uniform(
            -VIEWS_RATIO_JITTER, VIEWS_RATIO_JITTER
        )
        views = max(MIN_SYNTHETIC_VIEWS, round_half_up(subscribers * views_per_sub))

        month_cpm = cpm * LATE_CPM_BOOST if index >= HISTORY_MONTHS - LATE_CPM_MONTHS else cpm
        revenue = max(MIN_SYNTHETIC_REVENUE, round_half_up(views / 1000 * month_cpm))

        series.append(HistoricalPoint(month, subscribers, views, revenue))

    logger.debug(
        f"Synthesized {len(series)} months for {parsed.channel_name} "
        f"(growth={growth_rate:.3f}, ratio={views_ratio})"
    )
    return series


def history_from_growth_rows(
    rows: Sequence[GrowthRow], cpm: float
) -> List[HistoricalPoint]:
    """Convert user-supplied growth rows into chart points, estimating revenue."""
    return [
        HistoricalPoint(
            month=row.month,
            subscribers=row.subscribers,
            views=row.views,
            revenue=round_half_up(row.views / 1000 * cpm),
        )
        for row in rows
    ]
