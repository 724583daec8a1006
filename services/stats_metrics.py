"""
Derived channel metrics.

Turns a ParsedStats record into numbers for scorecards: average views per
video, a CPM-based monthly revenue estimate, channel age and a tiered monthly
growth-rate estimate. Every function degrades to a documented value instead of
raising.
"""

import logging
import re
from datetime import datetime
from typing import Dict, Optional

from constants import (
    AUDIENCE_BASE_SPLIT,
    COUNTRY_ALIASES,
    CPM_RATES,
    DEFAULT_CPM,
    ENGAGEMENT_BONUS_MAX,
    ENGAGEMENT_BONUS_VIEWS,
    GROWTH_FALLBACK_TIER,
    GROWTH_RATE_MAX,
    GROWTH_RATE_MIN,
    GROWTH_TIERS,
    MAX_UPLOADS_PER_WEEK,
    WEEKS_PER_MONTH,
)
from services.config import StatsConfig
from services.stats_models import DerivedStats, ParsedStats
from utils.core import clamp, round_half_up
from utils.dates import parse_join_date, utc_now, years_between
from utils.formatting import parse_number, parse_percentage

logger = logging.getLogger(__name__)

_CADENCE_RE = re.compile(
    r"(\d+(?:\.\d+)?)\s*(?:x|times|videos?|uploads?|posts?)?\s*"
    r"(?:/|per|a|an|each|every)\s*(day|week|month)",
    re.IGNORECASE,
)
_LEADING_NUMBER_RE = re.compile(r"\d+(?:\.\d+)?")


def calculate_avg_views_per_video(total_views: int, video_count: int) -> int:
    """Calculate average views per video, rounded half-up."""
    return round_half_up(total_views / video_count) if video_count > 0 else 0


def normalize_country(location: Optional[str]) -> Optional[str]:
    """
    Map a free-form location onto a CPM table key.

    Handles case, dots ("U.S."), aliases ("USA", "UK") and a country named
    inside a longer location ("Austin, Texas, United States").

    Returns:
        Lower-case country key, or None if no known country is mentioned
    """
    if not location:
        return None

    key = location.replace(".", "").strip().lower()
    key = COUNTRY_ALIASES.get(key, key)
    if key in CPM_RATES:
        return key

    for name in sorted(CPM_RATES, key=len, reverse=True):
        if re.search(rf"\b{re.escape(name)}\b", key):
            return name
    for alias in sorted(COUNTRY_ALIASES, key=len, reverse=True):
        if re.search(rf"\b{re.escape(alias)}\b", key):
            return COUNTRY_ALIASES[alias]
    return None


def lookup_cpm_rate(location: Optional[str], default: float = DEFAULT_CPM) -> float:
    """Dollars per 1000 views for an audience location (global default if unknown)."""
    country = normalize_country(location)
    return CPM_RATES[country] if country else default


def parse_upload_cadence(
    frequency: Optional[str], weeks_per_month: float = WEEKS_PER_MONTH
) -> Optional[float]:
    """
    Parse an upload frequency description into uploads per week.

    Examples:
        "3 videos/week"   -> 3.0
        "12 videos per month" -> 12 / 4.33
        "daily"           -> 7.0
        "2"               -> 2.0 (bare numbers are per week)

    Returns:
        Uploads per week, capped at hourly, or None if the text holds no cadence
    """
    rate = _parse_cadence(frequency, weeks_per_month)
    if rate is None:
        return None
    return min(rate, MAX_UPLOADS_PER_WEEK)


def _parse_cadence(frequency: Optional[str], weeks_per_month: float) -> Optional[float]:
    if not frequency:
        return None

    text = frequency.lower()
    m = _CADENCE_RE.search(text)
    if m:
        count, unit = float(m.group(1)), m.group(2).lower()
        if unit == "day":
            return count * 7
        if unit == "month":
            return count / weeks_per_month
        return count

    if "daily" in text:
        return 7.0
    if "bi-weekly" in text or "biweekly" in text:
        return 0.5
    if "weekly" in text:
        return 1.0
    if "monthly" in text:
        return 1 / weeks_per_month

    m = _LEADING_NUMBER_RE.search(text)
    return float(m.group(0)) if m else None


def estimate_monthly_revenue(
    total_views: int,
    video_count: int,
    cpm: float,
    uploads_per_week: float = 2,
    weeks_per_month: float = WEEKS_PER_MONTH,
) -> int:
    """
    Estimate monthly ad revenue from per-video reach and upload cadence.

    Monthly views are average views per video times videos per month. An
    engagement bonus of up to +30% scales linearly with views per video up to
    10,000.

    Args:
        total_views: Total channel views
        video_count: Total uploaded videos
        cpm: Cost per mille for the audience region
        uploads_per_week: Assumed upload cadence
        weeks_per_month: Average weeks per month

    Returns:
        Estimated monthly revenue in dollars (0 without views or videos)
    """
    if total_views <= 0 or video_count <= 0:
        return 0

    avg_views = total_views / video_count
    monthly_views = round_half_up(avg_views * uploads_per_week * weeks_per_month)
    base_revenue = (monthly_views / 1000) * cpm
    bonus = 1.0 + min(avg_views / ENGAGEMENT_BONUS_VIEWS, 1) * ENGAGEMENT_BONUS_MAX
    return round_half_up(base_revenue * bonus)


def calculate_growth_rate(subscribers: int, engagement_rate: float) -> float:
    """
    Estimate monthly subscriber growth percentage.

    Smaller channels grow faster; engagement adds a tier-specific amount.
    Tier thresholds are exclusive, so exactly 1,000,000 subscribers sits in
    the 100K tier. The result is clamped to [0.1, 25].
    """
    for threshold, base, multiplier in GROWTH_TIERS:
        if subscribers > threshold:
            rate = base + engagement_rate * multiplier
            break
    else:
        base, multiplier = GROWTH_FALLBACK_TIER
        rate = base + engagement_rate * multiplier
    return clamp(rate, GROWTH_RATE_MIN, GROWTH_RATE_MAX)


def calculate_channel_age(
    joined_date: Optional[str], now: Optional[datetime] = None
) -> Optional[float]:
    """
    Channel age in years of 365.25 days.

    Returns None when the join date is missing, unparseable or in the future.
    """
    joined = parse_join_date(joined_date)
    if joined is None:
        return None
    age = years_between(joined, now or utc_now())
    if age < 0:
        logger.debug(f"Join date '{joined_date}' is in the future, treating as unknown")
        return None
    return age


def derive(
    parsed: ParsedStats,
    now: Optional[datetime] = None,
    config: Optional[StatsConfig] = None,
) -> DerivedStats:
    """
    Compute derived metrics for a parsed channel record.

    Args:
        parsed: Output of the field matcher
        now: Reference time for channel age (defaults to current UTC time)
        config: Revenue model settings (defaults from environment)

    Returns:
        DerivedStats with age_known=False when the join date is unusable
    """
    config = config or StatsConfig()

    subscribers = parse_number(parsed.subscribers)
    total_views = parse_number(parsed.total_views)
    total_videos = parse_number(parsed.total_videos)
    engagement = parse_percentage(parsed.engagement_rate)

    uploads_per_week = parse_upload_cadence(
        parsed.upload_frequency if parsed.is_present("upload_frequency") else None,
        config.weeks_per_month,
    )
    if not uploads_per_week:
        uploads_per_week = config.default_uploads_per_week

    cpm = lookup_cpm_rate(parsed.location, config.default_cpm)
    age = calculate_channel_age(parsed.joined_date, now)

    derived = DerivedStats(
        avg_views_per_video=calculate_avg_views_per_video(total_views, total_videos),
        estimated_monthly_revenue=estimate_monthly_revenue(
            total_views, total_videos, cpm, uploads_per_week, config.weeks_per_month
        ),
        channel_age_years=age if age is not None else 0.0,
        age_known=age is not None,
        growth_rate_percent=calculate_growth_rate(subscribers, engagement),
        uploads_per_week=uploads_per_week,
        cpm_rate=cpm,
    )
    logger.debug(f"Derived metrics for {parsed.channel_name}: {derived}")
    return derived


def estimate_audience_split(parsed: ParsedStats) -> Dict[str, int]:
    """
    Rough audience age split in percent, keyed by age bracket.

    Higher engagement skews younger; larger channels reach a broader middle.
    Engagement defaults to 5% when the text did not state it.
    """
    subscribers = parse_number(parsed.subscribers)
    if parsed.is_present("engagement_rate"):
        engagement = parse_percentage(parsed.engagement_rate)
    else:
        engagement = 5.0

    if engagement > 7:
        youth = 1.2
    elif engagement > 4:
        youth = 1.0
    else:
        youth = 0.8

    if subscribers > 1_000_000:
        diversity = 1.1
    elif subscribers > 100_000:
        diversity = 1.0
    else:
        diversity = 0.9

    weights = {
        "18-24": round_half_up(AUDIENCE_BASE_SPLIT["18-24"] * youth),
        "25-34": round_half_up(AUDIENCE_BASE_SPLIT["25-34"] * diversity),
        "35-44": round_half_up(AUDIENCE_BASE_SPLIT["35-44"] * diversity),
        "45-54": round_half_up(AUDIENCE_BASE_SPLIT["45-54"] / youth),
        "55+": round_half_up(AUDIENCE_BASE_SPLIT["55+"] / youth),
    }
    total = sum(weights.values())
    return {bracket: round_half_up(w / total * 100) for bracket, w in weights.items()}
