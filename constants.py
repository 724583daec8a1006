"""
Application constants for the channel statistics engine.
Centralized numeric policy: defaults, CPM rates, growth tiers, seasonal shapes.
"""

# =============================================================================
# PARSED FIELD DEFAULTS
# =============================================================================
UNKNOWN_CHANNEL = "Unknown Channel"
UNKNOWN = "Unknown"
NOT_AVAILABLE = "N/A"

PARSED_DEFAULTS = {
    "channel_name": UNKNOWN_CHANNEL,
    "subscribers": "0",
    "total_views": "0",
    "total_videos": "0",
    "joined_date": UNKNOWN,
    "location": UNKNOWN,
    "engagement_rate": NOT_AVAILABLE,
    "like_to_view_ratio": NOT_AVAILABLE,
    "comment_to_view_ratio": NOT_AVAILABLE,
    "viral_score": NOT_AVAILABLE,
    "content_score": NOT_AVAILABLE,
    "upload_frequency": NOT_AVAILABLE,
}

# =============================================================================
# NUMBER NOTATION
# =============================================================================
UNIT_MULTIPLIERS = {
    "k": 1_000,
    "thousand": 1_000,
    "m": 1_000_000,
    "million": 1_000_000,
    "b": 1_000_000_000,
    "billion": 1_000_000_000,
}

# Parsed counts are capped here so later float math cannot overflow
MAX_PARSED_NUMBER = 10**15

# Emphasis / code markup emitted by the text generator
MARKUP_CHARS = "*`"

# =============================================================================
# REVENUE MODEL
# =============================================================================
DEFAULT_UPLOADS_PER_WEEK = 2
WEEKS_PER_MONTH = 4.33
# Hourly uploads
MAX_UPLOADS_PER_WEEK = 168
DAYS_PER_YEAR = 365.25

# Engagement bonus: scales linearly with views per video, capped at +30%
ENGAGEMENT_BONUS_VIEWS = 10_000
ENGAGEMENT_BONUS_MAX = 0.3

# Dollars per 1000 views by audience country
CPM_RATES = {
    "united states": 2.5,
    "canada": 2.2,
    "united kingdom": 2.0,
    "germany": 1.8,
    "australia": 1.7,
    "france": 1.6,
    "japan": 1.5,
    "south korea": 1.4,
    "netherlands": 1.3,
    "sweden": 1.2,
    "norway": 1.1,
    "denmark": 1.0,
    "finland": 0.9,
    "switzerland": 0.8,
    "austria": 0.7,
    "belgium": 0.6,
    "italy": 0.5,
    "spain": 0.4,
    "brazil": 0.3,
    "mexico": 0.25,
    "india": 0.2,
    "russia": 0.15,
    "china": 0.1,
}
DEFAULT_CPM = 0.5  # global average

COUNTRY_ALIASES = {
    "us": "united states",
    "usa": "united states",
    "america": "united states",
    "united states of america": "united states",
    "uk": "united kingdom",
    "great britain": "united kingdom",
    "britain": "united kingdom",
    "england": "united kingdom",
    "korea": "south korea",
    "republic of korea": "south korea",
    "deutschland": "germany",
    "brasil": "brazil",
    "méxico": "mexico",
    "holland": "netherlands",
}

# =============================================================================
# GROWTH RATE TIERS
# =============================================================================
# (exclusive subscriber threshold, base monthly growth %, engagement multiplier)
# Ordered from largest channels down; first threshold exceeded wins.
GROWTH_TIERS = [
    (10_000_000, 0.5, 0.3),
    (1_000_000, 1.2, 0.4),
    (100_000, 2.5, 0.5),
    (10_000, 4.0, 0.6),
]
GROWTH_FALLBACK_TIER = (8.0, 0.8)
GROWTH_RATE_MIN = 0.1
GROWTH_RATE_MAX = 25.0

# =============================================================================
# HISTORICAL SERIES SYNTHESIS
# =============================================================================
HISTORY_MONTHS = 6

# (exclusive subscriber ceiling, monthly growth rate, views per subscriber)
# Ordered from smallest channels up; first ceiling not reached wins.
HISTORY_TIERS = [
    (10_000, 0.05, 25),
    (100_000, 0.03, 22),
    (1_000_000, 0.015, 18),
]
HISTORY_FALLBACK_TIER = (0.008, 15)

# Per-position multipliers, oldest month first
SEASONAL_GROWTH = [1.0, 0.95, 1.0, 1.08, 0.97, 1.0]
SEASONAL_VIEWS = [0.92, 1.0, 1.05, 1.0, 1.0, 1.08]

SUBSCRIBER_VARIANCE = 0.05  # ±5%
VIEWS_RATIO_JITTER = 2.0  # ± views per subscriber
LATE_CPM_BOOST = 1.1
LATE_CPM_MONTHS = 2

MIN_SYNTHETIC_SUBSCRIBERS = 1
MIN_SYNTHETIC_VIEWS = 1
MIN_SYNTHETIC_REVENUE = 1

# =============================================================================
# AUDIENCE ESTIMATE
# =============================================================================
AUDIENCE_BASE_SPLIT = {
    "18-24": 22,
    "25-34": 32,
    "35-44": 25,
    "45-54": 15,
    "55+": 6,
}

# =============================================================================
# GROWTH CSV IMPORT
# =============================================================================
GROWTH_CSV_REQUIRED = ("month", "subscribers", "views")
GROWTH_CSV_OPTIONAL = ("engagement", "retention", "ctr")
GROWTH_CSV_HEADER_ERROR = "Header must include Month, Subscribers, Views"
GROWTH_CSV_EMPTY_ERROR = "Not enough data"
GROWTH_CSV_VALUE_ERROR = "Number too large"
# Largest value a polars Int64 column holds
GROWTH_CSV_MAX_INT = 2**63 - 1
