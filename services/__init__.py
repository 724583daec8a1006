"""
Channel statistics services.

- stats_parser: field extraction from free-form text
- stats_metrics: derived metrics (revenue, growth, age)
- history: synthetic six-month series
- growth_csv: strict import of user growth data
- channel_report: the composed pipeline
"""

from .channel_report import ChannelReport, analyze
from .growth_csv import parse_growth_csv
from .history import synthesize
from .stats_errors import ChannelStatsError, GrowthDataError
from .stats_metrics import derive
from .stats_models import DerivedStats, FieldMatch, GrowthRow, HistoricalPoint, ParsedStats
from .stats_parser import match, match_fields

__all__ = [
    "ChannelReport",
    "ChannelStatsError",
    "DerivedStats",
    "FieldMatch",
    "GrowthDataError",
    "GrowthRow",
    "HistoricalPoint",
    "ParsedStats",
    "analyze",
    "derive",
    "match",
    "match_fields",
    "parse_growth_csv",
    "synthesize",
]
