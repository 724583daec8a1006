"""
stats_errors.py
---------------
Custom exception hierarchy for the channel statistics engine.

Only the strict import path raises; the text extraction pipeline degrades to
defaults instead.
"""


class ChannelStatsError(Exception):
    """Base exception for channel statistics errors."""


class GrowthDataError(ChannelStatsError):
    """Raised when user-supplied growth CSV data violates the expected schema."""
