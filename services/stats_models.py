"""
Data structures flowing through the channel statistics pipeline.

ParsedStats -> DerivedStats -> HistoricalPoint series, plus GrowthRow for
user-supplied history. All are plain dataclasses with ``to_dict`` helpers for
JSON output.
"""

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, FrozenSet, List, Optional

from constants import PARSED_DEFAULTS


@dataclass(frozen=True)
class FieldMatch:
    """Tagged extraction outcome: the value plus whether the text supplied it."""

    value: str
    present: bool = False


@dataclass(frozen=True)
class ParsedStats:
    """
    Best-effort structured record extracted from free-form channel text.

    Every field is always populated; values keep the notation of the source
    text ("1.2M", "45,600,000") because the display layer formats them.
    ``present`` names the fields that were actually found in the text, so a
    literal "Unknown" in the text is distinguishable from a default.
    """

    channel_name: str = PARSED_DEFAULTS["channel_name"]
    subscribers: str = PARSED_DEFAULTS["subscribers"]
    total_views: str = PARSED_DEFAULTS["total_views"]
    total_videos: str = PARSED_DEFAULTS["total_videos"]
    joined_date: str = PARSED_DEFAULTS["joined_date"]
    location: str = PARSED_DEFAULTS["location"]
    engagement_rate: str = PARSED_DEFAULTS["engagement_rate"]
    like_to_view_ratio: str = PARSED_DEFAULTS["like_to_view_ratio"]
    comment_to_view_ratio: str = PARSED_DEFAULTS["comment_to_view_ratio"]
    viral_score: str = PARSED_DEFAULTS["viral_score"]
    content_score: str = PARSED_DEFAULTS["content_score"]
    upload_frequency: str = PARSED_DEFAULTS["upload_frequency"]
    present: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def from_matches(cls, matches: Dict[str, FieldMatch]) -> "ParsedStats":
        values = {name: match.value for name, match in matches.items()}
        present = frozenset(name for name, match in matches.items() if match.present)
        return cls(**values, present=present)

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls) if f.name != "present"]

    def is_present(self, name: str) -> bool:
        return name in self.present

    def to_dict(self) -> Dict[str, Any]:
        data = {name: getattr(self, name) for name in self.field_names()}
        data["present"] = sorted(self.present)
        return data


@dataclass(frozen=True)
class DerivedStats:
    """Metrics computed from ParsedStats."""

    avg_views_per_video: int = 0
    estimated_monthly_revenue: int = 0
    channel_age_years: float = 0.0
    age_known: bool = False
    growth_rate_percent: float = 0.1
    uploads_per_week: float = 0.0
    cpm_rate: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class HistoricalPoint:
    month: str
    subscribers: int
    views: int
    revenue: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class GrowthRow:
    """One month of user-supplied growth data."""

    month: str
    subscribers: int
    views: int
    engagement: Optional[float] = None
    retention: Optional[float] = None
    ctr: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
