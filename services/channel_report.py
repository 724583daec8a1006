"""
Channel report pipeline.

raw text -> ParsedStats -> DerivedStats -> six-month history

``analyze`` is the single entry point used by the CLI and any display layer.
Given the same text, clock and random seed it returns the same report.
"""

import logging
import random
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from services.config import StatsConfig
from services.growth_csv import parse_growth_csv
from services.history import history_from_growth_rows, synthesize
from services.stats_metrics import derive, estimate_audience_split
from services.stats_models import DerivedStats, GrowthRow, HistoricalPoint, ParsedStats
from services.stats_parser import match

logger = logging.getLogger(__name__)

SYNTHETIC = "synthetic"
IMPORTED = "imported"


@dataclass(frozen=True)
class ChannelReport:
    parsed: ParsedStats
    derived: DerivedStats
    history: List[HistoricalPoint]
    audience: Dict[str, int] = field(default_factory=dict)
    history_source: str = SYNTHETIC
    growth_rows: List[GrowthRow] = field(default_factory=list)

    def as_tuple(self) -> Tuple[ParsedStats, DerivedStats, List[HistoricalPoint]]:
        return self.parsed, self.derived, self.history

    def to_dict(self) -> Dict[str, Any]:
        return {
            "parsed": self.parsed.to_dict(),
            "derived": self.derived.to_dict(),
            "history": [point.to_dict() for point in self.history],
            "history_source": self.history_source,
            "audience": dict(self.audience),
            "growth_rows": [row.to_dict() for row in self.growth_rows],
        }


def apply_known_location(parsed: ParsedStats, known_location: Optional[str]) -> ParsedStats:
    """
    Fill in the location from outside knowledge when the text did not state one.

    A location found in the text always wins. The field stays marked as not
    present, since it did not come from the text.
    """
    if not known_location or not known_location.strip():
        return parsed
    if parsed.is_present("location"):
        return parsed
    return replace(parsed, location=known_location.strip())


def analyze(
    raw_text: Optional[str],
    known_location: Optional[str] = None,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
    growth_csv: Optional[str] = None,
    config: Optional[StatsConfig] = None,
) -> ChannelReport:
    """
    Run the full extraction and derivation pipeline.

    Args:
        raw_text: Free-form channel statistics text
        known_location: Audience country to use when the text has none
        rng: Random source for the synthetic history
        now: Reference time for channel age and month labels
        growth_csv: User-supplied growth data; replaces the synthetic history
        config: Engine settings (defaults from environment)

    Returns:
        ChannelReport

    Raises:
        GrowthDataError: Only when growth_csv is given and malformed
    """
    config = config or StatsConfig()
    if rng is None and config.history_seed is not None:
        rng = random.Random(config.history_seed)

    parsed = apply_known_location(match(raw_text), known_location)
    derived = derive(parsed, now=now, config=config)
    audience = estimate_audience_split(parsed)

    if growth_csv:
        rows = parse_growth_csv(growth_csv)
        history = history_from_growth_rows(rows, derived.cpm_rate)
        source = IMPORTED
    else:
        rows = []
        history = synthesize(parsed, derived, rng=rng, now=now)
        source = SYNTHETIC

    logger.info(
        f"Analyzed '{parsed.channel_name}': {len(parsed.present)} fields found, "
        f"revenue ${derived.estimated_monthly_revenue:,}/mo, {source} history"
    )
    return ChannelReport(
        parsed=parsed,
        derived=derived,
        history=history,
        audience=audience,
        history_source=source,
        growth_rows=rows,
    )
