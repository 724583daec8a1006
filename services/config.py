# services/config.py
import logging
import os
from dataclasses import dataclass
from typing import Optional

from constants import DEFAULT_CPM, DEFAULT_UPLOADS_PER_WEEK, WEEKS_PER_MONTH


def _optional_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    return int(value) if value not in (None, "") else None


@dataclass(frozen=True)
class StatsConfig:
    """Configuration for the statistics derivation engine."""

    # Revenue model
    default_uploads_per_week: float = float(
        os.getenv("STATS_DEFAULT_UPLOADS_PER_WEEK", str(DEFAULT_UPLOADS_PER_WEEK))
    )
    weeks_per_month: float = float(os.getenv("STATS_WEEKS_PER_MONTH", str(WEEKS_PER_MONTH)))
    default_cpm: float = float(os.getenv("STATS_DEFAULT_CPM", str(DEFAULT_CPM)))
    # Synthetic history; unset means a fresh unseeded generator per call
    history_seed: Optional[int] = _optional_int("STATS_HISTORY_SEED")
    log_level: str = os.getenv("STATS_LOG_LEVEL", "INFO")


def setup_logging(level: Optional[str] = None):
    """Configure logging for the application.

    This function should be called at application startup.
    It configures the logging format and level.
    """
    logging.basicConfig(
        level=(level or StatsConfig().log_level).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
