"""
growth_csv.py
-------------
Strict import of user-supplied monthly growth data, plus polars frames for
charting either imported or synthesized history.

Unlike the text extractor this path raises GrowthDataError: the user typed the
data and should be told what is wrong with it.
"""

import logging
import math
import re
from typing import Dict, List, Optional, Sequence

import polars as pl

from constants import (
    GROWTH_CSV_EMPTY_ERROR,
    GROWTH_CSV_HEADER_ERROR,
    GROWTH_CSV_MAX_INT,
    GROWTH_CSV_OPTIONAL,
    GROWTH_CSV_REQUIRED,
    GROWTH_CSV_VALUE_ERROR,
)
from services.stats_errors import GrowthDataError
from services.stats_models import GrowthRow, HistoricalPoint

logger = logging.getLogger(__name__)

_CELL_SPLIT_RE = re.compile(r",|\t")
_NON_DIGIT_RE = re.compile(r"[^\d]")
_NON_DECIMAL_RE = re.compile(r"[^\d.]")

HISTORY_SCHEMA = {
    "month": pl.Utf8,
    "subscribers": pl.Int64,
    "views": pl.Int64,
    "revenue": pl.Int64,
}
GROWTH_SCHEMA = {
    "month": pl.Utf8,
    "subscribers": pl.Int64,
    "views": pl.Int64,
    "engagement": pl.Float64,
    "retention": pl.Float64,
    "ctr": pl.Float64,
}


def _locate_columns(header: List[str]) -> Dict[str, Optional[int]]:
    """Index of the first header cell containing each known column name."""
    positions = {}
    for name in GROWTH_CSV_REQUIRED + GROWTH_CSV_OPTIONAL:
        positions[name] = next(
            (i for i, cell in enumerate(header) if name in cell), None
        )
    return positions


def _cell(cols: List[str], index: Optional[int]) -> str:
    if index is None or index >= len(cols):
        return ""
    return cols[index].strip()


def _int_cell(cols: List[str], index: Optional[int]) -> int:
    digits = _NON_DIGIT_RE.sub("", _cell(cols, index)).lstrip("0")
    if not digits:
        return 0
    # Length check first: int() rejects very long digit strings
    if len(digits) > len(str(GROWTH_CSV_MAX_INT)) or int(digits) > GROWTH_CSV_MAX_INT:
        raise GrowthDataError(f"{GROWTH_CSV_VALUE_ERROR}: {digits[:12]}...")
    return int(digits)


def _float_cell(cols: List[str], index: Optional[int]) -> Optional[float]:
    if index is None:
        return None
    text = _NON_DECIMAL_RE.sub("", _cell(cols, index))
    try:
        value = float(text) if text else 0.0
    except ValueError:
        return 0.0
    if not math.isfinite(value):
        raise GrowthDataError(f"{GROWTH_CSV_VALUE_ERROR}: {text[:12]}...")
    return value


def parse_growth_csv(text: str) -> List[GrowthRow]:
    """
    Parse comma- or tab-separated monthly growth data.

    The header must contain Month, Subscribers and Views columns (matched by
    case-insensitive substring); Engagement, Retention and CTR are optional.
    Rows without a month are dropped.

    Args:
        text: Raw CSV text, header first

    Returns:
        Parsed rows in input order

    Raises:
        GrowthDataError: If there is no data row, a required column is missing
            or a number does not fit a 64-bit column
    """
    lines = [line for line in (text or "").strip().splitlines() if line.strip()]
    if len(lines) < 2:
        raise GrowthDataError(GROWTH_CSV_EMPTY_ERROR)

    header = [cell.strip().lower() for cell in _CELL_SPLIT_RE.split(lines[0])]
    positions = _locate_columns(header)
    if any(positions[name] is None for name in GROWTH_CSV_REQUIRED):
        raise GrowthDataError(GROWTH_CSV_HEADER_ERROR)

    rows = []
    for line in lines[1:]:
        cols = _CELL_SPLIT_RE.split(line)
        month = _cell(cols, positions["month"])
        if not month:
            continue
        rows.append(
            GrowthRow(
                month=month,
                subscribers=_int_cell(cols, positions["subscribers"]),
                views=_int_cell(cols, positions["views"]),
                engagement=_float_cell(cols, positions["engagement"]),
                retention=_float_cell(cols, positions["retention"]),
                ctr=_float_cell(cols, positions["ctr"]),
            )
        )

    logger.info(f"Imported {len(rows)} growth rows")
    return rows


def _with_changes(df: pl.DataFrame) -> pl.DataFrame:
    """Add month-over-month subscriber change (absolute and percent)."""
    return df.with_columns(
        pl.col("subscribers").diff().alias("subscriber_change"),
        (pl.col("subscribers").pct_change() * 100).round(2).alias("subscriber_change_pct"),
    )


def growth_frame(rows: Sequence[GrowthRow]) -> pl.DataFrame:
    """Chart-ready DataFrame of imported growth rows."""
    df = pl.DataFrame([row.to_dict() for row in rows], schema=GROWTH_SCHEMA)
    return _with_changes(df)


def history_frame(points: Sequence[HistoricalPoint]) -> pl.DataFrame:
    """Chart-ready DataFrame of a historical series."""
    df = pl.DataFrame([point.to_dict() for point in points], schema=HISTORY_SCHEMA)
    return _with_changes(df)

