"""Helpers for "YYYY-MM" period strings."""
import logging
import re
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

_PERIOD_PATTERN = re.compile(r"^\s*(\d{4})-(\d{1,2})\s*$")

YearMonth = Tuple[int, int]


def format_period(year: int, month: int) -> str:
    """Format a year/month pair as a zero-padded "YYYY-MM" label."""
    return f"{year:04d}-{month:02d}"


def parse_period(period: Optional[str]) -> Optional[YearMonth]:
    """
    Parse a "YYYY-MM" string into a (year, month) tuple.

    Empty or unparseable input yields None, which callers treat as
    "no period filter" rather than an error.
    """
    if not period:
        return None

    match = _PERIOD_PATTERN.match(period)
    if not match:
        logger.warning(f"Ignoring unparseable period filter: {period!r}")
        return None

    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        logger.warning(f"Ignoring period filter with invalid month: {period!r}")
        return None

    return year, month

