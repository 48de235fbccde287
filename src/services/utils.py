"""
Shared utility functions for analytics services.

These utilities are used across multiple service modules to handle common
operations like day arithmetic, record ordering and window bounds.
"""
import math
from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from src.models.mood import MoodRecord
from src.models.period import PeriodRecord
from src.services.constants import DAYS_PER_MONTH, SECONDS_PER_DAY

def days_between(later: datetime, earlier: datetime) -> int:
    """
    Whole days elapsed from ``earlier`` to ``later``, floored.

    Negative when ``later`` is actually before ``earlier``.

    Example:
        >>> days_between(datetime(2024, 1, 3, 6), datetime(2024, 1, 1, 12))
        1
    """
    return math.floor((later - earlier).total_seconds() / SECONDS_PER_DAY)

def sort_periods(periods: Optional[Iterable[PeriodRecord]]) -> List[PeriodRecord]:
    """
    Order periods most recent first.

    Args:
        periods: Period records in any order, or None

    Returns:
        New list sorted by start date, descending
    """
    return sorted(periods or [], key=lambda p: p.start_date, reverse=True)

def sort_moods(moods: Optional[Iterable[MoodRecord]]) -> List[MoodRecord]:
    """Order mood entries most recent first."""
    return sorted(moods or [], key=lambda m: m.date, reverse=True)

def month_key(instant: datetime) -> str:
    """Calendar month bucket in ``YYYY-MM`` form."""
    return instant.strftime("%Y-%m")

def window_start(as_of: datetime, months: int) -> datetime:
    """
    Start of the analysed window ending at ``as_of``.

    Months are approximated as 30 days each.
    """
    return as_of - timedelta(days=DAYS_PER_MONTH * months)
