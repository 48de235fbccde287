"""
Service module for classifying dates into cycle phases.

The classification is a fixed heuristic: days since the most recent period
start are mapped through ``PHASE_BOUNDARIES``, which segments an idealized
28-day cycle. It does not stretch or shrink with the user's own average
cycle length, so long or short cycles will drift out of step after the
first few days. This is a known approximation.

Typical usage:
    >>> phase = classify_phase(mood.date, periods)
    >>> if phase is not CyclePhase.UNKNOWN:
    ...     print(f"Logged during {phase.value} phase")
"""
from bisect import bisect_right
from datetime import datetime
from typing import Callable, Iterable, Optional

from src.models.period import PeriodRecord
from src.models.phase import CyclePhase
from src.services.constants import PHASE_BOUNDARIES
from src.services.utils import days_between, sort_periods

def find_reference_period(
    target: datetime,
    periods: Iterable[PeriodRecord]
) -> Optional[PeriodRecord]:
    """
    Find the most recent period that started on or before ``target``.

    Args:
        target: Instant to locate
        periods: Period records in any order

    Returns:
        The matching period, or None if every period starts later
    """
    for period in sort_periods(periods):
        if period.start_date <= target:
            return period
    return None

def phase_for_day(days_since_period: int) -> CyclePhase:
    """
    Map days since a period start to a phase.

    Example:
        >>> phase_for_day(0)
        <CyclePhase.MENSTRUAL: 'menstrual'>
        >>> phase_for_day(29)
        <CyclePhase.UNKNOWN: 'unknown'>
    """
    if days_since_period < 0:
        return CyclePhase.UNKNOWN
    for max_day, phase in PHASE_BOUNDARIES:
        if days_since_period <= max_day:
            return phase
    return CyclePhase.UNKNOWN

def classify_phase(target: datetime, periods: Iterable[PeriodRecord]) -> CyclePhase:
    """
    Determine the cycle phase a date falls in.

    Args:
        target: Instant to classify
        periods: Period history in any order

    Returns:
        CyclePhase, ``UNKNOWN`` when no period precedes the date or the
        date is more than 28 days after the last one

    Example:
        >>> classify_phase(datetime(2024, 1, 10), periods)
        <CyclePhase.FOLLICULAR: 'follicular'>
    """
    period = find_reference_period(target, periods)
    if period is None:
        return CyclePhase.UNKNOWN
    return phase_for_day(days_between(target, period.start_date))

def phase_classifier(periods: Iterable[PeriodRecord]) -> Callable[[datetime], Optional[CyclePhase]]:
    """
    Build a key function that classifies instants against a fixed history.

    The history is ordered once; each lookup is a binary search over the
    start dates. The returned function yields None for ``UNKNOWN`` so it
    can be passed straight to grouping helpers that skip unkeyed records.
    """
    starts = [period.start_date for period in reversed(sort_periods(periods))]

    def classify(target: datetime) -> Optional[CyclePhase]:
        index = bisect_right(starts, target)
        if not index:
            return None
        phase = phase_for_day(days_between(target, starts[index - 1]))
        return None if phase is CyclePhase.UNKNOWN else phase

    return classify
