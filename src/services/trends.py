"""
Health trend analysis over calendar months.

Counts periods, mood entries and consultations per ``YYYY-MM`` bucket and
compares the earlier half of the months with the later half.
"""
from typing import Any, Dict, Iterable, Optional

from src.models.consultation import ConsultationRecord
from src.models.mood import MoodRecord
from src.models.period import PeriodRecord
from src.services.mood import energy_level, mood_level, sleep_quality
from src.services.statistics import grouped_average, half_vs_half_trend
from src.services.utils import month_key

TREND_METRICS = ("periods", "moods", "consultations")

def monthly_counts(
    periods: Iterable[PeriodRecord],
    moods: Iterable[MoodRecord],
    consultations: Iterable[ConsultationRecord]
) -> Dict[str, Dict[str, int]]:
    """
    Count records of each kind per calendar month.

    Returns:
        Mapping of ``YYYY-MM`` to ``{periods, moods, consultations}`` counts,
        in chronological order
    """
    monthly: Dict[str, Dict[str, int]] = {}

    def bump(month: str, metric: str) -> None:
        counts = monthly.setdefault(month, {name: 0 for name in TREND_METRICS})
        counts[metric] += 1

    for period in periods:
        bump(month_key(period.start_date), "periods")
    for mood in moods:
        bump(month_key(mood.date), "moods")
    for consultation in consultations:
        bump(month_key(consultation.created_at), "consultations")

    return {month: monthly[month] for month in sorted(monthly)}

def monthly_trends(monthly: Dict[str, Dict[str, int]]) -> Dict[str, Dict[str, Any]]:
    """
    Half-versus-half trend of each metric across months.

    Returns an empty mapping when fewer than two months are present.
    """
    months = sorted(monthly)
    if len(months) < 2:
        return {}

    return {
        metric: half_vs_half_trend([monthly[month].get(metric, 0) for month in months]).to_dict()
        for metric in TREND_METRICS
    }

def monthly_averages(moods: Iterable[MoodRecord]) -> Dict[str, Dict[str, float]]:
    """Average mood level, sleep quality and energy per month."""
    moods = sorted(moods, key=lambda m: m.date)

    def by_month(record: MoodRecord) -> str:
        return month_key(record.date)

    return {
        "mood": grouped_average(moods, by_month, mood_level),
        "sleepQuality": grouped_average(moods, by_month, sleep_quality),
        "energy": grouped_average(moods, by_month, energy_level)
    }

def analyze_health_trends(
    periods: Optional[Iterable[PeriodRecord]],
    moods: Optional[Iterable[MoodRecord]],
    consultations: Optional[Iterable[ConsultationRecord]]
) -> Dict[str, Any]:
    """
    Build the health trend section of premium analytics.

    Returns:
        Dictionary containing:
        - monthlyData: Record counts per month
        - trends: Direction, change and percentage per metric
        - monthlyAverages: Mood, sleep quality and energy per month
    """
    moods = list(moods or [])
    monthly = monthly_counts(periods or [], moods, consultations or [])
    return {
        "monthlyData": monthly,
        "trends": monthly_trends(monthly),
        "monthlyAverages": monthly_averages(moods)
    }
