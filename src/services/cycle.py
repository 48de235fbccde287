"""
Service module for menstrual cycle statistics and predictions.

This module derives cycle lengths from period start dates, classifies
regularity, checks cycle health and projects future cycle starts.

Cycle lengths are always magnitudes: the gap between two adjacent period
starts, whichever order the caller supplied them in.

Typical usage:
    stats = compute_cycle_stats(periods)
    band = classify_regularity(stats.variation)
    health = analyze_cycle_health(periods)
    predictions = generate_cycle_predictions(periods)
"""
from datetime import timedelta
from statistics import mean
from typing import Any, Dict, Iterable, List, Optional

from aws_lambda_powertools import Logger

from src.models.analytics import CyclePrediction, CycleStats
from src.models.period import PeriodRecord
from src.services.constants import (
    CYCLE_HEALTH_MESSAGES,
    DEFAULT_PREDICTION_COUNT,
    HEALTHY_CYCLE_RANGE,
    INSUFFICIENT_DATA,
    MIN_PERIODS_FOR_ANALYSIS,
    MIN_PERIODS_FOR_STATS,
    REGULARITY_BANDS,
    RegularityBand,
)
from src.services.utils import days_between, sort_periods

logger = Logger()

def compute_cycle_lengths(periods: Iterable[PeriodRecord]) -> List[int]:
    """
    Days between chronologically adjacent period starts.

    Args:
        periods: Period records in any order

    Returns:
        Cycle lengths, most recent cycle first

    Example:
        >>> compute_cycle_lengths(periods)  # starts on Mar 1, Jan 30, Jan 1
        [30, 29]
    """
    ordered = sort_periods(periods)
    return [
        abs(days_between(current.start_date, following.start_date))
        for current, following in zip(ordered, ordered[1:])
    ]

def average_period_length(periods: Iterable[PeriodRecord]) -> Optional[float]:
    """
    Mean inclusive length of the periods that have an end date.

    Returns:
        Average length in days, or None if no period has ended
    """
    durations = [p.duration for p in periods if p.duration is not None]
    return mean(durations) if durations else None

def compute_cycle_stats(periods: Optional[Iterable[PeriodRecord]]) -> CycleStats:
    """
    Compute cycle statistics from a period history.

    Args:
        periods: Period records in any order, or None

    Returns:
        CycleStats. With fewer than two periods the result has
        ``available=False`` and no numeric fields.

    Example:
        >>> stats = compute_cycle_stats(periods)
        >>> if stats.available:
        ...     print(f"{stats.rounded_average} day cycles, +/-{stats.variation}")
    """
    ordered = sort_periods(periods)
    if len(ordered) < MIN_PERIODS_FOR_STATS:
        return CycleStats(available=False, period_count=len(ordered))

    cycle_lengths = compute_cycle_lengths(ordered)
    return CycleStats(
        available=True,
        period_count=len(ordered),
        cycle_lengths=cycle_lengths,
        average_cycle_length=mean(cycle_lengths),
        variation=max(cycle_lengths) - min(cycle_lengths),
        average_period_length=average_period_length(ordered)
    )

def classify_regularity(variation: int) -> RegularityBand:
    """
    Look up the regularity band for a cycle-length variation.

    Example:
        >>> classify_regularity(4).confidence
        'medium'
    """
    for band in REGULARITY_BANDS:
        if band.max_variation is None or variation <= band.max_variation:
            return band
    return REGULARITY_BANDS[-1]

def is_healthy_cycle_length(average_length: float) -> bool:
    """Whether an average cycle length lies in the typical 21-35 day range."""
    low, high = HEALTHY_CYCLE_RANGE
    return low <= average_length <= high

def has_enough_cycles(stats: CycleStats) -> bool:
    """Whether enough periods are known to judge regularity."""
    return stats.available and stats.period_count >= MIN_PERIODS_FOR_ANALYSIS

def has_regular_cycles(stats: CycleStats) -> bool:
    """Whether the history shows the tightest regularity band."""
    return has_enough_cycles(stats) and stats.variation <= REGULARITY_BANDS[0].max_variation

def has_irregular_cycles(stats: CycleStats) -> bool:
    """Whether the history falls into the loosest regularity band."""
    return has_enough_cycles(stats) and stats.variation > REGULARITY_BANDS[1].max_variation

def analyze_cycle_health(periods: Optional[Iterable[PeriodRecord]]) -> Dict[str, Any]:
    """
    Summarize cycle length and regularity.

    Args:
        periods: Period records in any order

    Returns:
        Dictionary containing:
        - status: healthy, irregular, attention_needed or insufficient_data
        - message: Human-readable explanation of the status
        - averageLength, variation, totalCycles, cycleLengths
        - regularity, confidence: Shared regularity band
        - averagePeriodLength: Mean period length, or None
    """
    stats = compute_cycle_stats(periods)
    if not has_enough_cycles(stats):
        return {
            "status": INSUFFICIENT_DATA,
            "message": CYCLE_HEALTH_MESSAGES[INSUFFICIENT_DATA]
        }

    if not is_healthy_cycle_length(stats.average_cycle_length):
        status = "attention_needed"
    elif has_irregular_cycles(stats):
        status = "irregular"
    else:
        status = "healthy"

    band = classify_regularity(stats.variation)
    logger.debug("Cycle health analyzed", extra={
        "status": status,
        "total_cycles": stats.total_cycles,
        "variation": stats.variation
    })

    return {
        "status": status,
        "message": CYCLE_HEALTH_MESSAGES[status],
        "averageLength": stats.rounded_average,
        "variation": stats.variation,
        "totalCycles": stats.total_cycles,
        "cycleLengths": stats.cycle_lengths,
        "regularity": band.regularity,
        "confidence": band.confidence,
        "averagePeriodLength": stats.average_period_length
    }

def generate_cycle_predictions(
    periods: Optional[Iterable[PeriodRecord]],
    count: int = DEFAULT_PREDICTION_COUNT
) -> Dict[str, Any]:
    """
    Project the start dates of the next cycles.

    Each projection adds the unrounded average cycle length to the most
    recent period start, once per cycle ahead. Predictions are withheld
    rather than extrapolated when fewer than three periods are known.

    Args:
        periods: Period records in any order
        count: Number of future cycles to project

    Returns:
        Dictionary with ``available`` and, when available, ``predictions``
        (cycle number, predicted start, confidence), ``averageCycleLength``
        and ``regularity``
    """
    ordered = sort_periods(periods)
    stats = compute_cycle_stats(ordered)
    if not has_enough_cycles(stats):
        return {
            "available": False,
            "message": "Need more cycle data for predictions"
        }

    band = classify_regularity(stats.variation)
    last_start = ordered[0].start_date
    predictions = [
        CyclePrediction(
            cycle=i,
            predicted_start_date=last_start + timedelta(days=stats.average_cycle_length * i),
            confidence=band.confidence
        ).to_dict()
        for i in range(1, count + 1)
    ]

    logger.info("Cycle predictions generated", extra={
        "periods_used": stats.period_count,
        "average_cycle_length": stats.average_cycle_length,
        "confidence": band.confidence
    })

    return {
        "available": True,
        "predictions": predictions,
        "averageCycleLength": stats.rounded_average,
        "regularity": band.regularity
    }
