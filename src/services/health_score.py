"""
Health score calculation service.

The score starts at 100 and loses a fixed penalty for each of irregular
cycles, volatile mood and poor sleep. It is a heuristic composite, not a
clinical measure.
"""
from typing import Iterable, Optional

from aws_lambda_powertools import Logger

from src.models.analytics import CycleStats, HealthLevel, HealthScore
from src.models.mood import MoodRecord
from src.models.period import PeriodRecord
from src.services.constants import (
    FALLBACK_HEALTH_LEVEL,
    HEALTH_LEVEL_THRESHOLDS,
    HEALTH_SCORE_BASELINE,
    IRREGULAR_CYCLE_PENALTY,
    MOOD_VARIABILITY_PENALTY,
    MOOD_VARIABILITY_THRESHOLD,
    POOR_SLEEP_PENALTY,
    POOR_SLEEP_QUALITY_THRESHOLD,
    RECENT_WINDOW,
)
from src.services.cycle import compute_cycle_stats, has_irregular_cycles
from src.services.mood import mood_level, recent_values, sleep_quality
from src.services.statistics import mean_or_none

logger = Logger()

def score_level(score: int) -> HealthLevel:
    """
    Map a score to its level band.

    Example:
        >>> score_level(75)
        <HealthLevel.GOOD: 'good'>
    """
    for threshold, level in HEALTH_LEVEL_THRESHOLDS:
        if score >= threshold:
            return level
    return FALLBACK_HEALTH_LEVEL

def has_high_mood_variability(moods: Iterable[MoodRecord]) -> bool:
    """Whether the 7 most recent mood levels span more than 5 points."""
    moods = list(moods)
    if len(moods) < RECENT_WINDOW:
        return False
    levels = recent_values(moods, mood_level, RECENT_WINDOW)
    if not levels:
        return False
    return max(levels) - min(levels) > MOOD_VARIABILITY_THRESHOLD

def has_poor_sleep(moods: Iterable[MoodRecord]) -> bool:
    """Whether the 7 most recent entries average below 6 for sleep quality."""
    moods = list(moods)
    if len(moods) < RECENT_WINDOW:
        return False
    average = mean_or_none(recent_values(moods, sleep_quality, RECENT_WINDOW))
    return average is not None and average < POOR_SLEEP_QUALITY_THRESHOLD

def calculate_health_score(
    periods: Optional[Iterable[PeriodRecord]],
    moods: Optional[Iterable[MoodRecord]],
    cycle_stats: Optional[CycleStats] = None
) -> HealthScore:
    """
    Combine cycle regularity, mood variability and sleep into a score.

    Args:
        periods: Period history in any order
        moods: Mood entries in any order
        cycle_stats: Already computed statistics for ``periods``, if any

    Returns:
        HealthScore with a score in [0, 100], the factors that cost points
        and the level band

    Example:
        >>> result = calculate_health_score([], [])
        >>> result.score, result.level
        (100, <HealthLevel.EXCELLENT: 'excellent'>)
    """
    moods = list(moods or [])
    stats = cycle_stats or compute_cycle_stats(periods)

    score = HEALTH_SCORE_BASELINE
    factors = []

    if has_irregular_cycles(stats):
        score -= IRREGULAR_CYCLE_PENALTY
        factors.append("Irregular cycles detected")

    if has_high_mood_variability(moods):
        score -= MOOD_VARIABILITY_PENALTY
        factors.append("High mood variability")

    if has_poor_sleep(moods):
        score -= POOR_SLEEP_PENALTY
        factors.append("Poor sleep quality")

    score = max(score, 0)
    logger.debug("Health score calculated", extra={"score": score, "factors": factors})

    return HealthScore(score=score, factors=factors, level=score_level(score))
