"""
Mood aggregation service.

Provides recent-window averages, per-phase mood averages and the
correlations between mood, sleep, energy and symptoms.

Typical usage:
    averages = mood_phase_averages(moods, periods)
    recent = recent_values(moods, mood_level, 14)
    correlations = analyze_mood_correlations(moods, periods)
"""
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from src.models.mood import MoodRecord
from src.models.period import PeriodRecord
from src.services.phase import phase_classifier
from src.services.statistics import grouped_average, pearson
from src.services.utils import sort_moods

def mood_level(record: MoodRecord) -> Optional[int]:
    return record.mood.level

def sleep_hours(record: MoodRecord) -> Optional[float]:
    return record.sleep.hours

def sleep_quality(record: MoodRecord) -> Optional[int]:
    return record.sleep.quality

def energy_level(record: MoodRecord) -> Optional[int]:
    return record.energy

def recent_values(
    moods: Iterable[MoodRecord],
    value_fn: Callable[[MoodRecord], Optional[float]],
    count: int
) -> List[float]:
    """
    Values from the ``count`` most recent entries.

    The window is taken over entries first, then entries missing the
    value are dropped, so the result may be shorter than ``count``.

    Example:
        >>> recent_values(moods, sleep_quality, 7)
        [6, 7, 5, 8, 6, 7, 7]
    """
    window = sort_moods(moods)[:count]
    return [value for value in map(value_fn, window) if value is not None]

def mood_phase_averages(
    moods: Iterable[MoodRecord],
    periods: Iterable[PeriodRecord]
) -> Dict[str, float]:
    """
    Average mood level per cycle phase.

    Entries outside any known phase are excluded.

    Returns:
        Mapping of phase name to average mood level
    """
    classify = phase_classifier(periods)
    averages = grouped_average(moods, lambda m: classify(m.date), mood_level)
    return {phase.value: average for phase, average in averages.items()}

def paired_values(
    moods: Iterable[MoodRecord],
    x_fn: Callable[[MoodRecord], Optional[float]],
    y_fn: Callable[[MoodRecord], Optional[float]]
) -> Tuple[List[float], List[float]]:
    """Two aligned series from entries where both values are present."""
    xs, ys = [], []
    for mood in moods:
        x, y = x_fn(mood), y_fn(mood)
        if x is None or y is None:
            continue
        xs.append(x)
        ys.append(y)
    return xs, ys

def mood_by_symptom(moods: Iterable[MoodRecord]) -> Dict[str, float]:
    """
    Average mood level on the days each symptom was logged.

    A symptom listed twice in one entry counts that entry once.
    """
    pairs = [
        (symptom, mood.mood.level)
        for mood in moods
        for symptom in dict.fromkeys(mood.symptoms.merged)
    ]
    return grouped_average(pairs, lambda pair: pair[0], lambda pair: pair[1])

def analyze_mood_correlations(
    moods: Optional[Iterable[MoodRecord]],
    periods: Optional[Iterable[PeriodRecord]]
) -> Dict[str, Any]:
    """
    Correlate mood with sleep, energy, cycle phase and symptoms.

    Returns:
        Dictionary containing:
        - sleepVsMood: Pearson coefficient of sleep hours and mood level
        - sleepQualityVsMood: Pearson coefficient of sleep quality and mood level
        - energyVsMood: Pearson coefficient of energy and mood level
        - moodVsCyclePhase: Average mood level per phase
        - moodVsSymptoms: Average mood level per logged symptom
    """
    moods = sort_moods(moods)
    periods = list(periods or [])

    return {
        "sleepVsMood": pearson(*paired_values(moods, sleep_hours, mood_level)),
        "sleepQualityVsMood": pearson(*paired_values(moods, sleep_quality, mood_level)),
        "energyVsMood": pearson(*paired_values(moods, energy_level, mood_level)),
        "moodVsCyclePhase": mood_phase_averages(moods, periods),
        "moodVsSymptoms": mood_by_symptom(moods)
    }
