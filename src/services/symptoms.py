"""
Symptom aggregation service.

Counts the symptoms logged with mood entries, overall and per cycle phase.
Physical and emotional symptoms are counted together.
"""
from collections import Counter
from typing import Any, Dict, Iterable, List, Optional

from src.models.mood import MoodRecord
from src.models.period import PeriodRecord
from src.services.constants import MOST_COMMON_SYMPTOM_LIMIT
from src.services.phase import phase_classifier

def symptom_frequency(moods: Iterable[MoodRecord]) -> Counter:
    """
    Count every symptom across all mood entries.

    Entries outside any known phase are still counted here.
    """
    frequency: Counter = Counter()
    for mood in moods:
        frequency.update(mood.symptoms.merged)
    return frequency

def most_common_symptoms(
    frequency: Counter,
    limit: int = MOST_COMMON_SYMPTOM_LIMIT
) -> List[Dict[str, Any]]:
    """
    Top symptoms by count.

    Ties keep the order in which the symptoms were first seen.

    Example:
        >>> most_common_symptoms(Counter(["cramps", "fatigue", "cramps"]))
        [{'symptom': 'cramps', 'count': 2}, {'symptom': 'fatigue', 'count': 1}]
    """
    return [
        {"symptom": symptom, "count": count}
        for symptom, count in frequency.most_common(limit)
    ]

def symptoms_by_phase(
    moods: Iterable[MoodRecord],
    periods: Iterable[PeriodRecord]
) -> Dict[str, Dict[str, int]]:
    """
    Count symptoms per cycle phase.

    Entries whose date falls in no known phase are left out, and phases
    with no entries do not appear.

    Returns:
        Mapping of phase name to symptom counts
    """
    classify = phase_classifier(periods)
    by_phase: Dict[str, Counter] = {}
    for mood in moods:
        phase = classify(mood.date)
        if phase is None:
            continue
        by_phase.setdefault(phase.value, Counter()).update(mood.symptoms.merged)

    return {phase: dict(counts) for phase, counts in by_phase.items()}

def analyze_symptom_patterns(
    moods: Optional[Iterable[MoodRecord]],
    periods: Optional[Iterable[PeriodRecord]]
) -> Dict[str, Any]:
    """
    Build the symptom section of premium analytics.

    Returns:
        Dictionary containing:
        - byPhase: Symptom counts per phase
        - frequency: Symptom counts across all entries
        - mostCommon: Top ten symptoms with counts
    """
    moods = list(moods or [])
    frequency = symptom_frequency(moods)
    return {
        "byPhase": symptoms_by_phase(moods, periods or []),
        "frequency": dict(frequency),
        "mostCommon": most_common_symptoms(frequency)
    }

def analyze_symptom_correlations(
    moods: Optional[Iterable[MoodRecord]],
    periods: Optional[Iterable[PeriodRecord]]
) -> Dict[str, Dict[str, int]]:
    """Symptom counts per phase, as reported by basic analytics."""
    return symptoms_by_phase(moods or [], periods or [])
