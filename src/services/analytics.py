"""
Analytics synthesis for the basic and premium analytics surfaces.

Each builder is a pure function of the records handed to it and an
explicit reference instant. Records are assumed to already be scoped to one
user and window by the caller; the window is only echoed back in
``dataRange``.

Typical usage:
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    payload = build_health_analytics(periods, moods, as_of=now)
    premium = build_premium_analytics(periods, moods, consultations, as_of=now, months=12)
"""
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, Optional

from src.models.consultation import ConsultationRecord
from src.models.mood import MoodRecord
from src.models.period import PeriodRecord
from src.services.constants import (
    CYCLE_HEALTH_MESSAGES,
    DEFAULT_PREDICTION_COUNT,
    DEFAULT_PREMIUM_WINDOW_MONTHS,
    DEFAULT_WINDOW_MONTHS,
    INSUFFICIENT_DATA,
    MIN_MOODS_FOR_PATTERNS,
)
from src.services.cycle import analyze_cycle_health, compute_cycle_stats, generate_cycle_predictions
from src.services.health_score import calculate_health_score
from src.services.insights import (
    assess_health_risks,
    build_insight_context,
    generate_mood_insights,
    generate_personalized_insights,
    generate_recommendations,
)
from src.services.mood import analyze_mood_correlations, mood_phase_averages
from src.services.symptoms import analyze_symptom_correlations, analyze_symptom_patterns
from src.services.trends import analyze_health_trends
from src.services.utils import sort_moods, sort_periods, window_start
from src.utils.logging import logger

def analyze_mood_patterns(
    moods: Optional[Iterable[MoodRecord]],
    periods: Optional[Iterable[PeriodRecord]]
) -> Dict[str, Any]:
    """
    Average mood per cycle phase, with phase-comparison insights.

    Returns:
        ``{status: insufficient_data}`` with fewer than 10 entries, otherwise
        ``{status: analyzed, phaseAverages, insights}``
    """
    moods = list(moods or [])
    if len(moods) < MIN_MOODS_FOR_PATTERNS:
        return {"status": INSUFFICIENT_DATA}

    phase_averages = mood_phase_averages(moods, periods or [])
    return {
        "status": "analyzed",
        "phaseAverages": phase_averages,
        "insights": generate_mood_insights(phase_averages)
    }

def _section(name: str, builder: Callable[[], Any], fallback: Any) -> Any:
    """
    Build one analytics section, degrading to ``fallback`` on failure.

    A failing section is logged and replaced so that the remaining
    sections are still returned.
    """
    try:
        return builder()
    except Exception as e:
        logger.exception(
            "Error building analytics section",
            extra={
                "section": name,
                "error": str(e),
                "error_type": e.__class__.__name__
            }
        )
        return fallback

def _insufficient(message: Optional[str] = None) -> Dict[str, Any]:
    result = {"status": INSUFFICIENT_DATA}
    if message:
        result["message"] = message
    return result

def build_health_analytics(
    periods: Optional[Iterable[PeriodRecord]],
    moods: Optional[Iterable[MoodRecord]],
    as_of: datetime,
    months: int = DEFAULT_WINDOW_MONTHS
) -> Dict[str, Any]:
    """
    Build the basic analytics payload.

    Args:
        periods: Period records for the window
        moods: Mood entries for the window
        as_of: Reference instant closing the window
        months: Length of the window the records were fetched for

    Returns:
        Dictionary containing:
        - analytics: cycleHealth, moodPatterns, symptomCorrelations,
          healthScore and recommendations
        - dataRange: startDate, endDate, periodsCount, moodEntriesCount
    """
    periods = sort_periods(periods)
    moods = sort_moods(moods)

    stats = compute_cycle_stats(periods)
    context = _section(
        "insightContext",
        lambda: build_insight_context(periods, moods, cycle_stats=stats),
        None
    )

    analytics = {
        "cycleHealth": _section(
            "cycleHealth",
            lambda: analyze_cycle_health(periods),
            _insufficient(CYCLE_HEALTH_MESSAGES[INSUFFICIENT_DATA])
        ),
        "moodPatterns": _section(
            "moodPatterns",
            lambda: analyze_mood_patterns(moods, periods),
            _insufficient()
        ),
        "symptomCorrelations": _section(
            "symptomCorrelations",
            lambda: analyze_symptom_correlations(moods, periods),
            {}
        ),
        "healthScore": _section(
            "healthScore",
            lambda: calculate_health_score(periods, moods, cycle_stats=stats).to_dict(),
            _insufficient()
        ),
        "recommendations": _section(
            "recommendations",
            lambda: generate_recommendations(periods, moods, context=context),
            []
        ),
    }

    logger.info("Health analytics built", extra={
        "periods_count": len(periods),
        "mood_entries_count": len(moods),
        "cycle_status": analytics["cycleHealth"].get("status")
    })

    return {
        "analytics": analytics,
        "dataRange": {
            "startDate": window_start(as_of, months),
            "endDate": as_of,
            "periodsCount": len(periods),
            "moodEntriesCount": len(moods)
        }
    }

def build_premium_analytics(
    periods: Optional[Iterable[PeriodRecord]],
    moods: Optional[Iterable[MoodRecord]],
    consultations: Optional[Iterable[ConsultationRecord]],
    as_of: datetime,
    months: int = DEFAULT_PREMIUM_WINDOW_MONTHS,
    prediction_count: int = DEFAULT_PREDICTION_COUNT
) -> Dict[str, Any]:
    """
    Build the premium analytics payload.

    Args:
        periods: Period records for the window
        moods: Mood entries for the window
        consultations: Consultations for the window
        as_of: Reference instant closing the window
        months: Length of the window the records were fetched for
        prediction_count: Number of future cycles to project

    Returns:
        Dictionary containing:
        - analytics: cyclePredictions, symptomPatterns, moodCorrelations,
          healthTrends, personalizedInsights and riskAssessment
        - dataRange: startDate, endDate, periodsCount, moodEntriesCount,
          consultationsCount
    """
    periods = sort_periods(periods)
    moods = sort_moods(moods)
    consultations = sorted(consultations or [], key=lambda c: c.created_at, reverse=True)

    context = _section(
        "insightContext",
        lambda: build_insight_context(periods, moods),
        None
    )

    analytics = {
        "cyclePredictions": _section(
            "cyclePredictions",
            lambda: generate_cycle_predictions(periods, prediction_count),
            {"available": False, "message": "Need more cycle data for predictions"}
        ),
        "symptomPatterns": _section(
            "symptomPatterns",
            lambda: analyze_symptom_patterns(moods, periods),
            {"byPhase": {}, "frequency": {}, "mostCommon": []}
        ),
        "moodCorrelations": _section(
            "moodCorrelations",
            lambda: analyze_mood_correlations(moods, periods),
            _insufficient()
        ),
        "healthTrends": _section(
            "healthTrends",
            lambda: analyze_health_trends(periods, moods, consultations),
            {"monthlyData": {}, "trends": {}, "monthlyAverages": {}}
        ),
        "personalizedInsights": _section(
            "personalizedInsights",
            lambda: generate_personalized_insights(periods, moods, context=context),
            []
        ),
        "riskAssessment": _section(
            "riskAssessment",
            lambda: assess_health_risks(periods, moods, context=context),
            []
        ),
    }

    logger.info("Premium analytics built", extra={
        "periods_count": len(periods),
        "mood_entries_count": len(moods),
        "consultations_count": len(consultations),
        "predictions_available": analytics["cyclePredictions"].get("available")
    })

    return {
        "analytics": analytics,
        "dataRange": {
            "startDate": window_start(as_of, months),
            "endDate": as_of,
            "periodsCount": len(periods),
            "moodEntriesCount": len(moods),
            "consultationsCount": len(consultations)
        }
    }
