"""
Service module for rule-based insights, recommendations and risk flags.

Every rule is a pure function from one immutable ``InsightContext`` to at
most one result. Rules are evaluated in the order they are listed and
their results concatenated, so output order is deterministic and each
rule can be tested on its own.

Typical usage:
    >>> context = build_insight_context(periods, moods)
    >>> insights = apply_rules(INSIGHT_RULES, context)
    >>> risks = assess_health_risks(periods, moods)
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, TypeVar

from aws_lambda_powertools import Logger

from src.models.analytics import (
    CycleStats,
    Insight,
    InsightType,
    Recommendation,
    Risk,
    RiskLevel,
)
from src.models.mood import MoodRecord
from src.models.period import PeriodRecord
from src.models.phase import CyclePhase
from src.services.constants import (
    GOOD_MOOD_THRESHOLD,
    LOW_MENSTRUAL_MOOD_THRESHOLD,
    LOW_MOOD_THRESHOLD,
    LOW_RECENT_MOOD_THRESHOLD,
    LUTEAL_DIP_MARGIN,
    MOOD_STABILITY_WINDOW,
    POOR_SLEEP_QUALITY_THRESHOLD,
    RECENT_WINDOW,
)
from src.services.cycle import (
    compute_cycle_stats,
    has_enough_cycles,
    has_irregular_cycles,
    has_regular_cycles,
    is_healthy_cycle_length,
)
from src.services.mood import mood_level, mood_phase_averages, recent_values, sleep_quality
from src.services.statistics import mean_or_none

logger = Logger()

R = TypeVar("R")

@dataclass(frozen=True)
class InsightContext:
    """
    Everything the rules may look at, computed once per request.

    Attributes:
        cycle_stats:          Cycle statistics for the period history.
        phase_averages:       Average mood level per known phase.
        mood_count:           Number of mood entries supplied.
        recent_mood_average:  Mean mood level of the 14 most recent entries.
        weekly_mood_average:  Mean mood level of the 7 most recent entries.
        recent_sleep_quality: Mean sleep quality of the 7 most recent entries.
    """
    cycle_stats: CycleStats
    phase_averages: Dict[str, float] = field(default_factory=dict)
    mood_count: int = 0
    recent_mood_average: Optional[float] = None
    weekly_mood_average: Optional[float] = None
    recent_sleep_quality: Optional[float] = None

def build_insight_context(
    periods: Optional[Iterable[PeriodRecord]],
    moods: Optional[Iterable[MoodRecord]],
    cycle_stats: Optional[CycleStats] = None
) -> InsightContext:
    """
    Derive the rule context from raw records.

    Args:
        periods: Period history in any order
        moods: Mood entries in any order
        cycle_stats: Already computed statistics for ``periods``, if any

    Returns:
        Immutable InsightContext
    """
    periods = list(periods or [])
    moods = list(moods or [])

    return InsightContext(
        cycle_stats=cycle_stats or compute_cycle_stats(periods),
        phase_averages=mood_phase_averages(moods, periods),
        mood_count=len(moods),
        recent_mood_average=mean_or_none(recent_values(moods, mood_level, MOOD_STABILITY_WINDOW)),
        weekly_mood_average=mean_or_none(recent_values(moods, mood_level, RECENT_WINDOW)),
        recent_sleep_quality=mean_or_none(recent_values(moods, sleep_quality, RECENT_WINDOW))
    )

def apply_rules(rules: Sequence[Callable[[InsightContext], Optional[R]]], context: InsightContext) -> List[R]:
    """Evaluate rules in order and collect the ones that fired."""
    return [result for result in (rule(context) for rule in rules) if result is not None]

# Insight rules

def regular_cycles_rule(context: InsightContext) -> Optional[Insight]:
    if not has_regular_cycles(context.cycle_stats):
        return None
    return Insight(
        type=InsightType.POSITIVE,
        title="Regular Cycles",
        message="Your cycles are very regular, which is a good sign of hormonal health."
    )

def mood_stability_rule(context: InsightContext) -> Optional[Insight]:
    """Positive above 7, attention below 5, silent in between."""
    if context.mood_count < MOOD_STABILITY_WINDOW or context.recent_mood_average is None:
        return None

    if context.recent_mood_average >= GOOD_MOOD_THRESHOLD:
        return Insight(
            type=InsightType.POSITIVE,
            title="Good Mood Stability",
            message="Your mood has been consistently positive over the past two weeks."
        )
    if context.recent_mood_average < LOW_MOOD_THRESHOLD:
        return Insight(
            type=InsightType.ATTENTION,
            title="Mood Support Needed",
            message="Consider speaking with a healthcare provider about mood support strategies."
        )
    return None

def premenstrual_dip_rule(context: InsightContext) -> Optional[Insight]:
    luteal = context.phase_averages.get(CyclePhase.LUTEAL.value)
    follicular = context.phase_averages.get(CyclePhase.FOLLICULAR.value)
    if luteal is None or follicular is None:
        return None
    if luteal >= follicular - LUTEAL_DIP_MARGIN:
        return None
    return Insight(
        type=InsightType.NEUTRAL,
        title="Premenstrual Mood Dip",
        message="You tend to experience lower mood during your luteal phase (PMS)"
    )

def menstrual_mood_rule(context: InsightContext) -> Optional[Insight]:
    menstrual = context.phase_averages.get(CyclePhase.MENSTRUAL.value)
    if menstrual is None or menstrual >= LOW_MENSTRUAL_MOOD_THRESHOLD:
        return None
    return Insight(
        type=InsightType.NEUTRAL,
        title="Lower Mood During Menstruation",
        message="Your mood tends to be lower during menstruation"
    )

def sleep_quality_rule(context: InsightContext) -> Optional[Insight]:
    if context.mood_count < RECENT_WINDOW or context.recent_sleep_quality is None:
        return None
    if context.recent_sleep_quality >= POOR_SLEEP_QUALITY_THRESHOLD:
        return None
    return Insight(
        type=InsightType.ATTENTION,
        title="Sleep Quality",
        message="Your sleep quality has been low this week. A consistent bedtime routine may help."
    )

PHASE_COMPARISON_RULES = (premenstrual_dip_rule, menstrual_mood_rule)

# Cycle regularity, mood stability, phase comparison, sleep
INSIGHT_RULES = (
    regular_cycles_rule,
    mood_stability_rule,
    *PHASE_COMPARISON_RULES,
    sleep_quality_rule,
)

# Recommendation rules

def cycle_regularity_recommendation(context: InsightContext) -> Optional[Recommendation]:
    if not has_irregular_cycles(context.cycle_stats):
        return None
    return Recommendation(
        type="cycle_health",
        priority=RiskLevel.HIGH,
        title="Improve Cycle Regularity",
        description="Consider stress management techniques and maintaining consistent sleep patterns"
    )

def mood_support_recommendation(context: InsightContext) -> Optional[Recommendation]:
    if context.mood_count < RECENT_WINDOW or context.weekly_mood_average is None:
        return None
    if context.weekly_mood_average >= LOW_RECENT_MOOD_THRESHOLD:
        return None
    return Recommendation(
        type="mental_health",
        priority=RiskLevel.MEDIUM,
        title="Focus on Mood Support",
        description="Consider mindfulness practices, regular exercise, or speaking with a healthcare provider"
    )

def sleep_recommendation(context: InsightContext) -> Optional[Recommendation]:
    if context.mood_count < RECENT_WINDOW or context.recent_sleep_quality is None:
        return None
    if context.recent_sleep_quality >= POOR_SLEEP_QUALITY_THRESHOLD:
        return None
    return Recommendation(
        type="sleep",
        priority=RiskLevel.LOW,
        title="Prioritize Restful Sleep",
        description="Keep a regular sleep schedule and limit screens in the hour before bed"
    )

RECOMMENDATION_RULES = (
    cycle_regularity_recommendation,
    mood_support_recommendation,
    sleep_recommendation,
)

# Risk rules

def cycle_length_risk(context: InsightContext) -> Optional[Risk]:
    stats = context.cycle_stats
    if not has_enough_cycles(stats) or is_healthy_cycle_length(stats.average_cycle_length):
        return None
    return Risk(
        level=RiskLevel.MEDIUM,
        category="cycle_health",
        message="Cycle length outside normal range - consider consulting a healthcare provider"
    )

RISK_RULES = (cycle_length_risk,)

def generate_personalized_insights(
    periods: Optional[Iterable[PeriodRecord]],
    moods: Optional[Iterable[MoodRecord]],
    context: Optional[InsightContext] = None
) -> List[Dict[str, Any]]:
    """
    Produce the ordered insight list for premium analytics.

    Args:
        periods: Period history
        moods: Mood entries
        context: Prebuilt context for the same records, if available

    Returns:
        List of ``{type, title, message}`` dictionaries
    """
    context = context or build_insight_context(periods, moods)
    insights = apply_rules(INSIGHT_RULES, context)
    logger.debug("Insights generated", extra={"insight_count": len(insights)})
    return [insight.to_dict() for insight in insights]

def generate_mood_insights(phase_averages: Dict[str, float]) -> List[str]:
    """
    Phase-comparison messages for a set of per-phase mood averages.

    Example:
        >>> generate_mood_insights({"luteal": 4.0, "follicular": 7.5})
        ['You tend to experience lower mood during your luteal phase (PMS)']
    """
    context = InsightContext(cycle_stats=CycleStats(), phase_averages=phase_averages)
    return [insight.message for insight in apply_rules(PHASE_COMPARISON_RULES, context)]

def generate_recommendations(
    periods: Optional[Iterable[PeriodRecord]],
    moods: Optional[Iterable[MoodRecord]],
    context: Optional[InsightContext] = None
) -> List[Dict[str, Any]]:
    """
    Produce lifestyle recommendations for basic analytics.

    Returns:
        List of ``{type, priority, title, description}`` dictionaries
    """
    context = context or build_insight_context(periods, moods)
    return [rec.to_dict() for rec in apply_rules(RECOMMENDATION_RULES, context)]

def assess_health_risks(
    periods: Optional[Iterable[PeriodRecord]],
    moods: Optional[Iterable[MoodRecord]],
    context: Optional[InsightContext] = None
) -> List[Dict[str, Any]]:
    """
    Flag conditions worth raising with a healthcare provider.

    The cycle-length risk fires regardless of which insights fired.

    Returns:
        List of ``{level, category, message}`` dictionaries
    """
    context = context or build_insight_context(periods, moods)
    risks = apply_rules(RISK_RULES, context)
    if risks:
        logger.info("Health risks flagged", extra={
            "categories": [risk.category for risk in risks]
        })
    return [risk.to_dict() for risk in risks]
