"""
Constants and shared heuristics for cycle analytics services.
"""
from typing import NamedTuple, Optional, Tuple

from src.models.analytics import HealthLevel
from src.models.phase import CyclePhase

SECONDS_PER_DAY = 86_400

# Fixed 28-day segmentation: (max days since period start, phase).
# Not adapted to the user's own average cycle length.
PHASE_BOUNDARIES: Tuple[Tuple[int, CyclePhase], ...] = (
    (5, CyclePhase.MENSTRUAL),
    (13, CyclePhase.FOLLICULAR),
    (16, CyclePhase.OVULATION),
    (28, CyclePhase.LUTEAL),
)

class RegularityBand(NamedTuple):
    """Cycle regularity label and prediction confidence for a variation range."""
    max_variation: Optional[int]
    regularity: str
    confidence: str

# Ordered, first match wins. The last band has no upper bound.
REGULARITY_BANDS: Tuple[RegularityBand, ...] = (
    RegularityBand(3, "regular", "high"),
    RegularityBand(7, "somewhat_irregular", "medium"),
    RegularityBand(None, "irregular", "low"),
)

HEALTHY_CYCLE_RANGE = (21, 35)

# Minimum period records before cycle health, predictions, regularity
# insights and cycle risks are reported.
MIN_PERIODS_FOR_ANALYSIS = 3
MIN_PERIODS_FOR_STATS = 2

MIN_MOODS_FOR_PATTERNS = 10
MOOD_STABILITY_WINDOW = 14
RECENT_WINDOW = 7
MOST_COMMON_SYMPTOM_LIMIT = 10
DEFAULT_PREDICTION_COUNT = 3

# Days per month used when deriving the analysed window
DAYS_PER_MONTH = 30
DEFAULT_WINDOW_MONTHS = 6
DEFAULT_PREMIUM_WINDOW_MONTHS = 12

GOOD_MOOD_THRESHOLD = 7
LOW_MOOD_THRESHOLD = 5
LOW_MENSTRUAL_MOOD_THRESHOLD = 6
LUTEAL_DIP_MARGIN = 1
LOW_RECENT_MOOD_THRESHOLD = 6
POOR_SLEEP_QUALITY_THRESHOLD = 6
MOOD_VARIABILITY_THRESHOLD = 5

HEALTH_SCORE_BASELINE = 100
IRREGULAR_CYCLE_PENALTY = 15
MOOD_VARIABILITY_PENALTY = 10
POOR_SLEEP_PENALTY = 10

# Ordered, first match wins
HEALTH_LEVEL_THRESHOLDS = (
    (80, HealthLevel.EXCELLENT),
    (60, HealthLevel.GOOD),
    (40, HealthLevel.FAIR),
)
FALLBACK_HEALTH_LEVEL = HealthLevel.NEEDS_ATTENTION

INSUFFICIENT_DATA = "insufficient_data"

CYCLE_HEALTH_MESSAGES = {
    "insufficient_data": "Need at least 3 cycles for analysis",
    "healthy": "Your cycles are regular and within normal range",
    "attention_needed": "Your average cycle length is outside the typical range (21-35 days)",
    "irregular": "Your cycles show significant variation. Consider tracking more consistently",
}
