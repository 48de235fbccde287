"""
Models for derived analytics: cycle statistics, insights, risks,
recommendations, trends, predictions, health score and the analytics
request body.
"""
import math
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field, field_validator

from src.models.base import CamelModel, normalize_instant
from src.models.consultation import ConsultationRecord
from src.models.mood import MoodRecord
from src.models.period import PeriodRecord

class InsightType(str, Enum):
    POSITIVE = "positive"
    ATTENTION = "attention"
    NEUTRAL = "neutral"

class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

class TrendDirection(str, Enum):
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"

class HealthLevel(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    NEEDS_ATTENTION = "needs_attention"

class CycleStats(CamelModel):
    """
    Cycle lengths and their summary, derived from period start dates.

    When fewer than two periods are known ``available`` is False and no
    numeric field is populated.
    """
    available: bool = False
    period_count: int = 0
    cycle_lengths: List[int] = Field(default_factory=list)
    average_cycle_length: Optional[float] = None  # Unrounded, for prediction math
    variation: Optional[int] = None
    average_period_length: Optional[float] = None

    @property
    def rounded_average(self) -> Optional[int]:
        """Average cycle length rounded to whole days for display."""
        if self.average_cycle_length is None:
            return None
        # Halves round up
        return math.floor(self.average_cycle_length + 0.5)

    @property
    def total_cycles(self) -> int:
        return len(self.cycle_lengths)

class Insight(CamelModel):
    """
    A human-readable observation about the user's data.
    """
    type: InsightType
    title: str
    message: str

class Risk(CamelModel):
    """
    A flagged condition that may warrant professional attention.
    """
    level: RiskLevel
    category: str
    message: str

class Recommendation(CamelModel):
    """
    A lifestyle suggestion with a priority.
    """
    type: str
    priority: RiskLevel
    title: str
    description: str

class Trend(CamelModel):
    """
    First-half versus second-half comparison of a series.
    """
    direction: TrendDirection
    change: float
    percentage: float

class CyclePrediction(CamelModel):
    """
    Projected start of a future cycle.
    """
    cycle: int
    predicted_start_date: datetime
    confidence: str

class HealthScore(CamelModel):
    """
    Bounded heuristic composite of cycle regularity, mood and sleep.
    """
    score: int = Field(..., ge=0, le=100)
    factors: List[str] = Field(default_factory=list)
    level: HealthLevel

class AnalyticsRequest(CamelModel):
    """
    Records handed to the analytics endpoints for one user and window.
    """
    periods: List[PeriodRecord] = Field(default_factory=list)
    moods: List[MoodRecord] = Field(default_factory=list)
    consultations: List[ConsultationRecord] = Field(default_factory=list)
    as_of: Optional[datetime] = None
    months: Optional[int] = Field(None, ge=1, le=60)
    prediction_count: int = Field(3, ge=1, le=12)

    @field_validator("periods", "moods", "consultations", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value

    @field_validator("as_of", mode="before")
    @classmethod
    def _coerce_as_of(cls, value):
        return normalize_instant(value)

    @field_validator("as_of", mode="after")
    @classmethod
    def _strip_timezone(cls, value):
        return normalize_instant(value)
