"""
Mood tracking model definitions.

A mood record is the daily check-in: mood level, symptoms, energy and
sleep. Every nested block defaults to an empty instance so that partially
filled entries still load; analytics skip whichever values are missing.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from src.models.base import CamelModel, normalize_instant

class MoodState(CamelModel):
    """
    Self-reported mood for the day.
    """
    level: Optional[int] = Field(None, ge=1, le=10)
    emotions: List[str] = Field(default_factory=list)

class SymptomSet(CamelModel):
    """
    Symptoms logged with a mood entry.
    """
    physical: List[str] = Field(default_factory=list)
    emotional: List[str] = Field(default_factory=list)

    @property
    def merged(self) -> List[str]:
        """Physical and emotional symptoms as one list."""
        return [*self.physical, *self.emotional]

class SleepEntry(CamelModel):
    """
    Sleep reported for the night before the entry.
    """
    hours: Optional[float] = Field(None, ge=0, le=24)
    quality: Optional[int] = Field(None, ge=1, le=10)

class MoodRecord(CamelModel):
    """
    One mood check-in per calendar day.
    """
    date: datetime
    mood: MoodState = Field(default_factory=MoodState)
    symptoms: SymptomSet = Field(default_factory=SymptomSet)
    energy: Optional[int] = Field(None, ge=1, le=10)
    sleep: SleepEntry = Field(default_factory=SleepEntry)

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, value):
        return normalize_instant(value)

    @field_validator("date", mode="after")
    @classmethod
    def _strip_timezone(cls, value):
        return normalize_instant(value)
