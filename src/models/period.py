"""
Period model definition for logged menstruation records.
"""
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field, field_validator, model_validator

from src.models.base import CamelModel, normalize_instant

class FlowLevel(str, Enum):
    """
    Reported menstrual flow intensity.
    """
    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"

class PeriodRecord(CamelModel):
    """
    A single logged period, as supplied by the storage layer.
    """
    start_date: datetime
    end_date: Optional[datetime] = None
    flow: FlowLevel = FlowLevel.MEDIUM
    symptoms: List[str] = Field(default_factory=list)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _coerce_dates(cls, value):
        return normalize_instant(value)

    @field_validator("start_date", "end_date", mode="after")
    @classmethod
    def _strip_timezone(cls, value):
        return normalize_instant(value)

    @model_validator(mode="after")
    def _check_end_after_start(self) -> "PeriodRecord":
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self

    @property
    def duration(self) -> Optional[int]:
        """Inclusive length of the period in days, if it has ended."""
        if self.end_date is None:
            return None
        return (self.end_date - self.start_date).days + 1
