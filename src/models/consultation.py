"""
Consultation model definition.

Only volume and timing are used by analytics; clinical content never
reaches this layer.
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from src.models.base import CamelModel, normalize_instant

class ConsultationStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

class ConsultationRecord(CamelModel):
    """
    A booked consultation with a doctor.
    """
    created_at: datetime
    status: ConsultationStatus = ConsultationStatus.PENDING
    rating: Optional[int] = Field(None, ge=1, le=5)

    @field_validator("created_at", mode="before")
    @classmethod
    def _coerce_date(cls, value):
        return normalize_instant(value)

    @field_validator("created_at", mode="after")
    @classmethod
    def _strip_timezone(cls, value):
        return normalize_instant(value)
