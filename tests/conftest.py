"""
Pytest configuration and shared fixtures.
"""
import pytest
from datetime import datetime
from typing import List

from src.models.period import PeriodRecord
from tests.factories import REFERENCE_DATE, periods_from_offsets

@pytest.fixture
def reference_date() -> datetime:
    return REFERENCE_DATE

@pytest.fixture
def regular_periods() -> List[PeriodRecord]:
    """Four periods exactly 28 days apart."""
    return periods_from_offsets([0, 28, 56, 84])

@pytest.fixture
def somewhat_irregular_periods() -> List[PeriodRecord]:
    """Cycles of 32, 28 and 29 days (most recent first)."""
    return periods_from_offsets([0, 32, 60, 89])

@pytest.fixture
def irregular_periods() -> List[PeriodRecord]:
    """Cycles of 24, 35 and 26 days (most recent first)."""
    return periods_from_offsets([0, 24, 59, 85])

@pytest.fixture
def long_cycle_periods() -> List[PeriodRecord]:
    """Perfectly regular but 40-day cycles."""
    return periods_from_offsets([0, 40, 80, 120])
