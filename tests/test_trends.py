"""Tests for monthly health trends."""
from datetime import datetime

import pytest

from src.models.consultation import ConsultationRecord
from src.services.trends import analyze_health_trends, monthly_averages, monthly_counts, monthly_trends
from tests.factories import make_mood, make_period

@pytest.fixture
def records():
    periods = [make_period(datetime(2025, 2, 3)), make_period(datetime(2025, 1, 5))]
    moods = [
        make_mood(datetime(2025, 3, 2), level=8, sleep_quality=6, energy=7),
        make_mood(datetime(2025, 1, 10), level=4, sleep_quality=5, energy=3),
        make_mood(datetime(2025, 1, 11), level=6, sleep_quality=7, energy=5),
    ]
    consultations = [ConsultationRecord(created_at=datetime(2025, 3, 15), status="completed", rating=5)]
    return periods, moods, consultations

def test_monthly_counts(records):
    """Test per-month counts in chronological order."""
    monthly = monthly_counts(*records)

    assert monthly == {
        "2025-01": {"periods": 1, "moods": 2, "consultations": 0},
        "2025-02": {"periods": 1, "moods": 0, "consultations": 0},
        "2025-03": {"periods": 0, "moods": 1, "consultations": 1},
    }
    assert list(monthly) == ["2025-01", "2025-02", "2025-03"]

def test_monthly_trends(records):
    """Test half-versus-half trends over three months."""
    trends = monthly_trends(monthly_counts(*records))

    # Odd month count: the first half is January alone
    assert trends["periods"]["direction"] == "decreasing"
    assert trends["periods"]["change"] == pytest.approx(0.5)
    assert trends["periods"]["percentage"] == pytest.approx(-50)
    assert trends["moods"]["direction"] == "decreasing"
    assert trends["moods"]["change"] == pytest.approx(1.5)
    assert trends["consultations"]["direction"] == "increasing"
    assert trends["consultations"]["percentage"] == 0

def test_monthly_trends_need_two_months():
    """Test that a single month has no trend."""
    assert monthly_trends({"2025-01": {"periods": 1, "moods": 3, "consultations": 0}}) == {}

def test_monthly_averages(records):
    """Test mood, sleep and energy per month."""
    _, moods, _ = records

    averages = monthly_averages(moods)

    assert averages["mood"] == {"2025-01": 5, "2025-03": 8}
    assert averages["sleepQuality"] == {"2025-01": 6, "2025-03": 6}
    assert averages["energy"] == {"2025-01": 4, "2025-03": 7}
    assert list(averages["mood"]) == ["2025-01", "2025-03"]

def test_health_trends_empty():
    """Test that no records give empty sections."""
    assert analyze_health_trends(None, None, None) == {
        "monthlyData": {},
        "trends": {},
        "monthlyAverages": {"mood": {}, "sleepQuality": {}, "energy": {}}
    }
