"""Tests for symptom aggregation."""
from collections import Counter
from datetime import datetime

import pytest

from src.services.symptoms import (
    analyze_symptom_correlations,
    analyze_symptom_patterns,
    most_common_symptoms,
    symptom_frequency,
    symptoms_by_phase,
)
from tests.factories import make_mood, make_period

@pytest.fixture
def periods():
    return [make_period(datetime(2025, 1, 1))]

@pytest.fixture
def moods():
    return [
        make_mood(datetime(2025, 1, 2), physical=["cramps", "fatigue"], emotional=["irritability"]),
        make_mood(datetime(2025, 1, 20), physical=["bloating"], emotional=["irritability"]),
        # Before any logged period
        make_mood(datetime(2024, 12, 20), physical=["headache"]),
    ]

def test_frequency_merges_physical_and_emotional(moods):
    """Test flat counts include every entry, phased or not."""
    frequency = symptom_frequency(moods)

    assert frequency == Counter({
        "irritability": 2,
        "cramps": 1,
        "fatigue": 1,
        "bloating": 1,
        "headache": 1,
    })

def test_by_phase_excludes_unknown(moods, periods):
    """Test that entries outside a known phase are left out of the buckets."""
    by_phase = symptoms_by_phase(moods, periods)

    assert by_phase == {
        "menstrual": {"cramps": 1, "fatigue": 1, "irritability": 1},
        "luteal": {"bloating": 1, "irritability": 1},
    }
    assert "unknown" not in by_phase

def test_most_common_breaks_ties_by_first_appearance():
    """Test that equal counts keep input order, not alphabetical order."""
    frequency = Counter(["tender breasts", "acne", "acne", "tender breasts", "cramps", "bloating"])

    assert most_common_symptoms(frequency) == [
        {"symptom": "tender breasts", "count": 2},
        {"symptom": "acne", "count": 2},
        {"symptom": "cramps", "count": 1},
        {"symptom": "bloating", "count": 1},
    ]

def test_most_common_is_limited_to_ten():
    """Test the top-ten cut-off."""
    frequency = Counter({f"symptom-{i}": 20 - i for i in range(12)})

    top = most_common_symptoms(frequency)

    assert len(top) == 10
    assert top[0] == {"symptom": "symptom-0", "count": 20}
    assert top[-1] == {"symptom": "symptom-9", "count": 11}

def test_symptom_patterns_shape(moods, periods):
    """Test the premium symptom section."""
    patterns = analyze_symptom_patterns(moods, periods)

    assert set(patterns) == {"byPhase", "frequency", "mostCommon"}
    assert patterns["frequency"]["headache"] == 1
    assert patterns["mostCommon"][0] == {"symptom": "irritability", "count": 2}

def test_symptom_patterns_empty():
    """Test that no data yields empty tables."""
    assert analyze_symptom_patterns(None, None) == {"byPhase": {}, "frequency": {}, "mostCommon": []}

def test_symptom_correlations_is_by_phase(moods, periods):
    """Test the basic symptom section."""
    assert analyze_symptom_correlations(moods, periods) == symptoms_by_phase(moods, periods)
