"""Tests for the analytics Lambda handlers."""
import json
from dataclasses import dataclass

import pytest

from src.handlers import analytics as analytics_handler
from src.handlers import handler, premium_handler

@dataclass
class LambdaContext:
    function_name: str = "cycle-insights-analytics"
    memory_limit_in_mb: int = 128
    invoked_function_arn: str = "arn:aws:lambda:us-east-1:123456789012:function:cycle-insights-analytics"
    aws_request_id: str = "52fdfc07-2182-154f-163f-5f0f9a621d72"

@pytest.fixture
def lambda_context():
    return LambdaContext()

def make_event(body):
    return {"body": body if body is None or isinstance(body, str) else json.dumps(body)}

@pytest.fixture
def records_body():
    return {
        "periods": [
            {"startDate": "2025-05-04", "endDate": "2025-05-08", "flow": "heavy"},
            {"startDate": "2025-06-01T00:00:00Z"},
            {"startDate": "2025-04-06", "endDate": "2025-04-10"},
            {"startDate": "2025-03-09"},
        ],
        "moods": [
            {
                "date": "2025-06-02",
                "mood": {"level": 6, "emotions": ["calm"]},
                "symptoms": {"physical": ["cramps"], "emotional": []},
                "energy": 5,
                "sleep": {"hours": 7, "quality": 7}
            }
        ],
        "consultations": [{"createdAt": "2025-05-20T10:30:00Z", "status": "completed", "rating": 5}],
        "asOf": "2025-06-15T00:00:00Z"
    }

def test_basic_analytics(records_body, lambda_context):
    """Test a successful basic analytics response."""
    response = handler(make_event(records_body), lambda_context)

    assert response["statusCode"] == 200
    assert response["headers"]["Content-Type"] == "application/json"
    body = json.loads(response["body"])
    assert body["success"] is True
    assert body["analytics"]["cycleHealth"]["status"] == "healthy"
    assert body["analytics"]["cycleHealth"]["averagePeriodLength"] == 5
    assert body["dataRange"] == {
        "startDate": "2024-12-17T00:00:00",
        "endDate": "2025-06-15T00:00:00",
        "periodsCount": 4,
        "moodEntriesCount": 1
    }

def test_premium_analytics(records_body, lambda_context):
    """Test a successful premium analytics response."""
    response = premium_handler(make_event(records_body), lambda_context)

    assert response["statusCode"] == 200
    body = json.loads(response["body"])
    predictions = body["analytics"]["cyclePredictions"]
    assert predictions["available"] is True
    assert [p["predictedStartDate"] for p in predictions["predictions"]] == [
        "2025-06-29T00:00:00",
        "2025-07-27T00:00:00",
        "2025-08-24T00:00:00",
    ]
    assert body["dataRange"]["consultationsCount"] == 1
    assert body["dataRange"]["startDate"] == "2024-06-20T00:00:00"

def test_window_months_from_request(records_body, lambda_context):
    """Test an explicit window in the request body."""
    records_body["months"] = 2

    body = json.loads(handler(make_event(records_body), lambda_context)["body"])

    assert body["dataRange"]["startDate"] == "2025-04-16T00:00:00"

def test_window_months_from_environment(monkeypatch, records_body, lambda_context):
    """Test the configured default window."""
    monkeypatch.setenv("PREMIUM_ANALYTICS_WINDOW_MONTHS", "3")

    body = json.loads(premium_handler(make_event(records_body), lambda_context)["body"])

    assert body["dataRange"]["startDate"] == "2025-03-17T00:00:00"

def test_prediction_count(records_body, lambda_context):
    """Test the requested number of predictions."""
    records_body["predictionCount"] = 1

    body = json.loads(premium_handler(make_event(records_body), lambda_context)["body"])

    assert len(body["analytics"]["cyclePredictions"]["predictions"]) == 1

def test_empty_records(lambda_context):
    """Test that an empty object is a valid request."""
    response = handler(make_event({}), lambda_context)

    assert response["statusCode"] == 200
    body = json.loads(response["body"])
    assert body["analytics"]["healthScore"] == {"score": 100, "factors": [], "level": "excellent"}

def test_missing_body(lambda_context):
    """Test that a request without a body is rejected."""
    response = handler({}, lambda_context)

    assert response["statusCode"] == 400
    assert json.loads(response["body"]) == {"error": "Request body is required"}

def test_invalid_json(lambda_context):
    """Test that a malformed body is rejected."""
    response = handler(make_event("{not json"), lambda_context)

    assert response["statusCode"] == 400
    assert "not valid JSON" in json.loads(response["body"])["error"]

def test_non_object_body(lambda_context):
    """Test that a JSON array is rejected."""
    response = premium_handler(make_event("[]"), lambda_context)

    assert response["statusCode"] == 400
    assert json.loads(response["body"]) == {"error": "Request body must be a JSON object"}

def test_invalid_records(lambda_context):
    """Test that a period ending before it starts is reported."""
    event = make_event({"periods": [{"startDate": "2025-05-10", "endDate": "2025-05-01"}]})

    response = handler(event, lambda_context)

    assert response["statusCode"] == 400
    body = json.loads(response["body"])
    assert body["error"] == "Invalid analytics records"
    assert body["details"][0]["loc"][:2] == ["periods", 0]

def test_out_of_range_mood(lambda_context):
    """Test that a mood level above 10 is reported."""
    event = make_event({"moods": [{"date": "2025-05-10", "mood": {"level": 11}}]})

    response = handler(event, lambda_context)

    assert response["statusCode"] == 400

def test_unexpected_error(monkeypatch, lambda_context):
    """Test that an unexpected failure becomes a 500."""
    def boom(*args, **kwargs):
        raise RuntimeError("analytics unavailable")

    monkeypatch.setattr(analytics_handler, "build_health_analytics", boom)

    response = handler(make_event({}), lambda_context)

    assert response["statusCode"] == 500
    assert json.loads(response["body"]) == {"error": "analytics unavailable"}
