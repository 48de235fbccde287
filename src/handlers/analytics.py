"""
Lambda handlers for health analytics.

The storage layer posts the user's already-fetched records for the
requested window; these handlers validate them and return the analytics
payload. Authorization and persistence happen upstream.
"""
from typing import Any, Callable, Dict
from datetime import datetime, timezone
import json
import os

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from src.models.analytics import AnalyticsRequest
from src.services.analytics import build_health_analytics, build_premium_analytics
from src.services.constants import DEFAULT_PREMIUM_WINDOW_MONTHS, DEFAULT_WINDOW_MONTHS
from src.services.exceptions import InvalidAnalyticsRequestError
from src.utils.logging import logger

tracer = Tracer()

def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Object of type {value.__class__.__name__} is not JSON serializable")

def _response(status_code: int, body: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body, default=_json_default)
    }

def parse_analytics_request(event: Dict[str, Any]) -> AnalyticsRequest:
    """
    Read and validate the analytics request body.

    Args:
        event: API Gateway Lambda proxy event

    Returns:
        Validated AnalyticsRequest

    Raises:
        InvalidAnalyticsRequestError: If the body is missing or not JSON
        ValidationError: If the records fail validation
    """
    body = event.get("body")
    if body is None:
        raise InvalidAnalyticsRequestError("Request body is required")

    if isinstance(body, str):
        try:
            body = json.loads(body)
        except json.JSONDecodeError as e:
            raise InvalidAnalyticsRequestError(f"Request body is not valid JSON: {e.msg}") from e

    if not isinstance(body, dict):
        raise InvalidAnalyticsRequestError("Request body must be a JSON object")

    return AnalyticsRequest.model_validate(body)

def _current_instant() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)

def _window_months(request: AnalyticsRequest, env_var: str, default: int) -> int:
    if request.months is not None:
        return request.months
    return int(os.environ.get(env_var, default))

def _handle(event: Dict[str, Any], build: Callable[[AnalyticsRequest], Dict[str, Any]]) -> Dict[str, Any]:
    try:
        request = parse_analytics_request(event)
    except InvalidAnalyticsRequestError as e:
        logger.warning("Invalid analytics request", extra={"error": str(e)})
        return _response(400, {"error": str(e)})
    except ValidationError as e:
        logger.warning("Analytics request failed validation", extra={
            "error_count": e.error_count()
        })
        return _response(400, {
            "error": "Invalid analytics records",
            "details": json.loads(e.json(include_url=False))
        })

    try:
        payload = build(request)
        return _response(200, {"success": True, **payload})
    except Exception as e:
        logger.exception("Error generating analytics", extra={
            "error_type": e.__class__.__name__
        })
        return _response(500, {"error": str(e)})

def _build_basic(request: AnalyticsRequest) -> Dict[str, Any]:
    return build_health_analytics(
        request.periods,
        request.moods,
        as_of=request.as_of or _current_instant(),
        months=_window_months(request, "ANALYTICS_WINDOW_MONTHS", DEFAULT_WINDOW_MONTHS)
    )

def _build_premium(request: AnalyticsRequest) -> Dict[str, Any]:
    return build_premium_analytics(
        request.periods,
        request.moods,
        request.consultations,
        as_of=request.as_of or _current_instant(),
        months=_window_months(request, "PREMIUM_ANALYTICS_WINDOW_MONTHS", DEFAULT_PREMIUM_WINDOW_MONTHS),
        prediction_count=request.prediction_count
    )

@logger.inject_lambda_context
@tracer.capture_lambda_handler
def handler(event: Dict, context: LambdaContext) -> Dict:
    """
    Handle a basic analytics request.

    Args:
        event: API Gateway Lambda proxy event
        context: Lambda context

    Returns:
        API Gateway Lambda proxy response
    """
    return _handle(event, _build_basic)

@logger.inject_lambda_context
@tracer.capture_lambda_handler
def premium_handler(event: Dict, context: LambdaContext) -> Dict:
    """
    Handle a premium analytics request.

    Args:
        event: API Gateway Lambda proxy event
        context: Lambda context

    Returns:
        API Gateway Lambda proxy response
    """
    return _handle(event, _build_premium)
