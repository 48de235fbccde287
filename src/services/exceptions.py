"""
Service-level exceptions.

Analytics never raise for sparse data; insufficient data is reported in
the result. These exceptions cover requests that cannot be read at all.
"""

class AnalyticsError(Exception):
    """Base exception for analytics errors."""
    pass

class InvalidAnalyticsRequestError(AnalyticsError):
    """Raised when an analytics request body cannot be parsed."""
    pass
