"""
Lambda handlers package for AWS Lambda functions.
"""
from .analytics import handler, premium_handler

__all__ = ["handler", "premium_handler"]
