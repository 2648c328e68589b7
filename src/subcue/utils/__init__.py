"""Utility modules."""

from .logging import setup_logging, get_logger
from .retry import retry_with_backoff, retry_request
from .validation import parse_time_ms, validate_time_ms

__all__ = [
    "setup_logging",
    "get_logger",
    "retry_with_backoff",
    "retry_request",
    "parse_time_ms",
    "validate_time_ms",
]
