"""
Error types for the Based Dropouts site.

API clients translate transport and decoding failures into these
exceptions; the stats pipeline catches them at each source boundary and
substitutes fallback values.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Error codes for the stats pipeline."""

    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NETWORK_FAILURE = "NETWORK_FAILURE"
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"
    EMPTY_RESULT = "EMPTY_RESULT"


class StatsError(Exception):
    """Base exception for all stats pipeline errors."""

    code: ErrorCode = ErrorCode.UNKNOWN_ERROR

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize a new stats error.

        Args:
            message: Error message
            details: Additional error details (source, url, ...)
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"


class NetworkFailureError(StatsError):
    """Transport error, timeout or HTTP error status from an upstream API."""

    code = ErrorCode.NETWORK_FAILURE


class MalformedResponseError(StatsError):
    """Upstream response is not JSON or does not have the expected shape."""

    code = ErrorCode.MALFORMED_RESPONSE


class EmptyResultError(StatsError):
    """Upstream response is valid but carries no usable data."""

    code = ErrorCode.EMPTY_RESULT
