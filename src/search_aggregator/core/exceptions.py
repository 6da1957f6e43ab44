"""
Unified Exception Hierarchy for Search Aggregator.

Exception Hierarchy:
    SearchAggregatorError (base)
    ├── APIError
    │   ├── RateLimitError
    │   ├── NetworkError
    │   └── ServiceUnavailableError
    ├── ValidationError
    │   ├── InvalidQueryError
    │   └── InvalidParameterError
    ├── DataError
    │   └── ParseError
    ├── AggregationError
    └── ConfigurationError

Provider failures are absorbed inside the source adapters and never reach
the request boundary. Only validation and aggregation errors are surfaced.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class ErrorSeverity(Enum):
    """Severity levels for errors."""
    WARNING = auto()      # Recoverable, can continue
    ERROR = auto()        # Failed for this request
    CRITICAL = auto()     # Cannot continue


class ErrorCategory(Enum):
    """Categories for error classification."""
    API = "api"
    VALIDATION = "validation"
    DATA = "data"
    AGGREGATION = "aggregation"
    CONFIGURATION = "config"


@dataclass(frozen=True, slots=True)
class ErrorContext:
    """Rich context for error messages."""
    operation: str | None = None
    input_value: Any = None
    suggestion: str | None = None
    retry_after: float | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


class SearchAggregatorError(Exception):
    """
    Base exception for all Search Aggregator errors.

    Provides:
    - Structured error context
    - Severity classification
    - JSON-friendly formatting for the HTTP layer
    """

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        category: ErrorCategory = ErrorCategory.API,
    ) -> None:
        super().__init__(message)
        self.context = context or ErrorContext()
        self.severity = severity
        self.category = category

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "error": str(self),
            "category": self.category.value,
            "severity": self.severity.name.lower(),
        }
        if self.context.suggestion:
            result["suggestion"] = self.context.suggestion
        if self.context.retry_after:
            result["retry_after_seconds"] = self.context.retry_after
        return result


# =============================================================================
# API Errors
# =============================================================================

class APIError(SearchAggregatorError):
    """Base class for provider API errors."""

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(
            message,
            context=context,
            severity=ErrorSeverity.WARNING,
            category=ErrorCategory.API,
        )


class RateLimitError(APIError):
    """Raised when a provider rejects the request for rate limiting."""

    def __init__(
        self,
        message: str = "API rate limit exceeded",
        *,
        service: str = "provider",
        retry_after: float | None = None,
    ) -> None:
        super().__init__(
            f"{service}: {message}",
            context=ErrorContext(retry_after=retry_after),
        )
        self.service = service


class NetworkError(APIError):
    """Raised for network connectivity issues."""

    def __init__(
        self,
        message: str = "Network connection failed",
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(message, context=context)


class ServiceUnavailableError(APIError):
    """Raised when the provider answers with a non-success status."""

    def __init__(
        self,
        message: str = "Service temporarily unavailable",
        *,
        service: str = "provider",
        status_code: int | None = None,
    ) -> None:
        super().__init__(
            f"{service}: {message}",
            context=ErrorContext(metadata={"status_code": status_code}),
        )
        self.service = service
        self.status_code = status_code


# =============================================================================
# Validation Errors
# =============================================================================

class ValidationError(SearchAggregatorError):
    """Base class for validation errors."""

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(
            message,
            context=context,
            severity=ErrorSeverity.WARNING,
            category=ErrorCategory.VALIDATION,
        )


class InvalidQueryError(ValidationError):
    """Raised when the search query is missing or blank."""

    def __init__(
        self,
        query: str | None,
        reason: str = 'Query parameter "q" is required',
    ) -> None:
        super().__init__(
            reason,
            context=ErrorContext(
                input_value=query,
                suggestion="Provide a non-empty search query, e.g. /search?q=python",
            ),
        )
        self.query = query


class InvalidParameterError(ValidationError):
    """Raised when a parameter value is invalid."""

    def __init__(self, param_name: str, value: Any, expected: str) -> None:
        super().__init__(
            f"Invalid parameter '{param_name}': {value!r} (expected {expected})",
            context=ErrorContext(input_value=value, suggestion=f"Expected {expected}"),
        )
        self.param_name = param_name


# =============================================================================
# Data Errors
# =============================================================================

class DataError(SearchAggregatorError):
    """Base class for data-related errors."""

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(
            message,
            context=context,
            severity=ErrorSeverity.ERROR,
            category=ErrorCategory.DATA,
        )


class ParseError(DataError):
    """Raised when a provider payload cannot be decoded."""

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
    ) -> None:
        full_msg = f"Parse error: {message}"
        if source:
            full_msg = f"Parse error ({source}): {message}"
        super().__init__(full_msg)


# =============================================================================
# Aggregation / Configuration Errors
# =============================================================================

class AggregationError(SearchAggregatorError):
    """
    Raised when a failure escapes every adapter isolation boundary.

    Carries a generic message for the caller plus the underlying detail.
    """

    def __init__(
        self,
        message: str = "An error occurred while searching",
        *,
        details: str = "Unknown error",
    ) -> None:
        super().__init__(
            message,
            context=ErrorContext(operation="aggregate"),
            severity=ErrorSeverity.CRITICAL,
            category=ErrorCategory.AGGREGATION,
        )
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        return {"error": str(self), "details": self.details}


class ConfigurationError(SearchAggregatorError):
    """Raised for configuration-related errors."""

    def __init__(self, message: str) -> None:
        super().__init__(
            message,
            severity=ErrorSeverity.CRITICAL,
            category=ErrorCategory.CONFIGURATION,
        )
