"""
Core module for Search Aggregator.

Provides:
- Unified exception hierarchy
- Async utilities for provider fan-out
"""

from .exceptions import (
    # Base
    SearchAggregatorError,
    ErrorContext,
    ErrorSeverity,
    ErrorCategory,
    # API errors
    APIError,
    RateLimitError,
    NetworkError,
    ServiceUnavailableError,
    # Validation errors
    ValidationError,
    InvalidQueryError,
    InvalidParameterError,
    # Data errors
    DataError,
    ParseError,
    # Aggregation / configuration errors
    AggregationError,
    ConfigurationError,
)

from .async_utils import (
    gather_with_errors,
    run_isolated,
)

__all__ = [
    # Exceptions
    "SearchAggregatorError",
    "ErrorContext",
    "ErrorSeverity",
    "ErrorCategory",
    "APIError",
    "RateLimitError",
    "NetworkError",
    "ServiceUnavailableError",
    "ValidationError",
    "InvalidQueryError",
    "InvalidParameterError",
    "DataError",
    "ParseError",
    "AggregationError",
    "ConfigurationError",
    # Async utilities
    "gather_with_errors",
    "run_isolated",
]
