"""Placekit Error Handling Module

This module defines the error handling system for placekit, providing
structured error classes with context information.

The error hierarchy follows these principles:
- One Source of Truth: All error codes are defined in ErrorCode enum
- Structured Context: ErrorContext provides additional information
- Proper Exception Chaining: Original exceptions are preserved
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Union

# Type alias for primitive context values (str, int, float, bool only)
PrimitiveContextValue = Union[str, int, float, bool]

# Default keys to mask in safe_dict
SAFE_DICT_MASK_KEYS: tuple[str, ...] = ("api_key",)


class ErrorCode(str, Enum):
    """Error codes for placekit.

    This enum serves as the single source of truth for all error codes
    used throughout the package.
    """

    # Identifier Errors
    INVALID_PLACEKEY = "INVALID_PLACEKEY"
    INVALID_COORDINATES = "INVALID_COORDINATES"
    INVALID_GEOMETRY = "INVALID_GEOMETRY"

    # Validation Errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_QUERY_PARAMETERS = "INVALID_QUERY_PARAMETERS"
    INVALID_METADATA_PARAMETERS = "INVALID_METADATA_PARAMETERS"
    INSUFFICIENT_INPUTS = "INSUFFICIENT_INPUTS"
    BATCH_TOO_LARGE = "BATCH_TOO_LARGE"

    # Network and API Errors
    NETWORK_ERROR = "NETWORK_ERROR"
    API_RATE_LIMIT = "API_RATE_LIMIT"
    API_REQUEST_FAILED = "API_REQUEST_FAILED"
    API_INVALID_RESPONSE = "API_INVALID_RESPONSE"

    # Configuration Errors
    CONFIG_ERROR = "CONFIG_ERROR"
    CONFIG_MISSING = "CONFIG_MISSING"

    # CLI Errors
    CLI_UNEXPECTED_ERROR = "CLI_UNEXPECTED_ERROR"


def _coerce_primitives(value: Any | None) -> dict[str, PrimitiveContextValue] | None:
    """Coerce additional_data values to primitives.

    Converts Path, Enum, Decimal to primitive types.

    Args:
        value: Input dictionary or None

    Returns:
        Dictionary with primitive values only, or None

    Raises:
        TypeError: If value is not a dict or contains unconvertible types
    """
    if value is None:
        return None

    if not isinstance(value, dict):
        error_msg = f"additional_data must be dict, got {type(value).__name__}"
        raise TypeError(error_msg)

    coerced: dict[str, PrimitiveContextValue] = {}
    for key, val in value.items():
        if isinstance(val, (str, int, float, bool)):
            coerced[key] = val
        elif isinstance(val, Path):
            coerced[key] = str(val)
        elif isinstance(val, Enum):
            coerced[key] = val.value
        elif isinstance(val, Decimal):
            coerced[key] = float(val)
        else:
            error_msg = (
                f"Cannot coerce {type(val).__name__} to primitive type. "
                f"Only str, int, float, bool, Path, Enum, Decimal are allowed."
            )
            raise TypeError(error_msg)

    return coerced


@dataclass(frozen=True)
class ErrorContext:
    """Context information for errors.

    Only primitive types (str, int, float, bool) are allowed in
    additional_data so that contexts can always be serialized into logs.

    Attributes:
        operation: Optional operation name that caused the error
        placekey: Optional identifier involved in the failure
        additional_data: Optional dict with primitive values only
    """

    operation: str | None = None
    placekey: str | None = None
    additional_data: dict[str, PrimitiveContextValue] | None = None

    def __post_init__(self) -> None:
        if self.additional_data is not None:
            coerced = _coerce_primitives(self.additional_data)
            object.__setattr__(self, "additional_data", coerced)

    def safe_dict(self, *, mask_keys: tuple[str, ...] | None = None) -> dict[str, Any]:
        """Export context as dict with sensitive keys removed.

        Args:
            mask_keys: Keys to drop from additional_data. Defaults to SAFE_DICT_MASK_KEYS.

        Returns:
            Dictionary with a guaranteed additional_data key.

        Example:
            >>> ErrorContext(operation="lookup", additional_data={"api_key": "x"}).safe_dict()
            {'operation': 'lookup', 'additional_data': {}}
        """
        if mask_keys is None:
            mask_keys = SAFE_DICT_MASK_KEYS

        data: dict[str, Any] = {}
        if self.operation is not None:
            data["operation"] = self.operation
        if self.placekey is not None:
            data["placekey"] = self.placekey

        data["additional_data"] = {
            key: val for key, val in (self.additional_data or {}).items() if key not in mask_keys
        }
        return data


class PlacekitError(Exception):
    """Base exception class for all placekit errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize PlacekitError.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            context: Additional context information
            original_error: Original exception that caused this error
        """
        self.code = code
        self.message = message
        self.context = context or ErrorContext()
        self.original_error = original_error

        super().__init__(f"{code.value}: {message}")

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging.

        Returns:
            Dictionary representation of the error with code, message,
            masked context, and original_error (if present)
        """
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": str(self.original_error) if self.original_error else None,
        }


class DomainError(PlacekitError):
    """Domain-specific errors.

    These errors occur when identifier, geometry or query rules are violated.

    Examples:
    - Identifier with characters outside the alphabet
    - Query with unknown parameter names
    """


class InfrastructureError(PlacekitError):
    """Infrastructure-related errors.

    These errors occur when interacting with the remote resolution service.

    Examples:
    - Network connection failures
    - Non-2xx API responses
    - Rate limiting
    """


class ApplicationError(PlacekitError):
    """Application-level errors.

    Examples:
    - Missing API key
    - Invalid limiter or cache configuration
    """


class FormatError(DomainError):
    """An identifier failed structural or semantic decoding."""


class ArgumentError(DomainError, ValueError):
    """Invalid arguments supplied by the caller.

    Raised immediately for unknown query keys, insufficient inputs and
    oversized batch requests. Subclasses ValueError so plain callers can
    catch it without importing placekit types.
    """


class ApiError(InfrastructureError):
    """Non-2xx, non-429 response from the remote resolution API."""

    def __init__(
        self,
        status_code: int,
        body: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(
            ErrorCode.API_REQUEST_FAILED,
            f"API request failed with status {status_code}: {body}",
            context,
            original_error,
        )


class RateLimitExceededError(InfrastructureError):
    """The remote service answered 429 and the retry budget is exhausted."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(ErrorCode.API_RATE_LIMIT, message, context, original_error)


class TransportError(InfrastructureError):
    """Connection, timeout or other transport level failure."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(ErrorCode.NETWORK_ERROR, message, context, original_error)


# Convenience functions for common error scenarios
def create_format_error(
    message: str,
    placekey: str | None = None,
    operation: str | None = None,
    original_error: Exception | None = None,
) -> FormatError:
    """Create an identifier format error with context."""
    context = ErrorContext(
        operation=operation,
        placekey=placekey,
    )
    return FormatError(
        ErrorCode.INVALID_PLACEKEY,
        message,
        context,
        original_error,
    )


def create_argument_error(
    message: str,
    code: ErrorCode = ErrorCode.VALIDATION_ERROR,
    field: str | None = None,
    operation: str | None = None,
) -> ArgumentError:
    """Create an argument error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"field": field} if field else None
    )
    context = ErrorContext(
        operation=operation,
        additional_data=additional_data,
    )
    return ArgumentError(code, message, context)


def create_config_error(
    message: str,
    config_key: str | None = None,
    operation: str | None = None,
    original_error: Exception | None = None,
) -> ApplicationError:
    """Create a configuration error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"config_key": config_key} if config_key else None
    )
    context = ErrorContext(
        operation=operation,
        additional_data=additional_data,
    )
    return ApplicationError(
        ErrorCode.CONFIG_ERROR,
        message,
        context,
        original_error,
    )
