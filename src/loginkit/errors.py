"""
Error taxonomy for LoginKit.

This module provides the error codes and the custom exception hierarchy used
for consistent error reporting throughout the login component.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .validation.result import ValidationErrorKind, ValidationFailure

logger = logging.getLogger(__name__)


class ErrorType(Enum):
    """Error type categories for consistent error handling."""

    VALIDATION = "validation"
    CONFIG = "config"
    SYSTEM = "system"


class ErrorCode(Enum):
    """Specific error codes for common scenarios."""

    # Validation errors
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_FORMAT = "INVALID_FORMAT"
    VALUE_OUT_OF_RANGE = "VALUE_OUT_OF_RANGE"

    # Configuration errors
    CONFIG_INVALID = "CONFIG_INVALID"

    # System errors
    OS_ERROR = "OS_ERROR"

    # Generic
    UNKNOWN = "UNKNOWN"


class ErrorSeverity(Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass
class BaseAppError(Exception):
    """
    Base application error with structured metadata.

    Root of all LoginKit errors, carrying enough information for
    logging and for user-facing feedback.
    """

    type: ErrorType
    code: ErrorCode
    user_message: str
    technical_message: str | None = None
    severity: ErrorSeverity = ErrorSeverity.MEDIUM
    retriable: bool = False
    context: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        """Return user-friendly error message."""
        return self.user_message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(type={self.type.value}, code={self.code.value}, message='{self.user_message}')"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "type": self.type.value,
            "code": self.code.value,
            "user_message": self.user_message,
            "technical_message": self.technical_message,
            "severity": self.severity.value,
            "retriable": self.retriable,
            "context": self.context,
        }


class ValidationError(BaseAppError):
    """Form field validation errors."""

    def __init__(
        self,
        code: ErrorCode,
        user_message: str,
        field: str | None = None,
        technical_message: str | None = None,
        severity: ErrorSeverity = ErrorSeverity.LOW,
        context: dict[str, Any] | None = None,
    ):
        context = context or {}
        if field:
            context["field"] = field

        super().__init__(
            type=ErrorType.VALIDATION,
            code=code,
            user_message=user_message,
            technical_message=technical_message,
            severity=severity,
            retriable=True,
            context=context,
        )

    @property
    def field(self) -> str | None:
        """Get the field that caused the validation error."""
        return self.context.get("field")


class ConfigError(BaseAppError):
    """Configuration related errors."""

    def __init__(
        self,
        code: ErrorCode,
        user_message: str,
        technical_message: str | None = None,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(
            type=ErrorType.CONFIG,
            code=code,
            user_message=user_message,
            technical_message=technical_message,
            severity=severity,
            context=context or {},
        )


class SystemError(BaseAppError):
    """System level errors."""

    def __init__(
        self,
        code: ErrorCode,
        user_message: str,
        technical_message: str | None = None,
        severity: ErrorSeverity = ErrorSeverity.HIGH,
        retriable: bool = False,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(
            type=ErrorType.SYSTEM,
            code=code,
            user_message=user_message,
            technical_message=technical_message,
            severity=severity,
            retriable=retriable,
            context=context or {},
        )


_EXCEPTION_MAPPING: dict[type[Exception], tuple[ErrorType, ErrorCode, str]] = {
    OSError: (ErrorType.SYSTEM, ErrorCode.OS_ERROR, "System error occurred"),
    ValueError: (ErrorType.VALIDATION, ErrorCode.INVALID_INPUT, "Invalid input provided"),
}


def map_exception(exc: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
    """
    Map a built-in exception to a custom application error.

    Subclasses map like their base, so FileNotFoundError becomes an OS_ERROR.

    Args:
        exc: The exception to map
        context: Optional context information

    Returns:
        BaseAppError instance with appropriate type and metadata
    """
    if isinstance(exc, BaseAppError):
        return exc

    context = context or {}
    technical_message = f"{type(exc).__name__}: {exc}"

    for base, (error_type, error_code, default_message) in _EXCEPTION_MAPPING.items():
        if not isinstance(exc, base):
            continue
        error_class = ValidationError if error_type == ErrorType.VALIDATION else SystemError
        return error_class(
            code=error_code,
            user_message=str(exc) or default_message,
            technical_message=technical_message,
            context=context,
        )

    logger.warning(f"Unmapped exception: {technical_message}")
    return SystemError(
        code=ErrorCode.UNKNOWN,
        user_message="An unexpected error occurred",
        technical_message=technical_message,
        context=context,
    )


def create_validation_error(field: str, failure: ValidationFailure) -> ValidationError:
    """
    Create a ValidationError describing a failed field rule, for logging.

    The field value is never attached to the error.

    Args:
        field: Key of the field that failed validation
        failure: The failing rule's descriptor

    Returns:
        ValidationError instance
    """
    code = {
        ValidationErrorKind.INVALID_PATTERN: ErrorCode.INVALID_FORMAT,
        ValidationErrorKind.INSUFFICIENT_LENGTH: ErrorCode.VALUE_OUT_OF_RANGE,
    }.get(failure.kind, ErrorCode.INVALID_INPUT)

    return ValidationError(
        code=code,
        user_message=failure.message,
        field=field,
        technical_message=f"Validation failed for field '{field}': {failure.kind.value}",
    )
