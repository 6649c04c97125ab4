"""
Basic exception classes for Chronoshift.

This module contains fundamental exception classes that are used throughout
the codebase without creating import cycles.
"""

from __future__ import annotations

from enum import Enum


class ErrorSeverity(Enum):
    """Error severity levels for classification and handling."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Categories of errors for appropriate handling strategies."""

    VALIDATION = "validation"
    TIMEZONE = "timezone"
    PERSISTENCE = "persistence"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


class ChronoshiftError(Exception):
    """Base exception class for Chronoshift specific errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        user_message: str | None = None,
        context: object | None = None,
        recoverable: bool = True,
    ) -> None:
        super().__init__(message)
        self.category: ErrorCategory = category
        self.severity: ErrorSeverity = severity
        self.user_message: str = user_message or message
        self.context: object | None = context
        self.recoverable: bool = recoverable


class ValidationError(ChronoshiftError):
    """Input validation errors."""

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        context: object | None = None,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.LOW,
            recoverable=False,
            user_message=user_message,
            context=context,
        )


class ParseError(ValidationError):
    """Raw text did not match any recognized timestamp encoding."""

    NO_MATCH: str = "no-match"
    NO_MATCH_MESSAGE: str = "That doesn't look like a timestamp I recognize 🤔"

    def __init__(self, raw_text: str, reason: str = NO_MATCH) -> None:
        super().__init__(
            f"Unrecognized timestamp input: {raw_text!r}",
            user_message=self.NO_MATCH_MESSAGE,
            context=raw_text,
        )
        self.raw_text: str = raw_text
        self.reason: str = reason


class OffsetResolutionError(ChronoshiftError):
    """The calendar engine could not produce an offset for a zone."""

    def __init__(
        self,
        message: str,
        zone_id: str,
        context: object | None = None,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.TIMEZONE,
            severity=ErrorSeverity.LOW,
            context=context,
            recoverable=True,
        )
        self.zone_id: str = zone_id


class PersistenceError(ChronoshiftError):
    """Timezone list could not be saved to or loaded from storage."""

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        context: object | None = None,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.PERSISTENCE,
            severity=ErrorSeverity.MEDIUM,
            user_message=user_message,
            context=context,
            recoverable=True,
        )


class ConfigurationError(ChronoshiftError):
    """Configuration-related errors."""

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        context: object | None = None,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.HIGH,
            recoverable=False,
            user_message=user_message,
            context=context,
        )
