"""Error types for lyric-sync.

Provides:
- Custom exception hierarchy with error categories
- Helpers for presenting errors to users

Parse entry points never let these escape for bad input text; they are
raised for caller mistakes (unknown format selector, broken settings file)
and used internally where a recoverable step must be abandoned.
"""

from __future__ import annotations

from enum import Enum


class ErrorCategory(str, Enum):
    """Categories of errors for handling decisions."""

    VALIDATION = "validation"  # Bad input - skip or reject
    CONFIGURATION = "configuration"  # Bad settings - don't retry
    RESOURCE = "resource"  # Missing file - don't retry
    INTERNAL = "internal"  # Bug in code


class LyricSyncError(Exception):
    """Base exception for lyric-sync errors.

    Attributes:
        message: Human-readable error message
        category: Error category for handling
        context: Additional context information
        recoverable: Whether the caller can carry on without the failed step
    """

    category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        context: dict | None = None,
        recoverable: bool = False,
    ):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} (context: {self.context})"
        return self.message


class ValidationError(LyricSyncError):
    """Input validation error.

    Examples: unknown format selector.
    """

    category = ErrorCategory.VALIDATION

    def __init__(self, message: str, context: dict | None = None):
        super().__init__(message, context, recoverable=False)


class UnsupportedFormatError(ValidationError):
    """The requested lyric format is not one the engine understands."""

    def __init__(self, fmt: object, context: dict | None = None):
        super().__init__(
            f"Unsupported lyrics format: {fmt!r}",
            context={"format": str(fmt), **(context or {})},
        )
        self.format = fmt


class PayloadDecodeError(LyricSyncError):
    """The embedded multi-language payload of a KRC file could not be decoded.

    Always recoverable: the primary track is still usable.
    """

    category = ErrorCategory.VALIDATION

    def __init__(self, message: str, context: dict | None = None):
        super().__init__(message, context, recoverable=True)


class ConfigurationError(LyricSyncError):
    """Configuration error.

    Examples: settings file with invalid JSON or out-of-range values.
    """

    category = ErrorCategory.CONFIGURATION

    def __init__(self, message: str, context: dict | None = None):
        super().__init__(message, context, recoverable=False)


class ResourceError(LyricSyncError):
    """Resource not found or unavailable.

    Examples: missing lyric file passed to the CLI.
    """

    category = ErrorCategory.RESOURCE

    def __init__(self, message: str, context: dict | None = None):
        super().__init__(message, context, recoverable=False)


def format_error_for_display(error: Exception) -> str:
    """Format an error message for user display.

    Args:
        error: Error to format

    Returns:
        Human-readable error message
    """
    if isinstance(error, LyricSyncError):
        category = error.category.value
        base_message = error.message

        if error.context:
            context_str = ", ".join(f"{k}={v}" for k, v in error.context.items())
            return f"[{category}] {base_message} ({context_str})"

        return f"[{category}] {base_message}"

    return f"[error] {type(error).__name__}: {error}"
