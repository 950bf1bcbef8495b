"""
Structured error types for termdict.

Every failure the dictionary core can produce is one of a small, typed set
of errors. Each carries a category, an explicit retry flag, structured
context, and the chained underlying exception.

Manifesto:
    - **Typed Error Hierarchy:** Startup failures, per-request failures and
      locally recovered degradations are different types
    - **Explicit Retry Semantics:** Nothing in this package retries on its own
    - **Rich Context:** Errors carry table/term/segment metadata for logging
    - **Error Chaining:** The original sqlite3/engine exception is preserved

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                      TermdictError                           │
        │  (category, retryable, context, cause)                       │
        ├─────────────────────────────────────────────────────────────┤
        │                                                              │
        │  ConfigError        SchemaError        RepositoryError       │
        │  (CONFIG)           (CONFIG, fatal)    (DATABASE)            │
        │       │                                                      │
        │  MissingConfigError                                          │
        │                                                              │
        │  RenderDegradation  PlaybackFailure                          │
        │  (RENDER, local)    (PLAYBACK, local)                        │
        └─────────────────────────────────────────────────────────────┘

    "Not found" is deliberately absent: a missing term is a normal outcome
    (``None`` from the repository, ``NOT_FOUND`` from the ops layer).

Examples:
    >>> err = SchemaError("No user table found in database")
    >>> err.category
    <ErrorCategory.CONFIG: 'CONFIG'>
    >>> err.retryable
    False

    >>> try:
    ...     raise sqlite3.OperationalError("disk I/O error")
    ... except sqlite3.OperationalError as e:
    ...     raise RepositoryError("Failed to fetch words", cause=e)
    Traceback (most recent call last):
    ...
    RepositoryError: Failed to fetch words

Guardrails:
    ❌ DON'T: Raise RepositoryError for a term that does not exist
    ✅ DO: Return None and let the caller map it to a 404

    ❌ DON'T: Let RenderDegradation or PlaybackFailure escape their step
    ✅ DO: Catch them where the segment/entry is processed and move on

Tags:
    error-handling, exception-hierarchy, error-context, termdict
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error categories for classification and HTTP/log routing."""

    DATABASE = "DATABASE"  # Store access, query failures
    CONFIG = "CONFIG"  # Missing settings, unusable schema
    RENDER = "RENDER"  # Math typesetting of a single segment
    PLAYBACK = "PLAYBACK"  # One audio entry could not be played
    INTERNAL = "INTERNAL"  # Bugs, unexpected state


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Attributes:
        table: Bound table name, when the error concerns the store
        column: Column involved, for schema errors
        term: Term being looked up
        segment: Index of the math segment or audio entry involved
        metadata: Any additional key/value pairs
    """

    table: str | None = None
    column: str | None = None
    term: str | None = None
    segment: int | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["table", "column", "term", "segment"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class TermdictError(Exception):
    """
    Base exception for all termdict errors.

    Subclasses set ``default_category`` and ``default_retryable`` so call
    sites only pass a message and, when wrapping, the ``cause``.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> TermdictError:
        """
        Add context to this error (fluent API).

        Usage:
            raise SchemaError("Unknown column").with_context(
                table="terms",
                column="meaning",
            )
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONFIGURATION ERRORS (startup-fatal)
# =============================================================================


class ConfigError(TermdictError):
    """
    Configuration error.

    Never retryable - configuration must be fixed.
    """

    default_category = ErrorCategory.CONFIG


class MissingConfigError(ConfigError):
    """Required configuration (or the file it points to) is missing."""

    def __init__(self, key: str, message: str | None = None):
        self.key = key
        super().__init__(message or f"Missing required configuration: {key}")


class SchemaError(ConfigError):
    """
    No usable schema binding: nothing to infer from, or an invalid override.

    The process must not start serving without a binding.
    """


# =============================================================================
# PER-REQUEST ERRORS
# =============================================================================


class RepositoryError(TermdictError):
    """Underlying store access failed. Never retried automatically."""

    default_category = ErrorCategory.DATABASE


# =============================================================================
# LOCALLY RECOVERED DEGRADATIONS
# =============================================================================


class RenderDegradation(TermdictError):
    """A single math segment could not be typeset; it falls back to raw text."""

    default_category = ErrorCategory.RENDER


class PlaybackFailure(TermdictError):
    """A single audio entry could not be played; playback skips to the next."""

    default_category = ErrorCategory.PLAYBACK


def categorize_error(error: Exception) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, TermdictError):
        return error.category
    return ErrorCategory.INTERNAL


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "TermdictError",
    "ConfigError",
    "MissingConfigError",
    "SchemaError",
    "RepositoryError",
    "RenderDegradation",
    "PlaybackFailure",
    "categorize_error",
]
