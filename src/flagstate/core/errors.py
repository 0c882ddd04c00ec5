"""Structured error hierarchy for flagstate.

Every error raised by the package extends ``FlagStateError`` so callers can
catch one type and still get consistent metadata for logging.

Manifesto:
    A bit register is a total function over integers, so the register itself
    never raises. Errors exist for the layers around it:

    - **Validation:** ``validate_mask`` rejects masks outside a vocabulary
    - **Configuration:** bad ``FLAGSTATE_*`` environment values
    - **Lock misuse:** releasing a read-write lock that is not held

Architecture:
    ::

        FlagStateError                 category=INTERNAL
        ├── ValidationError            category=VALIDATION
        │   └── InvalidFlagError       mask outside width / vocabulary
        ├── ConfigError                category=CONFIG
        └── LockStateError             unbalanced release

Examples:
    >>> error = InvalidFlagError("bit 40 outside 32-bit width", mask=1 << 40)
    >>> error.category
    <ErrorCategory.VALIDATION: 'VALIDATION'>
    >>> error.to_dict()["error_type"]
    'InvalidFlagError'

Tags:
    exception, error-hierarchy, error-context, flagstate
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error categories used for classification and log routing."""

    VALIDATION = "VALIDATION"
    CONFIG = "CONFIG"
    CONCURRENCY = "CONCURRENCY"
    INTERNAL = "INTERNAL"


@dataclass
class ErrorContext:
    """Structured metadata attached to an error.

    Attributes:
        register: ``repr`` of the register involved, if any
        flag_type: Name of the flag vocabulary involved, if any
        metadata: Additional key-value pairs
    """

    register: str | None = None
    flag_type: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result: dict[str, Any] = {}
        for key in ["register", "flag_type"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class FlagStateError(Exception):
    """Base exception for all flagstate errors.

    Carries a category, an ``ErrorContext`` and an optional cause. Subclasses
    set ``default_category``.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> FlagStateError:
        """Add context to this error (fluent API).

        Usage:
            raise InvalidFlagError("bad mask", mask=m).with_context(flag_type="Door")
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
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
# VALIDATION ERRORS
# =============================================================================


class ValidationError(FlagStateError):
    """Input validation error."""

    default_category = ErrorCategory.VALIDATION


class InvalidFlagError(ValidationError):
    """A mask sets bits outside the agreed width or flag vocabulary."""

    def __init__(self, message: str, *, mask: int, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.mask = mask

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["mask"] = self.mask
        return result


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(FlagStateError):
    """Invalid ``FLAGSTATE_*`` configuration."""

    default_category = ErrorCategory.CONFIG


# =============================================================================
# CONCURRENCY ERRORS
# =============================================================================


class LockStateError(FlagStateError):
    """A read-write lock was released by a caller that does not hold it."""

    default_category = ErrorCategory.CONCURRENCY


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "FlagStateError",
    "ValidationError",
    "InvalidFlagError",
    "ConfigError",
    "LockStateError",
]
