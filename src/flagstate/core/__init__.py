"""flagstate core -- primitives shared by the register.

Architecture::

    errors.py      Structured error hierarchy (FlagStateError and subclasses)
    logging.py     structlog configuration and logger factory
    settings.py    FLAGSTATE_* environment settings (pydantic-settings)
    flags.py       StateFlag vocabularies, binary rendering, mask validation
    rwlock.py      Writer-preferring read-write lock
"""

from flagstate.core.errors import (
    ConfigError,
    ErrorCategory,
    ErrorContext,
    FlagStateError,
    InvalidFlagError,
    LockStateError,
    ValidationError,
)
from flagstate.core.flags import StateFlag, full_mask, to_binary, validate_mask
from flagstate.core.rwlock import ReadWriteLock

__all__ = [
    "ConfigError",
    "ErrorCategory",
    "ErrorContext",
    "FlagStateError",
    "InvalidFlagError",
    "LockStateError",
    "ValidationError",
    "StateFlag",
    "full_mask",
    "to_binary",
    "validate_mask",
    "ReadWriteLock",
]
