"""Thread-safe bit-flag register.

A ``FlagRegister`` tracks a combination of independent boolean conditions as
one integer bitmask, plus the mask it was created with so it can be restored
later. Any number of threads may share a register.

Semantics:
    add_state(f)      current |= f
    remove_state(f)   current &= ~f
    reset_state()     current = initial
    clear_state()     current = initial = 0   (the restore point is erased too,
                                               so a later reset stays at zero)

Locking:
    One ``ReadWriteLock`` per register. Mutations take it exclusively, queries
    take it shared, and every operation computes its answer under a single
    acquisition. Diffing or comparing against another register reads the
    other register's mask through its own lock first and only then takes this
    register's lock, so no thread ever holds two register locks at once. The
    result is consistent for each register but not atomic across both.

Example:
    >>> from flagstate import FlagRegister, StateFlag
    >>> class Door(StateFlag):
    ...     NONE = 0
    ...     OPEN = 1
    ...     LOCKED = 2
    >>> door = FlagRegister.create(Door.LOCKED, flag_type=Door)
    >>> door.add_state(Door.OPEN)
    >>> door.has_state(Door.OPEN | Door.LOCKED)
    True
    >>> door.clear_state()
    >>> door.reset_state()
    >>> door.current_state
    <Door.NONE: 0>
"""

from __future__ import annotations

import enum
from typing import Any

from flagstate.core.flags import to_binary
from flagstate.core.logging import get_logger
from flagstate.core.rwlock import ReadWriteLock

logger = get_logger(__name__)


class FlagRegister:
    """Bitmask of independent flags guarded by a read-write lock.

    Args:
        initial: Mask recorded as the restore point and used as the starting
            value of the register
        flag_type: Optional ``IntFlag`` vocabulary. Mask-valued results are
            returned as members of this type. Inputs are never validated;
            see ``flagstate.core.flags.validate_mask``.
    """

    def __init__(self, initial: int = 0, *, flag_type: type[enum.IntFlag] | None = None):
        self._lock = ReadWriteLock()
        self._initial = int(initial)
        self._current = self._initial
        self.flag_type = flag_type

    @classmethod
    def create(
        cls, initial: int = 0, *, flag_type: type[enum.IntFlag] | None = None
    ) -> FlagRegister:
        """Create a register whose current and initial masks are ``initial``."""
        return cls(initial, flag_type=flag_type)

    def _as_flags(self, value: int) -> Any:
        if self.flag_type is None:
            return value
        return self.flag_type(value)

    # ------------------------------------------------------------------
    # Mutations (exclusive)
    # ------------------------------------------------------------------

    def add_state(self, flag: int) -> None:
        """Set every bit of ``flag``."""
        with self._lock.write():
            self._current |= int(flag)
            current = self._current
        logger.debug("flags_added", flag=int(flag), current=current)

    def remove_state(self, flag: int) -> None:
        """Clear every bit of ``flag``."""
        with self._lock.write():
            self._current &= ~int(flag)
            current = self._current
        logger.debug("flags_removed", flag=int(flag), current=current)

    def clear_state(self) -> None:
        """Zero the current mask and the remembered initial mask.

        After this, ``reset_state()`` restores to zero rather than to the mask
        the register was created with.
        """
        with self._lock.write():
            self._current = self._initial = 0
        logger.debug("flags_cleared")

    def reset_state(self) -> None:
        """Restore the current mask to the remembered initial mask."""
        with self._lock.write():
            self._current = self._initial
            current = self._current
        logger.debug("flags_reset", current=current)

    # ------------------------------------------------------------------
    # Queries (shared)
    # ------------------------------------------------------------------

    def has_state(self, mask: int) -> bool:
        """True if every bit of ``mask`` is set. An empty mask is always held."""
        mask = int(mask)
        with self._lock.read():
            return self._current & mask == mask

    def get_state(self, mask: int) -> Any:
        """The bits of ``mask`` that are currently set."""
        with self._lock.read():
            value = self._current & int(mask)
        return self._as_flags(value)

    def get_state_with_binary(self, mask: int) -> str:
        """``get_state(mask)`` rendered as binary digits, e.g. ``'101'``."""
        with self._lock.read():
            value = self._current & int(mask)
        return to_binary(value)

    def get_diff_state(self, other: FlagRegister | int) -> Any:
        """Bits that differ between this register and ``other``.

        ``other`` is another register (its current mask is used) or a raw mask.
        """
        other_mask = _mask_of(other)
        with self._lock.read():
            value = self._current ^ other_mask
        return self._as_flags(value)

    def compare_state(self, other: FlagRegister | int) -> bool:
        """True if this register's current mask equals ``other``'s."""
        other_mask = _mask_of(other)
        with self._lock.read():
            return self._current == other_mask

    def get_current_state(self) -> Any:
        """The current mask, read under the shared lock."""
        with self._lock.read():
            value = self._current
        return self._as_flags(value)

    @property
    def current_state(self) -> Any:
        return self.get_current_state()

    @property
    def initial_state(self) -> Any:
        """The mask ``reset_state()`` restores to."""
        with self._lock.read():
            value = self._initial
        return self._as_flags(value)

    def snapshot(self) -> tuple[Any, Any]:
        """``(initial, current)`` observed together under one acquisition."""
        with self._lock.read():
            initial, current = self._initial, self._current
        return self._as_flags(initial), self._as_flags(current)

    def __str__(self) -> str:
        with self._lock.read():
            initial, current = self._initial, self._current
        return f"initial={to_binary(initial)} current={to_binary(current)}"

    def __repr__(self) -> str:
        with self._lock.read():
            initial, current = self._initial, self._current
        kind = f", flag_type={self.flag_type.__name__}" if self.flag_type else ""
        return (
            f"{self.__class__.__name__}(initial=0b{to_binary(initial)}, "
            f"current=0b{to_binary(current)}{kind})"
        )


def _mask_of(other: FlagRegister | int) -> int:
    if isinstance(other, FlagRegister):
        return int(other.get_current_state())
    return int(other)


__all__ = ["FlagRegister"]
