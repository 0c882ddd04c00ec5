"""Flag vocabularies and mask helpers.

Applications name their flags with an ``enum.IntFlag`` subclass, usually of
``StateFlag``. Members are plain ``int`` values, combine with ``|``, and can
be passed anywhere a register expects a mask.

Validation is deliberately kept out of the register: a register accepts any
integer. Callers that want to reject masks outside their vocabulary layer
``validate_mask`` in front of it.

Examples:
    >>> from flagstate.core.flags import StateFlag, validate_mask
    >>> class Door(StateFlag):
    ...     NONE = 0
    ...     OPEN = 1 << 0
    ...     LOCKED = 1 << 1
    ...     ALARMED = 1 << 2
    >>> (Door.OPEN | Door.ALARMED).binary
    '101'
    >>> Door.all_flags() == Door.OPEN | Door.LOCKED | Door.ALARMED
    True
    >>> validate_mask(1 << 3, flag_type=Door)
    Traceback (most recent call last):
    ...
    flagstate.core.errors.InvalidFlagError: mask 1000 sets bits outside Door: 1000

Tags:
    flags, bitmask, intflag, validation, flagstate
"""

from __future__ import annotations

import enum
import functools
import operator

from flagstate.core.errors import InvalidFlagError


def to_binary(mask: int) -> str:
    """Render ``mask`` as unsigned binary digits without prefix or padding.

    A negative mask is rendered as its two's complement in
    ``FLAGSTATE_FLAG_WIDTH`` bits, widened when the value needs more, so
    ``to_binary(-1)`` is thirty-two ``1`` digits by default.
    """
    value = int(mask)
    if value < 0:
        from flagstate.core.settings import get_settings

        width = max(get_settings().flag_width, value.bit_length() + 1)
        value &= (1 << width) - 1
    return format(value, "b")


def full_mask(flag_type: type[enum.IntFlag]) -> int:
    """OR of every canonical member of ``flag_type``."""
    return int(functools.reduce(operator.or_, flag_type, flag_type(0)))


class StateFlag(enum.IntFlag):
    """Base class for flag vocabularies.

    Declare members as distinct powers of two. ``NONE = 0`` is the
    conventional name for the empty combination.
    """

    @property
    def binary(self) -> str:
        """Binary rendering of this combination."""
        return to_binary(self)

    @classmethod
    def all_flags(cls):
        """Combination with every declared flag set."""
        return cls(full_mask(cls))


def validate_mask(
    mask: int,
    *,
    flag_type: type[enum.IntFlag] | None = None,
    width: int | None = None,
) -> int:
    """Check that ``mask`` fits the caller's flag domain.

    Args:
        mask: Mask to check
        flag_type: Vocabulary whose members are the only legal bits
        width: Register width in bits (defaults to ``FLAGSTATE_FLAG_WIDTH``)

    Returns:
        ``mask`` as a plain ``int``

    Raises:
        InvalidFlagError: If the mask is negative, exceeds ``width``, or sets
            a bit not declared by ``flag_type``
    """
    value = int(mask)
    if value < 0:
        raise InvalidFlagError(f"mask {value} is negative", mask=value)

    if width is None:
        from flagstate.core.settings import get_settings

        width = get_settings().flag_width
    if value >> width:
        raise InvalidFlagError(
            f"mask {to_binary(value)} exceeds {width}-bit width", mask=value
        )

    if flag_type is not None:
        undeclared = value & ~full_mask(flag_type)
        if undeclared:
            raise InvalidFlagError(
                f"mask {to_binary(value)} sets bits outside {flag_type.__name__}: "
                f"{to_binary(undeclared)}",
                mask=value,
            ).with_context(flag_type=flag_type.__name__)
    return value


__all__ = ["StateFlag", "full_mask", "to_binary", "validate_mask"]
