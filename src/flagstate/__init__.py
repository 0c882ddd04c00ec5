"""
flagstate - thread-safe bit-flag registers.

    >>> from flagstate import FlagRegister
    >>> register = FlagRegister.create(0b101)
    >>> register.remove_state(0b001)
    >>> str(register)
    'initial=101 current=100'
"""

__version__ = "0.1.0"

from flagstate.core import *  # noqa
from flagstate.core import __all__ as _core_all
from flagstate.register import FlagRegister

__all__ = ["FlagRegister", *_core_all]
