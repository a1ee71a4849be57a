"""Custom exceptions for the cronmatch library.

This module defines the exceptions that parsing and evaluating a cron
expression can raise. Parse-time errors share the ``ParseError`` base (a
``ValueError``), so a configuration layer can reject a bad expression with a
single ``except`` clause, while ``NoMatchWithinBarrierError`` signals that a
valid expression simply has no occurrence inside the search horizon.
"""

from cronmatch._internal.exceptions import (
    BaseCronMatchError,
    NoMatchWithinBarrierError,
    ParseError,
    RangeError,
    ScheduleExhaustedError,
    UnsupportedModifierError,
)

__all__ = (
    "BaseCronMatchError",
    "NoMatchWithinBarrierError",
    "ParseError",
    "RangeError",
    "ScheduleExhaustedError",
    "UnsupportedModifierError",
)
