from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

    from cronmatch._internal.common.constants import FieldKind


class BaseCronMatchError(Exception):
    pass


class ParseError(BaseCronMatchError, ValueError):
    """Raised when a cron expression or one of its fields is malformed."""

    def __init__(
        self,
        reason: str,
        *,
        expression: str | None = None,
        field: FieldKind | None = None,
    ) -> None:
        self.reason: str = reason
        self.expression: str | None = expression
        self.field: FieldKind | None = field

        msg = reason
        if field is not None:
            msg = f"{msg} for field [{field.value}]"
        if expression is not None:
            msg = f"{msg} in cron expression {expression!r}"
        super().__init__(msg)


class RangeError(ParseError):
    """Raised when a value or interval falls outside the field bounds."""


class UnsupportedModifierError(ParseError):
    """Raised when a modifier is not allowed for the field kind."""


class NoMatchWithinBarrierError(BaseCronMatchError):
    """Raised when no matching time exists before the search barrier."""

    def __init__(
        self,
        expression: str,
        barrier: datetime | None,
        msg: str | None = None,
    ) -> None:
        self.expression: str = expression
        self.barrier: datetime | None = barrier

        if msg is None:
            msg = (
                f"No next execution time for {expression!r} could be "
                f"determined before the limit of {barrier}."
            )
        super().__init__(msg)


class ScheduleExhaustedError(NoMatchWithinBarrierError):
    """Raised when the year field has no value left to advance to."""

    def __init__(self, expression: str, year: int) -> None:
        self.year: int = year
        msg = (
            f"No next execution time exists for {expression!r}: "
            f"the year field has no value at or after {year}."
        )
        super().__init__(expression, None, msg)
