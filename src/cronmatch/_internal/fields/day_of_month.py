from __future__ import annotations

from datetime import date, timedelta
from typing import TYPE_CHECKING

from typing_extensions import override

from cronmatch._internal.common.constants import FieldKind, Modifier
from cronmatch._internal.fields.calendar_field import (
    CalendarFieldMatcher,
    days_in_month,
    first_in_month_after,
    last_day_of_month,
)
from cronmatch._internal.fields.spec import field_spec

if TYPE_CHECKING:
    from cronmatch._internal.fields.part import FieldPart

_FRIDAY = 5
_SATURDAY = 6
_SUNDAY = 7


def last_day_with_offset(month_start: date, offset: int) -> date | None:
    last = days_in_month(month_start.year, month_start.month)
    if offset >= last:
        return None
    return month_start.replace(day=last - offset)


def last_weekday(month_start: date) -> date:
    last = last_day_of_month(month_start)
    return last - timedelta(days=max(0, last.isoweekday() - _FRIDAY))


def nearest_weekday(month_start: date, day_of_month: int) -> date | None:
    """Return the weekday closest to ``day_of_month``, staying in the month.

    A Saturday moves back to Friday and a Sunday forward to Monday, unless
    that would leave the month: Saturday the 1st gives Monday the 3rd and
    a Sunday on the last day gives the Friday before it. Months that are
    too short for ``day_of_month`` have no nearest weekday.
    """
    last = days_in_month(month_start.year, month_start.month)
    if day_of_month > last:
        return None
    target = month_start.replace(day=day_of_month)
    weekday = target.isoweekday()
    if weekday == _SATURDAY:
        shift = -1 if day_of_month > 1 else 2
    elif weekday == _SUNDAY:
        shift = 1 if day_of_month < last else -2
    else:
        shift = 0
    return target + timedelta(days=shift)


class DayOfMonthMatcher(CalendarFieldMatcher):
    __slots__: tuple[str, ...] = ()

    def __init__(self, text: str) -> None:
        super().__init__(field_spec(FieldKind.DAY_OF_MONTH), text)

    @override
    def _component(self, day: date) -> int:
        return day.day

    @override
    def _modifier_matches(self, part: FieldPart, day: date) -> bool:
        return day == self._occurrence(part, day.replace(day=1))

    @override
    def _modifier_next_date(self, part: FieldPart, day: date) -> date:
        return first_in_month_after(
            day,
            lambda month_start: self._occurrence(part, month_start),
        )

    @override
    def _next_value_date(self, day: date) -> date:
        def candidate_for(month_start: date) -> date | None:
            same_month = (month_start.year, month_start.month) == (
                day.year,
                day.month,
            )
            value = self.next_set_value(day.day + 1 if same_month else 1)
            if value is None or value > days_in_month(
                month_start.year,
                month_start.month,
            ):
                return None
            return month_start.replace(day=value)

        return first_in_month_after(day, candidate_for)

    def _occurrence(self, part: FieldPart, month_start: date) -> date | None:
        match part.modifier:
            case Modifier.LAST:
                return last_day_with_offset(month_start, part.start or 0)
            case Modifier.LAST_WEEKDAY:
                return last_weekday(month_start)
            case Modifier.NEAREST_WEEKDAY if part.start is not None:
                return nearest_weekday(month_start, part.start)
            case _:
                msg = f"Unknown modifier: {part.modifier}"
                raise ValueError(msg)
