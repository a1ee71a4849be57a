from __future__ import annotations

from datetime import date, timedelta

from typing_extensions import override

from cronmatch._internal.common.constants import (
    DAYS_PER_WEEK,
    MAX_NTH_WEEKDAY,
    FieldKind,
    Modifier,
    StepModifier,
)
from cronmatch._internal.exceptions import UnsupportedModifierError
from cronmatch._internal.fields.calendar_field import (
    ONE_DAY,
    CalendarFieldMatcher,
    days_in_month,
    first_in_month_after,
    last_day_of_month,
)
from cronmatch._internal.fields.part import FieldPart
from cronmatch._internal.fields.spec import field_spec


def last_weekday_of_month(month_start: date, weekday: int) -> date:
    last = last_day_of_month(month_start)
    return last - timedelta(days=(last.isoweekday() - weekday) % DAYS_PER_WEEK)


def nth_weekday_of_month(month_start: date, weekday: int, nth: int) -> date | None:
    first = month_start.replace(day=1)
    offset = (weekday - first.isoweekday()) % DAYS_PER_WEEK
    day_of_month = 1 + offset + DAYS_PER_WEEK * (nth - 1)
    if day_of_month > days_in_month(first.year, first.month):
        return None
    return first.replace(day=day_of_month)


def weekday_occurrence(day: date) -> int:
    """1-based count of ``day``'s weekday within its month."""
    return (day.day - 1) // DAYS_PER_WEEK + 1


class DayOfWeekMatcher(CalendarFieldMatcher):
    __slots__: tuple[str, ...] = ()

    def __init__(self, text: str, *, week_starts_sunday: bool = False) -> None:
        spec = field_spec(
            FieldKind.DAY_OF_WEEK,
            week_starts_sunday=week_starts_sunday,
        )
        super().__init__(spec, text)

    @property
    def week_starts_sunday(self) -> bool:
        return self._spec.week_starts_sunday

    @override
    def _normalize_part(self, part: FieldPart) -> FieldPart:
        # a bare "L" is the last day of the week
        if part.modifier is Modifier.LAST and part.start is None:
            return FieldPart(
                start=self._spec.last,
                end=self._spec.last,
                step_modifier=part.step_modifier,
                step=part.step,
            )
        return part

    @override
    def _validate_part(self, part: FieldPart) -> None:
        super()._validate_part(part)
        if part.step_modifier is StepModifier.NTH and not (
            part.step is not None and 1 <= part.step <= MAX_NTH_WEEKDAY
        ):
            msg = (
                f"Invalid nth increment modifier [{part.step}], "
                f"must be 1<=_<={MAX_NTH_WEEKDAY}"
            )
            raise UnsupportedModifierError(msg, field=self.kind)

    @override
    def _component(self, day: date) -> int:
        return day.isoweekday()

    @override
    def _modifier_matches(self, part: FieldPart, day: date) -> bool:
        if day.isoweekday() != part.start:
            return False
        if part.modifier is Modifier.LAST:
            return day.day > days_in_month(day.year, day.month) - DAYS_PER_WEEK
        return weekday_occurrence(day) == part.step

    @override
    def _modifier_next_date(self, part: FieldPart, day: date) -> date:
        weekday = part.start or self._spec.last
        if part.modifier is Modifier.LAST:
            return first_in_month_after(
                day,
                lambda month_start: last_weekday_of_month(month_start, weekday),
            )
        nth = part.step or 1
        return first_in_month_after(
            day,
            lambda month_start: nth_weekday_of_month(month_start, weekday, nth),
        )

    @override
    def _next_value_date(self, day: date) -> date:
        following = day + ONE_DAY
        current = following.isoweekday()
        weekday = self.next_set_value(current)
        if weekday is None:
            # wrap into the following week
            first = self.next_set_value(self._spec.minimum) or current
            weekday = first + DAYS_PER_WEEK
        return following + timedelta(days=weekday - current)
