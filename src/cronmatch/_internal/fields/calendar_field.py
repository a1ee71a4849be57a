from __future__ import annotations

import calendar
from abc import ABCMeta, abstractmethod
from datetime import date, timedelta
from typing import TYPE_CHECKING

from cronmatch._internal.common.constants import Modifier
from cronmatch._internal.fields.basic import FieldMatcher

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from cronmatch._internal.fields.part import FieldPart

ONE_DAY = timedelta(days=1)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def last_day_of_month(day: date) -> date:
    return day.replace(day=days_in_month(day.year, day.month))


def first_of_next_month(day: date) -> date:
    if day.month == 12:  # noqa: PLR2004
        return date(day.year + 1, 1, 1)
    return date(day.year, day.month + 1, 1)


def iter_months(day: date) -> Iterator[date]:
    """Yield the first day of ``day``'s month and of every month after."""
    current = day.replace(day=1)
    while True:
        yield current
        current = first_of_next_month(current)


def first_in_month_after(
    day: date,
    candidate_for: Callable[[date], date | None],
) -> date:
    """Return the earliest per-month candidate strictly after ``day``.

    ``candidate_for`` receives the first day of a month and returns that
    month's occurrence, or ``None`` when the month has none.
    """
    months = iter_months(day)
    while True:
        candidate = candidate_for(next(months))
        if candidate is not None and candidate > day:
            return candidate


class CalendarFieldMatcher(FieldMatcher, metaclass=ABCMeta):
    """A field whose modifiers need the whole date to be evaluated."""

    __slots__: tuple[str, ...] = ()

    def matches_date(self, day: date) -> bool:
        if any(self._part_matches(part, day) for part in self._parts):
            return True
        return self.matches(self._component(day))

    def next_date(self, day: date) -> date:
        """Return the first date strictly after ``day`` this field accepts."""
        candidates = [self._part_next_date(part, day) for part in self._parts]
        if self.has_values:
            candidates.append(self._next_value_date(day))
        return min(candidates)

    def _part_matches(self, part: FieldPart, day: date) -> bool:
        if part.modifier is Modifier.IGNORED:
            return True
        return self._modifier_matches(part, day)

    def _part_next_date(self, part: FieldPart, day: date) -> date:
        if part.modifier is Modifier.IGNORED:
            return day + ONE_DAY
        return self._modifier_next_date(part, day)

    @abstractmethod
    def _component(self, day: date) -> int:
        raise NotImplementedError

    @abstractmethod
    def _modifier_matches(self, part: FieldPart, day: date) -> bool:
        raise NotImplementedError

    @abstractmethod
    def _modifier_next_date(self, part: FieldPart, day: date) -> date:
        raise NotImplementedError

    @abstractmethod
    def _next_value_date(self, day: date) -> date:
        raise NotImplementedError
