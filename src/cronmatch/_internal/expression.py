from __future__ import annotations

import logging
import re
from datetime import date, datetime, time, timedelta
from typing import TYPE_CHECKING, Final, final

from cronmatch._internal.common.constants import DEFAULT_HORIZON_YEARS, FieldKind
from cronmatch._internal.exceptions import (
    NoMatchWithinBarrierError,
    ParseError,
    ScheduleExhaustedError,
)
from cronmatch._internal.fields.basic import FieldMatcher
from cronmatch._internal.fields.calendar_field import ONE_DAY
from cronmatch._internal.fields.day_of_month import DayOfMonthMatcher
from cronmatch._internal.fields.day_of_week import DayOfWeekMatcher
from cronmatch._internal.fields.spec import field_spec
from cronmatch._internal.wallclock import (
    ONE_SECOND,
    fold_window,
    is_ambiguous,
    resolve,
    to_instant,
    to_wall,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from typing_extensions import Self

    Level = Callable[[datetime], datetime | None]

logger = logging.getLogger("cronmatch.expression")

_YEAR_TOKEN: Final = re.compile(r"\d{4}")
_ONE_MINUTE: Final = timedelta(minutes=1)
_ONE_HOUR: Final = timedelta(hours=1)
# wall-clock and instant order may disagree by a DST shift
_WALL_CLOCK_SLACK: Final = timedelta(days=1)


def _simple_field(kind: FieldKind, text: str) -> FieldMatcher:
    return FieldMatcher(field_spec(kind), text)


def add_years(moment: datetime, years: int) -> datetime:
    try:
        return moment.replace(year=moment.year + years)
    except ValueError:  # Feb 29 in a non-leap target year
        return moment.replace(year=moment.year + years, day=28)


@final
class ScheduleExpression:
    """A parsed cron expression able to find its next occurrence.

    Expressions have 5 to 7 whitespace separated fields::

        [seconds] minutes hours day-of-month month day-of-week [year]

    With 5 fields seconds are ``0`` and any year matches. With 6 fields the
    last one is a year when it contains four digits, otherwise the first
    one is the seconds field.

    Besides ``*``, ``,``, ``-`` and ``/`` every field understands, the
    day-of-month field takes ``L`` (last day, ``L-3``/``3L`` three days
    before it), ``W`` (``15W``: weekday nearest the 15th), ``LW`` (last
    weekday) and ``?``; the day-of-week field takes ``5L`` (last Friday),
    ``5#3`` (third Friday) and ``?``. Month and weekday names (``JAN``,
    ``MON``) are case-insensitive. Ranges such as ``22-2`` on hours or
    ``FRI-MON`` on weekdays roll over the end of the field.

    When both day-of-month and day-of-week are restricted a day matches if
    either of them does, as in the classic cron.

    Instances are immutable and can be shared between threads.
    """

    __slots__: tuple[str, ...] = (
        "_day_of_month",
        "_day_of_week",
        "_expression",
        "_has_seconds",
        "_has_year",
        "_hour",
        "_levels",
        "_minute",
        "_month",
        "_second",
        "_year",
    )

    def __init__(
        self,
        expression: str,
        expect_seconds: bool | None = True,
        *,
        week_starts_sunday: bool = False,
    ) -> None:
        """Parse a cron expression.

        Args:
            expression: The cron expression.
            expect_seconds: Whether the expression must carry a seconds
                field. ``None`` accepts both layouts.
            week_starts_sunday: Read weekday numerals as ``1=SUN .. 7=SAT``
                instead of ``1=MON .. 7=SUN``.

        Raises:
            ParseError: The expression is malformed.
            RangeError: A value lies outside its field bounds.
            UnsupportedModifierError: A modifier is not allowed in a field.

        """
        if not expression or not expression.strip():
            msg = "Cron expression is empty"
            raise ParseError(msg, expression=expression)

        tokens = expression.split()
        count = len(tokens)
        if count == 5:  # noqa: PLR2004
            has_seconds, has_year = False, False
        elif count == 6:  # noqa: PLR2004
            has_year = _YEAR_TOKEN.search(tokens[-1]) is not None
            has_seconds = not has_year
        elif count == 7:  # noqa: PLR2004
            has_seconds, has_year = True, True
        else:
            msg = f"Expected 5 to 7 fields, got {count}"
            raise ParseError(msg, expression=expression)

        if expect_seconds is not None and expect_seconds != has_seconds:
            state = "is missing" if expect_seconds else "is not expected"
            msg = f"Seconds field {state}, got {count} fields"
            raise ParseError(msg, expression=expression)

        if not has_seconds:
            tokens.insert(0, "0")
        if not has_year:
            tokens.append("*")

        self._expression: Final = expression
        self._has_seconds: Final = has_seconds
        self._has_year: Final = has_year
        try:
            self._second: Final = _simple_field(FieldKind.SECOND, tokens[0])
            self._minute: Final = _simple_field(FieldKind.MINUTE, tokens[1])
            self._hour: Final = _simple_field(FieldKind.HOUR, tokens[2])
            self._day_of_month: Final = DayOfMonthMatcher(tokens[3])
            self._month: Final = _simple_field(FieldKind.MONTH, tokens[4])
            self._day_of_week: Final = DayOfWeekMatcher(
                tokens[5],
                week_starts_sunday=week_starts_sunday,
            )
            self._year: Final = _simple_field(FieldKind.YEAR, tokens[6])
        except ParseError as exc:
            raise type(exc)(
                exc.reason,
                expression=expression,
                field=exc.field,
            ) from exc

        self._levels: Final[tuple[Level, ...]] = (
            self._advance_year,
            self._advance_month,
            self._advance_day,
            self._advance_hour,
            self._advance_minute,
            self._advance_second,
        )
        logger.debug(
            "Parsed cron expression %r (seconds=%s, year=%s)",
            expression,
            has_seconds,
            has_year,
        )

    @classmethod
    def create(cls, expression: str) -> Self:
        """Parse an expression that carries a seconds field."""
        return cls(expression, expect_seconds=True)

    @classmethod
    def create_without_seconds(cls, expression: str) -> Self:
        """Parse an expression without a seconds field."""
        return cls(expression, expect_seconds=False)

    @property
    def expression(self) -> str:
        return self._expression

    @property
    def has_seconds(self) -> bool:
        return self._has_seconds

    @property
    def has_year(self) -> bool:
        return self._has_year

    @property
    def week_starts_sunday(self) -> bool:
        return self._day_of_week.week_starts_sunday

    @property
    def fields(self) -> Mapping[FieldKind, FieldMatcher]:
        return {
            FieldKind.SECOND: self._second,
            FieldKind.MINUTE: self._minute,
            FieldKind.HOUR: self._hour,
            FieldKind.DAY_OF_MONTH: self._day_of_month,
            FieldKind.MONTH: self._month,
            FieldKind.DAY_OF_WEEK: self._day_of_week,
            FieldKind.YEAR: self._year,
        }

    def matches(self, moment: datetime) -> bool:
        """Check whether ``moment`` (to the second) satisfies every field."""
        return (
            self._year.matches(moment.year)
            and self._month.matches(moment.month)
            and self._day_matches(moment.date())
            and self._hour.matches(moment.hour)
            and self._minute.matches(moment.minute)
            and self._second.matches(moment.second)
        )

    def next_match(
        self,
        after: datetime,
        barrier: datetime | timedelta | None = None,
    ) -> datetime:
        """Compute the first matching time strictly after ``after``.

        Args:
            after: Start of the search. Naive datetimes are searched as
                naive wall time, aware ones on their own zone's wall clock.
            barrier: Exclusive limit of the search: a datetime, a duration
                from ``after`` or ``None`` for four years after ``after``.

        Returns:
            The next matching datetime, in ``after``'s time zone.

        Raises:
            NoMatchWithinBarrierError: Nothing matches before the barrier.
            ScheduleExhaustedError: The year field has no value left.

        """
        limit = self._resolve_barrier(after, barrier)
        tz = after.tzinfo
        if tz is None or after.utcoffset() is None:
            start = after.replace(microsecond=0) + ONE_SECOND
            return self._search(start, limit, limit)

        wall_after = to_wall(after).replace(microsecond=0)
        wall_limit = to_wall(to_instant(limit).astimezone(tz)) + _WALL_CLOCK_SLACK
        start = wall_after + ONE_SECOND

        if after.fold == 0 and is_ambiguous(wall_after, tz):
            # the clock goes back: the rest of the first pass comes first,
            # then the repeated window, then everything after it
            window_start, window_end = fold_window(wall_after, tz)
            wall = self._scan(start, window_end)
            if wall is not None:
                return self._within(resolve(wall, tz, after), limit)
            wall = self._scan(window_start, window_end)
            if wall is not None:
                return self._within(wall.replace(tzinfo=tz, fold=1), limit)
            start = window_end

        wall = self._search(start, wall_limit, limit)
        return self._within(resolve(wall, tz, after), limit)

    def next_matches(
        self,
        after: datetime,
        count: int,
        barrier: datetime | timedelta | None = None,
    ) -> list[datetime]:
        """Return the next ``count`` matching times after ``after``.

        Each step is bounded by ``barrier`` the way ``next_match`` is.
        """
        if count < 0:
            msg = f"count must be >= 0, got {count}"
            raise ValueError(msg)
        result: list[datetime] = []
        current = after
        for _ in range(count):
            current = self.next_match(current, barrier)
            result.append(current)
        return result

    def _resolve_barrier(
        self,
        after: datetime,
        barrier: datetime | timedelta | None,
    ) -> datetime:
        if barrier is None:
            return add_years(after, DEFAULT_HORIZON_YEARS)
        if isinstance(barrier, timedelta):
            if after.tzinfo is None or after.utcoffset() is None:
                return after + barrier
            # elapsed time, not wall-clock time
            return (to_instant(after) + barrier).astimezone(after.tzinfo)
        if (barrier.tzinfo is None) != (after.tzinfo is None):
            msg = "after and barrier must both be naive or both be aware"
            raise TypeError(msg)
        return barrier

    def _within(self, result: datetime, limit: datetime) -> datetime:
        if to_instant(result) >= to_instant(limit):
            logger.debug(
                "Next match %s of %r is beyond the barrier %s",
                result,
                self._expression,
                limit,
            )
            raise NoMatchWithinBarrierError(self._expression, limit)
        return result

    def _search(
        self,
        candidate: datetime,
        wall_limit: datetime,
        barrier: datetime,
    ) -> datetime:
        found = self._scan(candidate, wall_limit)
        if found is None:
            logger.debug(
                "Search for %r reached the barrier %s",
                self._expression,
                barrier,
            )
            raise NoMatchWithinBarrierError(self._expression, barrier)
        return found

    def _scan(
        self,
        candidate: datetime,
        wall_limit: datetime,
    ) -> datetime | None:
        """First matching wall time in ``[candidate, wall_limit)``."""
        while candidate < wall_limit:
            for level in self._levels:
                advanced = level(candidate)
                if advanced is not None:
                    candidate = advanced
                    break
            else:
                return candidate
        return None

    def _advance_year(self, candidate: datetime) -> datetime | None:
        if self._year.matches(candidate.year):
            return None
        year = self._year.next_set_value(candidate.year)
        if year is None:
            logger.debug(
                "Year field of %r exhausted at %s",
                self._expression,
                candidate.year,
            )
            raise ScheduleExhaustedError(self._expression, candidate.year)
        return datetime(year, 1, 1)  # noqa: DTZ001

    def _advance_month(self, candidate: datetime) -> datetime | None:
        if self._month.matches(candidate.month):
            return None
        month = self._month.next_set_value(candidate.month)
        if month is None:
            return datetime(candidate.year + 1, 1, 1)  # noqa: DTZ001
        return datetime(candidate.year, month, 1)  # noqa: DTZ001

    def _advance_day(self, candidate: datetime) -> datetime | None:
        day = candidate.date()
        if self._day_matches(day):
            return None
        return datetime.combine(self._next_day(day), time())

    def _advance_hour(self, candidate: datetime) -> datetime | None:
        if self._hour.matches(candidate.hour):
            return None
        hour = self._hour.next_set_value(candidate.hour)
        if hour is None:
            return datetime.combine(candidate.date() + ONE_DAY, time())
        return candidate.replace(hour=hour, minute=0, second=0)

    def _advance_minute(self, candidate: datetime) -> datetime | None:
        if self._minute.matches(candidate.minute):
            return None
        minute = self._minute.next_set_value(candidate.minute)
        if minute is None:
            return candidate.replace(minute=0, second=0) + _ONE_HOUR
        return candidate.replace(minute=minute, second=0)

    def _advance_second(self, candidate: datetime) -> datetime | None:
        if self._second.matches(candidate.second):
            return None
        second = self._second.next_set_value(candidate.second)
        if second is None:
            return candidate.replace(second=0) + _ONE_MINUTE
        return candidate.replace(second=second)

    def _day_matches(self, day: date) -> bool:
        by_month_day = not self._day_of_month.is_unrestricted
        by_week_day = not self._day_of_week.is_unrestricted
        if by_month_day and by_week_day:
            return self._day_of_month.matches_date(
                day,
            ) or self._day_of_week.matches_date(day)
        if by_month_day:
            return self._day_of_month.matches_date(day)
        if by_week_day:
            return self._day_of_week.matches_date(day)
        return True

    def _next_day(self, day: date) -> date:
        by_month_day = not self._day_of_month.is_unrestricted
        by_week_day = not self._day_of_week.is_unrestricted
        if by_month_day and by_week_day:
            return min(
                self._day_of_month.next_date(day),
                self._day_of_week.next_date(day),
            )
        if by_month_day:
            return self._day_of_month.next_date(day)
        if by_week_day:
            return self._day_of_week.next_date(day)
        return day + ONE_DAY

    def __str__(self) -> str:
        return self._expression

    def __repr__(self) -> str:
        return f"{type(self).__name__}<{self._expression}>"


def parse(
    text: str,
    expect_seconds: bool | None = True,
    *,
    week_starts_sunday: bool = False,
) -> ScheduleExpression:
    """Parse ``text`` into a ``ScheduleExpression``.

    Args:
        text: The cron expression.
        expect_seconds: Whether a seconds field is required, ``None`` to
            accept both layouts.
        week_starts_sunday: Read weekday numerals with Sunday as ``1``.

    Returns:
        The parsed expression.

    """
    return ScheduleExpression(
        text,
        expect_seconds,
        week_starts_sunday=week_starts_sunday,
    )
