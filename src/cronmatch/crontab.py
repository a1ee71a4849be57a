"""Cron Parser implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from typing_extensions import override

from cronmatch._internal.configuration import Cron
from cronmatch._internal.cron_parser import CronParser
from cronmatch._internal.expression import ScheduleExpression

if TYPE_CHECKING:
    from datetime import datetime


class CronTab(CronParser):
    """Cron expression parser based on ``ScheduleExpression``.

    Plugs into schedulers that accept a ``CronFactory``: the layout of the
    expression (with or without seconds and year) is detected unless the
    ``Cron`` options pin it.
    """

    __slots__: tuple[str, ...] = ("_cron", "_schedule")

    def __init__(self, expression: str | Cron) -> None:
        """Initialize a CronTab parser.

        Args:
            expression: A cron expression or a ``Cron`` configuration.

        """
        if isinstance(expression, str):
            expression = Cron(expression)
        self._cron: Final = expression
        self._schedule: Final = ScheduleExpression(
            expression.expression,
            expression.expect_seconds,
            week_starts_sunday=expression.week_starts_sunday,
        )

    @property
    def cron(self) -> Cron:
        return self._cron

    @property
    def schedule(self) -> ScheduleExpression:
        return self._schedule

    @override
    def next_run(self, *, now: datetime) -> datetime:
        """Compute the next scheduled execution time.

        Args:
            now: Current datetime.

        Returns:
            The next run datetime.

        Raises:
            NoMatchWithinBarrierError: Nothing matches within the horizon.

        """
        return self._schedule.next_match(now, self._cron.horizon)

    @override
    def get_expression(self) -> str:
        """Return the original cron expression.

        Returns:
            The cron expression string.

        """
        return self._cron.expression


def create_crontab(expression: str | Cron) -> CronTab:
    """Create a CronTab instance.

    Args:
        expression: A cron expression or a ``Cron`` configuration.

    Returns:
        A new CronTab instance.

    """
    return CronTab(expression)
