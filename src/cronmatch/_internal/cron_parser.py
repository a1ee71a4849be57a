from __future__ import annotations

from abc import ABCMeta, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, TypeAlias, runtime_checkable

if TYPE_CHECKING:
    from datetime import datetime

    from cronmatch._internal.configuration import Cron

Expression: TypeAlias = "str | Cron"
CronFactory: TypeAlias = Callable[[Expression], "CronParser"]


@runtime_checkable
class CronParser(Protocol, metaclass=ABCMeta):
    """Run-time calculator of a single cron schedule."""

    @abstractmethod
    def next_run(self, *, now: datetime) -> datetime:
        raise NotImplementedError

    @abstractmethod
    def get_expression(self) -> str:
        raise NotImplementedError

    def next_runs(self, *, now: datetime, count: int) -> list[datetime]:
        """Chain ``next_run`` ``count`` times starting from ``now``."""
        runs: list[datetime] = []
        for _ in range(count):
            now = self.next_run(now=now)
            runs.append(now)
        return runs
