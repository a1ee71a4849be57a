"""Mapping between wall-clock times and instants around DST transitions.

Cron fields are evaluated on the wall clock of the caller's datetime. For
aware datetimes a wall time can be skipped (spring forward) or repeated
(fall back); these helpers rely on PEP 495 ``fold`` semantics, which
``zoneinfo.ZoneInfo`` implements.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone, tzinfo

ONE_SECOND = timedelta(seconds=1)


def to_wall(moment: datetime) -> datetime:
    return moment.replace(tzinfo=None, fold=0)


def to_instant(moment: datetime) -> datetime:
    return moment.astimezone(timezone.utc)


def _offsets(wall: datetime, tz: tzinfo) -> tuple[timedelta, timedelta]:
    first = wall.replace(tzinfo=tz, fold=0).utcoffset()
    second = wall.replace(tzinfo=tz, fold=1).utcoffset()
    if first is None or second is None:
        return timedelta(0), timedelta(0)
    return first, second


def is_ambiguous(wall: datetime, tz: tzinfo) -> bool:
    """True when ``wall`` happens twice, the clock being set back."""
    first, second = _offsets(wall, tz)
    return first > second


def is_skipped(wall: datetime, tz: tzinfo) -> bool:
    """True when ``wall`` never happens, the clock being set forward."""
    first, second = _offsets(wall, tz)
    return first < second


def fold_window(wall: datetime, tz: tzinfo) -> tuple[datetime, datetime]:
    """Return the ``[start, end)`` wall-clock window that repeats ``wall``.

    ``wall`` must be ambiguous. The window is as long as the offset change,
    so its start lies in ``(wall - change, wall]`` and is found by bisecting
    on whole seconds.
    """
    first, second = _offsets(wall, tz)
    change = first - second
    low = wall - change
    high = wall
    while high - low > ONE_SECOND:
        middle = low + timedelta(seconds=int((high - low).total_seconds()) // 2)
        if is_ambiguous(middle, tz):
            high = middle
        else:
            low = middle
    return high, high + change


def resolve(wall: datetime, tz: tzinfo, after: datetime) -> datetime:
    """Turn a matching wall time into the earliest instant after ``after``."""
    first = wall.replace(tzinfo=tz, fold=0)
    if is_skipped(wall, tz):
        return to_instant(first).astimezone(tz)
    if is_ambiguous(wall, tz) and to_instant(first) <= to_instant(after):
        return wall.replace(tzinfo=tz, fold=1)
    return first
