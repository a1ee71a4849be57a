from datetime import datetime

import pytest

from cronmatch import FieldKind, parse
from cronmatch.exceptions import (
    BaseCronMatchError,
    NoMatchWithinBarrierError,
    ParseError,
    RangeError,
    ScheduleExhaustedError,
    UnsupportedModifierError,
)


def test_hierarchy() -> None:
    assert issubclass(ParseError, BaseCronMatchError)
    assert issubclass(ParseError, ValueError)
    assert issubclass(RangeError, ParseError)
    assert issubclass(UnsupportedModifierError, ParseError)
    assert issubclass(NoMatchWithinBarrierError, BaseCronMatchError)
    assert issubclass(ScheduleExhaustedError, NoMatchWithinBarrierError)


def test_range_error_message() -> None:
    match = (
        r"Invalid interval \[42-63\], must be 0<=_<=59 for field \[second\] "
        r"in cron expression '42-63 \* \* \* \* \*'"
    )
    with pytest.raises(RangeError, match=match) as exc_info:
        parse("42-63 * * * * *")

    error = exc_info.value
    assert error.field is FieldKind.SECOND
    assert error.expression == "42-63 * * * * *"
    assert error.reason == "Invalid interval [42-63], must be 0<=_<=59"
    assert isinstance(error.__cause__, RangeError)


def test_unsupported_modifier_message() -> None:
    match = r"Invalid modifier \[\?\] for field \[month\]"
    with pytest.raises(UnsupportedModifierError, match=match):
        parse("0 0 0 1 ? *")


def test_nth_message() -> None:
    match = r"Invalid nth increment modifier \[6\], must be 1<=_<=5"
    with pytest.raises(UnsupportedModifierError, match=match):
        parse("0 0 0 ? * 5#6")


def test_field_count_message() -> None:
    with pytest.raises(ParseError, match="Expected 5 to 7 fields, got 3") as e:
        parse("* 3 *")
    assert e.value.field is None


def test_seconds_mismatch_message() -> None:
    with pytest.raises(ParseError, match="Seconds field is missing"):
        parse("* * 29 2 *", expect_seconds=True)
    with pytest.raises(ParseError, match="Seconds field is not expected"):
        parse("* * * 29 2 *", expect_seconds=False)


def test_no_match_message() -> None:
    barrier = datetime(2013, 3, 1)
    match = (
        r"No next execution time for '\* \* \* 29 2 \*' could be determined "
        r"before the limit of 2013-03-01 00:00:00\."
    )
    with pytest.raises(NoMatchWithinBarrierError, match=match):
        parse("* * * 29 2 *").next_match(datetime(2012, 3, 1), barrier)


def test_exhausted_message() -> None:
    match = "the year field has no value at or after 2015"
    with pytest.raises(ScheduleExhaustedError, match=match) as exc_info:
        parse("0 0 0 29 FEB ? 2012").next_match(datetime(2015, 2, 1))
    assert exc_info.value.barrier is None
