from datetime import date

import pytest

from cronmatch import DayOfMonthMatcher


@pytest.mark.parametrize(
    ("text", "day", "expected"),
    [
        pytest.param("3", date(2012, 4, 10), date(2012, 5, 3), id="number"),
        pytest.param("3", date(2012, 5, 3), date(2012, 6, 3), id="number-2"),
        pytest.param("1/15", date(2012, 4, 10), date(2012, 4, 16), id="step"),
        pytest.param("1/15", date(2012, 4, 16), date(2012, 5, 1), id="step-2"),
        pytest.param("1/15", date(2012, 4, 30), date(2012, 5, 1), id="step-3"),
        pytest.param("1/15", date(2012, 5, 1), date(2012, 5, 16), id="step-4"),
        pytest.param("1/15", date(2012, 5, 16), date(2012, 5, 31), id="step-5"),
        pytest.param("7,19", date(2012, 4, 10), date(2012, 4, 19), id="list"),
        pytest.param("7,19", date(2012, 4, 19), date(2012, 5, 7), id="list-2"),
        pytest.param("7,19", date(2012, 5, 7), date(2012, 5, 19), id="list-3"),
        pytest.param("7,19", date(2012, 5, 30), date(2012, 6, 7), id="list-4"),
        pytest.param("31", date(2012, 4, 1), date(2012, 5, 31), id="short"),
        pytest.param("L", date(2012, 4, 10), date(2012, 4, 30), id="last"),
        pytest.param("L", date(2012, 2, 12), date(2012, 2, 29), id="leap"),
        pytest.param("L", date(2012, 2, 29), date(2012, 3, 31), id="last-2"),
        pytest.param("L", date(2013, 2, 12), date(2013, 2, 28), id="no-leap"),
        pytest.param("3L", date(2012, 4, 10), date(2012, 4, 27), id="3L"),
        pytest.param("3L", date(2012, 2, 12), date(2012, 2, 26), id="3L-2"),
        pytest.param("L-3", date(2012, 4, 10), date(2012, 4, 27), id="L-3"),
        pytest.param("L-3", date(2012, 2, 12), date(2012, 2, 26), id="L-3-2"),
        pytest.param("LW", date(2012, 4, 10), date(2012, 4, 30), id="LW"),
        pytest.param("LW", date(2012, 6, 10), date(2012, 6, 29), id="LW-sat"),
        pytest.param("LW", date(2012, 9, 10), date(2012, 9, 28), id="LW-sun"),
        pytest.param("LW", date(2004, 2, 10), date(2004, 2, 27), id="LW-leap"),
        pytest.param("9W", date(2012, 5, 2), date(2012, 5, 9), id="W"),
        pytest.param("9W", date(2012, 5, 8), date(2012, 5, 9), id="W-2"),
        pytest.param("9W", date(2012, 5, 9), date(2012, 6, 8), id="W-sat"),
        pytest.param("9W", date(2012, 9, 1), date(2012, 9, 10), id="W-sun"),
        pytest.param("?", date(2012, 12, 31), date(2013, 1, 1), id="ignored"),
        pytest.param("20,L", date(2012, 4, 10), date(2012, 4, 20), id="mixed"),
        pytest.param("20,L", date(2012, 4, 20), date(2012, 4, 30), id="mixed-2"),
    ],
)
def test_next_date(text: str, day: date, expected: date) -> None:
    assert DayOfMonthMatcher(text).next_date(day) == expected


@pytest.mark.parametrize(
    ("text", "day", "expected"),
    [
        pytest.param("L", date(2012, 2, 29), True, id="last-leap"),
        pytest.param("L", date(2013, 2, 28), True, id="last"),
        pytest.param("L", date(2012, 2, 28), False, id="not-last"),
        pytest.param("L-2", date(2012, 4, 28), True, id="offset"),
        pytest.param("LW", date(2012, 9, 28), True, id="last-weekday"),
        pytest.param("LW", date(2012, 9, 30), False, id="last-sunday"),
        pytest.param("9W", date(2012, 6, 8), True, id="friday-before"),
        pytest.param("9W", date(2012, 6, 9), False, id="saturday"),
        pytest.param("?", date(2020, 7, 14), True, id="ignored"),
        pytest.param("15", date(2020, 7, 15), True, id="value"),
    ],
)
def test_matches_date(text: str, day: date, expected: bool) -> None:  # noqa: FBT001
    assert DayOfMonthMatcher(text).matches_date(day) is expected


def test_nearest_weekday_stays_in_month() -> None:
    # 2022-10-01 is a Saturday, the Friday before is in September
    first = DayOfMonthMatcher("1W")
    assert first.next_date(date(2022, 9, 30)) == date(2022, 10, 3)
    assert not first.matches_date(date(2022, 9, 30))

    # 2022-07-31 is a Sunday, the Monday after is in August
    last = DayOfMonthMatcher("31W")
    assert last.next_date(date(2022, 7, 20)) == date(2022, 7, 29)
    assert not last.matches_date(date(2022, 8, 1))


def test_nearest_weekday_skips_short_months() -> None:
    field = DayOfMonthMatcher("31W")
    assert field.next_date(date(2022, 4, 1)) == date(2022, 5, 31)
    assert not field.matches_date(date(2022, 4, 29))
