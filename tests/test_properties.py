import random
from datetime import date, timedelta

import pytest

from cronmatch import (
    DayOfMonthMatcher,
    DayOfWeekMatcher,
    FieldKind,
    FieldMatcher,
    field_spec,
)

SEED = 20120410
SIMPLE_KINDS = (
    FieldKind.SECOND,
    FieldKind.MINUTE,
    FieldKind.HOUR,
    FieldKind.MONTH,
    FieldKind.YEAR,
)


def brute_force(start: int, end: int, step: int, low: int, high: int) -> set[int]:
    if start <= end:
        return set(range(start, end + 1, step))
    size = high - low + 1
    return {
        (value - low) % size + low
        for value in range(start, end + size + 1, step)
    }


@pytest.mark.parametrize("kind", SIMPLE_KINDS)
def test_random_ranges(kind: FieldKind) -> None:
    rnd = random.Random(f"{SEED}-{kind.value}")  # noqa: S311
    spec = field_spec(kind)
    for _ in range(200):
        start = rnd.randint(spec.minimum, spec.maximum)
        end = rnd.randint(spec.minimum, spec.maximum)
        if start > end and not spec.allows_rolling:
            start, end = end, start
        step = rnd.randint(1, spec.size)
        field = FieldMatcher(spec, f"{start}-{end}/{step}")

        expected = brute_force(start, end, step, spec.minimum, spec.maximum)
        assert field.values == expected
        for value in range(spec.minimum - 1, spec.maximum + 2):
            assert field.matches(value) is (value in expected)


@pytest.mark.parametrize("kind", SIMPLE_KINDS)
def test_random_start_with_step(kind: FieldKind) -> None:
    rnd = random.Random(f"{SEED}-{kind.value}-step")  # noqa: S311
    spec = field_spec(kind)
    for _ in range(100):
        start = rnd.randint(spec.minimum, spec.maximum)
        step = rnd.randint(1, spec.size)
        field = FieldMatcher(spec, f"{start}/{step}")
        assert field.values == set(range(start, spec.maximum + 1, step))


@pytest.mark.parametrize("kind", SIMPLE_KINDS)
def test_next_set_value_is_smallest_member(kind: FieldKind) -> None:
    rnd = random.Random(f"{SEED}-{kind.value}-next")  # noqa: S311
    spec = field_spec(kind)
    for _ in range(50):
        values = rnd.sample(range(spec.minimum, spec.maximum + 1), k=3)
        field = FieldMatcher(spec, ",".join(map(str, values)))
        for previous in range(spec.minimum, spec.maximum + 1):
            candidates = [value for value in values if value >= previous]
            expected = min(candidates) if candidates else None
            assert field.next_set_value(previous) == expected


@pytest.mark.parametrize("week_starts_sunday", [False, True])
def test_random_weekday_ranges(week_starts_sunday: bool) -> None:  # noqa: FBT001
    rnd = random.Random(f"{SEED}-{week_starts_sunday}")  # noqa: S311
    spec = field_spec(
        FieldKind.DAY_OF_WEEK,
        week_starts_sunday=week_starts_sunday,
    )
    for _ in range(100):
        start = rnd.randint(1, 7)
        end = rnd.randint(1, 7)
        step = rnd.randint(1, 7)
        field = DayOfWeekMatcher(
            f"{start}-{end}/{step}",
            week_starts_sunday=week_starts_sunday,
        )
        first = spec.numeral_to_value(start)
        last = spec.numeral_to_value(end)
        assert field.values == brute_force(first, last, step, 1, 7)


@pytest.mark.parametrize(
    ("factory", "texts"),
    [
        pytest.param(
            DayOfMonthMatcher,
            ["L", "L-5", "LW", "1W", "15W", "31W", "1,15", "*/9", "29-3"],
            id="day-of-month",
        ),
        pytest.param(
            DayOfWeekMatcher,
            ["5L", "1#1", "7#5", "TUE#2,TUE#3", "SAT-MON", "3/2", "L"],
            id="day-of-week",
        ),
    ],
)
def test_next_date_agrees_with_matches_date(
    factory: type[DayOfMonthMatcher | DayOfWeekMatcher],
    texts: list[str],
) -> None:
    rnd = random.Random(SEED)  # noqa: S311
    for text in texts:
        field = factory(text)
        for _ in range(40):
            day = date(2000, 1, 1) + timedelta(days=rnd.randrange(365 * 30))
            following = field.next_date(day)
            assert following > day
            assert field.matches_date(following)
            gap = day + timedelta(days=1)
            while gap < following:
                assert not field.matches_date(gap), (text, gap)
                gap += timedelta(days=1)
