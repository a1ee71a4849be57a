from __future__ import annotations

from dataclasses import dataclass, field

from cronmatch._internal.common.constants import (
    DAYS_PER_WEEK,
    FieldKind,
    Modifier,
    StepModifier,
)

MONTH_NAMES = (
    "JAN", "FEB", "MAR", "APR", "MAY", "JUN",
    "JUL", "AUG", "SEP", "OCT", "NOV", "DEC",
)  # fmt: skip
WEEKDAY_NAMES = ("MON", "TUE", "WED", "THU", "FRI", "SAT", "SUN")

_PLAIN_MODIFIERS = frozenset({Modifier.ALL})
_PLAIN_STEP_MODIFIERS = frozenset({StepModifier.STEP})


@dataclass(slots=True, kw_only=True, frozen=True)
class FieldSpec:
    """Static description of one cron field.

    ``minimum``/``maximum`` are the legal bounds, ``first``/``last`` the
    values ``*`` expands to. Day-of-week values are always ISO weekdays
    (Monday=1 .. Sunday=7); ``week_starts_sunday`` only changes how
    numerals are read.
    """

    kind: FieldKind
    minimum: int
    maximum: int
    first: int
    last: int
    names: tuple[str, ...] = ()
    allows_rolling: bool = False
    modifiers: frozenset[Modifier] = field(default=_PLAIN_MODIFIERS)
    step_modifiers: frozenset[StepModifier] = field(
        default=_PLAIN_STEP_MODIFIERS,
    )
    week_starts_sunday: bool = False

    @property
    def size(self) -> int:
        return self.maximum - self.minimum + 1

    def lookup_name(self, token: str) -> int | None:
        try:
            return self.names.index(token.upper()) + 1
        except ValueError:
            return None

    def numeral_to_value(self, numeral: int) -> int:
        if self.kind is not FieldKind.DAY_OF_WEEK:
            return numeral
        if numeral == 0:
            numeral = DAYS_PER_WEEK
        if self.week_starts_sunday and 1 <= numeral <= DAYS_PER_WEEK:
            # 1=SUN, 2=MON .. 7=SAT -> ISO
            return (numeral + 5) % DAYS_PER_WEEK + 1
        return numeral


def _simple(kind: FieldKind, minimum: int, maximum: int) -> FieldSpec:
    return FieldSpec(
        kind=kind,
        minimum=minimum,
        maximum=maximum,
        first=minimum,
        last=maximum,
        allows_rolling=kind is FieldKind.HOUR,
    )


_SPECS: dict[FieldKind, FieldSpec] = {
    FieldKind.SECOND: _simple(FieldKind.SECOND, 0, 59),
    FieldKind.MINUTE: _simple(FieldKind.MINUTE, 0, 59),
    FieldKind.HOUR: _simple(FieldKind.HOUR, 0, 23),
    FieldKind.DAY_OF_MONTH: FieldSpec(
        kind=FieldKind.DAY_OF_MONTH,
        minimum=1,
        maximum=31,
        first=1,
        last=31,
        allows_rolling=True,
        modifiers=frozenset(
            {
                Modifier.ALL,
                Modifier.IGNORED,
                Modifier.LAST,
                Modifier.NEAREST_WEEKDAY,
                Modifier.LAST_WEEKDAY,
            },
        ),
    ),
    FieldKind.MONTH: FieldSpec(
        kind=FieldKind.MONTH,
        minimum=1,
        maximum=12,
        first=1,
        last=12,
        names=MONTH_NAMES,
    ),
    FieldKind.YEAR: _simple(FieldKind.YEAR, 1970, 2199),
}

_WEEKDAY_MODIFIERS = frozenset({Modifier.ALL, Modifier.IGNORED, Modifier.LAST})
_WEEKDAY_STEP_MODIFIERS = frozenset({StepModifier.STEP, StepModifier.NTH})

_MONDAY_FIRST = FieldSpec(
    kind=FieldKind.DAY_OF_WEEK,
    minimum=1,
    maximum=7,
    first=1,
    last=7,
    names=WEEKDAY_NAMES,
    allows_rolling=True,
    modifiers=_WEEKDAY_MODIFIERS,
    step_modifiers=_WEEKDAY_STEP_MODIFIERS,
)
_SUNDAY_FIRST = FieldSpec(
    kind=FieldKind.DAY_OF_WEEK,
    minimum=1,
    maximum=7,
    first=7,
    last=6,
    names=WEEKDAY_NAMES,
    allows_rolling=True,
    modifiers=_WEEKDAY_MODIFIERS,
    step_modifiers=_WEEKDAY_STEP_MODIFIERS,
    week_starts_sunday=True,
)


def field_spec(kind: FieldKind, *, week_starts_sunday: bool = False) -> FieldSpec:
    if kind is FieldKind.DAY_OF_WEEK:
        return _SUNDAY_FIRST if week_starts_sunday else _MONDAY_FIRST
    return _SPECS[kind]
