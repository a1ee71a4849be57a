from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from cronmatch._internal.common.constants import (
    MAX_LAST_DAY_OFFSET,
    FieldKind,
    Modifier,
    StepModifier,
)
from cronmatch._internal.exceptions import (
    ParseError,
    RangeError,
    UnsupportedModifierError,
)
from cronmatch._internal.fields.part import FieldPart

if TYPE_CHECKING:
    from cronmatch._internal.fields.spec import FieldSpec

CLAUSE_PATTERN: Final = re.compile(
    r"""
    (?:
        (?P<all>\*) | (?P<any>\?)                       # global flags
      | (?P<last>L) (?: (?P<last_weekday>W)             # LW
                      | -(?P<last_offset>[0-9]{1,2}) )? # L, L-3
      | (?P<start>[0-9]{1,4}|[a-z]{3})                  # number or name
        (?:
            (?P<mod>[LW])                               # 5L, 15W
          | -(?P<end>[0-9]{1,4}|[a-z]{3})               # range end
        )?
    )
    (?: (?P<step_mod>[/\#]) (?P<step>[0-9]{1,7}) )?     # /step or #nth
    """,
    re.VERBOSE | re.IGNORECASE,
)


def split_clauses(text: str) -> list[str]:
    return text.split(",")


def map_value(token: str, spec: FieldSpec) -> int:
    if token.isdigit():
        return spec.numeral_to_value(int(token))
    value = spec.lookup_name(token)
    if value is None:
        msg = f"Unknown name {token!r}"
        raise ParseError(msg, field=spec.kind)
    return value


def parse_clause(clause: str, spec: FieldSpec) -> FieldPart:
    match = CLAUSE_PATTERN.fullmatch(clause)
    if match is None:
        msg = f"Invalid cron field {clause!r}"
        raise ParseError(msg, field=spec.kind)

    step_modifier = (
        StepModifier(match["step_mod"]) if match["step_mod"] else None
    )
    step = int(match["step"]) if match["step"] is not None else None

    modifier: Modifier | None
    start: int | None = None
    end: int | None = None
    bounded = match["all"] is not None
    if match["start"] is not None:
        bounded = True
        start = map_value(match["start"], spec)
        modifier = Modifier(match["mod"].upper()) if match["mod"] else None
        if match["end"] is not None:
            end = map_value(match["end"], spec)
        elif modifier is Modifier.LAST and spec.kind is FieldKind.DAY_OF_MONTH:
            # 3L is the third day before the last one, an offset like L-3
            end = start
            bounded = False
            _check_offset(start, clause, spec)
        elif step_modifier is StepModifier.STEP and modifier is None:
            # N/M never wraps: it runs from N up to the field's last value
            end = spec.last
        else:
            end = start
    elif match["all"] is not None:
        start, end, modifier = spec.first, spec.last, Modifier.ALL
    elif match["any"] is not None:
        modifier = Modifier.IGNORED
    elif match["last_weekday"] is not None:
        modifier = Modifier.LAST_WEEKDAY
    else:
        modifier = Modifier.LAST
        if match["last_offset"] is not None:
            if spec.kind is not FieldKind.DAY_OF_MONTH:
                msg = f"Invalid offset modifier in {clause!r}"
                raise UnsupportedModifierError(msg, field=spec.kind)
            start = end = int(match["last_offset"])
            _check_offset(start, clause, spec)

    part = FieldPart(
        start=start,
        end=end,
        step=step,
        modifier=modifier,
        step_modifier=step_modifier,
    )
    if part.step_modifier is StepModifier.STEP and part.step == 0:
        msg = f"Invalid increment 0 in {clause!r}, must be >= 1"
        raise RangeError(msg, field=spec.kind)
    if bounded:
        _validate_range(part, spec)
    return part


def _check_offset(offset: int, clause: str, spec: FieldSpec) -> None:
    if offset > MAX_LAST_DAY_OFFSET:
        msg = (
            f"Invalid offset [{offset}] in {clause!r}, "
            f"must be 0<=_<={MAX_LAST_DAY_OFFSET}"
        )
        raise RangeError(msg, field=spec.kind)


def _validate_range(part: FieldPart, spec: FieldSpec) -> None:
    if part.start is None or part.end is None:
        return

    out_of_bounds = any(
        value < spec.minimum or value > spec.maximum
        for value in (part.start, part.end)
    )
    if out_of_bounds:
        msg = (
            f"Invalid interval [{part.start}-{part.end}], "
            f"must be {spec.minimum}<=_<={spec.maximum}"
        )
        raise RangeError(msg, field=spec.kind)

    if part.is_rolling and not spec.allows_rolling:
        msg = (
            f"Invalid interval [{part.start}-{part.end}], "
            "rolling ranges are not supported"
        )
        raise RangeError(msg, field=spec.kind)
