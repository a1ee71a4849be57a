from __future__ import annotations

from typing import TYPE_CHECKING, Final

from cronmatch._internal.common.constants import Modifier, StepModifier
from cronmatch._internal.exceptions import ParseError, UnsupportedModifierError
from cronmatch._internal.fields.grammar import parse_clause, split_clauses

if TYPE_CHECKING:
    from cronmatch._internal.common.constants import FieldKind
    from cronmatch._internal.fields.part import FieldPart
    from cronmatch._internal.fields.spec import FieldSpec


class FieldMatcher:
    """Membership test for one field of a cron expression.

    Plain clauses are folded into a presence set kept as an integer
    bitmask, bit ``i`` standing for the value ``i + spec.minimum``.
    Symbolic clauses (``?``, ``L``, ``W``, ``LW``, ``#``) are kept in
    ``parts`` and only make sense to the calendar-aware subclasses.
    """

    __slots__: tuple[str, ...] = ("_mask", "_parts", "_spec", "_text")

    def __init__(self, spec: FieldSpec, text: str) -> None:
        self._spec: Final = spec
        self._text: Final = text
        self._mask: int = 0
        parts: list[FieldPart] = []
        for clause in split_clauses(text):
            part = self._normalize_part(parse_clause(clause, spec))
            self._validate_part(part)
            if part.is_plain:
                self._fold(part)
            else:
                parts.append(part)
        self._parts: Final = tuple(parts)

    @property
    def kind(self) -> FieldKind:
        return self._spec.kind

    @property
    def spec(self) -> FieldSpec:
        return self._spec

    @property
    def text(self) -> str:
        return self._text

    @property
    def parts(self) -> tuple[FieldPart, ...]:
        return self._parts

    @property
    def values(self) -> frozenset[int]:
        low = self._spec.minimum
        return frozenset(
            low + offset
            for offset in range(self._spec.size)
            if self._mask >> offset & 1
        )

    @property
    def has_values(self) -> bool:
        return self._mask != 0

    @property
    def is_unrestricted(self) -> bool:
        """True when the field lets every value through.

        That is the case for ``*`` and ``?`` (and anything equivalent to
        them, such as ``1-7`` on day-of-week).
        """
        if any(part.modifier is not Modifier.IGNORED for part in self._parts):
            return False
        full = (1 << self._spec.size) - 1
        return self._mask in (0, full)

    def matches(self, value: int) -> bool:
        offset = value - self._spec.minimum
        if offset < 0 or offset >= self._spec.size:
            return False
        return bool(self._mask >> offset & 1)

    def next_set_value(self, previous: int) -> int | None:
        offset = max(previous - self._spec.minimum, 0)
        remaining = self._mask >> offset
        if remaining == 0:
            return None
        lowest = (remaining & -remaining).bit_length() - 1
        return self._spec.minimum + offset + lowest

    def _normalize_part(self, part: FieldPart) -> FieldPart:
        return part

    def _validate_part(self, part: FieldPart) -> None:
        spec = self._spec
        if part.modifier is not None and part.modifier not in spec.modifiers:
            msg = f"Invalid modifier [{part.modifier.value}]"
            raise UnsupportedModifierError(msg, field=spec.kind)
        if (
            part.step_modifier is not None
            and part.step_modifier not in spec.step_modifiers
        ):
            msg = f"Invalid increment modifier [{part.step_modifier.value}]"
            raise UnsupportedModifierError(msg, field=spec.kind)
        if part.step_modifier is not None and part.modifier not in (
            None,
            Modifier.ALL,
        ):
            msg = (
                f"Increment modifier [{part.step_modifier.value}] cannot be "
                f"combined with modifier [{part.modifier.value}]"
            )
            raise UnsupportedModifierError(msg, field=spec.kind)
        if part.step_modifier is StepModifier.NTH and (
            part.modifier is Modifier.ALL or part.start != part.end
        ):
            msg = "Increment modifier [#] needs a single value before it"
            raise UnsupportedModifierError(msg, field=spec.kind)

    def _fold(self, part: FieldPart) -> None:
        if part.start is None or part.end is None:
            msg = "Plain field part without an interval"
            raise ParseError(msg, field=self._spec.kind)
        low = self._spec.minimum
        step = part.increment
        value = part.start
        if not part.is_rolling:
            while value <= part.end:
                self._mask |= 1 << (value - low)
                value += step
            return

        # keep the step phase when wrapping past the maximum
        while value <= self._spec.maximum:
            self._mask |= 1 << (value - low)
            value += step
        value -= self._spec.size
        while value <= part.end:
            self._mask |= 1 << (value - low)
            value += step

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(kind={self.kind.value!r}, "
            f"text={self._text!r}, values={sorted(self.values)!r}, "
            f"parts={list(self._parts)!r})"
        )
