from __future__ import annotations

from dataclasses import dataclass

from cronmatch._internal.common.constants import Modifier, StepModifier


@dataclass(slots=True, kw_only=True, frozen=True)
class FieldPart:
    """One comma-separated clause of a field expression.

    Plain parts (no modifier other than ``*`` and no ``#``) describe a
    ``start..end/step`` range and end up in the matcher's presence set.
    Symbolic parts keep their modifier and are evaluated per date; for
    ``L-n`` the offset ``n`` is stored in ``start``/``end``.
    """

    start: int | None = None
    end: int | None = None
    step: int | None = None
    modifier: Modifier | None = None
    step_modifier: StepModifier | None = None

    @property
    def is_plain(self) -> bool:
        return (
            self.modifier in (None, Modifier.ALL)
            and self.step_modifier is not StepModifier.NTH
        )

    @property
    def is_rolling(self) -> bool:
        return (
            self.start is not None
            and self.end is not None
            and self.start > self.end
        )

    @property
    def increment(self) -> int:
        return 1 if self.step is None else self.step
