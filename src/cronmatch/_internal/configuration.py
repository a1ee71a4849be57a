from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta


@dataclass(slots=True, kw_only=True, frozen=True)
class Cron:
    expression: str = field(kw_only=False)
    expect_seconds: bool | None = None
    week_starts_sunday: bool = False
    horizon: timedelta | None = None

    def __post_init__(self) -> None:
        if self.horizon is not None and self.horizon <= timedelta(0):
            msg = (
                "horizon must be a positive timedelta."
                " Use None for the default four-year horizon."
            )
            raise ValueError(msg)
