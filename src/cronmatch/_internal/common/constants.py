from enum import Enum, unique

DAYS_PER_WEEK = 7
DEFAULT_HORIZON_YEARS = 4
MAX_NTH_WEEKDAY = 5
MAX_LAST_DAY_OFFSET = 30


@unique
class FieldKind(str, Enum):
    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY_OF_MONTH = "day_of_month"
    MONTH = "month"
    DAY_OF_WEEK = "day_of_week"
    YEAR = "year"


@unique
class Modifier(str, Enum):
    ALL = "*"
    IGNORED = "?"
    LAST = "L"
    NEAREST_WEEKDAY = "W"
    LAST_WEEKDAY = "LW"


@unique
class StepModifier(str, Enum):
    STEP = "/"
    NTH = "#"
