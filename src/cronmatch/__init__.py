"""Cron expression matching for schedulers.

This module exposes the cron expression parser and the search for the next
matching time. It supports the unix cron dialect with an optional seconds
and year field, extended with the Quartz ``L``, ``W``, ``#`` and ``?``
modifiers, and a ``CronParser`` adapter for scheduler integration.
"""

from importlib.metadata import version as get_version

from cronmatch._internal.common.constants import FieldKind, Modifier, StepModifier
from cronmatch._internal.configuration import Cron
from cronmatch._internal.cron_parser import CronFactory, CronParser
from cronmatch._internal.expression import ScheduleExpression, parse
from cronmatch._internal.fields.basic import FieldMatcher
from cronmatch._internal.fields.calendar_field import CalendarFieldMatcher
from cronmatch._internal.fields.day_of_month import DayOfMonthMatcher
from cronmatch._internal.fields.day_of_week import DayOfWeekMatcher
from cronmatch._internal.fields.part import FieldPart
from cronmatch._internal.fields.spec import FieldSpec, field_spec
from cronmatch.crontab import CronTab, create_crontab

__version__ = get_version("cronmatch")
__all__ = (
    "CalendarFieldMatcher",
    "Cron",
    "CronFactory",
    "CronParser",
    "CronTab",
    "DayOfMonthMatcher",
    "DayOfWeekMatcher",
    "FieldKind",
    "FieldMatcher",
    "FieldPart",
    "FieldSpec",
    "Modifier",
    "ScheduleExpression",
    "StepModifier",
    "create_crontab",
    "field_spec",
    "parse",
)
