"""Catalog module for parsing and loading timetable definitions."""

from .models import (
    Activity,
    DaySchedule,
    DayTemplate,
    PeriodTime,
    ResolvedPeriod,
    ScheduleCatalog,
    Settings,
    SubjectDefinition,
    SubjectSlot,
    Subtask,
    Task,
    WeekSchedule,
)
from .parser import (
    CatalogParser,
    parse_activity,
    parse_catalog,
    parse_settings,
    parse_task,
    to_naive_local,
)
from .store import JsonStore

__all__ = [
    "Activity",
    "CatalogParser",
    "DaySchedule",
    "DayTemplate",
    "JsonStore",
    "PeriodTime",
    "ResolvedPeriod",
    "ScheduleCatalog",
    "Settings",
    "SubjectDefinition",
    "SubjectSlot",
    "Subtask",
    "Task",
    "WeekSchedule",
    "parse_activity",
    "parse_catalog",
    "parse_settings",
    "parse_task",
    "to_naive_local",
]
