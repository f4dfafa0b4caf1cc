"""Schedule module for resolving timetable days and time windows."""

from .aggregator import activities_in_window, periods_in_window
from .progress import completion
from .resolver import WEDNESDAY_OVERRIDE, TemplateOverride, resolve_day, weekday_name

__all__ = [
    "TemplateOverride",
    "WEDNESDAY_OVERRIDE",
    "activities_in_window",
    "completion",
    "periods_in_window",
    "resolve_day",
    "weekday_name",
]
