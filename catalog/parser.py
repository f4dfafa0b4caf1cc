"""Parser turning raw JSON-shaped definitions into catalog models."""

import math
import re
import uuid
from datetime import datetime, time
from typing import Any, Optional

from loguru import logger

from .models import (
    ACTIVITY_COLOR,
    PLACEHOLDER_COLOR,
    WEEKDAYS,
    Activity,
    DaySchedule,
    DayTemplate,
    PeriodTime,
    ScheduleCatalog,
    Settings,
    SubjectDefinition,
    SubjectSlot,
    Subtask,
    Task,
    WeekSchedule,
)

_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any, default: str = "") -> str:
    return value if isinstance(value, str) else default


def _as_color(value: Any, default: str = PLACEHOLDER_COLOR) -> str:
    if isinstance(value, str) and _COLOR_RE.match(value.strip()):
        return value.strip().upper()
    return default


def _as_number(value: Any, default: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if not math.isfinite(value):
        return default
    return value


def to_naive_local(value: datetime) -> datetime:
    """Convert an offset-carrying datetime to naive local time.
    
    Naive values are returned unchanged.
    """
    if value.tzinfo is None or value.utcoffset() is None:
        return value.replace(tzinfo=None)
    return value.astimezone().replace(tzinfo=None)


def _parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp as naive local time, or None when unusable."""
    if not isinstance(value, str) or not value:
        return None
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    try:
        return to_naive_local(datetime.fromisoformat(value))
    except ValueError:
        return None


class CatalogParser:
    """Parser for the ``SchoolPeriods.json`` definition format.
    
    The raw document holds three maps: ``subjects`` (name -> teacher and
    colour), ``period_times`` (template name -> period label -> start/end
    time) and ``schedule`` (week designator -> weekday -> template name and
    subject slots). Malformed entries are skipped or defaulted one at a
    time so that a single bad record never prevents the rest of the
    catalog from resolving.
    """
    
    def parse(self, raw: Any) -> ScheduleCatalog:
        """Build a catalog from a raw definition document.
        
        Args:
            raw: Decoded JSON document. Anything other than a mapping yields
                an empty catalog.
                
        Returns:
            Normalized ScheduleCatalog.
        """
        root = _as_dict(raw)
        if not root and raw:
            logger.warning(f"Catalog root is not an object ({type(raw).__name__}); using empty catalog")
        
        catalog = ScheduleCatalog(
            subjects=self._parse_subjects(_as_dict(root.get("subjects"))),
            templates=self._parse_templates(_as_dict(root.get("period_times"))),
            weeks=self._parse_weeks(_as_dict(root.get("schedule"))),
        )
        logger.debug(
            f"Parsed catalog: {len(catalog.subjects)} subjects, "
            f"{len(catalog.templates)} templates, {len(catalog.weeks)} weeks"
        )
        return catalog
    
    def _parse_time(self, value: Any) -> time:
        """Parse time string into time object.
        
        Args:
            value: Time string like "08:40" or "8:40".
            
        Returns:
            Time object.
        """
        match = re.fullmatch(r"\s*(\d{1,2}):(\d{2})\s*", _as_str(value))
        if match:
            hour, minute = map(int, match.groups())
            return time(hour, minute)
        
        raise ValueError(f"Cannot parse time: {value!r}")
    
    def _parse_subjects(self, raw: dict) -> dict[str, SubjectDefinition]:
        subjects: dict[str, SubjectDefinition] = {}
        for name, value in raw.items():
            if not isinstance(value, dict):
                logger.warning(f"Subject '{name}' is not an object; using defaults")
            entry = _as_dict(value)
            subjects[name] = SubjectDefinition(
                name=name,
                teacher=_as_str(entry.get("teacher")),
                color=_as_color(entry.get("color")),
            )
        return subjects
    
    def _parse_templates(self, raw: dict) -> dict[str, DayTemplate]:
        templates: dict[str, DayTemplate] = {}
        for name, value in raw.items():
            periods: list[PeriodTime] = []
            for label, times in _as_dict(value).items():
                entry = _as_dict(times)
                try:
                    periods.append(PeriodTime(
                        label=label,
                        start=self._parse_time(entry.get("start_time")),
                        end=self._parse_time(entry.get("end_time")),
                    ))
                except ValueError as e:
                    logger.warning(f"Skipping period '{label}' of template '{name}': {e}")
            templates[name] = DayTemplate(name=name, periods=tuple(periods))
        return templates
    
    def _parse_day(self, weekday: str, raw: dict) -> DaySchedule:
        slots: dict[str, SubjectSlot] = {}
        for label, value in _as_dict(raw.get("subjects")).items():
            if not isinstance(value, dict):
                logger.warning(f"Slot '{label}' on {weekday} is not an object; skipping")
                continue
            slots[label] = SubjectSlot(
                period_label=label,
                subject_name=_as_str(value.get("subject")),
                room=_as_str(value.get("room")),
            )
        return DaySchedule(
            weekday=weekday,
            template_name=_as_str(raw.get("period_template")),
            slots=slots,
        )
    
    def _parse_weeks(self, raw: dict) -> dict[str, WeekSchedule]:
        weeks: dict[str, WeekSchedule] = {}
        for designator, value in raw.items():
            days: dict[str, DaySchedule] = {}
            for day_name, day_value in _as_dict(value).items():
                weekday = day_name.strip().capitalize()
                if weekday not in WEEKDAYS:
                    logger.warning(f"Week '{designator}' has unknown weekday '{day_name}'; skipping")
                    continue
                days[weekday] = self._parse_day(weekday, _as_dict(day_value))
            week = WeekSchedule(designator=designator, days=days)
            weeks[week.designator] = week
        return weeks


def parse_catalog(raw: Any) -> ScheduleCatalog:
    """Parse a raw definition document with the default parser."""
    return CatalogParser().parse(raw)


def parse_settings(raw: Any) -> Settings:
    """Parse ``settings.json`` contents, defaulting missing fields."""
    root = _as_dict(raw)
    defaults = Settings()
    week = _as_str(root.get("current_week"), defaults.current_week) or defaults.current_week
    year_level = _as_number(root.get("year_level"), defaults.year_level)
    return Settings(current_week=week, year_level=int(year_level))


def parse_activity(raw: Any) -> Activity:
    """Parse one activity record."""
    entry = _as_dict(raw)
    return Activity(
        id=_as_str(entry.get("id")) or str(uuid.uuid4()),
        title=_as_str(entry.get("title")),
        description=_as_str(entry.get("description")),
        start=_parse_timestamp(entry.get("start_time")),
        end=_parse_timestamp(entry.get("end_time")),
        color=_as_color(entry.get("color"), ACTIVITY_COLOR),
    )


def parse_subtask(raw: Any) -> Subtask:
    """Parse one subtask record."""
    entry = _as_dict(raw)
    weighting = _as_number(entry.get("weighting"), 1.0)
    completed = entry.get("completed")
    return Subtask(
        id=_as_str(entry.get("id")) or str(uuid.uuid4()),
        title=_as_str(entry.get("title")),
        description=_as_str(entry.get("description")),
        due=_parse_timestamp(entry.get("due_time")),
        weighting=float(weighting),
        completed=completed if isinstance(completed, bool) else False,
    )


def parse_task(raw: Any) -> Task:
    """Parse one task record together with its subtasks."""
    entry = _as_dict(raw)
    subtasks = entry.get("subtasks")
    return Task(
        id=_as_str(entry.get("id")) or str(uuid.uuid4()),
        title=_as_str(entry.get("title")),
        description=_as_str(entry.get("description")),
        start=_parse_timestamp(entry.get("start_time")),
        end=_parse_timestamp(entry.get("end_time")),
        subtasks=[parse_subtask(item) for item in subtasks] if isinstance(subtasks, list) else [],
    )
