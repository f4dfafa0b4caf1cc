"""Data models for the school timetable catalog and user records."""

from dataclasses import dataclass, field
from datetime import datetime, time
from typing import Optional

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday")
PLACEHOLDER_COLOR = "#E0E0E0"
ACTIVITY_COLOR = "#4ECDC4"


@dataclass(frozen=True)
class SubjectDefinition:
    """A named course with its teacher and display colour."""
    
    name: str
    teacher: str = ""
    color: str = PLACEHOLDER_COLOR


@dataclass(frozen=True)
class PeriodTime:
    """One labelled time slot within a day template."""
    
    label: str
    start: time
    end: time
    
    def __post_init__(self) -> None:
        if self.start >= self.end:
            raise ValueError(
                f"Period '{self.label}' must start before it ends "
                f"({self.start:%H:%M} >= {self.end:%H:%M})"
            )


@dataclass(frozen=True)
class DayTemplate:
    """A reusable set of period times, ordered by start time then label."""
    
    name: str
    periods: tuple[PeriodTime, ...] = ()
    
    def __post_init__(self) -> None:
        ordered = tuple(sorted(self.periods, key=lambda p: (p.start, p.label)))
        object.__setattr__(self, "periods", ordered)


@dataclass(frozen=True)
class SubjectSlot:
    """Binds a subject and room to one period label of a weekday."""
    
    period_label: str
    subject_name: str = ""
    room: str = ""


@dataclass(frozen=True)
class DaySchedule:
    """One weekday of a week schedule."""
    
    weekday: str
    template_name: str = ""
    slots: dict[str, SubjectSlot] = field(default_factory=dict)
    
    def __post_init__(self) -> None:
        if self.weekday not in WEEKDAYS:
            raise ValueError(f"Weekday must be one of Monday-Friday, got '{self.weekday}'")


@dataclass(frozen=True)
class WeekSchedule:
    """An alternating week pattern, keyed by its designator ("A" or "B")."""
    
    designator: str
    days: dict[str, DaySchedule] = field(default_factory=dict)
    
    def __post_init__(self) -> None:
        object.__setattr__(self, "designator", self.designator.upper())


@dataclass(frozen=True)
class ScheduleCatalog:
    """The full set of subjects, day templates and week schedules.
    
    Built once per load and treated as an immutable snapshot by every
    resolution query.
    """
    
    subjects: dict[str, SubjectDefinition] = field(default_factory=dict)
    templates: dict[str, DayTemplate] = field(default_factory=dict)
    weeks: dict[str, WeekSchedule] = field(default_factory=dict)
    
    def week(self, designator: str) -> Optional[WeekSchedule]:
        """Look up a week schedule by designator, ignoring case."""
        return self.weeks.get(designator.upper())


@dataclass(frozen=True)
class ResolvedPeriod:
    """A concrete, date-stamped occurrence of a period."""
    
    subject_name: str
    room: str
    teacher: str
    color: str
    start: datetime
    end: datetime
    period_label: str
    is_special: bool = False


@dataclass
class Activity:
    """An ad-hoc appointment created by the user."""
    
    id: str
    title: str = ""
    description: str = ""
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    color: str = ACTIVITY_COLOR


@dataclass
class Subtask:
    """A weighted child record of a task."""
    
    id: str
    title: str = ""
    description: str = ""
    due: Optional[datetime] = None
    weighting: float = 1.0
    completed: bool = False


@dataclass
class Task:
    """A task whose completion is rolled up from weighted subtasks."""
    
    id: str
    title: str = ""
    description: str = ""
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    subtasks: list[Subtask] = field(default_factory=list)


@dataclass
class Settings:
    """User settings driving schedule resolution."""
    
    current_week: str = "A"
    year_level: int = 10
    
    def __post_init__(self) -> None:
        self.current_week = self.current_week.upper()
