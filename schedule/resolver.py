"""Resolution of a single calendar day into concrete periods."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from catalog.models import (
    PLACEHOLDER_COLOR,
    WEEKDAYS,
    DaySchedule,
    PeriodTime,
    ResolvedPeriod,
    ScheduleCatalog,
)


@dataclass(frozen=True)
class TemplateOverride:
    """Year-level substitution of a day template name.
    
    Any template whose name contains ``trigger`` (ignoring case) is replaced
    by ``senior_template`` when the year level reaches ``threshold`` and by
    ``junior_template`` otherwise.
    """
    
    trigger: str
    threshold: int
    junior_template: str
    senior_template: str
    
    def matches(self, template_name: str) -> bool:
        return self.trigger.casefold() in template_name.casefold()
    
    def apply(self, template_name: str, year_level: int) -> str:
        """Return the template name to look up for the given year level."""
        if not self.matches(template_name):
            return template_name
        if year_level >= self.threshold:
            return self.senior_template
        return self.junior_template


WEDNESDAY_OVERRIDE = TemplateOverride(
    trigger="wednesday",
    threshold=11,
    junior_template="wednesday_year10",
    senior_template="wednesday_year11",
)


def weekday_name(day: date) -> Optional[str]:
    """Return the schedule weekday name for a date, or None on weekends."""
    index = day.weekday()
    return WEEKDAYS[index] if index < len(WEEKDAYS) else None


def _resolve_period(
    catalog: ScheduleCatalog,
    day_schedule: DaySchedule,
    period: PeriodTime,
    day: date,
) -> ResolvedPeriod:
    start = datetime.combine(day, period.start)
    end = datetime.combine(day, period.end)
    
    slot = day_schedule.slots.get(period.label)
    if slot is None:
        # Assemblies, free periods and the like
        return ResolvedPeriod(
            subject_name=period.label.upper(),
            room="",
            teacher="",
            color=PLACEHOLDER_COLOR,
            start=start,
            end=end,
            period_label=period.label,
            is_special=True,
        )
    
    subject = catalog.subjects.get(slot.subject_name)
    return ResolvedPeriod(
        subject_name=slot.subject_name,
        room=slot.room,
        teacher=subject.teacher if subject else "",
        color=subject.color if subject else PLACEHOLDER_COLOR,
        start=start,
        end=end,
        period_label=period.label,
        is_special=False,
    )


def resolve_day(
    catalog: ScheduleCatalog,
    day: date,
    week_designator: str,
    year_level: int,
    policy: Optional[TemplateOverride] = WEDNESDAY_OVERRIDE,
) -> list[ResolvedPeriod]:
    """Resolve the periods that occur on one calendar date.
    
    Args:
        catalog: Schedule catalog snapshot.
        day: Calendar date to resolve.
        week_designator: Week schedule to use ("A" or "B", any case).
        year_level: Year level, consulted only by the template override.
        policy: Template override applied before template lookup, or None
            to use day template names as they are.
        
    Returns:
        Periods in the day template's order. Empty when the week, the
        weekday or the day template is unknown.
    """
    week = catalog.week(week_designator)
    if week is None:
        return []
    
    weekday = weekday_name(day)
    day_schedule = week.days.get(weekday) if weekday else None
    if day_schedule is None:
        return []
    
    template_name = day_schedule.template_name
    if policy is not None:
        template_name = policy.apply(template_name, year_level)
    
    template = catalog.templates.get(template_name)
    if template is None:
        return []
    
    return [_resolve_period(catalog, day_schedule, period, day) for period in template.periods]
