"""iCalendar transformer for a resolved timetable window."""

import hashlib
from datetime import datetime
from typing import Optional

from icalendar import Calendar, Event

from catalog.models import Activity, ResolvedPeriod
from .base import BaseTransformer


class ICalTransformer(BaseTransformer):
    """Transformer that converts resolved periods and activities to iCalendar.
    
    Every period and activity becomes one concrete event. Times are written
    as floating local times since the timetable carries no timezone.
    """
    
    UID_DOMAIN = "timetable-wheel.local"
    
    def __init__(self, include_special: bool = True) -> None:
        """Initialize the iCalendar transformer.
        
        Args:
            include_special: If False, skip periods with no bound subject
                (assemblies, free periods).
        """
        self._calendar: Optional[Calendar] = None
        self._include_special = include_special
    
    def _generate_uid(self, kind: str, key: str, start: datetime) -> str:
        """Generate a unique identifier for an event.
        
        Args:
            kind: Record kind ("period" or "activity").
            key: Identifying text of the record.
            start: Start instant of the occurrence.
            
        Returns:
            Unique identifier string.
        """
        unique_string = f"{kind}-{key}-{start.isoformat()}"
        return hashlib.md5(unique_string.encode()).hexdigest() + "@" + self.UID_DOMAIN
    
    def _period_event(self, period: ResolvedPeriod, stamp: datetime) -> Event:
        ical_event = Event()
        ical_event.add("uid", self._generate_uid("period", period.period_label, period.start))
        ical_event.add("dtstart", period.start)
        ical_event.add("dtend", period.end)
        ical_event.add("dtstamp", stamp)
        
        # Summary format: [Period 1] Mathematics
        if period.is_special:
            summary = period.subject_name
        else:
            summary = f"[{period.period_label}] {period.subject_name}"
        ical_event.add("summary", summary)
        
        if period.room:
            ical_event.add("location", period.room)
        if period.teacher:
            ical_event.add("description", period.teacher)
        ical_event.add("categories", ["Timetable"])
        return ical_event
    
    def _activity_event(self, activity: Activity, stamp: datetime) -> Event:
        ical_event = Event()
        ical_event.add("uid", self._generate_uid("activity", activity.id, activity.start))
        ical_event.add("dtstart", activity.start)
        ical_event.add("dtend", activity.end)
        ical_event.add("dtstamp", stamp)
        ical_event.add("summary", activity.title)
        if activity.description:
            ical_event.add("description", activity.description)
        ical_event.add("categories", ["Activity"])
        return ical_event
    
    def transform(
        self,
        periods: list[ResolvedPeriod],
        activities: list[Activity],
        start: datetime,
        end: datetime
    ) -> Calendar:
        """Transform a resolved window into iCalendar format.
        
        Args:
            periods: Resolved timetable periods.
            activities: Activities; records without both timestamps are
                skipped.
            start: Window start.
            end: Window end.
            
        Returns:
            iCalendar Calendar object.
        """
        self._calendar = Calendar()
        self._calendar.add("prodid", "-//Timetable Wheel//timetable-wheel//EN")
        self._calendar.add("version", "2.0")
        self._calendar.add("calscale", "GREGORIAN")
        self._calendar.add("method", "PUBLISH")
        self._calendar.add("x-wr-calname", f"Timetable {start:%Y-%m-%d %H:%M} - {end:%Y-%m-%d %H:%M}")
        
        stamp = datetime.now()
        for period in periods:
            if period.is_special and not self._include_special:
                continue
            self._calendar.add_component(self._period_event(period, stamp))
        
        for activity in activities:
            if activity.start is None or activity.end is None:
                continue
            self._calendar.add_component(self._activity_event(activity, stamp))
        
        return self._calendar
    
    def save(self, output_path: str) -> None:
        """Save the calendar to an .ics file.
        
        Args:
            output_path: Path to the output file.
            
        Raises:
            RuntimeError: If transform() hasn't been called yet.
        """
        if self._calendar is None:
            raise RuntimeError("No calendar data. Call transform() first.")
        
        with open(output_path, "wb") as f:
            f.write(self._calendar.to_ical())
