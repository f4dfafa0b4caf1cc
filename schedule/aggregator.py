"""Aggregation of periods and activities over a forward time window."""

from datetime import datetime, time, timedelta
from typing import Iterable, Optional

from loguru import logger

from catalog.models import Activity, ResolvedPeriod, ScheduleCatalog
from .resolver import WEDNESDAY_OVERRIDE, TemplateOverride, resolve_day


def _intersects(start: datetime, end: datetime, window_start: datetime, window_end: datetime) -> bool:
    return start < window_end and end > window_start


def periods_in_window(
    catalog: ScheduleCatalog,
    week_designator: str,
    year_level: int,
    start: datetime,
    end: datetime,
    policy: Optional[TemplateOverride] = WEDNESDAY_OVERRIDE,
) -> list[ResolvedPeriod]:
    """Collect the periods intersecting the window ``[start, end)``.
    
    Days are walked forward from ``start``'s date until a day begins at or
    after ``end``. Periods keep their full start and end instants; clipping
    to the window is left to the projection.
    
    Args:
        catalog: Schedule catalog snapshot.
        week_designator: Week schedule to use ("A" or "B", any case).
        year_level: Year level for the template override.
        start: Window start (inclusive).
        end: Window end (exclusive).
        policy: Template override passed through to the day resolver.
        
    Returns:
        Intersecting periods sorted by start instant. Empty when
        ``start >= end``.
    """
    if start >= end:
        return []
    
    result: list[ResolvedPeriod] = []
    cursor = start.date()
    days = 0
    while datetime.combine(cursor, time.min) < end:
        for period in resolve_day(catalog, cursor, week_designator, year_level, policy):
            if _intersects(period.start, period.end, start, end):
                result.append(period)
        cursor += timedelta(days=1)
        days += 1
    
    result.sort(key=lambda p: p.start)
    logger.debug(f"Resolved {len(result)} periods over {days} day(s) for week {week_designator.upper()}")
    return result


def activities_in_window(
    activities: Iterable[Activity],
    start: datetime,
    end: datetime,
) -> list[Activity]:
    """Select the activities intersecting the window ``[start, end)``.
    
    Activities without both timestamps are ignored.
    """
    if start >= end:
        return []
    
    result = [
        activity for activity in activities
        if activity.start is not None
        and activity.end is not None
        and _intersects(activity.start, activity.end, start, end)
    ]
    result.sort(key=lambda a: a.start)
    return result
