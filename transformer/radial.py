"""Radial projection of a rolling time window onto a donut chart."""

import json
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Iterable, Optional

from catalog.models import PLACEHOLDER_COLOR, Activity, ResolvedPeriod
from .base import BaseTransformer

SPAN = timedelta(hours=12)
SPAN_MINUTES = 720.0


class ChartMode(Enum):
    """Which interval streams the chart shows."""
    
    ACTIVITIES = "activities"
    TIMETABLE = "timetable"
    COMBINED = "combined"


@dataclass(frozen=True)
class Band:
    """Stroke width and inset of an arc band, as fractions of ring thickness."""
    
    width_factor: float
    inset_factor: float


FULL_BAND = Band(width_factor=0.85, inset_factor=0.30)
INNER_BAND = Band(width_factor=0.5, inset_factor=0.75)
OUTER_BAND = Band(width_factor=0.5, inset_factor=0.25)


@dataclass(frozen=True)
class DisplayArc:
    """A window-clipped interval ready to draw on the circular axis."""
    
    start: datetime
    end: datetime
    start_minutes: float  # relative to now
    span_minutes: float
    start_angle: float
    span_angle: float
    color: str
    label: str
    category: str  # "Timetable" or "Activity"
    band: Band


@dataclass(frozen=True)
class HourTick:
    minutes: float
    angle: float
    label: str


def minutes_to_angle(minutes: float, span_minutes: float = SPAN_MINUTES) -> float:
    """Map minutes from now to degrees, with now at the top (-90).
    
    Args:
        minutes: Minutes elapsed since now.
        span_minutes: Minutes covered by one full revolution.
        
    Returns:
        Angle in degrees.
    """
    if span_minutes <= 0:
        raise ValueError(f"Span must be positive, got {span_minutes} minutes")
    return -90.0 + (minutes / span_minutes) * 360.0


def hand_angle() -> float:
    """Angle of the "now" hand."""
    return minutes_to_angle(0.0)


def _minutes(delta: timedelta) -> float:
    return delta.total_seconds() / 60.0


def _clip(
    start: datetime,
    end: datetime,
    now: datetime,
    window_end: datetime
) -> Optional[tuple[datetime, datetime]]:
    clipped_start = max(start, now)
    clipped_end = min(end, window_end)
    if clipped_end <= clipped_start:
        return None
    return clipped_start, clipped_end


def _make_arc(
    start: datetime,
    end: datetime,
    now: datetime,
    span: timedelta,
    color: str,
    label: str,
    category: str,
    band: Band
) -> Optional[DisplayArc]:
    clipped = _clip(start, end, now, now + span)
    if clipped is None:
        return None
    
    clipped_start, clipped_end = clipped
    span_minutes = _minutes(span)
    start_minutes = _minutes(clipped_start - now)
    arc_minutes = _minutes(clipped_end - clipped_start)
    return DisplayArc(
        start=clipped_start,
        end=clipped_end,
        start_minutes=start_minutes,
        span_minutes=arc_minutes,
        start_angle=minutes_to_angle(start_minutes, span_minutes),
        span_angle=arc_minutes / span_minutes * 360.0,
        color=color,
        label=label,
        category=category,
        band=band,
    )


def _period_arcs(
    periods: Iterable[ResolvedPeriod],
    now: datetime,
    span: timedelta,
    band: Band
) -> list[DisplayArc]:
    arcs = (
        _make_arc(p.start, p.end, now, span, p.color or PLACEHOLDER_COLOR, p.subject_name, "Timetable", band)
        for p in periods
    )
    return [arc for arc in arcs if arc is not None]


def _activity_arcs(
    activities: Iterable[Activity],
    now: datetime,
    span: timedelta,
    band: Band
) -> list[DisplayArc]:
    arcs = (
        _make_arc(a.start, a.end, now, span, a.color, a.title, "Activity", band)
        for a in activities
        if a.start is not None and a.end is not None
    )
    return [arc for arc in arcs if arc is not None]


def project_arcs(
    now: datetime,
    span: timedelta,
    mode: ChartMode,
    periods: Iterable[ResolvedPeriod],
    activities: Iterable[Activity]
) -> list[DisplayArc]:
    """Project periods and activities onto the window ``[now, now + span)``.
    
    Each interval is clipped to the window and dropped when nothing of it
    remains. In combined mode the period arcs come first, on the inner
    band, followed by activity arcs on the outer band.
    
    Args:
        now: Current instant, placed at the top of the circle.
        span: Length of the window covered by one revolution.
        mode: Which streams to show.
        periods: Resolved timetable periods.
        activities: Ad-hoc activities.
        
    Returns:
        Arcs in drawing order.
    """
    if span <= timedelta(0):
        return []
    
    if mode is ChartMode.ACTIVITIES:
        return _activity_arcs(activities, now, span, FULL_BAND)
    elif mode is ChartMode.TIMETABLE:
        return _period_arcs(periods, now, span, FULL_BAND)
    elif mode is ChartMode.COMBINED:
        return _period_arcs(periods, now, span, INNER_BAND) + _activity_arcs(activities, now, span, OUTER_BAND)
    raise ValueError(f"Unknown chart mode: {mode!r}")


def hour_ticks(now: datetime, span: timedelta = SPAN) -> list[HourTick]:
    """Hour labels around the circle, one per hour from now to now + span."""
    span_minutes = _minutes(span)
    ticks = []
    for hour in range(int(span_minutes // 60) + 1):
        minutes = hour * 60.0
        ticks.append(HourTick(
            minutes=minutes,
            angle=minutes_to_angle(minutes, span_minutes),
            label=(now + timedelta(minutes=minutes)).strftime("%H"),
        ))
    return ticks


class RadialTransformer(BaseTransformer):
    """Transformer that projects a window onto the donut chart axis."""
    
    def __init__(self, mode: ChartMode = ChartMode.COMBINED) -> None:
        """Initialize the radial transformer.
        
        Args:
            mode: Which interval streams to project.
        """
        self._mode = mode
        self._payload: Optional[dict] = None
    
    @staticmethod
    def _arc_to_dict(arc: DisplayArc) -> dict:
        return {
            "start": arc.start.isoformat(),
            "end": arc.end.isoformat(),
            "start_minutes": arc.start_minutes,
            "span_minutes": arc.span_minutes,
            "start_angle": arc.start_angle,
            "span_angle": arc.span_angle,
            "color": arc.color,
            "label": arc.label,
            "category": arc.category,
            "width_factor": arc.band.width_factor,
            "inset_factor": arc.band.inset_factor,
        }
    
    def transform(
        self,
        periods: list[ResolvedPeriod],
        activities: list[Activity],
        start: datetime,
        end: datetime
    ) -> list[DisplayArc]:
        """Project the window ``[start, end)`` with ``start`` as now.
        
        Args:
            periods: Resolved timetable periods.
            activities: Ad-hoc activities.
            start: Current instant.
            end: End of the visible window.
            
        Returns:
            Arcs in drawing order.
        """
        span = end - start
        arcs = project_arcs(start, span, self._mode, periods, activities)
        
        self._payload = {
            "now": start.isoformat(),
            "span_minutes": _minutes(span),
            "mode": self._mode.value,
            "hand_angle": hand_angle(),
            "ticks": [
                {"minutes": t.minutes, "angle": t.angle, "label": t.label}
                for t in (hour_ticks(start, span) if span > timedelta(0) else [])
            ],
            "arcs": [self._arc_to_dict(arc) for arc in arcs],
        }
        return arcs
    
    def save(self, output_path: str) -> None:
        """Save the chart payload to a JSON file.
        
        Args:
            output_path: Path to the output file.
            
        Raises:
            RuntimeError: If transform() hasn't been called yet.
        """
        if self._payload is None:
            raise RuntimeError("No chart data. Call transform() first.")
        
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(self._payload, f, indent=2)
