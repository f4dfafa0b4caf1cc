"""Transformer module for converting resolved windows to output formats."""

from .base import BaseTransformer
from .ical_transformer import ICalTransformer
from .radial import (
    SPAN,
    SPAN_MINUTES,
    ChartMode,
    DisplayArc,
    RadialTransformer,
    hand_angle,
    hour_ticks,
    minutes_to_angle,
    project_arcs,
)

__all__ = [
    "BaseTransformer",
    "ChartMode",
    "DisplayArc",
    "ICalTransformer",
    "RadialTransformer",
    "SPAN",
    "SPAN_MINUTES",
    "hand_angle",
    "hour_ticks",
    "minutes_to_angle",
    "project_arcs",
]
