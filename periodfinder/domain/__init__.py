"""
Domain layer - Pure timetable logic without external dependencies.
"""

from .grid import GridRow, build_day, build_grid
from .models import (
    Break,
    ClassSlot,
    ResolutionResult,
    TimeInterval,
    TimeOfDay,
    WeekSchedule,
    Weekday,
)
from .resolver import ScheduleResolver, resolve

__all__ = [
    "Break",
    "ClassSlot",
    "GridRow",
    "ResolutionResult",
    "ScheduleResolver",
    "TimeInterval",
    "TimeOfDay",
    "WeekSchedule",
    "Weekday",
    "build_day",
    "build_grid",
    "resolve",
]
