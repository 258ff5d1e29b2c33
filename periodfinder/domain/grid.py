"""
Weekly grid view: one row per distinct time interval, lessons and breaks merged.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from .models import SCHOOL_DAYS, Break, ClassSlot, TimeInterval, WeekSchedule, Weekday


@dataclass(frozen=True)
class GridRow:
    """
    A row of the weekly timetable table.

    Break rows carry ``break_item`` and no cells; lesson rows carry one
    cell per school day, ``None`` where that day has no lesson.
    """
    interval: TimeInterval
    break_item: Optional[Break] = None
    cells: Dict[Weekday, Optional[ClassSlot]] = field(default_factory=dict)

    @property
    def is_break(self) -> bool:
        return self.break_item is not None


def build_grid(schedule: WeekSchedule) -> List[GridRow]:
    """
    Lay out a schedule as table rows sorted by start time.

    Intervals shared by several days collapse into one row. When a break
    has exactly the same interval as a lesson, the lesson row wins.
    """
    seen: Set[Tuple[int, int]] = set()
    entries: List[Tuple[TimeInterval, Optional[Break]]] = []

    for slot in schedule.all_slots():
        key = (slot.interval.start.minutes, slot.interval.end.minutes)
        if key not in seen:
            seen.add(key)
            entries.append((slot.interval, None))

    for item in schedule.breaks:
        key = (item.interval.start.minutes, item.interval.end.minutes)
        if key not in seen:
            seen.add(key)
            entries.append((item.interval, item))

    # sorted() is stable, so equal starts keep first-occurrence order
    entries.sort(key=lambda entry: entry[0].start)

    rows: List[GridRow] = []
    for interval, break_item in entries:
        if break_item is not None:
            rows.append(GridRow(interval=interval, break_item=break_item))
            continue

        cells = {
            day: _slot_with_interval(schedule.slots_for(day), interval)
            for day in SCHOOL_DAYS
        }
        rows.append(GridRow(interval=interval, cells=cells))

    return rows


def build_day(schedule: WeekSchedule, day: Weekday) -> List[GridRow]:
    """
    Rows of a single day: its lessons and the shared breaks, in time order.

    Weekends have no rows, breaks included.
    """
    if not day.is_school_day:
        return []

    return [
        row for row in build_grid(schedule)
        if row.is_break or row.cells.get(day) is not None
    ]


def _slot_with_interval(day_slots, interval: TimeInterval) -> Optional[ClassSlot]:
    for slot in day_slots:
        if slot.interval == interval:
            return slot
    return None
