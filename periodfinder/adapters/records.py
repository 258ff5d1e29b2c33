"""
Conversion of stored timetable rows into domain objects.

Rows use the column names of the hosted tables:

    timetable_slots: id, day, start_time, end_time, subject, teacher, room, color
    breaks:          id, name, start_time, end_time
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, TypeVar

from ..domain.exceptions import ScheduleDataError
from ..domain.models import Break, ClassSlot, TimeInterval, Weekday

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class TimetableRecords:
    """Raw rows as fetched from storage, before conversion."""
    slots: List[Dict[str, Any]] = field(default_factory=list)
    breaks: List[Dict[str, Any]] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.slots and not self.breaks


def slot_from_record(record: Mapping[str, Any]) -> ClassSlot:
    """
    Build a ClassSlot from a ``timetable_slots`` row.

    Raises:
        ScheduleDataError: If a required column is missing or a value is invalid
    """
    try:
        day = Weekday.from_name(record["day"])
        if not day.is_school_day:
            raise ValueError(f"lessons can only be scheduled Monday to Friday, got {day.label}")

        return ClassSlot(
            id=str(record["id"]),
            day=day,
            interval=TimeInterval.parse(record["start_time"], record["end_time"]),
            subject=str(record["subject"]),
            teacher=record.get("teacher") or None,
            room=record.get("room") or None,
            color=record.get("color") or None,
        )
    except KeyError as exc:
        raise ScheduleDataError(f"Timetable slot record is missing column {exc}") from exc
    except ValueError as exc:
        raise ScheduleDataError(f"Invalid timetable slot {record.get('id')!r}: {exc}") from exc


def break_from_record(record: Mapping[str, Any]) -> Break:
    """
    Build a Break from a ``breaks`` row.

    Raises:
        ScheduleDataError: If a required column is missing or a value is invalid
    """
    try:
        return Break(
            id=str(record["id"]),
            name=str(record["name"]),
            interval=TimeInterval.parse(record["start_time"], record["end_time"]),
        )
    except KeyError as exc:
        raise ScheduleDataError(f"Break record is missing column {exc}") from exc
    except ValueError as exc:
        raise ScheduleDataError(f"Invalid break {record.get('id')!r}: {exc}") from exc


def convert_records(
    records: Iterable[Mapping[str, Any]],
    converter: Callable[[Mapping[str, Any]], T]
) -> List[T]:
    """
    Convert rows, skipping the ones that cannot be parsed.

    A single broken row should not hide the rest of the timetable, so
    failures are logged and dropped.
    """
    converted: List[T] = []

    for record in records:
        try:
            converted.append(converter(record))
        except ScheduleDataError as exc:
            logger.warning("Skipping timetable record: %s", exc)

    return converted
