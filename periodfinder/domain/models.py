"""
Domain models for weekly timetables: times of day, lesson slots and breaks.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Dict, Iterable, List, Optional, Tuple

from .exceptions import ScheduleDataError


MINUTES_PER_DAY = 24 * 60


@dataclass(frozen=True, order=True)
class TimeOfDay:
    """
    Wall-clock time within a day, stored as minutes since midnight.
    """
    minutes: int

    def __post_init__(self):
        if not 0 <= self.minutes < MINUTES_PER_DAY:
            raise ValueError(f"Time of day must be within 00:00-23:59, got {self.minutes} minutes")

    @classmethod
    def of(cls, hour: int, minute: int = 0) -> "TimeOfDay":
        """Create from hour and minute."""
        if not 0 <= hour <= 23:
            raise ValueError(f"Hour must be between 0 and 23, got {hour}")
        if not 0 <= minute <= 59:
            raise ValueError(f"Minute must be between 0 and 59, got {minute}")
        return cls(hour * 60 + minute)

    @classmethod
    def parse(cls, text: str) -> "TimeOfDay":
        """
        Parse a "HH:MM" string.

        Database time columns come back as "HH:MM:SS"; the seconds part is
        accepted and dropped.

        Raises:
            ValueError: If the text is not a valid time of day
        """
        parts = str(text).strip().split(":")
        if len(parts) not in (2, 3) or not all(p.isdigit() for p in parts):
            raise ValueError(f"Invalid time of day: '{text}' (expected HH:MM)")
        return cls.of(int(parts[0]), int(parts[1]))

    @classmethod
    def from_datetime(cls, dt: datetime) -> "TimeOfDay":
        """Truncate a datetime to its minute of the day."""
        return cls(dt.hour * 60 + dt.minute)

    @property
    def hour(self) -> int:
        return self.minutes // 60

    @property
    def minute(self) -> int:
        return self.minutes % 60

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


@dataclass(frozen=True)
class TimeInterval:
    """
    Half-open interval [start, end) within a single day.

    Invariant: start must be before end.
    """
    start: TimeOfDay
    end: TimeOfDay

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(f"Start time {self.start} must be before end time {self.end}")

    @classmethod
    def parse(cls, start: str, end: str) -> "TimeInterval":
        return cls(start=TimeOfDay.parse(start), end=TimeOfDay.parse(end))

    def contains(self, minute: int) -> bool:
        """Check if a minute of the day falls inside the interval (end excluded)."""
        return self.start.minutes <= minute < self.end.minutes

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return self.end.minutes - self.start.minutes

    def overlaps(self, other: "TimeInterval") -> bool:
        """Check if this interval overlaps with another."""
        return self.start < other.end and self.end > other.start

    def __str__(self) -> str:
        return f"{self.start} - {self.end}"


class Weekday(IntEnum):
    """
    Day of the week, numbered like ``datetime.weekday()`` (Monday is 0).

    Only Monday to Friday carry lessons; Saturday and Sunday exist so that
    any real date can be classified.
    """
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @property
    def is_school_day(self) -> bool:
        return self <= Weekday.FRIDAY

    @property
    def label(self) -> str:
        """Display name, e.g. "Monday"."""
        return self.name.capitalize()

    def next_school_day(self) -> "Weekday":
        """Following school day; Friday, Saturday and Sunday wrap to Monday."""
        if self >= Weekday.FRIDAY:
            return Weekday.MONDAY
        return Weekday(self + 1)

    @classmethod
    def from_name(cls, name: str) -> "Weekday":
        """
        Look up a weekday by its English name (case-insensitive).

        Raises:
            ValueError: If the name is not a weekday
        """
        try:
            return cls[str(name).strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown weekday: '{name}'") from None

    @classmethod
    def of(cls, dt: datetime) -> "Weekday":
        """Weekday of a datetime."""
        return cls(dt.weekday())


SCHOOL_DAYS: Tuple[Weekday, ...] = tuple(day for day in Weekday if day.is_school_day)


@dataclass(frozen=True)
class ClassSlot:
    """
    One scheduled lesson on a given school day.
    """
    id: str
    day: Weekday
    interval: TimeInterval
    subject: str
    teacher: Optional[str] = None
    room: Optional[str] = None
    color: Optional[str] = None  # display hint stored with the slot

    def sort_key(self) -> Tuple[int, int, str]:
        return (self.interval.start.minutes, self.interval.end.minutes, self.id)


@dataclass(frozen=True)
class Break:
    """
    A non-lesson interval that applies to every school day.
    """
    id: str
    name: str
    interval: TimeInterval


@dataclass(frozen=True)
class WeekSchedule:
    """
    Immutable weekly timetable: per-day slots sorted by start time plus the
    shared breaks.

    Build instances with ``WeekSchedule.build`` so the ordering and weekday
    guarantees hold. A schedule is rebuilt from scratch whenever the
    underlying records change.
    """
    days: Dict[Weekday, Tuple[ClassSlot, ...]] = field(default_factory=dict)
    breaks: Tuple[Break, ...] = ()

    @classmethod
    def build(
        cls,
        slots: Iterable[ClassSlot] = (),
        breaks: Iterable[Break] = ()
    ) -> "WeekSchedule":
        """
        Assemble a schedule from loose slots and breaks.

        Raises:
            ScheduleDataError: If a slot is keyed to Saturday or Sunday
        """
        per_day: Dict[Weekday, List[ClassSlot]] = {day: [] for day in SCHOOL_DAYS}

        for slot in slots:
            if not slot.day.is_school_day:
                raise ScheduleDataError(
                    f"Slot {slot.id} ({slot.subject}) is scheduled on {slot.day.label}, "
                    f"only Monday to Friday can hold lessons"
                )
            per_day[slot.day].append(slot)

        days = {
            day: tuple(sorted(day_slots, key=ClassSlot.sort_key))
            for day, day_slots in per_day.items()
        }
        sorted_breaks = tuple(sorted(breaks, key=lambda b: (b.interval.start, b.interval.end)))

        return cls(days=days, breaks=sorted_breaks)

    def slots_for(self, day: Weekday) -> Tuple[ClassSlot, ...]:
        """Slots of a day in start-time order; weekends are always empty."""
        return self.days.get(day, ())

    def all_slots(self) -> List[ClassSlot]:
        """All slots, Monday first."""
        return [slot for day in SCHOOL_DAYS for slot in self.slots_for(day)]

    def is_empty(self) -> bool:
        return not any(self.days.values())

    def break_at(self, minute: int) -> Optional[Break]:
        """Return the break covering a minute of the day, if any."""
        for item in self.breaks:
            if item.interval.contains(minute):
                return item
        return None


@dataclass(frozen=True)
class ResolutionResult:
    """
    What is happening at a given instant.

    ``progress`` is only set alongside ``current`` and lies within [0, 1].
    """
    current: Optional[ClassSlot] = None
    next: Optional[ClassSlot] = None
    progress: Optional[float] = None

    @property
    def progress_percent(self) -> Optional[int]:
        if self.progress is None:
            return None
        return round(self.progress * 100)
