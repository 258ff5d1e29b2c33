"""
Current/next class resolution over a weekly timetable.

Pure domain logic: no clock reads, no I/O, no state. The caller captures
one instant and passes it in, so containment and progress always agree.
"""

from datetime import datetime
from typing import Optional, Sequence, Tuple

from .models import SCHOOL_DAYS, ClassSlot, ResolutionResult, TimeOfDay, WeekSchedule, Weekday


class ScheduleResolver:
    """
    Determines the class in progress, the class that follows and how far
    the current class has advanced.

    Algorithm:
    1. Weekends have no current class; the search for the next one starts Monday
    2. Scan today's slots in start-time order for one containing ``now``,
       or else the first one starting after ``now``
    3. If nothing follows today, walk forward through school days
       (Friday wraps to Monday) and take the first slot of the first
       non-empty day
    4. Compute progress through the current slot, clamped to [0, 1]
    """

    def resolve(self, schedule: WeekSchedule, now: datetime) -> ResolutionResult:
        """
        Resolve the timetable at a given instant.

        Args:
            schedule: The week to resolve against
            now: The instant of interest; only its weekday and wall-clock
                minute are used

        Returns:
            ResolutionResult with current slot, next slot and progress
        """
        today = Weekday.of(now)
        minute = TimeOfDay.from_datetime(now).minutes

        current: Optional[ClassSlot] = None
        upcoming: Optional[ClassSlot] = None

        if today.is_school_day:
            current, upcoming = self._scan_day(schedule.slots_for(today), minute)

        if upcoming is None:
            upcoming = self._first_slot_after(schedule, today)

        progress = self._progress(current, minute) if current is not None else None

        return ResolutionResult(current=current, next=upcoming, progress=progress)

    def _scan_day(
        self,
        day_slots: Sequence[ClassSlot],
        minute: int
    ) -> Tuple[Optional[ClassSlot], Optional[ClassSlot]]:
        """
        Find the slot containing ``minute`` and its successor, or the first
        slot still to come.
        """
        # Re-sort rather than trust the builder; the winner among duplicates
        # must not depend on input order.
        ordered = sorted(day_slots, key=ClassSlot.sort_key)

        for index, slot in enumerate(ordered):
            if slot.interval.contains(minute):
                following = ordered[index + 1] if index + 1 < len(ordered) else None
                return slot, following

            if minute < slot.interval.start.minutes:
                return None, slot

        return None, None

    def _first_slot_after(self, schedule: WeekSchedule, today: Weekday) -> Optional[ClassSlot]:
        """
        First slot of the nearest following school day that has any.

        Five steps cover every school day once; from a school day the last
        step lands on the same weekday of the following week.
        """
        day = today
        for _ in range(len(SCHOOL_DAYS)):
            day = day.next_school_day()
            day_slots = schedule.slots_for(day)
            if day_slots:
                return min(day_slots, key=ClassSlot.sort_key)
        return None

    def _progress(self, slot: ClassSlot, minute: int) -> float:
        elapsed = minute - slot.interval.start.minutes
        fraction = elapsed / slot.interval.duration_minutes()
        return min(max(fraction, 0.0), 1.0)


_default_resolver = ScheduleResolver()


def resolve(schedule: WeekSchedule, now: datetime) -> ResolutionResult:
    """Resolve ``schedule`` at ``now`` with a shared stateless resolver."""
    return _default_resolver.resolve(schedule, now)
