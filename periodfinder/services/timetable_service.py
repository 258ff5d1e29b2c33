"""
Application service for loading the timetable and resolving the current class.

The service fetches rows through a source adapter, rebuilds an immutable
``WeekSchedule`` from them and hands it to the domain-level
``ScheduleResolver``. The source is typed as a protocol so tests can plug
in a stub.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol

from ..adapters.json_source import JsonTimetableSource
from ..adapters.records import (
    TimetableRecords,
    break_from_record,
    convert_records,
    slot_from_record,
)
from ..domain.exceptions import TimetableSourceError
from ..domain.models import Break, ResolutionResult, TimeOfDay, WeekSchedule, Weekday
from ..domain.resolver import ScheduleResolver

logger = logging.getLogger(__name__)


class TimetableSourceProtocol(Protocol):
    """Protocol describing the record source behaviour needed by the service."""

    async def fetch_records(self) -> TimetableRecords:
        """Return raw slot and break rows."""


@dataclass(frozen=True)
class TimetableStatus:
    """Resolution result together with the break in progress, if any."""
    at: datetime
    resolution: ResolutionResult
    active_break: Optional[Break] = None


class TimetableService:
    """
    Keeps the current WeekSchedule and answers "what is on now".

    The schedule is never patched: every load builds a new one, and
    ``invalidate`` simply drops it so the next access rebuilds.
    """

    def __init__(
        self,
        source: TimetableSourceProtocol,
        resolver: Optional[ScheduleResolver] = None,
        use_demo_fallback: bool = True,
        demo_source: Optional[TimetableSourceProtocol] = None,
    ) -> None:
        self._source = source
        self._resolver = resolver or ScheduleResolver()
        self._use_demo_fallback = use_demo_fallback
        self._demo_source = demo_source
        self._schedule: Optional[WeekSchedule] = None

    async def load_schedule(self) -> WeekSchedule:
        """
        Fetch records and build a fresh schedule, replacing the cached one.

        Raises:
            TimetableSourceError: If the source cannot be read
        """
        try:
            records = await self._source.fetch_records()
        except TimetableSourceError as exc:
            logger.error("Could not load timetable: %s", exc)
            raise

        if records.is_empty() and self._use_demo_fallback:
            logger.info("Timetable source is empty, using demo timetable")
            demo_source = self._demo_source or JsonTimetableSource.demo()
            records = await demo_source.fetch_records()

        self._schedule = self.build_schedule(records)
        return self._schedule

    async def get_schedule(self) -> WeekSchedule:
        """Return the cached schedule, loading it if necessary."""
        if self._schedule is None:
            return await self.load_schedule()
        return self._schedule

    def invalidate(self) -> None:
        """Forget the cached schedule after the underlying rows changed."""
        self._schedule = None

    async def status_at(self, now: datetime) -> TimetableStatus:
        """
        Resolve the timetable at ``now``.

        ``now`` is captured once by the caller and used for every part of
        the answer.
        """
        schedule = await self.get_schedule()
        resolution = self._resolver.resolve(schedule, now)
        minute = TimeOfDay.from_datetime(now).minutes
        # breaks apply to school days only
        active_break = schedule.break_at(minute) if Weekday.of(now).is_school_day else None

        return TimetableStatus(
            at=now,
            resolution=resolution,
            active_break=active_break,
        )

    @staticmethod
    def build_schedule(records: TimetableRecords) -> WeekSchedule:
        """Convert raw rows into a WeekSchedule, dropping unparsable rows."""
        slots = convert_records(records.slots, slot_from_record)
        breaks = convert_records(records.breaks, break_from_record)

        schedule = WeekSchedule.build(slots, breaks)
        logger.debug("Built schedule with %d slot(s) and %d break(s)", len(slots), len(breaks))
        return schedule
