"""
Tests for the weekly grid layout.
"""

from periodfinder.domain.grid import build_day, build_grid
from periodfinder.domain.models import Break, ClassSlot, TimeInterval, WeekSchedule, Weekday


def _slot(slot_id, day, start, end, subject):
    return ClassSlot(id=slot_id, day=day, interval=TimeInterval.parse(start, end), subject=subject)


def _break(break_id, name, start, end):
    return Break(id=break_id, name=name, interval=TimeInterval.parse(start, end))


class TestBuildGrid:
    """Tests for build_grid."""

    def test_rows_merge_days_and_breaks(self):
        """Test shared intervals collapse into one row, sorted by start."""
        monday_math = _slot("1", Weekday.MONDAY, "08:00", "08:45", "Math")
        tuesday_art = _slot("2", Weekday.TUESDAY, "08:00", "08:45", "Art")
        monday_pe = _slot("3", Weekday.MONDAY, "09:00", "09:45", "PE")
        recess = _break("b1", "Recess", "08:45", "09:00")

        schedule = WeekSchedule.build([monday_pe, tuesday_art, monday_math], [recess])
        rows = build_grid(schedule)

        assert [str(row.interval) for row in rows] == [
            "08:00 - 08:45",
            "08:45 - 09:00",
            "09:00 - 09:45",
        ]

        first, middle, last = rows
        assert not first.is_break
        assert first.cells[Weekday.MONDAY] == monday_math
        assert first.cells[Weekday.TUESDAY] == tuesday_art
        assert first.cells[Weekday.FRIDAY] is None

        assert middle.is_break
        assert middle.break_item == recess
        assert middle.cells == {}

        assert last.cells[Weekday.MONDAY] == monday_pe
        assert last.cells[Weekday.TUESDAY] is None

    def test_lesson_wins_over_break_with_same_interval(self):
        """Test a break sharing a lesson's interval does not get its own row."""
        lesson = _slot("1", Weekday.WEDNESDAY, "10:00", "10:45", "Music")
        clash = _break("b1", "Assembly", "10:00", "10:45")

        rows = build_grid(WeekSchedule.build([lesson], [clash]))

        assert len(rows) == 1
        assert not rows[0].is_break
        assert rows[0].cells[Weekday.WEDNESDAY] == lesson

    def test_breaks_only(self):
        """Test a timetable with only breaks still lays them out."""
        rows = build_grid(WeekSchedule.build(breaks=[
            _break("b2", "Lunch", "11:30", "13:00"),
            _break("b1", "Breakfast", "07:15", "07:30"),
        ]))

        assert [row.break_item.name for row in rows] == ["Breakfast", "Lunch"]

    def test_empty_schedule(self):
        """Test an empty schedule has no rows."""
        assert build_grid(WeekSchedule.build()) == []


class TestBuildDay:
    """Tests for build_day."""

    def test_day_keeps_own_lessons_and_breaks(self):
        """Test a day shows its lessons and every break, in time order."""
        monday_math = _slot("1", Weekday.MONDAY, "08:00", "08:45", "Math")
        tuesday_art = _slot("2", Weekday.TUESDAY, "09:00", "09:45", "Art")
        recess = _break("b1", "Recess", "08:45", "09:00")

        schedule = WeekSchedule.build([monday_math, tuesday_art], [recess])
        rows = build_day(schedule, Weekday.MONDAY)

        assert [str(row.interval) for row in rows] == ["08:00 - 08:45", "08:45 - 09:00"]
        assert rows[0].cells[Weekday.MONDAY] == monday_math
        assert rows[1].break_item == recess

    def test_weekend_is_empty(self):
        """Test weekends have no rows, not even breaks."""
        schedule = WeekSchedule.build(
            [_slot("1", Weekday.MONDAY, "08:00", "08:45", "Math")],
            [_break("b1", "Recess", "08:45", "09:00")],
        )

        assert build_day(schedule, Weekday.SATURDAY) == []
        assert build_day(schedule, Weekday.SUNDAY) == []
