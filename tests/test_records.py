"""
Tests for record conversion.
"""

import logging

import pytest

from periodfinder.adapters.records import (
    break_from_record,
    convert_records,
    slot_from_record,
)
from periodfinder.domain.exceptions import ScheduleDataError
from periodfinder.domain.models import TimeOfDay, Weekday


class TestSlotFromRecord:
    """Tests for slot_from_record."""

    def test_full_record(self):
        """Test every column is mapped."""
        slot = slot_from_record({
            "id": 7,
            "day": "Tuesday",
            "start_time": "08:15:00",
            "end_time": "09:00:00",
            "subject": "Toán",
            "teacher": "Cô Lan",
            "room": "Room 301",
            "color": "blue",
        })

        assert slot.id == "7"
        assert slot.day == Weekday.TUESDAY
        assert slot.interval.start == TimeOfDay.of(8, 15)
        assert slot.interval.end == TimeOfDay.of(9, 0)
        assert slot.subject == "Toán"
        assert slot.teacher == "Cô Lan"
        assert slot.room == "Room 301"
        assert slot.color == "blue"

    def test_optional_columns_default_to_none(self):
        """Test null or empty optional columns become None."""
        slot = slot_from_record({
            "id": "1",
            "day": "Monday",
            "start_time": "07:30",
            "end_time": "08:15",
            "subject": "Tiếng Pháp",
            "teacher": None,
            "room": "",
        })

        assert slot.teacher is None
        assert slot.room is None
        assert slot.color is None

    def test_missing_column(self):
        """Test a missing column raises ScheduleDataError."""
        with pytest.raises(ScheduleDataError, match="missing column"):
            slot_from_record({"id": "1", "day": "Monday", "start_time": "07:30", "end_time": "08:15"})

    @pytest.mark.parametrize(
        "overrides",
        [
            {"day": "Someday"},
            {"day": "Saturday"},
            {"day": "sunday"},
            {"start_time": "7h30"},
            {"start_time": "09:00", "end_time": "08:00"},
        ],
    )
    def test_invalid_values(self, overrides):
        """Test invalid days and times raise ScheduleDataError."""
        record = {
            "id": "1",
            "day": "Monday",
            "start_time": "07:30",
            "end_time": "08:15",
            "subject": "Math",
        }
        record.update(overrides)

        with pytest.raises(ScheduleDataError):
            slot_from_record(record)


class TestBreakFromRecord:
    """Tests for break_from_record."""

    def test_break_record(self):
        """Test a break row is mapped."""
        item = break_from_record({"id": "break2", "name": "Lunch", "start_time": "11:30", "end_time": "13:00"})

        assert item.name == "Lunch"
        assert item.interval.duration_minutes() == 90

    def test_invalid_break(self):
        """Test an inverted break interval is rejected."""
        with pytest.raises(ScheduleDataError):
            break_from_record({"id": "x", "name": "Oops", "start_time": "13:00", "end_time": "11:30"})


class TestConvertRecords:
    """Tests for convert_records."""

    def test_bad_rows_are_skipped_and_logged(self, caplog):
        """Test one broken row does not discard the others."""
        rows = [
            {"id": "1", "name": "Recess", "start_time": "09:45", "end_time": "10:00"},
            {"id": "2", "name": "Broken"},
        ]

        with caplog.at_level(logging.WARNING, logger="periodfinder.adapters.records"):
            breaks = convert_records(rows, break_from_record)

        assert [b.id for b in breaks] == ["1"]
        assert "Skipping timetable record" in caplog.text

    def test_weekend_row_is_skipped(self, caplog):
        """Test a weekend lesson row is dropped with a warning."""
        rows = [
            {"id": "1", "day": "Friday", "start_time": "08:00", "end_time": "08:45", "subject": "Math"},
            {"id": "2", "day": "Sunday", "start_time": "08:00", "end_time": "08:45", "subject": "Club"},
        ]

        with caplog.at_level(logging.WARNING, logger="periodfinder.adapters.records"):
            slots = convert_records(rows, slot_from_record)

        assert [s.id for s in slots] == ["1"]
        assert "Monday to Friday" in caplog.text
