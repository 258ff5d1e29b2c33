"""
Adapters layer - Loading timetable records from files and the hosted backend.
"""

from .json_source import JsonTimetableSource
from .records import TimetableRecords, break_from_record, slot_from_record
from .rest_source import RestTimetableSource

__all__ = [
    "JsonTimetableSource",
    "RestTimetableSource",
    "TimetableRecords",
    "break_from_record",
    "slot_from_record",
]
