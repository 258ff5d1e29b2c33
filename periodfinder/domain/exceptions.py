"""
Domain-specific exception hierarchy for the periodfinder application.
"""


class PeriodFinderError(Exception):
    """Base class for all application-level errors."""


class ScheduleDataError(PeriodFinderError):
    """Raised when timetable records or a schedule are malformed."""


class TimetableSourceError(PeriodFinderError):
    """Raised when timetable records cannot be fetched from storage."""
