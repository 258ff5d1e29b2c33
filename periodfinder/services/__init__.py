"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .timetable_service import TimetableService, TimetableSourceProtocol, TimetableStatus

__all__ = ["TimetableService", "TimetableSourceProtocol", "TimetableStatus"]
