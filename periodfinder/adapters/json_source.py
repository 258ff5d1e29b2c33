"""
Timetable source backed by a local JSON file.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from ..domain.exceptions import TimetableSourceError
from .records import TimetableRecords

logger = logging.getLogger(__name__)

DEMO_DATA_FILE = Path(__file__).parent / "demo_timetable.json"


class JsonTimetableSource:
    """
    Loads timetable rows from a JSON document of the form::

        {"timetable_slots": [...], "breaks": [...]}

    Each row uses the same columns as the hosted tables, so an export of
    the database can be used directly.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    @classmethod
    def demo(cls) -> "JsonTimetableSource":
        """Source for the bundled demo week."""
        return cls(DEMO_DATA_FILE)

    async def fetch_records(self) -> TimetableRecords:
        """
        Read the file and return its rows.

        Raises:
            TimetableSourceError: If the file is missing or not valid JSON
        """
        if not self.path.exists():
            raise TimetableSourceError(f"Timetable file not found: {self.path}")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise TimetableSourceError(f"Could not read timetable file {self.path}: {exc}") from exc

        if not isinstance(data, dict):
            raise TimetableSourceError(f"Timetable file {self.path} must contain a JSON object.")

        records = TimetableRecords(
            slots=self._rows(data, "timetable_slots"),
            breaks=self._rows(data, "breaks"),
        )
        logger.debug(
            "Loaded %d slot(s) and %d break(s) from %s",
            len(records.slots), len(records.breaks), self.path
        )
        return records

    def _rows(self, data: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
        rows = data.get(key, [])
        if not isinstance(rows, list):
            raise TimetableSourceError(f"'{key}' in {self.path} must be a list.")
        return [row for row in rows if isinstance(row, dict)]
