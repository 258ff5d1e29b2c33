"""
Timetable source reading from the hosted backend's REST interface.
"""

import asyncio
import logging
from typing import Any, Dict, List

import requests

from ..domain.exceptions import TimetableSourceError
from .records import TimetableRecords

logger = logging.getLogger(__name__)


class RestTimetableSource:
    """
    Client for the PostgREST endpoint that exposes the timetable tables.

    Uses ``GET /rest/v1/<table>?select=*`` with the project API key.
    """

    REST_PATH = "/rest/v1"

    def __init__(
        self,
        base_url: str,
        api_key: str,
        slots_table: str = "timetable_slots",
        breaks_table: str = "breaks",
        timeout: int = 30
    ):
        """
        Initialize the REST client.

        Args:
            base_url: Project URL, e.g. https://xyz.supabase.co
            api_key: Anonymous or service API key
            slots_table: Table holding lesson slots
            breaks_table: Table holding breaks
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.slots_table = slots_table
        self.breaks_table = breaks_table
        self.timeout = timeout
        self.headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json"
        }

    async def fetch_records(self) -> TimetableRecords:
        """
        Fetch slot and break rows.

        Raises:
            TimetableSourceError: If a request fails or returns unexpected data
        """
        slots, breaks = await asyncio.gather(
            asyncio.to_thread(self._get_table, self.slots_table),
            asyncio.to_thread(self._get_table, self.breaks_table),
        )
        return TimetableRecords(slots=slots, breaks=breaks)

    def _get_table(self, table: str) -> List[Dict[str, Any]]:
        url = f"{self.base_url}{self.REST_PATH}/{table}"

        try:
            response = requests.get(
                url,
                headers=self.headers,
                params={"select": "*"},
                timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()

        except requests.exceptions.RequestException as e:
            raise TimetableSourceError(f"Failed to fetch '{table}': {e}") from e
        except ValueError as e:
            raise TimetableSourceError(f"Response for '{table}' is not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise TimetableSourceError(f"Expected a list of rows for '{table}', got {type(data).__name__}")

        rows = [row for row in data if isinstance(row, dict)]
        if len(rows) != len(data):
            logger.warning("Ignoring %d non-object row(s) from %s", len(data) - len(rows), table)

        logger.debug("Fetched %d row(s) from %s", len(rows), table)
        return rows
