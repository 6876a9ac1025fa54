"""
HTTP Activity Repository — Infrastructure adapter for the backend's daily
activity query exposed over HTTP.
"""

import logging

import httpx

from studymap.domain.activity.models import DailyActivityRecord
from studymap.domain.activity.ports import ActivityRepository
from studymap.domain.constants import REQUEST_TIMEOUT
from studymap.domain.exceptions import ActivitySourceError

from .payload import parse_activity_payload


class HttpActivityRepository(ActivityRepository):
    """Fetches daily activity with a GET request returning JSON."""

    def __init__(
        self,
        url: str,
        timeout: float = REQUEST_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ):
        self.logger = logging.getLogger(__name__)
        self.url = url
        self.timeout = timeout
        self._client = client

    async def get_daily_activity(self) -> list[DailyActivityRecord]:
        try:
            if self._client is None:
                self._client = httpx.AsyncClient(timeout=self.timeout)
            resp = await self._client.get(self.url)
            resp.raise_for_status()
            payload = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            self.logger.error(f"Activity request to {self.url} failed: {e}")
            raise ActivitySourceError(f"Activity request failed: {e}", source=self.url) from e

        records = parse_activity_payload(payload, source=self.url)
        self.logger.debug(f"Fetched {len(records)} activity days from {self.url}")
        return records

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
