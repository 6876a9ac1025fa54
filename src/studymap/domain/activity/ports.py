"""
Ports (interfaces) for study activity retrieval.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod

from .models import DailyActivityRecord


class ActivityRepository(ABC):
    """
    Port for fetching per-day study activity.

    Implementations:
        - FileActivityRepository: Reads a YAML/JSON export from disk.
        - HttpActivityRepository: Fetches the daily activity query result over HTTP.
    """

    @abstractmethod
    async def get_daily_activity(self) -> list[DailyActivityRecord]:
        """
        Fetch daily activity records.

        Returns:
            List of DailyActivityRecord objects, in no particular order.
            May cover any historical range.

        Raises:
            ActivitySourceError: If the source is unreachable or unreadable.
        """
        pass

    async def aclose(self) -> None:
        """Release any connections held by the adapter."""
        return None

    async def __aenter__(self) -> "ActivityRepository":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
