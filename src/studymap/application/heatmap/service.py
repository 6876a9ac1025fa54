"""
Heatmap Service — Application layer orchestrator.

Fetches daily activity from the repository and derives the grid, its summary
statistics and the streak figures.
"""

import logging
from collections.abc import Callable, Sequence
from datetime import date

from studymap.domain.activity.models import HeatmapReport
from studymap.domain.activity.ports import ActivityRepository
from studymap.domain.constants import ACTIVITY_LEVEL_THRESHOLDS

from .grid_builder import build_lookup, generate_heatmap_grid, validate_thresholds
from .stats_calculator import calculate_heatmap_stats
from .streaks import compute_streaks, study_dates

logger = logging.getLogger(__name__)


class HeatmapService:
    """
    Application service for building study history reports.

    Depends on the ActivityRepository abstraction. The clock is only read
    here; the computation modules always receive an explicit date.
    """

    def __init__(
        self,
        activity_repo: ActivityRepository,
        thresholds: Sequence[int] = ACTIVITY_LEVEL_THRESHOLDS,
        clock: Callable[[], date] = date.today,
    ):
        """
        Args:
            activity_repo: The repository (port) for fetching daily activity.
            thresholds: Activity level thresholds.
            clock: Returns the current local date when none is supplied.
        """
        self._repo = activity_repo
        self._thresholds = validate_thresholds(thresholds)
        self._clock = clock

    async def build_report(self, today: date | None = None) -> HeatmapReport:
        """
        Build the heatmap, stats and streak for the window ending at ``today``.

        Raises:
            ActivitySourceError: If the repository cannot supply data.
        """
        today = today if today is not None else self._clock()
        records = await self._repo.get_daily_activity()
        logger.debug(f"Building heatmap for {today} from {len(records)} records")

        # One record per date so the grid and the streak agree
        days = list(build_lookup(records).values())
        grid = generate_heatmap_grid(days, today=today, thresholds=self._thresholds)
        stats = calculate_heatmap_stats(grid)
        streak = compute_streaks(study_dates(days), today=today)
        return HeatmapReport(grid=grid, stats=stats, streak=streak)
