from datetime import date
from unittest.mock import AsyncMock

import pytest

from studymap.application.heatmap.service import HeatmapService
from studymap.domain.activity.models import DailyActivityRecord
from studymap.domain.exceptions import ActivitySourceError


@pytest.fixture
def mock_repo():
    return AsyncMock()


@pytest.mark.asyncio
async def test_build_report_orchestration(mock_repo, today):
    mock_repo.get_daily_activity.return_value = [
        DailyActivityRecord(date(2024, 6, 15), 4, 1, 60000),
        DailyActivityRecord(date(2024, 6, 14), 25, 2, None),
    ]
    service = HeatmapService(activity_repo=mock_repo)

    report = await service.build_report(today)

    assert report.grid.end_date == today
    assert report.stats.active_days == 2
    assert report.stats.total_cards == 29
    assert report.stats.max_cards_in_day == 25
    assert report.streak.current_streak == 2
    mock_repo.get_daily_activity.assert_awaited_once()


@pytest.mark.asyncio
async def test_clock_used_when_today_missing(mock_repo):
    mock_repo.get_daily_activity.return_value = []
    service = HeatmapService(activity_repo=mock_repo, clock=lambda: date(2024, 1, 15))

    report = await service.build_report()

    assert report.grid.end_date == date(2024, 1, 15)
    assert report.stats.study_rate == 0


@pytest.mark.asyncio
async def test_custom_thresholds_applied(mock_repo, today):
    mock_repo.get_daily_activity.return_value = [DailyActivityRecord(today, 4, 1)]
    service = HeatmapService(activity_repo=mock_repo, thresholds=(1, 2, 3))

    report = await service.build_report(today)

    assert report.grid.weeks[-1].days[-1].level == 4


def test_invalid_thresholds_rejected(mock_repo):
    with pytest.raises(ValueError):
        HeatmapService(activity_repo=mock_repo, thresholds=(3, 2, 1))


@pytest.mark.asyncio
async def test_source_errors_propagate(mock_repo, today):
    mock_repo.get_daily_activity.side_effect = ActivitySourceError("down")
    service = HeatmapService(activity_repo=mock_repo)

    with pytest.raises(ActivitySourceError):
        await service.build_report(today)


@pytest.mark.asyncio
async def test_duplicate_dates_resolved_once_for_grid_and_streak(mock_repo, today):
    mock_repo.get_daily_activity.return_value = [
        DailyActivityRecord(today, 5, 1),
        DailyActivityRecord(today, 0, 0),
    ]
    service = HeatmapService(activity_repo=mock_repo)

    report = await service.build_report(today)

    assert report.stats.active_days == 0
    assert report.streak.current_streak == 0
    assert report.streak.total_study_days == 0
