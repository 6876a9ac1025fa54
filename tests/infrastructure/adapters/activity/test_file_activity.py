import json
from datetime import date

import pytest

from studymap.domain.exceptions import ActivitySourceError
from studymap.infrastructure.adapters.activity.file_activity import FileActivityRepository


@pytest.mark.asyncio
async def test_reads_json_list(tmp_path):
    path = tmp_path / "activity.json"
    path.write_text(
        json.dumps(
            [
                {"date": "2024-06-15", "cardsStudied": 5, "sessionCount": 1},
                {"date": "bad", "cardsStudied": 1},
            ]
        )
    )

    records = await FileActivityRepository(path).get_daily_activity()

    assert len(records) == 1
    assert records[0].date == date(2024, 6, 15)
    assert records[0].cards_studied == 5


@pytest.mark.asyncio
async def test_reads_yaml_days_and_sessions(tmp_path):
    path = tmp_path / "activity.yaml"
    path.write_text(
        """
days:
  - date: 2024-06-14
    cards_studied: 3
    session_count: 1
sessions:
  - session_date: 2024-06-14
    cards_studied: 2
    session_duration: 60000
  - session_date: 2024-06-15
    cards_studied: 8
"""
    )

    records = await FileActivityRepository(path).get_daily_activity()

    assert [(r.date, r.cards_studied, r.session_count) for r in records] == [
        (date(2024, 6, 14), 5, 2),
        (date(2024, 6, 15), 8, 1),
    ]
    assert records[0].total_duration == 60000


@pytest.mark.asyncio
async def test_empty_file_yields_no_records(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert await FileActivityRepository(path).get_daily_activity() == []


@pytest.mark.asyncio
async def test_missing_file(tmp_path):
    with pytest.raises(ActivitySourceError, match="not found"):
        await FileActivityRepository(tmp_path / "nope.json").get_daily_activity()


@pytest.mark.asyncio
async def test_unparsable_file(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("days: [unclosed")
    with pytest.raises(ActivitySourceError):
        await FileActivityRepository(path).get_daily_activity()


@pytest.mark.asyncio
async def test_unexpected_shape(tmp_path):
    path = tmp_path / "scalar.yaml"
    path.write_text("42")
    with pytest.raises(ActivitySourceError):
        await FileActivityRepository(path).get_daily_activity()


@pytest.mark.asyncio
async def test_duplicate_days_keep_last_when_sessions_present(tmp_path):
    path = tmp_path / "activity.yaml"
    path.write_text(
        """
days:
  - date: 2024-06-14
    cards_studied: 3
    session_count: 1
  - date: 2024-06-14
    cards_studied: 12
    session_count: 2
sessions:
  - session_date: 2024-06-10
    cards_studied: 4
"""
    )

    records = await FileActivityRepository(path).get_daily_activity()

    assert [(r.date, r.cards_studied, r.session_count) for r in records] == [
        (date(2024, 6, 10), 4, 1),
        (date(2024, 6, 14), 12, 2),
    ]
