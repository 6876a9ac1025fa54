from datetime import date

import pytest

from studymap.domain.activity.models import DailyActivityRecord


@pytest.fixture
def today():
    """Pinned reference date (a Saturday) so windows are reproducible."""
    return date(2024, 6, 15)


@pytest.fixture
def make_record():
    def _make(day, cards=1, sessions=1, duration=None):
        if isinstance(day, str):
            day = date.fromisoformat(day)
        return DailyActivityRecord(
            date=day, cards_studied=cards, session_count=sessions, total_duration=duration
        )

    return _make
