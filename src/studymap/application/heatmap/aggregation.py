"""
Session aggregation.

Folds raw study sessions into per-day activity records (the input of the
grid builder) and computes statistics over an explicit date range.
"""

from collections.abc import Iterable
from datetime import date

from studymap.domain.activity.models import (
    DailyActivityRecord,
    MostActiveDay,
    RangeStatistics,
    StudySession,
)

from .stats_calculator import round_half_up


def aggregate_sessions(sessions: Iterable[StudySession]) -> list[DailyActivityRecord]:
    """
    Aggregate sessions by date.

    Cards and durations are summed, session_count is the number of sessions
    that day. total_duration is None when no time was recorded.
    """
    daily: dict[date, tuple[int, int, int]] = {}
    for session in sessions:
        cards, count, duration = daily.get(session.session_date, (0, 0, 0))
        daily[session.session_date] = (
            cards + session.cards_studied,
            count + 1,
            duration + (session.session_duration or 0),
        )

    return [
        DailyActivityRecord(
            date=day,
            cards_studied=cards,
            session_count=count,
            total_duration=duration if duration > 0 else None,
        )
        for day, (cards, count, duration) in sorted(daily.items())
    ]


def merge_records(*groups: Iterable[DailyActivityRecord]) -> list[DailyActivityRecord]:
    """Sum records that share a date across several sources."""
    merged: dict[date, DailyActivityRecord] = {}
    for group in groups:
        for record in group:
            existing = merged.get(record.date)
            if existing is None:
                merged[record.date] = record
                continue
            duration = (existing.total_duration or 0) + (record.total_duration or 0)
            merged[record.date] = DailyActivityRecord(
                date=record.date,
                cards_studied=existing.cards_studied + record.cards_studied,
                session_count=existing.session_count + record.session_count,
                total_duration=duration or None,
            )
    return [merged[day] for day in sorted(merged)]


def calculate_range_statistics(
    sessions: Iterable[StudySession], start: date, end: date
) -> RangeStatistics:
    """
    Session statistics for sessions dated within [start, end].

    The most active day is the first date (chronologically) to reach the
    highest daily card total.
    """
    in_range = [s for s in sessions if start <= s.session_date <= end]
    if not in_range:
        return RangeStatistics(
            total_cards_studied=0,
            total_sessions=0,
            total_study_time=None,
            average_cards_per_session=0,
            study_days=0,
            most_active_day=None,
        )

    total_cards = sum(s.cards_studied for s in in_range)
    total_time = sum(s.session_duration or 0 for s in in_range)

    daily_totals: dict[date, int] = {}
    for session in in_range:
        daily_totals[session.session_date] = (
            daily_totals.get(session.session_date, 0) + session.cards_studied
        )

    most_active = None
    max_cards = 0
    for day in sorted(daily_totals):
        if daily_totals[day] > max_cards:
            max_cards = daily_totals[day]
            most_active = MostActiveDay(date=day, cards_studied=max_cards)

    return RangeStatistics(
        total_cards_studied=total_cards,
        total_sessions=len(in_range),
        total_study_time=total_time if total_time > 0 else None,
        average_cards_per_session=round_half_up(total_cards / len(in_range)),
        study_days=len(daily_totals),
        most_active_day=most_active,
    )
