"""
Study streak computation.

Two views of the same concept:
- ``compute_streaks`` derives streak figures from the set of study days.
- ``advance_streak`` updates a persisted StreakState when a session completes.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from datetime import date, timedelta
from typing import Any

from studymap.domain.activity.models import (
    DailyActivityRecord,
    StreakEvent,
    StreakState,
    StreakStatus,
    StreakSummary,
    StreakUpdate,
)
from studymap.domain.constants import (
    STREAK_BUILDING_LIMIT,
    STREAK_GREAT_PROGRESS_LIMIT,
    STREAK_MILESTONES,
)

from .grid_builder import normalize_today
from .records import coerce_date

ONE_DAY = timedelta(days=1)


def study_dates(records: Iterable[DailyActivityRecord]) -> list[date]:
    """Dates of records with at least one card studied."""
    return [r.date for r in records if r.cards_studied > 0]


def compute_streaks(
    dates: Iterable[Any],
    *,
    today: date,
    milestones: Iterable[int] = STREAK_MILESTONES,
) -> StreakSummary:
    """
    Compute current and longest streaks from study dates.

    The current streak counts back from the most recent study day, and only
    if that day is today or yesterday (today's session may not have happened
    yet). Dates after ``today`` and malformed values are ignored.
    """
    today = normalize_today(today)
    milestones = tuple(sorted(milestones))

    date_set = {d for d in (coerce_date(v) for v in dates) if d is not None and d <= today}
    if not date_set:
        return StreakSummary(
            current_streak=0,
            longest_streak=0,
            last_study_date=None,
            streak_start_date=None,
            total_study_days=0,
            next_milestone=milestones[0] if milestones else None,
        )

    unique_dates = sorted(date_set)
    last = unique_dates[-1]

    current = 0
    streak_start = None
    if last >= today - ONE_DAY:
        cursor = last
        while cursor in date_set:
            current += 1
            cursor -= ONE_DAY
        streak_start = cursor + ONE_DAY

    longest = 0
    run = 0
    prev: date | None = None
    for day in unique_dates:
        if prev is not None and day == prev + ONE_DAY:
            run += 1
        else:
            run = 1
        prev = day
        longest = max(longest, run)

    reached = tuple(m for m in milestones if m <= longest)
    return StreakSummary(
        current_streak=current,
        longest_streak=longest,
        last_study_date=last,
        streak_start_date=streak_start,
        total_study_days=len(unique_dates),
        milestones_reached=reached,
        last_milestone=reached[-1] if reached else None,
        next_milestone=next((m for m in milestones if m > current), None),
    )


def streak_status(current_streak: int) -> StreakStatus:
    if current_streak <= 0:
        return StreakStatus.START
    if current_streak < STREAK_BUILDING_LIMIT:
        return StreakStatus.BUILDING
    if current_streak < STREAK_GREAT_PROGRESS_LIMIT:
        return StreakStatus.GREAT_PROGRESS
    return StreakStatus.STREAK_MASTER


def advance_streak(
    state: StreakState | None,
    study_date: Any,
    milestones: Iterable[int] = STREAK_MILESTONES,
) -> StreakUpdate:
    """
    Record a study day against a persisted streak.

    The input state is not modified; the returned update carries a new state.

    Raises:
        ValueError: If study_date is not a date or ISO date string.
    """
    day = coerce_date(study_date)
    if day is None:
        raise ValueError(f"Invalid study date: {study_date!r}")

    if state is None:
        return StreakUpdate(
            state=StreakState(
                current_streak=1,
                longest_streak=1,
                last_study_date=day,
                streak_start_date=day,
                total_study_days=1,
            ),
            event=StreakEvent.STARTED,
        )

    if state.last_study_date == day:
        same_day = replace(state, milestones_reached=list(state.milestones_reached))
        return StreakUpdate(state=same_day, event=StreakEvent.CONTINUED)

    if state.last_study_date == day - ONE_DAY:
        current = state.current_streak + 1
        start = state.streak_start_date
        event = StreakEvent.CONTINUED
    else:
        current = 1
        start = day
        event = StreakEvent.BROKEN

    reached = list(state.milestones_reached)
    milestone = None
    for m in sorted(milestones):
        if current >= m and m not in reached:
            reached.append(m)
            milestone = m

    new_state = StreakState(
        current_streak=current,
        longest_streak=max(state.longest_streak, current),
        last_study_date=day,
        streak_start_date=start,
        total_study_days=state.total_study_days + 1,
        milestones_reached=reached,
        last_milestone=milestone or state.last_milestone,
    )
    return StreakUpdate(
        state=new_state,
        event=event,
        is_new_milestone=milestone is not None,
        milestone=milestone,
    )
