"""
Heatmap grid builder.

Turns a flat list of per-day activity records into a GitHub-style calendar
grid covering a fixed trailing window. This is a pure computation module:
"today" is always supplied by the caller.
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import date, datetime, timedelta
from typing import Any

from studymap.domain.activity.models import (
    DailyActivityRecord,
    HeatmapDay,
    HeatmapGrid,
    HeatmapWeek,
    MonthLabel,
)
from studymap.domain.constants import (
    ACTIVITY_LEVEL_THRESHOLDS,
    DAYS_PER_WEEK,
    HEATMAP_WINDOW_DAYS,
    MAX_ACTIVITY_LEVEL,
    MONTH_ABBR,
)

from .records import coerce_record

logger = logging.getLogger(__name__)


def validate_thresholds(thresholds: Sequence[int]) -> tuple[int, ...]:
    """
    Check that level thresholds are strictly increasing positive integers.

    Returns the thresholds as a tuple.
    """
    values = tuple(thresholds)
    if len(values) != MAX_ACTIVITY_LEVEL - 1:
        raise ValueError(
            f"Expected {MAX_ACTIVITY_LEVEL - 1} level thresholds, got {len(values)}"
        )
    previous = 0
    for value in values:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"Level threshold must be an integer: {value!r}")
        if value <= previous:
            raise ValueError(f"Level thresholds must be strictly increasing and positive: {values}")
        previous = value
    return values


def get_activity_level(
    cards_studied: int, thresholds: Sequence[int] = ACTIVITY_LEVEL_THRESHOLDS
) -> int:
    """
    Bucket a day's card count into an activity level from 0 to 4.

    Level 0 means no activity. Levels 1-3 cover counts up to and including
    the matching threshold; anything above the last threshold is level 4.
    """
    if cards_studied <= 0:
        return 0
    for level, upper in enumerate(thresholds, start=1):
        if cards_studied <= upper:
            return level
    return MAX_ACTIVITY_LEVEL


def day_of_week(day: date) -> int:
    """Weekday index with Sunday = 0."""
    return (day.weekday() + 1) % DAYS_PER_WEEK


def normalize_today(today: Any) -> date:
    """Truncate a datetime to its date; reject anything that is not a date."""
    if isinstance(today, datetime):
        return today.date()
    if isinstance(today, date):
        return today
    raise TypeError(f"today must be a date or datetime, got {type(today).__name__}")


def build_lookup(records: Iterable[Any] | None) -> dict[date, DailyActivityRecord]:
    """
    Index records by date. Later records for the same date replace earlier ones.
    Rows that cannot be coerced are skipped.
    """
    lookup: dict[date, DailyActivityRecord] = {}
    for row in records or ():
        record = coerce_record(row)
        if record is None:
            continue
        if record.date in lookup:
            logger.debug(f"Duplicate activity record for {record.date}; keeping the last one")
        lookup[record.date] = record
    return lookup


def generate_heatmap_grid(
    records: Iterable[Any] | None,
    *,
    today: date,
    thresholds: Sequence[int] = ACTIVITY_LEVEL_THRESHOLDS,
) -> HeatmapGrid:
    """
    Generate the heatmap grid for the window ending at ``today``.

    Args:
        records: DailyActivityRecord objects or raw mappings, unordered.
            Records outside the window are ignored.
        today: Last day of the window (inclusive). Datetimes are truncated.
        thresholds: Activity level thresholds (see get_activity_level).

    Returns:
        HeatmapGrid with exactly HEATMAP_WINDOW_DAYS days. The first and last
        weeks may be partial; each day's day_index is its weekday (Sunday = 0).
    """
    end_date = normalize_today(today)
    thresholds = validate_thresholds(thresholds)
    start_date = end_date - timedelta(days=HEATMAP_WINDOW_DAYS - 1)
    lookup = build_lookup(records)

    first_offset = day_of_week(start_date)
    weeks: list[HeatmapWeek] = []
    current: list[HeatmapDay] = []
    current_week = 0

    for offset in range(HEATMAP_WINDOW_DAYS):
        day = start_date + timedelta(days=offset)
        weekday = day_of_week(day)
        week_index = (offset + first_offset) // DAYS_PER_WEEK

        if week_index != current_week:
            weeks.append(HeatmapWeek(week_index=current_week, days=tuple(current)))
            current = []
            current_week = week_index

        record = lookup.get(day)
        cards = record.cards_studied if record else 0
        current.append(
            HeatmapDay(
                date=day,
                cards_studied=cards,
                session_count=record.session_count if record else 0,
                total_duration=record.total_duration if record else None,
                level=get_activity_level(cards, thresholds),
                day_of_week=weekday,
                week_index=week_index,
                day_index=weekday,
            )
        )

    if current:
        weeks.append(HeatmapWeek(week_index=current_week, days=tuple(current)))

    return HeatmapGrid(
        weeks=tuple(weeks),
        months=tuple(generate_month_labels(weeks)),
        start_date=start_date,
        end_date=end_date,
        total_days=HEATMAP_WINDOW_DAYS,
    )


def generate_month_labels(weeks: Iterable[HeatmapWeek]) -> list[MonthLabel]:
    """
    Label the week-columns each calendar month occupies.

    Single forward pass over the ordered days; a new label starts whenever the
    month changes. Adjacent months may share the column they meet in.
    """
    labels: list[MonthLabel] = []
    current_key: tuple[int, int] | None = None
    week_start = 0
    last_week = 0

    for week in weeks:
        for day in week.days:
            key = (day.date.year, day.date.month)
            if key != current_key:
                if current_key is not None:
                    labels.append(_month_label(current_key[1], week_start, last_week))
                current_key = key
                week_start = day.week_index
            last_week = day.week_index

    if current_key is not None:
        labels.append(_month_label(current_key[1], week_start, last_week))
    return labels


def _month_label(month: int, week_start: int, last_week: int) -> MonthLabel:
    return MonthLabel(
        name=MONTH_ABBR[month - 1],
        month=month,
        week_start=week_start,
        week_span=last_week - week_start + 1,
    )
