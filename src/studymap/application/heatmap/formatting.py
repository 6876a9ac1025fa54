"""Tooltip and label formatting for heatmap cells.

English strings only. A localizing presentation layer should use
``tooltip_data`` and supply its own wording.
"""

from dataclasses import dataclass

from studymap.domain.activity.models import HeatmapDay
from studymap.domain.constants import (
    ACTIVITY_LEVEL_CLASSES,
    DAY_LABELS,
    MONTH_ABBR,
    WEEKDAY_ABBR,
)

from .grid_builder import day_of_week
from .stats_calculator import round_half_up


@dataclass(frozen=True)
class TooltipData:
    weekday: int  # 0 = Sunday
    day: int
    month: int  # 1-12
    year: int
    cards_studied: int
    session_count: int
    minutes: int | None  # None when no duration was recorded


def tooltip_data(day: HeatmapDay) -> TooltipData:
    minutes = None
    if day.total_duration and day.total_duration > 0:
        minutes = round_half_up(day.total_duration / 60000)
    return TooltipData(
        weekday=day_of_week(day.date),
        day=day.date.day,
        month=day.date.month,
        year=day.date.year,
        cards_studied=day.cards_studied,
        session_count=day.session_count,
        minutes=minutes,
    )


def format_date_label(data: TooltipData) -> str:
    """e.g. "Mon, Jan 15, 2024"."""
    return (
        f"{WEEKDAY_ABBR[data.weekday]}, {MONTH_ABBR[data.month - 1]} "
        f"{data.day}, {data.year}"
    )


def format_tooltip_content(day: HeatmapDay) -> str:
    """
    Human-readable description of a heatmap cell.

    Examples:
        "No study activity on Mon, Jan 15, 2024"
        "5 cards studied on Mon, Jan 15, 2024 (2 sessions) • 15m total"
    """
    data = tooltip_data(day)
    label = format_date_label(data)

    if data.cards_studied == 0:
        return f"No study activity on {label}"

    card_text = "card" if data.cards_studied == 1 else "cards"
    tooltip = f"{data.cards_studied} {card_text} studied on {label}"

    if data.session_count > 1:
        tooltip += f" ({data.session_count} sessions)"

    if data.minutes is not None:
        tooltip += f" • {data.minutes}m total"

    return tooltip


def get_day_labels() -> list[str]:
    return list(DAY_LABELS)


def activity_level_class(level: int) -> str:
    """Style identifier for an activity level."""
    if isinstance(level, bool) or not 0 <= level < len(ACTIVITY_LEVEL_CLASSES):
        raise ValueError(f"Invalid activity level: {level!r}")
    return ACTIVITY_LEVEL_CLASSES[level]
