"""
Summary statistics over a heatmap grid.

This is a pure computation module with no I/O.
"""

import math

from studymap.domain.activity.models import HeatmapGrid, HeatmapStats


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for non-negatives."""
    return int(math.floor(value + 0.5))


def calculate_heatmap_stats(grid: HeatmapGrid) -> HeatmapStats:
    """
    Reduce a grid to its summary row in a single pass.

    Never fails: an all-zero grid yields all-zero stats.
    """
    active_days = 0
    total_cards = 0
    total_sessions = 0
    total_time = 0
    max_cards = 0
    best_day = None

    for day in grid.iter_days():
        total_cards += day.cards_studied
        total_sessions += day.session_count
        total_time += day.total_duration or 0
        if day.cards_studied > 0:
            active_days += 1
        if day.cards_studied > max_cards:
            max_cards = day.cards_studied
            best_day = day.date

    average = round_half_up(total_cards / active_days) if active_days else 0
    study_rate = round_half_up(active_days / grid.total_days * 100) if grid.total_days else 0
    if active_days < grid.total_days:
        # 100% only for a fully active window
        study_rate = min(study_rate, 99)

    return HeatmapStats(
        active_days=active_days,
        total_cards=total_cards,
        total_sessions=total_sessions,
        total_time=total_time,
        max_cards_in_day=max_cards,
        best_day=best_day,
        average_cards_per_active_day=average,
        study_rate=study_rate,
    )
