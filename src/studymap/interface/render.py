"""Plain-text rendering of heatmap reports for the terminal."""

from studymap.application.heatmap.formatting import get_day_labels
from studymap.application.heatmap.streaks import streak_status
from studymap.domain.activity.models import HeatmapGrid, HeatmapStats, StreakSummary

LEVEL_GLYPHS = ("·", "░", "▒", "▓", "█")
EMPTY_CELL = " "


def render_grid(grid: HeatmapGrid) -> str:
    """One row per weekday, one column per week, month names on top."""
    width = len(grid.weeks)
    header = [" "] * width
    for month in grid.months:
        start, end = month.week_start, month.week_start + len(month.name)
        # Skip labels that would overrun the grid or touch the previous one
        if end > width or any(c != " " for c in header[max(start - 1, 0) : end]):
            continue
        header[start:end] = list(month.name)

    rows = [[EMPTY_CELL] * width for _ in range(7)]
    for column, week in enumerate(grid.weeks):
        for day in week.days:
            rows[day.day_index][column] = LEVEL_GLYPHS[day.level]

    lines = ["  " + "".join(header).rstrip()]
    for label, row in zip(get_day_labels(), rows):
        lines.append(f"{label} {''.join(row)}")
    lines.append(f"  {grid.start_date.isoformat()} .. {grid.end_date.isoformat()}")
    return "\n".join(lines)


def render_stats(stats: HeatmapStats) -> str:
    best = f" on {stats.best_day.isoformat()}" if stats.best_day else ""
    minutes = stats.total_time // 60000
    return "\n".join(
        [
            f"Cards studied:  {stats.total_cards}",
            f"Sessions:       {stats.total_sessions}",
            f"Study time:     {minutes}m",
            f"Active days:    {stats.active_days} ({stats.study_rate}%)",
            f"Best day:       {stats.max_cards_in_day}{best}",
            f"Avg per day:    {stats.average_cards_per_active_day}",
        ]
    )


def render_streak(streak: StreakSummary) -> str:
    lines = [
        f"Current streak: {streak.current_streak} ({streak_status(streak.current_streak).value})",
        f"Longest streak: {streak.longest_streak}",
        f"Study days:     {streak.total_study_days}",
    ]
    if streak.last_milestone:
        lines.append(f"Last milestone: {streak.last_milestone} days")
    if streak.next_milestone:
        remaining = streak.next_milestone - streak.current_streak
        lines.append(f"Next milestone: {streak.next_milestone} days ({remaining} to go)")
    return "\n".join(lines)
