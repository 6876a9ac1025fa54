# Application Heatmap Package
from .aggregation import aggregate_sessions, calculate_range_statistics
from .formatting import (
    activity_level_class,
    format_tooltip_content,
    get_day_labels,
    tooltip_data,
)
from .grid_builder import generate_heatmap_grid, get_activity_level
from .service import HeatmapService
from .stats_calculator import calculate_heatmap_stats
from .streaks import advance_streak, compute_streaks, streak_status

__all__ = [
    "generate_heatmap_grid",
    "get_activity_level",
    "calculate_heatmap_stats",
    "format_tooltip_content",
    "tooltip_data",
    "get_day_labels",
    "activity_level_class",
    "aggregate_sessions",
    "calculate_range_statistics",
    "compute_streaks",
    "advance_streak",
    "streak_status",
    "HeatmapService",
]
