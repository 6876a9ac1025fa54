# Domain Activity Package
from .models import (
    DailyActivityRecord,
    HeatmapDay,
    HeatmapGrid,
    HeatmapReport,
    HeatmapStats,
    HeatmapWeek,
    MonthLabel,
    StreakEvent,
    StreakState,
    StreakStatus,
    StreakSummary,
    StreakUpdate,
    StudySession,
)
from .ports import ActivityRepository

__all__ = [
    "DailyActivityRecord",
    "StudySession",
    "HeatmapDay",
    "HeatmapWeek",
    "MonthLabel",
    "HeatmapGrid",
    "HeatmapStats",
    "HeatmapReport",
    "StreakEvent",
    "StreakState",
    "StreakStatus",
    "StreakSummary",
    "StreakUpdate",
    "ActivityRepository",
]
