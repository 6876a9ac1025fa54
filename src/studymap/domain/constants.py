"""Centralized constants for studymap.

All magic numbers and presentation defaults live here so every layer
imports from a single source of truth.
"""

# ---------- Heatmap Window ----------
HEATMAP_WINDOW_DAYS = 365
DAYS_PER_WEEK = 7

# ---------- Activity Levels ----------
# Upper bounds (inclusive) of levels 1, 2 and 3. Anything above is level 4.
ACTIVITY_LEVEL_THRESHOLDS = (2, 10, 20)
MAX_ACTIVITY_LEVEL = 4
ACTIVITY_LEVEL_CLASSES = ("none", "light", "moderate", "strong", "intense")

# ---------- Labels ----------
DAY_LABELS = ("S", "M", "T", "W", "T", "F", "S")  # Sunday first
WEEKDAY_ABBR = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
MONTH_ABBR = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

# ---------- Streaks ----------
STREAK_MILESTONES = (7, 30, 50, 100, 200, 365)
STREAK_BUILDING_LIMIT = 7
STREAK_GREAT_PROGRESS_LIMIT = 30

# ---------- HTTP ----------
REQUEST_TIMEOUT = 30.0
