"""
Domain models for study activity, heatmaps and streaks.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum


@dataclass(frozen=True)
class DailyActivityRecord:
    """
    Aggregated study activity for one calendar day.

    Attributes:
        date: The (local) calendar day.
        cards_studied: Number of review events that day.
        session_count: Number of distinct study sessions that day.
        total_duration: Milliseconds spent studying, if known.
    """

    date: date
    cards_studied: int = 0
    session_count: int = 0
    total_duration: int | None = None


@dataclass(frozen=True)
class StudySession:
    """
    A single recorded study session, as stored by the backend.

    Attributes:
        session_date: The user's local date of the session.
        cards_studied: Cards reviewed during the session.
        session_duration: Milliseconds, if measured.
        deck_id: Deck the session belonged to.
        study_mode: "basic" or "spaced-repetition".
    """

    session_date: date
    cards_studied: int
    session_duration: int | None = None
    deck_id: str | None = None
    study_mode: str | None = None


@dataclass(frozen=True)
class HeatmapDay:
    """One cell of the heatmap grid."""

    date: date
    cards_studied: int
    session_count: int
    total_duration: int | None
    level: int  # 0-4, drives color intensity
    day_of_week: int  # 0 = Sunday
    week_index: int  # Column in the grid
    day_index: int  # Row within the week


@dataclass(frozen=True)
class HeatmapWeek:
    week_index: int
    days: tuple[HeatmapDay, ...]


@dataclass(frozen=True)
class MonthLabel:
    """Axis label for the week-columns a calendar month occupies."""

    name: str
    month: int  # 1-12
    week_start: int
    week_span: int


@dataclass(frozen=True)
class HeatmapGrid:
    weeks: tuple[HeatmapWeek, ...]
    months: tuple[MonthLabel, ...]
    start_date: date
    end_date: date
    total_days: int

    def iter_days(self):
        """Yield every day of the grid in chronological order."""
        for week in self.weeks:
            yield from week.days


@dataclass(frozen=True)
class HeatmapStats:
    active_days: int
    total_cards: int
    total_sessions: int
    total_time: int  # ms
    max_cards_in_day: int
    best_day: date | None
    average_cards_per_active_day: int
    study_rate: int  # percent, 0-100


@dataclass(frozen=True)
class MostActiveDay:
    date: date
    cards_studied: int


@dataclass(frozen=True)
class RangeStatistics:
    """Session statistics over an explicit date range."""

    total_cards_studied: int
    total_sessions: int
    total_study_time: int | None
    average_cards_per_session: int
    study_days: int
    most_active_day: MostActiveDay | None


class StreakStatus(str, Enum):
    START = "start_streak"
    BUILDING = "building_momentum"
    GREAT_PROGRESS = "great_progress"
    STREAK_MASTER = "streak_master"


class StreakEvent(str, Enum):
    STARTED = "started"
    CONTINUED = "continued"
    BROKEN = "broken"


@dataclass(frozen=True)
class StreakSummary:
    """
    Streak figures derived from the set of days with study activity.

    Attributes:
        current_streak: Consecutive days ending today or yesterday.
        longest_streak: Longest run of consecutive study days.
        last_study_date: Most recent study day, if any.
        streak_start_date: First day of the current streak (None when 0).
        total_study_days: Distinct study days.
        milestones_reached: Milestones covered by the longest streak.
        last_milestone: Greatest milestone reached.
        next_milestone: First milestone above the current streak.
    """

    current_streak: int
    longest_streak: int
    last_study_date: date | None
    streak_start_date: date | None
    total_study_days: int
    milestones_reached: tuple[int, ...] = ()
    last_milestone: int | None = None
    next_milestone: int | None = None


@dataclass
class StreakState:
    """Persisted streak record that is advanced as sessions complete."""

    current_streak: int
    longest_streak: int
    last_study_date: date
    streak_start_date: date
    total_study_days: int
    milestones_reached: list[int] = field(default_factory=list)
    last_milestone: int | None = None


@dataclass(frozen=True)
class StreakUpdate:
    state: StreakState
    event: StreakEvent
    is_new_milestone: bool = False
    milestone: int | None = None


@dataclass(frozen=True)
class HeatmapReport:
    """Everything a presentation layer needs to draw the study history."""

    grid: HeatmapGrid
    stats: HeatmapStats
    streak: StreakSummary
