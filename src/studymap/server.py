import logging
import time
from contextlib import asynccontextmanager
from datetime import date
from typing import Any

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from studymap.application.heatmap.formatting import (
    activity_level_class,
    format_tooltip_content,
    tooltip_data,
)
from studymap.application.heatmap.grid_builder import (
    build_lookup,
    day_of_week,
    generate_heatmap_grid,
    get_activity_level,
)
from studymap.application.heatmap.stats_calculator import calculate_heatmap_stats
from studymap.application.heatmap.streaks import (
    advance_streak,
    compute_streaks,
    streak_status,
    study_dates,
)
from studymap.consts import VERSION
from studymap.domain.activity.models import HeatmapDay, StreakState
from studymap.domain.exceptions import ActivitySourceError

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("studymap.server")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"studymap server v{VERSION} starting up...")
    yield
    # Shutdown
    logger.info("studymap server shutting down...")


app = FastAPI(
    title="studymap server",
    description="Study history heatmaps, statistics and streaks.",
    version=VERSION,
    lifespan=lifespan,
)


class HealthResponse(BaseModel):
    status: str
    version: str
    uptime_seconds: float


start_time = time.time()


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Simple health check to verify server is reachable.
    """
    return HealthResponse(status="ok", version=VERSION, uptime_seconds=time.time() - start_time)


@app.get("/version")
async def get_version():
    return {"version": VERSION}


class HeatmapRequest(BaseModel):
    # Raw daily rows as returned by the activity query; malformed rows are dropped.
    records: list[dict[str, Any]] = Field(default_factory=list)
    today: date | None = None
    thresholds: tuple[int, int, int] | None = None


@app.post("/heatmap")
async def build_heatmap(req: HeatmapRequest):
    """
    Build grid, stats and streak from the supplied records.
    """
    from studymap.application.config import resolve_config

    today = req.today or date.today()
    try:
        thresholds = req.thresholds or resolve_config().level_thresholds
        records = list(build_lookup(req.records).values())
        grid = generate_heatmap_grid(records, today=today, thresholds=thresholds)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    streak = compute_streaks(study_dates(records), today=today)
    return {
        "grid": grid,
        "stats": calculate_heatmap_stats(grid),
        "streak": streak,
        "streak_status": streak_status(streak.current_streak),
    }


@app.get("/heatmap")
async def heatmap_from_source(today: date | None = None):
    """
    Build the report from the configured activity source.
    """
    from studymap.application.config import resolve_config
    from studymap.application.factory import get_activity_repository
    from studymap.application.heatmap.service import HeatmapService

    config = resolve_config()
    try:
        async with get_activity_repository(config) as repo:
            service = HeatmapService(repo, thresholds=config.level_thresholds)
            report = await service.build_report(today)
    except ActivitySourceError as e:
        logger.error(f"Activity source failed: {e}", exc_info=True)
        raise HTTPException(status_code=502, detail=str(e)) from e
    return report


class TooltipRequest(BaseModel):
    day: date = Field(alias="date")
    cards_studied: int = Field(default=0, ge=0)
    session_count: int = Field(default=0, ge=0)
    total_duration: int | None = Field(default=None, ge=0)


@app.post("/heatmap/tooltip")
async def tooltip(req: TooltipRequest):
    """Tooltip text and structured fields for a single cell."""
    level = get_activity_level(req.cards_studied)
    weekday = day_of_week(req.day)
    day = HeatmapDay(
        date=req.day,
        cards_studied=req.cards_studied,
        session_count=req.session_count,
        total_duration=req.total_duration,
        level=level,
        day_of_week=weekday,
        week_index=0,
        day_index=weekday,
    )
    return {
        "text": format_tooltip_content(day),
        "data": tooltip_data(day),
        "level": level,
        "level_class": activity_level_class(level),
    }


class StreakStateModel(BaseModel):
    current_streak: int = Field(ge=0)
    longest_streak: int = Field(ge=0)
    last_study_date: date
    streak_start_date: date
    total_study_days: int = Field(ge=0)
    milestones_reached: list[int] = Field(default_factory=list)
    last_milestone: int | None = None


class AdvanceStreakRequest(BaseModel):
    study_date: date
    state: StreakStateModel | None = None


@app.post("/streak/advance")
async def advance(req: AdvanceStreakRequest):
    """Apply a completed study day to a persisted streak record."""
    state = StreakState(**req.state.model_dump()) if req.state else None
    update = advance_streak(state, req.study_date)
    logger.info(
        f"Streak {update.event.value}: {update.state.current_streak} days"
        + (f" (milestone {update.milestone})" if update.is_new_milestone else "")
    )
    return update
