"""Interpretation of exported / served activity payloads."""

import logging
from typing import Any

from studymap.application.heatmap.aggregation import aggregate_sessions, merge_records
from studymap.application.heatmap.grid_builder import build_lookup
from studymap.application.heatmap.records import coerce_records, coerce_sessions
from studymap.domain.activity.models import DailyActivityRecord
from studymap.domain.exceptions import ActivitySourceError

logger = logging.getLogger(__name__)


def parse_activity_payload(payload: Any, source: str | None = None) -> list[DailyActivityRecord]:
    """
    Accepts either a list of daily records, or a mapping with a ``days`` list
    and/or a ``sessions`` list. Duplicate daily rows keep the last one; sessions
    are aggregated per day and summed with the daily record for that date.
    """
    if payload is None:
        return []
    if isinstance(payload, list):
        return coerce_records(payload)
    if not isinstance(payload, dict):
        raise ActivitySourceError(
            f"Unexpected activity payload type: {type(payload).__name__}", source=source
        )

    days = payload.get("days") or []
    sessions = payload.get("sessions") or []
    if not isinstance(days, list) or not isinstance(sessions, list):
        raise ActivitySourceError("'days' and 'sessions' must be lists", source=source)

    if not sessions:
        return coerce_records(days)
    records = list(build_lookup(days).values())

    from_sessions = aggregate_sessions(coerce_sessions(sessions))
    logger.debug(f"Aggregated {len(sessions)} sessions into {len(from_sessions)} days")
    return merge_records(records, from_sessions)
