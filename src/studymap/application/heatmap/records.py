"""Coercion of raw activity rows into domain records.

Rows come from JSON/YAML exports or HTTP responses and use either the
backend's camelCase keys (``cardsStudied``) or snake_case keys. Rows that
cannot be interpreted are dropped, never raised.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any

from studymap.domain.activity.models import DailyActivityRecord, StudySession

logger = logging.getLogger(__name__)

_MISSING = object()


def coerce_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def _coerce_count(value: Any) -> int | None:
    """Non-negative integer, or None if the value is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, int) and value >= 0:
        return value
    return None


def _field(row: Mapping[str, Any], camel: str, snake: str) -> Any:
    if camel in row:
        return row[camel]
    return row.get(snake, _MISSING)


def coerce_record(row: Any) -> DailyActivityRecord | None:
    """
    Convert a mapping (or pass through a record) into a DailyActivityRecord.

    Missing counts default to 0 and a missing duration to None. Returns None
    when the date is malformed or a present count is not a non-negative integer.
    """
    if isinstance(row, DailyActivityRecord):
        return row
    if not isinstance(row, Mapping):
        logger.debug(f"Skipping non-mapping activity row: {row!r}")
        return None

    day = coerce_date(row.get("date"))
    if day is None:
        logger.debug(f"Skipping activity row with malformed date: {row!r}")
        return None

    counts: dict[str, int] = {}
    for camel, snake in (("cardsStudied", "cards_studied"), ("sessionCount", "session_count")):
        raw = _field(row, camel, snake)
        if raw is _MISSING or raw is None:
            counts[snake] = 0
            continue
        value = _coerce_count(raw)
        if value is None:
            logger.debug(f"Skipping activity row with invalid {camel}: {row!r}")
            return None
        counts[snake] = value

    duration = None
    raw_duration = _field(row, "totalDuration", "total_duration")
    if raw_duration is not _MISSING and raw_duration is not None:
        duration = _coerce_count(raw_duration)
        if duration is None:
            logger.debug(f"Ignoring invalid totalDuration in activity row: {row!r}")

    return DailyActivityRecord(date=day, total_duration=duration, **counts)


def coerce_records(rows: Iterable[Any] | None) -> list[DailyActivityRecord]:
    if not rows:
        return []
    out: list[DailyActivityRecord] = []
    for row in rows:
        record = coerce_record(row)
        if record is not None:
            out.append(record)
    return out


def coerce_session(row: Any) -> StudySession | None:
    """Convert a raw session mapping into a StudySession, or None if unusable."""
    if isinstance(row, StudySession):
        return row
    if not isinstance(row, Mapping):
        return None

    day = coerce_date(_field(row, "sessionDate", "session_date"))
    cards = _coerce_count(_field(row, "cardsStudied", "cards_studied"))
    if day is None or cards is None:
        logger.debug(f"Skipping unusable session row: {row!r}")
        return None

    raw_duration = _field(row, "sessionDuration", "session_duration")
    duration = None if raw_duration is _MISSING else _coerce_count(raw_duration)
    deck_id = _field(row, "deckId", "deck_id")
    study_mode = _field(row, "studyMode", "study_mode")

    return StudySession(
        session_date=day,
        cards_studied=cards,
        session_duration=duration,
        deck_id=None if deck_id is _MISSING else deck_id,
        study_mode=None if study_mode is _MISSING else study_mode,
    )


def coerce_sessions(rows: Iterable[Any] | None) -> list[StudySession]:
    if not rows:
        return []
    return [s for s in (coerce_session(row) for row in rows) if s is not None]
