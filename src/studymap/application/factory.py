"""
Activity Repository Factory
Centralizes the logic for selecting the activity source adapter.
"""

from studymap.application.config import AppConfig
from studymap.domain.activity.ports import ActivityRepository
from studymap.domain.exceptions import ActivitySourceError
from studymap.infrastructure.adapters.activity.file_activity import FileActivityRepository
from studymap.infrastructure.adapters.activity.http_activity import HttpActivityRepository


def get_activity_repository(config: AppConfig) -> ActivityRepository:
    """
    Returns the ActivityRepository implementation selected by config.source.
    """
    if config.source == "http":
        return HttpActivityRepository(url=config.activity_url, timeout=config.request_timeout)

    if config.activity_file is None:
        raise ActivitySourceError(
            "No activity file configured. Pass a path or set STUDYMAP_ACTIVITY_FILE.",
            source="file",
        )
    return FileActivityRepository(config.activity_file)
