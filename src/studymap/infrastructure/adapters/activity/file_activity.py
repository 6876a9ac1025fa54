"""
File Activity Repository — Infrastructure adapter for exported activity files.

Implements ActivityRepository by reading a YAML or JSON document from disk.
"""

import logging
from pathlib import Path

import yaml

from studymap.domain.activity.models import DailyActivityRecord
from studymap.domain.activity.ports import ActivityRepository
from studymap.domain.exceptions import ActivitySourceError

from .payload import parse_activity_payload

logger = logging.getLogger(__name__)


class FileActivityRepository(ActivityRepository):
    """
    Reads daily activity from a YAML or JSON file.

    JSON is a subset of YAML, so both are loaded with yaml.safe_load.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    async def get_daily_activity(self) -> list[DailyActivityRecord]:
        if not self.path.exists():
            raise ActivitySourceError(f"Activity file not found: {self.path}", source=str(self.path))

        try:
            payload = yaml.safe_load(self.path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to read activity file {self.path}: {e}")
            raise ActivitySourceError(
                f"Could not read activity file {self.path}: {e}", source=str(self.path)
            ) from e

        records = parse_activity_payload(payload, source=str(self.path))
        logger.info(f"Loaded {len(records)} activity days from {self.path}")
        return records
