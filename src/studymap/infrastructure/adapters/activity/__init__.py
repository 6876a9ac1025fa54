# Infrastructure Activity Adapters Package
from .file_activity import FileActivityRepository
from .http_activity import HttpActivityRepository

__all__ = ["FileActivityRepository", "HttpActivityRepository"]
