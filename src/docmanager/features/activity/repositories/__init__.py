"""Activity repositories."""

from .activity_log_repository import ActivityLogRepository

__all__ = ["ActivityLogRepository"]
