"""Activity services."""

from .activity_logger import ActivityLogger

__all__ = ["ActivityLogger"]
