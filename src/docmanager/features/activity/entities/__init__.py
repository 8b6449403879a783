"""Activity entities."""

from .activity_log import ActivityAction, ActivityLog, action_label

__all__ = ["ActivityAction", "ActivityLog", "action_label"]
