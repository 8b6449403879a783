"""Activity log entity."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from ....utils.datetime import utc_now


class ActivityAction(str, Enum):
    UPLOAD = "upload"
    DELETE = "delete"
    DOWNLOAD = "download"
    EDIT = "edit"
    RESTORE = "restore"
    PERMANENT_DELETE = "permanent_delete"
    CLIENT_CREATE = "client_create"
    CLIENT_EDIT = "client_edit"
    CLIENT_DELETE = "client_delete"

    @property
    def label(self) -> str:
        return _ACTION_LABELS[self]


_ACTION_LABELS = {
    ActivityAction.UPLOAD: "Uploaded document",
    ActivityAction.DELETE: "Moved to trash",
    ActivityAction.DOWNLOAD: "Downloaded document",
    ActivityAction.EDIT: "Edited document",
    ActivityAction.RESTORE: "Restored from trash",
    ActivityAction.PERMANENT_DELETE: "Permanently deleted",
    ActivityAction.CLIENT_CREATE: "Created client",
    ActivityAction.CLIENT_EDIT: "Edited client",
    ActivityAction.CLIENT_DELETE: "Deleted client",
}


def action_label(action: str) -> str:
    """Human label of an action; unknown actions are shown as stored."""
    try:
        return ActivityAction(action).label
    except ValueError:
        return action


@dataclass
class ActivityLog:
    """One audit entry: who did what to which document or client."""

    user_id: int
    action: str
    id: Optional[int] = None
    document_id: Optional[int] = None
    client_id: Optional[int] = None
    details: Optional[str] = None
    created_at: datetime = field(default_factory=utc_now)

    @property
    def action_label(self) -> str:
        return action_label(self.action)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "ActivityLog":
        return cls(
            id=record["id"],
            user_id=record["user_id"],
            action=record["action"],
            document_id=record.get("document_id"),
            client_id=record.get("client_id"),
            details=record.get("details"),
            created_at=record["created_at"],
        )
