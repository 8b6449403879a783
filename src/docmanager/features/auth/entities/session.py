"""Session state kept in the session store."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from ....config.constants import FlashCategory
from ....utils.datetime import utc_now


@dataclass
class SessionData:
    """Server-side session.

    ``roles`` and ``permissions`` are a snapshot for display only; every
    request re-reads the actor from the database before authorizing.
    """

    session_id: str
    user_id: Optional[int]
    roles: List[str] = field(default_factory=list)
    permissions: Optional[List[str]] = None
    created_at: datetime = field(default_factory=utc_now)
    flashes: List[Dict[str, str]] = field(default_factory=list)

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    def add_flash(self, category: str, message: str) -> None:
        self.flashes.append({"category": str(FlashCategory(category).value), "message": message})

    def pop_flashes(self) -> List[Dict[str, str]]:
        flashes, self.flashes = self.flashes, []
        return flashes

    def clear_actor(self) -> None:
        """Drop the authenticated identity, keeping queued flashes."""
        self.user_id = None
        self.roles = []
        self.permissions = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "user_id": self.user_id,
            "roles": list(self.roles),
            "permissions": None if self.permissions is None else list(self.permissions),
            "created_at": self.created_at.isoformat(),
            "flashes": list(self.flashes),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionData":
        return cls(
            session_id=data["session_id"],
            user_id=data.get("user_id"),
            roles=data.get("roles") or [],
            permissions=data.get("permissions"),
            created_at=datetime.fromisoformat(data["created_at"]),
            flashes=data.get("flashes") or [],
        )


@dataclass(frozen=True)
class DenialOutcome:
    """What the access-denied boundary decided to do."""

    logged_out: bool
    redirect_to: str
    message: Optional[str] = None
    session_id: Optional[str] = None
