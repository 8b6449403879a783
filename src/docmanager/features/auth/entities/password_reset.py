"""Password reset token entity."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from ....utils.datetime import ensure_utc


@dataclass
class PasswordReset:
    """A stored reset token.

    Only the SHA-256 hash of the secret is kept. ``used_at`` is set both when
    the token is consumed and when a newer request supersedes it.
    """

    id: Optional[int]
    user_id: int
    token_hash: str
    expires_at: datetime
    created_at: datetime
    used_at: Optional[datetime] = None

    def __post_init__(self):
        if len(self.token_hash) != 64:
            raise ValueError("token_hash must be a 64 character hex digest")
        self.expires_at = ensure_utc(self.expires_at)
        self.created_at = ensure_utc(self.created_at)
        if self.used_at is not None:
            self.used_at = ensure_utc(self.used_at)

    def is_used(self) -> bool:
        return self.used_at is not None

    def is_expired(self, now: datetime) -> bool:
        return ensure_utc(now) >= self.expires_at

    def is_valid(self, now: datetime) -> bool:
        return not self.is_used() and not self.is_expired(now)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "PasswordReset":
        return cls(
            id=record["id"],
            user_id=record["user_id"],
            token_hash=record["token_hash"].strip(),
            expires_at=record["expires_at"],
            created_at=record["created_at"],
            used_at=record.get("used_at"),
        )
