"""Constants and enums for docmanager.

This module defines the role names, permission levels and the fixed
security parameters of the password reset flow. The reset parameters are
part of the stored data contract (token hash width, expiry window) and are
deliberately not configurable.
"""

from enum import Enum
from typing import Final


class Roles:
    """Role tags understood by the authorization engine."""

    USER: Final[str] = "ROLE_USER"
    ADMIN: Final[str] = "ROLE_ADMIN"
    PREFIX: Final[str] = "ROLE_"


class PermissionLevel(str, Enum):
    """Coarse classification of an actor's explicit permission list."""

    ADMIN = "Admin"
    FULL = "Full"
    READ_ONLY = "Read-only"
    LIMITED = "Limited"
    NONE = "None"
    # Never produced by the classifier; the access-denied handler still checks it.
    RESTRICTED = "Restricted"


class PasswordResetLimits:
    """Password reset token parameters."""

    TOKEN_BYTES: Final[int] = 32
    TOKEN_HEX_LENGTH: Final[int] = 64
    TOKEN_EXPIRY_MINUTES: Final[int] = 30
    MAX_REQUESTS_PER_HOUR: Final[int] = 3
    RATE_LIMIT_WINDOW_MINUTES: Final[int] = 60
    DEFAULT_RETENTION_DAYS: Final[int] = 7


class PasswordPolicy:
    """Password strength rules applied before a credential is hashed."""

    MIN_LENGTH: Final[int] = 8
    MAX_LENGTH: Final[int] = 128
    MAX_BYTES: Final[int] = 72


class SessionKeys:
    """Redis key patterns for session state."""

    SESSION: Final[str] = "session:{session_id}"
    USER_SESSIONS: Final[str] = "user_sessions:{user_id}"


class FlashCategory(str, Enum):
    """Flash message categories queued on a session."""

    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
