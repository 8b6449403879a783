"""Auth entities."""

from .password_reset import PasswordReset
from .session import DenialOutcome, SessionData

__all__ = ["DenialOutcome", "PasswordReset", "SessionData"]
