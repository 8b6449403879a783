"""Auth services."""

from .auth_service import AuthService
from .password_reset_service import PasswordResetService, hash_token
from .reset_email import RESET_EMAIL_SUBJECT, build_reset_email
from .session_service import AccessDeniedHandler, SessionService, new_session_id

__all__ = [
    "RESET_EMAIL_SUBJECT",
    "AccessDeniedHandler",
    "AuthService",
    "PasswordResetService",
    "SessionService",
    "build_reset_email",
    "hash_token",
    "new_session_id",
]
