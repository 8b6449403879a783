"""Authentication and authorization exceptions for docmanager."""

from datetime import datetime
from typing import Optional

from .base import DocManagerError


class AuthenticationError(DocManagerError):
    """Base exception for authentication errors (no usable actor)."""

    def __init__(self, message: str = "Authentication required", error_code: Optional[str] = None, **kwargs):
        super().__init__(message, error_code or "authentication_required", **kwargs)


class InvalidCredentialsError(AuthenticationError):
    """Raised when login credentials do not match a user."""

    def __init__(self, message: str = "Invalid credentials."):
        super().__init__(message, "invalid_credentials")


class InvalidOrExpiredTokenError(AuthenticationError):
    """Raised for a password reset token that is unknown, expired or already used.

    The three causes share one message and one error code so callers cannot
    tell which of them applied.
    """

    FIELD = "token"

    def __init__(self, message: str = "Invalid or expired password reset token."):
        super().__init__(
            message,
            "invalid_or_expired_token",
            details={
                "errors": [
                    {
                        "field": self.FIELD,
                        "message": "This password reset link is invalid or has expired.",
                    }
                ]
            },
        )


class SessionRevokedError(AuthenticationError):
    """Raised when a session was terminated because the actor lost all access."""

    def __init__(
        self,
        message: str = "Your access rights have been changed by an administrator. Please log in again.",
    ):
        super().__init__(message, "session_revoked")


class UserNotFoundError(DocManagerError):
    """Raised when a user lookup by id finds nothing."""

    def __init__(self, message: str = "User not found", user_id: Optional[int] = None):
        super().__init__(message, "user_not_found", details={"user_id": user_id})


class AuthorizationError(DocManagerError):
    """Raised when an authenticated actor is denied an attribute."""

    def __init__(
        self,
        message: str = "Access denied.",
        attribute: Optional[str] = None,
        error_code: Optional[str] = None,
    ):
        super().__init__(message, error_code or "forbidden", details={"attribute": attribute})
        self.attribute = attribute


class RoleAssignmentError(AuthorizationError):
    """Raised when an admin role edit is refused."""

    def __init__(self, message: str, target_user_id: Optional[int] = None):
        super().__init__(message, error_code="role_assignment_refused")
        self.details["target_user_id"] = target_user_id


class RateLimitError(DocManagerError):
    """Password reset rate limit reached.

    Only used internally for logging; request_reset never lets it escape.
    """

    def __init__(
        self,
        message: str = "Password reset rate limit exceeded",
        user_id: Optional[int] = None,
        count: int = 0,
        window_start: Optional[datetime] = None,
    ):
        super().__init__(message, "rate_limit_exceeded")
        self.details.update({
            "user_id": user_id,
            "count": count,
            "window_start": window_start.isoformat() if window_start else None,
        })
