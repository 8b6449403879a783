"""Auth API models."""

from .requests import (
    ForgotPasswordRequest,
    LoginRequest,
    ResetPasswordRequest,
    UpdateUserAccessRequest,
    check_password_strength,
)
from .responses import (
    ACCESS_REVOKED_MESSAGE,
    RESET_REQUESTED_MESSAGE,
    RESET_SUCCESS_MESSAGE,
    MessageResponse,
    PermissionEditorResponse,
    SessionResponse,
    TokenValidationResponse,
    UserAccessResponse,
    reset_requested_response,
)

__all__ = [
    "ACCESS_REVOKED_MESSAGE",
    "RESET_REQUESTED_MESSAGE",
    "RESET_SUCCESS_MESSAGE",
    "ForgotPasswordRequest",
    "LoginRequest",
    "MessageResponse",
    "PermissionEditorResponse",
    "ResetPasswordRequest",
    "SessionResponse",
    "TokenValidationResponse",
    "UpdateUserAccessRequest",
    "UserAccessResponse",
    "check_password_strength",
    "reset_requested_response",
]
