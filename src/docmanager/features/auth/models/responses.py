"""Authentication API response models."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

RESET_REQUESTED_MESSAGE = (
    "If an account exists with this email, you will receive a password reset link shortly."
)
RESET_SUCCESS_MESSAGE = (
    "Your password has been reset successfully. You can now log in with your new password."
)
ACCESS_REVOKED_MESSAGE = (
    "Your access rights have been changed by an administrator. Please log in again."
)


class MessageResponse(BaseModel):
    """Outcome of a command that only reports success and a message."""

    success: bool = Field(..., description="Whether the request was accepted")
    message: str = Field(..., description="Human readable outcome")


class TokenValidationResponse(BaseModel):
    valid: bool


class SessionResponse(BaseModel):
    """The authenticated actor as seen by the client."""

    user_id: int
    email: str
    username: Optional[str] = None
    roles: List[str]
    permissions: List[str]
    permission_level: str


class UserAccessResponse(BaseModel):
    id: int
    email: str
    roles: List[str]
    permissions: Optional[List[str]] = None
    permission_level: str


class PermissionEditorResponse(BaseModel):
    permission_groups: Dict[str, Dict[str, str]]
    permission_sets: Dict[str, Dict[str, Any]]
    ui_permissions: List[str]


def reset_requested_response() -> MessageResponse:
    """The only answer ``request_reset`` ever gives."""
    return MessageResponse(success=True, message=RESET_REQUESTED_MESSAGE)
