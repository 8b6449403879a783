"""Authentication API request models."""

from typing import List

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from ....config.constants import PasswordPolicy


def check_password_strength(value: str) -> str:
    """Reject passwords that do not meet the password policy."""
    if len(value) < PasswordPolicy.MIN_LENGTH:
        raise ValueError(f"Password must be at least {PasswordPolicy.MIN_LENGTH} characters long.")
    if len(value.encode("utf-8")) > PasswordPolicy.MAX_BYTES:
        raise ValueError(f"Password must be at most {PasswordPolicy.MAX_BYTES} bytes long.")
    if not any(c.isupper() for c in value):
        raise ValueError("Password must contain at least one uppercase letter.")
    if not any(c.islower() for c in value):
        raise ValueError("Password must contain at least one lowercase letter.")
    if not any(c.isdigit() for c in value):
        raise ValueError("Password must contain at least one number.")
    return value


class LoginRequest(BaseModel):
    """User login request."""

    username: str = Field(..., min_length=1, max_length=255, description="Email or username")
    password: str = Field(..., min_length=1, max_length=255, description="Password")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Username cannot be empty")
        return v.strip()


class ForgotPasswordRequest(BaseModel):
    """Forgot password request."""

    email: EmailStr = Field(..., description="User email address")


class ResetPasswordRequest(BaseModel):
    """Reset password request; the token comes from the URL path."""

    password: str = Field(..., max_length=PasswordPolicy.MAX_LENGTH, description="New password")
    confirm_password: str = Field(..., description="Password confirmation")

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return check_password_strength(v)

    @model_validator(mode="after")
    def passwords_match(self) -> "ResetPasswordRequest":
        if not self.confirm_password:
            raise ValueError("Please confirm your password.")
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match.")
        return self


class UpdateUserAccessRequest(BaseModel):
    """Admin edit of a user's roles and explicit permissions."""

    roles: List[str] = Field(default_factory=list, description="Stored role tags")
    permissions: List[str] = Field(default_factory=list, description="Explicit permission keys")
