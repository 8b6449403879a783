"""Auth repositories."""

from .password_reset_repository import PasswordResetRepository

__all__ = ["PasswordResetRepository"]
