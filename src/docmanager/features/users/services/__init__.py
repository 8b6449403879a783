"""User services."""

from .password_hasher import PasswordHasher
from .user_role_service import UserRoleService, permission_editor_context

__all__ = ["PasswordHasher", "UserRoleService", "permission_editor_context"]
