"""FastAPI dependency providers backed by the service container."""

from typing import Optional

from fastapi import Request

from .config.settings import DocManagerSettings
from .container import ServiceContainer
from .core.exceptions import AuthenticationError, ConfigurationError
from .features.activity.repositories.activity_log_repository import ActivityLogRepository
from .features.auth.entities.session import SessionData
from .features.auth.services.auth_service import AuthService
from .features.auth.services.password_reset_service import PasswordResetService
from .features.users.entities.user import User
from .features.users.services.password_hasher import PasswordHasher
from .features.users.services.user_role_service import UserRoleService


def get_container(request: Request) -> ServiceContainer:
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise ConfigurationError("Service container is not initialized")
    return container


def get_session(request: Request) -> Optional[SessionData]:
    return getattr(request.state, "session", None)


def get_actor(request: Request) -> Optional[User]:
    return getattr(request.state, "user", None)


def require_actor(request: Request) -> User:
    """Authenticated actor or ``AuthenticationError``."""
    actor = get_actor(request)
    if actor is None:
        raise AuthenticationError()
    return actor


def get_settings_from_app(request: Request) -> DocManagerSettings:
    return get_container(request).settings


def get_auth_service(request: Request) -> AuthService:
    return get_container(request).auth_service


def get_password_reset_service(request: Request) -> PasswordResetService:
    return get_container(request).password_reset_service


def get_password_hasher(request: Request) -> PasswordHasher:
    return get_container(request).password_hasher


def get_user_role_service(request: Request) -> UserRoleService:
    return get_container(request).user_role_service


def get_activity_repository(request: Request) -> ActivityLogRepository:
    return get_container(request).activity_repository
