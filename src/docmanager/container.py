"""Service wiring for the application."""

import logging
from dataclasses import dataclass
from typing import Optional

import redis.asyncio as redis

from .config.settings import DocManagerSettings
from .database.connection import DatabaseManager
from .features.activity.repositories.activity_log_repository import ActivityLogRepository
from .features.activity.services.activity_logger import ActivityLogger
from .features.auth.adapters.redis_session_store import RedisSessionStore, SessionStore, create_redis_client
from .features.auth.adapters.reset_link_builder import ResetLinkBuilder
from .features.auth.adapters.smtp_mailer import Mailer, SmtpMailer
from .features.auth.repositories.password_reset_repository import PasswordResetRepository
from .features.auth.services.auth_service import AuthService
from .features.auth.services.password_reset_service import PasswordResetService
from .features.auth.services.session_service import AccessDeniedHandler, SessionService
from .features.authorization.checker import AuthorizationChecker
from .features.users.repositories.user_repository import UserRepository
from .features.users.services.password_hasher import PasswordHasher
from .features.users.services.user_role_service import UserRoleService

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Every long-lived collaborator of a running application."""

    settings: DocManagerSettings
    database: DatabaseManager
    session_store: SessionStore
    mailer: Mailer
    checker: AuthorizationChecker
    password_hasher: PasswordHasher
    user_repository: UserRepository
    reset_repository: PasswordResetRepository
    activity_repository: ActivityLogRepository
    password_reset_service: PasswordResetService
    session_service: SessionService
    access_denied_handler: AccessDeniedHandler
    auth_service: AuthService
    user_role_service: UserRoleService
    activity_logger: ActivityLogger
    redis_client: Optional[redis.Redis] = None

    @classmethod
    def build(
        cls,
        settings: DocManagerSettings,
        database: Optional[DatabaseManager] = None,
        session_store: Optional[SessionStore] = None,
        mailer: Optional[Mailer] = None,
        checker: Optional[AuthorizationChecker] = None,
        password_hasher: Optional[PasswordHasher] = None,
    ) -> "ServiceContainer":
        """Wire the services, creating infrastructure that was not supplied."""
        database = database or DatabaseManager(
            settings.asyncpg_dsn,
            application_name=settings.app_name,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            command_timeout=settings.db_command_timeout,
        )

        redis_client = None
        if session_store is None:
            redis_client = create_redis_client(settings)
            session_store = RedisSessionStore(
                redis_client,
                key_prefix=settings.session_key_prefix,
                ttl_seconds=settings.session_ttl_seconds,
            )

        mailer = mailer or SmtpMailer.from_settings(settings)
        checker = checker or AuthorizationChecker()
        password_hasher = password_hasher or PasswordHasher()

        user_repository = UserRepository(database)
        reset_repository = PasswordResetRepository(database)
        activity_repository = ActivityLogRepository(database)

        return cls(
            settings=settings,
            database=database,
            session_store=session_store,
            mailer=mailer,
            checker=checker,
            password_hasher=password_hasher,
            user_repository=user_repository,
            reset_repository=reset_repository,
            activity_repository=activity_repository,
            password_reset_service=PasswordResetService(
                database,
                user_repository,
                reset_repository,
                mailer,
                ResetLinkBuilder(settings.app_base_url),
                email_from=settings.app_email_from,
                retention_days=settings.password_reset_retention_days,
            ),
            session_service=SessionService(user_repository, session_store),
            access_denied_handler=AccessDeniedHandler(user_repository, session_store),
            auth_service=AuthService(
                user_repository,
                session_store,
                password_hasher,
                session_ttl_seconds=settings.session_ttl_seconds,
            ),
            user_role_service=UserRoleService(user_repository, checker),
            activity_logger=ActivityLogger(activity_repository),
            redis_client=redis_client,
        )

    async def startup(self) -> None:
        await self.database.create_pool()

    async def shutdown(self) -> None:
        await self.database.close_pool()
        if self.redis_client is not None:
            await self.redis_client.aclose()
        logger.info("Service container shut down")
