"""Login and logout."""

import logging
from typing import Optional, Tuple

from ....core.exceptions import InvalidCredentialsError
from ....utils.datetime import utc_now
from ...users.entities.user import User
from ...users.repositories.user_repository import UserRepository
from ...users.services.password_hasher import PasswordHasher
from ..adapters.redis_session_store import SessionStore
from ..entities.session import SessionData
from .session_service import new_session_id

logger = logging.getLogger(__name__)


class AuthService:
    """Verifies credentials and manages server-side sessions."""

    def __init__(
        self,
        user_repository: UserRepository,
        session_store: SessionStore,
        password_hasher: Optional[PasswordHasher] = None,
        session_ttl_seconds: Optional[int] = None,
    ):
        self.user_repository = user_repository
        self.session_store = session_store
        self.password_hasher = password_hasher or PasswordHasher()
        self.session_ttl_seconds = session_ttl_seconds

    async def login(self, identifier: str, password: str) -> Tuple[SessionData, User]:
        """Authenticate by email or username and open a session.

        Returns the new session and the authenticated user.

        Raises:
            InvalidCredentialsError: unknown identifier or wrong password
        """
        user = await self.user_repository.get_by_identifier(identifier)
        if user is None or not self.password_hasher.verify(password, user.password):
            logger.info(f"Failed login attempt for {identifier}")
            raise InvalidCredentialsError()

        session = SessionData(
            session_id=new_session_id(),
            user_id=user.id,
            roles=list(user.roles),
            permissions=None if user.permissions is None else list(user.permissions),
            created_at=utc_now(),
        )
        await self.session_store.save(session, self.session_ttl_seconds)

        logger.info(f"User {user.id} logged in")
        return session, user

    async def logout(self, session_id: Optional[str]) -> bool:
        if not session_id:
            return False
        deleted = await self.session_store.delete(session_id)
        if deleted:
            logger.info(f"Session {session_id} logged out")
        return deleted
