"""Per-request actor refresh and the access-denied boundary.

Role and permission changes made by an administrator must take effect on
the very next request, so the actor is never trusted from the session
snapshot: it is re-read from the database on every request and again when
an authorization check fails.
"""

import logging
import secrets
from typing import Optional

from ....config.constants import FlashCategory, PermissionLevel, Roles
from ....core.exceptions import AuthorizationError, DocManagerError, SessionStoreError
from ...users.entities.user import User
from ...users.repositories.user_repository import UserRepository
from ..adapters.redis_session_store import SessionStore
from ..entities.session import DenialOutcome, SessionData
from ..models.responses import ACCESS_REVOKED_MESSAGE

logger = logging.getLogger(__name__)


def new_session_id() -> str:
    return secrets.token_urlsafe(32)


class SessionService:
    """Loads sessions and refreshes the in-flight actor."""

    def __init__(self, user_repository: UserRepository, session_store: SessionStore):
        self.user_repository = user_repository
        self.session_store = session_store

    async def load(self, session_id: Optional[str]) -> Optional[SessionData]:
        if not session_id:
            return None
        return await self.session_store.get(session_id)

    async def refresh_actor(self, session: Optional[SessionData]) -> Optional[User]:
        """Re-read the session's actor from the database.

        Returns None (unauthenticated) when there is no actor, the user no
        longer exists or the lookup failed.
        """
        if session is None or not session.is_authenticated:
            return None

        try:
            user = await self.user_repository.get_by_id(session.user_id)
        except DocManagerError as e:
            logger.error(f"Failed to refresh user {session.user_id}: {e}")
            return None

        if user is None:
            logger.warning(f"Session {session.session_id} refers to missing user {session.user_id}")
            return None

        logger.debug(
            f"Refreshing user {user.user_identifier} from database: "
            f"roles {session.roles} -> {user.roles}, "
            f"permissions {session.permissions} -> {user.permissions}"
        )

        if session.roles != user.roles or session.permissions != user.permissions:
            session.roles = list(user.roles)
            session.permissions = None if user.permissions is None else list(user.permissions)
            try:
                await self.session_store.save(session)
            except SessionStoreError as e:
                logger.warning(f"Could not update snapshot of session {session.session_id}: {e}")

        return user


class AccessDeniedHandler:
    """Decides what happens after an authorization failure.

    When the freshly loaded actor has no meaningful access left, the session
    is destroyed and the client is sent back to the login page with a flash
    message; otherwise it is sent home.
    """

    def __init__(self, user_repository: UserRepository, session_store: SessionStore):
        self.user_repository = user_repository
        self.session_store = session_store

    async def handle(self, session: Optional[SessionData], error: AuthorizationError) -> DenialOutcome:
        if session is None or not session.is_authenticated:
            logger.warning(f"Access denied for anonymous request: {error.message}")
            return DenialOutcome(logged_out=False, redirect_to="login", message=error.message)

        try:
            user = await self.user_repository.get_by_id(session.user_id)
        except DocManagerError as e:
            logger.error(f"Failed to reload user {session.user_id} after access denial: {e}")
            user = None

        logger.warning(
            f"Access denied for user {session.user_id} on {error.attribute}: "
            f"roles={user.effective_roles() if user else []} "
            f"permissions={user.get_permissions() if user else []}"
        )

        if user is None or self._has_lost_access(user):
            return await self._terminate(session, user)

        return DenialOutcome(logged_out=False, redirect_to="home", message=error.message)

    @staticmethod
    def _has_lost_access(user: User) -> bool:
        level = user.permission_level()
        logger.debug(f"Permission level of user {user.id} after denial: {level.value}")
        return level == PermissionLevel.NONE or (
            level == PermissionLevel.RESTRICTED and not user.has_role(Roles.USER)
        )

    async def _terminate(self, session: SessionData, user: Optional[User]) -> DenialOutcome:
        logger.info(
            f"User {user.user_identifier if user else session.user_id} lost all permissions, invalidating session"
        )
        session.clear_actor()

        # The flash travels on a fresh anonymous session.
        replacement = SessionData(session_id=new_session_id(), user_id=None, flashes=session.pop_flashes())
        replacement.add_flash(FlashCategory.ERROR.value, ACCESS_REVOKED_MESSAGE)
        try:
            await self.session_store.delete(session.session_id)
            await self.session_store.save(replacement)
        except SessionStoreError as e:
            # Without a stored replacement the client only gets its cookie cleared.
            logger.error(f"Failed to replace revoked session {session.session_id}: {e}")
            replacement_id = None
        else:
            replacement_id = replacement.session_id

        return DenialOutcome(
            logged_out=True,
            redirect_to="login",
            message=ACCESS_REVOKED_MESSAGE,
            session_id=replacement_id,
        )
