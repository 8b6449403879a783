"""Redis-backed session store."""

import json
import logging
from typing import Optional, Protocol

import redis.asyncio as redis
from redis.exceptions import RedisError

from ....config.constants import SessionKeys
from ....config.settings import DocManagerSettings
from ....core.exceptions import SessionStoreError
from ..entities.session import SessionData

logger = logging.getLogger(__name__)


class SessionStore(Protocol):
    """Session persistence used by the auth services and middleware."""

    async def get(self, session_id: str) -> Optional[SessionData]:
        ...

    async def save(self, session: SessionData, ttl_seconds: Optional[int] = None) -> None:
        ...

    async def delete(self, session_id: str) -> bool:
        ...


def create_redis_client(settings: DocManagerSettings) -> redis.Redis:
    """Build the asyncio Redis client from settings."""
    password = settings.redis_password.get_secret_value() if settings.redis_password else None
    return redis.from_url(settings.redis_url, password=password, decode_responses=True)


class RedisSessionStore:
    """Stores ``SessionData`` as JSON with a TTL, indexed per user."""

    def __init__(self, redis_client: redis.Redis, key_prefix: str = "docmanager", ttl_seconds: int = 3600):
        if redis_client is None:
            raise ValueError("Redis client is required")
        self.redis = redis_client
        self.key_prefix = key_prefix
        self.ttl_seconds = ttl_seconds

    def _make_key(self, pattern: str, **kwargs) -> str:
        return f"{self.key_prefix}:{pattern.format(**kwargs)}"

    async def get(self, session_id: str) -> Optional[SessionData]:
        """Load a session; unreadable or missing sessions are treated as absent."""
        key = self._make_key(SessionKeys.SESSION, session_id=session_id)
        try:
            raw = await self.redis.get(key)
        except RedisError as e:
            logger.error(f"Failed to load session {session_id}: {e}")
            return None

        if not raw:
            return None

        try:
            return SessionData.from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"Discarding malformed session {session_id}: {e}")
            return None

    async def save(self, session: SessionData, ttl_seconds: Optional[int] = None) -> None:
        ttl = ttl_seconds or self.ttl_seconds
        key = self._make_key(SessionKeys.SESSION, session_id=session.session_id)
        try:
            pipe = self.redis.pipeline()
            pipe.setex(key, ttl, json.dumps(session.to_dict()))
            if session.user_id is not None:
                user_key = self._make_key(SessionKeys.USER_SESSIONS, user_id=session.user_id)
                pipe.sadd(user_key, session.session_id)
                pipe.expire(user_key, ttl)
            await pipe.execute()
        except RedisError as e:
            logger.error(f"Failed to store session {session.session_id}: {e}")
            raise SessionStoreError("Session storage failed", details={"session_id": session.session_id}) from e

        logger.debug(f"Stored session {session.session_id} with TTL {ttl}")

    async def delete(self, session_id: str) -> bool:
        """Delete a session. Returns False when it did not exist."""
        session = await self.get(session_id)
        key = self._make_key(SessionKeys.SESSION, session_id=session_id)
        try:
            pipe = self.redis.pipeline()
            pipe.delete(key)
            if session is not None and session.user_id is not None:
                pipe.srem(self._make_key(SessionKeys.USER_SESSIONS, user_id=session.user_id), session_id)
            results = await pipe.execute()
        except RedisError as e:
            logger.error(f"Failed to delete session {session_id}: {e}")
            raise SessionStoreError("Session deletion failed", details={"session_id": session_id}) from e

        deleted = bool(results and results[0])
        if deleted:
            logger.debug(f"Deleted session {session_id}")
        return deleted
