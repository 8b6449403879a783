"""Password reset token repository backed by asyncpg."""

import logging
from datetime import datetime
from typing import List, Optional

import asyncpg
from asyncpg import Connection

from ....core.exceptions import QueryError
from ....database.connection import DatabaseManager, parse_command_count
from ..entities.password_reset import PasswordReset

logger = logging.getLogger(__name__)


_COLUMNS = "id, user_id, token_hash, expires_at, used_at, created_at"


class PasswordResetRepository:
    """Persistence for reset tokens.

    Time filters take ``now`` from the caller so the service clock is the
    only source of time. Bulk operations are single statements.
    """

    def __init__(self, database: DatabaseManager):
        if not database:
            raise ValueError("Database manager is required")
        self.database = database

    async def create(
        self,
        user_id: int,
        token_hash: str,
        expires_at: datetime,
        created_at: datetime,
        conn: Optional[Connection] = None,
    ) -> PasswordReset:
        row = await self._fetchrow(
            f"""
            INSERT INTO password_resets (user_id, token_hash, expires_at, created_at)
            VALUES ($1, $2, $3, $4)
            RETURNING {_COLUMNS}
            """,
            user_id, token_hash, expires_at, created_at,
            conn=conn,
        )
        return PasswordReset.from_record(dict(row))

    async def find_valid_token(
        self,
        token_hash: str,
        now: datetime,
        conn: Optional[Connection] = None,
        for_update: bool = False,
    ) -> Optional[PasswordReset]:
        """Unused, unexpired token with this hash; optionally row-locked."""
        lock = " FOR UPDATE" if for_update else ""
        row = await self._fetchrow(
            f"""
            SELECT {_COLUMNS} FROM password_resets
            WHERE token_hash = $1 AND expires_at > $2 AND used_at IS NULL
            LIMIT 1{lock}
            """,
            token_hash, now,
            conn=conn,
        )
        return PasswordReset.from_record(dict(row)) if row else None

    async def find_valid_tokens_by_user(
        self, user_id: int, now: datetime, conn: Optional[Connection] = None
    ) -> List[PasswordReset]:
        try:
            async with self.database.connection(conn) as connection:
                rows = await connection.fetch(
                    f"""
                    SELECT {_COLUMNS} FROM password_resets
                    WHERE user_id = $1 AND expires_at > $2 AND used_at IS NULL
                    ORDER BY created_at
                    """,
                    user_id, now,
                )
        except asyncpg.PostgresError as e:
            logger.error(f"Failed to list reset tokens for user {user_id}: {e}")
            raise QueryError("Failed to list password reset tokens", details={"error": str(e)}) from e
        return [PasswordReset.from_record(dict(row)) for row in rows]

    async def invalidate_all_for_user(self, user_id: int, now: datetime, conn: Optional[Connection] = None) -> int:
        """Mark every unused token of the user as used. Returns the row count."""
        status = await self._execute(
            "UPDATE password_resets SET used_at = $2 WHERE user_id = $1 AND used_at IS NULL",
            user_id, now,
            conn=conn,
        )
        return parse_command_count(status)

    async def mark_used(self, reset_id: int, now: datetime, conn: Optional[Connection] = None) -> bool:
        status = await self._execute(
            "UPDATE password_resets SET used_at = $2 WHERE id = $1 AND used_at IS NULL",
            reset_id, now,
            conn=conn,
        )
        return parse_command_count(status) == 1

    async def count_recent_requests(self, user_id: int, since: datetime, conn: Optional[Connection] = None) -> int:
        """Tokens created for the user after ``since``, whatever their state."""
        try:
            async with self.database.connection(conn) as connection:
                count = await connection.fetchval(
                    "SELECT COUNT(*) FROM password_resets WHERE user_id = $1 AND created_at > $2",
                    user_id, since,
                )
        except asyncpg.PostgresError as e:
            logger.error(f"Failed to count reset requests for user {user_id}: {e}")
            raise QueryError("Failed to count password reset requests", details={"error": str(e)}) from e
        return int(count or 0)

    async def cleanup_expired(self, cutoff: datetime, conn: Optional[Connection] = None) -> int:
        """Delete rows created before ``cutoff``. Returns the row count."""
        status = await self._execute(
            "DELETE FROM password_resets WHERE created_at < $1",
            cutoff,
            conn=conn,
        )
        return parse_command_count(status)

    async def _fetchrow(self, query: str, *args, conn: Optional[Connection] = None):
        try:
            async with self.database.connection(conn) as connection:
                return await connection.fetchrow(query, *args)
        except asyncpg.PostgresError as e:
            logger.error(f"Password reset query failed: {e}")
            raise QueryError("Password reset query failed", details={"error": str(e)}) from e

    async def _execute(self, query: str, *args, conn: Optional[Connection] = None) -> str:
        try:
            async with self.database.connection(conn) as connection:
                return await connection.execute(query, *args)
        except asyncpg.PostgresError as e:
            logger.error(f"Password reset update failed: {e}")
            raise QueryError("Password reset update failed", details={"error": str(e)}) from e
