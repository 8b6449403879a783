"""Activity log repository backed by asyncpg."""

import logging
from typing import List, Optional

import asyncpg
from asyncpg import Connection

from ....core.exceptions import QueryError
from ....database.connection import DatabaseManager
from ..entities.activity_log import ActivityLog

logger = logging.getLogger(__name__)


_COLUMNS = "id, user_id, action, document_id, client_id, details, created_at"


class ActivityLogRepository:
    def __init__(self, database: DatabaseManager):
        if not database:
            raise ValueError("Database manager is required")
        self.database = database

    async def add(self, entry: ActivityLog, conn: Optional[Connection] = None) -> ActivityLog:
        """Insert ``entry`` and return it with its generated id."""
        try:
            async with self.database.connection(conn) as connection:
                row = await connection.fetchrow(
                    f"""
                    INSERT INTO activity_log (user_id, action, document_id, client_id, details, created_at)
                    VALUES ($1, $2, $3, $4, $5, $6)
                    RETURNING {_COLUMNS}
                    """,
                    entry.user_id, entry.action, entry.document_id,
                    entry.client_id, entry.details, entry.created_at,
                )
        except asyncpg.PostgresError as e:
            logger.error(f"Failed to record activity {entry.action} for user {entry.user_id}: {e}")
            raise QueryError("Failed to record activity", details={"error": str(e)}) from e
        return ActivityLog.from_record(dict(row))

    async def find_recent(self, limit: int = 10) -> List[ActivityLog]:
        return await self._fetch(
            f"SELECT {_COLUMNS} FROM activity_log ORDER BY created_at DESC LIMIT $1", limit
        )

    async def find_by_user(self, user_id: int, limit: int = 20) -> List[ActivityLog]:
        return await self._fetch(
            f"SELECT {_COLUMNS} FROM activity_log WHERE user_id = $1 ORDER BY created_at DESC LIMIT $2",
            user_id, limit,
        )

    async def find_by_document(self, document_id: int) -> List[ActivityLog]:
        return await self._fetch(
            f"SELECT {_COLUMNS} FROM activity_log WHERE document_id = $1 ORDER BY created_at DESC",
            document_id,
        )

    async def find_by_client(self, client_id: int) -> List[ActivityLog]:
        return await self._fetch(
            f"SELECT {_COLUMNS} FROM activity_log WHERE client_id = $1 ORDER BY created_at DESC",
            client_id,
        )

    async def count_all(self) -> int:
        try:
            async with self.database.connection() as connection:
                return int(await connection.fetchval("SELECT COUNT(*) FROM activity_log") or 0)
        except asyncpg.PostgresError as e:
            logger.error(f"Failed to count activity: {e}")
            raise QueryError("Failed to count activity", details={"error": str(e)}) from e

    async def _fetch(self, query: str, *args) -> List[ActivityLog]:
        try:
            async with self.database.connection() as connection:
                rows = await connection.fetch(query, *args)
        except asyncpg.PostgresError as e:
            logger.error(f"Activity query failed: {e}")
            raise QueryError("Failed to load activity", details={"error": str(e)}) from e
        return [ActivityLog.from_record(dict(row)) for row in rows]
