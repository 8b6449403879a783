"""User repository backed by asyncpg."""

import json
import logging
from typing import Iterable, List, Optional

import asyncpg
from asyncpg import Connection

from ....core.exceptions import QueryError
from ....database.connection import DatabaseManager, parse_command_count
from ..entities.user import User

logger = logging.getLogger(__name__)


_USER_COLUMNS = "id, email, username, password, roles, permissions, created_at"


class UserRepository:
    """Handles user persistence only.

    Every method accepts an optional ``conn`` so callers can run several
    statements inside one transaction.
    """

    def __init__(self, database: DatabaseManager):
        if not database:
            raise ValueError("Database manager is required")
        self.database = database

    async def get_by_id(self, user_id: int, conn: Optional[Connection] = None) -> Optional[User]:
        """Get a user by primary key."""
        return await self._fetch_one(
            f"SELECT {_USER_COLUMNS} FROM users WHERE id = $1",
            user_id,
            conn=conn,
        )

    async def get_by_email(self, email: str, conn: Optional[Connection] = None) -> Optional[User]:
        """Get a user by exact email match."""
        return await self._fetch_one(
            f"SELECT {_USER_COLUMNS} FROM users WHERE email = $1",
            email,
            conn=conn,
        )

    async def get_by_identifier(self, identifier: str, conn: Optional[Connection] = None) -> Optional[User]:
        """Get a user by email or username (login form accepts either)."""
        return await self._fetch_one(
            f"SELECT {_USER_COLUMNS} FROM users WHERE email = $1 OR username = $1 LIMIT 1",
            identifier,
            conn=conn,
        )

    async def lock_for_update(self, user_id: int, conn: Connection) -> Optional[User]:
        """Fetch and row-lock a user for the rest of the current transaction."""
        return await self._fetch_one(
            f"SELECT {_USER_COLUMNS} FROM users WHERE id = $1 FOR UPDATE",
            user_id,
            conn=conn,
        )

    async def update_password(self, user_id: int, hashed_password: str, conn: Optional[Connection] = None) -> bool:
        """Store a new password hash. Returns False when the user is gone."""
        status = await self._execute(
            "UPDATE users SET password = $2 WHERE id = $1",
            user_id,
            hashed_password,
            conn=conn,
        )
        return parse_command_count(status) == 1

    async def update_roles_and_permissions(
        self,
        user_id: int,
        roles: Iterable[str],
        permissions: Optional[Iterable[str]],
        conn: Optional[Connection] = None,
    ) -> bool:
        """Persist roles and the explicit permission list in one statement."""
        permissions_json = None if permissions is None else json.dumps(list(permissions))
        status = await self._execute(
            """
            UPDATE users
            SET roles = $2::jsonb, permissions = $3::jsonb
            WHERE id = $1
            """,
            user_id,
            json.dumps(list(roles)),
            permissions_json,
            conn=conn,
        )
        return parse_command_count(status) == 1

    async def list_all(self, conn: Optional[Connection] = None) -> List[User]:
        """All users ordered by email, for the admin listing."""
        try:
            async with self.database.connection(conn) as connection:
                rows = await connection.fetch(f"SELECT {_USER_COLUMNS} FROM users ORDER BY email")
        except asyncpg.PostgresError as e:
            logger.error(f"User listing failed: {e}")
            raise QueryError("Failed to list users", details={"error": str(e)}) from e
        return [User.from_record(dict(row)) for row in rows]

    async def _fetch_one(self, query: str, *args, conn: Optional[Connection] = None) -> Optional[User]:
        try:
            async with self.database.connection(conn) as connection:
                row = await connection.fetchrow(query, *args)
        except asyncpg.PostgresError as e:
            logger.error(f"User lookup failed: {e}")
            raise QueryError("Failed to retrieve user from database", details={"error": str(e)}) from e
        return User.from_record(dict(row)) if row else None

    async def _execute(self, query: str, *args, conn: Optional[Connection] = None) -> str:
        try:
            async with self.database.connection(conn) as connection:
                return await connection.execute(query, *args)
        except asyncpg.PostgresError as e:
            logger.error(f"User update failed: {e}")
            raise QueryError("Failed to update user", details={"error": str(e)}) from e
