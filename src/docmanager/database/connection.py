"""
Database connection management using asyncpg for docmanager.
"""
from contextlib import asynccontextmanager
from typing import Optional
import logging

import asyncpg
from asyncpg import Connection, Pool

from ..core.exceptions import ConnectionError as DatabaseConnectionError

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Manages the asyncpg pool and hands out connections and transactions."""

    def __init__(self, database_url: str, application_name: str = "docmanager", **pool_config):
        """Initialize DatabaseManager.

        Args:
            database_url: PostgreSQL DSN
            application_name: Reported to PostgreSQL as application_name
            **pool_config: Additional pool configuration options
        """
        self.pool: Optional[Pool] = None
        self.dsn = database_url.replace("+asyncpg", "")
        self.application_name = application_name

        self.pool_config = {
            "min_size": 2,
            "max_size": 10,
            "max_inactive_connection_lifetime": 300,
            "command_timeout": 60,
            **pool_config
        }

    async def create_pool(self) -> Pool:
        """Create and return a connection pool."""
        if self.pool is None:
            logger.info(f"Creating database pool with size {self.pool_config['max_size']}")
            try:
                self.pool = await asyncpg.create_pool(
                    self.dsn,
                    server_settings={"application_name": self.application_name},
                    **self.pool_config
                )
            except (OSError, asyncpg.PostgresError) as e:
                raise DatabaseConnectionError(f"Could not create database pool: {e}") from e
            logger.info("Database pool created successfully")
        return self.pool

    async def close_pool(self):
        """Close the connection pool."""
        if self.pool:
            await self.pool.close()
            self.pool = None
            logger.info("Database pool closed")

    @asynccontextmanager
    async def acquire(self):
        """Acquire a connection from the pool."""
        if not self.pool:
            await self.create_pool()

        async with self.pool.acquire() as connection:
            yield connection

    @asynccontextmanager
    async def transaction(self):
        """Create a transaction context yielding its connection."""
        async with self.acquire() as connection:
            async with connection.transaction():
                yield connection

    @asynccontextmanager
    async def connection(self, conn: Optional[Connection] = None):
        """Reuse ``conn`` when given (e.g. inside a transaction), else acquire one."""
        if conn is not None:
            yield conn
            return
        async with self.acquire() as connection:
            yield connection

    async def health_check(self) -> bool:
        """Check database health."""
        try:
            async with self.acquire() as connection:
                result = await connection.fetchval("SELECT 1")
                return result == 1
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return False


def parse_command_count(status: str) -> int:
    """Extract the affected row count from an asyncpg status string like ``UPDATE 3``."""
    try:
        return int(status.split()[-1])
    except (AttributeError, IndexError, ValueError):
        return 0
