"""
PostgreSQL Client Wrapper

Thin wrapper around an asyncpg connection pool.
Provides config-driven initialization and a consistent database access pattern.

The wrapper is constructed explicitly and handed to repositories; there is no
per-process client cache.

Usage:
    from core.postgres_client import create_postgres_client

    db = create_postgres_client("event_service")

    async with db:
        rows = await db.query("SELECT * FROM events.event_documents WHERE event_id = $1", [event_id])
"""

import logging
from typing import Any, Dict, List, Optional

import asyncpg

from core.config import InfraConfig

logger = logging.getLogger(__name__)


class PostgresClientWrapper:
    """
    PostgreSQL client wrapper backed by an asyncpg pool.

    The pool is opened lazily on first use (or on ``async with``) and closed
    with ``close()``.
    """

    def __init__(
        self,
        service_name: str,
        host: Optional[str] = None,
        port: Optional[int] = None,
        database: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        config: Optional[InfraConfig] = None,
    ):
        """
        Initialize PostgreSQL client wrapper.

        Args:
            service_name: Name of the service using this client
            host: PostgreSQL host (defaults to config)
            port: PostgreSQL port (defaults to config)
            database: Database name (defaults to config)
            username: Database username
            password: Database password
            config: Infrastructure config (defaults to InfraConfig.from_env())
        """
        if config is None:
            config = InfraConfig.from_env()

        self.service_name = service_name
        self.host = host or config.postgres_host
        self.port = port or config.postgres_port
        self.database = database or config.postgres_db
        self.username = username or config.postgres_user
        self.password = password or config.postgres_password
        self.min_size = config.postgres_pool_min
        self.max_size = config.postgres_pool_max
        self.timeout = config.postgres_timeout

        self._pool: Optional[asyncpg.Pool] = None

        logger.info(f"PostgreSQL client initialized for {service_name}: {self.host}:{self.port}/{self.database}")

    @property
    def is_connected(self) -> bool:
        return self._pool is not None

    async def connect(self) -> asyncpg.Pool:
        """Open the connection pool if it is not open yet"""
        if self._pool is None:
            self._pool = await asyncpg.create_pool(
                host=self.host,
                port=self.port,
                user=self.username,
                password=self.password,
                database=self.database,
                min_size=self.min_size,
                max_size=self.max_size,
                timeout=self.timeout,
            )
            logger.info(f"PostgreSQL pool opened for {self.service_name}")
        return self._pool

    async def __aenter__(self):
        """Async context manager entry"""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit (pool stays open for reuse)"""
        return None

    async def health_check(self) -> Optional[Dict]:
        """Check database health"""
        row = await self.query_row("SELECT 1 AS ok")
        return {"healthy": bool(row and row.get("ok") == 1), "database": self.database}

    async def query(self, sql: str, params: Optional[List[Any]] = None) -> List[Dict[str, Any]]:
        """Execute query and return results"""
        pool = await self.connect()
        rows = await pool.fetch(sql, *(params or []))
        return [dict(row) for row in rows]

    async def query_row(self, sql: str, params: Optional[List[Any]] = None) -> Optional[Dict[str, Any]]:
        """Execute query and return single row"""
        pool = await self.connect()
        row = await pool.fetchrow(sql, *(params or []))
        return dict(row) if row is not None else None

    async def execute(self, sql: str, params: Optional[List[Any]] = None) -> str:
        """Execute SQL statement and return the command status (e.g. 'DELETE 1')"""
        pool = await self.connect()
        return await pool.execute(sql, *(params or []))

    async def close(self):
        """Close connection pool"""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
            logger.info(f"PostgreSQL pool closed for {self.service_name}")


def create_postgres_client(
    service_name: str,
    config: Optional[InfraConfig] = None,
    **kwargs,
) -> PostgresClientWrapper:
    """
    Create a PostgreSQL client for a service.

    Args:
        service_name: Service name
        config: Optional infrastructure config
        **kwargs: Host/port/credential overrides

    Returns:
        PostgresClientWrapper instance
    """
    return PostgresClientWrapper(service_name=service_name, config=config, **kwargs)
