"""
Event Repository

Event Store Adapter backed by PostgreSQL used as a document store: each event
is a JSONB document, with occurs_at and the normalized location projected into
indexed columns for server-side filtering.
"""

import asyncio
import json
import logging
import uuid
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

import asyncpg

from core.config import InfraConfig
from core.postgres_client import PostgresClientWrapper

from .aggregation import day_bounds
from .models import Event, StoredEvent, normalize_location
from .protocols import PersistenceError

logger = logging.getLogger(__name__)

# Failures that mean the store is unreachable or rejected the operation
STORE_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)


def make_event_id() -> str:
    return f"evt_{uuid.uuid4().hex[:16]}"


class EventRepository:
    """Event document collection - PostgreSQL JSONB"""

    def __init__(self, db: PostgresClientWrapper, config: Optional[InfraConfig] = None):
        if config is None:
            config = InfraConfig.from_env()

        self.db = db
        self.schema = config.events_schema
        self.collection = config.events_collection

    @property
    def _table(self) -> str:
        return f"{self.schema}.{self.collection}"

    async def ensure_schema(self) -> None:
        """Create the schema, collection table and filter indexes if missing"""
        statements = [
            f"CREATE SCHEMA IF NOT EXISTS {self.schema}",
            f"""
                CREATE TABLE IF NOT EXISTS {self._table} (
                    event_id TEXT PRIMARY KEY,
                    document JSONB NOT NULL,
                    occurs_at TIMESTAMPTZ NOT NULL,
                    location_key TEXT,
                    created_at TIMESTAMPTZ NOT NULL
                )
            """,
            f"CREATE INDEX IF NOT EXISTS {self.collection}_occurs_at_idx ON {self._table} (occurs_at)",
            f"CREATE INDEX IF NOT EXISTS {self.collection}_location_idx ON {self._table} (location_key)",
        ]
        try:
            async with self.db:
                for sql in statements:
                    await self.db.execute(sql)
        except STORE_ERRORS as e:
            logger.error(f"Failed to ensure event collection {self._table}: {e}")
            raise PersistenceError(f"Failed to prepare event collection: {e}") from e

        logger.info(f"Event collection ready: {self._table}")

    async def create(self, event: Event) -> StoredEvent:
        """Insert one event document"""
        stored = StoredEvent(
            **event.model_dump(),
            event_id=make_event_id(),
            created_at=datetime.now(timezone.utc),
        )

        query = f"""
            INSERT INTO {self._table} (event_id, document, occurs_at, location_key, created_at)
            VALUES ($1, $2::jsonb, $3, $4, $5)
        """
        params = [
            stored.event_id,
            json.dumps(stored.model_dump(mode="json")),
            stored.occurs_at,
            stored.location_key,
            stored.created_at,
        ]

        try:
            async with self.db:
                await self.db.execute(query, params)
        except STORE_ERRORS as e:
            logger.error(f"Failed to create event: {e}", exc_info=True)
            raise PersistenceError(f"Failed to persist event: {e}") from e

        return stored

    async def get_by_id(self, event_id: str) -> Optional[StoredEvent]:
        """Find one event document"""
        query = f"SELECT document FROM {self._table} WHERE event_id = $1"

        try:
            async with self.db:
                row = await self.db.query_row(query, [event_id])
        except STORE_ERRORS as e:
            logger.error(f"Failed to get event {event_id}: {e}")
            raise PersistenceError(f"Failed to read event {event_id}: {e}") from e

        return self._to_event(row) if row else None

    async def list_all(self) -> List[StoredEvent]:
        """Snapshot of every stored event"""
        return await self.list_by_filter()

    async def list_by_filter(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        location: Optional[str] = None,
    ) -> List[StoredEvent]:
        """Find event documents by inclusive day range and location"""
        conditions = []
        params: List[Any] = []

        lower, upper = day_bounds(start_date, end_date)
        if lower is not None:
            params.append(lower)
            conditions.append(f"occurs_at >= ${len(params)}")
        if upper is not None:
            params.append(upper)
            conditions.append(f"occurs_at < ${len(params)}")

        location_key = normalize_location(location)
        if location_key is not None:
            params.append(location_key)
            conditions.append(f"location_key = ${len(params)}")

        where_clause = " AND ".join(conditions) if conditions else "TRUE"
        query = f"""
            SELECT document FROM {self._table}
            WHERE {where_clause}
            ORDER BY created_at ASC, event_id ASC
        """

        try:
            async with self.db:
                rows = await self.db.query(query, params)
        except STORE_ERRORS as e:
            logger.error(f"Failed to list events: {e}")
            raise PersistenceError(f"Failed to read events: {e}") from e

        return [self._to_event(row) for row in rows]

    async def delete(self, event_id: str) -> bool:
        """Delete one event document"""
        query = f"DELETE FROM {self._table} WHERE event_id = $1"

        try:
            async with self.db:
                status = await self.db.execute(query, [event_id])
        except STORE_ERRORS as e:
            logger.error(f"Failed to delete event {event_id}: {e}")
            raise PersistenceError(f"Failed to delete event {event_id}: {e}") from e

        return _affected_rows(status) > 0

    async def count(self) -> int:
        query = f"SELECT COUNT(*) AS total FROM {self._table}"

        try:
            async with self.db:
                row = await self.db.query_row(query)
        except STORE_ERRORS as e:
            logger.error(f"Failed to count events: {e}")
            raise PersistenceError(f"Failed to count events: {e}") from e

        return int(row["total"]) if row else 0

    @staticmethod
    def _to_event(row: Dict[str, Any]) -> StoredEvent:
        document = row["document"]
        if isinstance(document, str):
            document = json.loads(document)
        return StoredEvent.model_validate(document)


def _affected_rows(status: Optional[str]) -> int:
    """Parse the row count from a command status such as 'DELETE 1'"""
    if not status:
        return 0
    try:
        return int(status.rsplit(" ", 1)[-1])
    except ValueError:
        return 0


__all__ = ["EventRepository", "make_event_id", "STORE_ERRORS"]
