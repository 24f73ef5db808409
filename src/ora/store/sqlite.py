"""SQLite store backends.

Persist panel state and uploaded videos in a single SQLite database file.
Uses aiosqlite for async access.
"""

import logging
from datetime import datetime
from pathlib import Path

import aiosqlite

from .base import KeyValueStore, VideoStore
from .models import VideoBlob

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = "./ora_state.db"


class _SQLiteConnection:
    """Connection handling shared by both SQLite backends."""

    def __init__(self, path: str | Path = DEFAULT_DB_PATH):
        self._db_path = Path(path)
        self._connection: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """Open the database and create the schema."""
        if self._connection is not None:
            return
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._connection = await aiosqlite.connect(self._db_path)
        await self._create_schema()
        logger.debug("Opened %s", self._db_path)

    async def disconnect(self) -> None:
        """Close database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    async def _create_schema(self) -> None:
        raise NotImplementedError

    @property
    def connection(self) -> aiosqlite.Connection:
        if self._connection is None:
            raise RuntimeError("Store is not connected. Call connect() first.")
        return self._connection

    @property
    def db_path(self) -> Path:
        return self._db_path


class SQLiteKeyValueStore(_SQLiteConnection, KeyValueStore):
    """SQLite-backed key/value store.

    One row per key; values are JSON text.
    """

    async def _create_schema(self) -> None:
        await self.connection.execute("""
            CREATE TABLE IF NOT EXISTS kv (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """)
        await self.connection.commit()

    async def read_raw(self, key: str) -> str | None:
        async with self.connection.execute(
            "SELECT value FROM kv WHERE key = ?", (key,)
        ) as cursor:
            row = await cursor.fetchone()
        return row[0] if row else None

    async def write_raw(self, key: str, text: str) -> None:
        await self.connection.execute("""
            INSERT INTO kv (key, value, updated_at)
            VALUES (?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET
                value = excluded.value,
                updated_at = excluded.updated_at
        """, (key, text, datetime.utcnow().isoformat()))
        await self.connection.commit()

    async def delete(self, key: str) -> None:
        await self.connection.execute("DELETE FROM kv WHERE key = ?", (key,))
        await self.connection.commit()

    async def keys(self) -> list[str]:
        async with self.connection.execute("SELECT key FROM kv ORDER BY key") as cursor:
            rows = await cursor.fetchall()
        return [row[0] for row in rows]

    @property
    def backend_type(self) -> str:
        return "sqlite"


class SQLiteVideoStore(_SQLiteConnection, VideoStore):
    """SQLite-backed video store.

    Video bytes are stored as BLOBs keyed by (collection, slot).
    """

    async def _create_schema(self) -> None:
        await self.connection.execute("""
            CREATE TABLE IF NOT EXISTS videos (
                collection TEXT NOT NULL,
                slot INTEGER NOT NULL,
                data BLOB NOT NULL,
                content_type TEXT NOT NULL,
                filename TEXT,
                stored_at TEXT NOT NULL,
                PRIMARY KEY (collection, slot)
            )
        """)
        await self.connection.commit()

    async def put(self, blob: VideoBlob) -> VideoBlob:
        await self.connection.execute("""
            INSERT OR REPLACE INTO videos
            (collection, slot, data, content_type, filename, stored_at)
            VALUES (?, ?, ?, ?, ?, ?)
        """, (
            blob.collection,
            blob.slot,
            blob.data,
            blob.content_type,
            blob.filename,
            blob.stored_at.isoformat()
        ))
        await self.connection.commit()
        return blob

    async def get(self, collection: str, slot: int) -> VideoBlob | None:
        async with self.connection.execute(
            """
            SELECT collection, slot, data, content_type, filename, stored_at
            FROM videos WHERE collection = ? AND slot = ?
            """,
            (collection, slot)
        ) as cursor:
            row = await cursor.fetchone()
        return self._to_blob(row) if row else None

    async def get_all(self, collection: str) -> list[VideoBlob]:
        async with self.connection.execute(
            """
            SELECT collection, slot, data, content_type, filename, stored_at
            FROM videos WHERE collection = ?
            ORDER BY slot ASC
            """,
            (collection,)
        ) as cursor:
            rows = await cursor.fetchall()
        return [self._to_blob(row) for row in rows]

    @staticmethod
    def _to_blob(row: tuple) -> VideoBlob:
        collection, slot, data, content_type, filename, stored_at = row
        return VideoBlob(
            collection=collection,
            slot=slot,
            data=bytes(data),
            content_type=content_type,
            filename=filename,
            stored_at=datetime.fromisoformat(stored_at),
        )

    @property
    def backend_type(self) -> str:
        return "sqlite"
