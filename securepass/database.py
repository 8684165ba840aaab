# =======================================================================================
# securepass/database.py - Database Management & Key-Value Store
# =======================================================================================
from contextlib import contextmanager
from typing import Optional

from loguru import logger
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool, StaticPool

from .config import config


def _build_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        # In-memory SQLite must share one connection or every checkout sees an empty DB
        in_memory = url in ("sqlite://", "sqlite:///:memory:")
        return create_engine(
            url,
            poolclass=StaticPool if in_memory else None,
            connect_args={"check_same_thread": False},
            future=True,
        )
    return create_engine(
        url,
        poolclass=QueuePool,
        pool_size=config.DB_POOL_SIZE,
        max_overflow=config.DB_MAX_OVERFLOW,
        pool_pre_ping=True,
        isolation_level="READ COMMITTED",
        future=True,
    )


class DatabaseManager:
    """Manages database connections and transactions."""

    def __init__(self, url: Optional[str] = None):
        self.url = url or config.DB_URL
        self.engine: Engine = _build_engine(self.url)

    @contextmanager
    def get_connection(self):
        """Get a database connection with automatic cleanup."""
        with self.engine.begin() as conn:
            yield conn

    def execute_query(self, query: str, params: dict = None) -> int:
        """Execute a statement and return the affected row count."""
        with self.get_connection() as conn:
            return conn.execute(text(query), params or {}).rowcount

    def fetch_one(self, query: str, params: dict = None):
        """Fetch a single result."""
        with self.get_connection() as conn:
            result = conn.execute(text(query), params or {})
            return result.mappings().first()

    def dispose(self) -> None:
        self.engine.dispose()


class KeyValueStore:
    """
    Persistent string-keyed store.

    Every value is an opaque text blob; callers own the encoding.
    """

    def __init__(self, db: DatabaseManager):
        self.db = db
        self.ensure_schema()

    def ensure_schema(self) -> None:
        self.db.execute_query(
            """
            CREATE TABLE IF NOT EXISTS kv_store (
                kv_key   VARCHAR(64) PRIMARY KEY,
                kv_value TEXT NOT NULL
            )
            """
        )

    def get(self, key: str) -> Optional[str]:
        row = self.db.fetch_one(
            "SELECT kv_value FROM kv_store WHERE kv_key = :k", {"k": key}
        )
        return row["kv_value"] if row else None

    def set(self, key: str, value: str) -> None:
        # delete + insert in one transaction keeps this portable across dialects
        with self.db.get_connection() as conn:
            conn.execute(text("DELETE FROM kv_store WHERE kv_key = :k"), {"k": key})
            conn.execute(
                text("INSERT INTO kv_store (kv_key, kv_value) VALUES (:k, :v)"),
                {"k": key, "v": value},
            )
        logger.debug(f"[store] wrote {key} ({len(value)} bytes)")

    def delete(self, key: str) -> None:
        removed = self.db.execute_query(
            "DELETE FROM kv_store WHERE kv_key = :k", {"k": key}
        )
        logger.debug(f"[store] removed {key} ({removed} row(s))")
