"""
Storage connection manager for the flashcard deck store
"""

import json
import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any

from .results import StorageResult

logger = logging.getLogger(__name__)


class StorageConnection:
    """Key/value blob persistence on top of SQLite"""

    def __init__(self, db_path: str):
        self.db_path = db_path
        self._ensure_database_directory()
        self._init_connection_settings()

    def _ensure_database_directory(self) -> None:
        """Ensure the database directory exists"""
        db_dir = Path(self.db_path).parent
        try:
            db_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Cannot create storage directory {db_dir}: {e}")

    def _init_connection_settings(self) -> None:
        """Initialize database connection settings"""
        try:
            with self.get_connection() as conn:
                conn.execute("PRAGMA journal_mode=WAL")
                conn.execute("PRAGMA busy_timeout=30000")
        except sqlite3.Error as e:
            logger.warning(f"Storage at {self.db_path} is unavailable: {e}")

    @contextmanager
    def get_connection(self):
        """Get database connection with proper cleanup"""
        conn = None
        try:
            conn = sqlite3.connect(self.db_path)
            conn.row_factory = sqlite3.Row
            yield conn
        except Exception as e:
            if conn:
                conn.rollback()
            logger.debug(f"Database error: {e}")
            raise
        finally:
            if conn:
                conn.close()

    def init_storage(self) -> bool:
        """Create the key/value table"""
        try:
            with self.get_connection() as conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS kv_store (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL,
                        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                    )
                    """
                )
                conn.commit()
            return True
        except sqlite3.Error as e:
            logger.error(f"Error initializing storage: {e}")
            return False

    def read_blob(self, key: str) -> StorageResult[str]:
        """Read the raw text stored under key; value is None if the key is unset"""
        try:
            with self.get_connection() as conn:
                cursor = conn.execute(
                    "SELECT value FROM kv_store WHERE key = ?", (key,)
                )
                row = cursor.fetchone()
                return StorageResult.success(row["value"] if row else None)
        except sqlite3.Error as e:
            return StorageResult.failure(e)

    def write_blob(self, key: str, value: str) -> StorageResult[None]:
        """Replace the text stored under key"""
        try:
            with self.get_connection() as conn:
                conn.execute(
                    """
                    INSERT INTO kv_store (key, value, updated_at)
                    VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = excluded.updated_at
                    """,
                    (key, value, datetime.now().isoformat()),
                )
                conn.commit()
                return StorageResult.success()
        except sqlite3.Error as e:
            return StorageResult.failure(e)

    def read_json(self, key: str) -> StorageResult[Any]:
        """Read and decode the JSON document stored under key"""
        result = self.read_blob(key)
        if not result.ok or result.value is None:
            return result

        try:
            return StorageResult.success(json.loads(result.value))
        except json.JSONDecodeError as e:
            return StorageResult.failure(e)

    def write_json(self, key: str, data: Any) -> StorageResult[None]:
        """Encode data as JSON and store it under key"""
        try:
            payload = json.dumps(data, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            return StorageResult.failure(e)

        return self.write_blob(key, payload)
