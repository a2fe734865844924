"""Database schema and connection management for SQLite."""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from common.logging_config import get_logger
from codeshare import config
from codeshare.exceptions import StoreError

logger = get_logger(__name__)


SCHEMA = [
    """
    CREATE TABLE IF NOT EXISTS share_records (
        code TEXT PRIMARY KEY,
        uploader_name TEXT NOT NULL,
        total_size INTEGER NOT NULL,
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS share_files (
        code TEXT NOT NULL,
        position INTEGER NOT NULL,
        name TEXT NOT NULL,
        url TEXT NOT NULL,
        size INTEGER NOT NULL,
        media_type TEXT,
        uploaded_at TEXT NOT NULL,
        PRIMARY KEY(code, position),
        FOREIGN KEY(code) REFERENCES share_records(code) ON DELETE CASCADE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS containers (
        name TEXT PRIMARY KEY,
        secret_hash TEXT NOT NULL,
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS container_files (
        file_code TEXT PRIMARY KEY,
        container_name TEXT NOT NULL,
        position INTEGER NOT NULL,
        name TEXT NOT NULL,
        url TEXT NOT NULL,
        size INTEGER NOT NULL,
        media_type TEXT,
        uploaded_at TEXT NOT NULL,
        UNIQUE(container_name, position),
        FOREIGN KEY(container_name) REFERENCES containers(name) ON DELETE CASCADE
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_share_records_created_at ON share_records(created_at)",
    "CREATE INDEX IF NOT EXISTS idx_containers_created_at ON containers(created_at)",
    "CREATE INDEX IF NOT EXISTS idx_container_files_container ON container_files(container_name, position)",
]


class Database:
    """
    Handle to the SQLite file holding share records and containers.

    Owned by the process entry point and passed to every repository. Each
    call to `connect()` or `transaction()` opens a short-lived connection.
    """

    def __init__(self, path: Optional[str] = None, timeout: Optional[float] = None):
        self.path = str(path if path is not None else config.DATABASE_PATH)
        self.timeout = timeout if timeout is not None else config.DATABASE_TIMEOUT_SECONDS

    def init_schema(self) -> None:
        """
        Create the database file and tables if they don't exist.
        """
        Path(self.path).parent.mkdir(parents=True, exist_ok=True)

        with self.transaction() as conn:
            for statement in SCHEMA:
                conn.execute(statement)

        logger.info(f"Database schema ready [path={self.path}]")

    def _open(self) -> sqlite3.Connection:
        try:
            conn = sqlite3.connect(self.path, timeout=self.timeout, isolation_level=None)
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA foreign_keys = ON")
        except sqlite3.Error as e:
            logger.error(f"Failed to open database [path={self.path}]: {e}", exc_info=True)
            raise StoreError(f"Database unavailable: {e}") from e
        return conn

    @contextmanager
    def connect(self) -> Generator[sqlite3.Connection, None, None]:
        """
        Context manager for a read connection.

        Integrity errors propagate unchanged so repositories can map them to
        conflicts; any other sqlite3 error becomes a StoreError.
        """
        conn = self._open()
        try:
            yield conn
        except sqlite3.IntegrityError:
            raise
        except sqlite3.Error as e:
            logger.error(f"Database operation failed: {e}", exc_info=True)
            raise StoreError(f"Database operation failed: {e}") from e
        finally:
            conn.close()

    @contextmanager
    def transaction(self) -> Generator[sqlite3.Connection, None, None]:
        """
        Context manager for a write transaction.

        BEGIN IMMEDIATE takes the database write lock up front, so concurrent
        writers serialise instead of interleaving their read-modify-write.
        """
        with self.connect() as conn:
            conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except BaseException:
                conn.execute("ROLLBACK")
                raise
            else:
                conn.execute("COMMIT")

    def ping(self) -> bool:
        with self.connect() as conn:
            conn.execute("SELECT COUNT(*) FROM sqlite_master").fetchone()
        return True
