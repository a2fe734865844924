"""Container repository for database operations."""

import sqlite3
from datetime import datetime
from typing import Dict, List, Optional

from common.logging_config import get_logger
from codeshare.database import Database
from codeshare.exceptions import (
    ContainerAlreadyExistsError,
    ContainerNotFoundError,
    DuplicateCodeError,
    InvalidSecretError,
    ValidationError,
)
from codeshare.repositories.code_lookup import find_code_scope
from codeshare.types import Container, FileEntry
from codeshare.utils import parse_timestamp

logger = get_logger(__name__)


def _row_to_entry(row: sqlite3.Row) -> FileEntry:
    return FileEntry(
        code=row["file_code"],
        name=row["name"],
        url=row["url"],
        size=row["size"],
        uploaded_at=parse_timestamp(row["uploaded_at"]),
        media_type=row["media_type"],
    )


def _load_container(conn: sqlite3.Connection, name: str) -> Optional[Container]:
    row = conn.execute(
        "SELECT name, secret_hash, created_at FROM containers WHERE name = ?",
        (name,)
    ).fetchone()

    if row is None:
        return None

    file_rows = conn.execute(
        """
        SELECT file_code, name, url, size, media_type, uploaded_at
        FROM container_files WHERE container_name = ? ORDER BY position
        """,
        (name,)
    ).fetchall()

    return Container(
        name=row["name"],
        secret_hash=row["secret_hash"],
        files=[_row_to_entry(file_row) for file_row in file_rows],
        created_at=parse_timestamp(row["created_at"]),
    )


def _require_container(conn: sqlite3.Connection, name: str, expected_secret_hash: Optional[str]) -> None:
    row = conn.execute(
        "SELECT secret_hash FROM containers WHERE name = ?", (name,)
    ).fetchone()
    if row is None:
        raise ContainerNotFoundError(f"Container '{name}' not found")
    if expected_secret_hash is not None and row["secret_hash"] != expected_secret_hash:
        logger.warning(f"Container {name} was replaced after its secret was checked")
        raise InvalidSecretError("Invalid container secret")


class ContainerRepository:
    def __init__(self, db: Database):
        self.db = db

    def create_container(self, name: str, secret_hash: str, created_at: datetime) -> Container:
        logger.debug(f"Creating container: {name}")
        try:
            with self.db.transaction() as conn:
                conn.execute(
                    "INSERT INTO containers (name, secret_hash, created_at) VALUES (?, ?, ?)",
                    (name, secret_hash, created_at.isoformat())
                )
        except sqlite3.IntegrityError as e:
            logger.warning(f"Container creation rejected, name taken: {name}")
            raise ContainerAlreadyExistsError(f"Container '{name}' already exists") from e

        logger.info(f"Container created: {name}")
        return Container(name=name, secret_hash=secret_hash, files=[], created_at=created_at)

    def get_by_name(self, name: str) -> Optional[Container]:
        with self.db.connect() as conn:
            return _load_container(conn, name)

    def get_by_file_code(self, code: str) -> Optional[Container]:
        """
        Find the container holding a file entry with the given per-file code.
        """
        with self.db.connect() as conn:
            row = conn.execute(
                "SELECT container_name FROM container_files WHERE file_code = ?",
                (code,)
            ).fetchone()

            if row is None:
                return None

            return _load_container(conn, row["container_name"])

    def append_files(
        self,
        name: str,
        entries: List[FileEntry],
        expected_secret_hash: Optional[str] = None,
    ) -> Container:
        """
        Append file entries to a container as one all-or-nothing write.

        Args:
            name: Container name
            entries: Entries carrying freshly minted per-file codes
            expected_secret_hash: Hash the caller authorized against; the write
                is refused if the stored container no longer carries it

        Returns:
            The container with its updated file list

        Raises:
            ValidationError: If entries is empty or repeats a code
            ContainerNotFoundError: If the container does not exist
            InvalidSecretError: If the container was replaced since authorization
            DuplicateCodeError: If any per-file code is already in use
        """
        if not entries:
            raise ValidationError("At least one file is required")

        codes = [entry.code for entry in entries]
        if len(set(codes)) != len(codes):
            raise ValidationError("File codes within one upload must be distinct")

        try:
            with self.db.transaction() as conn:
                _require_container(conn, name, expected_secret_hash)

                for code in codes:
                    if find_code_scope(conn, code) is not None:
                        raise DuplicateCodeError(f"Code '{code}' is already in use")

                next_position = conn.execute(
                    "SELECT COALESCE(MAX(position), -1) + 1 AS next FROM container_files WHERE container_name = ?",
                    (name,)
                ).fetchone()["next"]

                conn.executemany(
                    """
                    INSERT INTO container_files
                        (file_code, container_name, position, name, url, size, media_type, uploaded_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    [
                        (entry.code, name, next_position + offset, entry.name, entry.url,
                         entry.size, entry.media_type, entry.uploaded_at.isoformat())
                        for offset, entry in enumerate(entries)
                    ]
                )

                container = _load_container(conn, name)
        except sqlite3.IntegrityError as e:
            logger.warning(f"File append rejected [container={name}]: {e}")
            raise DuplicateCodeError("A file code is already in use") from e

        logger.info(f"Appended {len(entries)} file(s) to container {name}")
        return container

    def remove_file(self, name: str, file_code: str, expected_secret_hash: Optional[str] = None) -> bool:
        with self.db.transaction() as conn:
            if expected_secret_hash is not None:
                _require_container(conn, name, expected_secret_hash)
            cursor = conn.execute(
                "DELETE FROM container_files WHERE container_name = ? AND file_code = ?",
                (name, file_code)
            )
            removed = cursor.rowcount > 0

        if removed:
            logger.info(f"Removed file {file_code} from container {name}")
        return removed

    def delete_container(self, name: str) -> bool:
        """
        Delete a container; its file entries go with it (ON DELETE CASCADE).
        """
        with self.db.transaction() as conn:
            cursor = conn.execute("DELETE FROM containers WHERE name = ?", (name,))
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info(f"Container deleted: {name}")
        return deleted

    def list_all(self) -> List[Container]:
        with self.db.connect() as conn:
            rows = conn.execute(
                """
                SELECT name, secret_hash, created_at
                FROM containers ORDER BY created_at DESC, rowid DESC
                """
            ).fetchall()
            file_rows = conn.execute(
                """
                SELECT container_name, file_code, name, url, size, media_type, uploaded_at
                FROM container_files ORDER BY container_name, position
                """
            ).fetchall()

        files_by_container: Dict[str, List[FileEntry]] = {}
        for file_row in file_rows:
            files_by_container.setdefault(file_row["container_name"], []).append(_row_to_entry(file_row))

        return [
            Container(
                name=row["name"],
                secret_hash=row["secret_hash"],
                files=files_by_container.get(row["name"], []),
                created_at=parse_timestamp(row["created_at"]),
            )
            for row in rows
        ]
