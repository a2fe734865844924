"""Share record repository for database operations."""

import sqlite3
from typing import Dict, List, Optional

from common.logging_config import get_logger
from codeshare.database import Database
from codeshare.exceptions import DuplicateCodeError, ValidationError
from codeshare.repositories.code_lookup import find_code_scope
from codeshare.types import FileEntry, ShareRecord
from codeshare.utils import parse_timestamp

logger = get_logger(__name__)


def _row_to_entry(row: sqlite3.Row) -> FileEntry:
    return FileEntry(
        code=row["code"],
        name=row["name"],
        url=row["url"],
        size=row["size"],
        uploaded_at=parse_timestamp(row["uploaded_at"]),
        media_type=row["media_type"],
    )


class ShareRepository:
    def __init__(self, db: Database):
        self.db = db

    def create_share_record(self, record: ShareRecord) -> ShareRecord:
        if not record.files:
            raise ValidationError("A share must contain at least one file")

        logger.debug(f"Creating share record [code={record.code}] [files={len(record.files)}]")
        try:
            with self.db.transaction() as conn:
                if find_code_scope(conn, record.code) is not None:
                    raise DuplicateCodeError(f"Code '{record.code}' is already in use")

                conn.execute(
                    """
                    INSERT INTO share_records (code, uploader_name, total_size, created_at)
                    VALUES (?, ?, ?, ?)
                    """,
                    (record.code, record.uploader_name, record.total_size, record.created_at.isoformat())
                )
                conn.executemany(
                    """
                    INSERT INTO share_files (code, position, name, url, size, media_type, uploaded_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    [
                        (record.code, position, entry.name, entry.url, entry.size,
                         entry.media_type, entry.uploaded_at.isoformat())
                        for position, entry in enumerate(record.files)
                    ]
                )
        except sqlite3.IntegrityError as e:
            logger.warning(f"Share record insert rejected [code={record.code}]: {e}")
            raise DuplicateCodeError(f"Code '{record.code}' is already in use") from e

        logger.info(f"Share record created [code={record.code}]")
        return record

    def get_by_code(self, code: str) -> Optional[ShareRecord]:
        with self.db.connect() as conn:
            row = conn.execute(
                "SELECT code, uploader_name, total_size, created_at FROM share_records WHERE code = ?",
                (code,)
            ).fetchone()

            if row is None:
                return None

            file_rows = conn.execute(
                """
                SELECT code, name, url, size, media_type, uploaded_at
                FROM share_files WHERE code = ? ORDER BY position
                """,
                (code,)
            ).fetchall()

        return ShareRecord(
            code=row["code"],
            uploader_name=row["uploader_name"],
            files=[_row_to_entry(file_row) for file_row in file_rows],
            total_size=row["total_size"],
            created_at=parse_timestamp(row["created_at"]),
        )

    def list_all(self) -> List[ShareRecord]:
        """
        List every share record, newest first.
        """
        with self.db.connect() as conn:
            rows = conn.execute(
                """
                SELECT code, uploader_name, total_size, created_at
                FROM share_records ORDER BY created_at DESC, rowid DESC
                """
            ).fetchall()
            file_rows = conn.execute(
                """
                SELECT code, name, url, size, media_type, uploaded_at
                FROM share_files ORDER BY code, position
                """
            ).fetchall()

        files_by_code: Dict[str, List[FileEntry]] = {}
        for file_row in file_rows:
            files_by_code.setdefault(file_row["code"], []).append(_row_to_entry(file_row))

        return [
            ShareRecord(
                code=row["code"],
                uploader_name=row["uploader_name"],
                files=files_by_code.get(row["code"], []),
                total_size=row["total_size"],
                created_at=parse_timestamp(row["created_at"]),
            )
            for row in rows
        ]

    def delete_by_code(self, code: str) -> bool:
        with self.db.transaction() as conn:
            cursor = conn.execute("DELETE FROM share_records WHERE code = ?", (code,))
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info(f"Share record deleted [code={code}]")
        else:
            logger.debug(f"No share record to delete [code={code}]")
        return deleted
