"""Code lookups spanning both record collections."""

import sqlite3
from typing import Optional

from codeshare.types import SCOPE_CONTAINER, SCOPE_SHARE


def find_code_scope(conn: sqlite3.Connection, code: str) -> Optional[str]:
    """
    Report which collection currently holds a code.

    Args:
        conn: Open database connection
        code: Share record code or per-file container code

    Returns:
        SCOPE_SHARE, SCOPE_CONTAINER, or None if the code is free
    """
    cursor = conn.execute(
        """
        SELECT ? AS scope FROM share_records WHERE code = ?
        UNION ALL
        SELECT ? AS scope FROM container_files WHERE file_code = ?
        LIMIT 1
        """,
        (SCOPE_SHARE, code, SCOPE_CONTAINER, code)
    )
    row = cursor.fetchone()
    return row["scope"] if row else None
