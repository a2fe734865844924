"""Utility helper functions for CodeShare."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Get the current time as an aware UTC datetime.

    Returns:
        Current UTC datetime
    """
    return datetime.now(timezone.utc)


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO timestamp stored in the database.

    Args:
        value: ISO format string

    Returns:
        Parsed datetime
    """
    return datetime.fromisoformat(value)
