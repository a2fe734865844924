"""Repository layer for data access."""

from codeshare.repositories.share_repository import ShareRepository
from codeshare.repositories.container_repository import ContainerRepository
from codeshare.repositories.record_store import RecordStore

__all__ = [
    "ShareRepository",
    "ContainerRepository",
    "RecordStore",
]
