"""Domain data type definitions."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


SCOPE_SHARE = "share"
SCOPE_CONTAINER = "container"


@dataclass(frozen=True)
class FileEntry:
    """
    Metadata and retrieval locator for one uploaded file.

    `code` is the owning share record's code, or the per-file code when the
    entry lives inside a container.
    """
    code: str
    name: str
    url: str
    size: int
    uploaded_at: datetime
    media_type: Optional[str] = None


@dataclass(frozen=True)
class NewFile:
    """
    A file submitted by a client, before it is assigned a code.
    """
    name: str
    url: str
    size: int
    media_type: Optional[str] = None


@dataclass(frozen=True)
class ShareRecord:
    code: str
    uploader_name: str
    files: List[FileEntry]
    total_size: int
    created_at: datetime


@dataclass(frozen=True)
class Container:
    name: str
    secret_hash: str = field(repr=False)
    files: List[FileEntry]
    created_at: datetime


@dataclass(frozen=True)
class ResolvedView:
    """
    Uniform result of resolving a code, whatever scope it was found in.
    """
    code: str
    scope: str
    uploader_name: str
    files: List[FileEntry]
    total_size: int
    created_at: datetime
