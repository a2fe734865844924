"""Common schemas used across multiple endpoints."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from codeshare.types import FileEntry, NewFile


class ErrorResponse(BaseModel):
    """Response model for errors."""
    detail: str
    code: str


class FileEntryRequest(BaseModel):
    """One file as submitted by a client, already stored at `url`."""
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    url: str = Field(min_length=1)
    size: int = Field(ge=0)
    media_type: Optional[str] = None

    def to_new_file(self) -> NewFile:
        return NewFile(name=self.name, url=self.url, size=self.size, media_type=self.media_type)


class FileEntryResponse(BaseModel):
    """Response model for a stored file entry."""
    code: str
    name: str
    url: str
    size: int
    media_type: Optional[str] = None
    uploaded_at: datetime

    @classmethod
    def from_entry(cls, entry: FileEntry) -> "FileEntryResponse":
        return cls(
            code=entry.code,
            name=entry.name,
            url=entry.url,
            size=entry.size,
            media_type=entry.media_type,
            uploaded_at=entry.uploaded_at,
        )


def to_new_files(files: List[FileEntryRequest]) -> List[NewFile]:
    return [f.to_new_file() for f in files]
