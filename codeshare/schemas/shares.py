"""Pydantic schemas for share and code lookup endpoints."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from common.constants import MAX_FILES_PER_UPLOAD
from codeshare.schemas.common import FileEntryRequest, FileEntryResponse
from codeshare.types import ResolvedView, ShareRecord


class SubmitShareRequest(BaseModel):
    """Request model for submitting an ungrouped share."""
    model_config = ConfigDict(extra="forbid")

    uploader_name: str = Field(min_length=1)
    files: List[FileEntryRequest] = Field(max_length=MAX_FILES_PER_UPLOAD)
    code: Optional[str] = None
    total_size: Optional[int] = Field(default=None, ge=0)


class ShareRecordResponse(BaseModel):
    """Response model for a share record."""
    code: str
    uploader_name: str
    files: List[FileEntryResponse]
    total_size: int
    created_at: datetime

    @classmethod
    def from_record(cls, record: ShareRecord) -> "ShareRecordResponse":
        return cls(
            code=record.code,
            uploader_name=record.uploader_name,
            files=[FileEntryResponse.from_entry(f) for f in record.files],
            total_size=record.total_size,
            created_at=record.created_at,
        )


class ListSharesResponse(BaseModel):
    """Response model for share listing, newest first."""
    shares: List[ShareRecordResponse]


class DeleteShareResponse(BaseModel):
    """Response model for share deletion."""
    success: bool
    code: str


class ResolvedViewResponse(BaseModel):
    """Response model for a code lookup, identical for both scopes."""
    code: str
    scope: str
    uploader_name: str
    files: List[FileEntryResponse]
    total_size: int
    created_at: datetime

    @classmethod
    def from_view(cls, view: ResolvedView) -> "ResolvedViewResponse":
        return cls(
            code=view.code,
            scope=view.scope,
            uploader_name=view.uploader_name,
            files=[FileEntryResponse.from_entry(f) for f in view.files],
            total_size=view.total_size,
            created_at=view.created_at,
        )
