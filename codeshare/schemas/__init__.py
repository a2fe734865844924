"""Pydantic schemas for API requests and responses."""

from codeshare.schemas.common import (
    ErrorResponse,
    FileEntryRequest,
    FileEntryResponse,
)
from codeshare.schemas.shares import (
    SubmitShareRequest,
    ShareRecordResponse,
    ListSharesResponse,
    DeleteShareResponse,
    ResolvedViewResponse,
)
from codeshare.schemas.containers import (
    CreateContainerRequest,
    SecretRequest,
    UploadToContainerRequest,
    ContainerResponse,
    ListContainersResponse,
    DeleteContainerResponse,
)

__all__ = [
    "ErrorResponse",
    "FileEntryRequest",
    "FileEntryResponse",
    "SubmitShareRequest",
    "ShareRecordResponse",
    "ListSharesResponse",
    "DeleteShareResponse",
    "ResolvedViewResponse",
    "CreateContainerRequest",
    "SecretRequest",
    "UploadToContainerRequest",
    "ContainerResponse",
    "ListContainersResponse",
    "DeleteContainerResponse",
]
