"""Pydantic schemas for container endpoints."""

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from common.constants import CONTAINER_NAME_MAX_LENGTH, MAX_FILES_PER_UPLOAD
from codeshare.schemas.common import FileEntryRequest, FileEntryResponse
from codeshare.types import Container


class CreateContainerRequest(BaseModel):
    """Request model for container creation."""
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=CONTAINER_NAME_MAX_LENGTH, pattern=r"^[^/]+$")
    secret: str = Field(min_length=1)


class SecretRequest(BaseModel):
    """Request model carrying only the container secret."""
    model_config = ConfigDict(extra="forbid")

    secret: str = Field(min_length=1)


class UploadToContainerRequest(BaseModel):
    """Request model for adding files to a container."""
    model_config = ConfigDict(extra="forbid")

    secret: str = Field(min_length=1)
    files: List[FileEntryRequest] = Field(max_length=MAX_FILES_PER_UPLOAD)


class ContainerResponse(BaseModel):
    """Response model for a container. The secret is never echoed."""
    name: str
    created_at: datetime
    file_count: int
    files: List[FileEntryResponse]

    @classmethod
    def from_container(cls, container: Container) -> "ContainerResponse":
        return cls(
            name=container.name,
            created_at=container.created_at,
            file_count=len(container.files),
            files=[FileEntryResponse.from_entry(f) for f in container.files],
        )


class ListContainersResponse(BaseModel):
    """Response model for the admin container listing, newest first."""
    containers: List[ContainerResponse]


class DeleteContainerResponse(BaseModel):
    """Response model for container deletion."""
    success: bool
    name: str
