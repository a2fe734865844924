"""Container API routes."""

from fastapi import APIRouter, Depends, status

from codeshare.dependencies import get_container_service
from codeshare.schemas.common import to_new_files
from codeshare.schemas.containers import (
    ContainerResponse,
    CreateContainerRequest,
    DeleteContainerResponse,
    ListContainersResponse,
    SecretRequest,
    UploadToContainerRequest,
)
from codeshare.services.container_service import ContainerService

router = APIRouter(prefix="/containers", tags=["Containers"])


@router.post("", response_model=ContainerResponse, status_code=status.HTTP_201_CREATED)
def create_container(
    request: CreateContainerRequest,
    container_service: ContainerService = Depends(get_container_service),
):
    """
    Create an empty, secret-protected container.

    Raises:
        - 409: Name already taken
    """
    container = container_service.create_container(request.name, request.secret)
    return ContainerResponse.from_container(container)


@router.get("", response_model=ListContainersResponse)
def list_containers(container_service: ContainerService = Depends(get_container_service)):
    """
    Admin listing of every container, newest first. Secrets are not included.
    """
    containers = container_service.list_containers()
    return ListContainersResponse(
        containers=[ContainerResponse.from_container(c) for c in containers]
    )


@router.post("/{name}/open", response_model=ContainerResponse)
def open_container(
    name: str,
    request: SecretRequest,
    container_service: ContainerService = Depends(get_container_service),
):
    """
    Open a container and return its file list.

    Raises:
        - 401: Wrong secret
        - 404: Container not found
    """
    container = container_service.open_container(name, request.secret)
    return ContainerResponse.from_container(container)


@router.post("/{name}/files", response_model=ContainerResponse)
def upload_to_container(
    name: str,
    request: UploadToContainerRequest,
    container_service: ContainerService = Depends(get_container_service),
):
    """
    Add files to a container. Each file gets its own shareable code.

    Raises:
        - 400: Empty file list
        - 401: Wrong secret
        - 404: Container not found
    """
    container = container_service.upload_to_container(
        name, request.secret, to_new_files(request.files)
    )
    return ContainerResponse.from_container(container)


@router.delete("/{name}/files/{file_code}", response_model=ContainerResponse)
def remove_file(
    name: str,
    file_code: str,
    request: SecretRequest,
    container_service: ContainerService = Depends(get_container_service),
):
    """
    Remove one file from a container. The secret travels in the JSON body.

    Raises:
        - 401: Wrong secret
        - 404: Container or file not found
    """
    container = container_service.remove_file(name, file_code, request.secret)
    return ContainerResponse.from_container(container)


@router.delete("/{name}", response_model=DeleteContainerResponse)
def delete_container(
    name: str,
    container_service: ContainerService = Depends(get_container_service),
):
    """
    Delete a container together with all of its files.

    Raises:
        - 404: Container not found
    """
    container_service.delete_container(name)
    return DeleteContainerResponse(success=True, name=name)
