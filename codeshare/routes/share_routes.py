"""Share and code lookup API routes."""

from fastapi import APIRouter, Depends, status

from codeshare.dependencies import get_resolver, get_share_service
from codeshare.schemas.common import to_new_files
from codeshare.schemas.shares import (
    DeleteShareResponse,
    ListSharesResponse,
    ResolvedViewResponse,
    ShareRecordResponse,
    SubmitShareRequest,
)
from codeshare.services.resolver import Resolver
from codeshare.services.share_service import ShareService

router = APIRouter(tags=["Shares"])


@router.post("/shares", response_model=ShareRecordResponse, status_code=status.HTTP_201_CREATED)
def submit_share(
    request: SubmitShareRequest,
    share_service: ShareService = Depends(get_share_service),
):
    """
    Submit an ungrouped share.

    Parameters:
        - uploader_name: Display name of the uploader
        - files: Non-empty list of {name, url, size, media_type?}
        - code: Optional 6-digit code; generated when omitted
        - total_size: Optional byte total; defaults to the sum of file sizes

    Returns:
        - The stored share record, including its code

    Raises:
        - 400: Empty file list or malformed input
        - 409: Supplied code already in use
    """
    record = share_service.submit_share(
        uploader_name=request.uploader_name,
        files=to_new_files(request.files),
        code=request.code,
        total_size=request.total_size,
    )
    return ShareRecordResponse.from_record(record)


@router.get("/shares", response_model=ListSharesResponse)
def list_shares(share_service: ShareService = Depends(get_share_service)):
    """
    List every share record, newest first.
    """
    records = share_service.list_shares()
    return ListSharesResponse(shares=[ShareRecordResponse.from_record(r) for r in records])


@router.delete("/shares/{code}", response_model=DeleteShareResponse)
def delete_share(code: str, share_service: ShareService = Depends(get_share_service)):
    """
    Delete a share record and all of its file entries.

    Raises:
        - 404: No share record with this code
    """
    share_service.delete_share(code)
    return DeleteShareResponse(success=True, code=code)


@router.get("/codes/{code}", response_model=ResolvedViewResponse)
def resolve_code(code: str, resolver: Resolver = Depends(get_resolver)):
    """
    Resolve a code to its files.

    Share records are returned as stored. A per-file container code returns
    only that file, with the container name replaced by a generic label.

    Raises:
        - 404: Code unknown
    """
    view = resolver.resolve(code)
    return ResolvedViewResponse.from_view(view)
