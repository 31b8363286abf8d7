"""Files API routes."""
from typing import Optional

from fastapi import APIRouter, Depends, Header, Query
from fastapi.responses import FileResponse

from files_manager.dependencies import (
    get_current_user,
    get_download_service,
    get_listing_service,
    get_session_resolver,
    get_upload_service,
    get_visibility_service,
)
from files_manager.models.user import User
from files_manager.schemas.file import FileCreate, FileResponse as FileResponseSchema
from files_manager.services.download import DownloadService
from files_manager.services.listing import ListingService, parse_page
from files_manager.services.session_resolver import SessionResolver
from files_manager.services.upload import UploadService
from files_manager.services.visibility import VisibilityService

router = APIRouter(prefix="/files", tags=["files"])


@router.post("", response_model=FileResponseSchema, status_code=201)
async def upload_file(
    body: FileCreate,
    user: User = Depends(get_current_user),
    uploads: UploadService = Depends(get_upload_service),
):
    """Create a folder, or store a base64 payload as a file or image."""
    outcome = await uploads.upload(user, body)
    return outcome.record


@router.get("", response_model=list[FileResponseSchema])
async def list_files(
    parent_id: Optional[str] = Query(None, alias="parentId"),
    page: Optional[str] = Query(None),
    user: User = Depends(get_current_user),
    listing: ListingService = Depends(get_listing_service),
):
    """List the caller's files, 20 per page, most recent first."""
    return await listing.list_files(user, parent_id=parent_id, page=parse_page(page))


@router.get("/{file_id}", response_model=FileResponseSchema)
async def get_file(
    file_id: str,
    user: User = Depends(get_current_user),
    listing: ListingService = Depends(get_listing_service),
):
    """Get one of the caller's file records."""
    return await listing.get_file(user, file_id)


@router.put("/{file_id}/publish", response_model=FileResponseSchema)
async def publish_file(
    file_id: str,
    user: User = Depends(get_current_user),
    visibility: VisibilityService = Depends(get_visibility_service),
):
    """Make a file downloadable by anyone."""
    return await visibility.publish(user, file_id)


@router.put("/{file_id}/unpublish", response_model=FileResponseSchema)
async def unpublish_file(
    file_id: str,
    user: User = Depends(get_current_user),
    visibility: VisibilityService = Depends(get_visibility_service),
):
    """Restrict a file to its owner."""
    return await visibility.unpublish(user, file_id)


@router.get("/{file_id}/data")
async def download_file(
    file_id: str,
    size: Optional[str] = Query(None),
    x_token: Optional[str] = Header(None),
    downloads: DownloadService = Depends(get_download_service),
    resolver: SessionResolver = Depends(get_session_resolver),
):
    """Download a file's bytes (or a thumbnail size). The session is only
    consulted when the file is private."""
    download = await downloads.resolve(
        file_id,
        lambda: resolver.resolve(x_token),
        size=size,
    )
    return FileResponse(
        path=download.path,
        filename=download.filename,
        media_type=download.media_type,
    )
