"""FastAPI dependencies wiring collaborators into the services.

The process entry point owns the engine and the Redis client; handlers
only ever see them through these functions, which tests replace via
``app.dependency_overrides``.
"""
from typing import Optional

from fastapi import BackgroundTasks, Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from files_manager.config import Settings, settings
from files_manager.database import get_db, get_session_factory
from files_manager.errors import Unauthorized
from files_manager.models.user import User
from files_manager.services.blob_writer import BlobWriter
from files_manager.services.download import DownloadService
from files_manager.services.file_store import FileStore
from files_manager.services.job_queue import JobQueue
from files_manager.services.listing import ListingService
from files_manager.services.session_resolver import SessionResolver
from files_manager.services.upload import UploadService
from files_manager.services.visibility import VisibilityService


def get_settings() -> Settings:
    return settings


def get_cache(request: Request):
    """Redis client created in the app lifespan."""
    return request.app.state.cache


def get_blob_writer(config: Settings = Depends(get_settings)) -> BlobWriter:
    return BlobWriter(config.FOLDER_PATH)


def get_file_store(db: AsyncSession = Depends(get_db)) -> FileStore:
    return FileStore(db)


def get_session_resolver(
    db: AsyncSession = Depends(get_db),
    cache=Depends(get_cache),
) -> SessionResolver:
    return SessionResolver(cache, db)


async def get_current_user(
    x_token: Optional[str] = Header(None),
    resolver: SessionResolver = Depends(get_session_resolver),
) -> User:
    """Authenticated caller, or 401."""
    user = await resolver.resolve(x_token)
    if user is None:
        raise Unauthorized()
    return user


def get_upload_service(
    background: BackgroundTasks,
    store: FileStore = Depends(get_file_store),
    blobs: BlobWriter = Depends(get_blob_writer),
    session_factory: async_sessionmaker = Depends(get_session_factory),
) -> UploadService:
    return UploadService(store, blobs, JobQueue(session_factory, background))


def get_listing_service(store: FileStore = Depends(get_file_store)) -> ListingService:
    return ListingService(store)


def get_visibility_service(store: FileStore = Depends(get_file_store)) -> VisibilityService:
    return VisibilityService(store)


def get_download_service(store: FileStore = Depends(get_file_store)) -> DownloadService:
    return DownloadService(store)
