"""Visibility-aware resolution of a file's bytes.

Public records are served to anyone without looking at the session.
Private records are served only to their owner; every other caller gets
the same NotFound a nonexistent id would produce.
"""
import logging
import mimetypes
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Union

from files_manager.errors import NoContentForFolder, NotFound
from files_manager.models.file_record import FileRecord
from files_manager.models.user import User
from files_manager.services.blob_writer import BlobWriter, variant_path
from files_manager.services.file_store import FileStore, parse_record_id

logger = logging.getLogger(__name__)

DEFAULT_MEDIA_TYPE = "application/octet-stream"

CallerResolver = Callable[[], Awaitable[Optional[User]]]


@dataclass
class Download:
    path: str
    media_type: str
    filename: str


def media_type_for(name: str) -> str:
    media_type, _ = mimetypes.guess_type(name)
    return media_type or DEFAULT_MEDIA_TYPE


class DownloadService:
    def __init__(self, store: FileStore):
        self.store = store

    async def resolve(
        self,
        file_id: Union[int, str],
        resolve_caller: CallerResolver,
        size: Optional[str] = None,
    ) -> Download:
        record_id = parse_record_id(file_id)
        if record_id is None:
            raise NotFound()
        record = await self.store.get(record_id)
        if record is None:
            raise NotFound()

        if not record.is_public:
            caller = await resolve_caller()
            if caller is None:
                raise NotFound()
            if caller.id != record.user_id:
                logger.warning(f"Denied download of private file {record.id} to user {caller.id}")
                raise NotFound()

        return await self._content(record, size)

    async def _content(self, record: FileRecord, size: Optional[str]) -> Download:
        if record.is_folder:
            raise NoContentForFolder()
        path = variant_path(record.local_path, size)
        if path is None or not await BlobWriter.is_readable(path):
            raise NotFound()
        return Download(path=path, media_type=media_type_for(record.name), filename=record.name)
