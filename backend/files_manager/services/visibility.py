"""Publish / unpublish: the only mutation a FileRecord ever sees."""
from typing import Union

from files_manager.errors import NotFound
from files_manager.models.file_record import FileRecord
from files_manager.models.user import User
from files_manager.services.file_store import FileStore, parse_record_id


class VisibilityService:
    def __init__(self, store: FileStore):
        self.store = store

    async def set_public(self, owner: User, file_id: Union[int, str], is_public: bool) -> FileRecord:
        record_id = parse_record_id(file_id)
        if record_id is None:
            raise NotFound()
        record = await self.store.set_public(record_id, owner.id, is_public)
        if record is None:
            raise NotFound()
        return record

    async def publish(self, owner: User, file_id: Union[int, str]) -> FileRecord:
        return await self.set_public(owner, file_id, True)

    async def unpublish(self, owner: User, file_id: Union[int, str]) -> FileRecord:
        return await self.set_public(owner, file_id, False)
