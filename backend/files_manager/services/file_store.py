"""Persistence of FileRecord metadata.

A thin async repository over one AsyncSession. Services never build
queries themselves; they go through FileStore so the owner filter is
applied in exactly one place.
"""
from typing import Optional, Union

from sqlalchemy import desc, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from files_manager.models.file_record import FileRecord

# Upper bound of the INTEGER id columns
MAX_RECORD_ID = 2**31 - 1


def parse_record_id(value: Union[int, str, None]) -> Optional[int]:
    """Return a record id from a path/query/body value, or None if it cannot be one."""
    if isinstance(value, bool) or value is None:
        return None
    if not isinstance(value, int):
        value = value.strip()
        if not (value.isascii() and value.isdigit()):
            return None
        value = int(value)
    if value < 0 or value > MAX_RECORD_ID:
        return None
    return value


class FileStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, **fields) -> FileRecord:
        """Insert a record and return it with its assigned id."""
        record = FileRecord(**fields)
        self.db.add(record)
        await self.db.commit()
        await self.db.refresh(record)
        return record

    async def get(self, file_id: int, user_id: Optional[int] = None) -> Optional[FileRecord]:
        query = select(FileRecord).where(FileRecord.id == file_id)
        if user_id is not None:
            query = query.where(FileRecord.user_id == user_id)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def set_public(self, file_id: int, user_id: int, is_public: bool) -> Optional[FileRecord]:
        """Find-one-and-update on (id, owner). Returns the updated record or None."""
        result = await self.db.execute(
            update(FileRecord)
            .where(FileRecord.id == file_id, FileRecord.user_id == user_id)
            .values(is_public=is_public)
            .returning(FileRecord)
        )
        record = result.scalar_one_or_none()
        await self.db.commit()
        return record

    async def page(
        self,
        user_id: int,
        parent_id: Optional[int] = None,
        skip: int = 0,
        limit: int = 20,
    ) -> list[FileRecord]:
        """Owner's records, most recent first."""
        query = select(FileRecord).where(FileRecord.user_id == user_id)
        if parent_id is not None:
            query = query.where(FileRecord.parent_id == parent_id)
        query = query.order_by(desc(FileRecord.id)).offset(skip).limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())
