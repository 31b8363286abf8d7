"""Read side: paginated listing and single-record lookup, both owner-scoped."""
import logging
from typing import Optional, Union

from sqlalchemy.exc import SQLAlchemyError

from files_manager.errors import NotFound
from files_manager.models.file_record import FileRecord
from files_manager.models.user import User
from files_manager.services.file_store import FileStore, parse_record_id

logger = logging.getLogger(__name__)

PAGE_SIZE = 20


def parse_page(value: Union[int, str, None]) -> int:
    """Lenient page number: anything that is not a non-negative integer means page 0."""
    page = parse_record_id(value)
    return page if page is not None else 0


class ListingService:
    def __init__(self, store: FileStore):
        self.store = store

    async def list_files(
        self,
        owner: User,
        parent_id: Optional[str] = None,
        page: int = 0,
    ) -> list[FileRecord]:
        """One page of the owner's records, most recent first.

        A parent that cannot be an id, or that the owner has no records
        under, yields an empty page rather than an error.
        """
        parent_filter = None
        if parent_id is not None and parent_id != "":
            parent_filter = parse_record_id(parent_id)
            if parent_filter is None:
                return []
        try:
            return await self.store.page(
                owner.id,
                parent_id=parent_filter,
                skip=PAGE_SIZE * page,
                limit=PAGE_SIZE,
            )
        except SQLAlchemyError as e:
            logger.error(f"Listing query failed for user {owner.id}: {e}")
            raise NotFound()

    async def get_file(self, owner: User, file_id: Union[int, str]) -> FileRecord:
        record_id = parse_record_id(file_id)
        if record_id is None:
            raise NotFound()
        record = await self.store.get(record_id, user_id=owner.id)
        if record is None:
            raise NotFound()
        return record
