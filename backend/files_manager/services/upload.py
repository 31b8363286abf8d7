"""Upload of files, images and folders.

All checks run before anything is written: a rejected upload leaves no
record and no bytes behind. Once validated, the byte write is best-effort
(the record is created even if the write failed), while a failed metadata
insert aborts the request.
"""
import base64
import binascii
import logging
from dataclasses import dataclass, field
from typing import Union

from sqlalchemy.exc import SQLAlchemyError

from files_manager.errors import (
    InvalidData,
    MissingData,
    MissingName,
    MissingType,
    ParentNotFolder,
    ParentNotFound,
    StorageError,
)
from files_manager.models.file_record import FILE_TYPES, FOLDER, IMAGE, ROOT_PARENT_ID, FileRecord
from files_manager.models.user import User
from files_manager.schemas.file import FileCreate
from files_manager.services.blob_writer import BlobWriter
from files_manager.services.file_store import FileStore, parse_record_id
from files_manager.services.job_queue import THUMBNAIL_JOB, JobQueue

logger = logging.getLogger(__name__)


@dataclass
class UploadOutcome:
    """Created record plus the best-effort failures that did not abort the upload."""
    record: FileRecord
    issues: list[str] = field(default_factory=list)


def decode_payload(data: str) -> bytes:
    """Strict base64: whitespace is ignored, any other non-alphabet character is an error."""
    try:
        return base64.b64decode("".join(data.split()), validate=True)
    except (binascii.Error, ValueError):
        raise InvalidData()


def _is_root(parent_id: Union[int, str, None]) -> bool:
    return parent_id is None or parent_id == "" or parse_record_id(parent_id) == ROOT_PARENT_ID


class UploadService:
    def __init__(self, store: FileStore, blobs: BlobWriter, jobs: JobQueue):
        self.store = store
        self.blobs = blobs
        self.jobs = jobs

    async def upload(self, owner: User, body: FileCreate) -> UploadOutcome:
        if not body.name:
            raise MissingName()
        if not body.type or body.type not in FILE_TYPES:
            raise MissingType()
        if body.type != FOLDER and not body.data:
            raise MissingData()
        parent_id = await self._check_parent(owner.id, body.parent_id)

        fields = {
            "user_id": owner.id,
            "name": body.name,
            "type": body.type,
            "parent_id": parent_id,
            "is_public": bool(body.is_public),
        }
        if body.type == FOLDER:
            return UploadOutcome(record=await self._insert(fields))

        payload = decode_payload(body.data)
        issues = []
        local_path = self.blobs.new_path()
        try:
            await self.blobs.write(local_path, payload)
        except OSError as e:
            logger.error(f"Failed to write upload bytes to {local_path}: {e}")
            issues.append(f"write failed: {e}")

        try:
            record = await self._insert({**fields, "local_path": local_path})
        except StorageError:
            await self.blobs.remove(local_path)
            raise
        if record.type == IMAGE:
            try:
                self.jobs.submit(THUMBNAIL_JOB, owner.id, {"userId": owner.id, "fileId": record.id})
            except Exception as e:
                logger.error(f"Failed to schedule thumbnail job for file {record.id}: {e}")
                issues.append(f"thumbnail job not scheduled: {e}")
        return UploadOutcome(record=record, issues=issues)

    async def _check_parent(self, user_id: int, parent_id: Union[int, str, None]) -> int:
        """Return the validated parent id (0 for root)."""
        if _is_root(parent_id):
            return ROOT_PARENT_ID
        record_id = parse_record_id(parent_id)
        if record_id is None:
            raise ParentNotFound()
        parent = await self.store.get(record_id, user_id=user_id)
        if parent is None:
            raise ParentNotFound()
        if not parent.is_folder:
            raise ParentNotFolder()
        return parent.id

    async def _insert(self, fields: dict) -> FileRecord:
        try:
            return await self.store.create(**fields)
        except SQLAlchemyError as e:
            logger.error(f"Failed to insert file record {fields.get('name')!r}: {e}")
            await self.store.db.rollback()
            raise StorageError()
