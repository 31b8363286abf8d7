"""Local storage of uploaded bytes under FOLDER_PATH.

Every upload gets a fresh random file name, so stored paths are never
shared between records. Thumbnail variants produced by the worker sit next
to the original as ``<path>_<size>``.
"""
import logging
import os
import uuid
from pathlib import Path
from typing import Optional

import aiofiles
import aiofiles.os

logger = logging.getLogger(__name__)


def variant_path(local_path: str, size: Optional[str] = None) -> Optional[str]:
    """Path of the requested size variant, or None for a size that cannot exist."""
    if not size:
        return local_path
    if not (size.isascii() and size.isdigit()):
        return None
    return f"{local_path}_{size}"


class BlobWriter:
    """Writes upload payloads beneath a single storage root."""

    def __init__(self, root: str):
        self.root = Path(root)

    async def ensure_directory(self) -> None:
        """Create the storage root. Never fails: a later write reports the real problem."""
        try:
            await aiofiles.os.makedirs(self.root)
        except FileExistsError:
            pass
        except OSError as e:
            logger.error(f"Could not create storage directory {self.root}: {e}")

    def new_path(self) -> str:
        return os.path.join(str(self.root), str(uuid.uuid4()))

    async def write(self, path: str, data: bytes) -> None:
        """Write bytes to path. OSError propagates to the caller."""
        await self.ensure_directory()
        async with aiofiles.open(path, "wb") as f:
            await f.write(data)

    async def remove(self, path: str) -> None:
        """Delete stored bytes; a missing file is not an error."""
        try:
            await aiofiles.os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.error(f"Could not remove orphaned upload {path}: {e}")

    @staticmethod
    async def is_readable(path: str) -> bool:
        return await aiofiles.os.path.isfile(path)
