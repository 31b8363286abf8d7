"""Session token -> User resolution.

A login flow (outside this service) stores ``auth_<token> -> user id`` in
Redis. Resolution never raises: every failure means "no user", and callers
decide whether that is a 401 or a non-disclosing 404.
"""
import logging
from typing import Optional

from redis.exceptions import RedisError
from sqlalchemy.ext.asyncio import AsyncSession

from files_manager.models.user import User
from files_manager.services.file_store import parse_record_id

logger = logging.getLogger(__name__)

SESSION_KEY_PREFIX = "auth_"


def session_key(token: str) -> str:
    return f"{SESSION_KEY_PREFIX}{token}"


class SessionResolver:
    """Maps an opaque X-Token value to the User it was issued for."""

    def __init__(self, cache, db: AsyncSession):
        self.cache = cache
        self.db = db

    async def resolve(self, token: Optional[str]) -> Optional[User]:
        if not token:
            return None
        try:
            cached = await self.cache.get(session_key(token))
        except RedisError as e:
            logger.warning(f"Session cache lookup failed: {e}")
            return None
        if cached is None:
            return None
        if isinstance(cached, bytes):
            cached = cached.decode()
        user_id = parse_record_id(cached)
        if user_id is None:
            logger.warning("Session cache holds a malformed user id")
            return None
        return await self.db.get(User, user_id)
