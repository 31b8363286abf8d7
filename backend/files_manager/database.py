"""Engine and session wiring for the metadata store.

The process owns one engine built from ``DATABASE_URL``. Request handlers
get a session per request via ``get_db``; work scheduled to run after the
response (job enqueue) opens its own session from ``get_session_factory``.
"""
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from files_manager.config import settings


def build_engine(url: str) -> AsyncEngine:
    """Pooled engine for a database server; a single shared connection for SQLite."""
    if make_url(url).get_backend_name() == "sqlite":
        return create_async_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_async_engine(
        url,
        echo=False,
        pool_size=10,
        max_overflow=20,
        pool_pre_ping=True,
    )


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


engine = build_engine(settings.DATABASE_URL)
async_session = build_session_factory(engine)


async def get_db():
    """FastAPI dependency that yields an async DB session."""
    async with async_session() as session:
        yield session


def get_session_factory() -> async_sessionmaker:
    return async_session
