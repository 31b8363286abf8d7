"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

import redis.asyncio as redis
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from files_manager.config import settings
from files_manager.database import engine, get_db
from files_manager.dependencies import get_cache
from files_manager.errors import FilesManagerError
from files_manager.models import Base

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and open the session cache on startup."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    app.state.cache = redis.from_url(settings.REDIS_URL, decode_responses=True)

    yield

    # Cleanup
    await app.state.cache.aclose()
    await engine.dispose()


app = FastAPI(
    title="Files Manager API",
    version="1.0.0",
    description="Session-authenticated file storage API.",
    lifespan=lifespan,
)

# CORS
origins = [o.strip() for o in settings.CORS_ORIGINS.split(",")]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(FilesManagerError)
async def files_manager_error_handler(request: Request, exc: FilesManagerError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    field = ".".join(str(part) for part in errors[0]["loc"][1:]) if errors else ""
    message = f"Invalid {field}" if field else "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


@app.get("/health")
async def health_check(
    db: AsyncSession = Depends(get_db),
    cache=Depends(get_cache),
):
    """Verify database and session cache connectivity."""
    status = {"status": "ok", "database": "connected", "cache": "connected"}
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning(f"Health check: database unreachable: {e}")
        status.update(status="error", database=str(e))
    try:
        await cache.ping()
    except Exception as e:
        logger.warning(f"Health check: cache unreachable: {e}")
        status.update(status="error", cache=str(e))
    return status


# Register routers
from files_manager.routes.files import router as files_router
app.include_router(files_router)
