"""Background job queue backed by the jobs table.

Jobs are inserted as 'queued' rows and consumed by a separate worker
process. Submission is fire-and-forget: the insert runs as a FastAPI
background task after the response has been sent, in its own session, and
any failure is logged only.
"""
import logging
from typing import Optional

from fastapi import BackgroundTasks
from sqlalchemy.ext.asyncio import async_sessionmaker

from files_manager.models.job import Job

logger = logging.getLogger(__name__)

THUMBNAIL_JOB = "thumbnail"


class JobQueue:
    def __init__(self, session_factory: async_sessionmaker, background: BackgroundTasks):
        self.session_factory = session_factory
        self.background = background

    def submit(self, job_type: str, user_id: int, params: dict) -> None:
        """Schedule the enqueue to run once the response is on its way."""
        self.background.add_task(self.enqueue, job_type, user_id, params)

    async def enqueue(self, job_type: str, user_id: int, params: dict) -> Optional[Job]:
        try:
            async with self.session_factory() as db:
                job = Job(job_type=job_type, user_id=user_id, params=params, status="queued")
                db.add(job)
                await db.commit()
                await db.refresh(job)
        except Exception as e:
            logger.error(f"Failed to enqueue {job_type} job for user {user_id}: {e}")
            return None
        logger.info(f"Enqueued {job_type} job {job.id}")
        return job
