"""In-memory registry of import jobs."""
from datetime import datetime
from threading import Lock
from typing import Callable

import structlog

from customer_import_core.jobs.models import ImportJob, ImportStatus
from customer_import_core.util import generate_import_id, utc_now

logger = structlog.get_logger()


class JobRegistry:
    """Maps job IDs to their live :class:`ImportJob` records.

    Jobs are never evicted automatically; callers remove them with
    :meth:`remove` once they no longer need the result.
    """

    def __init__(
        self,
        id_factory: Callable[[], str] = generate_import_id,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._id_factory = id_factory
        self._clock = clock
        self._jobs: dict[str, ImportJob] = {}
        self._lock = Lock()

    def create(self) -> str:
        """Register a new processing job and return its ID."""
        with self._lock:
            job_id = self._id_factory()
            while job_id in self._jobs:
                job_id = self._id_factory()
            self._jobs[job_id] = ImportJob(id=job_id, start_time=self._clock())
        return job_id

    def get(self, job_id: str) -> ImportJob | None:
        with self._lock:
            return self._jobs.get(job_id)

    def request_cancel(self, job_id: str) -> bool:
        """Flag a processing job as cancelled. False if unknown or already terminal."""
        with self._lock:
            job = self._jobs.get(job_id)
            if not job or job.status is not ImportStatus.PROCESSING:
                return False
            job.status = ImportStatus.CANCELLED
        logger.info("import_cancel_requested", import_id=job_id)
        return True

    def mark_terminal(self, job: ImportJob, status: ImportStatus) -> bool:
        """Move a processing job to a terminal status. No-op if already terminal."""
        if not status.is_terminal:
            raise ValueError(f"{status.value} is not a terminal status")
        with self._lock:
            if job.status is not ImportStatus.PROCESSING:
                return False
            job.status = status
            return True

    def remove(self, job_id: str) -> None:
        with self._lock:
            self._jobs.pop(job_id, None)

    def list_active(self) -> dict[str, ImportJob]:
        """All registered jobs, keyed by ID."""
        with self._lock:
            return dict(self._jobs)
