"""Stream coordinator: drives one import job from source to sink."""
import asyncio
from contextlib import aclosing
from datetime import datetime
from typing import Any, Callable

import structlog

from customer_import_core.ingest import aiter_records, open_source, transform_row
from customer_import_core.ingest.source import BaseSource
from customer_import_core.jobs import (
    ImportErrorRecord,
    ImportJob,
    ImportOptions,
    ImportStatus,
    JobRegistry,
)
from customer_import_core.models import Customer
from customer_import_core.pipeline.batch_writer import BatchWriter
from customer_import_core.util import BatchWriteError, ErrorCeilingExceeded, utc_now

logger = structlog.get_logger()

# Records transformed between explicit yields to the event loop.
YIELD_EVERY_RECORDS = 100


class ImportCoordinator:
    """Runs imports as background asyncio tasks, one per job.

    Each job's progress record is mutated only by its own task, so the hot
    path needs no locking. Callers observe progress by polling.
    """

    def __init__(
        self,
        registry: JobRegistry,
        writer: BatchWriter,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.registry = registry
        self.writer = writer
        self._clock = clock
        self._tasks: dict[str, asyncio.Task] = {}

    def start_import(
        self, source: Any, options: ImportOptions | None = None
    ) -> tuple[str, ImportJob]:
        """Register a job and start processing it in the background.

        Must be called from a running event loop. Returns the job ID and a
        snapshot of the initial progress record.
        """
        options = options or ImportOptions()
        record_source = open_source(source, options)
        loop = asyncio.get_running_loop()
        job_id = self.registry.create()
        job = self.registry.get(job_id)
        task = loop.create_task(
            self._run(job, record_source, options), name=f"customer-import-{job_id}"
        )
        self._tasks[job_id] = task
        task.add_done_callback(lambda _: self._tasks.pop(job_id, None))
        logger.info(
            "import_started",
            import_id=job_id,
            source=record_source.name,
            batch_size=options.batch_size,
            max_errors=options.max_errors,
        )
        return job_id, job.model_copy(deep=True)

    def get_progress(self, job_id: str) -> ImportJob | None:
        return self.registry.get(job_id)

    def get_stats(self, job_id: str) -> dict[str, Any] | None:
        job = self.registry.get(job_id)
        if job is None:
            return None
        return job.stats(self._clock())

    def cancel(self, job_id: str) -> bool:
        """Ask a running job to stop at its next record."""
        return self.registry.request_cancel(job_id)

    def list_active(self) -> dict[str, ImportJob]:
        return self.registry.list_active()

    def cleanup(self, job_id: str) -> None:
        self.registry.remove(job_id)

    async def wait(self, job_id: str) -> ImportJob | None:
        """Wait for a job's task to finish and return its final record."""
        task = self._tasks.get(job_id)
        if task is not None:
            await asyncio.wait([task])
        return self.registry.get(job_id)

    async def shutdown(self, timeout: float = 5.0) -> None:
        """Cancel every running job, then stop tasks that do not wind down in time."""
        tasks = list(self._tasks.items())
        if not tasks:
            return
        for job_id, _ in tasks:
            self.registry.request_cancel(job_id)
        _, pending = await asyncio.wait([t for _, t in tasks], timeout=timeout)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.wait(pending)

    async def _write_batch(self, job: ImportJob, batch: list[Customer], batch_number: int) -> None:
        job.current_batch = batch_number
        try:
            result = await self.writer.write_batch(batch, batch_number)
        except BatchWriteError as e:
            job.failed += e.batch_size
            job.add_errors([ImportErrorRecord(row=-1, error=str(e))])
            return
        job.successful += result.inserted_count
        job.failed += result.failed_count

    async def _run(self, job: ImportJob, source: BaseSource, options: ImportOptions) -> None:
        log = logger.bind(import_id=job.id)
        batch: list[Customer] = []
        row_number = 0
        batches = 0
        try:
            async with aclosing(aiter_records(source)) as records:
                async for raw in records:
                    if job.status is not ImportStatus.PROCESSING:
                        log.info("import_stopping", status=job.status.value, row=row_number)
                        break
                    row_number += 1
                    candidate = transform_row(raw, row_number)
                    if candidate.is_valid:
                        batch.append(candidate.customer)
                    else:
                        job.failed += 1
                        job.add_errors(candidate.errors)

                    if len(batch) >= options.batch_size:
                        batches += 1
                        await self._write_batch(job, batch, batches)
                        batch = []

                    job.record_processed(row_number)
                    if len(job.errors) > options.max_errors:
                        raise ErrorCeilingExceeded(len(job.errors), options.max_errors)
                    if row_number % YIELD_EVERY_RECORDS == 0:
                        await asyncio.sleep(0)

            if job.status is ImportStatus.PROCESSING:
                if batch:
                    log.info("final_batch", size=len(batch))
                    batches += 1
                    await self._write_batch(job, batch, batches)
                    batch = []
                self.registry.mark_terminal(job, ImportStatus.COMPLETED)
        except ErrorCeilingExceeded as e:
            log.warning("import_error_ceiling_reached", error_count=e.error_count, dropped=len(batch))
            job.add_errors([ImportErrorRecord(row=-1, error=f"Import failed: {e}")])
            self.registry.mark_terminal(job, ImportStatus.FAILED)
        except Exception as e:
            log.exception("import_failed", error=str(e), row=row_number)
            job.add_errors([ImportErrorRecord(row=-1, error=f"Import failed: {e}")])
            self.registry.mark_terminal(job, ImportStatus.FAILED)
        finally:
            job.finish(batches, self._clock())
            log.info(
                "import_finished",
                status=job.status.value,
                processed=job.total_processed,
                successful=job.successful,
                failed=job.failed,
                batches=batches,
                duration_ms=job.duration_ms,
            )
