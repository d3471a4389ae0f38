"""Run a single CSV import from the command line."""
import argparse
import asyncio
import sys

import structlog

from customer_import_core.jobs import ImportJob, ImportOptions, ImportStatus, JobRegistry
from customer_import_core.pipeline import BatchWriter, ImportCoordinator
from customer_import_core.sink import BulkSink, MemorySink
from customer_import_worker.settings import (
    get_batch_size,
    get_customers_index,
    get_max_errors,
    get_progress_interval,
    get_sink_backend,
)

logger = structlog.get_logger()


def _build_sink(backend: str) -> BulkSink:
    if backend == "memory":
        return MemorySink()
    from customer_import_core.sink.opensearch import OpenSearchSink, ensure_index, get_client

    client = get_client()
    index_name = ensure_index(client, get_customers_index())
    return OpenSearchSink(client, index_name)


async def run_import(
    path: str,
    options: ImportOptions,
    sink: BulkSink,
    progress_interval: float = 2.0,
) -> ImportJob:
    """Import ``path`` and log progress until the job reaches a terminal status."""
    coordinator = ImportCoordinator(JobRegistry(), BatchWriter(sink))
    import_id, _ = coordinator.start_import(path, options)
    waiter = asyncio.ensure_future(coordinator.wait(import_id))
    while not waiter.done():
        await asyncio.wait([waiter], timeout=progress_interval)
        job = coordinator.get_progress(import_id)
        if job and job.status is ImportStatus.PROCESSING:
            logger.info(
                "import_progress",
                import_id=import_id,
                processed=job.total_processed,
                successful=job.successful,
                failed=job.failed,
                batch=job.current_batch,
                percentage=round(job.percentage, 1),
            )
    return waiter.result()


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``customer-import`` command."""
    parser = argparse.ArgumentParser(description="Import customers from a CSV file.")
    parser.add_argument("path", help="CSV file to import")
    parser.add_argument("--batch-size", type=int, default=get_batch_size())
    parser.add_argument("--max-errors", type=int, default=get_max_errors())
    parser.add_argument("--delimiter", default=",")
    parser.add_argument("--sink", choices=["opensearch", "memory"], default=get_sink_backend())
    args = parser.parse_args(argv)

    options = ImportOptions(
        batch_size=args.batch_size, max_errors=args.max_errors, delimiter=args.delimiter
    )
    job = asyncio.run(
        run_import(args.path, options, _build_sink(args.sink), get_progress_interval())
    )
    logger.info("import_summary", **job.stats(job.end_time or job.start_time))
    for error in job.errors[:10]:
        logger.warning("import_error_sample", **error.model_dump(mode="json"))
    return 0 if job.status is ImportStatus.COMPLETED else 1


if __name__ == "__main__":
    sys.exit(main())
