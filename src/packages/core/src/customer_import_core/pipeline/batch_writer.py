"""Batch writer: one bulk insert per batch of customers."""
import asyncio
import inspect
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

import structlog

from customer_import_core.models import Customer
from customer_import_core.sink.base import BulkInsertResult, BulkSink
from customer_import_core.util import BatchWriteError, utc_now

logger = structlog.get_logger()


@dataclass(frozen=True)
class BatchResult:
    inserted_count: int = 0
    failed_count: int = 0


class BatchWriter:
    """Writes batches to a sink with unordered, relaxed-durability bulk inserts.

    Partial failures are reported only as counts; the sink does not say which
    documents were rejected.
    """

    def __init__(self, sink: BulkSink, clock: Callable[[], datetime] = utc_now):
        self.sink = sink
        self._clock = clock

    async def _bulk_insert(self, documents: list[dict]) -> BulkInsertResult:
        if inspect.iscoroutinefunction(self.sink.bulk_insert):
            return await self.sink.bulk_insert(documents, ordered=False, durability="relaxed")
        return await asyncio.to_thread(
            self.sink.bulk_insert, documents, ordered=False, durability="relaxed"
        )

    async def write_batch(self, entities: list[Customer], batch_number: int = 1) -> BatchResult:
        """Insert ``entities``; raises :class:`BatchWriteError` if the call fails outright."""
        if not entities:
            return BatchResult()

        now = self._clock()
        documents = [entity.to_document(now) for entity in entities]
        logger.info("batch_writing", batch=batch_number, size=len(documents))
        try:
            result = await self._bulk_insert(documents)
        except Exception as e:
            logger.exception("batch_failed", batch=batch_number, size=len(documents), error=str(e))
            raise BatchWriteError(batch_number, len(documents), e) from e

        inserted = max(0, min(result.inserted_count or 0, len(documents)))
        failed = len(documents) - inserted
        if failed:
            logger.warning("batch_partially_failed", batch=batch_number, inserted=inserted, failed=failed)
        logger.info("batch_written", batch=batch_number, inserted=inserted, submitted=len(documents))
        return BatchResult(inserted_count=inserted, failed_count=failed)
