"""Tests for the batch writer."""
from datetime import datetime, timezone

import pytest

from customer_import_core.models import Customer
from customer_import_core.pipeline import BatchWriter
from customer_import_core.sink import BulkInsertResult
from customer_import_core.util import BatchWriteError

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def _customer(number: int) -> Customer:
    return Customer(
        number=number,
        location_name="Grand Mall",
        date=datetime(2024, 1, 15),
        login_hour="8:05",
        user_name=f"User {number}",
        birth_year=1990,
        email=f"user{number}@example.com",
    )


@pytest.mark.asyncio
async def test_empty_batch_does_not_touch_sink(sink):
    result = await BatchWriter(sink).write_batch([])
    assert result.inserted_count == 0
    assert result.failed_count == 0
    assert sink.batch_sizes == []


@pytest.mark.asyncio
async def test_writes_unordered_relaxed_bulk_insert(sink):
    writer = BatchWriter(sink, clock=lambda: NOW)
    result = await writer.write_batch([_customer(1), _customer(2)])
    assert (result.inserted_count, result.failed_count) == (2, 0)
    assert sink.batch_sizes == [2]
    assert sink.call_kwargs == [{"ordered": False, "durability": "relaxed"}]
    doc = sink.documents[0]
    assert doc["number"] == 1
    assert doc["actual_age"] == 34
    assert doc["login_datetime"] == "2024-01-15T08:05:00"
    assert doc["created_at"] == doc["updated_at"] == NOW.isoformat()
    assert doc["gender"] == "Other"


@pytest.mark.asyncio
async def test_partial_failure_is_reported_as_counts(sink):
    writer = BatchWriter(sink)
    await writer.write_batch([_customer(1)])
    result = await writer.write_batch([_customer(1), _customer(2), _customer(1)])
    assert (result.inserted_count, result.failed_count) == (1, 2)


@pytest.mark.asyncio
async def test_total_failure_raises_batch_error(recording_sink_cls):
    sink = recording_sink_cls(fail_on_calls={1})
    with pytest.raises(BatchWriteError) as excinfo:
        await BatchWriter(sink).write_batch([_customer(1), _customer(2)], batch_number=4)
    err = excinfo.value
    assert err.batch_number == 4
    assert err.batch_size == 2
    assert isinstance(err.cause, ConnectionError)
    assert str(err) == "Batch 4 failed: sink unavailable"


@pytest.mark.asyncio
async def test_async_sink_is_awaited():
    class AsyncSink:
        def __init__(self):
            self.received = []

        async def bulk_insert(self, documents, *, ordered=False, durability="relaxed"):
            self.received.extend(documents)
            return BulkInsertResult(inserted_count=len(documents) - 1)

    sink = AsyncSink()
    result = await BatchWriter(sink).write_batch([_customer(1), _customer(2)])
    assert len(sink.received) == 2
    assert (result.inserted_count, result.failed_count) == (1, 1)
