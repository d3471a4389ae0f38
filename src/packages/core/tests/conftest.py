"""Shared fixtures for pipeline tests."""
import asyncio

import pytest

from customer_import_core.jobs import JobRegistry
from customer_import_core.pipeline import BatchWriter, ImportCoordinator
from customer_import_core.sink import BulkInsertResult, MemorySink

CSV_HEADER = (
    "Number,Name of Location,Date,Login Hour,Name,Age,gender,Email,"
    "No Telp,Brand Device,Digital Interest,Location Type"
)


def _row(number: int, **overrides) -> dict:
    row = {
        "Number": str(number),
        "Name of Location": "Grand Mall",
        "Date": "2024-01-15",
        "Login Hour": "08:30",
        "Name": f"User {number}",
        "Age": "1990",
        "gender": "Male",
        "Email": f"user{number}@example.com",
        "No Telp": "08123456789",
        "Brand Device": "Samsung",
        "Digital Interest": "Gaming",
        "Location Type": "urban",
    }
    for key, value in overrides.items():
        if value is None:
            row.pop(key, None)
        else:
            row[key] = value
    return row


class RecordingSink(MemorySink):
    """Memory sink that records each call and can fail chosen calls outright."""

    def __init__(self, fail_on_calls=(), on_call=None):
        super().__init__()
        self.batch_sizes: list[int] = []
        self.call_kwargs: list[dict] = []
        self.fail_on_calls = set(fail_on_calls)
        self.on_call = on_call

    def bulk_insert(self, documents, *, ordered=False, durability="relaxed"):
        self.batch_sizes.append(len(documents))
        self.call_kwargs.append({"ordered": ordered, "durability": durability})
        if self.on_call:
            self.on_call(documents)
        if len(self.batch_sizes) in self.fail_on_calls:
            raise ConnectionError("sink unavailable")
        return super().bulk_insert(documents, ordered=ordered, durability=durability)


class BlockingSink:
    """Async sink whose calls wait until ``release`` is set."""

    def __init__(self):
        self.entered = asyncio.Event()
        self.release = asyncio.Event()
        self.calls = 0

    async def bulk_insert(self, documents, *, ordered=False, durability="relaxed"):
        self.calls += 1
        self.entered.set()
        await self.release.wait()
        return BulkInsertResult(inserted_count=len(documents))


@pytest.fixture
def make_row():
    """Factory for a valid raw row keyed by historical CSV headers.

    Pass ``Header=None`` to drop a column, or a string to override it.
    """
    return _row


@pytest.fixture
def write_csv(tmp_path):
    """Write raw rows to a CSV file and return its path."""

    def _write(rows: list[dict], name: str = "customers.csv") -> str:
        columns = CSV_HEADER.split(",")
        lines = [CSV_HEADER]
        for row in rows:
            lines.append(",".join(row.get(c, "") for c in columns))
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n")
        return str(path)

    return _write


@pytest.fixture
def registry():
    return JobRegistry()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def coordinator(registry, sink):
    return ImportCoordinator(registry, BatchWriter(sink))


@pytest.fixture
def recording_sink_cls():
    return RecordingSink


@pytest.fixture
def blocking_sink():
    return BlockingSink()
