"""Row sinks the batch writer can insert into."""
from customer_import_core.sink.base import BulkInsertResult, BulkSink
from customer_import_core.sink.memory import MemorySink

__all__ = ["BulkInsertResult", "BulkSink", "MemorySink"]
