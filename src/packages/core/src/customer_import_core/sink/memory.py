"""In-process sink."""
from threading import Lock
from typing import Any

import structlog

from customer_import_core.sink.base import BulkInsertResult, Durability

logger = structlog.get_logger()


class MemorySink:
    """Keeps documents in a list, enforcing a unique key like a database index.

    Documents whose key is already stored are rejected individually. With
    ``ordered=True`` the first rejection stops the rest of the call.
    """

    def __init__(self, unique_key: str = "number"):
        self.unique_key = unique_key
        self.documents: list[dict[str, Any]] = []
        self.calls = 0
        self._keys: set[Any] = set()
        self._lock = Lock()

    def bulk_insert(
        self,
        documents: list[dict[str, Any]],
        *,
        ordered: bool = False,
        durability: Durability = "relaxed",
    ) -> BulkInsertResult:
        inserted = 0
        with self._lock:
            self.calls += 1
            for doc in documents:
                key = doc.get(self.unique_key)
                if key in self._keys:
                    if ordered:
                        break
                    continue
                self._keys.add(key)
                self.documents.append(doc)
                inserted += 1
        if inserted < len(documents):
            logger.warning(
                "memory_sink_duplicates_rejected",
                submitted=len(documents),
                inserted=inserted,
            )
        return BulkInsertResult(inserted_count=inserted)
