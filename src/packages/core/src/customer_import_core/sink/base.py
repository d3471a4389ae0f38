"""Row sink interface."""
from collections.abc import Awaitable
from dataclasses import dataclass
from typing import Any, Literal, Protocol

Durability = Literal["relaxed", "strict"]


@dataclass(frozen=True)
class BulkInsertResult:
    """Outcome of a bulk insert; the sink only reports how many documents landed."""

    inserted_count: int


class BulkSink(Protocol):
    """Anything that can bulk-insert documents, tolerating per-document failures.

    ``bulk_insert`` may be a plain method (run in a worker thread) or a
    coroutine function (awaited). It raises when the call fails as a whole.
    """

    def bulk_insert(
        self,
        documents: list[dict[str, Any]],
        *,
        ordered: bool = False,
        durability: Durability = "relaxed",
    ) -> BulkInsertResult | Awaitable[BulkInsertResult]:
        ...
