"""Bulk-insert sink backed by an OpenSearch index."""
from typing import Any

import structlog
from opensearchpy import OpenSearch
from opensearchpy.helpers import bulk

from customer_import_core.sink.base import BulkInsertResult, Durability
from customer_import_core.sink.opensearch.mapping import get_customer_mapping

logger = structlog.get_logger()


def ensure_index(client: OpenSearch, index_name: str) -> str:
    """Ensure the customer index exists."""
    if not client.indices.exists(index=index_name):
        client.indices.create(index=index_name, body=get_customer_mapping())
        logger.info("created_index", index=index_name)
    return index_name


class OpenSearchSink:
    """Indexes customer documents with the bulk API.

    Documents are keyed by customer ``number`` with ``create`` semantics, so a
    duplicate number is rejected for that document only. With ``ordered=True``
    any rejected document fails the whole call. Connection and transport
    errors propagate to the caller.
    """

    def __init__(self, client: OpenSearch, index_name: str = "customers"):
        self.client = client
        self.index_name = index_name

    def bulk_insert(
        self,
        documents: list[dict[str, Any]],
        *,
        ordered: bool = False,
        durability: Durability = "relaxed",
    ) -> BulkInsertResult:
        actions = [
            {
                "_op_type": "create",
                "_index": self.index_name,
                "_id": str(doc.get("number", "")),
                **doc,
            }
            for doc in documents
        ]
        refresh = "wait_for" if durability == "strict" else False
        success, failed = bulk(
            self.client,
            actions,
            raise_on_error=ordered,
            raise_on_exception=True,
            refresh=refresh,
        )
        if failed:
            sample_errors = failed[:3] if isinstance(failed, list) else []
            logger.warning(
                "bulk_index_errors",
                success=success,
                failed_count=len(failed) if isinstance(failed, list) else 0,
                sample_errors=sample_errors,
            )
        return BulkInsertResult(inserted_count=success)
