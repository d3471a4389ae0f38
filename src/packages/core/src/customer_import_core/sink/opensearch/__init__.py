"""OpenSearch-backed sink."""
from customer_import_core.sink.opensearch.client import get_client
from customer_import_core.sink.opensearch.index import OpenSearchSink, ensure_index
from customer_import_core.sink.opensearch.mapping import get_customer_mapping

__all__ = ["get_client", "OpenSearchSink", "ensure_index", "get_customer_mapping"]
