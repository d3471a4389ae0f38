"""Construction of the import pipeline for the API process."""
import structlog
from fastapi import Request

from customer_import_api.settings import Settings
from customer_import_core.jobs import JobRegistry
from customer_import_core.pipeline import BatchWriter, ImportCoordinator
from customer_import_core.sink import BulkSink, MemorySink

logger = structlog.get_logger()


def build_sink(settings: Settings) -> BulkSink:
    """Create the sink selected by ``sink_backend``."""
    if settings.sink_backend == "opensearch":
        from customer_import_core.sink.opensearch import OpenSearchSink, ensure_index, get_client

        client = get_client(settings.opensearch_url)
        ensure_index(client, settings.customers_index)
        return OpenSearchSink(client, settings.customers_index)
    logger.warning("using_memory_sink")
    return MemorySink()


def build_coordinator(settings: Settings, sink: BulkSink | None = None) -> ImportCoordinator:
    """Wire a registry, batch writer and coordinator together."""
    return ImportCoordinator(JobRegistry(), BatchWriter(sink or build_sink(settings)))


def get_coordinator(request: Request) -> ImportCoordinator:
    """FastAPI dependency returning the app's coordinator."""
    return request.app.state.coordinator
