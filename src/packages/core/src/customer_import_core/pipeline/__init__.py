"""Import pipeline: batch writer and stream coordinator."""
from customer_import_core.pipeline.batch_writer import BatchResult, BatchWriter
from customer_import_core.pipeline.coordinator import ImportCoordinator

__all__ = ["BatchResult", "BatchWriter", "ImportCoordinator"]
