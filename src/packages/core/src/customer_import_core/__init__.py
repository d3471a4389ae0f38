"""Streaming CSV import pipeline for customer records."""
from customer_import_core.jobs import ImportJob, ImportOptions, ImportStatus, JobRegistry
from customer_import_core.pipeline import BatchWriter, ImportCoordinator

__all__ = [
    "ImportJob",
    "ImportOptions",
    "ImportStatus",
    "JobRegistry",
    "BatchWriter",
    "ImportCoordinator",
]
