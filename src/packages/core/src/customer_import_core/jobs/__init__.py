"""Job tracking module."""
from customer_import_core.jobs.models import (
    CandidateRecord,
    ImportErrorRecord,
    ImportJob,
    ImportOptions,
    ImportStatus,
)
from customer_import_core.jobs.registry import JobRegistry

__all__ = [
    "CandidateRecord",
    "ImportErrorRecord",
    "ImportJob",
    "ImportOptions",
    "ImportStatus",
    "JobRegistry",
]
