"""Utility modules."""
from customer_import_core.util.ids import generate_import_id
from customer_import_core.util.time import utc_now
from customer_import_core.util.errors import (
    BatchWriteError,
    ErrorCeilingExceeded,
    ImportPipelineError,
    SourceReadError,
    ValidationError,
)

__all__ = [
    "generate_import_id",
    "utc_now",
    "BatchWriteError",
    "ErrorCeilingExceeded",
    "ImportPipelineError",
    "SourceReadError",
    "ValidationError",
]
