"""Ingest module: record sources, header mapping and row transformation."""
from customer_import_core.ingest.headers import map_header
from customer_import_core.ingest.source import (
    BaseSource,
    CSVSource,
    IterableSource,
    aiter_records,
    open_source,
)
from customer_import_core.ingest.transform import transform_row

__all__ = [
    "map_header",
    "BaseSource",
    "CSVSource",
    "IterableSource",
    "aiter_records",
    "open_source",
    "transform_row",
]
