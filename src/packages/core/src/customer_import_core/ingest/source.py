"""Incremental record sources.

A source yields header-mapped records in chunks so that a file never has to
fit in memory. Nothing is opened until the first chunk is requested.
"""
import asyncio
import os
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Iterable, Iterator, Mapping
from itertools import count, islice
from typing import Any

import pandas as pd
import structlog

from customer_import_core.ingest.headers import BAD_LINE_FIELD, map_header
from customer_import_core.ingest.normalize import normalize_record
from customer_import_core.jobs.models import ImportOptions
from customer_import_core.util.errors import SourceReadError, ValidationError

logger = structlog.get_logger()

Record = dict[str, str | None]


class BaseSource(ABC):
    """Abstract base class for chunked record sources."""

    name: str = ""

    @abstractmethod
    def iter_chunks(self) -> Iterator[list[Record]]:
        """Yield successive lists of records."""
        pass


class CSVSource(BaseSource):
    """Streams a CSV file through pandas in fixed-size chunks."""

    name = "csv"

    def __init__(self, path: str | os.PathLike, delimiter: str = ",", chunk_size: int = 1000):
        self.path = os.fspath(path)
        self.delimiter = delimiter
        self.chunk_size = chunk_size

    def iter_chunks(self) -> Iterator[list[Record]]:
        # Lines with more fields than the header are parked here and their
        # row is replaced by a placeholder so they keep their position.
        bad_lines: dict[str, list[str]] = {}
        tokens = count()

        def keep_bad_line(fields: list[str]) -> list[str]:
            token = f"\x00bad-line-{next(tokens)}"
            bad_lines[token] = fields
            return [token]

        try:
            reader = pd.read_csv(
                self.path,
                sep=self.delimiter,
                dtype=str,
                keep_default_na=False,
                encoding="utf-8-sig",
                engine="python",
                on_bad_lines=keep_bad_line,
                chunksize=self.chunk_size,
            )
        except pd.errors.EmptyDataError:
            logger.info("csv_source_empty", path=self.path)
            return
        except (OSError, ValueError) as e:
            raise SourceReadError(f"Cannot open CSV source {self.path}: {e}") from e

        with reader:
            try:
                for frame in reader:
                    frame = frame.rename(columns=map_header)
                    yield [self._record(r, bad_lines) for r in frame.to_dict("records")]
            except (pd.errors.ParserError, UnicodeDecodeError) as e:
                raise SourceReadError(f"CSV parse error in {self.path}: {e}") from e

    def _record(self, row: dict[str, Any], bad_lines: dict[str, list[str]]) -> Record:
        first = next(iter(row.values()), None)
        if isinstance(first, str) and first in bad_lines:
            return {BAD_LINE_FIELD: self.delimiter.join(bad_lines.pop(first))}
        return normalize_record(row)


class IterableSource(BaseSource):
    """Chunks an in-memory iterable of mappings, mapping headers like a CSV."""

    name = "iterable"

    def __init__(self, records: Iterable[Mapping[str, Any]], chunk_size: int = 1000):
        self.records = records
        self.chunk_size = chunk_size

    def iter_chunks(self) -> Iterator[list[Record]]:
        it = iter(self.records)
        while True:
            chunk = list(islice(it, self.chunk_size))
            if not chunk:
                return
            yield [
                normalize_record({map_header(str(k)): v for k, v in r.items()})
                for r in chunk
            ]


def open_source(handle: Any, options: ImportOptions) -> BaseSource:
    """Build a source for a file path, an existing source or an iterable of records."""
    if isinstance(handle, BaseSource):
        return handle
    if isinstance(handle, (str, os.PathLike)):
        return CSVSource(handle, delimiter=options.delimiter, chunk_size=options.read_chunk_size)
    if isinstance(handle, Iterable) and not isinstance(handle, (bytes, Mapping)):
        return IterableSource(handle, chunk_size=options.read_chunk_size)
    raise ValidationError(f"Unsupported import source: {type(handle).__name__}")


async def aiter_records(source: BaseSource) -> AsyncIterator[Record]:
    """Yield records one by one, reading each chunk in a worker thread."""
    chunks = source.iter_chunks()
    try:
        while True:
            chunk = await asyncio.to_thread(next, chunks, None)
            if chunk is None:
                return
            for record in chunk:
                yield record
    finally:
        try:
            chunks.close()
        except ValueError:
            # A cancelled read may still be running in its worker thread.
            logger.warning("source_close_while_reading", source=source.name)
