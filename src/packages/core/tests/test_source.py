"""Tests for incremental record sources."""
import pytest

from customer_import_core.ingest import (
    CSVSource,
    IterableSource,
    aiter_records,
    open_source,
)
from customer_import_core.ingest.headers import BAD_LINE_FIELD
from customer_import_core.jobs import ImportOptions
from customer_import_core.util import SourceReadError, ValidationError


def test_csv_source_reads_in_chunks(write_csv, make_row):
    path = write_csv([make_row(i) for i in range(1, 6)])
    chunks = list(CSVSource(path, chunk_size=2).iter_chunks())
    assert [len(c) for c in chunks] == [2, 2, 1]
    first = chunks[0][0]
    assert first["number"] == "1"
    assert first["location_name"] == "Grand Mall"
    assert first["birth_year"] == "1990"
    assert first["email"] == "user1@example.com"


def test_csv_source_strips_values_and_keeps_empty_cells(tmp_path):
    path = tmp_path / "a.csv"
    path.write_text("Number,Email,Extra Column\n 1 , a@b.co ,\n")
    (chunk,) = list(CSVSource(str(path)).iter_chunks())
    assert chunk == [{"number": "1", "email": "a@b.co", "extra_column": ""}]


def test_csv_source_with_semicolons(tmp_path):
    path = tmp_path / "a.csv"
    path.write_text("Number;Email\n1;a@b.co\n2;c@d.co\n")
    (chunk,) = list(CSVSource(str(path), delimiter=";").iter_chunks())
    assert [r["number"] for r in chunk] == ["1", "2"]


def test_csv_source_opens_lazily(tmp_path):
    source = CSVSource(str(tmp_path / "missing.csv"))
    chunks = source.iter_chunks()
    with pytest.raises(SourceReadError, match="Cannot open"):
        next(chunks)


def test_iterable_source_maps_headers():
    rows = [{"Number": 1, "Email": " x@y.z "}, {"Number": 2, "Email": None}]
    chunks = list(IterableSource(rows, chunk_size=1).iter_chunks())
    assert chunks == [[{"number": "1", "email": "x@y.z"}], [{"number": "2", "email": None}]]


def test_open_source_dispatch(tmp_path):
    options = ImportOptions(read_chunk_size=7, delimiter="|")
    csv_source = open_source(tmp_path / "a.csv", options)
    assert isinstance(csv_source, CSVSource)
    assert csv_source.chunk_size == 7
    assert csv_source.delimiter == "|"
    assert isinstance(open_source([{"Number": "1"}], options), IterableSource)
    assert open_source(csv_source, options) is csv_source
    with pytest.raises(ValidationError):
        open_source(42, options)
    with pytest.raises(ValidationError):
        open_source({"Number": "1"}, options)


@pytest.mark.asyncio
async def test_aiter_records_yields_every_record(write_csv, make_row):
    path = write_csv([make_row(i) for i in range(1, 8)])
    records = [r async for r in aiter_records(CSVSource(path, chunk_size=3))]
    assert [r["number"] for r in records] == [str(i) for i in range(1, 8)]


def test_csv_line_with_extra_fields_keeps_its_position(tmp_path):
    path = tmp_path / "a.csv"
    path.write_text("Number,Email\n1,a@b.co\n2,c@d.co,extra,cols\n3,e@f.co\n")
    chunks = list(CSVSource(str(path), chunk_size=2).iter_chunks())
    records = [r for chunk in chunks for r in chunk]
    assert records == [
        {"number": "1", "email": "a@b.co"},
        {BAD_LINE_FIELD: "2,c@d.co,extra,cols"},
        {"number": "3", "email": "e@f.co"},
    ]


def test_empty_csv_yields_nothing(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("")
    assert list(CSVSource(str(path)).iter_chunks()) == []
