"""Tests for header mapping."""
import pytest

from customer_import_core.ingest.headers import HEADER_ALIASES, map_header


@pytest.mark.parametrize(
    "header,expected",
    [
        ("Number", "number"),
        ("Name of Location", "location_name"),
        ("Name", "user_name"),
        ("Age", "birth_year"),
        ("No Telp", "phone_number"),
        ("Brand Device", "device_brand"),
        (" Email ", "email"),
    ],
)
def test_known_aliases(header, expected):
    assert map_header(header) == expected


def test_unknown_headers_fall_back_to_snake_case():
    assert map_header("Birth Year") == "birth_year"
    assert map_header("  Phone-Number ") == "phone_number"
    assert map_header("Location   Name") == "location_name"
    assert map_header("email") == "email"


def test_alias_table_targets_are_canonical():
    targets = [target for _, target in HEADER_ALIASES]
    assert len(targets) == len(set(targets))
    assert all(t == t.lower() and " " not in t for t in targets)
