"""CSV header aliases."""
import re

# Historical export headers, checked in order before the generic fallback.
HEADER_ALIASES: tuple[tuple[str, str], ...] = (
    ("Number", "number"),
    ("Name of Location", "location_name"),
    ("Date", "date"),
    ("Login Hour", "login_hour"),
    ("Name", "user_name"),
    ("Age", "birth_year"),
    ("gender", "gender"),
    ("Email", "email"),
    ("No Telp", "phone_number"),
    ("Brand Device", "device_brand"),
    ("Digital Interest", "digital_interest"),
    ("Location Type", "location_type"),
)

# Record key holding the text of a CSV line that did not fit the header.
BAD_LINE_FIELD = "_bad_line"

_ALIAS_LOOKUP = dict(HEADER_ALIASES)
_SEPARATORS = re.compile(r"[\s\-]+")


def snake_case(header: str) -> str:
    """Normalize a header to lowercase snake_case."""
    return _SEPARATORS.sub("_", header.strip().lower()).strip("_")


def map_header(header: str) -> str:
    """Map a raw CSV header to its canonical field name."""
    stripped = header.strip()
    if stripped in _ALIAS_LOOKUP:
        return _ALIAS_LOOKUP[stripped]
    return snake_case(stripped)
