"""Row transformer: raw CSV record to a typed customer or a list of errors."""
import re
from collections.abc import Mapping
from datetime import datetime
from typing import Any

import pandas as pd

from customer_import_core.ingest.categories import (
    coerce_device_brand,
    coerce_digital_interest,
    coerce_gender,
    coerce_location_type,
)
from customer_import_core.ingest.headers import BAD_LINE_FIELD
from customer_import_core.jobs.models import CandidateRecord, ImportErrorRecord
from customer_import_core.models import Customer
from customer_import_core.util import utc_now

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
LOGIN_HOUR_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")
MIN_BIRTH_YEAR = 1900


def _text(raw: Mapping[str, Any], key: str) -> str | None:
    value = raw.get(key)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        pass
    try:
        number = float(value)
    except ValueError:
        return None
    return int(number) if number.is_integer() else None


def _parse_date(value: str) -> datetime:
    parsed = pd.to_datetime(value)
    if pd.isna(parsed):
        raise ValueError(f"Unparsable date: {value!r}")
    return parsed.to_pydatetime()


def _transform(raw: Mapping[str, Any], row_number: int, current_year: int) -> CandidateRecord:
    errors: list[ImportErrorRecord] = []

    def reject(field: str, value: Any, message: str) -> None:
        errors.append(ImportErrorRecord(row=row_number, field=field, value=value, error=message))

    raw_number = _text(raw, "number")
    number = _parse_int(raw_number)
    if number is None or number <= 0:
        reject("number", raw_number, "Invalid number")

    location_name = _text(raw, "location_name")
    if not location_name:
        reject("location_name", location_name, "Location name required")

    user_name = _text(raw, "user_name")
    if not user_name:
        reject("user_name", user_name, "User name required")

    raw_email = _text(raw, "email")
    email = raw_email.lower() if raw_email else None
    if not email or not EMAIL_PATTERN.match(email):
        reject("email", raw_email, "Invalid email")

    raw_birth_year = _text(raw, "birth_year") or _text(raw, "age")
    birth_year = _parse_int(raw_birth_year)
    if birth_year is None or not MIN_BIRTH_YEAR <= birth_year <= current_year:
        reject("birth_year", raw_birth_year, "Invalid birth year")

    raw_date = _text(raw, "date")
    date = _parse_date(raw_date) if raw_date else None
    if date is None:
        reject("date", raw_date, "Date required")

    login_hour = _text(raw, "login_hour")
    if login_hour and not LOGIN_HOUR_PATTERN.match(login_hour):
        reject("login_hour", login_hour, "Invalid login hour")

    if errors:
        return CandidateRecord.invalid(errors)

    customer = Customer(
        number=number,
        location_name=location_name,
        date=date,
        login_hour=login_hour,
        user_name=user_name,
        birth_year=birth_year,
        gender=coerce_gender(_text(raw, "gender")),
        email=email,
        phone_number=_text(raw, "phone_number"),
        device_brand=coerce_device_brand(_text(raw, "device_brand")),
        digital_interest=coerce_digital_interest(_text(raw, "digital_interest")),
        location_type=coerce_location_type(_text(raw, "location_type")),
    )
    return CandidateRecord.valid(customer)


def transform_row(
    raw: Mapping[str, Any], row_number: int, *, current_year: int | None = None
) -> CandidateRecord:
    """Validate and convert one raw record.

    Every field violation in the row is reported, not just the first. If the
    row cannot be transformed at all (e.g. a date that does not parse), a
    single error carrying the raw record is returned instead. The same holds
    for a CSV line that had more fields than the header.
    """
    if BAD_LINE_FIELD in raw:
        return CandidateRecord.invalid(
            [
                ImportErrorRecord(
                    row=row_number,
                    error="Malformed CSV line: more fields than the header",
                    value=raw[BAD_LINE_FIELD],
                    raw_data=dict(raw),
                )
            ]
        )
    year = current_year or utc_now().year
    try:
        return _transform(raw, row_number, year)
    except Exception as e:
        return CandidateRecord.invalid(
            [
                ImportErrorRecord(
                    row=row_number,
                    error=f"Row transformation failed: {e}",
                    raw_data=dict(raw),
                )
            ]
        )
