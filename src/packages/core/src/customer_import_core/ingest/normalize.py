"""Record normalization utilities."""
from typing import Any

import pandas as pd


def normalize_value(v: Any) -> str | None:
    """Normalize a raw cell to a stripped string, or None when missing."""
    if v is None or (isinstance(v, float) and pd.isna(v)):
        return None
    return str(v).strip()


def normalize_record(row: dict) -> dict[str, str | None]:
    """Normalize a record dict to string values keyed by string headers."""
    return {str(k): normalize_value(v) for k, v in row.items()}
