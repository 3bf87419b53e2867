"""Utility functions for spreadsheet cell values."""
from datetime import date, datetime, time
from typing import Any, Iterable, List


def sanitize_cell(value: Any) -> str:
    """Stringify and trim a cell value; None becomes an empty string."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.isoformat()
    if isinstance(value, (date, time)):
        return value.isoformat()
    return str(value).strip()


def is_row_blank(values: Iterable[str]) -> bool:
    """Check if every (already sanitized) value in a row is empty."""
    return all(not value for value in values)


def ensure_unique_headers(headers: List[str]) -> List[str]:
    """Suffix repeated header labels: Name, Name (2), Name (3)."""
    counts = {}
    unique = []
    for header in headers:
        count = counts.get(header, 0)
        counts[header] = count + 1
        unique.append(header if count == 0 else f"{header} ({count + 1})")
    return unique
