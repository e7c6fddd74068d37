"""Month key utilities for reconciliation tracking.

Month keys are "YYYY-MM" strings. The discount sheet stores them as month
tokens such as "JAN25" separated by commas, semicolons or spaces.
"""

import re
from typing import Optional

MONTH_ABBREVIATIONS = (
    "JAN", "FEB", "MAR", "APR", "MAY", "JUN",
    "JUL", "AUG", "SEP", "OCT", "NOV", "DEC",
)

_MONTH_TOKEN = re.compile(r"^([A-Z]{3})[-/]?(\d{2}|\d{4})$")
_MONTH_KEY = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")
_TOKEN_SEPARATOR = re.compile(r"[,;\s]+")


def normalize_month_token(token: str) -> Optional[str]:
    """Convert "JAN25", "JAN2025", "JAN-25" or "JAN/25" to "2025-01"."""
    cleaned = token.strip().upper()
    match = _MONTH_TOKEN.match(cleaned)
    if not match:
        return None
    month_text, year_text = match.groups()
    if month_text not in MONTH_ABBREVIATIONS:
        return None
    year = int(year_text)
    if year < 100:
        year += 2000
    return f"{year}-{MONTH_ABBREVIATIONS.index(month_text) + 1:02d}"


def normalize_month_key(token: str, fallback_year: int) -> Optional[str]:
    """Accept a "YYYY-MM" key, a month token, or a bare month abbreviation."""
    token = token.strip()
    if _MONTH_KEY.match(token):
        return token
    return normalize_month_token(token) or normalize_month_token(f"{token}{fallback_year}")


def format_month_token(key: str) -> str:
    """Render "2025-09" as "SEP25"."""
    year_text, _, month_text = key.partition("-")
    month = month_text
    if month_text.isdigit() and 1 <= int(month_text) <= 12:
        month = MONTH_ABBREVIATIONS[int(month_text) - 1]
    return f"{month}{year_text[-2:]}"


def parse_month_cell(cell: Optional[str], fallback_year: int) -> list[str]:
    """Sorted, de-duplicated month keys found in a sheet cell."""
    keys = set()
    for token in _TOKEN_SEPARATOR.split(cell or ""):
        if not token:
            continue
        key = normalize_month_key(token, fallback_year)
        if key:
            keys.add(key)
    return sorted(keys)


def format_month_cell(keys) -> str:
    """Render month keys as a sheet cell, e.g. "JAN25, FEB25"."""
    return ", ".join(format_month_token(key) for key in sorted(keys))
