"""Text rendering helpers shared by report commands."""

from datetime import date
from typing import Optional


def format_amount(value) -> str:
    """Render a money amount with thousands separators."""
    if value is None:
        return "-"
    return f"{value:,.2f}"


def format_date(value: Optional[date]) -> str:
    return value.isoformat() if value else "-"


def format_rate(value: float) -> str:
    return f"{value:.1f}%"


def truncate(text: Optional[str], width: int) -> str:
    """Cut text to width, marking the cut with '..'."""
    text = text or ""
    if len(text) <= width:
        return text
    return text[: width - 2] + ".."
