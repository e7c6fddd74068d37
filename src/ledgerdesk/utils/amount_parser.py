"""Amount and quantity parsing utilities."""

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

_CURRENCY_SYMBOLS = re.compile(r"[$€£¥]|AED|SAR|USD", re.IGNORECASE)


def parse_amount(amount_str: Optional[str], default: Optional[Decimal] = None) -> Decimal:
    """Parse a money amount from a sheet cell.

    Handles "123.45", "-123.45", "1,234.56", "$123.45" and "(123.45)"
    (negative in parentheses).

    Args:
        amount_str: Amount string
        default: Value returned for an empty cell. When None, an empty
            cell is an error.

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if amount_str is None or not str(amount_str).strip():
        if default is not None:
            return default
        raise ValueError("Empty amount string")

    amount_str = str(amount_str).strip()

    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    amount_str = _CURRENCY_SYMBOLS.sub("", amount_str)
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return -amount if is_negative else amount


def parse_quantity(qty_str: Optional[str]) -> int:
    """Parse a piece count; an empty cell counts as zero.

    Raises:
        ValueError: If the cell is not a whole number
    """
    if qty_str is None or not str(qty_str).strip():
        return 0
    cleaned = str(qty_str).replace(",", "").strip()
    try:
        quantity = Decimal(cleaned)
        whole = int(quantity)
    except (InvalidOperation, OverflowError):
        raise ValueError(f"Could not parse quantity '{qty_str}'")
    if quantity != whole:
        raise ValueError(f"Quantity '{qty_str}' is not a whole number")
    return whole
