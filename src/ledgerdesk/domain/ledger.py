"""Transaction code classification for ledger rows.

Transaction numbers are prefix-tagged: SAL (sale), RSAL (sales return),
BNK (bank receipt), BIL, JV, OB (opening balance). Matching is
case-insensitive.
"""

import re
from decimal import Decimal

from ledgerdesk.domain.entities import LedgerRow

PAYMENT_THRESHOLD = Decimal("0.01")

# Credit rows with these prefixes are never payments.
NON_PAYMENT_PREFIXES = ("SAL", "RSAL", "BIL", "JV", "OB")

_WHITESPACE = re.compile(r"\s+")


def _code(number) -> str:
    return (str(number) if number is not None else "").upper()


def is_sale(number) -> bool:
    """True for SAL-prefixed transaction codes."""
    return _code(number).startswith("SAL")


def is_sale_return(number) -> bool:
    """True for RSAL-prefixed transaction codes."""
    return _code(number).startswith("RSAL")


def is_payment_txn(row: LedgerRow) -> bool:
    """Return whether a ledger row is a payment.

    BNK rows always are. Otherwise the row needs a credit above 0.01 and a
    code outside the sales/billing/journal/opening-balance prefixes.
    """
    code = _code(row.number)
    if code.startswith("BNK"):
        return True
    if (row.credit or 0) <= PAYMENT_THRESHOLD:
        return False
    return not code.startswith(NON_PAYMENT_PREFIXES)


def get_payment_amount(row: LedgerRow) -> Decimal:
    """Signed payment amount: credit minus debit."""
    return (row.credit or Decimal("0")) - (row.debit or Decimal("0"))


def normalize_customer_name(name) -> str:
    """Lowercase, trim and collapse inner whitespace."""
    return _WHITESPACE.sub(" ", str(name or "").strip().lower())
