"""Utility functions for ledgerdesk."""

from ledgerdesk.utils.date_parser import parse_date, parse_ledger_date
from ledgerdesk.utils.amount_parser import parse_amount, parse_quantity

__all__ = ["parse_date", "parse_ledger_date", "parse_amount", "parse_quantity"]
