"""Discount reconciliation domain service."""

import logging
from datetime import date
from typing import Optional

from ledgerdesk.database.base import Database
from ledgerdesk.domain.entities import DiscountEntry
from ledgerdesk.domain.errors import (
    RECONCILIATION_FIELDS_REQUIRED,
    NotFoundError,
    ValidationError,
    discount_customer_not_found,
    invalid_month_key,
)
from ledgerdesk.utils.month_keys import format_month_cell, normalize_month_key

logger = logging.getLogger(__name__)


class ReconciliationService:
    """Service for marking customer months as reconciled."""

    def __init__(self, db: Database, today: Optional[date] = None):
        """Initialize reconciliation service.

        Args:
            db: Database instance
            today: Date supplying the year of bare month tokens like "JAN"
        """
        self.db = db
        self.today = today

    def _fallback_year(self) -> int:
        return (self.today or date.today()).year

    def _validate(self, customer_name: Optional[str], month_key: Optional[str]) -> tuple[str, str]:
        if not customer_name or not customer_name.strip() or not month_key or not month_key.strip():
            raise ValidationError(RECONCILIATION_FIELDS_REQUIRED)
        key = normalize_month_key(month_key, self._fallback_year())
        if key is None:
            raise ValidationError(invalid_month_key(month_key))
        return customer_name.strip(), key

    def _require_entry(self, customer_name: str) -> DiscountEntry:
        entry = self.db.get_discount_entry(customer_name, self._fallback_year())
        if entry is None:
            raise NotFoundError(discount_customer_not_found(customer_name))
        return entry

    def mark_month(self, customer_name: Optional[str], month_key: Optional[str]) -> list[str]:
        """Mark a month reconciled for a customer.

        Args:
            customer_name: Customer name as listed in the discount tracker
            month_key: "YYYY-MM" key or a month token such as "JAN25"

        Returns:
            Sorted month keys now reconciled for the customer

        Raises:
            ValidationError: If either field is missing or the month is invalid
            NotFoundError: If the customer is not in the discount tracker
        """
        name, key = self._validate(customer_name, month_key)
        entry = self._require_entry(name)
        months = set(entry.reconciliation_months)
        months.add(key)
        self.db.set_reconciliation(entry.customer_name, format_month_cell(months))
        logger.info("Marked %s reconciled for %s", key, entry.customer_name)
        return sorted(months)

    def unmark_month(self, customer_name: Optional[str], month_key: Optional[str]) -> list[str]:
        """Remove a reconciled month; removing an unmarked month is a no-op.

        Raises:
            ValidationError: If either field is missing or the month is invalid
            NotFoundError: If the customer is not in the discount tracker
        """
        name, key = self._validate(customer_name, month_key)
        entry = self._require_entry(name)
        months = set(entry.reconciliation_months)
        months.discard(key)
        self.db.set_reconciliation(entry.customer_name, format_month_cell(months))
        logger.info("Cleared %s reconciliation for %s", key, entry.customer_name)
        return sorted(months)

    def list_entries(self) -> list[DiscountEntry]:
        """List all discount tracker entries."""
        return self.db.list_discount_entries(self._fallback_year())
