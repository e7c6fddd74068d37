"""Closed customer domain service."""

from ledgerdesk.database.base import Database
from ledgerdesk.domain.errors import ConflictError, ValidationError, duplicate_closed_customer
from ledgerdesk.domain.ledger import normalize_customer_name
from ledgerdesk.domain.rating import normalize_closed_set


class ClosedCustomerService:
    """Service for managing the closed customer list."""

    def __init__(self, db: Database):
        self.db = db

    def close_customer(self, customer_name: str) -> int:
        """Add a customer to the closed list.

        Raises:
            ValidationError: If the name is blank
            ConflictError: If an equivalent name is already closed
        """
        name = (customer_name or "").strip()
        if not name:
            raise ValidationError("Customer name is required")
        if normalize_customer_name(name) in self.closed_set():
            raise ConflictError(duplicate_closed_customer(name))
        return self.db.add_closed_customer(name)

    def list_closed(self) -> list[str]:
        return self.db.list_closed_customers()

    def closed_set(self) -> frozenset[str]:
        """Normalized closed names, ready for rating."""
        return normalize_closed_set(self.db.list_closed_customers())
