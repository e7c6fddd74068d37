"""Abstract store interface."""

from abc import ABC, abstractmethod
from typing import Optional

from ledgerdesk.domain.entities import (
    DiscountEntry,
    LedgerRow,
    Product,
    TransferRow,
)


class Database(ABC):
    """Abstract store interface for ledgerdesk."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Ledger operations
    @abstractmethod
    def add_ledger_row(self, row: LedgerRow) -> int:
        """Store a ledger row. Returns row ID."""
        pass

    @abstractmethod
    def list_ledger_rows(self) -> list[LedgerRow]:
        """List all ledger rows in insertion order."""
        pass

    # Transfer operations
    @abstractmethod
    def add_transfer(self, row: TransferRow) -> int:
        """Store a transfer row. Returns row ID."""
        pass

    @abstractmethod
    def list_transfers(self) -> list[TransferRow]:
        """List all transfer rows in insertion order."""
        pass

    # Product catalog operations
    @abstractmethod
    def upsert_product(self, product: Product) -> bool:
        """Create or replace a product by barcode. Returns True if created."""
        pass

    @abstractmethod
    def list_products(self) -> list[Product]:
        """List all products ordered by name."""
        pass

    # Closed customer operations
    @abstractmethod
    def add_closed_customer(self, customer_name: str) -> int:
        """Mark a customer closed. Returns row ID."""
        pass

    @abstractmethod
    def list_closed_customers(self) -> list[str]:
        """List closed customer names as stored."""
        pass

    # Discount tracker operations
    @abstractmethod
    def add_discount_entry(self, customer_name: str, reconciliation: str = "") -> int:
        """Create a discount tracker entry. Returns row ID."""
        pass

    @abstractmethod
    def get_discount_entry(
        self, customer_name: str, fallback_year: Optional[int] = None
    ) -> Optional[DiscountEntry]:
        """Get entry by customer name, trimmed and case-insensitive.

        Bare month tokens in the cell take fallback_year, or the current year.
        """
        pass

    @abstractmethod
    def list_discount_entries(self, fallback_year: Optional[int] = None) -> list[DiscountEntry]:
        """List all discount tracker entries."""
        pass

    @abstractmethod
    def set_reconciliation(self, customer_name: str, reconciliation: str) -> None:
        """Replace the reconciliation cell of an entry."""
        pass
