"""Domain model entities for ledgerdesk.

Input rows are frozen data classes, independent of the storage schema.
Aggregates are rebuilt from the full row set on every computation and are
never persisted.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

ZERO = Decimal("0")


class DebtRating(str, Enum):
    """Customer risk label."""

    GOOD = "Good"
    MEDIUM = "Medium"
    BAD = "Bad"


@dataclass(frozen=True)
class LedgerRow:
    """One bookkeeping line against a customer."""

    customer_name: str
    sales_rep: str
    date: str
    number: str
    debit: Decimal
    credit: Decimal
    matching: Optional[str] = None
    due_date: Optional[str] = None


@dataclass
class CustomerAggregate:
    """Per-customer totals folded from ledger rows."""

    customer_name: str
    total_debit: Decimal = ZERO
    total_credit: Decimal = ZERO
    net_debt: Decimal = ZERO
    net_sales: Decimal = ZERO
    transaction_count: int = 0
    sales_reps: set[str] = field(default_factory=set)
    invoice_numbers: set[str] = field(default_factory=set)
    last_payment_date: Optional[date] = None
    last_payment_amount: Optional[Decimal] = None
    last_payment_matching: Optional[str] = None
    last_sales_date: Optional[date] = None
    last_sales_amount: Optional[Decimal] = None
    sales_3m: Decimal = ZERO
    sales_count_3m: int = 0
    payments_3m: Decimal = ZERO
    payments_count_3m: int = 0

    @property
    def collection_ratio(self) -> float:
        """Credit over debit, 0 when nothing was charged."""
        if self.total_debit <= 0:
            return 0.0
        return float(self.total_credit / self.total_debit)


@dataclass(frozen=True)
class RatingBreakdown:
    """Sub-scores behind a customer's rating."""

    closed: bool
    risk_flag_negative_sales: bool
    risk_flag_dormant: bool
    debt_size_score: int
    collection_rate_score: int
    payment_recency_score: int
    payment_frequency_score: int
    sale_recency_score: int
    rating: DebtRating

    @property
    def total_score(self) -> int:
        return (
            self.debt_size_score
            + self.collection_rate_score
            + self.payment_recency_score
            + self.payment_frequency_score
            + self.sale_recency_score
        )


@dataclass
class SalesRepAggregate:
    """Per-representative rollup."""

    sales_rep: str
    total_debit: Decimal = ZERO
    total_credit: Decimal = ZERO
    net_debt: Decimal = ZERO
    customer_count: int = 0
    transaction_count: int = 0
    collection_rate: float = 0.0
    good_customers_count: int = 0
    medium_customers_count: int = 0
    bad_customers_count: int = 0


@dataclass
class PeriodAggregate:
    """Per-year or per-month rollup keyed by "YYYY" or "YYYY-MM"."""

    period: str
    total_debit: Decimal = ZERO
    total_credit: Decimal = ZERO
    net_debt: Decimal = ZERO
    transaction_count: int = 0
    collection_rate: float = 0.0
    good_customers_count: int = 0
    medium_customers_count: int = 0
    bad_customers_count: int = 0


@dataclass(frozen=True)
class TransferRow:
    """One inventory movement between two locations or persons."""

    date: str
    loc_from: str
    loc_to: str
    barcode: str
    product_name: str
    qty_pcs: int
    number: str = ""
    customer_name: Optional[str] = None
    receiver_name: Optional[str] = None
    description: Optional[str] = None
    user: Optional[str] = None


@dataclass(frozen=True)
class Product:
    """Catalog entry used for piece/carton conversion."""

    barcode: str
    product_name: str
    qty_pcs: int = 0
    pcs_in_ctn: int = 1
    price: Decimal = ZERO


@dataclass
class ProductBalance:
    """Movement totals of one product for one person."""

    received: int = 0
    distributed: int = 0
    balance: int = 0


@dataclass
class PersonLedger:
    """Stock held by one person, per barcode."""

    name: str
    products: dict[str, ProductBalance] = field(default_factory=dict)
    total_pcs: int = 0
    total_ctns: float = 0.0
    product_count: int = 0

    def is_empty(self) -> bool:
        return all(
            p.balance == 0 and p.received == 0 and p.distributed == 0
            for p in self.products.values()
        )


@dataclass(frozen=True)
class StockSummary:
    """Totals over the main inventory catalog."""

    total_pcs: int
    total_ctns: float
    total_items: int


@dataclass(frozen=True)
class DiscountEntry:
    """Discount tracker line with its reconciled months."""

    customer_name: str
    reconciliation_months: tuple[str, ...] = ()
