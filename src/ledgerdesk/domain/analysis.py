"""Analysis domain service.

Fetches rows from the store and runs the pure aggregation pipelines. Every
call recomputes from the full row set.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ledgerdesk.database.base import Database
from ledgerdesk.domain.closed_customers import ClosedCustomerService
from ledgerdesk.domain.customers import aggregate_customers
from ledgerdesk.domain.entities import (
    CustomerAggregate,
    DebtRating,
    LedgerRow,
    PeriodAggregate,
    PersonLedger,
    Product,
    RatingBreakdown,
    SalesRepAggregate,
    StockSummary,
    TransferRow,
)
from ledgerdesk.domain.errors import NotFoundError, customer_not_found, person_not_found
from ledgerdesk.domain.inventory import (
    main_inventory_stock,
    next_transaction_number,
    person_transfers,
    resolve_person_ledgers,
    summarize_stock,
)
from ledgerdesk.domain.rating import score_customer
from ledgerdesk.domain.rollups import rollup_months, rollup_sales_reps, rollup_years


@dataclass(frozen=True)
class RatedCustomer:
    """Customer aggregate with its rating breakdown."""

    customer: CustomerAggregate
    breakdown: RatingBreakdown

    @property
    def rating(self) -> DebtRating:
        return self.breakdown.rating


@dataclass(frozen=True)
class CustomerDetail:
    """Single customer view: rated aggregate plus its ledger rows."""

    rated: RatedCustomer
    rows: tuple[LedgerRow, ...]


@dataclass(frozen=True)
class PersonDetail:
    """Single person view: stock ledger plus the transfers touching it."""

    ledger: PersonLedger
    transfers: tuple[TransferRow, ...]


CUSTOMER_SORT_KEYS = {
    "net-debt": lambda rc: -rc.customer.net_debt,
    "name": lambda rc: rc.customer.customer_name.lower(),
    "collection": lambda rc: -rc.customer.collection_ratio,
}


class AnalysisService:
    """Service for ledger and inventory reports."""

    def __init__(self, db: Database):
        """Initialize analysis service.

        Args:
            db: Database instance
        """
        self.db = db
        self.closed_customers = ClosedCustomerService(db)

    def customer_report(
        self,
        as_of: date,
        rating: Optional[DebtRating] = None,
        search: Optional[str] = None,
        sort_by: str = "net-debt",
    ) -> list[RatedCustomer]:
        """Rate every customer in the ledger.

        Args:
            as_of: Evaluation date
            rating: Only keep customers with this rating
            search: Case-insensitive substring of the customer name
            sort_by: One of "net-debt", "name", "collection"

        Returns:
            Rated customers in the requested order
        """
        closed = self.closed_customers.closed_set()
        rated = [
            RatedCustomer(customer=c, breakdown=score_customer(c, closed, as_of))
            for c in aggregate_customers(self.db.list_ledger_rows(), as_of)
        ]
        if rating is not None:
            rated = [rc for rc in rated if rc.rating is rating]
        if search and search.strip():
            needle = search.strip().lower()
            rated = [rc for rc in rated if needle in rc.customer.customer_name.lower()]
        return sorted(rated, key=CUSTOMER_SORT_KEYS.get(sort_by, CUSTOMER_SORT_KEYS["net-debt"]))

    def customer_detail(self, customer_name: str, as_of: date) -> CustomerDetail:
        """Rated aggregate and ledger rows for one customer (exact name).

        Raises:
            NotFoundError: If the customer has no ledger rows
        """
        rows = [r for r in self.db.list_ledger_rows() if r.customer_name == customer_name]
        if not rows:
            raise NotFoundError(customer_not_found(customer_name))
        customer = aggregate_customers(rows, as_of)[0]
        breakdown = score_customer(customer, self.closed_customers.closed_set(), as_of)
        return CustomerDetail(
            rated=RatedCustomer(customer=customer, breakdown=breakdown),
            rows=tuple(rows),
        )

    def sales_rep_report(self, as_of: date, search: Optional[str] = None) -> list[SalesRepAggregate]:
        """Per-rep rollup, highest net debt first."""
        rows = self.db.list_ledger_rows()
        customers = aggregate_customers(rows, as_of)
        reps = rollup_sales_reps(rows, customers, self.closed_customers.closed_set(), as_of)
        if search and search.strip():
            needle = search.strip().lower()
            reps = [r for r in reps if needle in r.sales_rep.lower()]
        return reps

    def year_report(self, as_of: date) -> list[PeriodAggregate]:
        """Debtor rollup per year."""
        rows = self.db.list_ledger_rows()
        customers = aggregate_customers(rows, as_of)
        return rollup_years(rows, customers, self.closed_customers.closed_set(), as_of)

    def month_report(self) -> list[PeriodAggregate]:
        """Ledger totals per month."""
        return rollup_months(self.db.list_ledger_rows())

    def person_ledgers(self) -> list[PersonLedger]:
        """Stock held per person."""
        return resolve_person_ledgers(self.db.list_transfers(), self.db.list_products())

    def person_detail(self, name: str) -> PersonDetail:
        """Stock ledger and transfers of one person.

        Raises:
            NotFoundError: If the person holds nothing and never moved stock
        """
        target = name.strip()
        for ledger in self.person_ledgers():
            if ledger.name == target:
                transfers = person_transfers(self.db.list_transfers(), target)
                return PersonDetail(ledger=ledger, transfers=tuple(transfers))
        raise NotFoundError(person_not_found(target))

    def main_inventory(self) -> list[Product]:
        """Catalog products with live main inventory quantities."""
        return main_inventory_stock(self.db.list_products(), self.db.list_transfers())

    def stock_summary(self) -> StockSummary:
        """Totals over the live main inventory."""
        return summarize_stock(self.main_inventory())

    def next_transfer_number(self, prefix: str = "TRX") -> str:
        """Next free transfer number for a prefix."""
        return next_transaction_number(self.db.list_transfers(), prefix)
