"""Customer aggregation over a flat ledger."""

from collections import defaultdict
from datetime import date, timedelta
from typing import Optional, Sequence

from ledgerdesk.domain.entities import CustomerAggregate, LedgerRow
from ledgerdesk.domain.ledger import (
    PAYMENT_THRESHOLD,
    get_payment_amount,
    is_payment_txn,
    is_sale,
    is_sale_return,
)
from ledgerdesk.utils.date_parser import parse_ledger_date

TRAILING_WINDOW_DAYS = 90

UNMATCHED = "UNMATCHED"


def trailing_window(as_of: date, days: int = TRAILING_WINDOW_DAYS) -> tuple[date, date]:
    """Inclusive (start, end) of the trailing window ending at as_of."""
    return as_of - timedelta(days=days), as_of


def _in_window(row_date: Optional[date], window: tuple[date, date]) -> bool:
    if row_date is None:
        return False
    start, end = window
    return start <= row_date <= end


def _accumulate(customer: CustomerAggregate, row: LedgerRow) -> None:
    customer.total_debit += row.debit
    customer.total_credit += row.credit
    customer.net_debt = customer.total_debit - customer.total_credit
    customer.transaction_count += 1

    if is_sale(row.number):
        customer.net_sales += row.debit
    elif is_sale_return(row.number):
        customer.net_sales -= row.credit

    if row.sales_rep and row.sales_rep.strip():
        customer.sales_reps.add(row.sales_rep.strip())
    if row.number:
        customer.invoice_numbers.add(str(row.number))

    row_date = parse_ledger_date(row.date)
    if row_date is None:
        return

    if is_payment_txn(row) and row.credit > PAYMENT_THRESHOLD:
        if customer.last_payment_date is None or row_date > customer.last_payment_date:
            customer.last_payment_date = row_date
            customer.last_payment_matching = row.matching or UNMATCHED
            customer.last_payment_amount = get_payment_amount(row)

    if is_sale(row.number) and row.debit > 0:
        if customer.last_sales_date is None or row_date > customer.last_sales_date:
            customer.last_sales_date = row_date
            customer.last_sales_amount = row.debit


def _apply_trailing_metrics(
    customer: CustomerAggregate,
    rows: Sequence[LedgerRow],
    window: tuple[date, date],
) -> None:
    credit_payments = 0
    debit_payments = 0
    for row in rows:
        if not _in_window(parse_ledger_date(row.date), window):
            continue
        if is_sale(row.number):
            customer.sales_3m += row.debit
            customer.sales_count_3m += 1
        if is_payment_txn(row):
            customer.payments_3m += get_payment_amount(row)
            if row.credit > PAYMENT_THRESHOLD:
                credit_payments += 1
            if row.debit > PAYMENT_THRESHOLD:
                debit_payments += 1
    # Net payment events: reversals cancel out receipts.
    customer.payments_count_3m = credit_payments - debit_payments


def aggregate_customers(rows: Sequence[LedgerRow], as_of: date) -> list[CustomerAggregate]:
    """Fold ledger rows into one aggregate per customer.

    Customers are keyed by the exact customer name and returned in
    first-seen order. Rows with an unparseable date still count toward
    lifetime totals but never toward trailing-window metrics.

    Args:
        rows: Full ledger row list
        as_of: Evaluation date closing the trailing 90-day window

    Returns:
        List of customer aggregates
    """
    customers: dict[str, CustomerAggregate] = {}

    for row in rows:
        customer = customers.get(row.customer_name)
        if customer is None:
            customer = CustomerAggregate(customer_name=row.customer_name)
            customers[row.customer_name] = customer
        _accumulate(customer, row)

    rows_by_customer = group_rows_by_customer(rows)
    window = trailing_window(as_of)
    for name, customer in customers.items():
        _apply_trailing_metrics(customer, rows_by_customer[name], window)

    return list(customers.values())


def group_rows_by_customer(rows: Sequence[LedgerRow]) -> dict[str, list[LedgerRow]]:
    """Rows keyed by exact customer name, input order preserved."""
    grouped: dict[str, list[LedgerRow]] = defaultdict(list)
    for row in rows:
        grouped[row.customer_name].append(row)
    return dict(grouped)
