"""Rollups of ledger rows and rated customers per sales rep and per period."""

import re
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from ledgerdesk.domain.entities import (
    CustomerAggregate,
    DebtRating,
    LedgerRow,
    PeriodAggregate,
    SalesRepAggregate,
)
from ledgerdesk.domain.rating import calculate_debt_rating, normalize_closed_set
from ledgerdesk.utils.date_parser import parse_ledger_date

DEBTOR_THRESHOLD = Decimal("0.01")

_YEAR_IN_TEXT = re.compile(r"\d{4}")


def collection_rate_percent(total_debit: Decimal, total_credit: Decimal) -> float:
    """Credit over debit as a percentage, 0 when nothing was charged."""
    if total_debit <= 0:
        return 0.0
    return float(total_credit / total_debit * 100)


def _add_row(target, row: LedgerRow) -> None:
    target.total_debit += row.debit
    target.total_credit += row.credit
    target.net_debt = target.total_debit - target.total_credit
    target.transaction_count += 1


def _tally_ratings(
    target,
    customers: Iterable[CustomerAggregate],
    closed_set: frozenset[str],
    as_of: date,
) -> None:
    for customer in customers:
        rating = calculate_debt_rating(customer, closed_set, as_of)
        if rating is DebtRating.GOOD:
            target.good_customers_count += 1
        elif rating is DebtRating.MEDIUM:
            target.medium_customers_count += 1
        else:
            target.bad_customers_count += 1


def rollup_sales_reps(
    rows: Sequence[LedgerRow],
    customers: Sequence[CustomerAggregate],
    closed_customers: Iterable[str],
    as_of: date,
) -> list[SalesRepAggregate]:
    """Summarize ledger rows and customer ratings per sales rep.

    Totals and distinct customer counts come from the rows, keyed by the
    raw rep name. A customer is rated once for every rep appearing on at
    least one of its rows, so rating counts overlap across reps.

    Returns:
        Rep aggregates sorted by net debt, highest first
    """
    closed_set = normalize_closed_set(closed_customers)

    customers_by_rep: dict[str, list[CustomerAggregate]] = defaultdict(list)
    for customer in customers:
        for rep in customer.sales_reps:
            customers_by_rep[rep].append(customer)

    reps: dict[str, SalesRepAggregate] = {}
    rep_customers: dict[str, set[str]] = defaultdict(set)
    for row in rows:
        rep = reps.get(row.sales_rep)
        if rep is None:
            rep = SalesRepAggregate(sales_rep=row.sales_rep)
            reps[row.sales_rep] = rep
        _add_row(rep, row)
        rep_customers[row.sales_rep].add(row.customer_name)

    for name, rep in reps.items():
        rep.customer_count = len(rep_customers[name])
        rep.collection_rate = collection_rate_percent(rep.total_debit, rep.total_credit)
        _tally_ratings(rep, customers_by_rep.get(name, ()), closed_set, as_of)

    return sorted(reps.values(), key=lambda r: r.net_debt, reverse=True)


def year_key(raw_date: str) -> Optional[str]:
    """Year of a ledger date, falling back to the first four-digit run."""
    parsed = parse_ledger_date(raw_date)
    if parsed is not None:
        return str(parsed.year)
    match = _YEAR_IN_TEXT.search(raw_date or "")
    return match.group(0) if match else None


def month_key(raw_date: str) -> Optional[str]:
    """Month key (YYYY-MM) of a ledger date, None when the date does not parse."""
    parsed = parse_ledger_date(raw_date)
    if parsed is None:
        return None
    return parsed.strftime("%Y-%m")


def rollup_years(
    rows: Sequence[LedgerRow],
    customers: Sequence[CustomerAggregate],
    closed_customers: Iterable[str],
    as_of: date,
) -> list[PeriodAggregate]:
    """Summarize debtor activity per calendar year.

    Only rows of customers whose net debt is above 0.01 are counted. Each
    year rates the distinct customers that have at least one row dated in
    it.

    Returns:
        Year aggregates sorted by year
    """
    closed_set = normalize_closed_set(closed_customers)
    by_name = {c.customer_name: c for c in customers}
    debtors = {c.customer_name for c in customers if c.net_debt > DEBTOR_THRESHOLD}

    years: dict[str, PeriodAggregate] = {}
    customers_by_year: dict[str, dict[str, CustomerAggregate]] = defaultdict(dict)
    for row in rows:
        key = year_key(row.date)
        if key is None:
            continue
        customer = by_name.get(row.customer_name)
        if customer is not None:
            customers_by_year[key][customer.customer_name] = customer
        if row.customer_name not in debtors:
            continue
        period = years.get(key)
        if period is None:
            period = PeriodAggregate(period=key)
            years[key] = period
        _add_row(period, row)

    for key, period in years.items():
        period.collection_rate = collection_rate_percent(period.total_debit, period.total_credit)
        _tally_ratings(period, customers_by_year[key].values(), closed_set, as_of)

    return sorted(years.values(), key=lambda p: p.period)


def rollup_months(rows: Sequence[LedgerRow]) -> list[PeriodAggregate]:
    """Totals per "YYYY-MM" over all rows with a parseable date."""
    months: dict[str, PeriodAggregate] = {}
    for row in rows:
        key = month_key(row.date)
        if key is None:
            continue
        period = months.get(key)
        if period is None:
            period = PeriodAggregate(period=key)
            months[key] = period
        _add_row(period, row)

    for period in months.values():
        period.collection_rate = collection_rate_percent(period.total_debit, period.total_credit)

    return sorted(months.values(), key=lambda p: p.period)
