"""Customer debt rating.

A customer is rated in this order:

1. Closed customers are Bad.
2. Customers in credit (net debt below zero) are Good.
3. A risk flag makes the customer Bad: negative sales in the trailing
   window without payments, or an outstanding balance with neither sales
   nor payments in the window.
4. Otherwise five sub-scores of 0-2 points each are summed: 7 or more is
   Good, 4 or more Medium, anything lower Bad.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from ledgerdesk.domain.entities import CustomerAggregate, DebtRating, RatingBreakdown
from ledgerdesk.domain.ledger import normalize_customer_name
from ledgerdesk.utils.date_parser import days_between

GOOD_SCORE = 7
MEDIUM_SCORE = 4


def normalize_closed_set(names: Iterable[str]) -> frozenset[str]:
    """Normalize raw closed-customer names for membership tests."""
    return frozenset(normalize_customer_name(name) for name in names if name and str(name).strip())


def is_closed(customer_name: str, closed_set: Iterable[str]) -> bool:
    """Case and whitespace insensitive closed-customer check.

    Members are normalized on every call, so raw and already normalized
    names both match.
    """
    return normalize_customer_name(customer_name) in normalize_closed_set(closed_set)


def debt_size_score(net_debt: Decimal) -> int:
    if net_debt <= 5000:
        return 2
    if net_debt <= 20000:
        return 1
    return 0


def collection_rate_score(collection_ratio: float) -> int:
    if collection_ratio >= 0.8:
        return 2
    if collection_ratio >= 0.5:
        return 1
    return 0


def recency_score(last: Optional[date], as_of: date) -> int:
    """2 within 30 days, 1 within 90, else 0. Missing dates score 0."""
    if last is None:
        return 0
    days = days_between(last, as_of)
    if days <= 30:
        return 2
    if days <= 90:
        return 1
    return 0


def payment_frequency_score(payments_count: int) -> int:
    if payments_count >= 2:
        return 2
    if payments_count == 1:
        return 1
    return 0


def score_customer(
    customer: CustomerAggregate, closed_set: Iterable[str], as_of: date
) -> RatingBreakdown:
    """Compute every sub-score and the resulting rating for a customer.

    Args:
        customer: Aggregate produced by aggregate_customers
        closed_set: Closed customer names, raw or already normalized
        as_of: Evaluation date for the recency scores

    Returns:
        RatingBreakdown with the final rating
    """
    closed = is_closed(customer.customer_name, closed_set)
    net_debt = customer.net_debt
    pay_count = customer.payments_count_3m

    flag_negative_sales = customer.sales_3m < 0 and pay_count == 0
    flag_dormant = pay_count == 0 and customer.sales_count_3m == 0 and net_debt > 0

    scores = dict(
        debt_size_score=debt_size_score(net_debt),
        collection_rate_score=collection_rate_score(customer.collection_ratio),
        payment_recency_score=recency_score(customer.last_payment_date, as_of),
        payment_frequency_score=payment_frequency_score(pay_count),
        sale_recency_score=recency_score(customer.last_sales_date, as_of),
    )
    total = sum(scores.values())

    if closed:
        rating = DebtRating.BAD
    elif net_debt < 0:
        rating = DebtRating.GOOD
    elif flag_negative_sales or flag_dormant:
        rating = DebtRating.BAD
    elif total >= GOOD_SCORE:
        rating = DebtRating.GOOD
    elif total >= MEDIUM_SCORE:
        rating = DebtRating.MEDIUM
    else:
        rating = DebtRating.BAD

    return RatingBreakdown(
        closed=closed,
        risk_flag_negative_sales=flag_negative_sales,
        risk_flag_dormant=flag_dormant,
        rating=rating,
        **scores,
    )


def calculate_debt_rating(
    customer: CustomerAggregate, closed_set: Iterable[str], as_of: date
) -> DebtRating:
    """Rate a customer Good, Medium or Bad."""
    return score_customer(customer, closed_set, as_of).rating
