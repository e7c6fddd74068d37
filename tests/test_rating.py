"""Tests for debt rating."""

from datetime import timedelta
from decimal import Decimal

import pytest

from conftest import AS_OF, make_row
from ledgerdesk.domain.customers import aggregate_customers
from ledgerdesk.domain.entities import CustomerAggregate, DebtRating
from ledgerdesk.domain.rating import (
    calculate_debt_rating,
    is_closed,
    normalize_closed_set,
    recency_score,
    score_customer,
)


def _aggregate(**overrides):
    values = dict(customer_name="M", total_debit=Decimal("10000"), total_credit=Decimal("6000"))
    values.update(overrides)
    values.setdefault("net_debt", values["total_debit"] - values["total_credit"])
    return CustomerAggregate(**values)


def test_settled_recent_customer_is_good():
    customer = aggregate_customers(
        [
            make_row("X", "SAL001", debit=1000, date="2024-06-01"),
            make_row("X", "BNK01", credit=1000, date="2024-06-20"),
        ],
        AS_OF,
    )[0]
    breakdown = score_customer(customer, [], AS_OF)

    assert breakdown.total_score == 9
    assert breakdown.rating is DebtRating.GOOD


@pytest.mark.parametrize("name", ["Acme Co", "acme co", "  ACME   CO "])
def test_closed_match_ignores_case_and_spacing(name):
    customer = _aggregate(customer_name=name, net_debt=Decimal("-50"))
    assert calculate_debt_rating(customer, ["Acme Co"], AS_OF) is DebtRating.BAD


def test_closed_check_accepts_normalized_set():
    closed = normalize_closed_set(["  Acme  Co", "", "Beta"])
    assert closed == frozenset({"acme co", "beta"})
    assert is_closed("ACME CO", closed)
    assert not is_closed("Gamma", closed)


def test_closed_check_normalizes_raw_frozenset():
    """A frozenset of raw sheet names still matches."""
    customer = _aggregate(customer_name="Acme Co", net_debt=Decimal("-100"))
    raw = frozenset({"  ACME   CO "})

    assert is_closed("Acme Co", raw)
    assert calculate_debt_rating(customer, raw, AS_OF) is DebtRating.BAD
    assert calculate_debt_rating(customer, list(raw), AS_OF) is DebtRating.BAD


def test_customer_in_credit_is_good_despite_scores():
    customer = _aggregate(total_debit=Decimal("0"), total_credit=Decimal("100"))
    breakdown = score_customer(customer, [], AS_OF)

    assert breakdown.total_score < 4
    assert breakdown.rating is DebtRating.GOOD


def test_dormant_debtor_is_bad():
    customer = _aggregate(
        total_debit=Decimal("1000"),
        total_credit=Decimal("900"),
        last_payment_date=AS_OF - timedelta(days=200),
    )
    breakdown = score_customer(customer, [], AS_OF)

    assert breakdown.risk_flag_dormant
    assert breakdown.rating is DebtRating.BAD


def test_negative_sales_without_payments_is_bad():
    customer = _aggregate(
        sales_3m=Decimal("-300"),
        sales_count_3m=1,
        last_sales_date=AS_OF - timedelta(days=5),
    )
    breakdown = score_customer(customer, [], AS_OF)

    assert breakdown.risk_flag_negative_sales
    assert not breakdown.risk_flag_dormant
    assert breakdown.rating is DebtRating.BAD


def test_mid_scores_are_medium():
    customer = _aggregate(
        payments_count_3m=1,
        sales_count_3m=1,
        last_payment_date=AS_OF - timedelta(days=60),
        last_sales_date=AS_OF - timedelta(days=120),
    )
    breakdown = score_customer(customer, [], AS_OF)

    assert breakdown.debt_size_score == 2
    assert breakdown.collection_rate_score == 1
    assert breakdown.payment_recency_score == 1
    assert breakdown.payment_frequency_score == 1
    assert breakdown.sale_recency_score == 0
    assert breakdown.total_score == 5
    assert breakdown.rating is DebtRating.MEDIUM


def test_low_scores_are_bad():
    customer = _aggregate(
        total_debit=Decimal("31250"),
        total_credit=Decimal("6250"),
        payments_count_3m=1,
        last_payment_date=AS_OF - timedelta(days=100),
        last_sales_date=AS_OF - timedelta(days=100),
    )
    breakdown = score_customer(customer, [], AS_OF)

    assert not breakdown.risk_flag_dormant
    assert breakdown.total_score == 1
    assert breakdown.rating is DebtRating.BAD


def test_closed_wins_over_credit_balance():
    customer = _aggregate(customer_name="Acme Co", total_debit=Decimal("0"), total_credit=Decimal("10"))
    breakdown = score_customer(customer, ["acme co"], AS_OF)

    assert breakdown.closed
    assert breakdown.rating is DebtRating.BAD


@pytest.mark.parametrize(
    "days,expected",
    [(0, 2), (30, 2), (31, 1), (90, 1), (91, 0)],
)
def test_recency_score_bands(days, expected):
    assert recency_score(AS_OF - timedelta(days=days), AS_OF) == expected


def test_recency_score_missing_date():
    assert recency_score(None, AS_OF) == 0


@pytest.mark.parametrize(
    "debit,credit,payments",
    [
        ("0", "0", 0),
        ("100", "0", 0),
        ("100", "100", 3),
        ("50000", "1000", 1),
        ("5000", "4000", 2),
    ],
)
def test_rating_is_always_one_of_three(debit, credit, payments):
    customer = _aggregate(
        total_debit=Decimal(debit),
        total_credit=Decimal(credit),
        payments_count_3m=payments,
    )
    assert calculate_debt_rating(customer, [], AS_OF) in set(DebtRating)
