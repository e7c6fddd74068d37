"""Tests for transaction code classification."""

from decimal import Decimal

import pytest

from conftest import make_row
from ledgerdesk.domain.ledger import (
    get_payment_amount,
    is_payment_txn,
    is_sale,
    is_sale_return,
    normalize_customer_name,
)


def test_bank_rows_are_always_payments():
    assert is_payment_txn(make_row(number="BNK01", credit=0, debit=50))
    assert is_payment_txn(make_row(number="bnk01", credit=0))


@pytest.mark.parametrize("number", ["SAL001", "RSAL01", "BIL7", "JV12", "OB2024", "sal001"])
def test_excluded_prefixes_are_not_payments(number):
    assert not is_payment_txn(make_row(number=number, credit=500))


def test_credit_row_with_other_prefix_is_payment():
    assert is_payment_txn(make_row(number="CHQ12", credit=500))


@pytest.mark.parametrize("credit", ["0", "0.01", "-5"])
def test_small_credit_without_bnk_is_not_payment(credit):
    row = make_row(number="CHQ12", credit=Decimal(credit))
    assert not is_payment_txn(row)


def test_payment_amount_is_signed():
    assert get_payment_amount(make_row(number="BNK1", credit=300, debit=0)) == Decimal("300")
    assert get_payment_amount(make_row(number="BNK1", credit=0, debit=120)) == Decimal("-120")


def test_sale_prefixes():
    assert is_sale("SAL001")
    assert is_sale("sal001")
    assert not is_sale("RSAL001")
    assert is_sale_return("RSAL001")
    assert not is_sale_return(None)


def test_normalize_customer_name():
    assert normalize_customer_name("  ACME   CO ") == "acme co"
    assert normalize_customer_name("Acme\tCo") == "acme co"
    assert normalize_customer_name(None) == ""
