"""Tests for discount reconciliation."""

from datetime import date

import pytest

from ledgerdesk.domain.errors import (
    RECONCILIATION_FIELDS_REQUIRED,
    NotFoundError,
    ValidationError,
)
from ledgerdesk.domain.reconciliation import ReconciliationService


@pytest.fixture
def tracked(temp_db):
    temp_db.add_discount_entry("Acme Co", "JAN25")
    return temp_db


def test_mark_month_adds_key(reconciliation_service, tracked):
    months = reconciliation_service.mark_month(" acme co ", "FEB25")

    assert months == ["2025-01", "2025-02"]
    entry = tracked.get_discount_entry("Acme Co")
    assert entry.reconciliation_months == ("2025-01", "2025-02")


def test_mark_month_is_idempotent(reconciliation_service, tracked):
    reconciliation_service.mark_month("Acme Co", "2025-02")
    months = reconciliation_service.mark_month("Acme Co", "FEB25")

    assert months == ["2025-01", "2025-02"]


def test_bare_month_uses_current_year(reconciliation_service, tracked):
    assert reconciliation_service.mark_month("Acme Co", "mar") == ["2025-01", "2025-03"]


def test_unmark_month(reconciliation_service, tracked):
    assert reconciliation_service.unmark_month("Acme Co", "JAN25") == []
    assert tracked.get_discount_entry("Acme Co").reconciliation_months == ()


def test_unmark_missing_month_is_noop(reconciliation_service, tracked):
    assert reconciliation_service.unmark_month("Acme Co", "2025-06") == ["2025-01"]


@pytest.mark.parametrize("name,month", [("", "JAN25"), ("Acme Co", ""), (None, None), ("  ", "JAN25")])
def test_missing_fields_rejected(reconciliation_service, tracked, name, month):
    with pytest.raises(ValidationError) as exc_info:
        reconciliation_service.mark_month(name, month)
    assert str(exc_info.value) == RECONCILIATION_FIELDS_REQUIRED


def test_invalid_month_rejected(reconciliation_service, tracked):
    with pytest.raises(ValidationError):
        reconciliation_service.mark_month("Acme Co", "Smarch")


def test_unknown_customer_not_found(reconciliation_service, tracked):
    with pytest.raises(NotFoundError) as exc_info:
        reconciliation_service.unmark_month("Nobody", "JAN25")
    assert "Nobody" in str(exc_info.value)


def test_list_entries(reconciliation_service, tracked):
    tracked.add_discount_entry("Beta Trading")
    names = [e.customer_name for e in reconciliation_service.list_entries()]
    assert sorted(names) == ["Acme Co", "Beta Trading"]


def test_stored_bare_months_use_service_year(temp_db):
    temp_db.add_discount_entry("Acme Co", "MAR")
    service = ReconciliationService(temp_db, today=date(2019, 6, 1))

    (entry,) = service.list_entries()
    assert entry.reconciliation_months == ("2019-03",)
    assert service.mark_month("Acme Co", "APR") == ["2019-03", "2019-04"]
    assert temp_db.get_discount_entry("Acme Co", 2019).reconciliation_months == ("2019-03", "2019-04")
