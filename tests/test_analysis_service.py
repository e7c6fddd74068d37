"""Domain tests for analysis and closed customer services."""

import pytest

from ledgerdesk.domain.entities import DebtRating
from ledgerdesk.domain.errors import ConflictError, NotFoundError, ValidationError


def test_customer_report_rates_everyone(analysis_service, sample_ledger, as_of):
    rated = analysis_service.customer_report(as_of)

    assert [rc.customer.customer_name for rc in rated] == ["Beta Trading", "Acme Co"]
    assert [rc.rating for rc in rated] == [DebtRating.BAD, DebtRating.GOOD]


def test_customer_report_filters(analysis_service, sample_ledger, as_of):
    good = analysis_service.customer_report(as_of, rating=DebtRating.GOOD)
    assert [rc.customer.customer_name for rc in good] == ["Acme Co"]

    found = analysis_service.customer_report(as_of, search=" BETA ")
    assert [rc.customer.customer_name for rc in found] == ["Beta Trading"]

    by_name = analysis_service.customer_report(as_of, sort_by="name")
    assert [rc.customer.customer_name for rc in by_name] == ["Acme Co", "Beta Trading"]


def test_customer_detail(analysis_service, sample_ledger, as_of):
    detail = analysis_service.customer_detail("Acme Co", as_of)

    assert len(detail.rows) == 3
    assert detail.rated.customer.sales_reps == {"Omar", "Sara"}
    assert detail.rated.breakdown.total_score == 8
    assert detail.rated.rating is DebtRating.GOOD


def test_customer_detail_requires_exact_name(analysis_service, sample_ledger, as_of):
    with pytest.raises(NotFoundError):
        analysis_service.customer_detail("acme co", as_of)


def test_closed_customer_rated_bad(
    analysis_service, closed_customer_service, sample_ledger, as_of
):
    closed_customer_service.close_customer("  ACME CO ")

    rated = {rc.customer.customer_name: rc for rc in analysis_service.customer_report(as_of)}
    assert rated["Acme Co"].rating is DebtRating.BAD
    assert rated["Acme Co"].breakdown.closed


def test_close_customer_rejects_duplicates_and_blanks(closed_customer_service):
    closed_customer_service.close_customer("Acme Co")

    with pytest.raises(ConflictError):
        closed_customer_service.close_customer("acme  co")
    with pytest.raises(ValidationError):
        closed_customer_service.close_customer("   ")
    assert closed_customer_service.list_closed() == ["Acme Co"]
    assert closed_customer_service.closed_set() == frozenset({"acme co"})


def test_rollup_reports(analysis_service, sample_ledger, as_of):
    reps = analysis_service.sales_rep_report(as_of)
    assert [r.sales_rep for r in reps] == ["Sara", "Omar"]
    assert [r.sales_rep for r in analysis_service.sales_rep_report(as_of, search="om")] == ["Omar"]

    assert [y.period for y in analysis_service.year_report(as_of)] == ["2023", "2024"]
    assert [m.period for m in analysis_service.month_report()] == ["2023-01", "2023-02", "2024-06"]


def test_person_ledgers(analysis_service, sample_products, sample_transfers):
    (ali,) = analysis_service.person_ledgers()

    salt = ali.products["123"]
    assert (salt.received, salt.distributed, salt.balance) == (50, 30, 20)
    assert ali.total_pcs == 44
    assert ali.product_count == 2
    assert ali.total_ctns == pytest.approx(20 / 24 + 24 / 10)


def test_person_detail(analysis_service, sample_products, sample_transfers):
    detail = analysis_service.person_detail(" Ali ")

    assert detail.ledger.name == "Ali"
    assert len(detail.transfers) == 4

    with pytest.raises(NotFoundError):
        analysis_service.person_detail("Nobody")


def test_stock_summary_and_next_number(analysis_service, sample_products, sample_transfers):
    summary = analysis_service.stock_summary()

    assert summary.total_items == 2
    assert summary.total_pcs == 450 + 76
    assert summary.total_ctns == pytest.approx(450 / 24 + 76 / 10)
    assert analysis_service.next_transfer_number() == "TRX-0005"
