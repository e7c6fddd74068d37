"""Tests for date parsing."""

import pytest
from datetime import date, timedelta
from ledgerdesk.utils.date_parser import days_between, parse_date, parse_ledger_date


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    assert parse_date("2024-01-15") == date(2024, 1, 15)


def test_parse_today():
    """Test parsing 'today'."""
    assert parse_date("today") == date.today()


def test_parse_yesterday():
    """Test parsing 'yesterday'."""
    assert parse_date(" Yesterday ") == date.today() - timedelta(days=1)


def test_parse_invalid_raises():
    """Test strict parsing rejects garbage."""
    with pytest.raises(ValueError):
        parse_date("not a date")


def test_ledger_date_day_first_and_iso_agree():
    """Day-first and ISO spellings land on the same calendar date."""
    assert parse_ledger_date("15/03/2024") == date(2024, 3, 15)
    assert parse_ledger_date("2024-03-15") == date(2024, 3, 15)
    assert parse_ledger_date("15/03/2024") == parse_ledger_date("2024-03-15")


def test_ledger_date_ambiguous_reads_month_first():
    """Both parts at most 12: native parsing reads month first."""
    assert parse_ledger_date("03/04/2024") == date(2024, 3, 4)


def test_ledger_date_is_deterministic():
    """The same input always parses to the same date."""
    results = {parse_ledger_date("05/06/2023") for _ in range(5)}
    assert len(results) == 1


def test_ledger_date_dash_separated_day_first():
    assert parse_ledger_date("31-12-2024") == date(2024, 12, 31)


def test_ledger_date_year_only_defaults_to_january_first():
    assert parse_ledger_date("2024") == date(2024, 1, 1)


@pytest.mark.parametrize(
    "raw",
    [None, "", "   ", "not a date", "32/13/2024", "2021-13-45", "3", "March 15", "31/04/2024"],
)
def test_ledger_date_unparseable_returns_none(raw):
    """Unparseable input never raises."""
    assert parse_ledger_date(raw) is None


def test_days_between():
    assert days_between(date(2024, 6, 1), date(2024, 6, 30)) == 29
    assert days_between(date(2024, 6, 30), date(2024, 6, 30)) == 0
