"""Tests for month key parsing and formatting."""

import pytest

from ledgerdesk.utils.month_keys import (
    format_month_cell,
    format_month_token,
    normalize_month_key,
    normalize_month_token,
    parse_month_cell,
)


@pytest.mark.parametrize("token", ["JAN25", "jan2025", "JAN-25", "JAN/25", " Jan25 "])
def test_month_token_spellings(token):
    assert normalize_month_token(token) == "2025-01"


@pytest.mark.parametrize("token", ["", "XYZ25", "JAN", "JAN5", "2025-01"])
def test_invalid_month_tokens(token):
    assert normalize_month_token(token) is None


def test_month_key_accepts_keys_tokens_and_bare_months():
    assert normalize_month_key("2024-11", 2025) == "2024-11"
    assert normalize_month_key("SEP24", 2025) == "2024-09"
    assert normalize_month_key("mar", 2025) == "2025-03"


def test_month_key_rejects_out_of_range_month():
    assert normalize_month_key("2025-13", 2025) is None
    assert normalize_month_key("garbage", 2025) is None


def test_format_month_token():
    assert format_month_token("2025-09") == "SEP25"
    assert format_month_token("2024-12") == "DEC24"


def test_parse_month_cell_mixed_separators():
    cell = "FEB25; JAN25,JAN25  MAR  junk"
    assert parse_month_cell(cell, 2025) == ["2025-01", "2025-02", "2025-03"]
    assert parse_month_cell(None, 2025) == []


def test_format_month_cell_sorted():
    assert format_month_cell({"2025-02", "2024-12"}) == "DEC24, FEB25"
    assert format_month_cell([]) == ""
