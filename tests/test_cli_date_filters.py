"""Tests for CLI as-of date helper."""

from datetime import date

import click
import pytest

from ledgerdesk.cli.date_filters import resolve_cli_as_of


def _ctx() -> click.Context:
    return click.Context(click.Command("test"))


def test_resolve_cli_as_of_defaults_to_today():
    assert resolve_cli_as_of(_ctx(), None) == date.today()


def test_resolve_cli_as_of_parses_date():
    assert resolve_cli_as_of(_ctx(), "2024-06-30") == date(2024, 6, 30)


def test_resolve_cli_as_of_rejects_invalid_date(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_as_of(_ctx(), "not-a-date")

    assert excinfo.value.exit_code == 1
    err = capsys.readouterr().err
    assert "Invalid as-of date" in err
