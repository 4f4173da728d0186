"""Tests for CLI date filter helpers."""

from datetime import date

import click
import pytest
from click.testing import CliRunner

from finmetrics.cli.date_filters import (
    period_options,
    pop_period_flags,
    require_cli_date_range,
    resolve_cli_date_range,
)
from finmetrics.utils.date_parser import PERIODS, get_date_range


def _ctx() -> click.Context:
    return click.Context(click.Command("report"))


def _fail(capsys, **kwargs) -> str:
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(_ctx(), **kwargs)
    assert excinfo.value.exit_code == 1
    return capsys.readouterr().err


def test_two_periods_are_rejected(capsys):
    err = _fail(
        capsys,
        start_date=None,
        end_date=None,
        period_flags={"last-month": True, "this-year": True},
    )
    assert "Only one period option" in err


def test_period_and_explicit_dates_are_rejected(capsys):
    err = _fail(
        capsys,
        start_date=None,
        end_date="2024-03-31",
        period_flags={"this-quarter": True},
    )
    assert "cannot be combined" in err


def test_unparseable_dates_are_reported(capsys):
    err = _fail(capsys, start_date="2024-01-01", end_date="not-a-date", period_flags={})
    assert "Invalid end date" in err


def test_named_period_wins():
    start, end = resolve_cli_date_range(
        _ctx(),
        start_date=None,
        end_date=None,
        period_flags={"last-year": True, "this-week": False},
    )
    assert (start, end) == get_date_range("last-year")


def test_explicit_dates_accept_relative_forms():
    start, end = resolve_cli_date_range(
        _ctx(),
        start_date="2024-01-01",
        end_date="today",
        period_flags={},
    )
    assert start == date(2024, 1, 1)
    assert end == date.today()


def test_default_range_only_applies_without_dates():
    fallback = (date(2023, 6, 1), date(2023, 6, 30))

    assert resolve_cli_date_range(
        _ctx(), start_date=None, end_date=None, period_flags={}, default_range=fallback
    ) == fallback
    assert resolve_cli_date_range(
        _ctx(), start_date="2024-02-01", end_date=None, period_flags={}, default_range=fallback
    ) == (date(2024, 2, 1), None)


def test_open_range_without_default():
    assert resolve_cli_date_range(_ctx(), start_date=None, end_date=None, period_flags={}) == (
        None,
        None,
    )


def test_require_range_defaults_to_this_month():
    assert require_cli_date_range(
        _ctx(), start_date=None, end_date=None, period_flags={}
    ) == get_date_range("this-month")


def test_require_range_starts_at_month_of_end_date():
    start, end = require_cli_date_range(
        _ctx(), start_date=None, end_date="2024-03-20", period_flags={}
    )
    assert (start, end) == (date(2024, 3, 1), date(2024, 3, 20))


def test_require_range_rejects_reversed_dates(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        require_cli_date_range(
            _ctx(), start_date="2024-02-01", end_date="2024-01-01", period_flags={}
        )
    assert excinfo.value.exit_code == 1
    assert "is after end date" in capsys.readouterr().err


def test_pop_period_flags_leaves_other_options():
    kwargs = {"last_month": True, "this_week": False, "target": 20.0}

    flags = pop_period_flags(kwargs)

    assert flags["last-month"] is True
    assert set(flags) == set(PERIODS)
    assert kwargs == {"target": 20.0}


def test_period_options_adds_one_flag_per_period():
    seen = {}

    @click.command()
    @period_options
    def command(start_date, end_date, **kwargs):
        seen["flags"] = pop_period_flags(kwargs)
        seen["dates"] = (start_date, end_date)

    result = CliRunner().invoke(command, ["--this-quarter"])

    assert result.exit_code == 0
    assert seen["dates"] == (None, None)
    assert [p for p, is_set in seen["flags"].items() if is_set] == ["this-quarter"]
