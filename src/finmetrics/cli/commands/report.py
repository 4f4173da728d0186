"""Income, expense and savings report commands."""

from decimal import Decimal

import click
from finmetrics.cli.date_filters import period_options, pop_period_flags, require_cli_date_range
from finmetrics.domain.reports import (
    calculate_expenses_data,
    calculate_income_data,
    calculate_savings_rate_data,
)
from finmetrics.domain.transaction import TransactionService
from finmetrics.utils.amount_parser import format_amount, format_percentage


def _load(ctx, start_date, end_date, kwargs):
    start, end = require_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=pop_period_flags(kwargs),
    )
    transactions = TransactionService(ctx.obj["db"]).list_transactions()
    click.echo(f"Period: {start} to {end}")
    click.echo()
    return transactions, start, end


def _line(label: str, value: str) -> None:
    click.echo(f"{label:<28} {value:>16}")


@click.group("report")
def report_group():
    """Income, expense and savings reports."""
    pass


@report_group.command("income")
@period_options
@click.pass_context
def income_report(ctx, start_date, end_date, **kwargs):
    """Summarize income for a period (defaults to this month)."""
    transactions, start, end = _load(ctx, start_date, end_date, kwargs)
    data = calculate_income_data(transactions, start, end, previous_transactions=transactions)

    _line("Total income", format_amount(data.total_income))
    _line("Monthly (30-day)", format_amount(data.monthly_income))
    _line("Daily average", format_amount(data.average_daily_income))
    _line("Projected annual", format_amount(data.projected_annual_income))
    _line("Previous period", format_amount(data.previous_period_income))
    _line("Growth", format_percentage(data.growth_percentage))
    _line("Stable", "yes" if data.is_income_stable else "no")
    _line("Consistency", f"{data.income_consistency}/100")

    if data.income_by_category:
        click.echo()
        click.echo("By category:")
        for category, amount in sorted(data.income_by_category.items(), key=lambda item: -item[1]):
            _line(f"  {category}", format_amount(amount))


@report_group.command("expenses")
@period_options
@click.pass_context
def expenses_report(ctx, start_date, end_date, **kwargs):
    """Summarize expenses for a period (defaults to this month)."""
    transactions, start, end = _load(ctx, start_date, end_date, kwargs)
    data = calculate_expenses_data(transactions, start, end, previous_transactions=transactions)

    _line("Total expenses", format_amount(data.total_expenses))
    _line("Monthly (30-day)", format_amount(data.monthly_expenses))
    _line("Daily average", format_amount(data.average_daily_expenses))
    _line("Projected annual", format_amount(data.projected_annual_expenses))
    _line("Average transaction", format_amount(data.average_transaction_size))
    _line("Growth", format_percentage(data.growth_percentage))
    if data.largest_category:
        _line("Largest category", data.largest_category)

    breakdown = data.expenses_by_type
    click.echo()
    click.echo("By type:")
    _line("  essential", format_amount(breakdown.essential))
    _line("  fixed", format_amount(breakdown.fixed))
    _line("  variable", format_amount(breakdown.variable))
    _line("  discretionary", format_amount(breakdown.discretionary))

    if data.expenses_by_category:
        click.echo()
        click.echo("By category:")
        for category, amount in sorted(data.expenses_by_category.items(), key=lambda item: -item[1]):
            _line(f"  {category}", format_amount(amount))


@report_group.command("savings")
@period_options
@click.option("--target", type=float, default=20.0, show_default=True, help="Target savings rate in percent")
@click.pass_context
def savings_report(ctx, start_date, end_date, target, **kwargs):
    """Show the savings rate for a period (defaults to this month)."""
    transactions, start, end = _load(ctx, start_date, end_date, kwargs)
    data = calculate_savings_rate_data(
        transactions,
        start,
        end,
        previous_transactions=transactions,
        target_rate=Decimal(str(target)),
    )

    _line("Savings rate", format_percentage(data.savings_rate))
    _line("Income", format_amount(data.total_income))
    _line("Expenses", format_amount(data.total_expenses))
    _line("Net cash flow", format_amount(data.net_cash_flow))
    _line("Saved to accounts", format_amount(data.total_savings))
    _line("Monthly savings (30-day)", format_amount(data.monthly_savings))
    _line("Projected annual", format_amount(data.projected_annual_savings))
    _line("Change vs previous", format_percentage(data.savings_rate_change))
    _line("Target progress", format_percentage(data.target_progress))
    _line("Savings streak", f"{data.savings_streak} months")


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group)
