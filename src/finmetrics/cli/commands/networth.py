"""Net worth and savings goal commands."""

from decimal import Decimal

import click
from finmetrics.cli.error_handling import handle_domain_error
from finmetrics.domain.networth import (
    calculate_asset_allocation_percentages,
    calculate_net_worth,
)
from finmetrics.domain.savings_goals import calculate_savings_goals
from finmetrics.domain.transaction import TransactionService
from finmetrics.utils.amount_parser import format_amount, format_percentage, parse_amount
from finmetrics.utils.date_parser import parse_date


def _parse_common(ctx, as_of: str | None, monthly_expenses: str):
    try:
        as_of_date = parse_date(as_of) if as_of else None
        expenses = parse_amount(monthly_expenses)
    except ValueError as e:
        handle_domain_error(ctx, e)
    return as_of_date, expenses


def _echo_goals(goals) -> None:
    for goal in goals:
        status = "done" if goal.is_completed else format_percentage(goal.progress)
        click.echo(
            f"  {goal.name:<16} {format_amount(goal.current_amount):>14} of "
            f"{format_amount(goal.target_amount):>14}  ({status})"
        )


@click.command("networth")
@click.option("--as-of", help="Only count transactions up to this date")
@click.option(
    "--monthly-expenses",
    default="0",
    show_default=True,
    help="Monthly expenses, used for emergency fund coverage",
)
@click.pass_context
def networth(ctx, as_of, monthly_expenses):
    """Show assets, liabilities and net worth."""
    as_of_date, expenses = _parse_common(ctx, as_of, monthly_expenses)
    transactions = TransactionService(ctx.obj["db"]).list_transactions()
    data = calculate_net_worth(transactions, as_of_date=as_of_date, monthly_expenses=expenses)

    click.echo(f"{'Total assets':<24} {format_amount(data.total_assets):>14}")
    for category, amount in sorted(data.assets_by_category.items()):
        click.echo(f"  {category:<22} {format_amount(amount):>14}")
    click.echo(f"{'Total liabilities':<24} {format_amount(data.total_liabilities):>14}")
    for category, amount in sorted(data.liabilities_by_category.items()):
        click.echo(f"  {category:<22} {format_amount(amount):>14}")
    click.echo("-" * 39)
    click.echo(f"{'Net worth':<24} {format_amount(data.net_worth):>14}")

    if data.total_assets > 0:
        click.echo()
        click.echo("Asset allocation:")
        for group, share in calculate_asset_allocation_percentages(data).items():
            if share > 0:
                click.echo(f"  {group.replace('_', ' '):<22} {format_percentage(share):>14}")

    if expenses > Decimal("0"):
        fund = data.emergency_fund
        click.echo()
        click.echo(f"Emergency fund covers {fund.months_covered} months of expenses")
        click.echo(f"  {fund.recommendation}")


@click.command("goals")
@click.option("--as-of", help="Only count transactions up to this date")
@click.option(
    "--monthly-expenses",
    default="0",
    show_default=True,
    help="Monthly expenses, used for the emergency fund target",
)
@click.pass_context
def goals(ctx, as_of, monthly_expenses):
    """Show emergency fund and retirement goal progress."""
    as_of_date, expenses = _parse_common(ctx, as_of, monthly_expenses)
    transactions = TransactionService(ctx.obj["db"]).list_transactions()
    click.echo("Savings goals:")
    _echo_goals(calculate_savings_goals(transactions, as_of_date, expenses))


def register_commands(cli):
    """Register net worth commands with main CLI."""
    cli.add_command(networth)
    cli.add_command(goals)
