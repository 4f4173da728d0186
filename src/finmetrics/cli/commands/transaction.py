"""Transaction commands."""

import click
from finmetrics.cli.date_filters import period_options, pop_period_flags, resolve_cli_date_range
from finmetrics.cli.error_handling import handle_domain_error
from finmetrics.domain.categories import map_category_to_budget_type
from finmetrics.domain.entities import TransactionType
from finmetrics.domain.transaction import TransactionService
from finmetrics.utils.amount_parser import format_amount, parse_amount
from finmetrics.utils.date_parser import parse_date

TRANSACTION_TYPES = [t.value for t in TransactionType]


@click.command("add")
@click.argument("type", type=click.Choice(TRANSACTION_TYPES, case_sensitive=False))
@click.argument("amount")
@click.option("--category", required=True, help="Category key (e.g. 'rent', 'salary', 'emergency-fund')")
@click.option(
    "--date",
    default="today",
    show_default=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--description", help="Transaction description")
@click.option("--currency", default="USD", show_default=True, help="Currency code")
@click.option("--recurring", is_flag=True, help="Mark the transaction as recurring")
@click.pass_context
def add_transaction(
    ctx,
    type: str,
    amount: str,
    category: str,
    date: str,
    description: str | None,
    currency: str,
    recurring: bool,
):
    """Record a transaction.

    TYPE is one of income, expense, asset or liability. AMOUNT is a positive
    number; the type gives its direction.

    Examples:
        finmetrics add income 5000 --category salary --recurring
        finmetrics add expense 1200 --category rent --date 2024-01-03
        finmetrics add asset 2500 --category emergency-fund
    """
    service = TransactionService(ctx.obj["db"])

    try:
        txn_date = parse_date(date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        transaction_id = service.create_transaction(
            type=type.lower(),
            amount=txn_amount,
            category=category,
            date=txn_date,
            description=description,
            currency=currency,
            is_recurring=recurring,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Type: {type.lower()}")
    click.echo(f"  Date: {txn_date}")
    click.echo(f"  Amount: {format_amount(txn_amount)} {currency.upper()}")
    click.echo(f"  Category: {category.lower()} ({map_category_to_budget_type(category)})")
    if description:
        click.echo(f"  Description: {description}")


@click.group("transaction")
def transaction_group():
    """Inspect and manage recorded transactions."""
    pass


@transaction_group.command("list")
@period_options
@click.option(
    "--type",
    "transaction_type",
    type=click.Choice(TRANSACTION_TYPES, case_sensitive=False),
    help="Only show this transaction type",
)
@click.option("--category", help="Only show this category key")
@click.pass_context
def list_transactions(ctx, start_date, end_date, transaction_type, category, **kwargs):
    """List transactions, oldest first."""
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=pop_period_flags(kwargs),
    )
    service = TransactionService(ctx.obj["db"])
    transactions = service.list_transactions(
        start_date=start,
        end_date=end,
        transaction_type=transaction_type.lower() if transaction_type else None,
        category=category,
    )

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"{'ID':<6} {'Date':<12} {'Type':<10} {'Category':<22} {'Amount':>14}  Description")
    click.echo("-" * 80)
    for txn in transactions:
        click.echo(
            f"{txn.id:<6} {txn.date.isoformat():<12} {txn.type.value:<10} {txn.category:<22} "
            f"{format_amount(txn.amount):>14}  {txn.description}"
        )
    click.echo(f"\n{len(transactions)} transaction{'s' if len(transactions) != 1 else ''}")


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.confirmation_option(prompt="Delete this transaction?")
@click.pass_context
def delete_transaction(ctx, transaction_id: int):
    """Delete a transaction by ID."""
    service = TransactionService(ctx.obj["db"])
    try:
        service.delete_transaction(transaction_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(add_transaction)
    cli.add_command(transaction_group)
