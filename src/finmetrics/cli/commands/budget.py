"""Budget commands."""

import click
from finmetrics.cli.error_handling import handle_domain_error
from finmetrics.domain.budget import validate_budget_method
from finmetrics.domain.budget_service import BudgetService
from finmetrics.domain.entities import BudgetFrequency, BudgetMethodType
from finmetrics.utils.amount_parser import format_amount, parse_allocation, parse_amount
from finmetrics.utils.date_parser import parse_date


@click.group("budget")
def budget_group():
    """Create budgets and track spending against them."""
    pass


@budget_group.command("create")
@click.option(
    "--method",
    type=click.Choice([m.value for m in BudgetMethodType], case_sensitive=False),
    default=BudgetMethodType.FIFTY_THIRTY_TWENTY.value,
    show_default=True,
    help="Budget method",
)
@click.option("--income", required=True, help="Income to allocate for the period")
@click.option(
    "--frequency",
    type=click.Choice([f.value for f in BudgetFrequency], case_sensitive=False),
    default=BudgetFrequency.MONTHLY.value,
    show_default=True,
    help="Budget period length",
)
@click.option("--start-date", help="First day of the period (defaults to today)")
@click.option(
    "--allocation",
    "allocations",
    multiple=True,
    help="Custom allocation as category=amount (repeatable, custom method only)",
)
@click.option("--name", help="Budget name")
@click.option(
    "--rollover",
    "allow_rollover",
    is_flag=True,
    help="Carry unspent category balances into the next period",
)
@click.pass_context
def create_budget(ctx, method, income, frequency, start_date, allocations, name, allow_rollover):
    """Create a budget and make it the active one.

    Examples:
        finmetrics budget create --income 5000
        finmetrics budget create --income 5000 --rollover
        finmetrics budget create --method custom --income 3000 --allocation rent=1200 --allocation food=500
    """
    service = BudgetService(ctx.obj["db"])

    try:
        budget_income = parse_amount(income)
        start = parse_date(start_date) if start_date else None
        parsed_allocations = dict(parse_allocation(pair) for pair in allocations)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if parsed_allocations and method.lower() != BudgetMethodType.CUSTOM.value:
        click.echo("Error: --allocation can only be used with --method custom", err=True)
        ctx.exit(1)

    try:
        budget_id = service.create_budget(
            method=method.lower(),
            income=budget_income,
            frequency=frequency.lower(),
            start_date=start,
            allocations=parsed_allocations,
            name=name,
            allow_rollover=allow_rollover,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    budget = service.get_budget(budget_id)
    click.echo(f"Created budget {budget_id}: {budget.name}")
    click.echo(f"  Period: {budget.period.start_date} to {budget.period.end_date}")
    for category in budget.categories:
        click.echo(f"  {category.name:<20} {format_amount(category.allocated):>14}")


@budget_group.command("list")
@click.pass_context
def list_budgets(ctx):
    """List stored budgets, newest first."""
    service = BudgetService(ctx.obj["db"])
    budgets = service.list_budgets()
    if not budgets:
        click.echo("No budgets found.")
        return
    for budget in budgets:
        marker = "*" if budget.is_active else " "
        total = sum(c.allocated for c in budget.categories)
        click.echo(
            f"{marker} {budget.id:<4} {budget.name:<24} {budget.period.start_date} - "
            f"{budget.period.end_date}  {format_amount(total):>14}"
        )


@budget_group.command("status")
@click.pass_context
def budget_status(ctx):
    """Show spending against the active budget."""
    service = BudgetService(ctx.obj["db"])
    data = service.evaluate(service.get_active_budget())

    if data.current_budget is None:
        click.echo("No active budget.")
        click.echo(f"Health: {data.budget_health.score}/100 ({data.budget_health.status})")
        for suggestion in data.budget_health.suggestions:
            click.echo(f"  - {suggestion}")
        return

    budget = data.current_budget
    click.echo(f"{budget.name} ({budget.period.start_date} to {budget.period.end_date})")
    click.echo()
    click.echo(f"{'Category':<20} {'Available':>14} {'Spent':>14} {'Remaining':>14}")
    click.echo("-" * 64)
    for category in budget.categories:
        flag = " !" if category.is_over_budget else ""
        click.echo(
            f"{category.name:<20} {format_amount(category.available):>14} "
            f"{format_amount(category.spent):>14} {format_amount(category.remaining):>14}{flag}"
        )
    click.echo("-" * 64)
    click.echo(f"{'Income':<20} {format_amount(data.total_income):>14}")
    click.echo(f"{'Allocated':<20} {format_amount(data.total_allocated):>14}")
    click.echo(f"{'Spent':<20} {format_amount(data.total_spent):>14}")
    click.echo(f"{'Unallocated':<20} {format_amount(data.unallocated_amount):>14}")
    click.echo(f"{'Cash at hand':<20} {format_amount(data.cash_at_hand):>14}")
    click.echo()
    click.echo(f"Health: {data.budget_health.score}/100 ({data.budget_health.status})")
    for suggestion in data.budget_health.suggestions:
        click.echo(f"  - {suggestion}")

    is_valid, message = validate_budget_method(budget, data.total_income)
    if not is_valid and data.total_income > 0:
        click.echo(f"  - {message}")

    if data.alerts:
        click.echo()
        click.echo("Alerts:")
        for alert in data.alerts:
            click.echo(f"  [{alert.severity}] {alert.message}")


@budget_group.command("rollover")
@click.option("--date", "as_of", help="Reference date (defaults to today)")
@click.pass_context
def rollover(ctx, as_of):
    """Start the next period once the active budget has ended."""
    service = BudgetService(ctx.obj["db"])
    try:
        current_date = parse_date(as_of) if as_of else None
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    budget_id = service.roll_over_if_due(current_date)
    if budget_id is None:
        click.echo("Active budget period has not ended; nothing to roll over.")
        return
    budget = service.get_budget(budget_id)
    click.echo(f"Started budget {budget_id}: {budget.period.start_date} to {budget.period.end_date}")
    for category in budget.categories:
        if category.rollover_amount > 0:
            click.echo(
                f"  {category.name:<20} carried over {format_amount(category.rollover_amount):>14}"
            )


def register_commands(cli):
    """Register budget commands with main CLI."""
    cli.add_command(budget_group)
