"""Financial health command."""

import click
from finmetrics.cli.date_filters import period_options, pop_period_flags, require_cli_date_range
from finmetrics.domain.health import calculate_financial_health_score
from finmetrics.domain.transaction import TransactionService
from finmetrics.utils.amount_parser import format_amount, format_percentage


@click.command("health")
@period_options
@click.pass_context
def health(ctx, start_date, end_date, **kwargs):
    """Show the composite financial health score."""
    start, end = require_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=pop_period_flags(kwargs),
    )
    transactions = TransactionService(ctx.obj["db"]).list_transactions()
    score = calculate_financial_health_score(transactions, start, end)

    click.echo(f"Financial health: {score.overall}/100 ({score.rating})")
    click.echo(f"  Net worth      {score.breakdown.net_worth:>3}/100  ({format_amount(score.net_worth)})")
    click.echo(f"  Savings rate   {score.breakdown.savings_rate:>3}/100  ({format_percentage(score.savings_rate)})")
    click.echo(
        f"  Debt ratio     {score.breakdown.debt_ratio:>3}/100  "
        f"({format_percentage(score.debt_to_income_ratio)} of income)"
    )
    click.echo()
    click.echo("Recommendations:")
    for recommendation in score.recommendations:
        click.echo(f"  - {recommendation}")


def register_commands(cli):
    """Register health command with main CLI."""
    cli.add_command(health)
