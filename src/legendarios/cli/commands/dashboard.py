"""Dashboard command."""

import click
from legendarios.cli.date_filters import parse_date_option
from legendarios.domain.finance import FinanceService
from legendarios.utils.amount_parser import format_brl


@click.command("dashboard")
@click.option("--date", "date_str", help="Show the month containing this date (defaults to today)")
@click.pass_context
def dashboard(ctx, date_str: str | None):
    """Show this month's balances, member counts and birthdays.

    Examples:
        legendarios dashboard
        legendarios dashboard --date 2024-03-15
    """
    db = ctx.obj["db"]
    finance = FinanceService(db)
    reference = parse_date_option(ctx, date_str)

    summary = finance.dashboard(reference)
    counts = finance.census()
    birthdays = finance.birthdays(summary.month)

    click.echo(f"\n{summary.month_label} de {summary.year}")
    click.echo("-" * 40)
    click.echo(f"{'Prior balance':<20} {format_brl(summary.prior_balance):>19}")
    click.echo(f"{'Income':<20} {format_brl(summary.period_income):>19}")
    click.echo(f"{'Expense':<20} {format_brl(summary.period_expense):>19}")
    click.echo("-" * 40)
    click.echo(f"{'Current balance':<20} {format_brl(summary.period_balance):>19}")

    click.echo("\nMembers")
    click.echo("-" * 40)
    click.echo(f"{'Paying':<20} {counts.paying:>19}")
    click.echo(f"{'Exempt':<20} {counts.exempt:>19}")
    click.echo(f"{'Inactive':<20} {counts.inactive:>19}")
    click.echo(f"{'Being helped':<20} {counts.being_helped:>19}")

    click.echo("\nAniversariantes do mês")
    click.echo("-" * 40)
    if not birthdays:
        click.echo("Nenhum aniversariante este mês.")
    for member in birthdays:
        day = f"{member.birth_date.day:02d}/{member.birth_date.month:02d}"
        click.echo(f"{day}  #{member.legendary_number} {member.full_name}  {member.phone}".rstrip())


def register_commands(cli):
    """Register dashboard command with main CLI."""
    cli.add_command(dashboard)
