"""CLI helpers for dates, amounts and report periods."""

from datetime import date
from decimal import Decimal

import click

from legendarios.domain.errors import InvalidPeriodError, validate_period
from legendarios.utils.amount_parser import parse_amount
from legendarios.utils.date_parser import current_period, parse_date


def parse_date_option(ctx, value: str | None, label: str = "date") -> date | None:
    """Parse an optional date option, or exit with a CLI error."""
    if not value:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def parse_amount_option(ctx, value: str | None) -> Decimal | None:
    """Parse an optional amount option, or exit with a CLI error."""
    if value is None:
        return None
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)


def resolve_cli_period(
    ctx,
    *,
    month: int | None,
    year: int | None,
    today: date | None = None,
) -> tuple[int, int]:
    """Resolve a (month, year) pair, defaulting each part to today's."""
    default_month, default_year = current_period(today)
    month = default_month if month is None else month
    year = default_year if year is None else year
    try:
        return validate_period(month, year)
    except InvalidPeriodError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
