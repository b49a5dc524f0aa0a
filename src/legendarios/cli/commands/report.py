"""Monthly financial report command."""

import click
from legendarios.cli.date_filters import resolve_cli_period
from legendarios.domain.finance import FinanceService
from legendarios.domain.report import report_filename, report_rows, write_report_csv
from legendarios.utils.amount_parser import format_brl
from legendarios.utils.date_parser import current_period, previous_period


@click.command("report")
@click.option("--month", type=int, help="Report month 1-12 (defaults to current month)")
@click.option("--year", type=int, help="Report year (defaults to current year)")
@click.option("--last-month", is_flag=True, help="Report on the previous month")
@click.option(
    "--csv",
    "csv_path",
    type=click.Path(dir_okay=False, writable=True),
    help="Write the report to a CSV file ('-' for the default file name)",
)
@click.pass_context
def report(ctx, month: int | None, year: int | None, last_month: bool, csv_path: str | None):
    """Preview or export the monthly financial report.

    Examples:
        legendarios report --month 3 --year 2024
        legendarios report --last-month --csv -
    """
    db = ctx.obj["db"]

    if last_month:
        if month is not None or year is not None:
            click.echo("Error: --last-month cannot be combined with --month or --year", err=True)
            ctx.exit(1)
        month, year = previous_period(*current_period())

    month, year = resolve_cli_period(ctx, month=month, year=year)
    financial_report = FinanceService(db).report(month, year)
    totals = financial_report.totals

    if csv_path:
        path = report_filename(financial_report) if csv_path == "-" else csv_path
        with open(path, "w", newline="", encoding="utf-8") as f:
            count = write_report_csv(financial_report, f)
        click.echo(f"Wrote {count} entries to {path}")
        return

    click.echo(f"\nRelatório financeiro - {financial_report.month_label}/{financial_report.year}")
    rows = report_rows(financial_report)
    if rows:
        click.echo("-" * 100)
        click.echo(f"{'Data':<12} {'Descrição':<44} {'Categoria':<16} {'Tipo':<8} {'Valor':>14}")
        click.echo("-" * 100)
        for row in rows:
            click.echo(
                f"{row.date:<12} {row.description[:44]:<44} {row.category[:16]:<16} "
                f"{row.type_label:<8} {row.amount:>14}"
            )
        click.echo("-" * 100)
    else:
        click.echo("No entries in this period.")

    click.echo(f"{'Income':<12} {format_brl(totals.income):>16}")
    click.echo(f"{'Expense':<12} {format_brl(totals.expense):>16}")
    click.echo(f"{'Balance':<12} {format_brl(totals.balance):>16}")


def register_commands(cli):
    """Register report command with main CLI."""
    cli.add_command(report)
