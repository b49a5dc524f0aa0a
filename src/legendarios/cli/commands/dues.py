"""Monthly dues commands."""

import click
from legendarios.cli.date_filters import (
    parse_amount_option,
    parse_date_option,
    resolve_cli_period,
)
from legendarios.cli.error_handling import handle_domain_error
from legendarios.cli.member_resolution import resolve_member_or_exit
from legendarios.domain.aggregation import ZERO
from legendarios.domain.dues import DEFAULT_DUES_AMOUNT, DuesService
from legendarios.domain.entities import MONTHS, MemberStatus, month_name
from legendarios.domain.errors import DomainError
from legendarios.domain.member import MemberService
from legendarios.utils.amount_parser import format_brl


@click.group()
def dues_group():
    """Record and review monthly dues."""
    pass


@dues_group.command("pay")
@click.argument("member_ref", metavar="MEMBER")
@click.option("--month", type=int, help="Dues month 1-12 (defaults to current month)")
@click.option("--year", type=int, help="Dues year (defaults to current year)")
@click.option("--amount", default=str(DEFAULT_DUES_AMOUNT), show_default=True, help="Amount paid")
@click.option("--paid-date", help="Payment date (defaults to today)")
@click.pass_context
def pay_dues(ctx, member_ref: str, month: int | None, year: int | None, amount: str, paid_date: str | None):
    """Record a month's dues. MEMBER is an ID or legendary number.

    Examples:
        legendarios dues pay 1024
        legendarios dues pay 1024 --month 3 --year 2024 --amount 60,00
    """
    db = ctx.obj["db"]
    member = resolve_member_or_exit(ctx, MemberService(db), member_ref)
    month, year = resolve_cli_period(ctx, month=month, year=year)
    dues_amount = parse_amount_option(ctx, amount)
    paid_on = parse_date_option(ctx, paid_date, "paid date")

    try:
        payment = DuesService(db).record_payment(
            member_id=member.id,
            month=month,
            year=year,
            amount=dues_amount,
            paid_date=paid_on,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Recorded dues {payment.id}")
    click.echo(f"  Member: {member.full_name} (Nº {member.legendary_number})")
    click.echo(f"  Period: {month_name(payment.month)}/{payment.year}")
    click.echo(f"  Amount: {format_brl(payment.amount)}")
    click.echo(f"  Paid on: {payment.paid_date}")


@dues_group.command("remove")
@click.argument("payment_id")
@click.pass_context
def remove_dues(ctx, payment_id: str):
    """Delete a dues payment."""
    db = ctx.obj["db"]
    try:
        DuesService(db).delete_payment(payment_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted dues payment {payment_id}")


@dues_group.command("list")
@click.option("--year", type=int, help="Dues year (defaults to current year)")
@click.option("--member", "member_ref", help="Member ID or legendary number")
@click.option("--month", type=click.IntRange(1, 12), help="Dues month")
@click.pass_context
def list_dues(ctx, year: int | None, member_ref: str | None, month: int | None):
    """List a year's dues payments, latest month first."""
    db = ctx.obj["db"]
    member_service = MemberService(db)
    service = DuesService(db)
    _, year = resolve_cli_period(ctx, month=None, year=year)

    member_id = None
    if member_ref:
        member_id = resolve_member_or_exit(ctx, member_service, member_ref).id

    payments = service.list_payments(year, member_id=member_id, month=month)
    if not payments:
        click.echo("No dues payments found.")
        return

    names = {m.id: m.full_name for m in member_service.list_members()}
    click.echo(f"\nDues for {year}:")
    click.echo("-" * 90)
    click.echo(f"{'ID':<38} {'Member':<26} {'Month':<10} {'Paid on':<12} {'Amount':>12}")
    click.echo("-" * 90)
    for p in payments:
        click.echo(
            f"{p.id:<38} {names.get(p.member_id, 'Desconhecido')[:26]:<26} "
            f"{month_name(p.month):<10} {str(p.paid_date):<12} {format_brl(p.amount):>12}"
        )
    click.echo("-" * 90)
    total = sum((p.amount for p in payments), ZERO)
    click.echo(f"{'TOTAL':<88} {format_brl(total)}")


@dues_group.command("grid")
@click.option("--year", type=int, help="Dues year (defaults to current year)")
@click.option("--search", default="", help="Filter members by name")
@click.pass_context
def dues_grid(ctx, year: int | None, search: str):
    """Show who paid which month of a year."""
    db = ctx.obj["db"]
    service = DuesService(db)
    _, year = resolve_cli_period(ctx, month=None, year=year)

    members = [
        m
        for m in MemberService(db).list_members()
        if m.status is MemberStatus.ACTIVE_PAYING and search.lower() in m.full_name.lower()
    ]
    if not members:
        click.echo("No paying members found.")
        return

    header = " ".join(name[:3] for name in MONTHS)
    click.echo(f"\nDues grid {year}")
    click.echo(f"{'Member':<26} {header} {'Total':>12}")
    for member, paid in service.payment_grid(year, members):
        marks = " ".join(" x " if month in paid else " . " for month in range(1, 13))
        total = service.member_total(member.id, year)
        click.echo(f"{member.full_name[:26]:<26} {marks} {format_brl(total):>12}")

    monthly = " ".join(
        f"{int(service.monthly_total(month, year)):>3}" for month in range(1, 13)
    )
    click.echo(f"{'Month total':<26} {monthly} {format_brl(service.year_total(year)):>12}")


def register_commands(cli):
    """Register dues commands with main CLI."""
    cli.add_command(dues_group, name="dues")
