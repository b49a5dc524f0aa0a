"""Cash book commands: manual transactions and the merged ledger."""

import click
from legendarios.cli.date_filters import parse_amount_option, parse_date_option
from legendarios.cli.error_handling import handle_domain_error
from legendarios.cli.member_resolution import resolve_member_or_exit
from legendarios.domain.entities import SourceKind, TransactionType
from legendarios.domain.errors import DomainError
from legendarios.domain.finance import FinanceService
from legendarios.domain.ledger import LedgerService
from legendarios.domain.member import MemberService
from legendarios.domain.transaction import TransactionService
from legendarios.utils.amount_parser import format_brl

TYPE_CHOICES = [t.value for t in TransactionType]


@click.group()
def cashbook_group():
    """Manage the cash book."""
    pass


@cashbook_group.command("add")
@click.option("--type", "type_", type=click.Choice(TYPE_CHOICES), required=True, help="income or expense")
@click.option("--description", "-d", required=True, help="What the money was for")
@click.option("--amount", "-a", required=True, help="Amount (e.g. 150,00 or 150.00)")
@click.option("--date", "date_str", help="Transaction date (defaults to today)")
@click.option("--category", "-c", help="Category (defaults to Geral)")
@click.option("--member", "member_ref", help="Related member ID or legendary number")
@click.pass_context
def add_transaction(
    ctx,
    type_: str,
    description: str,
    amount: str,
    date_str: str | None,
    category: str | None,
    member_ref: str | None,
):
    """Add a manual income or expense.

    Examples:
        legendarios cashbook add --type income -d "Doação" -a 200
        legendarios cashbook add --type expense -d "Aluguel do espaço" -a 350,00 --date 2024-03-05
    """
    db = ctx.obj["db"]
    amount_value = parse_amount_option(ctx, amount)
    txn_date = parse_date_option(ctx, date_str)

    member_id = None
    if member_ref:
        member_id = resolve_member_or_exit(ctx, MemberService(db), member_ref).id

    try:
        txn = TransactionService(db).create_transaction(
            description=description,
            amount=amount_value,
            type=type_,
            transaction_date=txn_date,
            category=category,
            member_id=member_id,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transaction {txn.id}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  {txn.type.label}: {format_brl(txn.amount)}")
    click.echo(f"  Description: {txn.description}")
    click.echo(f"  Category: {txn.category}")


@cashbook_group.command("edit")
@click.argument("entry_id")
@click.option("--description", "-d", help="New description")
@click.option("--amount", "-a", help="New amount")
@click.option("--date", "date_str", help="New date")
@click.option("--category", "-c", help="New category")
@click.option("--type", "type_", type=click.Choice(TYPE_CHOICES), help="New type")
@click.pass_context
def edit_entry(
    ctx,
    entry_id: str,
    description: str | None,
    amount: str | None,
    date_str: str | None,
    category: str | None,
    type_: str | None,
):
    """Edit a cash-book entry.

    ENTRY_ID is the entry id shown by 'cashbook view' or the id of the
    underlying dues payment or transaction. Dues entries only accept
    --amount and --date.
    """
    db = ctx.obj["db"]
    service = LedgerService(db)

    try:
        entry = service.find_entry(entry_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if entry.source_kind is SourceKind.DUES and any(v is not None for v in (description, category, type_)):
        click.echo(
            "Error: Dues entries only accept --amount and --date; "
            "description, category and type are derived",
            err=True,
        )
        ctx.exit(1)

    amount_value = parse_amount_option(ctx, amount)
    entry_date = parse_date_option(ctx, date_str)
    if all(v is None for v in (description, amount_value, entry_date, category, type_)):
        click.echo("Nothing to update.")
        return

    try:
        service.update_entry(
            entry,
            amount=amount_value,
            entry_date=entry_date,
            description=description,
            category=category,
            type=TransactionType(type_) if type_ else None,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated entry {entry.id}")


@cashbook_group.command("delete")
@click.argument("entry_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_entry(ctx, entry_id: str, yes: bool):
    """Delete a cash-book entry and the record behind it."""
    db = ctx.obj["db"]
    service = LedgerService(db)

    try:
        entry = service.find_entry(entry_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(f"Delete '{entry.description}'?"):
        click.echo("Aborted.")
        return

    try:
        service.delete_entry(entry)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted entry {entry.id}")


@cashbook_group.command("view")
@click.option("--limit", "-n", type=int, help="Show only the most recent N entries")
@click.pass_context
def view_cashbook(ctx, limit: int | None):
    """Show the cash book, newest first, with all-time totals."""
    db = ctx.obj["db"]
    finance = FinanceService(db)

    entries = finance.ledger()
    totals = finance.cash_totals()

    click.echo(f"\nTotal income:  {format_brl(totals.income)}")
    click.echo(f"Total expense: {format_brl(totals.expense)}")
    click.echo(f"Balance:       {format_brl(totals.balance)}")

    if not entries:
        click.echo("\nNo entries in the cash book.")
        return

    if limit:
        entries = entries[:limit]

    click.echo("")
    click.echo("-" * 110)
    click.echo(f"{'Date':<12} {'Description':<44} {'Category':<16} {'Type':<8} {'Amount':>14} ID")
    click.echo("-" * 110)
    for entry in entries:
        click.echo(
            f"{str(entry.date):<12} {entry.description[:44]:<44} {entry.category[:16]:<16} "
            f"{entry.type.label:<8} {format_brl(entry.amount):>14} {entry.id}"
        )


def register_commands(cli):
    """Register cash book commands with main CLI."""
    cli.add_command(cashbook_group, name="cashbook")
