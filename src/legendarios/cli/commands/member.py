"""Member management commands."""

import click
from legendarios.cli.date_filters import parse_date_option
from legendarios.cli.error_handling import handle_domain_error
from legendarios.cli.member_resolution import resolve_member_or_exit
from legendarios.domain.census import filter_members, professions
from legendarios.domain.entities import Child, Member, MemberStatus
from legendarios.domain.errors import DomainError
from legendarios.domain.member import MemberService
from legendarios.domain.roster import ROSTER_FILENAME, write_roster_csv

STATUS_CHOICES = [status.value for status in MemberStatus]

# (option flag, Member attribute, help)
TEXT_OPTIONS = (
    ("--profession", "profession", "Profession"),
    ("--address", "address", "Street address"),
    ("--neighborhood", "neighborhood", "Neighborhood"),
    ("--city", "city", "City"),
    ("--state", "state", "State"),
    ("--phone", "phone", "Phone"),
    ("--email", "email", "Email"),
    ("--top", "top_number", "TOP number of the conquest"),
    ("--track", "track_name", "Track where the conquest happened"),
    ("--spouse", "spouse_name", "Spouse name"),
    ("--spouse-phone", "spouse_phone", "Spouse phone"),
    ("--church", "church_name", "Church name"),
    ("--pastor", "pastor_name", "Pastor name"),
    ("--pastor-phone", "pastor_phone", "Pastor phone"),
    ("--notes", "socio_economic_notes", "Socio-economic notes"),
)

DATE_OPTIONS = (
    ("--birth-date", "birth_date", "Birth date (YYYY-MM-DD or DD/MM/YYYY)"),
    ("--conquest-date", "conquest_date", "Conquest date"),
)


def member_detail_options(func):
    """Attach the optional member detail options shared by add and edit."""
    for flag, attr, help_text in reversed(TEXT_OPTIONS + DATE_OPTIONS):
        func = click.option(flag, attr, default=None, help=help_text)(func)
    func = click.option(
        "--child", "children", multiple=True, help="Child as 'Name:age' (repeatable)"
    )(func)
    func = click.option(
        "--community-active/--community-inactive",
        "is_community_active",
        default=None,
        help="Whether the member is active in the community",
    )(func)
    func = click.option("--inactive-reason", help="Reason, required for inactive status")(func)
    func = click.option(
        "--status", type=click.Choice(STATUS_CHOICES), default=None, help="Membership status"
    )(func)
    return func


def parse_child(value: str) -> Child:
    """Parse 'Name:age' into a Child."""
    name, _, age = value.partition(":")
    return Child(name=name.strip(), age=age.strip())


def collect_details(ctx, options: dict) -> dict:
    """Turn parsed CLI options into Member field values, skipping unset ones."""
    details = {}
    for _, attr, _ in TEXT_OPTIONS:
        if options.get(attr) is not None:
            details[attr] = options[attr]
    for flag, attr, _ in DATE_OPTIONS:
        if options.get(attr):
            details[attr] = parse_date_option(ctx, options[attr], flag.lstrip("-").replace("-", " "))
    if options.get("children"):
        details["children"] = tuple(parse_child(c) for c in options["children"])
    if options.get("is_community_active") is not None:
        details["is_community_active"] = options["is_community_active"]
    if options.get("status") is not None:
        details["status"] = options["status"]
    if options.get("inactive_reason") is not None:
        details["inactive_reason"] = options["inactive_reason"]
    return details


def print_member(member: Member) -> None:
    """Print all details of a member."""
    click.echo(f"\n{member.full_name} (Nº {member.legendary_number})")
    click.echo(f"  ID: {member.id}")
    click.echo(f"  Status: {member.status.label}")
    if member.status is MemberStatus.INACTIVE:
        click.echo(f"  Reason: {member.inactive_reason}")
    if member.top_number or member.track_name:
        click.echo(
            f"  TOP: {member.top_number or '-'} | Track: {member.track_name or '-'}"
            f" | Conquest: {member.conquest_date or '-'}"
        )
    if member.profession:
        click.echo(f"  Profession: {member.profession}")
    if member.birth_date:
        click.echo(f"  Birth date: {member.birth_date}")
    location = ", ".join(
        part for part in (member.address, member.neighborhood, member.city, member.state) if part
    )
    if location:
        click.echo(f"  Address: {location}")
    if member.phone or member.email:
        click.echo(f"  Contact: {member.phone or '-'} {member.email or ''}".rstrip())
    if member.spouse_name:
        click.echo(f"  Spouse: {member.spouse_name} ({member.spouse_phone or '-'})")
    if member.children:
        children = ", ".join(f"{c.name} ({c.age})" if c.age else c.name for c in member.children)
        click.echo(f"  Children: {children}")
    if member.church_name:
        click.echo(f"  Church: {member.church_name} - Pr. {member.pastor_name or '-'}")
    click.echo(f"  Community: {'active' if member.is_community_active else 'inactive'}")
    if member.assistance_history:
        click.echo("  Assistance:")
        for record in member.assistance_history:
            end = record.end_date or "ongoing"
            click.echo(f"    [{record.id}] {record.description} ({record.start_date} - {end})")
    if member.socio_economic_notes:
        click.echo(f"  Notes: {member.socio_economic_notes}")


@click.group()
def member_group():
    """Manage legendários."""
    pass


@member_group.command("add")
@click.argument("legendary_number")
@click.argument("full_name")
@member_detail_options
@click.pass_context
def add_member(ctx, legendary_number: str, full_name: str, **options):
    """Register a new member.

    Examples:
        legendarios member add 1024 "João da Silva" --city Recife --profession Advogado
        legendarios member add 77 "Pedro Souza" --status inactive --inactive-reason "Mudou de cidade"
    """
    db = ctx.obj["db"]
    service = MemberService(db)
    details = collect_details(ctx, options)

    try:
        member = service.create_member(
            legendary_number=legendary_number, full_name=full_name, **details
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created member '{member.full_name}' (ID: {member.id})")


@member_group.command("edit")
@click.argument("member_ref", metavar="MEMBER")
@click.option("--number", "legendary_number", help="New legendary number")
@click.option("--name", "full_name", help="New full name")
@member_detail_options
@click.pass_context
def edit_member(ctx, member_ref: str, legendary_number: str | None, full_name: str | None, **options):
    """Edit a member. MEMBER is an ID or legendary number."""
    db = ctx.obj["db"]
    service = MemberService(db)
    member = resolve_member_or_exit(ctx, service, member_ref)

    changes = collect_details(ctx, options)
    if legendary_number is not None:
        changes["legendary_number"] = legendary_number.strip()
    if full_name is not None:
        changes["full_name"] = full_name.strip()
    if not changes:
        click.echo("Nothing to update.")
        return

    try:
        member = service.update_member(member.id, **changes)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated member '{member.full_name}'")


@member_group.command("list")
@click.option("--search", default="", help="Text in name, legendary number, city or neighborhood")
@click.option("--profession", default="", help="Exact profession")
@click.option(
    "--birth-month", type=click.IntRange(0, 12), default=0, help="Birth month (1-12)"
)
@click.pass_context
def list_members(ctx, search: str, profession: str, birth_month: int):
    """List members with optional filters."""
    db = ctx.obj["db"]
    service = MemberService(db)
    everyone = service.list_members()

    known_professions = professions(everyone)
    if profession and profession not in known_professions:
        known = ", ".join(known_professions) or "none"
        click.echo(f"No members with profession '{profession}'. Known professions: {known}")
        return

    members = filter_members(
        everyone,
        search_text=search,
        profession=profession,
        birth_month=birth_month,
    )
    if not members:
        click.echo("No members found.")
        return

    click.echo(f"\nFound {len(members)} member(s):")
    click.echo("-" * 100)
    click.echo(f"{'Nº':<8} {'Name':<32} {'Status':<20} {'Profession':<20} {'City':<18}")
    click.echo("-" * 100)
    for m in members:
        helped = " *" if m.is_being_helped else ""
        click.echo(
            f"{m.legendary_number:<8} {(m.full_name + helped)[:32]:<32} {m.status.label:<20} "
            f"{m.profession[:20]:<20} {m.city[:18]:<18}"
        )


@member_group.command("export")
@click.option(
    "--csv",
    "csv_path",
    default=ROSTER_FILENAME,
    show_default=True,
    type=click.Path(dir_okay=False, writable=True),
    help="CSV file to write",
)
@click.pass_context
def export_members(ctx, csv_path: str):
    """Export the full member roster to CSV.

    Examples:
        legendarios member export
        legendarios member export --csv membros.csv
    """
    db = ctx.obj["db"]
    members = MemberService(db).list_members()

    with open(csv_path, "w", newline="", encoding="utf-8") as f:
        count = write_roster_csv(members, f)
    click.echo(f"Wrote {count} members to {csv_path}")


@member_group.command("show")
@click.argument("member_ref", metavar="MEMBER")
@click.pass_context
def show_member(ctx, member_ref: str):
    """Show every detail of a member."""
    db = ctx.obj["db"]
    service = MemberService(db)
    print_member(resolve_member_or_exit(ctx, service, member_ref))


@member_group.command("delete")
@click.argument("member_ref", metavar="MEMBER")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_member(ctx, member_ref: str, yes: bool):
    """Delete a member. Their dues stay in the cash book."""
    db = ctx.obj["db"]
    service = MemberService(db)
    member = resolve_member_or_exit(ctx, service, member_ref)

    if not yes and not click.confirm(f"Delete '{member.full_name}'?"):
        click.echo("Aborted.")
        return

    try:
        service.delete_member(member.id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted member '{member.full_name}'")


@member_group.command("assist")
@click.argument("member_ref", metavar="MEMBER")
@click.argument("description")
@click.option("--start-date", help="Start date (defaults to today)")
@click.pass_context
def add_assistance(ctx, member_ref: str, description: str, start_date: str | None):
    """Open an assistance record for a member."""
    db = ctx.obj["db"]
    service = MemberService(db)
    member = resolve_member_or_exit(ctx, service, member_ref)
    start = parse_date_option(ctx, start_date, "start date")

    try:
        record = service.add_assistance(member.id, description, start)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Opened assistance '{record.description}' for {member.full_name} (ID: {record.id})")


@member_group.command("close-assist")
@click.argument("member_ref", metavar="MEMBER")
@click.argument("record_id")
@click.option("--end-date", help="End date (defaults to today)")
@click.pass_context
def close_assistance(ctx, member_ref: str, record_id: str, end_date: str | None):
    """Close an ongoing assistance record."""
    db = ctx.obj["db"]
    service = MemberService(db)
    member = resolve_member_or_exit(ctx, service, member_ref)
    end = parse_date_option(ctx, end_date, "end date")

    try:
        record = service.close_assistance(member.id, record_id, end)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Closed assistance '{record.description}' on {record.end_date}")


def register_commands(cli):
    """Register member commands with main CLI."""
    cli.add_command(member_group, name="member")
