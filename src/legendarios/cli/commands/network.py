"""Network commands: professions directory and assistance overview."""

import click
from legendarios.domain.census import assistance_counts, assisted_members, profession_directory
from legendarios.domain.member import MemberService


@click.group()
def network_group():
    """Browse the members' network."""
    pass


@network_group.command("professions")
@click.pass_context
def professions(ctx):
    """List professions with how many members practise each."""
    db = ctx.obj["db"]
    directory = profession_directory(MemberService(db).list_members())
    if not directory:
        click.echo("No professions recorded.")
        return

    click.echo(f"\n{'Profession':<40} {'Members':>8}")
    click.echo("-" * 49)
    for name, count in directory:
        click.echo(f"{name[:40]:<40} {count:>8}")


@network_group.command("assistance")
@click.option("--ongoing", is_flag=True, help="Only members currently being helped")
@click.pass_context
def assistance(ctx, ongoing: bool):
    """List members with assistance history, current ones first."""
    db = ctx.obj["db"]
    members = MemberService(db).list_members()
    total, open_count = assistance_counts(members)

    assisted = assisted_members(members)
    if ongoing:
        assisted = [m for m in assisted if m.is_being_helped]

    click.echo(f"\nAssistance records: {total} ({open_count} ongoing)")
    if not assisted:
        click.echo("No members found.")
        return

    for member in assisted:
        marker = "*" if member.is_being_helped else " "
        click.echo(f"\n{marker} {member.full_name} (Nº {member.legendary_number})")
        for record in member.assistance_history:
            if ongoing and not record.is_ongoing:
                continue
            end = record.end_date or "ongoing"
            click.echo(f"    {record.description} ({record.start_date} - {end})")


def register_commands(cli):
    """Register network commands with main CLI."""
    cli.add_command(network_group, name="network")
