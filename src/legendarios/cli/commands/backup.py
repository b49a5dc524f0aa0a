"""Backup export and restore commands."""

import json
from datetime import date

import click
from legendarios.domain.backup import BackupService


def default_backup_name(today: date | None = None) -> str:
    """Default export file name, dated today."""
    return f"legendarios_backup_{(today or date.today()).isoformat()}.json"


@click.group()
def backup_group():
    """Export and restore full backups."""
    pass


@backup_group.command("export")
@click.argument("path", required=False, type=click.Path(dir_okay=False, writable=True))
@click.pass_context
def export_backup(ctx, path: str | None):
    """Write every member, dues payment and transaction to a JSON file."""
    db = ctx.obj["db"]
    document = BackupService(db).export_snapshot()
    path = path or default_backup_name()

    with open(path, "w", encoding="utf-8") as f:
        json.dump(document, f, ensure_ascii=False, indent=2)

    click.echo(
        f"Exported {len(document['members'])} members, "
        f"{len(document['duesPayments'])} dues payments and "
        f"{len(document['transactions'])} transactions to {path}"
    )


@backup_group.command("restore")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def restore_backup(ctx, path: str, yes: bool):
    """Replace all stored data with a backup file."""
    db = ctx.obj["db"]

    try:
        with open(path, encoding="utf-8") as f:
            document = json.load(f)
    except json.JSONDecodeError as e:
        click.echo(f"Error: {path} is not valid JSON: {e}", err=True)
        ctx.exit(1)

    if not yes and not click.confirm("This replaces all current data. Continue?"):
        click.echo("Aborted.")
        return

    if not BackupService(db).restore_snapshot(document):
        click.echo("Error: Invalid backup file; nothing was changed", err=True)
        ctx.exit(1)
    click.echo(f"Restored backup from {path}")


def register_commands(cli):
    """Register backup commands with main CLI."""
    cli.add_command(backup_group, name="backup")
