"""Main CLI entry point."""

import click
from legendarios.database.factories import DB_PATH_ENV, create_sqlite_database
from legendarios.utils.log import setup_logging

# Import and register all commands at module level
from legendarios.cli.commands import (
    backup,
    cashbook,
    dashboard,
    dues,
    member,
    network,
    report,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENV} environment variable)",
    envvar=DB_PATH_ENV,
)
@click.option("--verbose", "-v", is_flag=True, help="Log database writes to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Legendários - membership and cash-book records.

    Keep the member roll, monthly dues and the chapter's cash book, and
    produce the monthly financial report.
    """
    ctx.ensure_object(dict)
    setup_logging(verbose)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
member.register_commands(cli)
dues.register_commands(cli)
cashbook.register_commands(cli)
dashboard.register_commands(cli)
report.register_commands(cli)
network.register_commands(cli)
backup.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
