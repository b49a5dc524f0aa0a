"""CLI helpers for member resolution and error handling."""

from __future__ import annotations

import click
from legendarios.domain.entities import Member
from legendarios.domain.errors import NotFoundError
from legendarios.domain.member import MemberService


def resolve_member_or_exit(
    ctx: click.Context, member_service: MemberService, reference: str
) -> Member:
    """Resolve a member id or legendary number, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return member_service.resolve_member(reference)
    except NotFoundError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
