"""CLI helper for resolving the caller's identity."""

import click

from moneymind.cli.error_handling import handle_domain_error
from moneymind.domain.entities import Identity
from moneymind.domain.errors import AuthenticationError
from moneymind.domain.user import UserService


def resolve_identity_or_exit(ctx: click.Context) -> Identity:
    """Authenticate with the credentials given to the top-level command.

    The identity is cached on ``ctx.obj`` for the rest of the invocation only.
    """
    identity = ctx.obj.get("identity")
    if identity is not None:
        return identity

    email = ctx.obj.get("email")
    password = ctx.obj.get("password")
    if not email or not password:
        click.echo(
            "Error: Credentials required. Use --email/--password or set "
            "MONEYMIND_EMAIL and MONEYMIND_PASSWORD.",
            err=True,
        )
        ctx.exit(1)

    try:
        identity = UserService(ctx.obj["db"]).authenticate(email, password)
    except AuthenticationError as e:
        handle_domain_error(ctx, e)

    ctx.obj["identity"] = identity
    return identity
