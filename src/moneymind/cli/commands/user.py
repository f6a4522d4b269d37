"""Signup and profile commands."""

import click

from moneymind.cli.error_handling import handle_domain_error
from moneymind.cli.identity import resolve_identity_or_exit
from moneymind.domain.errors import DomainError
from moneymind.domain.user import UserService


@click.command("signup")
@click.option("--name", required=True, help="Your name")
@click.option("--email", "email", required=True, help="Account email")
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True, help="Account password")
@click.pass_context
def signup(ctx, name: str, email: str, password: str) -> None:
    """Create an account.

    Examples:
        moneymind signup --name "Asha" --email asha@example.com
    """
    service = UserService(ctx.obj["db"])
    try:
        user = service.register(name=name, email=email, password=password)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created user {user.id}")
    click.echo(f"  Name: {user.name}")
    click.echo(f"  Email: {user.email}")


@click.group()
def profile_group():
    """View or edit your profile."""
    pass


@profile_group.command("show")
@click.pass_context
def show_profile(ctx) -> None:
    """Show your profile."""
    identity = resolve_identity_or_exit(ctx)
    try:
        user = UserService(ctx.obj["db"]).get_profile(identity)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Name: {user.name}")
    click.echo(f"Email: {user.email}")
    click.echo(f"Phone: {user.phone or 'Not provided'}")
    click.echo(f"Bio: {user.bio or 'Not provided'}")
    click.echo(f"Member since: {user.created_at:%Y-%m-%d}")


@profile_group.command("update")
@click.option("--name", help="New name")
@click.option("--new-email", help="New email")
@click.option("--phone", help="Phone number")
@click.option("--bio", help="Short bio")
@click.option("--photo", help="Profile photo URL or data URI")
@click.pass_context
def update_profile(
    ctx, name: str | None, new_email: str | None, phone: str | None, bio: str | None, photo: str | None
) -> None:
    """Update profile fields that are given.

    Examples:
        moneymind profile update --phone "+91 98765 43210" --bio "Saving for a bike"
    """
    identity = resolve_identity_or_exit(ctx)
    try:
        user = UserService(ctx.obj["db"]).update_profile(
            identity, name=name, email=new_email, phone=phone, bio=bio, profile_photo=photo
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated profile for {user.email}")


def register_commands(cli: click.Group) -> None:
    """Register user commands with main CLI."""
    cli.add_command(signup)
    cli.add_command(profile_group, name="profile")
