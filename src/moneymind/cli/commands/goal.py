"""Savings goal commands."""

import json

import click
from moneymind.api.handlers import FinanceAPI
from moneymind.cli.error_handling import handle_domain_error
from moneymind.cli.identity import resolve_identity_or_exit
from moneymind.domain.errors import DomainError
from moneymind.domain.goal import GoalService
from moneymind.domain.query import DEFAULT_LIMIT, build_goal_query
from moneymind.utils.date_parser import parse_date
from moneymind.utils.amount_parser import parse_amount

PROGRESS_BAR_WIDTH = 20


def progress_bar(progress) -> str:
    filled = int(progress / 100 * PROGRESS_BAR_WIDTH)
    return "#" * filled + "." * (PROGRESS_BAR_WIDTH - filled)


def _parse_amount_or_exit(ctx, value: str | None, label: str):
    if value is None:
        return None
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def _parse_date_or_exit(ctx, value: str | None):
    if value is None:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid deadline: {e}", err=True)
        ctx.exit(1)


@click.group()
def goal_group():
    """Manage savings goals."""
    pass


@goal_group.command("add")
@click.option("--title", required=True, help="What you are saving for")
@click.option("--target", required=True, help="Target amount")
@click.option("--deadline", required=True, help="Deadline (YYYY-MM-DD or relative like 'in 6 months')")
@click.option("--current", help="Amount already saved")
@click.pass_context
def add_goal(ctx, title: str, target: str, deadline: str, current: str | None) -> None:
    """Create a savings goal.

    Examples:
        moneymind goal add --title "Emergency fund" --target 100000 --deadline 2025-12-31
    """
    identity = resolve_identity_or_exit(ctx)
    service = GoalService(ctx.obj["db"])

    target_amount = _parse_amount_or_exit(ctx, target, "target amount")
    current_amount = _parse_amount_or_exit(ctx, current, "current amount")
    goal_deadline = _parse_date_or_exit(ctx, deadline)

    try:
        goal = service.create_goal(
            identity,
            title=title,
            target_amount=target_amount,
            deadline=goal_deadline,
            current_amount=current_amount,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    view = service.view(goal)
    click.echo(f"Created goal {goal.id}")
    click.echo(f"  Title: {goal.title}")
    click.echo(f"  Target: ₹{goal.target_amount:,.2f}")
    click.echo(f"  Deadline: {goal.deadline}")
    click.echo(f"  Status: {view.status.value}")


@goal_group.command("list")
@click.option("--page", default="1", help="Page number (starts at 1)")
@click.option("--limit", default=str(DEFAULT_LIMIT), help="Goals per page")
@click.option(
    "--status",
    default="all",
    type=click.Choice(["all", "active", "completed", "overdue"]),
    help="Status filter",
)
@click.option("--sort-by", default="createdAt", help="Sort field (createdAt, deadline, targetAmount, title)")
@click.option("--order", default="desc", type=click.Choice(["asc", "desc"]), help="Sort direction")
@click.option("--json", "as_json", is_flag=True, help="Print the API response as JSON")
@click.pass_context
def list_goals(ctx, page: str, limit: str, status: str, sort_by: str, order: str, as_json: bool) -> None:
    """View your goals with progress and status."""
    identity = resolve_identity_or_exit(ctx)
    db = ctx.obj["db"]

    if as_json:
        params = {"page": page, "limit": limit, "status": status, "sortBy": sort_by, "order": order}
        try:
            body = FinanceAPI(db).list_goals(identity, params)
        except DomainError as e:
            handle_domain_error(ctx, e)
        click.echo(json.dumps(body, indent=2, ensure_ascii=False))
        return

    query = build_goal_query(page=page, limit=limit, status=status, sort_by=sort_by, order=order)
    try:
        result = GoalService(db).list_goals(identity, query)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not result.items:
        click.echo("No goals found.")
        return

    click.echo(f"\nPage {result.page} of {result.total_pages} ({result.total} goal(s)):")
    click.echo("-" * 100)
    click.echo(
        f"{'ID':<6} {'Title':<24} {'Saved':>14} {'Target':>14}  {'Progress':<28} {'Deadline':<12} {'Status':<9}"
    )
    click.echo("-" * 100)
    for view in result.items:
        goal = view.goal
        click.echo(
            f"{goal.id:<6} {goal.title[:24]:<24} {f'₹{goal.current_amount:,.2f}':>14} "
            f"{f'₹{goal.target_amount:,.2f}':>14}  {progress_bar(view.progress)} {view.progress:>5.1f}% "
            f"{str(goal.deadline):<12} {view.status.value:<9}"
        )


@goal_group.command("update")
@click.argument("goal_id", type=int)
@click.option("--title", help="New title")
@click.option("--target", help="New target amount")
@click.option("--current", help="New saved amount")
@click.option("--deadline", help="New deadline")
@click.pass_context
def update_goal(
    ctx, goal_id: int, title: str | None, target: str | None, current: str | None, deadline: str | None
) -> None:
    """Update a goal.

    Updates only the fields that are provided.
    """
    identity = resolve_identity_or_exit(ctx)
    service = GoalService(ctx.obj["db"])

    target_amount = _parse_amount_or_exit(ctx, target, "target amount")
    current_amount = _parse_amount_or_exit(ctx, current, "current amount")
    goal_deadline = _parse_date_or_exit(ctx, deadline)

    try:
        service.update_goal(
            identity,
            goal_id,
            title=title,
            target_amount=target_amount,
            current_amount=current_amount,
            deadline=goal_deadline,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated goal {goal_id}")


@goal_group.command("contribute")
@click.argument("goal_id", type=int)
@click.argument("amount")
@click.pass_context
def contribute(ctx, goal_id: int, amount: str) -> None:
    """Add savings to a goal.

    Examples:
        moneymind goal contribute 2 5000
    """
    identity = resolve_identity_or_exit(ctx)
    service = GoalService(ctx.obj["db"])
    contribution = _parse_amount_or_exit(ctx, amount, "amount")

    try:
        goal = service.contribute(identity, goal_id, contribution)
    except DomainError as e:
        handle_domain_error(ctx, e)

    view = service.view(goal)
    click.echo(f"Added ₹{contribution:,.2f} to goal {goal_id}")
    click.echo(f"  Saved: ₹{goal.current_amount:,.2f} of ₹{goal.target_amount:,.2f} ({view.progress:.1f}%)")
    click.echo(f"  Status: {view.status.value}")


@goal_group.command("delete")
@click.argument("goal_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_goal(ctx, goal_id: int, yes: bool) -> None:
    """Delete a goal permanently."""
    identity = resolve_identity_or_exit(ctx)
    service = GoalService(ctx.obj["db"])

    try:
        service.get_goal(identity, goal_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(f"Are you sure you want to delete goal {goal_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_goal(identity, goal_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted goal {goal_id}")


def register_commands(cli: click.Group) -> None:
    """Register goal commands with main CLI."""
    cli.add_command(goal_group, name="goal")
