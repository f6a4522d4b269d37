"""Transaction management commands."""

import json

import click
from moneymind.api.handlers import FinanceAPI
from moneymind.cli.error_handling import handle_domain_error
from moneymind.cli.identity import resolve_identity_or_exit
from moneymind.domain.errors import DomainError
from moneymind.domain.query import (
    DEFAULT_LIMIT,
    TRANSACTION_SORT_FIELDS,
    build_transaction_query,
)
from moneymind.domain.transaction import TransactionService
from moneymind.utils.date_parser import parse_date
from moneymind.utils.amount_parser import parse_amount


def format_amount(txn) -> str:
    sign = "+" if txn.type.value == "income" else "-"
    return f"{sign}₹{txn.amount:,.2f}"


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("add")
@click.option("--amount", required=True, help="Amount (e.g., 1250.50); always positive")
@click.option(
    "--type", "txn_type", required=True, type=click.Choice(["income", "expense"]), help="Transaction type"
)
@click.option("--category", required=True, help="Category (e.g., Food, Salary)")
@click.option(
    "--date",
    default="today",
    show_default=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--note", default="", help="Optional note")
@click.pass_context
def add_transaction(ctx, amount: str, txn_type: str, category: str, date: str, note: str) -> None:
    """Add a transaction.

    Examples:
        moneymind transaction add --amount 1200 --type expense --category Rent
        moneymind transaction add --amount 50000 --type income --category Salary --date 2024-01-01
    """
    identity = resolve_identity_or_exit(ctx)
    service = TransactionService(ctx.obj["db"])

    # Parse date
    try:
        txn_date = parse_date(date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    # Parse amount
    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        txn = service.create_transaction(
            identity, amount=txn_amount, type=txn_type, category=category, date=txn_date, note=note
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transaction {txn.id}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Amount: {format_amount(txn)}")
    click.echo(f"  Category: {txn.category}")
    if txn.note:
        click.echo(f"  Note: {txn.note}")


@transaction_group.command("list")
@click.option("--page", default="1", help="Page number (starts at 1)")
@click.option("--limit", default=str(DEFAULT_LIMIT), help="Transactions per page")
@click.option(
    "--type", "txn_type", default="all", type=click.Choice(["all", "income", "expense"]), help="Type filter"
)
@click.option("--search", help="Only show transactions whose category or note contains this text")
@click.option("--sort-by", default="date", help=f"Sort field ({', '.join(TRANSACTION_SORT_FIELDS)})")
@click.option("--order", default="desc", type=click.Choice(["asc", "desc"]), help="Sort direction")
@click.option("--json", "as_json", is_flag=True, help="Print the API response as JSON")
@click.pass_context
def list_transactions(
    ctx, page: str, limit: str, txn_type: str, search: str | None, sort_by: str, order: str, as_json: bool
) -> None:
    """View your transactions one page at a time.

    Invalid --page/--limit values fall back to the defaults, and an unknown
    --sort-by falls back to date, newest first.
    """
    identity = resolve_identity_or_exit(ctx)
    db = ctx.obj["db"]

    if as_json:
        params = {
            "page": page,
            "limit": limit,
            "type": txn_type,
            "search": search,
            "sortBy": sort_by,
            "order": order,
        }
        try:
            body = FinanceAPI(db).list_transactions(identity, params)
        except DomainError as e:
            handle_domain_error(ctx, e)
        click.echo(json.dumps(body, indent=2, ensure_ascii=False))
        return

    query = build_transaction_query(
        page=page, limit=limit, type=txn_type, sort_by=sort_by, order=order, search=search
    )
    try:
        result = TransactionService(db).list_transactions(identity, query)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not result.items:
        click.echo("No transactions found.")
        return

    click.echo(f"\nPage {result.page} of {result.total_pages} ({result.total} transaction(s)):")
    click.echo("-" * 90)
    click.echo(f"{'ID':<6} {'Date':<12} {'Type':<8} {'Amount':>14}  {'Category':<20} {'Note':<25}")
    click.echo("-" * 90)

    for txn in result.items:
        note = txn.note[:25]
        click.echo(
            f"{txn.id:<6} {str(txn.date):<12} {txn.type.value:<8} {format_amount(txn):>14}  "
            f"{txn.category[:20]:<20} {note:<25}"
        )


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--amount", help="New amount")
@click.option("--type", "txn_type", type=click.Choice(["income", "expense"]), help="New type")
@click.option("--category", help="New category")
@click.option("--date", help="New date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.option("--note", help="New note (use \"\" to clear)")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: int,
    amount: str | None,
    txn_type: str | None,
    category: str | None,
    date: str | None,
    note: str | None,
) -> None:
    """Update a transaction.

    Updates only the fields that are provided.

    Examples:
        moneymind transaction update 3 --amount 950
        moneymind transaction update 3 --category Groceries --note "weekly shop"
    """
    identity = resolve_identity_or_exit(ctx)
    service = TransactionService(ctx.obj["db"])

    # Parse date if provided
    txn_date = None
    if date is not None:
        try:
            txn_date = parse_date(date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    # Parse amount if provided
    txn_amount = None
    if amount is not None:
        try:
            txn_amount = parse_amount(amount)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)

    try:
        service.update_transaction(
            identity,
            transaction_id,
            amount=txn_amount,
            type=txn_type,
            category=category,
            note=note,
            date=txn_date,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool) -> None:
    """Delete a transaction permanently.

    Examples:
        moneymind transaction delete 3
    """
    identity = resolve_identity_or_exit(ctx)
    service = TransactionService(ctx.obj["db"])

    try:
        service.get_transaction(identity, transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    # Confirm deletion
    if not yes and not click.confirm(f"Are you sure you want to delete transaction {transaction_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_transaction(identity, transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
