"""Dashboard commands: totals, monthly chart data, and calculators."""

import json

import click
from moneymind.api.handlers import FinanceAPI
from moneymind.cli.error_handling import handle_domain_error
from moneymind.cli.identity import resolve_identity_or_exit
from moneymind.cli.commands.transaction import format_amount
from moneymind.domain import aggregation
from moneymind.domain.errors import DomainError
from moneymind.domain.transaction import TransactionService
from moneymind.utils.amount_parser import parse_amount
from moneymind.utils.currency import convert_currency
from moneymind.utils.expression import evaluate_expression, format_result

BAR_WIDTH = 40


@click.command("summary")
@click.option("--recent", default=5, show_default=True, help="Number of recent transactions to show")
@click.option("--json", "as_json", is_flag=True, help="Print the API response as JSON")
@click.pass_context
def summary(ctx, recent: int, as_json: bool) -> None:
    """Show total income, expenses, and balance across all transactions."""
    identity = resolve_identity_or_exit(ctx)
    db = ctx.obj["db"]

    if as_json:
        try:
            body = FinanceAPI(db).summary(identity)
        except DomainError as e:
            handle_domain_error(ctx, e)
        click.echo(json.dumps(body, indent=2))
        return

    service = TransactionService(db)
    try:
        totals = service.get_summary(identity)
        latest = service.recent_transactions(identity, count=recent) if recent > 0 else []
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Total income:   ₹{totals.income:,.2f}")
    click.echo(f"Total expenses: ₹{totals.expense:,.2f}")
    click.echo(f"Balance:        ₹{totals.balance:,.2f}")
    click.echo(f"Transactions:   {totals.count}")

    if latest:
        click.echo("\nRecent transactions:")
        for txn in latest:
            click.echo(f"  {txn.date}  {txn.category[:20]:<20} {format_amount(txn):>14}")


@click.command("monthly")
@click.option("--year", type=int, help="Only count transactions from this year")
@click.option("--json", "as_json", is_flag=True, help="Print the API response as JSON")
@click.pass_context
def monthly(ctx, year: int | None, as_json: bool) -> None:
    """Show income and expenses for each month, January to December."""
    identity = resolve_identity_or_exit(ctx)
    db = ctx.obj["db"]

    if as_json:
        params = {"year": year}
        try:
            body = FinanceAPI(db).monthly(identity, params)
        except DomainError as e:
            handle_domain_error(ctx, e)
        click.echo(json.dumps(body, indent=2))
        return

    try:
        buckets = TransactionService(db).get_monthly(identity, year=year)
    except DomainError as e:
        handle_domain_error(ctx, e)

    peak = max([max(b.income, b.expense) for b in buckets])
    click.echo(f"{'Month':<6} {'Income':>14} {'Expense':>14}  Expense")
    click.echo("-" * (38 + BAR_WIDTH))
    for bucket in buckets:
        width = int(bucket.expense / peak * BAR_WIDTH) if peak > 0 else 0
        click.echo(
            f"{bucket.month:<6} {f'₹{bucket.income:,.2f}':>14} {f'₹{bucket.expense:,.2f}':>14}  {'█' * width}"
        )


@click.command("sip")
@click.option("--amount", required=True, help="Monthly investment")
@click.option("--rate", required=True, help="Expected annual return in percent")
@click.option("--years", required=True, help="Investment period in years")
@click.pass_context
def sip(ctx, amount: str, rate: str, years: str) -> None:
    """Project the value of a systematic investment plan.

    Examples:
        moneymind sip --amount 5000 --rate 12 --years 10
    """
    try:
        projection = aggregation.sip_projection(parse_amount(amount), parse_amount(rate), parse_amount(years))
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Invested:    ₹{projection.invested:,.2f}")
    click.echo(f"Est. return: ₹{projection.returns:,.2f}")
    click.echo(f"Total value: ₹{projection.future_value:,.2f}")


@click.command("calc")
@click.argument("expression", nargs=-1, required=True)
@click.pass_context
def calc(ctx, expression: tuple[str, ...]) -> None:
    """Evaluate an arithmetic expression.

    Supports + - × ÷ * / % and parentheses.

    Examples:
        moneymind calc "(1200 + 300) × 12"
    """
    try:
        result = evaluate_expression(" ".join(expression))
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(format_result(result))


@click.command("convert")
@click.argument("amount")
@click.option("--from", "from_currency", default="INR", show_default=True, help="Source currency (INR or USD)")
@click.option("--to", "to_currency", default="USD", show_default=True, help="Target currency (INR or USD)")
@click.pass_context
def convert(ctx, amount: str, from_currency: str, to_currency: str) -> None:
    """Convert between rupees and dollars.

    Examples:
        moneymind convert 9023 --from INR --to USD
    """
    try:
        converted = convert_currency(parse_amount(amount), from_currency, to_currency)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"{converted:,.2f} {to_currency.upper()}")


def register_commands(cli: click.Group) -> None:
    """Register dashboard commands with main CLI."""
    cli.add_command(summary)
    cli.add_command(monthly)
    cli.add_command(sip)
    cli.add_command(calc)
    cli.add_command(convert)
