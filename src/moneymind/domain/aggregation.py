"""Aggregation helpers over already-fetched records.

All functions are pure and work in ``Decimal`` so repeated sums never drift.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Union

from moneymind.domain.errors import ValidationError, invalid_field
from moneymind.domain.entities import (
    FinancialSummary,
    GoalStatus,
    MonthlyBucket,
    SIPProjection,
    Transaction,
    TransactionType,
)

MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

ZERO = Decimal("0")
HUNDRED = Decimal("100")
MAX_SIP_YEARS = 100
MAX_SIP_VALUE = Decimal("1e18")
SIP_OUT_OF_RANGE = "SIP inputs are out of range"

Number = Union[Decimal, int, float, str]


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # Go through str so 0.1 stays 0.1
        return Decimal(str(value))
    return Decimal(value)


def month_name(day: date) -> str:
    """Short English month name for a date ("Jan".."Dec")."""
    return MONTHS[day.month - 1]


def monthly_buckets(
    transactions: Iterable[Transaction], year: Optional[int] = None
) -> list[MonthlyBucket]:
    """Group transactions into twelve calendar-month buckets.

    Always returns exactly twelve buckets, January through December, with zero
    totals for months that have no activity.

    Args:
        transactions: Transactions to bucket
        year: If given, only transactions dated in that year are counted

    Returns:
        List of MonthlyBucket in calendar order
    """
    income = [ZERO] * 12
    expense = [ZERO] * 12
    for txn in transactions:
        if year is not None and txn.date.year != year:
            continue
        index = txn.date.month - 1
        if txn.type == TransactionType.INCOME:
            income[index] += txn.amount
        else:
            expense[index] += txn.amount

    return [
        MonthlyBucket(month=MONTHS[i], income=income[i], expense=expense[i])
        for i in range(12)
    ]


def monthly_expense_buckets(
    transactions: Iterable[Transaction], year: Optional[int] = None
) -> list[tuple[str, Decimal]]:
    """Expense-only view of ``monthly_buckets``: ``(month, amount)`` pairs."""
    return [(bucket.month, bucket.expense) for bucket in monthly_buckets(transactions, year)]


def summarize(transactions: Iterable[Transaction]) -> FinancialSummary:
    """Sum income and expense separately; balance is income minus expense."""
    income = ZERO
    expense = ZERO
    count = 0
    for txn in transactions:
        if txn.type == TransactionType.INCOME:
            income += txn.amount
        else:
            expense += txn.amount
        count += 1
    return FinancialSummary(income=income, expense=expense, balance=income - expense, count=count)


def completion_percentage(current_amount: Number, target_amount: Number) -> Decimal:
    """Unclamped completion: current / target * 100. Can exceed 100."""
    current = _to_decimal(current_amount)
    target = _to_decimal(target_amount)
    if target <= 0:
        return ZERO
    return current / target * HUNDRED


def goal_progress(current_amount: Number, target_amount: Number) -> Decimal:
    """Display progress, capped at 100."""
    return min(completion_percentage(current_amount, target_amount), HUNDRED)


def goal_status(
    current_amount: Number,
    target_amount: Number,
    deadline: date,
    today: Optional[date] = None,
) -> GoalStatus:
    """Derive goal status.

    Completed wins over overdue: a goal that reached its target stays
    completed after its deadline passes.
    """
    if today is None:
        today = date.today()
    if _to_decimal(current_amount) >= _to_decimal(target_amount):
        return GoalStatus.COMPLETED
    if deadline < today:
        return GoalStatus.OVERDUE
    return GoalStatus.ACTIVE


def sip_projection(monthly_amount: Number, annual_rate: Number, years: Number) -> SIPProjection:
    """Project a systematic investment plan.

    Contributions are made at the start of each month and compound monthly at
    ``annual_rate / 12`` percent.

    Args:
        monthly_amount: Contribution per month
        annual_rate: Annual rate in percent (12 means 12%)
        years: Investment horizon in years

    Returns:
        SIPProjection with invested amount, future value, and returns
    """
    amount = _to_decimal(monthly_amount)
    rate = _to_decimal(annual_rate)
    horizon = _to_decimal(years)
    if horizon > MAX_SIP_YEARS:
        raise ValidationError(invalid_field("years", f"must be at most {MAX_SIP_YEARS}"), field="years")

    monthly_rate = rate / 12 / HUNDRED
    months = horizon * 12
    invested = amount * months

    try:
        if monthly_rate == 0:
            future_value = amount * months
        else:
            growth = (1 + monthly_rate) ** months
            future_value = amount * ((growth - 1) / monthly_rate) * (1 + monthly_rate)
    except ArithmeticError as e:
        raise ValidationError(SIP_OUT_OF_RANGE) from e
    if abs(future_value) >= MAX_SIP_VALUE or abs(invested) >= MAX_SIP_VALUE:
        raise ValidationError(SIP_OUT_OF_RANGE)

    return SIPProjection(
        monthly_amount=amount,
        annual_rate=rate,
        years=horizon,
        months=months,
        invested=invested,
        future_value=future_value,
        returns=future_value - invested,
    )
