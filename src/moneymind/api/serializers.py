"""JSON shapes for API responses.

Amounts are Decimal everywhere inside the application; they become floats
only here, at the response boundary.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Callable, Iterable

from moneymind.domain.entities import (
    FinancialSummary,
    GoalView,
    MonthlyBucket,
    Page,
    SIPProjection,
    Transaction,
    User,
)

CENTS = Decimal("0.01")


def to_number(value: Decimal) -> float:
    """Render a Decimal as a display float rounded to cents."""
    return float(value.quantize(CENTS, rounding=ROUND_HALF_UP))


def transaction_to_json(txn: Transaction) -> dict[str, Any]:
    return {
        "id": txn.id,
        "userId": txn.user_id,
        "amount": to_number(txn.amount),
        "type": txn.type.value,
        "category": txn.category,
        "note": txn.note,
        "date": txn.date.isoformat(),
        "createdAt": txn.created_at.isoformat(),
    }


def goal_to_json(view: GoalView) -> dict[str, Any]:
    goal = view.goal
    return {
        "id": goal.id,
        "userId": goal.user_id,
        "title": goal.title,
        "targetAmount": to_number(goal.target_amount),
        "currentAmount": to_number(goal.current_amount),
        "deadline": goal.deadline.isoformat(),
        "createdAt": goal.created_at.isoformat(),
        "progress": to_number(view.progress),
        "status": view.status.value,
    }


def user_to_json(user: User) -> dict[str, Any]:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "phone": user.phone or "",
        "bio": user.bio or "",
        "profilePhoto": user.profile_photo or "",
    }


def page_to_json(page: Page, key: str, item_to_json: Callable[[Any], dict[str, Any]]) -> dict[str, Any]:
    """Render a page as ``{key: [...], "pagination": {...}}``."""
    return {
        key: [item_to_json(item) for item in page.items],
        "pagination": {
            "total": page.total,
            "page": page.page,
            "limit": page.limit,
            "totalPages": page.total_pages,
        },
    }


def summary_to_json(summary: FinancialSummary) -> dict[str, Any]:
    return {
        "income": to_number(summary.income),
        "expense": to_number(summary.expense),
        "balance": to_number(summary.balance),
        "count": summary.count,
    }


def monthly_to_json(buckets: Iterable[MonthlyBucket]) -> list[dict[str, Any]]:
    return [
        {"month": bucket.month, "income": to_number(bucket.income), "expense": to_number(bucket.expense)}
        for bucket in buckets
    ]


def sip_to_json(projection: SIPProjection) -> dict[str, Any]:
    return {
        "invested": to_number(projection.invested),
        "returns": to_number(projection.returns),
        "total": to_number(projection.future_value),
    }
