"""List-query normalization: pagination, filtering, and sort mapping.

Raw request values arrive as strings (query parameters, CLI options) or
``None``. Nothing here raises: malformed values fall back to the documented
defaults so that a bad ``page`` or ``sortBy`` never fails a list request.
"""

import math
from typing import Any, Optional

from moneymind.domain.entities import (
    GoalQuery,
    GoalStatus,
    SortOrder,
    TransactionQuery,
    TransactionType,
)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

# Filter value meaning "no filter"
ALL = "all"

TRANSACTION_SORT_FIELDS = ("date", "amount", "category")
DEFAULT_TRANSACTION_SORT = "date"

# Public (camelCase) names accepted from clients mapped to entity attributes
GOAL_SORT_FIELDS = {
    "createdAt": "created_at",
    "created_at": "created_at",
    "deadline": "deadline",
    "targetAmount": "target_amount",
    "target_amount": "target_amount",
    "title": "title",
}
DEFAULT_GOAL_SORT = "created_at"


def coerce_positive_int(value: Any, default: int) -> int:
    """Coerce a raw value to an integer >= 1, or return ``default``.

    Args:
        value: Raw value (string, int, or None)
        default: Fallback for missing, non-integer, or non-positive values

    Returns:
        Positive integer
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        number = value
    else:
        try:
            number = int(str(value).strip())
        except ValueError:
            return default
    if number < 1:
        return default
    return number


def coerce_page(value: Any) -> int:
    return coerce_positive_int(value, DEFAULT_PAGE)


def coerce_limit(value: Any) -> int:
    """Coerce a page size, capping it at ``MAX_LIMIT``."""
    return min(coerce_positive_int(value, DEFAULT_LIMIT), MAX_LIMIT)


def coerce_order(value: Any) -> SortOrder:
    if isinstance(value, SortOrder):
        return value
    if isinstance(value, str) and value.strip().lower() == SortOrder.ASC.value:
        return SortOrder.ASC
    return SortOrder.DESC


def coerce_transaction_type(value: Any) -> Optional[TransactionType]:
    """Map a raw type filter to a TransactionType.

    ``None``, ``"all"`` and unrecognized values mean no filter.
    """
    if isinstance(value, TransactionType):
        return value
    if not isinstance(value, str):
        return None
    try:
        return TransactionType(value.strip().lower())
    except ValueError:
        return None


def coerce_goal_status(value: Any) -> Optional[GoalStatus]:
    if isinstance(value, GoalStatus):
        return value
    if not isinstance(value, str):
        return None
    try:
        return GoalStatus(value.strip().lower())
    except ValueError:
        return None


def resolve_transaction_sort(sort_by: Any, order: Any) -> tuple[str, SortOrder]:
    """Resolve transaction sort field and direction.

    An unrecognized field resets both field and direction to date descending.
    """
    if isinstance(sort_by, str) and sort_by.strip() in TRANSACTION_SORT_FIELDS:
        return sort_by.strip(), coerce_order(order)
    return DEFAULT_TRANSACTION_SORT, SortOrder.DESC


def resolve_goal_sort(sort_by: Any, order: Any) -> tuple[str, SortOrder]:
    """Resolve goal sort field and direction.

    An unrecognized field resets both field and direction to created_at
    descending.
    """
    if isinstance(sort_by, str) and sort_by.strip() in GOAL_SORT_FIELDS:
        return GOAL_SORT_FIELDS[sort_by.strip()], coerce_order(order)
    return DEFAULT_GOAL_SORT, SortOrder.DESC


def build_transaction_query(
    page: Any = None,
    limit: Any = None,
    type: Any = None,
    sort_by: Any = None,
    order: Any = None,
    search: Any = None,
) -> TransactionQuery:
    """Build a normalized transaction list request from raw values."""
    field_name, direction = resolve_transaction_sort(sort_by, order)
    search_text = search.strip() if isinstance(search, str) else None
    return TransactionQuery(
        page=coerce_page(page),
        limit=coerce_limit(limit),
        type=coerce_transaction_type(type),
        search=search_text or None,
        sort_by=field_name,
        order=direction,
    )


def build_goal_query(
    page: Any = None,
    limit: Any = None,
    status: Any = None,
    sort_by: Any = None,
    order: Any = None,
) -> GoalQuery:
    """Build a normalized goal list request from raw values."""
    field_name, direction = resolve_goal_sort(sort_by, order)
    return GoalQuery(
        page=coerce_page(page),
        limit=coerce_limit(limit),
        status=coerce_goal_status(status),
        sort_by=field_name,
        order=direction,
    )


def total_pages(total: int, limit: int) -> int:
    """Number of pages needed for ``total`` records; 0 when there are none."""
    if total <= 0:
        return 0
    return math.ceil(total / limit)
