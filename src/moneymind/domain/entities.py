"""Domain model entities for moneymind.

These are pure data classes representing business concepts, independent of
database schema. Derived values (goal progress and status) are never stored;
they are computed at read time by the aggregation helpers.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class TransactionType(str, Enum):
    """Direction of a transaction."""

    INCOME = "income"
    EXPENSE = "expense"


class GoalStatus(str, Enum):
    """Derived status of a savings goal."""

    COMPLETED = "completed"
    OVERDUE = "overdue"
    ACTIVE = "active"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, passed explicitly with every request."""

    user_id: int
    email: str


@dataclass(frozen=True)
class User:
    """User domain entity. The password hash never leaves the store layer."""

    id: int
    name: str
    email: str
    created_at: datetime
    phone: Optional[str] = None
    bio: Optional[str] = None
    profile_photo: Optional[str] = None


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity."""

    id: int
    user_id: int
    amount: Decimal
    type: TransactionType
    category: str
    note: str
    date: date
    created_at: datetime


@dataclass(frozen=True)
class Goal:
    """Savings goal domain entity."""

    id: int
    user_id: int
    title: str
    target_amount: Decimal
    current_amount: Decimal
    deadline: date
    created_at: datetime


@dataclass(frozen=True)
class TransactionQuery:
    """Normalized list request for transactions.

    Built by ``moneymind.domain.query.build_transaction_query``; every field
    already holds a valid value.
    """

    page: int = 1
    limit: int = 10
    type: Optional[TransactionType] = None
    search: Optional[str] = None
    sort_by: str = "date"
    order: SortOrder = SortOrder.DESC

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class GoalQuery:
    """Normalized list request for goals."""

    page: int = 1
    limit: int = 10
    status: Optional[GoalStatus] = None
    sort_by: str = "created_at"
    order: SortOrder = SortOrder.DESC

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of an owner-scoped list query."""

    items: tuple[T, ...]
    total: int
    page: int
    limit: int
    total_pages: int


@dataclass(frozen=True)
class MonthlyBucket:
    """Income and expense totals for one calendar month."""

    month: str
    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")


@dataclass(frozen=True)
class FinancialSummary:
    """Income, expense, and balance over a set of transactions."""

    income: Decimal
    expense: Decimal
    balance: Decimal
    count: int = 0


@dataclass(frozen=True)
class SIPProjection:
    """Result of a systematic investment plan projection."""

    monthly_amount: Decimal
    annual_rate: Decimal
    years: Decimal
    months: Decimal
    invested: Decimal
    future_value: Decimal
    returns: Decimal


@dataclass(frozen=True)
class GoalView:
    """A goal together with its read-time derived fields."""

    goal: Goal
    progress: Decimal
    status: GoalStatus
