"""Tests for database mappers."""

from datetime import datetime, date, UTC
from decimal import Decimal

from moneymind.database.models import (
    User as ORMUser,
    Transaction as ORMTransaction,
    Goal as ORMGoal,
)
from moneymind.database.mappers import (
    user_to_domain,
    transaction_to_domain,
    goal_to_domain,
)
from moneymind.domain.entities import Goal, Transaction, TransactionType, User


class TestUserMapper:
    """Tests for User mapper."""

    def test_user_to_domain(self):
        """Test converting ORM User to domain User without the hash."""
        orm_user = ORMUser(
            id=1,
            name="Alice",
            email="alice@example.com",
            password_hash="$2b$04$hash",
            phone="123",
            created_at=datetime.now(UTC),
        )
        user = user_to_domain(orm_user)

        assert isinstance(user, User)
        assert user.email == "alice@example.com"
        assert user.phone == "123"
        assert user.bio is None


class TestTransactionMapper:
    """Tests for Transaction mapper."""

    def test_transaction_to_domain(self):
        orm_txn = ORMTransaction(
            id=7,
            user_id=1,
            amount=Decimal("42.50"),
            type="income",
            category="Gift",
            note=None,
            date=date(2024, 2, 29),
            created_at=datetime.now(UTC),
        )
        txn = transaction_to_domain(orm_txn)

        assert isinstance(txn, Transaction)
        assert txn.type == TransactionType.INCOME
        assert txn.amount == Decimal("42.50")
        assert txn.note == ""


class TestGoalMapper:
    """Tests for Goal mapper."""

    def test_goal_to_domain(self):
        orm_goal = ORMGoal(
            id=3,
            user_id=1,
            title="Laptop",
            target_amount=Decimal("80000"),
            current_amount=Decimal("2000"),
            deadline=date(2025, 3, 1),
            created_at=datetime.now(UTC),
        )
        goal = goal_to_domain(orm_goal)

        assert isinstance(goal, Goal)
        assert goal.title == "Laptop"
        assert goal.current_amount == Decimal("2000")
