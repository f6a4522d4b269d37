"""Tests for the SQLAlchemy Database implementation."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy.exc import OperationalError

from moneymind.database.sqlalchemy_db import SQLAlchemyDatabase
from moneymind.domain import entities
from moneymind.domain.entities import GoalStatus, TransactionType
from moneymind.domain.errors import ConflictError, StoreUnavailableError


@pytest.fixture
def owner_id(temp_db):
    return temp_db.create_user(name="Owner", email="owner@example.com", password_hash="x")


@pytest.fixture
def other_id(temp_db):
    return temp_db.create_user(name="Other", email="other@example.com", password_hash="x")


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_user_returns_domain_model(self, temp_db, owner_id):
        user = temp_db.get_user(owner_id)

        assert isinstance(user, entities.User)
        assert user.email == "owner@example.com"
        assert isinstance(user.created_at, datetime)
        assert not hasattr(user, "password_hash")

    def test_get_transaction_returns_domain_model(self, temp_db, owner_id):
        txn_id = temp_db.create_transaction(
            user_id=owner_id,
            amount=Decimal("19.99"),
            type=TransactionType.EXPENSE,
            category="Food",
            date=date(2024, 1, 15),
        )
        txn = temp_db.get_transaction(owner_id, txn_id)

        assert isinstance(txn, entities.Transaction)
        assert txn.amount == Decimal("19.99")
        assert isinstance(txn.amount, Decimal)
        assert txn.type == TransactionType.EXPENSE
        assert txn.note == ""
        assert txn.date == date(2024, 1, 15)

    def test_get_goal_returns_domain_model(self, temp_db, owner_id):
        goal_id = temp_db.create_goal(
            user_id=owner_id, title="Bike", target_amount=Decimal("1200"), deadline=date(2025, 1, 1)
        )
        goal = temp_db.get_goal(owner_id, goal_id)

        assert isinstance(goal, entities.Goal)
        assert goal.current_amount == Decimal("0")
        assert goal.target_amount == Decimal("1200")


class TestOwnerScoping:
    """Records of one user are invisible to another."""

    def test_get_update_delete_other_users_transaction(self, temp_db, owner_id, other_id):
        txn_id = temp_db.create_transaction(
            user_id=owner_id, amount=Decimal("5"), type="expense", category="Tea", date=date(2024, 1, 1)
        )

        assert temp_db.get_transaction(other_id, txn_id) is None
        assert temp_db.update_transaction(other_id, txn_id, amount=Decimal("500")) is None
        assert temp_db.delete_transaction(other_id, txn_id) is False
        assert temp_db.get_transaction(owner_id, txn_id).amount == Decimal("5")

    def test_lists_and_counts_are_scoped(self, temp_db, owner_id, other_id):
        for user_id in (owner_id, other_id, other_id):
            temp_db.create_transaction(
                user_id=user_id, amount=Decimal("1"), type="income", category="Gift", date=date(2024, 1, 1)
            )
            temp_db.create_goal(
                user_id=user_id, title="G", target_amount=Decimal("10"), deadline=date(2030, 1, 1)
            )

        assert temp_db.count_transactions(owner_id) == 1
        assert len(temp_db.list_transactions(owner_id)) == 1
        assert temp_db.count_goals(other_id) == 2
        assert all(g.user_id == other_id for g in temp_db.list_goals(other_id))

    def test_other_users_goal(self, temp_db, owner_id, other_id):
        goal_id = temp_db.create_goal(
            user_id=owner_id, title="Car", target_amount=Decimal("10"), deadline=date(2030, 1, 1)
        )
        assert temp_db.get_goal(other_id, goal_id) is None
        assert temp_db.update_goal(other_id, goal_id, title="Mine now") is None
        assert temp_db.delete_goal(other_id, goal_id) is False


class TestConstraintViolations:
    """A rejected write leaves the store usable."""

    def test_duplicate_email_is_conflict(self, temp_db, owner_id):
        with pytest.raises(ConflictError, match="owner@example.com"):
            temp_db.create_user(name="Copy", email="owner@example.com", password_hash="y")

        assert temp_db.get_user_by_email("owner@example.com").id == owner_id
        assert temp_db.create_user(name="Next", email="next@example.com", password_hash="z") != owner_id

    def test_update_to_taken_email_is_conflict(self, temp_db, owner_id, other_id):
        with pytest.raises(ConflictError):
            temp_db.update_user(other_id, email="owner@example.com", bio="changed")

        other = temp_db.get_user(other_id)
        assert other.email == "other@example.com"
        assert other.bio is None


class TestTransactionOrdering:
    """Sorting, ties, and paging at the store level."""

    def test_ties_break_by_insertion_order(self, temp_db, owner_id):
        ids = [
            temp_db.create_transaction(
                user_id=owner_id, amount=Decimal("10"), type="expense", category="Same", date=date(2024, 3, 1)
            )
            for _ in range(4)
        ]

        ascending = [t.id for t in temp_db.list_transactions(owner_id, sort_by="amount", descending=False)]
        descending = [t.id for t in temp_db.list_transactions(owner_id, sort_by="amount", descending=True)]
        assert ascending == ids
        assert descending == ids

    def test_offset_and_limit(self, temp_db, owner_id):
        for day in range(1, 8):
            temp_db.create_transaction(
                user_id=owner_id, amount=Decimal(day), type="expense", category="X", date=date(2024, 1, day)
            )

        page = temp_db.list_transactions(owner_id, sort_by="date", descending=False, offset=2, limit=3)
        assert [t.date.day for t in page] == [3, 4, 5]

    def test_search_matches_category_or_note(self, temp_db, owner_id):
        temp_db.create_transaction(
            user_id=owner_id, amount=Decimal("1"), type="expense", category="Groceries", date=date(2024, 1, 1)
        )
        temp_db.create_transaction(
            user_id=owner_id,
            amount=Decimal("2"),
            type="expense",
            category="Misc",
            note="grocery run",
            date=date(2024, 1, 2),
        )
        temp_db.create_transaction(
            user_id=owner_id, amount=Decimal("3"), type="expense", category="Fuel", date=date(2024, 1, 3)
        )

        assert temp_db.count_transactions(owner_id, search="GROCER") == 2

    def test_search_wildcards_match_literally(self, temp_db, owner_id):
        temp_db.create_transaction(
            user_id=owner_id, amount=Decimal("1"), type="expense", category="50% off", date=date(2024, 1, 1)
        )
        temp_db.create_transaction(
            user_id=owner_id, amount=Decimal("2"), type="expense", category="Books", note="snake_case", date=date(2024, 1, 2)
        )
        temp_db.create_transaction(
            user_id=owner_id, amount=Decimal("3"), type="expense", category="Fuel", date=date(2024, 1, 3)
        )

        assert temp_db.count_transactions(owner_id, search="%") == 1
        assert temp_db.count_transactions(owner_id, search="_") == 1
        assert temp_db.count_transactions(owner_id, search="\\") == 0


class TestGoalStatusPredicate:
    """The store-level status filter matches the derived status rule."""

    today = date(2024, 6, 15)

    @pytest.fixture
    def goals(self, temp_db, owner_id):
        specs = {
            "done-late": (Decimal("100"), Decimal("100"), date(2024, 1, 1)),
            "done-early": (Decimal("150"), Decimal("100"), date(2025, 1, 1)),
            "late": (Decimal("10"), Decimal("100"), date(2024, 6, 14)),
            "due-today": (Decimal("10"), Decimal("100"), date(2024, 6, 15)),
            "future": (Decimal("0"), Decimal("100"), date(2025, 6, 1)),
        }
        for title, (current, target, deadline) in specs.items():
            temp_db.create_goal(
                user_id=owner_id,
                title=title,
                target_amount=target,
                current_amount=current,
                deadline=deadline,
            )
        return specs

    @pytest.mark.parametrize(
        "status,titles",
        [
            (GoalStatus.COMPLETED, {"done-late", "done-early"}),
            (GoalStatus.OVERDUE, {"late"}),
            (GoalStatus.ACTIVE, {"due-today", "future"}),
        ],
    )
    def test_status_filter(self, temp_db, owner_id, goals, status, titles):
        listed = temp_db.list_goals(owner_id, status=status, today=self.today)
        assert {g.title for g in listed} == titles
        assert temp_db.count_goals(owner_id, status=status, today=self.today) == len(titles)

    def test_no_filter(self, temp_db, owner_id, goals):
        assert temp_db.count_goals(owner_id, today=self.today) == 5


class TestStoreFailures:
    """Connectivity errors surface as StoreUnavailableError."""

    def test_unreachable_database(self, tmp_path):
        missing_dir = tmp_path / "no" / "such" / "dir"
        with pytest.raises(StoreUnavailableError):
            SQLAlchemyDatabase(f"sqlite:///{missing_dir}/db.sqlite")

    def test_operational_error_during_query(self, temp_db, owner_id, monkeypatch):
        session = temp_db._get_session()

        def broken_query(*args, **kwargs):
            raise OperationalError("SELECT 1", {}, Exception("database is locked"))

        monkeypatch.setattr(session, "query", broken_query)
        with pytest.raises(StoreUnavailableError):
            temp_db.list_transactions(owner_id)
