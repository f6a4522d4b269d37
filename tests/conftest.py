"""Shared pytest fixtures for moneymind tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from moneymind.database.factories import create_sqlite_database
from moneymind.domain.goal import GoalService
from moneymind.domain.transaction import TransactionService
from moneymind.domain.user import UserService

PASSWORD = "s3cret-pass"


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    """Use the minimum bcrypt cost so hashing does not slow the suite down."""
    monkeypatch.setenv("MONEYMIND_BCRYPT_ROUNDS", "4")


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def user_service(temp_db):
    """Create a UserService with a temporary database."""
    return UserService(temp_db, rounds=4)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def goal_service(temp_db):
    """Create a GoalService with a temporary database."""
    return GoalService(temp_db)


@pytest.fixture
def alice(user_service):
    """Identity of a registered user."""
    user_service.register(name="Alice", email="alice@example.com", password=PASSWORD)
    return user_service.authenticate("alice@example.com", PASSWORD)


@pytest.fixture
def bob(user_service):
    """Identity of a second, unrelated user."""
    user_service.register(name="Bob", email="bob@example.com", password=PASSWORD)
    return user_service.authenticate("bob@example.com", PASSWORD)


@pytest.fixture
def sample_transactions(transaction_service, alice):
    """The three transactions from the dashboard example, owned by alice."""
    return [
        transaction_service.create_transaction(
            alice, amount=Decimal("1000"), type="income", category="Salary", date=date(2024, 1, 5)
        ),
        transaction_service.create_transaction(
            alice, amount=Decimal("300"), type="expense", category="Rent", date=date(2024, 1, 10)
        ),
        transaction_service.create_transaction(
            alice,
            amount=Decimal("200"),
            type="expense",
            category="Food",
            date=date(2024, 2, 1),
            note="groceries",
        ),
    ]


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def cli_args(temp_db, alice):
    """Global CLI options pointing at the temp database, logged in as alice."""
    return ["--db-path", temp_db.database_path, "--email", "alice@example.com", "--password", PASSWORD]
