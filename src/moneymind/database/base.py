"""Abstract database interface.

Every transaction and goal operation takes the owning ``user_id``; records of
other users are invisible to it.
"""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from moneymind.domain.entities import (
    User,
    Transaction,
    TransactionType,
    Goal,
    GoalStatus,
)


class Database(ABC):
    """Abstract database interface for moneymind."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # User operations
    @abstractmethod
    def create_user(self, name: str, email: str, password_hash: str) -> int:
        """Create a user. Returns user ID."""
        pass

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        pass

    @abstractmethod
    def get_password_hash(self, email: str) -> Optional[str]:
        """Get the stored password hash for an email, or None if no such user."""
        pass

    @abstractmethod
    def update_user(
        self,
        user_id: int,
        name: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        bio: Optional[str] = None,
        profile_photo: Optional[str] = None,
    ) -> Optional[User]:
        """Update profile fields that are not None. Returns the updated user."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        user_id: int,
        amount: Decimal,
        type: TransactionType,
        category: str,
        date: date,
        note: str = "",
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, user_id: int, transaction_id: int) -> Optional[Transaction]:
        """Get a transaction owned by ``user_id``."""
        pass

    @abstractmethod
    def update_transaction(
        self,
        user_id: int,
        transaction_id: int,
        amount: Optional[Decimal] = None,
        type: Optional[TransactionType] = None,
        category: Optional[str] = None,
        note: Optional[str] = None,
        date: Optional[date] = None,
    ) -> Optional[Transaction]:
        """Update fields that are not None in one commit.

        Returns the updated transaction, or None if ``user_id`` does not own it.
        """
        pass

    @abstractmethod
    def delete_transaction(self, user_id: int, transaction_id: int) -> bool:
        """Delete a transaction. Returns False if ``user_id`` does not own it."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        user_id: int,
        type: Optional[TransactionType] = None,
        search: Optional[str] = None,
        sort_by: str = "date",
        descending: bool = True,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> list[Transaction]:
        """List a user's transactions.

        Args:
            user_id: Owner ID
            type: Optional type filter
            search: Optional case-insensitive substring of category or note
            sort_by: One of date, amount, category
            descending: Sort direction; ties always break by ID ascending
            offset: Number of matching records to skip
            limit: Maximum number of records, or None for all
        """
        pass

    @abstractmethod
    def count_transactions(
        self,
        user_id: int,
        type: Optional[TransactionType] = None,
        search: Optional[str] = None,
    ) -> int:
        """Count a user's transactions matching the same filters as list_transactions."""
        pass

    # Goal operations
    @abstractmethod
    def create_goal(
        self,
        user_id: int,
        title: str,
        target_amount: Decimal,
        deadline: date,
        current_amount: Decimal = Decimal("0"),
    ) -> int:
        """Create a goal. Returns goal ID."""
        pass

    @abstractmethod
    def get_goal(self, user_id: int, goal_id: int) -> Optional[Goal]:
        """Get a goal owned by ``user_id``."""
        pass

    @abstractmethod
    def update_goal(
        self,
        user_id: int,
        goal_id: int,
        title: Optional[str] = None,
        target_amount: Optional[Decimal] = None,
        current_amount: Optional[Decimal] = None,
        deadline: Optional[date] = None,
    ) -> Optional[Goal]:
        """Update fields that are not None. Returns None if not owned."""
        pass

    @abstractmethod
    def delete_goal(self, user_id: int, goal_id: int) -> bool:
        """Delete a goal. Returns False if ``user_id`` does not own it."""
        pass

    @abstractmethod
    def list_goals(
        self,
        user_id: int,
        status: Optional[GoalStatus] = None,
        today: Optional[date] = None,
        sort_by: str = "created_at",
        descending: bool = True,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> list[Goal]:
        """List a user's goals.

        The status filter is evaluated by the store against ``today`` so that
        pagination and counts see the same filtered set.
        """
        pass

    @abstractmethod
    def count_goals(
        self,
        user_id: int,
        status: Optional[GoalStatus] = None,
        today: Optional[date] = None,
    ) -> int:
        """Count a user's goals matching the same filters as list_goals."""
        pass
