"""Mapper functions to convert SQLAlchemy models to domain entities.

Password hashes are not mapped; they stay in the store layer.
"""

from moneymind.domain import entities as domain
from moneymind.database.models import (
    User as ORMUser,
    Transaction as ORMTransaction,
    Goal as ORMGoal,
)


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        name=orm_user.name,
        email=orm_user.email,
        created_at=orm_user.created_at,
        phone=orm_user.phone,
        bio=orm_user.bio,
        profile_photo=orm_user.profile_photo,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        user_id=orm_transaction.user_id,
        amount=orm_transaction.amount,
        type=domain.TransactionType(orm_transaction.type),
        category=orm_transaction.category,
        note=orm_transaction.note or "",
        date=orm_transaction.date,
        created_at=orm_transaction.created_at,
    )


def goal_to_domain(orm_goal: ORMGoal) -> domain.Goal:
    """Convert SQLAlchemy Goal model to domain Goal entity."""
    return domain.Goal(
        id=orm_goal.id,
        user_id=orm_goal.user_id,
        title=orm_goal.title,
        target_amount=orm_goal.target_amount,
        current_amount=orm_goal.current_amount,
        deadline=orm_goal.deadline,
        created_at=orm_goal.created_at,
    )
