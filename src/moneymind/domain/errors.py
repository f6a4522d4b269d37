"""Shared domain error messages and error types."""

from typing import Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class NotFoundError(DomainError):
    """Requested record does not exist or is not owned by the caller."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class AuthenticationError(DomainError):
    """Missing or invalid identity."""


class StoreUnavailableError(DomainError):
    """The backing record store could not be reached."""


def transaction_not_found(transaction_id: int) -> str:
    """Return message for a missing or foreign transaction."""
    return f"Transaction {transaction_id} not found"


def goal_not_found(goal_id: int) -> str:
    """Return message for a missing or foreign goal."""
    return f"Goal {goal_id} not found"


def user_not_found(user_id: int) -> str:
    return f"User {user_id} not found"


def duplicate_user_email(email: str) -> str:
    """Return message when signing up with an email already in use."""
    return f"User with email '{email}' already exists"


def missing_field(field: str) -> str:
    return f"Field '{field}' is required"


def invalid_field(field: str, reason: str) -> str:
    """Return message for a field that is present but malformed."""
    return f"Field '{field}' {reason}"
