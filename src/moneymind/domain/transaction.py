"""Transaction domain service."""

import logging
from typing import Any, Optional
from datetime import date
from decimal import Decimal

from moneymind.database.base import Database
from moneymind.domain import aggregation
from moneymind.domain.entities import (
    FinancialSummary,
    Identity,
    MonthlyBucket,
    Page,
    SortOrder,
    Transaction as TransactionEntity,
    TransactionQuery,
    TransactionType,
)
from moneymind.domain.errors import (
    NotFoundError,
    ValidationError,
    invalid_field,
    missing_field,
    transaction_not_found,
)
from moneymind.domain.query import total_pages
from moneymind.utils.amount_parser import to_decimal
from moneymind.utils.date_parser import coerce_date

logger = logging.getLogger(__name__)

MAX_CATEGORY_LENGTH = 50
MAX_AMOUNT = Decimal("10000000000")
CENTS = Decimal("0.01")


def validate_amount(value: Any, field: str = "amount") -> Decimal:
    """Parse an amount: non-negative, below MAX_AMOUNT, whole cents only."""
    if value is None or value == "":
        raise ValidationError(missing_field(field), field=field)
    try:
        amount = to_decimal(value)
    except ValueError as e:
        raise ValidationError(invalid_field(field, "must be a number"), field=field) from e
    if amount < 0:
        raise ValidationError(invalid_field(field, "must not be negative"), field=field)
    # Stored as Numeric(12, 2)
    if amount >= MAX_AMOUNT:
        raise ValidationError(invalid_field(field, f"must be less than {MAX_AMOUNT:,}"), field=field)
    if amount != amount.quantize(CENTS):
        raise ValidationError(invalid_field(field, "must have at most 2 decimal places"), field=field)
    return amount


def validate_type(value: Any) -> TransactionType:
    if value is None or value == "":
        raise ValidationError(missing_field("type"), field="type")
    try:
        return TransactionType(str(value).strip().lower())
    except ValueError as e:
        raise ValidationError(invalid_field("type", "must be 'income' or 'expense'"), field="type") from e


def validate_category(value: Any) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(missing_field("category"), field="category")
    category = str(value).strip()
    if len(category) > MAX_CATEGORY_LENGTH:
        raise ValidationError(
            invalid_field("category", f"must be at most {MAX_CATEGORY_LENGTH} characters"),
            field="category",
        )
    return category


def validate_date(value: Any, field: str = "date") -> date:
    if value is None or value == "":
        raise ValidationError(missing_field(field), field=field)
    try:
        return coerce_date(value)
    except ValueError as e:
        raise ValidationError(invalid_field(field, "is not a valid date"), field=field) from e


class TransactionService:
    """Service for managing a user's transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_transaction(
        self,
        identity: Identity,
        amount: Any,
        type: Any,
        category: Any,
        date: Any,
        note: Optional[str] = None,
    ) -> TransactionEntity:
        """Create a transaction owned by the caller.

        Args:
            identity: Authenticated caller
            amount: Non-negative amount (str, int, float, or Decimal)
            type: "income" or "expense"
            category: Short category label
            date: Transaction date
            note: Optional note (defaults to empty)

        Returns:
            The persisted transaction

        Raises:
            ValidationError: If a field is missing or malformed
        """
        txn_amount = validate_amount(amount)
        txn_type = validate_type(type)
        txn_category = validate_category(category)
        txn_date = validate_date(date)

        transaction_id = self.db.create_transaction(
            user_id=identity.user_id,
            amount=txn_amount,
            type=txn_type,
            category=txn_category,
            note=note or "",
            date=txn_date,
        )
        logger.info("User %s created transaction %s", identity.user_id, transaction_id)
        return self.get_transaction(identity, transaction_id)

    def get_transaction(self, identity: Identity, transaction_id: int) -> TransactionEntity:
        """Get one of the caller's transactions.

        Raises:
            NotFoundError: If it does not exist or belongs to another user
        """
        txn = self.db.get_transaction(identity.user_id, transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn

    def update_transaction(
        self,
        identity: Identity,
        transaction_id: int,
        amount: Any = None,
        type: Any = None,
        category: Any = None,
        note: Optional[str] = None,
        date: Any = None,
    ) -> TransactionEntity:
        """Update the given fields of one of the caller's transactions.

        Every provided field is validated before anything is written, so the
        update applies fully or not at all.

        Raises:
            ValidationError: If a provided field is malformed
            NotFoundError: If it does not exist or belongs to another user
        """
        new_amount = validate_amount(amount) if amount is not None else None
        new_type = validate_type(type) if type is not None else None
        new_category = validate_category(category) if category is not None else None
        new_date = validate_date(date) if date is not None else None

        txn = self.db.update_transaction(
            user_id=identity.user_id,
            transaction_id=transaction_id,
            amount=new_amount,
            type=new_type,
            category=new_category,
            note=note,
            date=new_date,
        )
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        logger.info("User %s updated transaction %s", identity.user_id, transaction_id)
        return txn

    def delete_transaction(self, identity: Identity, transaction_id: int) -> None:
        """Delete one of the caller's transactions.

        Raises:
            NotFoundError: If it does not exist or belongs to another user
        """
        if not self.db.delete_transaction(identity.user_id, transaction_id):
            raise NotFoundError(transaction_not_found(transaction_id))
        logger.info("User %s deleted transaction %s", identity.user_id, transaction_id)

    def list_transactions(self, identity: Identity, query: TransactionQuery) -> Page[TransactionEntity]:
        """Return one page of the caller's transactions.

        Args:
            identity: Authenticated caller
            query: Normalized request from ``build_transaction_query``

        Returns:
            Page with the matching items and the total count across all pages
        """
        total = self.db.count_transactions(identity.user_id, type=query.type, search=query.search)
        items: list[TransactionEntity] = []
        if total > query.offset:
            items = self.db.list_transactions(
                identity.user_id,
                type=query.type,
                search=query.search,
                sort_by=query.sort_by,
                descending=query.order == SortOrder.DESC,
                offset=query.offset,
                limit=query.limit,
            )
        return Page(
            items=tuple(items),
            total=total,
            page=query.page,
            limit=query.limit,
            total_pages=total_pages(total, query.limit),
        )

    def all_transactions(self, identity: Identity) -> list[TransactionEntity]:
        """All of the caller's transactions, newest first."""
        return self.db.list_transactions(identity.user_id)

    def get_summary(self, identity: Identity) -> FinancialSummary:
        """Income, expense, and balance over the caller's full transaction set."""
        return aggregation.summarize(self.all_transactions(identity))

    def get_monthly(self, identity: Identity, year: Optional[int] = None) -> list[MonthlyBucket]:
        """Twelve monthly income/expense buckets over the caller's transactions."""
        return aggregation.monthly_buckets(self.all_transactions(identity), year=year)

    def recent_transactions(self, identity: Identity, count: int = 5) -> list[TransactionEntity]:
        """The caller's most recently dated transactions."""
        return self.db.list_transactions(identity.user_id, limit=count)
