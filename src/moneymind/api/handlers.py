"""Request/response mapping for the moneymind API.

These functions sit between a web framework and the domain services: they take
the caller's ``Identity`` plus raw query parameters or a decoded JSON body and
return JSON-ready dicts. Routing and token verification belong to the
framework; an unauthenticated request arrives here with ``identity=None``.
"""

import logging
from decimal import Decimal
from typing import Any, Callable, Mapping, Optional
from datetime import date

from moneymind.api import serializers
from moneymind.database.base import Database
from moneymind.domain import aggregation
from moneymind.domain.entities import Identity
from moneymind.domain.errors import (
    AuthenticationError,
    ConflictError,
    DomainError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
    goal_not_found,
    invalid_field,
    transaction_not_found,
)
from moneymind.domain.goal import GoalService
from moneymind.domain.query import build_goal_query, build_transaction_query
from moneymind.domain.transaction import TransactionService
from moneymind.domain.user import UserService
from moneymind.utils.amount_parser import to_decimal
from moneymind.utils.expression import evaluate_expression, format_result

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal server error"
ACCESS_DENIED = "Access token required"

JSON = dict[str, Any]


def require_identity(identity: Optional[Identity]) -> Identity:
    if identity is None:
        raise AuthenticationError(ACCESS_DENIED)
    return identity


def parse_record_id(raw: Any, not_found: Callable[[Any], str]) -> int:
    """Path IDs that are not integers cannot name a record: report NotFound."""
    try:
        return int(str(raw).strip())
    except ValueError:
        raise NotFoundError(not_found(raw)) from None


def error_response(error: Exception) -> tuple[int, JSON]:
    """Map an exception to an HTTP status and ``{"error": message}`` body.

    Anything outside the domain taxonomy is reported as a generic 500 without
    leaking its message.
    """
    if isinstance(error, ValidationError):
        body: JSON = {"error": str(error)}
        if error.field:
            body["field"] = error.field
        return 400, body
    if isinstance(error, ConflictError):
        return 400, {"error": str(error)}
    if isinstance(error, AuthenticationError):
        return 401, {"error": str(error)}
    if isinstance(error, NotFoundError):
        return 404, {"error": str(error)}
    if isinstance(error, StoreUnavailableError):
        return 500, {"error": INTERNAL_ERROR}
    logger.exception("Unhandled error while serving request")
    return 500, {"error": INTERNAL_ERROR}


class FinanceAPI:
    """All endpoints of the API as plain methods."""

    def __init__(self, db: Database, user_service: Optional[UserService] = None):
        self.db = db
        self.users = user_service or UserService(db)
        self.transactions = TransactionService(db)
        self.goals = GoalService(db)

    def handle(self, endpoint: Callable[..., Any], *args: Any, **kwargs: Any) -> tuple[int, Any]:
        """Call an endpoint and return ``(status, body)``.

        Successful creates are 201, everything else 200.
        """
        try:
            body = endpoint(*args, **kwargs)
        except DomainError as e:
            return error_response(e)
        status = 201 if getattr(endpoint, "__name__", "").startswith(("create_", "signup")) else 200
        return status, body

    # Users
    def signup(self, body: Mapping[str, Any]) -> JSON:
        user = self.users.register(body.get("name"), body.get("email"), body.get("password"))
        return {"message": "User created successfully", "user": serializers.user_to_json(user)}

    def login(self, body: Mapping[str, Any]) -> JSON:
        identity = self.users.authenticate(body.get("email"), body.get("password"))
        user = self.users.get_profile(identity)
        return {"message": "Login successful", "user": serializers.user_to_json(user)}

    def get_profile(self, identity: Optional[Identity]) -> JSON:
        user = self.users.get_profile(require_identity(identity))
        return {"user": serializers.user_to_json(user)}

    def update_profile(self, identity: Optional[Identity], body: Mapping[str, Any]) -> JSON:
        user = self.users.update_profile(
            require_identity(identity),
            name=body.get("name"),
            email=body.get("email"),
            phone=body.get("phone"),
            bio=body.get("bio"),
            profile_photo=body.get("profilePhoto"),
        )
        return {"user": serializers.user_to_json(user)}

    # Transactions
    def list_transactions(self, identity: Optional[Identity], params: Mapping[str, Any]) -> JSON:
        query = build_transaction_query(
            page=params.get("page"),
            limit=params.get("limit"),
            type=params.get("type"),
            sort_by=params.get("sortBy"),
            order=params.get("order"),
            search=params.get("search"),
        )
        page = self.transactions.list_transactions(require_identity(identity), query)
        return serializers.page_to_json(page, "transactions", serializers.transaction_to_json)

    def get_transaction(self, identity: Optional[Identity], transaction_id: Any) -> JSON:
        caller = require_identity(identity)
        txn = self.transactions.get_transaction(caller, parse_record_id(transaction_id, transaction_not_found))
        return serializers.transaction_to_json(txn)

    def create_transaction(self, identity: Optional[Identity], body: Mapping[str, Any]) -> JSON:
        txn = self.transactions.create_transaction(
            require_identity(identity),
            amount=body.get("amount"),
            type=body.get("type"),
            category=body.get("category"),
            date=body.get("date"),
            note=body.get("note"),
        )
        return serializers.transaction_to_json(txn)

    def update_transaction(
        self, identity: Optional[Identity], transaction_id: Any, body: Mapping[str, Any]
    ) -> JSON:
        caller = require_identity(identity)
        txn_id = parse_record_id(transaction_id, transaction_not_found)
        txn = self.transactions.update_transaction(
            caller,
            txn_id,
            amount=body.get("amount"),
            type=body.get("type"),
            category=body.get("category"),
            note=body.get("note"),
            date=body.get("date"),
        )
        return serializers.transaction_to_json(txn)

    def delete_transaction(self, identity: Optional[Identity], transaction_id: Any) -> JSON:
        caller = require_identity(identity)
        self.transactions.delete_transaction(caller, parse_record_id(transaction_id, transaction_not_found))
        return {"message": "Transaction deleted successfully"}

    def summary(self, identity: Optional[Identity]) -> JSON:
        return serializers.summary_to_json(self.transactions.get_summary(require_identity(identity)))

    def monthly(self, identity: Optional[Identity], params: Mapping[str, Any]) -> list[JSON]:
        year = None
        if params.get("year") not in (None, ""):
            try:
                year = int(str(params["year"]))
            except ValueError as e:
                raise ValidationError(invalid_field("year", "must be an integer"), field="year") from e
        buckets = self.transactions.get_monthly(require_identity(identity), year=year)
        return serializers.monthly_to_json(buckets)

    # Goals
    def list_goals(
        self, identity: Optional[Identity], params: Mapping[str, Any], today: Optional[date] = None
    ) -> JSON:
        query = build_goal_query(
            page=params.get("page"),
            limit=params.get("limit"),
            status=params.get("status"),
            sort_by=params.get("sortBy"),
            order=params.get("order"),
        )
        page = self.goals.list_goals(require_identity(identity), query, today=today)
        return serializers.page_to_json(page, "goals", serializers.goal_to_json)

    def get_goal(self, identity: Optional[Identity], goal_id: Any) -> JSON:
        caller = require_identity(identity)
        goal = self.goals.get_goal(caller, parse_record_id(goal_id, goal_not_found))
        return serializers.goal_to_json(self.goals.view(goal))

    def create_goal(self, identity: Optional[Identity], body: Mapping[str, Any]) -> JSON:
        goal = self.goals.create_goal(
            require_identity(identity),
            title=body.get("title"),
            target_amount=body.get("targetAmount"),
            deadline=body.get("deadline"),
            current_amount=body.get("currentAmount"),
        )
        return serializers.goal_to_json(self.goals.view(goal))

    def update_goal(self, identity: Optional[Identity], goal_id: Any, body: Mapping[str, Any]) -> JSON:
        caller = require_identity(identity)
        goal = self.goals.update_goal(
            caller,
            parse_record_id(goal_id, goal_not_found),
            title=body.get("title"),
            target_amount=body.get("targetAmount"),
            current_amount=body.get("currentAmount"),
            deadline=body.get("deadline"),
        )
        return serializers.goal_to_json(self.goals.view(goal))

    def delete_goal(self, identity: Optional[Identity], goal_id: Any) -> JSON:
        caller = require_identity(identity)
        self.goals.delete_goal(caller, parse_record_id(goal_id, goal_not_found))
        return {"message": "Goal deleted successfully"}

    # Calculators
    def sip(self, params: Mapping[str, Any]) -> JSON:
        """SIP projection; missing or unparsable inputs count as 0."""
        values = []
        for key in ("amount", "rate", "years"):
            try:
                values.append(to_decimal(params.get(key)))
            except ValueError:
                values.append(Decimal("0"))
        return serializers.sip_to_json(aggregation.sip_projection(*values))

    def calculate(self, body: Mapping[str, Any]) -> JSON:
        result = evaluate_expression(body.get("expression") or "")
        return {"result": format_result(result)}
