"""Goal domain service."""

import logging
from typing import Any, Optional
from datetime import date
from decimal import Decimal

from moneymind.database.base import Database
from moneymind.domain import aggregation
from moneymind.domain.entities import (
    Goal as GoalEntity,
    GoalQuery,
    GoalView,
    Identity,
    Page,
    SortOrder,
)
from moneymind.domain.errors import (
    NotFoundError,
    ValidationError,
    goal_not_found,
    invalid_field,
    missing_field,
)
from moneymind.domain.query import total_pages
from moneymind.domain.transaction import validate_amount, validate_date

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 100


def validate_title(value: Any) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(missing_field("title"), field="title")
    title = str(value).strip()
    if len(title) > MAX_TITLE_LENGTH:
        raise ValidationError(
            invalid_field("title", f"must be at most {MAX_TITLE_LENGTH} characters"), field="title"
        )
    return title


def validate_target(value: Any) -> Decimal:
    """Target amounts must be strictly positive."""
    target = validate_amount(value, field="targetAmount")
    if target == 0:
        raise ValidationError(invalid_field("targetAmount", "must be greater than zero"), field="targetAmount")
    return target


class GoalService:
    """Service for managing a user's savings goals."""

    def __init__(self, db: Database):
        """Initialize goal service.

        Args:
            db: Database instance
        """
        self.db = db

    def view(self, goal: GoalEntity, today: Optional[date] = None) -> GoalView:
        """Attach derived progress (capped at 100) and status to a goal."""
        return GoalView(
            goal=goal,
            progress=aggregation.goal_progress(goal.current_amount, goal.target_amount),
            status=aggregation.goal_status(
                goal.current_amount, goal.target_amount, goal.deadline, today=today
            ),
        )

    def create_goal(
        self,
        identity: Identity,
        title: Any,
        target_amount: Any,
        deadline: Any,
        current_amount: Any = None,
    ) -> GoalEntity:
        """Create a goal owned by the caller.

        Args:
            identity: Authenticated caller
            title: Goal title
            target_amount: Amount to save, greater than zero
            deadline: Date the goal should be reached by
            current_amount: Amount saved so far (defaults to 0)

        Returns:
            The persisted goal

        Raises:
            ValidationError: If a field is missing or malformed
        """
        goal_title = validate_title(title)
        target = validate_target(target_amount)
        goal_deadline = validate_date(deadline, field="deadline")
        current = Decimal("0")
        if current_amount is not None and current_amount != "":
            current = validate_amount(current_amount, field="currentAmount")

        goal_id = self.db.create_goal(
            user_id=identity.user_id,
            title=goal_title,
            target_amount=target,
            current_amount=current,
            deadline=goal_deadline,
        )
        logger.info("User %s created goal %s", identity.user_id, goal_id)
        return self.get_goal(identity, goal_id)

    def get_goal(self, identity: Identity, goal_id: int) -> GoalEntity:
        """Get one of the caller's goals.

        Raises:
            NotFoundError: If it does not exist or belongs to another user
        """
        goal = self.db.get_goal(identity.user_id, goal_id)
        if goal is None:
            raise NotFoundError(goal_not_found(goal_id))
        return goal

    def update_goal(
        self,
        identity: Identity,
        goal_id: int,
        title: Any = None,
        target_amount: Any = None,
        current_amount: Any = None,
        deadline: Any = None,
    ) -> GoalEntity:
        """Update the given fields of one of the caller's goals.

        Raises:
            ValidationError: If a provided field is malformed
            NotFoundError: If it does not exist or belongs to another user
        """
        new_title = validate_title(title) if title is not None else None
        new_target = validate_target(target_amount) if target_amount is not None else None
        new_current = (
            validate_amount(current_amount, field="currentAmount") if current_amount is not None else None
        )
        new_deadline = validate_date(deadline, field="deadline") if deadline is not None else None

        goal = self.db.update_goal(
            user_id=identity.user_id,
            goal_id=goal_id,
            title=new_title,
            target_amount=new_target,
            current_amount=new_current,
            deadline=new_deadline,
        )
        if goal is None:
            raise NotFoundError(goal_not_found(goal_id))
        logger.info("User %s updated goal %s", identity.user_id, goal_id)
        return goal

    def contribute(self, identity: Identity, goal_id: int, amount: Any) -> GoalEntity:
        """Add a saving to a goal's current amount."""
        contribution = validate_amount(amount)
        goal = self.get_goal(identity, goal_id)
        return self.update_goal(identity, goal_id, current_amount=goal.current_amount + contribution)

    def delete_goal(self, identity: Identity, goal_id: int) -> None:
        """Delete one of the caller's goals.

        Raises:
            NotFoundError: If it does not exist or belongs to another user
        """
        if not self.db.delete_goal(identity.user_id, goal_id):
            raise NotFoundError(goal_not_found(goal_id))
        logger.info("User %s deleted goal %s", identity.user_id, goal_id)

    def list_goals(
        self, identity: Identity, query: GoalQuery, today: Optional[date] = None
    ) -> Page[GoalView]:
        """Return one page of the caller's goals with derived fields.

        The status filter is applied by the store before pagination, so
        ``total`` and ``total_pages`` count every matching goal, not only the
        ones on this page.

        Args:
            identity: Authenticated caller
            query: Normalized request from ``build_goal_query``
            today: Reference date for overdue detection (defaults to today)
        """
        if today is None:
            today = date.today()
        total = self.db.count_goals(identity.user_id, status=query.status, today=today)
        goals: list[GoalEntity] = []
        if total > query.offset:
            goals = self.db.list_goals(
                identity.user_id,
                status=query.status,
                today=today,
                sort_by=query.sort_by,
                descending=query.order == SortOrder.DESC,
                offset=query.offset,
                limit=query.limit,
            )
        return Page(
            items=tuple(self.view(goal, today=today) for goal in goals),
            total=total,
            page=query.page,
            limit=query.limit,
            total_pages=total_pages(total, query.limit),
        )
