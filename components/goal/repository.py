"""Repository for goal operations."""

from decimal import Decimal
from typing import List, Optional, Tuple

import structlog
from sqlalchemy import select, update

from components.core.exceptions import NotFoundError, ValidationError
from components.core.money import to_amount
from components.core.repository import BaseRepository
from components.goal.models import Goal
from components.goal import schemas
from components.goal.utils import progress_percentage
from components.transaction.models import Transaction

logger = structlog.get_logger(__name__)


def _clean_name(name: Optional[str]) -> str:
    if name is None or not name.strip():
        raise ValidationError("Goal name cannot be empty")
    return name.strip()


def _clean_target(target) -> Decimal:
    amount = to_amount(target, "target")
    if amount <= 0:
        raise ValidationError("Goal target must be greater than zero")
    return amount


def _clean_color(color: Optional[str]) -> str:
    if color is None or not color.strip():
        return schemas.DEFAULT_COLOR
    return color.strip()


class GoalRepository(BaseRepository):
    """Repository for goal operations."""

    async def create(self, user_id: int, goal: schemas.GoalCreate) -> Goal:
        """Create a new goal with nothing accumulated yet."""
        db_goal = Goal(
            user_id=user_id,
            name=_clean_name(goal.name),
            target=_clean_target(goal.target),
            color=_clean_color(goal.color),
            current=Decimal("0.00"),
        )
        self.session.add(db_goal)
        await self._commit()
        await self.session.refresh(db_goal)
        logger.info("goal_created", user_id=user_id, goal_id=db_goal.id, target=str(db_goal.target))
        return db_goal

    async def get(self, user_id: int, goal_id: int) -> Optional[Goal]:
        """Get a goal of the user by ID."""
        result = await self._execute(
            select(Goal).where(Goal.id == goal_id, Goal.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_or_raise(self, user_id: int, goal_id: int) -> Goal:
        goal = await self.get(user_id, goal_id)
        if goal is None:
            raise NotFoundError("Goal", goal_id)
        return goal

    async def get_all(self, user_id: int) -> List[Goal]:
        """Get all goals of the user in creation order."""
        result = await self._execute(
            select(Goal).where(Goal.user_id == user_id).order_by(Goal.id)
        )
        return list(result.scalars().all())

    async def update(self, user_id: int, goal_id: int, changes: schemas.GoalUpdate) -> Goal:
        """Rename, recolor or retarget a goal."""
        db_goal = await self.get_or_raise(user_id, goal_id)
        fields = changes.model_dump(exclude_unset=True)

        name = _clean_name(fields["name"]) if "name" in fields else db_goal.name
        target = _clean_target(fields["target"]) if "target" in fields else db_goal.target
        color = _clean_color(fields["color"]) if "color" in fields else db_goal.color

        db_goal.name = name
        db_goal.target = target
        db_goal.color = color
        await self._commit()
        await self.session.refresh(db_goal)
        logger.info("goal_updated", user_id=user_id, goal_id=goal_id, fields=sorted(fields))
        return db_goal

    async def delete(self, user_id: int, goal_id: int) -> None:
        """
        Delete a goal.

        Linked transactions are kept and unlinked (goal_id set to NULL)
        in the same commit.
        """
        db_goal = await self.get_or_raise(user_id, goal_id)
        result = await self._execute(
            update(Transaction)
            .where(Transaction.goal_id == goal_id, Transaction.user_id == user_id)
            .values(goal_id=None)
        )
        await self.session.delete(db_goal)
        await self._commit()
        logger.info("goal_deleted", user_id=user_id, goal_id=goal_id, unlinked=result.rowcount)

    def adjust_current(self, goal: Goal, delta: Decimal) -> None:
        """Add delta to the goal's accumulated amount. The caller commits."""
        self.apply_adjustments([(goal, delta)])

    def apply_adjustments(self, adjustments: List[Tuple[Goal, Decimal]]) -> None:
        """
        Add each delta to its goal's accumulated amount. The caller commits.

        Every new total is checked before any goal is changed, so a total
        that does not fit leaves all goals untouched.
        """
        totals = {}
        for goal, delta in adjustments:
            if not delta:
                continue
            base = totals.get(id(goal), (goal, to_amount(goal.current or 0, "current")))[1]
            totals[id(goal)] = (goal, to_amount(base + delta, "Goal current"))

        for goal, current in totals.values():
            logger.info(
                "goal_current_adjusted",
                goal_id=goal.id,
                previous=str(goal.current),
                current=str(current),
            )
            goal.current = current

    async def summary(self, user_id: int) -> schemas.GoalsSummary:
        """Totals across every goal of the user."""
        goals = await self.get_all(user_id)
        total_saved = sum(float(goal.current) for goal in goals)
        total_target = sum(float(goal.target) for goal in goals)
        total_progress = (total_saved / total_target * 100) if total_target > 0 else 0
        completed = [
            goal for goal in goals
            if progress_percentage(goal.current, goal.target) >= 100
        ]
        return schemas.GoalsSummary(
            goals_count=len(goals),
            completed_count=len(completed),
            total_saved=round(total_saved, 2),
            total_target=round(total_target, 2),
            total_progress=round(total_progress, 2),
        )
