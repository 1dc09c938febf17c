"""Repository for transaction operations.

Every mutation keeps the linked goal's accumulated amount equal to the sum
of the values of the transactions pointing at it:

- create adds the value to the linked goal;
- update applies the difference when the link stays, or moves the whole
  contribution from the old goal to the new one when the link changes;
- delete takes the value back out of the linked goal.

The transaction row and the goal rows are committed together.
"""

import datetime as dt
from typing import List, Optional

import structlog
from sqlalchemy import func, select

from components.core.exceptions import NotFoundError, ValidationError
from components.core.money import to_amount
from components.core.repository import BaseRepository
from components.goal.repository import GoalRepository
from components.transaction.models import Transaction
from components.transaction import schemas

logger = structlog.get_logger(__name__)

DEPOSIT_PREFIX = "Depósito: "
DEPOSIT_CATEGORY = "Investimento"


def _clean_description(description: Optional[str]) -> str:
    if description is None or not description.strip():
        raise ValidationError("Description cannot be empty")
    return description.strip()


def _clean_category(category: Optional[str]) -> str:
    if category is None or not category.strip():
        return schemas.DEFAULT_CATEGORY
    return category.strip()


def _month_bounds(year: int, month: int) -> tuple:
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month: {month}")
    start = dt.date(year, month, 1)
    end = dt.date(year + 1, 1, 1) if month == 12 else dt.date(year, month + 1, 1)
    return start, end


class TransactionRepository(BaseRepository):
    """Repository for transaction operations."""

    def __init__(self, session):
        super().__init__(session)
        self.goals = GoalRepository(session)

    async def create(self, user_id: int, transaction: schemas.TransactionCreate) -> Transaction:
        """Store a transaction and add its value to the linked goal."""
        description = _clean_description(transaction.description)
        value = to_amount(transaction.value)
        if transaction.date is None:
            raise ValidationError("Date cannot be empty")

        category = _clean_category(transaction.category)

        goal = None
        if transaction.goal_id is not None:
            goal = await self.goals.get_or_raise(user_id, transaction.goal_id)
            self.goals.adjust_current(goal, value)

        db_transaction = Transaction(
            user_id=user_id,
            description=description,
            category=category,
            value=value,
            date=transaction.date,
            goal_id=goal.id if goal else None,
        )
        self.session.add(db_transaction)

        await self._commit()
        await self.session.refresh(db_transaction)
        logger.info(
            "transaction_created",
            user_id=user_id,
            transaction_id=db_transaction.id,
            value=str(value),
            goal_id=db_transaction.goal_id,
        )
        return db_transaction

    async def deposit(
        self,
        user_id: int,
        goal_id: int,
        deposit: schemas.GoalDeposit,
    ) -> Transaction:
        """
        Put money into a goal.

        Records a positive "Depósito: <goal name>" transaction linked to the
        goal, so the goal grows through the same path as any linked
        transaction.
        """
        amount = to_amount(deposit.amount, "amount")
        if amount <= 0:
            raise ValidationError("Deposit amount must be greater than zero")
        goal = await self.goals.get_or_raise(user_id, goal_id)

        return await self.create(
            user_id,
            schemas.TransactionCreate(
                description=f"{DEPOSIT_PREFIX}{goal.name}",
                category=DEPOSIT_CATEGORY,
                value=float(amount),
                date=deposit.date or dt.date.today(),
                goal_id=goal.id,
            ),
        )

    async def get(self, user_id: int, transaction_id: int) -> Optional[Transaction]:
        """Get a transaction of the user by ID."""
        result = await self._execute(
            select(Transaction).where(
                Transaction.id == transaction_id,
                Transaction.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_or_raise(self, user_id: int, transaction_id: int) -> Transaction:
        db_transaction = await self.get(user_id, transaction_id)
        if db_transaction is None:
            raise NotFoundError("Transaction", transaction_id)
        return db_transaction

    async def get_all(
        self,
        user_id: int,
        year: Optional[int] = None,
        month: Optional[int] = None,
        search: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Transaction]:
        """
        Get transactions of the user, newest first.

        Args:
            year: keep only this calendar year
            month: keep only this month (of `year`, or of the current year)
            search: case-insensitive fragment of the description
            limit: maximum number of rows
        """
        query = select(Transaction).where(Transaction.user_id == user_id)

        if month is not None:
            start, end = _month_bounds(year or dt.date.today().year, month)
            query = query.where(Transaction.date >= start, Transaction.date < end)
        elif year is not None:
            query = query.where(
                Transaction.date >= dt.date(year, 1, 1),
                Transaction.date < dt.date(year + 1, 1, 1),
            )

        if search:
            query = query.where(
                func.lower(Transaction.description).contains(search.strip().lower())
            )

        query = query.order_by(Transaction.date.desc(), Transaction.id.desc())
        if limit:
            query = query.limit(limit)

        result = await self._execute(query)
        return list(result.scalars().all())

    async def update(
        self,
        user_id: int,
        transaction_id: int,
        changes: schemas.TransactionUpdate,
    ) -> Transaction:
        """Apply a partial change and move goal contributions accordingly."""
        db_transaction = await self.get_or_raise(user_id, transaction_id)
        fields = changes.model_dump(exclude_unset=True)

        # Validate everything before touching the row
        description = (
            _clean_description(fields["description"])
            if "description" in fields else db_transaction.description
        )
        category = (
            _clean_category(fields["category"])
            if "category" in fields else db_transaction.category
        )
        if "date" in fields and fields["date"] is None:
            raise ValidationError("Date cannot be empty")
        date = fields.get("date") or db_transaction.date

        old_value = to_amount(db_transaction.value)
        new_value = to_amount(fields["value"]) if "value" in fields else old_value
        old_goal_id = db_transaction.goal_id
        new_goal_id = fields["goal_id"] if "goal_id" in fields else old_goal_id

        new_goal = None
        if new_goal_id is not None and new_goal_id != old_goal_id:
            new_goal = await self.goals.get_or_raise(user_id, new_goal_id)

        adjustments = []
        if new_goal_id == old_goal_id:
            if old_goal_id is not None and new_value != old_value:
                goal = await self.goals.get(user_id, old_goal_id)
                if goal is not None:
                    adjustments.append((goal, new_value - old_value))
        else:
            if old_goal_id is not None:
                old_goal = await self.goals.get(user_id, old_goal_id)
                if old_goal is not None:
                    adjustments.append((old_goal, -old_value))
            if new_goal is not None:
                adjustments.append((new_goal, new_value))
        self.goals.apply_adjustments(adjustments)

        db_transaction.description = description
        db_transaction.category = category
        db_transaction.date = date
        db_transaction.value = new_value
        db_transaction.goal_id = new_goal_id

        await self._commit()
        await self.session.refresh(db_transaction)
        logger.info(
            "transaction_updated",
            user_id=user_id,
            transaction_id=transaction_id,
            fields=sorted(fields),
            old_goal_id=old_goal_id,
            goal_id=new_goal_id,
        )
        return db_transaction

    async def delete(self, user_id: int, transaction_id: int) -> None:
        """Remove a transaction after taking its value out of the linked goal."""
        db_transaction = await self.get_or_raise(user_id, transaction_id)

        if db_transaction.goal_id is not None:
            goal = await self.goals.get(user_id, db_transaction.goal_id)
            if goal is not None:
                self.goals.adjust_current(goal, -to_amount(db_transaction.value))

        await self.session.delete(db_transaction)
        await self._commit()
        logger.info(
            "transaction_deleted",
            user_id=user_id,
            transaction_id=transaction_id,
            goal_id=db_transaction.goal_id,
        )
