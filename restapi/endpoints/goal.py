"""Goal endpoints for the API."""

from typing import List
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.init_db import get_db
from components.goal.repository import GoalRepository
from components.goal import schemas
from components.transaction.repository import TransactionRepository
from components.transaction import schemas as transaction_schemas
from components.user.models import User
from restapi.endpoints.auth import get_current_user

router = APIRouter(
    prefix="/goals",
    tags=["goals"],
    responses={404: {"description": "Not found"}},
)


@router.post("/", response_model=schemas.Goal, status_code=status.HTTP_201_CREATED)
async def create_goal(
    goal: schemas.GoalCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Create a goal starting at zero."""
    repo = GoalRepository(db)
    return await repo.create(current_user.id, goal)


@router.get("/", response_model=List[schemas.Goal])
async def read_goals(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get all goals with their progress."""
    repo = GoalRepository(db)
    return await repo.get_all(current_user.id)


@router.get("/summary", response_model=schemas.GoalsSummary)
async def read_goals_summary(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Get totals across all goals.

    Returns:
    - Number of goals and how many are completed
    - Amount saved and amount planned
    - Overall progress percentage
    """
    repo = GoalRepository(db)
    return await repo.summary(current_user.id)


@router.get("/{goal_id}", response_model=schemas.Goal)
async def read_goal(
    goal_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get a specific goal by ID."""
    repo = GoalRepository(db)
    return await repo.get_or_raise(current_user.id, goal_id)


@router.patch("/{goal_id}", response_model=schemas.Goal)
async def update_goal(
    goal_id: int,
    changes: schemas.GoalUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Rename, recolor or retarget a goal."""
    repo = GoalRepository(db)
    return await repo.update(current_user.id, goal_id, changes)


@router.post(
    "/{goal_id}/deposits",
    response_model=transaction_schemas.Transaction,
    status_code=status.HTTP_201_CREATED,
)
async def deposit_to_goal(
    goal_id: int,
    deposit: transaction_schemas.GoalDeposit,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Record a deposit transaction linked to the goal."""
    repo = TransactionRepository(db)
    return await repo.deposit(current_user.id, goal_id, deposit)


@router.delete("/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_goal(
    goal_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Delete a goal. Its transactions are kept and unlinked."""
    repo = GoalRepository(db)
    await repo.delete(current_user.id, goal_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
