"""Transaction endpoints for the API."""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.init_db import get_db
from components.transaction.repository import TransactionRepository
from components.transaction import schemas
from components.user.models import User
from restapi.endpoints.auth import get_current_user

router = APIRouter(
    prefix="/transactions",
    tags=["transactions"],
    responses={404: {"description": "Not found"}},
)


@router.post("/", response_model=schemas.Transaction, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    transaction: schemas.TransactionCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Record a transaction.

    When goal_id is given, the value is added to that goal's current amount.
    """
    repo = TransactionRepository(db)
    return await repo.create(current_user.id, transaction)


@router.get("/", response_model=List[schemas.Transaction])
async def read_transactions(
    year: Optional[int] = Query(None, ge=1900, le=9999, description="Calendar year"),
    month: Optional[int] = Query(None, ge=1, le=12, description="Month of the year (current year if year is omitted)"),
    search: Optional[str] = Query(None, description="Fragment of the description, case-insensitive"),
    limit: Optional[int] = Query(None, ge=1, le=1000, description="Maximum number of records"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get transactions, newest first, with optional month window and search."""
    repo = TransactionRepository(db)
    return await repo.get_all(
        current_user.id,
        year=year,
        month=month,
        search=search,
        limit=limit,
    )


@router.get("/{transaction_id}", response_model=schemas.Transaction)
async def read_transaction(
    transaction_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get a specific transaction by ID."""
    repo = TransactionRepository(db)
    return await repo.get_or_raise(current_user.id, transaction_id)


@router.patch("/{transaction_id}", response_model=schemas.Transaction)
async def update_transaction(
    transaction_id: int,
    changes: schemas.TransactionUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Update a transaction.

    Moving the link to another goal moves the whole value; changing only the
    value moves the difference.
    """
    repo = TransactionRepository(db)
    return await repo.update(current_user.id, transaction_id, changes)


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction(
    transaction_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Delete a transaction and take its value out of the linked goal."""
    repo = TransactionRepository(db)
    await repo.delete(current_user.id, transaction_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
