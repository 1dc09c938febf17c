"""Pydantic schemas for transaction data validation."""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_CATEGORY = "Outros"


class TransactionBase(BaseModel):
    """Base transaction schema."""
    description: str
    category: str = DEFAULT_CATEGORY
    value: float
    date: dt.date = Field(default_factory=dt.date.today)
    goal_id: Optional[int] = None


class TransactionCreate(TransactionBase):
    """Schema for transaction creation."""
    pass


class TransactionUpdate(BaseModel):
    """
    Schema for partial transaction update.

    Only fields present in the request change; an explicit goal_id of null unlinks.
    """
    description: Optional[str] = None
    category: Optional[str] = None
    value: Optional[float] = None
    date: Optional[dt.date] = None
    goal_id: Optional[int] = None


class GoalDeposit(BaseModel):
    """Schema for putting money into a goal. Date defaults to today."""
    amount: float
    date: Optional[dt.date] = None


class Transaction(TransactionBase):
    """Schema for transaction response."""
    model_config = ConfigDict(from_attributes=True)

    id: int
