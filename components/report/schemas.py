"""Pydantic schemas for report responses."""

from typing import List

from pydantic import BaseModel


class MonthTotal(BaseModel):
    """Income and expenses of one calendar month."""
    month: int
    label: str
    income: float
    expenses: float


class MonthlyTotals(BaseModel):
    """Schema for the twelve month buckets of a year."""
    year: int
    months: List[MonthTotal]


class CategoryTotal(BaseModel):
    """Schema for spending in one category."""
    category: str
    total: float


class CategoryBreakdown(BaseModel):
    """Schema for spending per category in a month."""
    year: int
    month: int
    total: float
    categories: List[CategoryTotal]


class Balance(BaseModel):
    """Schema for all-time balance and the figures of one month."""
    year: int
    month: int
    total_balance: float
    month_income: float
    month_expenses: float
    month_balance: float
