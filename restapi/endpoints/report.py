"""Report endpoints for the API."""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.init_db import get_db
from components.report.service import ReportService
from components.report import schemas
from components.user.models import User
from restapi.endpoints.auth import get_current_user

router = APIRouter(
    prefix="/reports",
    tags=["reports"],
)


@router.get("/monthly", response_model=schemas.MonthlyTotals)
async def get_monthly_totals(
    year: Optional[int] = Query(None, ge=1900, le=9999, description="Year to analyze (defaults to current year)"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Get income and expenses for each month of a year.

    Positive values count as income, negative values as expenses
    (reported as absolute amounts). Months without data are zero.
    """
    service = ReportService(db)
    return await service.get_monthly_totals(current_user.id, year or date.today().year)


@router.get("/categories", response_model=schemas.CategoryBreakdown)
async def get_category_breakdown(
    year: Optional[int] = Query(None, ge=1900, le=9999, description="Year (defaults to current year)"),
    month: Optional[int] = Query(None, ge=1, le=12, description="Month (defaults to current month)"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get the expenses of a month grouped by category."""
    today = date.today()
    service = ReportService(db)
    return await service.get_category_breakdown(
        current_user.id, year or today.year, month or today.month
    )


@router.get("/balance", response_model=schemas.Balance)
async def get_balance(
    year: Optional[int] = Query(None, ge=1900, le=9999, description="Year (defaults to current year)"),
    month: Optional[int] = Query(None, ge=1, le=12, description="Month (defaults to current month)"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Get balances.

    Returns:
    - All-time balance (sum of every transaction)
    - Income, expenses and balance of the selected month
    """
    today = date.today()
    service = ReportService(db)
    return await service.get_balance(
        current_user.id, year or today.year, month or today.month
    )
