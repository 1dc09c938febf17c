"""Derived figures recomputed from the user's full transaction history."""

from typing import Iterable

import pandas as pd
import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.exceptions import ValidationError
from components.report import schemas
from components.transaction.repository import TransactionRepository

logger = structlog.get_logger(__name__)

MONTH_LABELS = ["Jan", "Fev", "Mar", "Abr", "Mai", "Jun", "Jul", "Ago", "Set", "Out", "Nov", "Dez"]


def build_frame(transactions: Iterable) -> pd.DataFrame:
    """
    Build a DataFrame with `date`, `category` and `value` columns.

    `date` is converted to datetime64 and `value` to float so the
    aggregations below work the same on empty input.
    """
    rows = [
        {"date": t.date, "category": t.category, "value": float(t.value)}
        for t in transactions
    ]
    df = pd.DataFrame(rows, columns=["date", "category", "value"])
    df["date"] = pd.to_datetime(df["date"])
    df["value"] = df["value"].astype(float)
    return df


def _validate_month(month: int) -> None:
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month: {month}")


def monthly_totals(df: pd.DataFrame, year: int) -> schemas.MonthlyTotals:
    """Income (positive values) and expenses (absolute negative values) per month of a year."""
    income = pd.Series(dtype=float)
    expenses = pd.Series(dtype=float)

    if not df.empty:
        period = df[df["date"].dt.year == year]
        months = period["date"].dt.month
        income = period["value"].where(period["value"] > 0, 0.0).groupby(months).sum()
        expenses = period["value"].where(period["value"] < 0, 0.0).abs().groupby(months).sum()

    return schemas.MonthlyTotals(
        year=year,
        months=[
            schemas.MonthTotal(
                month=month,
                label=MONTH_LABELS[month - 1],
                income=round(float(income.get(month, 0.0)), 2),
                expenses=round(float(expenses.get(month, 0.0)), 2),
            )
            for month in range(1, 13)
        ],
    )


def category_breakdown(df: pd.DataFrame, year: int, month: int) -> schemas.CategoryBreakdown:
    """Spending of one month grouped by category, largest first."""
    _validate_month(month)
    categories = []

    if not df.empty:
        mask = (
            (df["date"].dt.year == year)
            & (df["date"].dt.month == month)
            & (df["value"] < 0)
        )
        totals = (
            df[mask]
            .groupby("category")["value"]
            .sum()
            .abs()
            .sort_values(ascending=False, kind="mergesort")
        )
        categories = [
            schemas.CategoryTotal(category=str(category), total=round(float(total), 2))
            for category, total in totals.items()
        ]

    return schemas.CategoryBreakdown(
        year=year,
        month=month,
        total=round(sum(c.total for c in categories), 2),
        categories=categories,
    )


def balance(df: pd.DataFrame, year: int, month: int) -> schemas.Balance:
    """All-time balance next to the income, expenses and balance of one month."""
    _validate_month(month)
    total_balance = month_income = month_expenses = 0.0

    if not df.empty:
        total_balance = float(df["value"].sum())
        in_month = df[(df["date"].dt.year == year) & (df["date"].dt.month == month)]["value"]
        month_income = float(in_month[in_month > 0].sum())
        month_expenses = float(in_month[in_month < 0].abs().sum())

    return schemas.Balance(
        year=year,
        month=month,
        total_balance=round(total_balance, 2),
        month_income=round(month_income, 2),
        month_expenses=round(month_expenses, 2),
        month_balance=round(month_income - month_expenses, 2),
    )


class ReportService:
    """Loads a user's transactions and runs the aggregations above."""

    def __init__(self, session: AsyncSession):
        self.transactions = TransactionRepository(session)

    async def _frame(self, user_id: int) -> pd.DataFrame:
        transactions = await self.transactions.get_all(user_id)
        logger.debug("report_frame_built", user_id=user_id, rows=len(transactions))
        return build_frame(transactions)

    async def get_monthly_totals(self, user_id: int, year: int) -> schemas.MonthlyTotals:
        return monthly_totals(await self._frame(user_id), year)

    async def get_category_breakdown(self, user_id: int, year: int, month: int) -> schemas.CategoryBreakdown:
        return category_breakdown(await self._frame(user_id), year, month)

    async def get_balance(self, user_id: int, year: int, month: int) -> schemas.Balance:
        return balance(await self._frame(user_id), year, month)
