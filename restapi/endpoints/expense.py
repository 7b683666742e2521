"""Expense endpoints for the API."""

from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Response, status

from components.core.exceptions import ensure_owner
from components.core.logging_config import get_logger
from components.expense import schemas
from components.expense.repository import ExpenseRepository
from components.expense.service import ExpenseService
from components.user.models import User
from restapi.dependencies import get_expense_repository, get_expense_service
from restapi.endpoints.auth import get_current_user

logger = get_logger(__name__)

router = APIRouter(
    prefix="/expenses",
    tags=["expenses"],
    responses={404: {"description": "Not found"}},
)


class ExpenseFilters:
    """Query parameters shared by the list and summary endpoints."""

    def __init__(
        self,
        month: Optional[int] = Query(None, ge=1, le=12, description="Month number, 1-12"),
        year: Optional[int] = Query(None, ge=1900, le=9999),
        start_date: Optional[date] = Query(None, alias="startDate"),
        end_date: Optional[date] = Query(None, alias="endDate"),
    ):
        self.month = month
        self.year = year
        self.start_date = start_date
        self.end_date = end_date


@router.get("", response_model=List[schemas.Expense])
async def read_expenses(
    filters: ExpenseFilters = Depends(),
    service: ExpenseService = Depends(get_expense_service),
    current_user: User = Depends(get_current_user),
):
    """Get the user's expenses, optionally for a month and/or a date range."""
    return await service.list_expenses(
        current_user.id, filters.month, filters.year, filters.start_date, filters.end_date
    )


@router.get("/summary", response_model=schemas.ExpenseSummary)
async def read_summary(
    filters: ExpenseFilters = Depends(),
    service: ExpenseService = Depends(get_expense_service),
    current_user: User = Depends(get_current_user),
):
    """
    Get totals and breakdowns of the user's expenses.

    Returns:
    - Total amount of the period
    - Per-category amounts and percentages, largest first
    - Per-importance amounts and percentages, largest first

    Without filters the current month is summarized.
    """
    return await service.summary(
        current_user.id, filters.month, filters.year, filters.start_date, filters.end_date
    )


@router.post("", response_model=schemas.Expense, status_code=status.HTTP_201_CREATED)
async def create_expense(
    expense: schemas.ExpenseCreate,
    service: ExpenseService = Depends(get_expense_service),
    current_user: User = Depends(get_current_user),
):
    """Log a new expense."""
    return await service.create(current_user, expense)


@router.put("/{expense_id}", response_model=schemas.Expense)
async def update_expense(
    expense_id: int,
    expense: schemas.ExpenseUpdate,
    repo: ExpenseRepository = Depends(get_expense_repository),
    service: ExpenseService = Depends(get_expense_service),
    current_user: User = Depends(get_current_user),
):
    """Update an expense owned by the user."""
    db_expense = ensure_owner(await repo.get_by_id(expense_id), current_user.id, "Expense")
    return await service.update(current_user, db_expense, expense)


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_expense(
    expense_id: int,
    repo: ExpenseRepository = Depends(get_expense_repository),
    current_user: User = Depends(get_current_user),
):
    """Delete an expense owned by the user."""
    db_expense = ensure_owner(await repo.get_by_id(expense_id), current_user.id, "Expense")
    await repo.delete(db_expense)
    logger.info(f"Expense {expense_id} deleted by user {current_user.id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
