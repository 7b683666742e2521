"""Pydantic schemas for expense data validation."""

import datetime as dt
from typing import List, Optional
from pydantic import Field

from components.core.schemas import CamelModel, Money
from components.expense.models import Importance


class ExpenseBase(CamelModel):
    """Base expense schema."""
    title: str = Field(..., min_length=1, max_length=255)
    category_id: int
    date: dt.date
    notes: Optional[str] = None
    importance: Importance = Importance.NORMAL


class ExpenseCreate(ExpenseBase):
    """Schema for expense creation."""
    amount: Money = Field(..., gt=0)


class ExpenseUpdate(CamelModel):
    """Partial update, only the provided fields change."""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    amount: Optional[Money] = Field(None, gt=0)
    category_id: Optional[int] = None
    date: Optional[dt.date] = None
    notes: Optional[str] = None
    importance: Optional[Importance] = None


class Expense(ExpenseBase):
    """Schema for expense response."""
    amount: float
    id: int
    user_id: int
    created_at: dt.datetime


class CategorySummary(CamelModel):
    category_id: int
    name: str
    color: str
    icon: str
    amount: float
    percentage: float


class ImportanceSummary(CamelModel):
    importance: str
    amount: float
    percentage: float
    color: str


class ExpenseSummary(CamelModel):
    """Totals and breakdowns for a period."""
    total_amount: float
    category_summary: List[CategorySummary]
    importance_summary: List[ImportanceSummary]
