"""Repository for expense operations."""

from datetime import date
from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from components.expense.models import Expense
from components.expense.schemas import ExpenseCreate, ExpenseUpdate


class ExpenseRepository:
    """Repository for expense operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def get_all(self, user_id: int) -> List[Expense]:
        """Get all expenses of a user, newest first."""
        result = await self.session.execute(
            select(Expense)
            .where(Expense.user_id == user_id)
            .order_by(Expense.date.desc(), Expense.id.desc())
        )
        return list(result.scalars().all())

    async def get_by_month(self, user_id: int, month: int, year: int) -> List[Expense]:
        """
        Get expenses of a user for one calendar month.

        Args:
            user_id: Owner of the expenses
            month: Month number, 1-12
            year: Four digit year
        """
        month_start = date(year, month, 1)
        next_month = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
        result = await self.session.execute(
            select(Expense)
            .where(
                Expense.user_id == user_id,
                Expense.date >= month_start,
                Expense.date < next_month,
            )
            .order_by(Expense.date.desc(), Expense.id.desc())
        )
        return list(result.scalars().all())

    async def get_since(self, user_id: int, start_date: date) -> List[Expense]:
        """Get expenses of a user dated on or after ``start_date``."""
        result = await self.session.execute(
            select(Expense)
            .where(Expense.user_id == user_id, Expense.date >= start_date)
            .order_by(Expense.date)
        )
        return list(result.scalars().all())

    async def get_by_id(self, expense_id: int) -> Optional[Expense]:
        """Get expense by ID."""
        result = await self.session.execute(
            select(Expense).where(Expense.id == expense_id)
        )
        return result.scalar_one_or_none()

    async def create(self, user_id: int, expense: ExpenseCreate) -> Expense:
        """Create a new expense for ``user_id``."""
        db_expense = Expense(
            title=expense.title,
            amount=expense.amount,
            category_id=expense.category_id,
            date=expense.date,
            notes=expense.notes,
            importance=expense.importance.value,
            user_id=user_id,
        )
        self.session.add(db_expense)
        await self.session.commit()
        await self.session.refresh(db_expense)
        return db_expense

    async def update(self, db_expense: Expense, expense: ExpenseUpdate) -> Expense:
        """Apply the fields that were sent in the update."""
        for field, value in expense.model_dump(exclude_unset=True).items():
            if value is None and field != "notes":
                continue
            if field == "importance":
                value = value.value
            setattr(db_expense, field, value)

        await self.session.commit()
        await self.session.refresh(db_expense)
        return db_expense

    async def delete(self, db_expense: Expense) -> None:
        """Delete an expense."""
        await self.session.delete(db_expense)
        await self.session.commit()
