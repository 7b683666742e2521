"""Expense use cases that go beyond plain CRUD."""

from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple

from components.core.config import Settings, get_settings
from components.core.exceptions import InvalidDataError
from components.core.logging_config import get_logger
from components.category.repository import CategoryRepository
from components.expense import summary as summary_lib
from components.expense.models import Expense, Importance
from components.expense.repository import ExpenseRepository
from components.expense.schemas import ExpenseCreate, ExpenseSummary, ExpenseUpdate
from components.notification.dispatcher import NotificationDispatcher
from components.notification.triggers import spending_events

logger = get_logger(__name__)


class ExpenseService:
    """Creates and updates expenses, raises spending notifications and builds summaries."""

    def __init__(
        self,
        expenses: ExpenseRepository,
        categories: CategoryRepository,
        dispatcher: NotificationDispatcher,
        settings: Optional[Settings] = None,
    ):
        self.expenses = expenses
        self.categories = categories
        self.dispatcher = dispatcher
        self.settings = settings or get_settings()

    async def _check_category(self, category_id: int) -> None:
        if await self.categories.get_by_id(category_id) is None:
            raise InvalidDataError(f"Category {category_id} does not exist")

    async def _month_totals(self, user_id: int, day: date) -> Tuple[Decimal, Decimal]:
        """Total and luxury total of the month containing ``day``."""
        month_expenses = await self.expenses.get_by_month(user_id, day.month, day.year)
        total = summary_lib.total_amount(month_expenses)
        luxury = summary_lib.total_amount(
            e for e in month_expenses if e.importance == Importance.LUXURY.value
        )
        return total, luxury

    async def _notify_spending(self, user, expense: Expense, before: Tuple[Decimal, Decimal]) -> None:
        """Compare the month of ``expense`` against its totals ``before`` the change."""
        after = await self._month_totals(user.id, expense.date)
        events = spending_events(
            user,
            before[0],
            after[0],
            before[1],
            after[1],
            warning_ratio=self.settings.SPENDING_WARNING_RATIO,
            danger_ratio=self.settings.SPENDING_DANGER_RATIO,
            luxury_share_limit=self.settings.LUXURY_SHARE_LIMIT,
        )
        if events:
            await self.dispatcher.dispatch(events, keep_loaded=[expense])

    @staticmethod
    def resolve_month(month: Optional[int], year: Optional[int],
                      today: Optional[date] = None) -> Tuple[Optional[int], Optional[int]]:
        """A month without a year (or the reverse) is completed from today's date."""
        if month is None and year is None:
            return None, None
        today = today or date.today()
        return month or today.month, year or today.year

    async def list_expenses(
        self,
        user_id: int,
        month: Optional[int] = None,
        year: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        today: Optional[date] = None,
    ) -> List[Expense]:
        """
        Expenses of a user for the requested window.

        The month/year pair selects through the database index; a date range is
        then applied as a linear scan over whatever was fetched.
        """
        month, year = self.resolve_month(month, year, today)
        if month is not None:
            expenses = await self.expenses.get_by_month(user_id, month, year)
        else:
            expenses = await self.expenses.get_all(user_id)
        if start_date is not None or end_date is not None:
            expenses = summary_lib.filter_by_range(expenses, start_date, end_date)
        return expenses

    async def summary(
        self,
        user_id: int,
        month: Optional[int] = None,
        year: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        today: Optional[date] = None,
    ) -> ExpenseSummary:
        """Summary for a date range, a month, or the current month when nothing is given."""
        if start_date is None and end_date is None and month is None and year is None:
            today = today or date.today()
            month, year = today.month, today.year
        expenses = await self.list_expenses(user_id, month, year, start_date, end_date, today)
        return summary_lib.summarize(expenses, await self.categories.get_map())

    async def create(self, user, data: ExpenseCreate) -> Expense:
        """Store an expense and emit any spending notifications it triggers."""
        await self._check_category(data.category_id)
        before = await self._month_totals(user.id, data.date)

        expense = await self.expenses.create(user.id, data)
        logger.info(f"Expense {expense.id} created for user {user.id}: {expense.amount}")

        await self._notify_spending(user, expense, before)
        return expense

    async def update(self, user, expense: Expense, data: ExpenseUpdate) -> Expense:
        """
        Apply a partial update.

        Raising an amount or turning an expense into a luxury can cross a
        spending line just like a new expense, so the triggers run again for
        the month the expense ends up in.
        """
        if data.category_id is not None:
            await self._check_category(data.category_id)
        before = await self._month_totals(user.id, data.date or expense.date)

        expense = await self.expenses.update(expense, data)
        logger.info(f"Expense {expense.id} updated by user {user.id}")

        await self._notify_spending(user, expense, before)
        return expense
