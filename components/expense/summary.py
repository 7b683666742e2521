"""
Expense aggregation.

Pure functions that turn a list of expenses into the totals and breakdowns
shown on the dashboard. Expenses and categories only need the attributes of
the ORM models, so plain objects work as well.
"""

from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Optional

from components.expense import schemas
from components.expense.models import Importance

UNKNOWN_CATEGORY = {"name": "Unknown", "color": "#cccccc", "icon": "question"}

IMPORTANCE_COLORS = {
    Importance.IMPORTANT.value: "#ef4444",
    Importance.LUXURY.value: "#8b5cf6",
    Importance.NORMAL.value: "#3b82f6",
}


def to_decimal(amount) -> Decimal:
    """Exact decimal for a Numeric column value, float or int."""
    if isinstance(amount, Decimal):
        return amount
    return Decimal(str(amount))


def percentage(amount: Decimal, total: Decimal) -> float:
    if total <= 0:
        return 0.0
    return float(amount / total * 100)


def filter_by_range(expenses: Iterable, start_date: Optional[date] = None,
                    end_date: Optional[date] = None) -> List:
    """Keep expenses dated within [start_date, end_date]; a missing bound is open."""
    return [
        expense for expense in expenses
        if (start_date is None or expense.date >= start_date)
        and (end_date is None or expense.date <= end_date)
    ]


def total_amount(expenses: Iterable) -> Decimal:
    return sum((to_decimal(expense.amount) for expense in expenses), Decimal("0"))


def summarize_by_category(expenses: List, categories: Mapping[int, object],
                          total: Decimal) -> List[schemas.CategorySummary]:
    """Per-category totals sorted by amount, largest first."""
    by_category: Dict[int, Decimal] = {}
    for expense in expenses:
        by_category[expense.category_id] = by_category.get(expense.category_id, Decimal("0")) + to_decimal(expense.amount)

    summary = []
    for category_id, amount in by_category.items():
        category = categories.get(category_id)
        summary.append(schemas.CategorySummary(
            category_id=category_id,
            name=category.name if category else UNKNOWN_CATEGORY["name"],
            color=category.color if category else UNKNOWN_CATEGORY["color"],
            icon=category.icon if category else UNKNOWN_CATEGORY["icon"],
            amount=float(amount),
            percentage=percentage(amount, total),
        ))

    summary.sort(key=lambda item: item.amount, reverse=True)
    return summary


def summarize_by_importance(expenses: List, total: Decimal) -> List[schemas.ImportanceSummary]:
    """Per-importance totals sorted by amount, largest first."""
    by_importance: Dict[str, Decimal] = {}
    for expense in expenses:
        importance = expense.importance or Importance.NORMAL.value
        if isinstance(importance, Importance):
            importance = importance.value
        by_importance[importance] = by_importance.get(importance, Decimal("0")) + to_decimal(expense.amount)

    summary = [
        schemas.ImportanceSummary(
            importance=importance,
            amount=float(amount),
            percentage=percentage(amount, total),
            color=IMPORTANCE_COLORS.get(importance, IMPORTANCE_COLORS[Importance.NORMAL.value]),
        )
        for importance, amount in by_importance.items()
    ]
    summary.sort(key=lambda item: item.amount, reverse=True)
    return summary


def summarize(expenses: Iterable, categories: Mapping[int, object]) -> schemas.ExpenseSummary:
    """
    Build the expense summary for an already filtered set of expenses.

    Args:
        expenses: Expenses of the period
        categories: Category objects keyed by id

    Returns:
        Total amount plus category and importance breakdowns
    """
    expenses = list(expenses)
    total = total_amount(expenses)
    return schemas.ExpenseSummary(
        total_amount=float(total),
        category_summary=summarize_by_category(expenses, categories, total),
        importance_summary=summarize_by_importance(expenses, total),
    )
