"""Spending checks that turn a new expense into notification events."""

from decimal import Decimal
from typing import List

from components.expense.summary import to_decimal
from components.notification.dispatcher import NotificationEvent
from components.notification.models import NotificationType


def monthly_limit(user) -> Decimal:
    """Salary when set, otherwise the budget; zero means no limit."""
    salary = to_decimal(user.monthly_salary or 0)
    if salary > 0:
        return salary
    return to_decimal(user.monthly_budget or 0)


def crossed(before: Decimal, after: Decimal, threshold: Decimal) -> bool:
    return before < threshold <= after


def spending_events(
    user,
    total_before,
    total_after,
    luxury_before,
    luxury_after,
    warning_ratio: float = 0.7,
    danger_ratio: float = 0.9,
    luxury_share_limit: float = 0.3,
) -> List[NotificationEvent]:
    """
    Events caused by an expense moving the month's totals from *before* to *after*.

    Only threshold crossings produce events, so a user already above the
    warning line is not notified again for every further expense.

    Args:
        user: Owner, read for id, monthly_salary and monthly_budget
        total_before: Month total without the new expense
        total_after: Month total including the new expense
        luxury_before: Month luxury total without the new expense
        luxury_after: Month luxury total including the new expense
    """
    total_before = to_decimal(total_before)
    total_after = to_decimal(total_after)
    luxury_before = to_decimal(luxury_before)
    luxury_after = to_decimal(luxury_after)

    events = []
    limit = monthly_limit(user)
    if limit > 0:
        used = float(total_after / limit * 100)
        danger = limit * to_decimal(danger_ratio)
        warning = limit * to_decimal(warning_ratio)
        data = {"totalSpent": float(total_after), "limit": float(limit), "percentageUsed": round(used, 1)}
        if crossed(total_before, total_after, danger):
            events.append(NotificationEvent(
                user_id=user.id,
                type=NotificationType.SPENDING_LIMIT_DANGER,
                title="Spending limit almost reached",
                message=f"You have spent {used:.0f}% of your monthly limit. Please cut back on expenses.",
                data=data,
            ))
        elif crossed(total_before, total_after, warning):
            events.append(NotificationEvent(
                user_id=user.id,
                type=NotificationType.SPENDING_LIMIT_WARNING,
                title="Approaching your spending limit",
                message=f"You have spent {used:.0f}% of your monthly limit.",
                data=data,
            ))

    share_limit = to_decimal(luxury_share_limit)
    if total_after > 0 and luxury_after > luxury_before:
        share_after = luxury_after / total_after
        share_before = luxury_before / total_before if total_before > 0 else Decimal("0")
        if share_before < share_limit <= share_after:
            events.append(NotificationEvent(
                user_id=user.id,
                type=NotificationType.LUXURY_SPENDING,
                title="High luxury spending",
                message=f"Luxury purchases make up {float(share_after) * 100:.0f}% of this month's spending.",
                data={"luxuryAmount": float(luxury_after), "share": round(float(share_after) * 100, 1)},
            ))
    return events
