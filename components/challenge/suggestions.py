"""Challenge suggestions derived from a user's recent spending."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Mapping

from components.challenge.metadata import (
    CategoryLimitMetadata,
    ChallengeMetadata,
    ConsistencyMetadata,
    ImportanceLimitMetadata,
    SpendingReductionMetadata,
    TimeBasedMetadata,
)
from components.challenge.models import ChallengeType
from components.expense.models import Importance
from components.expense.summary import to_decimal, total_amount

WEEKEND = [5, 6]
WEEKEND_SHARE = Decimal("0.4")
CATEGORY_CUT = Decimal("0.7")
LUXURY_CUT = Decimal("0.5")
REDUCTION_PERCENT = 10
CONSISTENCY_DAYS = 7


@dataclass
class SuggestionDraft:
    type: ChallengeType
    title: str
    description: str
    target_value: float
    metadata: ChallengeMetadata
    duration_days: int


def weekly(amount: Decimal, lookback_days: int) -> Decimal:
    """Average weekly amount over the lookback window, rounded to cents."""
    return (amount / max(lookback_days, 1) * 7).quantize(Decimal("0.01"))


def build_suggestions(expenses: List, categories: Mapping[int, object], lookback_days: int = 30,
                      duration_days: int = 7, limit: int = 3) -> List[SuggestionDraft]:
    """
    Propose challenges from the expenses of the last ``lookback_days``.

    Candidates are ranked: heaviest category, luxury spending, weekend
    spending, overall reduction, then logging consistency. At most ``limit``
    are returned.
    """
    drafts: List[SuggestionDraft] = []
    total = total_amount(expenses)

    if total > 0:
        by_category: Dict[int, Decimal] = {}
        for expense in expenses:
            by_category[expense.category_id] = by_category.get(expense.category_id, Decimal("0")) + to_decimal(expense.amount)
        top_id, top_amount = max(by_category.items(), key=lambda item: item[1])
        category = categories.get(top_id)
        name = category.name if category else "your top category"
        cap = (weekly(top_amount, lookback_days) * CATEGORY_CUT).quantize(Decimal("0.01"))
        drafts.append(SuggestionDraft(
            type=ChallengeType.CATEGORY_LIMIT,
            title=f"Cut back on {name}",
            description=f"Spend no more than {cap} on {name} over the next {duration_days} days.",
            target_value=float(cap),
            metadata=CategoryLimitMetadata(category_id=top_id, limit_amount=float(cap)),
            duration_days=duration_days,
        ))

        luxury = total_amount(e for e in expenses if e.importance == Importance.LUXURY.value)
        if luxury > 0:
            cap = (weekly(luxury, lookback_days) * LUXURY_CUT).quantize(Decimal("0.01"))
            drafts.append(SuggestionDraft(
                type=ChallengeType.IMPORTANCE_LIMIT,
                title="Fewer luxury purchases",
                description=f"Keep luxury spending under {cap} for {duration_days} days.",
                target_value=float(cap),
                metadata=ImportanceLimitMetadata(importance=Importance.LUXURY, max_amount=float(cap)),
                duration_days=duration_days,
            ))

        weekend = total_amount(e for e in expenses if e.date.weekday() in WEEKEND)
        if weekend / total >= WEEKEND_SHARE:
            drafts.append(SuggestionDraft(
                type=ChallengeType.TIME_BASED,
                title="No-spend weekend",
                description="Avoid spending anything on Saturday and Sunday.",
                target_value=0.0,
                metadata=TimeBasedMetadata(weekdays=WEEKEND),
                duration_days=duration_days,
            ))

        baseline = weekly(total, lookback_days)
        target = (baseline * (100 - REDUCTION_PERCENT) / 100).quantize(Decimal("0.01"))
        drafts.append(SuggestionDraft(
            type=ChallengeType.SPENDING_REDUCTION,
            title=f"Spend {REDUCTION_PERCENT}% less",
            description=f"Your weekly average is {baseline}. Try to stay under {target} this week.",
            target_value=float(target),
            metadata=SpendingReductionMetadata(baseline_amount=float(baseline), reduction_percent=REDUCTION_PERCENT),
            duration_days=duration_days,
        ))

    logged_days = {expense.date for expense in expenses}
    if len(logged_days) < lookback_days / 2:
        drafts.append(SuggestionDraft(
            type=ChallengeType.CONSISTENCY,
            title="Log every day",
            description=f"Record your expenses on {CONSISTENCY_DAYS} days in a row.",
            target_value=float(CONSISTENCY_DAYS),
            metadata=ConsistencyMetadata(required_days=CONSISTENCY_DAYS),
            duration_days=max(duration_days, CONSISTENCY_DAYS),
        ))

    return drafts[:limit]
