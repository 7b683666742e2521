"""Tests for challenge suggestions."""

from datetime import date
from decimal import Decimal
from types import SimpleNamespace

from components.challenge.metadata import CategoryLimitMetadata, TimeBasedMetadata
from components.challenge.models import ChallengeType
from components.challenge.suggestions import build_suggestions, weekly

CATEGORIES = {
    1: SimpleNamespace(id=1, name="Restaurants"),
    2: SimpleNamespace(id=2, name="Shopping"),
}

MONDAY = date(2024, 1, 1)
TUESDAY = date(2024, 1, 2)
SATURDAY = date(2024, 1, 6)


def expense(amount, category_id=1, importance="normal", day=MONDAY):
    return SimpleNamespace(amount=amount, category_id=category_id, importance=importance, date=day)


def test_weekly_average():
    assert weekly(Decimal("300"), 30) == Decimal("70.00")


def test_no_spending_suggests_consistency_only():
    drafts = build_suggestions([], CATEGORIES)

    assert [draft.type for draft in drafts] == [ChallengeType.CONSISTENCY]
    assert drafts[0].metadata.required_days == 7


def test_ranked_suggestions():
    expenses = [
        expense(300, 1, "normal", MONDAY),
        expense(60, 2, "luxury", TUESDAY),
    ]

    drafts = build_suggestions(expenses, CATEGORIES, lookback_days=30, limit=3)

    assert [draft.type for draft in drafts] == [
        ChallengeType.CATEGORY_LIMIT,
        ChallengeType.IMPORTANCE_LIMIT,
        ChallengeType.SPENDING_REDUCTION,
    ]

    category = drafts[0]
    assert category.title == "Cut back on Restaurants"
    assert category.target_value == 49.0
    assert isinstance(category.metadata, CategoryLimitMetadata)
    assert category.metadata.category_id == 1

    assert drafts[1].target_value == 7.0
    assert drafts[2].metadata.baseline_amount == 84.0
    assert drafts[2].target_value == 75.6


def test_weekend_spender_gets_no_spend_weekend():
    drafts = build_suggestions([expense(100, day=SATURDAY)], CATEGORIES, limit=10)

    kinds = [draft.type for draft in drafts]
    assert ChallengeType.TIME_BASED in kinds
    weekend = drafts[kinds.index(ChallengeType.TIME_BASED)]
    assert isinstance(weekend.metadata, TimeBasedMetadata)
    assert weekend.metadata.weekdays == [5, 6]


def test_weekday_spender_gets_no_weekend_challenge():
    drafts = build_suggestions([expense(100, day=MONDAY)], CATEGORIES, limit=10)

    assert ChallengeType.TIME_BASED not in [draft.type for draft in drafts]


def test_limit_is_respected():
    expenses = [expense(100, importance="luxury", day=SATURDAY)]

    assert len(build_suggestions(expenses, CATEGORIES, limit=2)) == 2
    assert len(build_suggestions(expenses, CATEGORIES, limit=10)) == 5


def test_duration_is_carried():
    drafts = build_suggestions([expense(100)], CATEGORIES, duration_days=14, limit=10)

    assert all(draft.duration_days == 14 for draft in drafts)
