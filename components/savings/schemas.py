"""Pydantic schemas for savings goals and sub-goals."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import Field

from components.core.schemas import CamelModel, Money


class SavingsGoalBase(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    deadline: Optional[datetime] = None


class SavingsGoalCreate(SavingsGoalBase):
    """Schema for savings goal creation."""
    target_amount: Money = Field(..., gt=0)
    current_amount: Money = Field(Decimal("0"), ge=0)


class SavingsGoalUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    target_amount: Optional[Money] = Field(None, gt=0)
    current_amount: Optional[Money] = Field(None, ge=0)
    deadline: Optional[datetime] = None


class SavingsGoal(SavingsGoalBase):
    target_amount: float
    current_amount: float
    id: int
    user_id: int


class SubGoalBase(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    progress: float = Field(0, ge=0, le=100)
    completed: bool = False


class SubGoalCreate(SubGoalBase):
    goal_id: int


class SubGoalUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    progress: Optional[float] = Field(None, ge=0, le=100)
    completed: Optional[bool] = None


class SubGoal(SubGoalBase):
    id: int
    goal_id: int


class SavingsGoalWithSubGoals(SavingsGoal):
    """Savings goal together with its milestones."""
    sub_goals: List[SubGoal] = []
