"""Savings goal and sub-goal endpoints."""

from typing import List
from fastapi import APIRouter, Depends, status

from components.core.exceptions import NotFoundError, ensure_owner
from components.savings import schemas
from components.savings.repository import SavingsRepository
from components.user.models import User
from restapi.dependencies import get_savings_repository
from restapi.endpoints.auth import get_current_user

router = APIRouter(
    prefix="/savings-goals",
    tags=["savings"],
    responses={404: {"description": "Not found"}},
)

sub_goal_router = APIRouter(
    prefix="/sub-goals",
    tags=["savings"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=List[schemas.SavingsGoal])
async def read_goals(
    repo: SavingsRepository = Depends(get_savings_repository),
    current_user: User = Depends(get_current_user),
):
    return await repo.get_goals(current_user.id)


@router.get("/{goal_id}", response_model=schemas.SavingsGoalWithSubGoals)
async def read_goal(
    goal_id: int,
    repo: SavingsRepository = Depends(get_savings_repository),
    current_user: User = Depends(get_current_user),
):
    """Get a savings goal together with its sub-goals."""
    goal = await repo.get_goal(goal_id, with_sub_goals=True)
    return ensure_owner(goal, current_user.id, "Savings goal")


@router.post("", response_model=schemas.SavingsGoal, status_code=status.HTTP_201_CREATED)
async def create_goal(
    goal: schemas.SavingsGoalCreate,
    repo: SavingsRepository = Depends(get_savings_repository),
    current_user: User = Depends(get_current_user),
):
    return await repo.create_goal(current_user.id, goal)


@router.put("/{goal_id}", response_model=schemas.SavingsGoal)
async def update_goal(
    goal_id: int,
    goal: schemas.SavingsGoalUpdate,
    repo: SavingsRepository = Depends(get_savings_repository),
    current_user: User = Depends(get_current_user),
):
    db_goal = ensure_owner(await repo.get_goal(goal_id), current_user.id, "Savings goal")
    return await repo.update_goal(db_goal, goal)


@sub_goal_router.post("", response_model=schemas.SubGoal, status_code=status.HTTP_201_CREATED)
async def create_sub_goal(
    sub_goal: schemas.SubGoalCreate,
    repo: SavingsRepository = Depends(get_savings_repository),
    current_user: User = Depends(get_current_user),
):
    """Add a sub-goal to one of the user's savings goals."""
    parent = await repo.get_goal(sub_goal.goal_id)
    if parent is None:
        raise NotFoundError("Parent savings goal not found")
    ensure_owner(parent, current_user.id, "Savings goal")
    return await repo.create_sub_goal(sub_goal)


@sub_goal_router.put("/{sub_goal_id}", response_model=schemas.SubGoal)
async def update_sub_goal(
    sub_goal_id: int,
    sub_goal: schemas.SubGoalUpdate,
    repo: SavingsRepository = Depends(get_savings_repository),
    current_user: User = Depends(get_current_user),
):
    """Update a sub-goal; the owner is checked through its parent goal."""
    db_sub_goal = await repo.get_sub_goal(sub_goal_id)
    if db_sub_goal is None:
        raise NotFoundError("Sub-goal not found")
    ensure_owner(db_sub_goal.goal, current_user.id, "Sub-goal")
    return await repo.update_sub_goal(db_sub_goal, sub_goal)
