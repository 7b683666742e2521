"""Repository for savings goal operations."""

from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from components.savings.models import SavingsGoal, SubGoal
from components.savings import schemas

# Columns that may legitimately be cleared with an explicit null
NULLABLE_GOAL_FIELDS = {"deadline"}


class SavingsRepository:
    """Repository for savings goals and their sub-goals."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def get_goals(self, user_id: int) -> List[SavingsGoal]:
        result = await self.session.execute(
            select(SavingsGoal)
            .where(SavingsGoal.user_id == user_id)
            .order_by(SavingsGoal.id)
        )
        return list(result.scalars().all())

    async def get_goal(self, goal_id: int, with_sub_goals: bool = False) -> Optional[SavingsGoal]:
        """Get a savings goal by ID, optionally eager-loading its sub-goals."""
        query = select(SavingsGoal).where(SavingsGoal.id == goal_id)
        if with_sub_goals:
            query = query.options(selectinload(SavingsGoal.sub_goals))
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def create_goal(self, user_id: int, goal: schemas.SavingsGoalCreate) -> SavingsGoal:
        db_goal = SavingsGoal(
            title=goal.title,
            target_amount=goal.target_amount,
            current_amount=goal.current_amount,
            deadline=goal.deadline,
            user_id=user_id,
        )
        self.session.add(db_goal)
        await self.session.commit()
        await self.session.refresh(db_goal)
        return db_goal

    async def update_goal(self, db_goal: SavingsGoal, goal: schemas.SavingsGoalUpdate) -> SavingsGoal:
        for field, value in goal.model_dump(exclude_unset=True).items():
            if value is None and field not in NULLABLE_GOAL_FIELDS:
                continue
            setattr(db_goal, field, value)
        await self.session.commit()
        await self.session.refresh(db_goal)
        return db_goal

    async def get_sub_goal(self, sub_goal_id: int) -> Optional[SubGoal]:
        """Get a sub-goal with its parent goal loaded, for ownership checks."""
        result = await self.session.execute(
            select(SubGoal)
            .where(SubGoal.id == sub_goal_id)
            .options(selectinload(SubGoal.goal))
        )
        return result.scalar_one_or_none()

    async def create_sub_goal(self, sub_goal: schemas.SubGoalCreate) -> SubGoal:
        db_sub_goal = SubGoal(
            title=sub_goal.title,
            progress=sub_goal.progress,
            completed=sub_goal.completed or sub_goal.progress >= 100,
            goal_id=sub_goal.goal_id,
        )
        self.session.add(db_sub_goal)
        await self.session.commit()
        await self.session.refresh(db_sub_goal)
        return db_sub_goal

    async def update_sub_goal(self, db_sub_goal: SubGoal, sub_goal: schemas.SubGoalUpdate) -> SubGoal:
        """Apply the provided fields; reaching 100% progress marks the sub-goal completed."""
        for field, value in sub_goal.model_dump(exclude_unset=True).items():
            if value is None:
                continue
            setattr(db_sub_goal, field, value)
        if db_sub_goal.progress >= 100:
            db_sub_goal.completed = True
        await self.session.commit()
        await self.session.refresh(db_sub_goal)
        return db_sub_goal
