"""Repository for challenge operations."""

from datetime import datetime
from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from components.challenge.models import Challenge, ChallengeStatus


class ChallengeRepository:
    """Repository for challenge rows. Holds no lifecycle rules."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def get_by_id(self, challenge_id: int) -> Optional[Challenge]:
        result = await self.session.execute(
            select(Challenge).where(Challenge.id == challenge_id)
        )
        return result.scalar_one_or_none()

    async def get_for_user(self, user_id: int, status: Optional[ChallengeStatus] = None) -> List[Challenge]:
        """Get a user's challenges, newest first, optionally for one status."""
        query = select(Challenge).where(Challenge.user_id == user_id)
        if status is not None:
            query = query.where(Challenge.status == status.value)
        result = await self.session.execute(
            query.order_by(Challenge.created_at.desc(), Challenge.id.desc())
        )
        return list(result.scalars().all())

    async def get_active(self, user_id: int) -> Optional[Challenge]:
        challenges = await self.get_for_user(user_id, ChallengeStatus.ACTIVE)
        return challenges[0] if challenges else None

    async def get_overdue(self, now: datetime) -> List[Challenge]:
        """Active challenges of all users whose end date has passed."""
        result = await self.session.execute(
            select(Challenge)
            .where(Challenge.status == ChallengeStatus.ACTIVE.value, Challenge.end_date < now)
            .order_by(Challenge.id)
        )
        return list(result.scalars().all())

    async def add(self, challenge: Challenge) -> Challenge:
        self.session.add(challenge)
        await self.session.commit()
        await self.session.refresh(challenge)
        return challenge

    async def add_all(self, challenges: List[Challenge]) -> List[Challenge]:
        self.session.add_all(challenges)
        await self.session.commit()
        for challenge in challenges:
            await self.session.refresh(challenge)
        return challenges

    async def save_all(self, challenges: List[Challenge]) -> List[Challenge]:
        await self.session.commit()
        for challenge in challenges:
            await self.session.refresh(challenge)
        return challenges

    async def save(self, challenge: Challenge) -> Challenge:
        """Commit in-memory changes made to a loaded challenge."""
        await self.session.commit()
        await self.session.refresh(challenge)
        return challenge
