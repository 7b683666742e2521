"""Repository for user operations."""

from decimal import Decimal
from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from components.user.models import User
from components.user.schemas import UserCreate, ProfileUpdate
from components.core.security import get_password_hash


class UserRepository:
    """Repository for user operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def create(self, user: UserCreate) -> User:
        """Create a new user."""
        db_user = User(
            username=user.username,
            password_hash=get_password_hash(user.password),
            email=user.email,
            full_name=user.full_name,
            monthly_salary=0,
            monthly_budget=user.monthly_budget,
        )
        self.session.add(db_user)
        await self.session.commit()
        await self.session.refresh(db_user)
        return db_user

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        result = await self.session.execute(
            select(User).where(User.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> Optional[User]:
        result = await self.session.execute(
            select(User).where(User.username == username)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(
            select(User).where(User.email == email)
        )
        return result.scalar_one_or_none()

    async def update_salary(self, user: User, monthly_salary: Decimal) -> User:
        """Set the user's monthly salary."""
        user.monthly_salary = monthly_salary
        await self.session.commit()
        await self.session.refresh(user)
        return user

    async def update_profile(self, user: User, profile: ProfileUpdate) -> User:
        """Apply the fields present in ``profile``."""
        if profile.full_name is not None:
            user.full_name = profile.full_name
        if profile.monthly_budget is not None:
            user.monthly_budget = profile.monthly_budget
        await self.session.commit()
        await self.session.refresh(user)
        return user
