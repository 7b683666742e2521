"""Repository for category operations."""

from typing import Dict, List, Optional
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from components.category.models import Category
from components.category.schemas import CategoryCreate

# Seeded on first start when the table is empty
DEFAULT_CATEGORIES = [
    {"name": "Restaurants", "icon": "utensils", "color": "#10b981"},
    {"name": "Shopping", "icon": "shopping-bag", "color": "#3b82f6"},
    {"name": "Transport", "icon": "car", "color": "#f59e0b"},
    {"name": "Entertainment", "icon": "film", "color": "#ef4444"},
    {"name": "Other", "icon": "ellipsis-h", "color": "#8b5cf6"},
]


class CategoryRepository:
    """Repository for category operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def get_all(self) -> List[Category]:
        result = await self.session.execute(select(Category).order_by(Category.id))
        return list(result.scalars().all())

    async def get_by_id(self, category_id: int) -> Optional[Category]:
        result = await self.session.execute(
            select(Category).where(Category.id == category_id)
        )
        return result.scalar_one_or_none()

    async def get_map(self) -> Dict[int, Category]:
        """Categories keyed by id, for annotating summaries."""
        return {category.id: category for category in await self.get_all()}

    async def create(self, category: CategoryCreate) -> Category:
        db_category = Category(name=category.name, icon=category.icon, color=category.color)
        self.session.add(db_category)
        await self.session.commit()
        await self.session.refresh(db_category)
        return db_category

    async def seed_defaults(self) -> int:
        """Insert the default categories if none exist. Returns the number inserted."""
        result = await self.session.execute(select(func.count(Category.id)))
        if result.scalar():
            return 0
        self.session.add_all([Category(**data) for data in DEFAULT_CATEGORIES])
        await self.session.commit()
        return len(DEFAULT_CATEGORIES)
