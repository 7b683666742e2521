"""Script to seed demo data into the database."""

from datetime import date, timedelta
import asyncio

from sqlalchemy import delete

from components.core.init_db import db_manager
from components.category.repository import CategoryRepository
from components.category.models import Category
from components.challenge.models import Challenge
from components.expense.models import Expense, Importance
from components.notification.models import Notification
from components.savings.models import SavingsGoal, SubGoal
from components.user.models import User
from components.core.security import get_password_hash

DEMO_EXPENSES = [
    ("Groceries", 180.0, "Shopping", Importance.IMPORTANT),
    ("Dinner out", 65.5, "Restaurants", Importance.LUXURY),
    ("Bus pass", 45.0, "Transport", Importance.IMPORTANT),
    ("Cinema", 24.0, "Entertainment", Importance.LUXURY),
    ("Coffee", 12.75, "Restaurants", Importance.NORMAL),
    ("Fuel", 70.0, "Transport", Importance.IMPORTANT),
    ("New headphones", 120.0, "Shopping", Importance.LUXURY),
    ("Lunch", 18.0, "Restaurants", Importance.NORMAL),
]


async def seed_data():
    """Seed demo data into the database."""
    await db_manager.create_tables()
    async with db_manager.get_db() as db:
        # Clear existing data
        for model in (Notification, Challenge, SubGoal, SavingsGoal, Expense, User, Category):
            await db.execute(delete(model))
        await db.commit()

        await CategoryRepository(db).seed_defaults()
        categories = {category.name: category for category in await CategoryRepository(db).get_all()}

        user = User(
            username="demo",
            password_hash=get_password_hash("password123"),
            email="demo@example.com",
            full_name="Demo User",
            monthly_salary=1000,
            monthly_budget=800,
        )
        db.add(user)
        await db.commit()

        today = date.today()
        for i, (title, amount, category_name, importance) in enumerate(DEMO_EXPENSES):
            db.add(Expense(
                title=title,
                amount=amount,
                category_id=categories[category_name].id,
                date=today - timedelta(days=i * 2),
                importance=importance.value,
                user_id=user.id,
            ))

        goal = SavingsGoal(title="Summer holiday", target_amount=1500, current_amount=300, user_id=user.id)
        db.add(goal)
        await db.commit()

        db.add_all([
            SubGoal(title="Flights", progress=100, completed=True, goal_id=goal.id),
            SubGoal(title="Hotel", progress=40, goal_id=goal.id),
        ])
        await db.commit()
        print(f"Seeded demo user {user.email} with {len(DEMO_EXPENSES)} expenses")

    await db_manager.dispose()


if __name__ == "__main__":
    asyncio.run(seed_data())
