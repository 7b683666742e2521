"""FastAPI providers injecting repositories and services into the handlers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.config import Settings, get_settings
from components.core.init_db import get_db
from components.category.repository import CategoryRepository
from components.challenge.repository import ChallengeRepository
from components.challenge.service import ChallengeService
from components.expense.repository import ExpenseRepository
from components.expense.service import ExpenseService
from components.notification.dispatcher import NotificationDispatcher
from components.notification.repository import NotificationRepository
from components.savings.repository import SavingsRepository
from components.user.repository import UserRepository


def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_category_repository(db: AsyncSession = Depends(get_db)) -> CategoryRepository:
    return CategoryRepository(db)


def get_expense_repository(db: AsyncSession = Depends(get_db)) -> ExpenseRepository:
    return ExpenseRepository(db)


def get_savings_repository(db: AsyncSession = Depends(get_db)) -> SavingsRepository:
    return SavingsRepository(db)


def get_notification_repository(db: AsyncSession = Depends(get_db)) -> NotificationRepository:
    return NotificationRepository(db)


def get_challenge_repository(db: AsyncSession = Depends(get_db)) -> ChallengeRepository:
    return ChallengeRepository(db)


def get_notification_dispatcher(
    repository: NotificationRepository = Depends(get_notification_repository),
) -> NotificationDispatcher:
    return NotificationDispatcher(repository)


def get_expense_service(
    expenses: ExpenseRepository = Depends(get_expense_repository),
    categories: CategoryRepository = Depends(get_category_repository),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
    settings: Settings = Depends(get_settings),
) -> ExpenseService:
    return ExpenseService(expenses, categories, dispatcher, settings)


def get_challenge_service(
    challenges: ChallengeRepository = Depends(get_challenge_repository),
    expenses: ExpenseRepository = Depends(get_expense_repository),
    categories: CategoryRepository = Depends(get_category_repository),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
    settings: Settings = Depends(get_settings),
) -> ChallengeService:
    return ChallengeService(challenges, expenses, categories, dispatcher, settings)
