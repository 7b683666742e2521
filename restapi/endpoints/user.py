"""Endpoints for the logged-in user's own profile."""

from fastapi import APIRouter, Depends

from components.core.logging_config import get_logger
from components.user import schemas
from components.user.models import User
from components.user.repository import UserRepository
from restapi.dependencies import get_user_repository
from restapi.endpoints.auth import get_current_user

logger = get_logger(__name__)

router = APIRouter(
    prefix="/user",
    tags=["user"],
)


@router.get("", response_model=schemas.User)
async def read_current_user(current_user: User = Depends(get_current_user)):
    """Get the logged-in user."""
    return current_user


@router.put("/salary", response_model=schemas.User)
async def update_salary(
    data: schemas.SalaryUpdate,
    repo: UserRepository = Depends(get_user_repository),
    current_user: User = Depends(get_current_user),
):
    """Update the monthly salary, which drives the spending limit notifications."""
    user = await repo.update_salary(current_user, data.monthly_salary)
    logger.info(f"User {user.id} updated monthly salary")
    return user


@router.put("/profile", response_model=schemas.User)
async def update_profile(
    data: schemas.ProfileUpdate,
    repo: UserRepository = Depends(get_user_repository),
    current_user: User = Depends(get_current_user),
):
    """Update full name and/or monthly budget."""
    return await repo.update_profile(current_user, data)
