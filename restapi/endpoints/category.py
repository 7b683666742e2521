"""Category endpoints."""

from typing import List
from fastapi import APIRouter, Depends, status

from components.category import schemas
from components.category.repository import CategoryRepository
from components.user.models import User
from restapi.dependencies import get_category_repository
from restapi.endpoints.auth import get_current_user

router = APIRouter(
    prefix="/categories",
    tags=["categories"],
)


@router.get("", response_model=List[schemas.CategoryRead])
async def read_categories(
    repo: CategoryRepository = Depends(get_category_repository),
    current_user: User = Depends(get_current_user),
):
    """Get all expense categories."""
    return await repo.get_all()


@router.post("", response_model=schemas.CategoryRead, status_code=status.HTTP_201_CREATED)
async def create_category(
    category: schemas.CategoryCreate,
    repo: CategoryRepository = Depends(get_category_repository),
    current_user: User = Depends(get_current_user),
):
    """Add a new expense category."""
    return await repo.create(category)
