from pydantic import Field

from components.core.schemas import CamelModel


class CategoryBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    icon: str = Field(..., min_length=1, max_length=50)
    color: str = Field(..., pattern=r"^#[0-9a-fA-F]{6}$")


class CategoryCreate(CategoryBase):
    """Schema for category creation."""
    pass


class CategoryRead(CategoryBase):
    id: int
