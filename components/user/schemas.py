"""Pydantic schemas for user data validation."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import EmailStr, Field

from components.core.schemas import CamelModel, Money


class UserCreate(CamelModel):
    """Schema for registration."""
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6)
    email: EmailStr
    full_name: Optional[str] = None
    monthly_budget: Money = Field(Decimal("0"), ge=0)


class UserLogin(CamelModel):
    email: EmailStr
    password: str


class User(CamelModel):
    """Schema for user response, never carries the password hash."""
    id: int
    username: str
    email: str
    full_name: Optional[str] = None
    monthly_salary: float
    monthly_budget: float
    created_at: datetime


class SalaryUpdate(CamelModel):
    monthly_salary: Money = Field(..., gt=0)


class ProfileUpdate(CamelModel):
    full_name: Optional[str] = None
    monthly_budget: Optional[Money] = Field(None, ge=0)
