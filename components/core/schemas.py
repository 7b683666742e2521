"""Core schemas for the application."""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

# Amount that fits a Numeric(10, 2) column: at most 99999999.99, whole cents
Money = Annotated[Decimal, Field(max_digits=10, decimal_places=2)]


class HealthCheck(BaseModel):
    """Schema for health check response."""
    service_name: str
    status: str
    database: str


class CamelModel(BaseModel):
    """Base schema exchanging camelCase JSON with the frontend."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class MessageResponse(BaseModel):
    message: str
