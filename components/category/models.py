"""Category model for the database."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from components.core.database import Base


class Category(Base):
    """Expense category reference data."""
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    icon = Column(String(50), nullable=False)
    color = Column(String(20), nullable=False)

    # Relationships
    expenses = relationship("Expense", back_populates="category")
