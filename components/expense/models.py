"""Expense model for the database."""

import enum
from datetime import date, datetime

from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, Numeric, Text
from sqlalchemy.orm import relationship

from components.core.database import Base


class Importance(str, enum.Enum):
    """How essential an expense was."""
    IMPORTANT = "important"
    NORMAL = "normal"
    LUXURY = "luxury"


class Expense(Base):
    """A single expense logged by a user."""
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    date = Column(Date, nullable=False, default=date.today, index=True)
    notes = Column(Text, nullable=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    importance = Column(String(20), nullable=False, default=Importance.NORMAL.value)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    user = relationship("User", back_populates="expenses")
    category = relationship("Category", back_populates="expenses")
