"""Savings goal models for the database."""

from sqlalchemy import Boolean, Column, Integer, String, DateTime, ForeignKey, Numeric, Float
from sqlalchemy.orm import relationship

from components.core.database import Base


class SavingsGoal(Base):
    """Amount a user is saving towards, optionally by a deadline."""
    __tablename__ = "savings_goals"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    target_amount = Column(Numeric(10, 2), nullable=False)
    current_amount = Column(Numeric(10, 2), nullable=False, default=0)
    deadline = Column(DateTime, nullable=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Relationships
    user = relationship("User", back_populates="savings_goals")
    sub_goals = relationship("SubGoal", back_populates="goal", cascade="all, delete-orphan")


class SubGoal(Base):
    """Milestone inside a savings goal."""
    __tablename__ = "sub_goals"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    progress = Column(Float, nullable=False, default=0)  # 0-100
    goal_id = Column(Integer, ForeignKey("savings_goals.id"), nullable=False, index=True)
    completed = Column(Boolean, nullable=False, default=False)

    goal = relationship("SavingsGoal", back_populates="sub_goals")
