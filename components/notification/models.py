"""Notification model for the database."""

import enum
from datetime import datetime

from sqlalchemy import Boolean, Column, Integer, String, DateTime, ForeignKey, Text, JSON

from components.core.database import Base


class NotificationType(str, enum.Enum):
    SPENDING_LIMIT_WARNING = "spending_limit_warning"
    SPENDING_LIMIT_DANGER = "spending_limit_danger"
    LUXURY_SPENDING = "luxury_spending"
    ESSENTIAL_DECREASE = "essential_decrease"
    WEEKLY_ANALYSIS = "weekly_analysis"
    EXPENSE_TREND = "expense_trend"
    CHALLENGE_STARTED = "challenge_started"
    CHALLENGE_COMPLETED = "challenge_completed"
    CHALLENGE_FAILED = "challenge_failed"
    CHALLENGE_CANCELLED = "challenge_cancelled"
    CHALLENGE_SUGGESTED = "challenge_suggested"


class Notification(Base):
    """Message shown in the user's notification centre."""
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    type = Column(String(50), nullable=False)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    is_read = Column(Boolean, nullable=False, default=False)
    data = Column(JSON, nullable=True)
