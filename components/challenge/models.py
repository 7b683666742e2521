"""Challenge model for the database."""

import enum
from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Float, JSON

from components.core.database import Base


class ChallengeType(str, enum.Enum):
    CATEGORY_LIMIT = "category_limit"
    IMPORTANCE_LIMIT = "importance_limit"
    TIME_BASED = "time_based"
    SPENDING_REDUCTION = "spending_reduction"
    CONSISTENCY = "consistency"


class ChallengeStatus(str, enum.Enum):
    SUGGESTED = "suggested"
    ACTIVE = "active"
    COMPLETED = "completed"
    FAILED = "failed"
    DISMISSED = "dismissed"


class Challenge(Base):
    """Time-boxed spending goal with progress tracking."""
    __tablename__ = "challenges"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    type = Column(String(30), nullable=False)
    status = Column(String(20), nullable=False, default=ChallengeStatus.SUGGESTED.value, index=True)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    progress = Column(Float, nullable=False, default=0)  # 0-100
    target_value = Column(Float, nullable=False, default=0)
    current_value = Column(Float, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    # "metadata" is reserved on declarative classes
    challenge_metadata = Column("metadata", JSON, nullable=True)
