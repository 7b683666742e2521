"""Pydantic schemas for challenge data validation."""

from datetime import datetime
from typing import Any, Dict, Optional
from pydantic import Field

from components.core.schemas import CamelModel
from components.challenge.metadata import ChallengeMetadata
from components.challenge.models import ChallengeStatus, ChallengeType


class Challenge(CamelModel):
    """Schema for challenge response."""
    id: int
    user_id: int
    title: str
    description: str
    type: ChallengeType
    status: ChallengeStatus
    start_date: datetime
    end_date: datetime
    progress: float
    target_value: float
    current_value: float
    created_at: datetime
    updated_at: datetime
    challenge_metadata: Optional[ChallengeMetadata] = Field(
        None, validation_alias="challenge_metadata", serialization_alias="metadata"
    )


class ChallengeStart(CamelModel):
    """
    Body of ``POST /challenges/start``.

    Either ``challenge_id`` of a stored suggestion, or a full definition for a
    challenge created by the user.
    """
    challenge_id: Optional[int] = None
    type: Optional[ChallengeType] = None
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: str = ""
    target_value: float = Field(0, ge=0, allow_inf_nan=False)
    metadata: Optional[Dict[str, Any]] = None
    duration_days: Optional[int] = Field(None, ge=1, le=365)


class ProgressUpdate(CamelModel):
    """Out-of-range progress is accepted and clamped into 0-100."""
    progress: float = Field(..., allow_inf_nan=False)
    current_value: Optional[float] = Field(None, allow_inf_nan=False)
