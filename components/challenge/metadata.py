"""
Typed challenge metadata.

Each challenge type carries its own parameters. They are stored as JSON and
parsed into one of the models below, selected by the ``type`` tag.
"""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import Field, TypeAdapter, ValidationError, field_validator

from components.core.exceptions import InvalidDataError
from components.core.schemas import CamelModel
from components.expense.models import Importance


class CategoryLimitMetadata(CamelModel):
    """Keep spending in one category under ``limit_amount``."""
    type: Literal["category_limit"] = "category_limit"
    category_id: int
    limit_amount: float = Field(0, ge=0)


class ImportanceLimitMetadata(CamelModel):
    """Keep spending of one importance level under ``max_amount``."""
    type: Literal["importance_limit"] = "importance_limit"
    importance: Importance = Importance.LUXURY
    max_amount: float = Field(0, ge=0)


class TimeBasedMetadata(CamelModel):
    """No spending on the given weekdays (0 = Monday)."""
    type: Literal["time_based"] = "time_based"
    weekdays: List[int] = Field(..., min_length=1)

    @field_validator("weekdays")
    @classmethod
    def check_weekdays(cls, value: List[int]) -> List[int]:
        if any(day < 0 or day > 6 for day in value):
            raise ValueError("weekdays must be between 0 (Monday) and 6 (Sunday)")
        return sorted(set(value))


class SpendingReductionMetadata(CamelModel):
    """Spend ``reduction_percent`` less than ``baseline_amount``."""
    type: Literal["spending_reduction"] = "spending_reduction"
    baseline_amount: float = Field(..., ge=0)
    reduction_percent: float = Field(..., gt=0, le=100)


class ConsistencyMetadata(CamelModel):
    """Log expenses on ``required_days`` days."""
    type: Literal["consistency"] = "consistency"
    required_days: int = Field(..., ge=1)


ChallengeMetadata = Annotated[
    Union[
        CategoryLimitMetadata,
        ImportanceLimitMetadata,
        TimeBasedMetadata,
        SpendingReductionMetadata,
        ConsistencyMetadata,
    ],
    Field(discriminator="type"),
]

metadata_adapter = TypeAdapter(ChallengeMetadata)


def parse_metadata(challenge_type: str, raw: Optional[Dict[str, Any]]) -> ChallengeMetadata:
    """
    Validate raw metadata for a challenge of ``challenge_type``.

    A missing ``type`` tag is filled in from the challenge type; a tag that
    disagrees with it is rejected.
    """
    data = dict(raw or {})
    tag = data.setdefault("type", challenge_type)
    if tag != challenge_type:
        raise InvalidDataError(f"Metadata type '{tag}' does not match challenge type '{challenge_type}'")
    try:
        return metadata_adapter.validate_python(data)
    except ValidationError as exc:
        raise InvalidDataError(f"Invalid metadata for {challenge_type} challenge: {exc.errors()[0]['msg']}")


def dump_metadata(metadata: ChallengeMetadata) -> Dict[str, Any]:
    """JSON-ready dict with camelCase keys, as stored in the database."""
    return metadata.model_dump(mode="json", by_alias=True)
