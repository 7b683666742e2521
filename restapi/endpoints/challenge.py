"""Challenge endpoints for the API."""

from typing import List
from fastapi import APIRouter, Depends, status

from components.challenge import schemas
from components.challenge.service import ChallengeService
from components.user.models import User
from restapi.dependencies import get_challenge_service
from restapi.endpoints.auth import get_current_user

router = APIRouter(
    prefix="/challenges",
    tags=["challenges"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=List[schemas.Challenge])
async def read_challenges(
    service: ChallengeService = Depends(get_challenge_service),
    current_user: User = Depends(get_current_user),
):
    """Get all challenges of the user, in every status."""
    return await service.list_challenges(current_user.id)


@router.get("/active", response_model=schemas.Challenge)
async def read_active_challenge(
    service: ChallengeService = Depends(get_challenge_service),
    current_user: User = Depends(get_current_user),
):
    """Get the user's running challenge, 404 when there is none."""
    return await service.get_active(current_user.id)


@router.get("/suggestions", response_model=List[schemas.Challenge])
async def read_suggestions(
    service: ChallengeService = Depends(get_challenge_service),
    current_user: User = Depends(get_current_user),
):
    """
    Get suggested challenges.

    When the user has no pending suggestions a new batch is generated from
    the spending of the last weeks.
    """
    return await service.get_suggestions(current_user.id)


@router.post("/start", response_model=schemas.Challenge, status_code=status.HTTP_201_CREATED)
async def start_challenge(
    payload: schemas.ChallengeStart,
    service: ChallengeService = Depends(get_challenge_service),
    current_user: User = Depends(get_current_user),
):
    """
    Start a challenge.

    Send ``challengeId`` to start a suggestion, or ``type``, ``title``,
    ``metadata`` and optionally ``targetValue``, ``description`` and
    ``durationDays`` to create your own.
    """
    return await service.start(current_user.id, payload)


@router.put("/{challenge_id}/cancel", response_model=schemas.Challenge)
async def cancel_challenge(
    challenge_id: int,
    service: ChallengeService = Depends(get_challenge_service),
    current_user: User = Depends(get_current_user),
):
    """Dismiss a suggested or active challenge."""
    return await service.cancel(current_user.id, challenge_id)


@router.put("/{challenge_id}/update-progress", response_model=schemas.Challenge)
async def update_challenge_progress(
    challenge_id: int,
    payload: schemas.ProgressUpdate,
    service: ChallengeService = Depends(get_challenge_service),
    current_user: User = Depends(get_current_user),
):
    """Record progress; reaching 100 completes the challenge."""
    return await service.update_progress(
        current_user.id, challenge_id, payload.progress, payload.current_value
    )
