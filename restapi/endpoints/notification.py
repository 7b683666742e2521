"""Notification endpoints for the API."""

from typing import List
from fastapi import APIRouter, Depends

from components.core.exceptions import ensure_owner
from components.notification import schemas
from components.notification.repository import NotificationRepository
from components.user.models import User
from restapi.dependencies import get_notification_repository
from restapi.endpoints.auth import get_current_user

router = APIRouter(
    prefix="/notifications",
    tags=["notifications"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=List[schemas.Notification])
async def read_notifications(
    repo: NotificationRepository = Depends(get_notification_repository),
    current_user: User = Depends(get_current_user),
):
    """Get the user's notifications, newest first."""
    return await repo.get_for_user(current_user.id)


@router.get("/unread-count", response_model=schemas.UnreadCount)
async def read_unread_count(
    repo: NotificationRepository = Depends(get_notification_repository),
    current_user: User = Depends(get_current_user),
):
    """Number of unread notifications, for the badge in the header."""
    return schemas.UnreadCount(count=await repo.count_unread(current_user.id))


@router.put("/mark-all-read", response_model=schemas.MarkAllRead)
async def mark_all_read(
    repo: NotificationRepository = Depends(get_notification_repository),
    current_user: User = Depends(get_current_user),
):
    return schemas.MarkAllRead(updated=await repo.mark_all_as_read(current_user.id))


@router.put("/{notification_id}/read", response_model=schemas.Notification)
async def mark_read(
    notification_id: int,
    repo: NotificationRepository = Depends(get_notification_repository),
    current_user: User = Depends(get_current_user),
):
    notification = ensure_owner(await repo.get_by_id(notification_id), current_user.id, "Notification")
    return await repo.mark_as_read(notification)
