"""
Notification events and their dispatcher.

Business logic (challenge transitions, spending triggers) only describes the
notifications it wants as ``NotificationEvent`` values. ``NotificationDispatcher``
persists them after the triggering change has been committed. Notifications are
a best-effort side channel: a failed insert is logged and rolled back, it never
fails the request that caused it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from sqlalchemy.exc import SQLAlchemyError

from components.core.logging_config import get_logger
from components.notification.models import Notification, NotificationType
from components.notification.repository import NotificationRepository

logger = get_logger(__name__)


@dataclass
class NotificationEvent:
    user_id: int
    type: NotificationType
    title: str
    message: str
    data: Dict[str, Any] = field(default_factory=dict)


class NotificationDispatcher:
    """Persists notification events through the repository."""

    def __init__(self, repository: NotificationRepository):
        self.repository = repository

    async def dispatch(self, events: Iterable[NotificationEvent], keep_loaded: Iterable = ()) -> List[Notification]:
        """
        Store each event; returns the notifications that were saved.

        A rollback expires everything in the session, so the instances in
        ``keep_loaded`` are reloaded afterwards and stay usable by the caller.
        """
        events = list(events)
        created = []
        for event in events:
            try:
                created.append(await self.repository.create(
                    user_id=event.user_id,
                    type=event.type,
                    title=event.title,
                    message=event.message,
                    data=event.data or None,
                ))
            except SQLAlchemyError:
                logger.exception(
                    f"Failed to store {event.type.value} notification for user {event.user_id}"
                )
                await self.repository.session.rollback()
                continue
            logger.info(f"Notification {event.type.value} created for user {event.user_id}")

        if len(created) < len(events):
            for instance in keep_loaded:
                await self.repository.session.refresh(instance)
        return created
