from datetime import datetime
from typing import Any, Dict, Optional

from components.core.schemas import CamelModel
from components.notification.models import NotificationType


class Notification(CamelModel):
    """Schema for notification response."""
    id: int
    user_id: int
    type: NotificationType
    title: str
    message: str
    created_at: datetime
    is_read: bool
    data: Optional[Dict[str, Any]] = None


class UnreadCount(CamelModel):
    count: int


class MarkAllRead(CamelModel):
    updated: int
