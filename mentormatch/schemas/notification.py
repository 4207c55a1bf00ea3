from datetime import datetime
from typing import Optional

from .common import CamelModel


class NotificationOut(CamelModel):
    id: int
    recipient_id: int
    sender_id: Optional[int] = None
    meeting_id: Optional[int] = None
    event_type: str
    message: str
    is_read: bool
    created_at: Optional[datetime] = None

    @classmethod
    def from_notification(cls, notification) -> "NotificationOut":
        return cls(
            id=notification.id,
            recipient_id=notification.recipient_id,
            sender_id=notification.sender_id,
            meeting_id=notification.meeting_id,
            event_type=notification.event_type,
            message=notification.message,
            is_read=notification.is_read,
            created_at=notification.created_at,
        )
