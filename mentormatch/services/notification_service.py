# mentormatch/services/notification_service.py
"""
Notification Service
In-app notifications for meeting and review events, mirrored to email
when SMTP is configured.
"""

import logging
import threading
from typing import Dict, List, NamedTuple, Optional

from sqlalchemy.orm import Session

from mentormatch import models
from mentormatch.models.meeting import Meeting, MeetingStatus
from mentormatch.models.notification import Notification
from mentormatch.models.review import Review
from mentormatch.utils.email import is_email_enabled, send_email

logger = logging.getLogger(__name__)


class NotificationEvent(NamedTuple):
    subject: str
    template: str


MEETING_REQUESTED = "meeting_requested"
MEETING_ACCEPTED = "meeting_accepted"
MEETING_COMPLETED = "meeting_completed"
MEETING_CANCELLED = "meeting_cancelled"
REVIEW_RECEIVED = "review_received"

EVENTS: Dict[str, NotificationEvent] = {
    MEETING_REQUESTED: NotificationEvent(
        "New meeting request on MentorMatch",
        "You have a new meeting request for {topic} on {date} during {slot}.",
    ),
    MEETING_ACCEPTED: NotificationEvent(
        "Your meeting was accepted on MentorMatch",
        "{name} accepted your meeting request for {date} during {slot}.",
    ),
    MEETING_COMPLETED: NotificationEvent(
        "Meeting marked completed on MentorMatch",
        "{name} marked the meeting on {date} during {slot} as completed.",
    ),
    MEETING_CANCELLED: NotificationEvent(
        "Meeting cancelled on MentorMatch",
        "{name} cancelled the meeting on {date} during {slot}.",
    ),
    REVIEW_RECEIVED: NotificationEvent(
        "You received a new review on MentorMatch",
        "You received a {rating}-star review.",
    ),
}

# Meeting status a transition lands on -> event announcing it
STATUS_EVENTS = {
    MeetingStatus.UPCOMING: MEETING_ACCEPTED,
    MeetingStatus.COMPLETED: MEETING_COMPLETED,
    MeetingStatus.CANCELLED: MEETING_CANCELLED,
}

DEFAULT_SUBJECT = "New notification from MentorMatch"


# ======================
# WRITING NOTIFICATIONS
# ======================

def create_notification(
    db: Session,
    *,
    recipient_id: int,
    sender_id: Optional[int],
    meeting_id: Optional[int],
    event_type: str,
    message: str,
) -> Notification:
    """Add an unread notification and flush it; the caller commits."""
    notification = Notification(
        recipient_id=recipient_id,
        sender_id=sender_id,
        meeting_id=meeting_id,
        event_type=event_type,
        message=message,
        is_read=False,
    )
    db.add(notification)
    db.flush()
    return notification


def _notify(
    db: Session,
    event_type: str,
    *,
    recipient_id: int,
    sender_id: Optional[int],
    meeting_id: Optional[int],
    **fields,
) -> Notification:
    return create_notification(
        db,
        recipient_id=recipient_id,
        sender_id=sender_id,
        meeting_id=meeting_id,
        event_type=event_type,
        message=EVENTS[event_type].template.format(**fields),
    )


def notify_meeting_requested(db: Session, meeting: Meeting) -> Notification:
    """Tell the mentor a mentee booked one of their slots."""
    return _notify(
        db,
        MEETING_REQUESTED,
        recipient_id=meeting.mentor_id,
        sender_id=meeting.mentee_id,
        meeting_id=meeting.id,
        topic=meeting.topic,
        date=meeting.date.isoformat(),
        slot=meeting.time_slot,
    )


def notify_status_change(db: Session, meeting: Meeting, actor: models.User) -> Notification:
    """
    Tell the other participant that ``actor`` moved the meeting to its
    current status.

    Raises:
        KeyError: If the meeting's status has no announcing event
    """
    counterparty_id = meeting.mentee_id if actor.id == meeting.mentor_id else meeting.mentor_id
    return _notify(
        db,
        STATUS_EVENTS[meeting.status],
        recipient_id=counterparty_id,
        sender_id=actor.id,
        meeting_id=meeting.id,
        name=actor.name,
        date=meeting.date.isoformat(),
        slot=meeting.time_slot,
    )


def notify_review(db: Session, review: Review) -> Notification:
    """Tell the mentor they were reviewed."""
    return _notify(
        db,
        REVIEW_RECEIVED,
        recipient_id=review.mentor_id,
        sender_id=review.reviewer_id,
        meeting_id=review.meeting_id,
        rating=review.rating,
    )


# ======================
# READING NOTIFICATIONS
# ======================

def _inbox(db: Session, user_id: int, unread_only: bool = False):
    query = db.query(Notification).filter(Notification.recipient_id == user_id)
    if unread_only:
        query = query.filter(Notification.is_read.is_(False))
    return query


def list_user_notifications(
    db: Session,
    *,
    user_id: int,
    unread_only: bool = False,
    limit: int = 50,
) -> List[Notification]:
    """Newest first."""
    return (
        _inbox(db, user_id, unread_only)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .limit(limit)
        .all()
    )


def get_unread_count(db: Session, *, user_id: int) -> int:
    return _inbox(db, user_id, unread_only=True).count()


def mark_notification_read(
    db: Session,
    *,
    user_id: int,
    notification_id: int,
) -> Optional[Notification]:
    """Returns None when the notification is missing or belongs to someone else."""
    notification = _inbox(db, user_id).filter(Notification.id == notification_id).first()
    if notification is None:
        return None
    notification.is_read = True
    db.commit()
    return notification


def mark_all_notifications_read(db: Session, *, user_id: int) -> int:
    updated = _inbox(db, user_id, unread_only=True).update(
        {"is_read": True}, synchronize_session=False
    )
    db.commit()
    return int(updated)


# ======================
# EMAIL DELIVERY
# ======================

def _email_body(recipient: models.User, notification: Notification) -> str:
    greeting = (recipient.name or "").strip() or "there"
    lines = [f"Hi {greeting},", "", notification.message, ""]
    if notification.meeting_id is not None:
        lines += [f"Meeting ID: {notification.meeting_id}", ""]
    lines.append("Open MentorMatch to view details.")
    return "\n".join(lines)


def _deliver(to_email: str, subject: str, body: str, notification_id: Optional[int]) -> None:
    if not send_email(to_email=to_email, subject=subject, body_text=body):
        logger.info("Notification email not sent (notification_id=%s)", notification_id)


def dispatch_email_for_notification(db: Session, notification: Notification) -> bool:
    """
    Mail a committed notification to its recipient on a background thread.

    Never raises; returns True only when a send was started.
    """
    try:
        if not is_email_enabled():
            return False

        recipient = db.get(models.User, notification.recipient_id)
        if recipient is None or not recipient.email:
            return False

        event = EVENTS.get(notification.event_type)
        threading.Thread(
            target=_deliver,
            args=(
                recipient.email,
                event.subject if event else DEFAULT_SUBJECT,
                _email_body(recipient, notification),
                notification.id,
            ),
            daemon=True,
        ).start()
        return True
    except Exception as exc:
        logger.warning(
            "Notification email dispatch failed (notification_id=%s): %s",
            getattr(notification, "id", None),
            exc,
        )
        return False
