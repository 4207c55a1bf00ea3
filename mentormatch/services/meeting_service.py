# mentormatch/services/meeting_service.py
"""
Meeting lifecycle: pending -> upcoming -> completed, and cancellation.
"""

import logging
from typing import Dict, FrozenSet

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mentormatch import models
from mentormatch.crud import meeting as meeting_crud
from mentormatch.exceptions import (
    NotFoundError,
    PermissionDeniedError,
    ServiceError,
    ValidationError,
)
from mentormatch.models.meeting import Meeting, MeetingStatus
from mentormatch.services import notification_service

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    MeetingStatus.PENDING: frozenset({MeetingStatus.UPCOMING, MeetingStatus.CANCELLED}),
    MeetingStatus.UPCOMING: frozenset({MeetingStatus.COMPLETED, MeetingStatus.CANCELLED}),
    MeetingStatus.COMPLETED: frozenset(),
    MeetingStatus.CANCELLED: frozenset(),
}


def update_meeting_status(
    db: Session,
    *,
    meeting_id: int,
    actor: models.User,
    new_status: str
) -> Meeting:
    """
    Move a meeting to a new status and notify the other participant.

    Only the mentor may accept (pending -> upcoming). Either participant may
    complete an upcoming meeting or cancel a pending/upcoming one; a
    cancelled meeting releases its slot.

    Raises:
        NotFoundError: Meeting does not exist
        PermissionDeniedError: Caller is not allowed to make this change
        ValidationError: Unknown status or transition not allowed
    """
    new_status = (new_status or "").strip().lower()
    if new_status not in MeetingStatus.ALL:
        raise ValidationError(f"Status must be one of: {', '.join(MeetingStatus.ALL)}")

    meeting = meeting_crud.get_meeting(db, meeting_id)
    if not meeting:
        raise NotFoundError("Meeting not found")

    if actor.id not in (meeting.mentor_id, meeting.mentee_id):
        raise PermissionDeniedError("Not authorized for this meeting")

    if new_status not in ALLOWED_TRANSITIONS.get(meeting.status, frozenset()):
        raise ValidationError(f"Cannot change a {meeting.status} meeting to {new_status}")

    if new_status == MeetingStatus.UPCOMING and actor.id != meeting.mentor_id:
        raise PermissionDeniedError("Only the mentor can accept a meeting request")

    try:
        meeting.status = new_status
        notification = notification_service.notify_status_change(db, meeting, actor)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to update meeting %s to %s", meeting_id, new_status)
        raise ServiceError()

    notification_service.dispatch_email_for_notification(db, notification)
    db.refresh(meeting)
    logger.info("Meeting %s is now %s (by user %s)", meeting.id, meeting.status, actor.id)
    return meeting
