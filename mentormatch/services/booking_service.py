# mentormatch/services/booking_service.py
"""
Booking Transaction
Reserve a mentor's slot for a mentee and notify the mentor.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from mentormatch.crud import meeting as meeting_crud
from mentormatch.crud import user as user_crud
from mentormatch.exceptions import (
    NotFoundError,
    ServiceError,
    SlotUnavailableError,
    ValidationError,
)
from mentormatch.models.meeting import Meeting
from mentormatch.models.notification import Notification
from mentormatch.services import notification_service
from mentormatch.utils.dates import to_calendar_day

logger = logging.getLogger(__name__)


@dataclass
class BookingResult:
    meeting: Meeting
    notification: Optional[Notification] = None
    notification_error: Optional[str] = None

    @property
    def notification_created(self) -> bool:
        return self.notification is not None


def _require(value: Optional[str], field_name: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationError(f"{field_name} is required")
    return value


def book_meeting(
    db: Session,
    *,
    mentor_id: int,
    mentee_id: int,
    meeting_date: Union[str, date],
    time_slot: str,
    topic: str
) -> BookingResult:
    """
    Book a pending meeting on a mentor's slot.

    The slot lookup is only a fast path; the partial unique index on
    (mentor_id, date, time_slot) for non-cancelled meetings decides races,
    and a violation is reported the same way as an occupied slot.

    The meeting is committed before the mentor notification is written.
    A notification failure leaves the booking in place and is reported on
    the result instead of raising.

    Args:
        db: Database session
        mentor_id: Mentor user ID
        mentee_id: Authenticated caller's user ID
        meeting_date: Calendar day (time of day ignored)
        time_slot: Slot label offered by the mentor
        topic: Meeting topic

    Returns:
        BookingResult with the meeting and, when written, the notification

    Raises:
        ValidationError: Missing field, self-booking or slot not offered
        NotFoundError: Mentor missing or not a mentor
        SlotUnavailableError: Slot already held by a non-cancelled meeting
        ServiceError: Unexpected store failure while booking
    """
    if mentor_id is None:
        raise ValidationError("mentorId is required")
    time_slot = _require(time_slot, "timeSlot")
    topic = _require(topic, "topic")
    calendar_day = to_calendar_day(meeting_date)

    mentor = user_crud.get_mentor(db, mentor_id)
    if not mentor:
        raise NotFoundError("Mentor not found")

    if mentor.id == mentee_id:
        raise ValidationError("You cannot book a meeting with yourself")

    if time_slot not in (mentor.available_time_slots or []):
        raise ValidationError("Mentor does not offer this time slot")

    if meeting_crud.find_active_meeting(db, mentor.id, calendar_day, time_slot):
        logger.info(
            "Slot taken (mentor_id=%s, date=%s, slot=%s)",
            mentor.id,
            calendar_day,
            time_slot,
        )
        raise SlotUnavailableError()

    try:
        meeting = meeting_crud.create_meeting(
            db=db,
            mentor_id=mentor.id,
            mentee_id=mentee_id,
            meeting_date=calendar_day,
            time_slot=time_slot,
            topic=topic,
        )
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info(
            "Concurrent booking lost the slot race (mentor_id=%s, date=%s, slot=%s)",
            mentor_id,
            calendar_day,
            time_slot,
        )
        raise SlotUnavailableError()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to book meeting with mentor %s", mentor_id)
        raise ServiceError()

    db.refresh(meeting)
    logger.info(
        "Meeting %s booked (mentor_id=%s, mentee_id=%s, date=%s, slot=%s)",
        meeting.id,
        meeting.mentor_id,
        meeting.mentee_id,
        meeting.date,
        meeting.time_slot,
    )

    try:
        notification = notification_service.notify_meeting_requested(db, meeting)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Meeting %s booked but mentor notification failed", meeting.id)
        return BookingResult(meeting=meeting, notification_error=str(exc))

    notification_service.dispatch_email_for_notification(db, notification)
    return BookingResult(meeting=meeting, notification=notification)
