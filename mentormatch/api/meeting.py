# mentormatch/api/meeting.py
"""
Meeting booking, availability and lifecycle endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from mentormatch import models
from mentormatch.crud import meeting as meeting_crud
from mentormatch.database import get_db
from mentormatch.schemas.meeting import BookMeetingRequest, MeetingOut, MeetingStatusUpdate
from mentormatch.services import availability_service, booking_service, meeting_service
from mentormatch.utils.security import get_current_user

router = APIRouter(prefix="/api/meetings", tags=["Meetings"])


# ======================
# BOOKING
# ======================
@router.post("/book", status_code=status.HTTP_201_CREATED)
def book_meeting(
    request: BookMeetingRequest,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Book a pending meeting on one of a mentor's slots.

    A booking whose mentor notification could not be stored still succeeds;
    `notificationCreated` is false in that case.
    """
    result = booking_service.book_meeting(
        db,
        mentor_id=request.mentor_id,
        mentee_id=current_user.id,
        meeting_date=request.date,
        time_slot=request.time_slot,
        topic=request.topic,
    )
    return {
        "success": True,
        "message": (
            "Meeting booked successfully"
            if result.notification_created
            else "Meeting booked, but the mentor could not be notified"
        ),
        "meeting": MeetingOut.from_meeting(result.meeting).to_json(),
        "notificationCreated": result.notification_created,
    }


@router.get("/availability/{mentor_id}/{date}")
def get_mentor_availability(
    mentor_id: int,
    date: str,
    db: Session = Depends(get_db)
):
    available = availability_service.get_mentor_availability(db, mentor_id, date)
    return {"success": True, "availableSlots": available}


# ======================
# LIFECYCLE
# ======================
@router.get("/my")
def get_my_meetings(
    status: Optional[str] = None,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    meetings = meeting_crud.list_meetings_for_user(db, current_user.id, status)
    return {
        "success": True,
        "meetings": [MeetingOut.from_meeting(m).to_json() for m in meetings],
    }


@router.patch("/{meeting_id}/status")
def update_meeting_status(
    meeting_id: int,
    update: MeetingStatusUpdate,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    meeting = meeting_service.update_meeting_status(
        db,
        meeting_id=meeting_id,
        actor=current_user,
        new_status=update.status,
    )
    return {
        "success": True,
        "message": f"Meeting is now {meeting.status}",
        "meeting": MeetingOut.from_meeting(meeting).to_json(),
    }
