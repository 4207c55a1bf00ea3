import datetime as dt
from typing import Optional

from pydantic import Field, field_validator

from .common import CamelModel


# ======================
# MEETING REQUEST MODELS
# ======================

class BookMeetingRequest(CamelModel):
    mentor_id: int
    # Calendar day; a time-of-day component is accepted and ignored.
    date: str = Field(..., min_length=1)
    time_slot: str = Field(..., min_length=1, max_length=50)
    topic: str = Field(..., min_length=1, max_length=255)

    @field_validator("date", "time_slot", "topic")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()


class MeetingStatusUpdate(CamelModel):
    status: str  # "upcoming", "completed", "cancelled"


# ======================
# MEETING RESPONSE MODELS
# ======================

class MeetingOut(CamelModel):
    id: int
    mentor_id: int
    mentee_id: int
    mentor_name: Optional[str] = None
    mentee_name: Optional[str] = None
    date: dt.date
    time_slot: str
    topic: str
    status: str
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    @classmethod
    def from_meeting(cls, meeting) -> "MeetingOut":
        return cls(
            id=meeting.id,
            mentor_id=meeting.mentor_id,
            mentee_id=meeting.mentee_id,
            mentor_name=meeting.mentor.name if meeting.mentor else None,
            mentee_name=meeting.mentee.name if meeting.mentee else None,
            date=meeting.date,
            time_slot=meeting.time_slot,
            topic=meeting.topic,
            status=meeting.status,
            created_at=meeting.created_at,
            updated_at=meeting.updated_at,
        )
