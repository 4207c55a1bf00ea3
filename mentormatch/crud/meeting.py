# mentormatch/crud/meeting.py
"""
Meeting CRUD Operations
Slot lookups used by availability and booking, plus lifecycle queries.
"""

from datetime import date
from typing import List, Optional, Set

from sqlalchemy.orm import Session

from mentormatch.models.meeting import Meeting, MeetingStatus
from mentormatch.models.review import Review
from mentormatch.utils.dates import day_window


# ======================
# SLOT QUERIES
# ======================

def find_active_meeting(
    db: Session,
    mentor_id: int,
    meeting_date: date,
    time_slot: str
) -> Optional[Meeting]:
    """
    Find the non-cancelled meeting holding a mentor's slot on a day.

    Args:
        db: Database session
        mentor_id: Mentor user ID
        meeting_date: Calendar day
        time_slot: Slot label, e.g. "10:00-11:00"

    Returns:
        Meeting object or None if the slot is free
    """
    return db.query(Meeting).filter(
        Meeting.mentor_id == mentor_id,
        Meeting.date == meeting_date,
        Meeting.time_slot == time_slot,
        Meeting.status != MeetingStatus.CANCELLED,
    ).first()


def get_booked_slots(db: Session, mentor_id: int, day: date) -> List[str]:
    """
    Get slot labels of a mentor's non-cancelled meetings within [day, day + 1).

    Args:
        db: Database session
        mentor_id: Mentor user ID
        day: Calendar day

    Returns:
        List of booked slot labels
    """
    start, end = day_window(day)
    rows = db.query(Meeting.time_slot).filter(
        Meeting.mentor_id == mentor_id,
        Meeting.date >= start,
        Meeting.date < end,
        Meeting.status != MeetingStatus.CANCELLED,
    ).all()
    return [row[0] for row in rows]


def get_held_slot_labels(db: Session, mentor_id: int) -> Set[str]:
    """Slot labels a mentor's pending or upcoming meetings hold, on any day."""
    rows = db.query(Meeting.time_slot).filter(
        Meeting.mentor_id == mentor_id,
        Meeting.status.in_((MeetingStatus.PENDING, MeetingStatus.UPCOMING)),
    ).distinct().all()
    return {row[0] for row in rows}


# ======================
# MEETING CRUD
# ======================

def create_meeting(
    db: Session,
    mentor_id: int,
    mentee_id: int,
    meeting_date: date,
    time_slot: str,
    topic: str
) -> Meeting:
    """
    Insert a pending meeting and flush so the slot index is checked.

    Raises:
        sqlalchemy.exc.IntegrityError: If the slot is already taken
    """
    meeting = Meeting(
        mentor_id=mentor_id,
        mentee_id=mentee_id,
        date=meeting_date,
        time_slot=time_slot,
        topic=topic,
        status=MeetingStatus.PENDING,
    )
    db.add(meeting)
    db.flush()
    return meeting


def get_meeting(db: Session, meeting_id: int) -> Optional[Meeting]:
    return db.query(Meeting).filter(Meeting.id == meeting_id).first()


def list_meetings_for_user(
    db: Session,
    user_id: int,
    status: Optional[str] = None
) -> List[Meeting]:
    """Meetings where the user is mentor or mentee, newest day first."""
    query = db.query(Meeting).filter(
        (Meeting.mentor_id == user_id) | (Meeting.mentee_id == user_id)
    )
    if status:
        query = query.filter(Meeting.status == status)
    return query.order_by(Meeting.date.desc(), Meeting.time_slot).all()


# ======================
# REVIEW ELIGIBILITY
# ======================

def list_completed_meetings(db: Session, mentor_id: int, mentee_id: int) -> List[Meeting]:
    """Completed meetings between the pair, oldest first."""
    return db.query(Meeting).filter(
        Meeting.mentor_id == mentor_id,
        Meeting.mentee_id == mentee_id,
        Meeting.status == MeetingStatus.COMPLETED,
    ).order_by(Meeting.date, Meeting.id).all()


def first_unreviewed_meeting(db: Session, mentor_id: int, mentee_id: int) -> Optional[Meeting]:
    """Oldest completed meeting between the pair that has no review yet."""
    return db.query(Meeting).outerjoin(
        Review, Review.meeting_id == Meeting.id
    ).filter(
        Meeting.mentor_id == mentor_id,
        Meeting.mentee_id == mentee_id,
        Meeting.status == MeetingStatus.COMPLETED,
        Review.id.is_(None),
    ).order_by(Meeting.date, Meeting.id).first()
