# mentormatch/services/availability_service.py
"""
Availability Calculator
Free slots for a mentor on a calendar day.
"""

import logging
from datetime import date
from typing import Iterable, List, Union

from sqlalchemy.orm import Session

from mentormatch.crud import meeting as meeting_crud
from mentormatch.crud import user as user_crud
from mentormatch.exceptions import NotFoundError
from mentormatch.utils.dates import to_calendar_day

logger = logging.getLogger(__name__)


def subtract_booked_slots(offered: Iterable[str], booked: Iterable[str]) -> List[str]:
    """Offered slot labels minus booked ones, in the offered order."""
    taken = set(booked)
    return [slot for slot in offered if slot not in taken]


def get_mentor_availability(
    db: Session,
    mentor_id: int,
    day: Union[str, date]
) -> List[str]:
    """
    Compute a mentor's free slots for one day.

    Args:
        db: Database session
        mentor_id: Mentor user ID
        day: Calendar day (date, datetime or ISO string; time of day ignored)

    Returns:
        Slot labels from the mentor's configured list with no
        non-cancelled meeting on that day

    Raises:
        NotFoundError: If the mentor does not exist or is not a mentor
        ValidationError: If the date cannot be parsed
    """
    calendar_day = to_calendar_day(day)

    mentor = user_crud.get_mentor(db, mentor_id)
    if not mentor:
        raise NotFoundError("Mentor not found")

    booked = meeting_crud.get_booked_slots(db, mentor.id, calendar_day)
    available = subtract_booked_slots(mentor.available_time_slots or [], booked)

    logger.debug(
        "Availability for mentor %s on %s: %d free, %d booked",
        mentor.id,
        calendar_day,
        len(available),
        len(booked),
    )
    return available
