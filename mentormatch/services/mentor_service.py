# mentormatch/services/mentor_service.py
"""
Mentor directory: promotion to mentor, listing, contact and slot setup.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mentormatch import models
from mentormatch.crud import meeting as meeting_crud
from mentormatch.crud import user as user_crud
from mentormatch.exceptions import ConflictError, NotFoundError, PermissionDeniedError, ServiceError
from mentormatch.models.user import ROLE_MENTOR
from mentormatch.schemas.user import BecomeMentorRequest

logger = logging.getLogger(__name__)

SLOT_IN_USE = "Cannot remove a slot that has booked meetings"

# MentorDetails columns a request overwrites only when it sends them
DETAIL_FIELDS = ("fields", "years_of_experience", "current_company", "linkedin", "certificates")


def _ensure_slots_kept(db: Session, mentor_id: int, new_slots: List[str]) -> None:
    """
    Refuse a slot list that drops a label still held by a pending or
    upcoming meeting; booked slots must stay a subset of offered ones.
    """
    dropped = meeting_crud.get_held_slot_labels(db, mentor_id) - set(new_slots)
    if dropped:
        logger.info("Mentor %s tried to remove booked slots %s", mentor_id, sorted(dropped))
        raise ConflictError(SLOT_IN_USE)


def become_mentor(db: Session, request: BecomeMentorRequest) -> models.User:
    """
    Mark a user as a mentor and store their mentor profile.

    Calling it again on a mentor updates only the fields sent. There is no
    way back to the mentee role.

    Raises:
        NotFoundError: If the user does not exist
        ConflictError: If new slots drop one that a meeting still holds
    """
    user = user_crud.get_user(db, request.user_id)
    if not user:
        raise NotFoundError("User not found.")

    sent = request.model_fields_set
    if request.available_time_slots is not None:
        _ensure_slots_kept(db, user.id, request.available_time_slots)

    try:
        details = user_crud.get_or_create_mentor_details(db, user)
        for name in DETAIL_FIELDS:
            if name in sent:
                setattr(details, name, getattr(request, name))

        if request.about:
            user.about = request.about
        if "skills" in sent:
            user.skills = [skill.model_dump() for skill in request.skills]
        if request.available_time_slots is not None:
            user.available_time_slots = request.available_time_slots
        user.role = ROLE_MENTOR

        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to save mentor profile for user %s", request.user_id)
        raise ServiceError()

    db.refresh(user)
    logger.info("User %s is now a mentor", user.id)
    return user


def list_mentors(db: Session, limit: int = 100, offset: int = 0) -> List[models.User]:
    return user_crud.list_mentors(db, limit=limit, offset=offset)


def get_mentor(db: Session, mentor_id: int) -> models.User:
    mentor = user_crud.get_mentor(db, mentor_id)
    if not mentor:
        raise NotFoundError("Mentor not found")
    return mentor


def contact_mentor(db: Session, *, mentor_id: int, message: str, sender_id: Optional[int] = None) -> None:
    """
    Acknowledge a contact request for a mentor.

    Delivery is not wired up yet; the request is only logged.
    """
    mentor = get_mentor(db, mentor_id)
    logger.info(
        "Contact request for mentor %s from %s (%d chars)",
        mentor.id,
        sender_id if sender_id is not None else "anonymous",
        len(message),
    )


def update_available_slots(db: Session, *, user: models.User, slots: List[str]) -> models.User:
    """
    Replace a mentor's offered slot labels.

    A slot held by a pending or upcoming meeting cannot be removed until
    that meeting is completed or cancelled.

    Raises:
        PermissionDeniedError: If the caller is not a mentor
        ConflictError: If a dropped slot still has a booked meeting
    """
    if not user.is_mentor:
        raise PermissionDeniedError("Only mentors can set available time slots")
    _ensure_slots_kept(db, user.id, slots)

    try:
        user.available_time_slots = list(slots)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to update time slots for mentor %s", user.id)
        raise ServiceError()

    db.refresh(user)
    return user
