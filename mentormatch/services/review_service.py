# mentormatch/services/review_service.py
"""
Review Service Layer
Review submission and the mentor's derived average rating
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from mentormatch.crud import meeting as meeting_crud
from mentormatch.crud import review as review_crud
from mentormatch.crud import user as user_crud
from mentormatch.exceptions import (
    NotFoundError,
    PreconditionFailedError,
    ServiceError,
    ValidationError,
)
from mentormatch.models.meeting import Meeting
from mentormatch.models.review import Review
from mentormatch.services import notification_service

logger = logging.getLogger(__name__)

NO_COMPLETED_MEETING = "You must complete a meeting with the mentor before leaving a review"
ALL_MEETINGS_REVIEWED = "You have already reviewed every completed meeting with this mentor"
MEETING_ALREADY_REVIEWED = "This meeting has already been reviewed"


# ======================
# REVIEW SUBMISSION
# ======================

def _select_meeting(
    db: Session,
    mentor_id: int,
    reviewer_id: int,
    meeting_id: Optional[int]
) -> Meeting:
    """Pick the completed meeting a new review is bound to."""
    completed = meeting_crud.list_completed_meetings(db, mentor_id, reviewer_id)
    if not completed:
        raise PreconditionFailedError(NO_COMPLETED_MEETING)

    if meeting_id is not None:
        meeting = next((m for m in completed if m.id == meeting_id), None)
        if meeting is None:
            raise PreconditionFailedError(NO_COMPLETED_MEETING)
        if review_crud.get_review_by_meeting(db, meeting.id):
            raise PreconditionFailedError(MEETING_ALREADY_REVIEWED)
        return meeting

    meeting = meeting_crud.first_unreviewed_meeting(db, mentor_id, reviewer_id)
    if meeting is None:
        raise PreconditionFailedError(ALL_MEETINGS_REVIEWED)
    return meeting


def add_mentor_review(
    db: Session,
    *,
    mentor_id: int,
    reviewer_id: int,
    rating: int,
    comment: Optional[str] = None,
    meeting_id: Optional[int] = None
) -> Dict[str, Any]:
    """
    Append a review to a mentor and recompute the mentor's rating.

    The reviewer needs a completed meeting with the mentor; each completed
    meeting unlocks one review. The new rating is the mean of every stored
    review, written in the same transaction as the review itself.

    Args:
        db: Database session
        mentor_id: Mentor user ID
        reviewer_id: Authenticated caller's user ID
        rating: Rating value (1-5)
        comment: Optional text comment
        meeting_id: Completed meeting to review; oldest unreviewed if omitted

    Returns:
        Dictionary with the review and the mentor's new rating

    Raises:
        NotFoundError: If the mentor does not exist or is not a mentor
        ValidationError: If rating or comment is invalid
        PreconditionFailedError: If no completed, unreviewed meeting exists
        ServiceError: Unexpected store failure
    """
    mentor = user_crud.get_mentor(db, mentor_id)
    if not mentor:
        raise NotFoundError("Mentor not found")

    if not isinstance(rating, int) or not (1 <= rating <= 5):
        raise ValidationError("Rating must be between 1 and 5")

    if comment and len(comment) > 1000:
        raise ValidationError("Comment must be 1000 characters or less")

    meeting = _select_meeting(db, mentor.id, reviewer_id, meeting_id)

    try:
        review = review_crud.create_review(
            db=db,
            mentor_id=mentor.id,
            reviewer_id=reviewer_id,
            meeting_id=meeting.id,
            rating=rating,
            comment=comment
        )

        mentor.rating, total_reviews = review_crud.calculate_mean_rating(db, mentor.id)

        notification = notification_service.notify_review(db, review)

        db.commit()
    except IntegrityError:
        db.rollback()
        raise PreconditionFailedError(MEETING_ALREADY_REVIEWED)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to add review for mentor %s", mentor_id)
        raise ServiceError()

    notification_service.dispatch_email_for_notification(db, notification)
    db.refresh(review)
    logger.info(
        "Review %s added for mentor %s (meeting_id=%s, new rating=%.2f)",
        review.id,
        mentor.id,
        meeting.id,
        mentor.rating,
    )

    return {
        "review": review,
        "rating": mentor.rating,
        "total_reviews": total_reviews,
    }


# ======================
# REVIEW RETRIEVAL
# ======================

def get_mentor_reviews(
    db: Session,
    mentor_id: int,
    limit: int = 50,
    offset: int = 0
) -> List[Review]:
    """
    Get reviews for a mentor.

    Raises:
        NotFoundError: If the mentor does not exist or is not a mentor
    """
    if not user_crud.get_mentor(db, mentor_id):
        raise NotFoundError("Mentor not found")
    return review_crud.get_reviews_by_mentor(db, mentor_id, limit, offset)
