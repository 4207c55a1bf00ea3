# mentormatch/crud/review.py
"""
Review CRUD Operations
Core database operations for mentor reviews and the derived rating.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from mentormatch.models.review import Review


def create_review(
    db: Session,
    mentor_id: int,
    reviewer_id: int,
    meeting_id: int,
    rating: int,
    comment: Optional[str] = None
) -> Review:
    """
    Create a review bound to a completed meeting.

    Args:
        db: Database session
        mentor_id: Mentor user ID
        reviewer_id: Reviewer (mentee) user ID
        meeting_id: Completed meeting identifier
        rating: Rating value (1-5)
        comment: Optional text comment

    Rating bounds are checked by the review service and again by the
    table's check constraint.

    Returns:
        Created Review object
    """
    review = Review(
        mentor_id=mentor_id,
        reviewer_id=reviewer_id,
        meeting_id=meeting_id,
        rating=rating,
        comment=comment
    )

    db.add(review)
    db.flush()
    return review


def get_review_by_meeting(db: Session, meeting_id: int) -> Optional[Review]:
    return db.query(Review).filter(Review.meeting_id == meeting_id).first()


def get_reviews_by_mentor(
    db: Session,
    mentor_id: int,
    limit: int = 50,
    offset: int = 0
) -> List[Review]:
    """
    Get reviews for a mentor, newest first.

    Args:
        db: Database session
        mentor_id: Mentor user ID
        limit: Maximum reviews to return
        offset: Number of reviews to skip

    Returns:
        List of Review objects
    """
    return (
        db.query(Review)
        .filter(Review.mentor_id == mentor_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )


def calculate_mean_rating(db: Session, mentor_id: int) -> tuple[float, int]:
    """
    Mean of every persisted review rating for a mentor.

    Reads flushed rows, so a review added in the current transaction counts.

    Returns:
        Tuple of (mean rating, total reviews); (0.0, 0) with no reviews
    """
    ratings = [row[0] for row in db.query(Review.rating).filter(Review.mentor_id == mentor_id).all()]
    if not ratings:
        return (0.0, 0)
    return (sum(ratings) / len(ratings), len(ratings))
