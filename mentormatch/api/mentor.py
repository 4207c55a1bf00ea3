# mentormatch/api/mentor.py
"""
Mentor directory and review endpoints.

Endpoints:
- POST /api/mentor/become - Promote a user to mentor
- GET /api/mentor - List mentors
- GET /api/mentor/{mentor_id} - Get one mentor
- POST /api/mentor/contact - Contact a mentor
- PUT /api/mentor/availability - Replace the caller's offered slots
- GET /api/mentor/{mentor_id}/reviews - List a mentor's reviews
- POST /api/mentor/{mentor_id}/reviews - Review a mentor
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from mentormatch import models
from mentormatch.database import get_db
from mentormatch.schemas.review import ReviewCreate, ReviewOut
from mentormatch.schemas.user import (
    AvailabilityUpdate,
    BecomeMentorRequest,
    ContactRequest,
    UserOut,
)
from mentormatch.services import mentor_service, review_service
from mentormatch.utils.security import get_current_user

router = APIRouter(prefix="/api/mentor", tags=["Mentors"])


# ======================
# MENTOR DIRECTORY
# ======================
@router.post("/become")
def become_mentor(
    request: BecomeMentorRequest,
    db: Session = Depends(get_db)
):
    user = mentor_service.become_mentor(db, request)
    return {
        "success": True,
        "message": "Mentor request submitted successfully!",
        "mentor": UserOut.from_user(user).to_json(),
    }


@router.get("")
def list_mentors(
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db)
):
    mentors = mentor_service.list_mentors(db, limit=limit, offset=offset)
    return {
        "success": True,
        "mentors": [UserOut.from_user(m).to_json() for m in mentors],
    }


@router.post("/contact")
def contact_mentor(
    request: ContactRequest,
    db: Session = Depends(get_db)
):
    mentor_service.contact_mentor(db, mentor_id=request.mentor_id, message=request.message)
    return {"success": True, "message": "Contact request sent successfully"}


@router.put("/availability")
def update_availability(
    request: AvailabilityUpdate,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    user = mentor_service.update_available_slots(
        db,
        user=current_user,
        slots=request.available_time_slots,
    )
    return {
        "success": True,
        "message": "Available time slots updated",
        "availableTimeSlots": list(user.available_time_slots or []),
    }


@router.get("/{mentor_id}")
def get_mentor(
    mentor_id: int,
    db: Session = Depends(get_db)
):
    mentor = mentor_service.get_mentor(db, mentor_id)
    return {"success": True, "mentor": UserOut.from_user(mentor).to_json()}


# ======================
# REVIEWS
# ======================
@router.get("/{mentor_id}/reviews")
def get_mentor_reviews(
    mentor_id: int,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db)
):
    reviews = review_service.get_mentor_reviews(db, mentor_id, limit=limit, offset=offset)
    return {
        "success": True,
        "reviews": [ReviewOut.from_review(r).to_json() for r in reviews],
    }


@router.post("/{mentor_id}/reviews", status_code=status.HTTP_201_CREATED)
def add_mentor_review(
    mentor_id: int,
    review: ReviewCreate,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Review a mentor after a completed meeting.

    Each completed meeting between the caller and the mentor allows one
    review; the mentor's rating is recomputed from all reviews.
    """
    result = review_service.add_mentor_review(
        db,
        mentor_id=mentor_id,
        reviewer_id=current_user.id,
        rating=review.rating,
        comment=review.comment,
        meeting_id=review.meeting_id,
    )
    return {
        "success": True,
        "message": "Review added successfully",
        "review": ReviewOut.from_review(result["review"]).to_json(),
        "rating": result["rating"],
        "totalReviews": result["total_reviews"],
    }
