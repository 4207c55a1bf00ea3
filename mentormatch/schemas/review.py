# mentormatch/schemas/review.py
from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from .common import CamelModel


class ReviewCreate(CamelModel):
    """Schema for reviewing a mentor"""
    rating: int = Field(..., ge=1, le=5, description="Rating from 1 to 5 stars")
    comment: Optional[str] = Field(None, max_length=1000, description="Review comment (max 1000 chars)")
    meeting_id: Optional[int] = Field(None, description="Completed meeting being reviewed")

    @field_validator("comment")
    @classmethod
    def validate_comment(cls, v):
        """Blank comments are stored as no comment"""
        if v is None:
            return None
        return v.strip() or None


class ReviewOut(CamelModel):
    id: int
    meeting_id: int
    reviewer_id: int
    reviewer_name: Optional[str] = None
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_review(cls, review) -> "ReviewOut":
        return cls(
            id=review.id,
            meeting_id=review.meeting_id,
            reviewer_id=review.reviewer_id,
            reviewer_name=review.reviewer.name if review.reviewer else None,
            rating=review.rating,
            comment=review.comment,
            created_at=review.created_at,
        )
