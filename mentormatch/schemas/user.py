import re
from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator

from .common import CamelModel

# A slot may end at midnight, written 24:00
SLOT_LABEL_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d-(([01]\d|2[0-3]):[0-5]\d|24:00)$")


def normalize_slot_labels(labels: List[str]) -> List[str]:
    """Strip, validate and de-duplicate slot labels, keeping first-seen order."""
    seen = []
    for label in labels:
        label = (label or "").strip()
        if not SLOT_LABEL_PATTERN.match(label):
            raise ValueError(f"Invalid time slot '{label}'. Use 'HH:MM-HH:MM'")
        start, end = label.split("-")
        if start >= end:
            raise ValueError(f"Time slot '{label}' must end after it starts")
        if label not in seen:
            seen.append(label)
    return seen


# ======================
# MENTOR REQUEST MODELS
# ======================

class SkillItem(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    level: int = Field(3, ge=1, le=5)


class BecomeMentorRequest(CamelModel):
    user_id: int = Field(..., validation_alias=AliasChoices("userId", "user_id", "_id"))
    fields: List[str] = Field(default_factory=list)
    years_of_experience: int = Field(0, ge=0, le=80)
    current_company: str = ""
    linkedin: str = ""
    about: Optional[str] = Field(None, max_length=2000)
    skills: List[SkillItem] = Field(default_factory=list)
    certificates: List[str] = Field(default_factory=list)
    available_time_slots: Optional[List[str]] = None

    @field_validator("available_time_slots")
    @classmethod
    def validate_slots(cls, v):
        return normalize_slot_labels(v) if v is not None else None


class AvailabilityUpdate(CamelModel):
    available_time_slots: List[str]

    @field_validator("available_time_slots")
    @classmethod
    def validate_slots(cls, v):
        return normalize_slot_labels(v)


class ContactRequest(CamelModel):
    mentor_id: int
    message: str = Field(..., min_length=1, max_length=2000)


# ======================
# RESPONSE MODELS
# ======================

class MentorDetailsOut(CamelModel):
    fields: List[str] = Field(default_factory=list)
    years_of_experience: int = 0
    current_company: str = ""
    linkedin: str = ""
    certificates: List[str] = Field(default_factory=list)


class UserOut(CamelModel):
    id: int
    name: str
    email: str
    role: str
    about: Optional[str] = None
    skills: List[SkillItem] = Field(default_factory=list)
    rating: float = 0.0
    review_count: int = 0
    available_time_slots: List[str] = Field(default_factory=list)
    mentor_details: Optional[MentorDetailsOut] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user) -> "UserOut":
        details = user.mentor_details
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            about=user.about,
            skills=[SkillItem(**skill) for skill in (user.skills or [])],
            rating=user.rating or 0.0,
            review_count=len(user.reviews_received),
            available_time_slots=list(user.available_time_slots or []),
            mentor_details=(
                MentorDetailsOut(
                    fields=list(details.fields or []),
                    years_of_experience=details.years_of_experience or 0,
                    current_company=details.current_company or "",
                    linkedin=details.linkedin or "",
                    certificates=list(details.certificates or []),
                )
                if details
                else None
            ),
            created_at=user.created_at,
        )
