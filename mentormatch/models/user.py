# mentormatch/models/user.py
from sqlalchemy import Column, Integer, String, Text, Boolean, Float, ForeignKey, TIMESTAMP, JSON, func
from sqlalchemy.orm import relationship

from mentormatch.database import Base

ROLE_MENTEE = "mentee"
ROLE_MENTOR = "mentor"
USER_ROLES = (ROLE_MENTEE, ROLE_MENTOR)


# ---------------- USER ----------------
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=ROLE_MENTEE, index=True)
    about = Column(Text)
    # [{"name": "python", "level": 3}, ...]
    skills = Column(JSON, default=list, nullable=False)
    # Ordered slot labels, e.g. ["09:00-10:00", "10:00-11:00"]
    available_time_slots = Column(JSON, default=list, nullable=False)
    # Mean of reviews_received.rating; written only by the review service.
    rating = Column(Float, default=0.0, nullable=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, onupdate=func.now())

    mentor_details = relationship("MentorDetails", back_populates="user", uselist=False, cascade="all, delete-orphan")
    reviews_received = relationship(
        "Review",
        foreign_keys="Review.mentor_id",
        back_populates="mentor",
        order_by="Review.id",
        cascade="all, delete-orphan",
    )
    reviews_given = relationship("Review", foreign_keys="Review.reviewer_id", back_populates="reviewer")
    mentor_meetings = relationship("Meeting", foreign_keys="Meeting.mentor_id", back_populates="mentor")
    mentee_meetings = relationship("Meeting", foreign_keys="Meeting.mentee_id", back_populates="mentee")

    @property
    def is_mentor(self) -> bool:
        return self.role == ROLE_MENTOR


# ---------------- MENTOR DETAILS ----------------
class MentorDetails(Base):
    __tablename__ = "mentor_details"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    fields = Column(JSON, default=list, nullable=False)
    years_of_experience = Column(Integer, default=0, nullable=False)
    current_company = Column(String(150), default="")
    linkedin = Column(String(255), default="")
    certificates = Column(JSON, default=list, nullable=False)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="mentor_details")
