# mentormatch/models/meeting.py
from sqlalchemy import Column, Integer, String, Date, ForeignKey, TIMESTAMP, Index, func, text
from sqlalchemy.orm import relationship

from mentormatch.database import Base


class MeetingStatus:
    PENDING = "pending"
    UPCOMING = "upcoming"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    ALL = (PENDING, UPCOMING, COMPLETED, CANCELLED)


# A slot stays taken until its meeting is cancelled.
_ACTIVE_SLOT_PREDICATE = text("status != 'cancelled'")


class Meeting(Base):
    __tablename__ = "meetings"

    id = Column(Integer, primary_key=True, index=True)
    mentor_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    mentee_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    time_slot = Column(String(50), nullable=False)
    topic = Column(String(255), nullable=False)
    status = Column(String(20), nullable=False, default=MeetingStatus.PENDING)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, onupdate=func.now())

    __table_args__ = (
        Index(
            "uq_meetings_active_slot",
            "mentor_id",
            "date",
            "time_slot",
            unique=True,
            sqlite_where=_ACTIVE_SLOT_PREDICATE,
            postgresql_where=_ACTIVE_SLOT_PREDICATE,
        ),
    )

    mentor = relationship("User", foreign_keys=[mentor_id], back_populates="mentor_meetings")
    mentee = relationship("User", foreign_keys=[mentee_id], back_populates="mentee_meetings")
    review = relationship("Review", back_populates="meeting", uselist=False)
