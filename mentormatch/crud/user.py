from typing import List, Optional

from sqlalchemy.orm import Session

from mentormatch import models
from mentormatch.models.user import ROLE_MENTEE, ROLE_MENTOR


def create_user(db: Session, *, name: str, email: str, password_hash: str, about: Optional[str] = None) -> models.User:
    db_user = models.User(
        name=name,
        email=email,
        password_hash=password_hash,
        role=ROLE_MENTEE,
        about=about,
        skills=[],
        available_time_slots=[],
        rating=0.0,
        is_active=True,
    )
    db.add(db_user)
    db.flush()
    return db_user


def get_user(db: Session, user_id: int) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.email == email).first()


def get_mentor(db: Session, mentor_id: int) -> Optional[models.User]:
    """Return the user only if it exists and holds the mentor role."""
    return db.query(models.User).filter(
        models.User.id == mentor_id,
        models.User.role == ROLE_MENTOR,
    ).first()


def list_mentors(db: Session, limit: int = 100, offset: int = 0) -> List[models.User]:
    return (
        db.query(models.User)
        .filter(models.User.role == ROLE_MENTOR, models.User.is_active.is_(True))
        .order_by(models.User.rating.desc(), models.User.id)
        .limit(limit)
        .offset(offset)
        .all()
    )


def get_or_create_mentor_details(db: Session, user: models.User) -> models.MentorDetails:
    if user.mentor_details is None:
        user.mentor_details = models.MentorDetails(user_id=user.id)
        db.add(user.mentor_details)
    return user.mentor_details
