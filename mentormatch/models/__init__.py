# mentormatch/models/__init__.py
# Import models in dependency order
from .user import User, MentorDetails, ROLE_MENTEE, ROLE_MENTOR
from .meeting import Meeting, MeetingStatus
from .review import Review
from .notification import Notification

__all__ = [
    "User",
    "MentorDetails",
    "ROLE_MENTEE",
    "ROLE_MENTOR",
    "Meeting",
    "MeetingStatus",
    "Review",
    "Notification",
]
