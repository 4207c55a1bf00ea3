# mentormatch/schemas/__init__.py

# Auth schemas
from .auth import Token, TokenData, RegisterRequest, LoginRequest

# User / mentor schemas
from .user import (
    SkillItem,
    BecomeMentorRequest,
    AvailabilityUpdate,
    ContactRequest,
    MentorDetailsOut,
    UserOut,
)

# Meeting schemas
from .meeting import BookMeetingRequest, MeetingStatusUpdate, MeetingOut

# Review / notification schemas
from .review import ReviewCreate, ReviewOut
from .notification import NotificationOut

__all__ = [
    "Token",
    "TokenData",
    "RegisterRequest",
    "LoginRequest",
    "SkillItem",
    "BecomeMentorRequest",
    "AvailabilityUpdate",
    "ContactRequest",
    "MentorDetailsOut",
    "UserOut",
    "BookMeetingRequest",
    "MeetingStatusUpdate",
    "MeetingOut",
    "ReviewCreate",
    "ReviewOut",
    "NotificationOut",
]
