# mentormatch/api/__init__.py

from . import auth
from . import meeting
from . import mentor
from . import notification
from . import users

__all__ = [
    "auth",
    "users",
    "mentor",
    "meeting",
    "notification",
]
