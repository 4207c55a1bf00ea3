# mentormatch/exceptions.py
"""
Domain errors raised by the service layer.

Each error carries the HTTP status it maps to; the handlers registered in
``mentormatch.main`` turn them into ``{"success": false, "message": ...}``.
"""

from fastapi import status


class MentorMatchError(Exception):
    """Base class for errors that are safe to show to the caller."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal Server Error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(MentorMatchError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ValidationError(MentorMatchError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class PermissionDeniedError(MentorMatchError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not authorized"


class ConflictError(MentorMatchError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class SlotUnavailableError(ConflictError):
    default_message = "Time slot not available"


class PreconditionFailedError(MentorMatchError):
    status_code = status.HTTP_412_PRECONDITION_FAILED
    default_message = "Precondition failed"


class ServiceError(MentorMatchError):
    """Unexpected store failure; the message never includes driver details."""
