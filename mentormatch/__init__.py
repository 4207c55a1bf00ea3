"""MentorMatch: mentor directory, slot booking and reviews over a REST API."""

__version__ = "0.1.0"
