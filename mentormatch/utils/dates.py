from datetime import date, datetime, timedelta
from typing import Tuple, Union

from mentormatch.exceptions import ValidationError


def to_calendar_day(value: Union[str, date, datetime]) -> date:
    """
    Reduce a date, datetime or ISO 8601 string to its calendar day.

    Any time-of-day component is dropped.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    raw = (value or "").strip()
    if not raw:
        raise ValidationError("date is required")
    try:
        return date.fromisoformat(raw)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
    except ValueError:
        raise ValidationError("Invalid date format. Use ISO 8601 (e.g., '2024-06-01')")


def day_window(day: date) -> Tuple[date, date]:
    """Half-open window [day, day + 1 day)."""
    return day, day + timedelta(days=1)
