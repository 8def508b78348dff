"""Field rules shared by the API services and the client view.

Both sides call the same functions with a ``Clock`` so a deadline accepted by
the client is never rejected by the server for the same calendar day.
"""
from datetime import date
from typing import Optional, Union

from .errors import ValidationError

DEADLINE_MESSAGE = "Deadline must be today or later"


def require_text(value: Optional[str], message: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError(message)
    return cleaned


def parse_due_date(value: Union[date, str, None]) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationError(f"Invalid date: {value!r}, expected YYYY-MM-DD")


def check_deadline(due_date: Union[date, str, None], today: date) -> Optional[date]:
    """Return the parsed due date, rejecting one before ``today``."""
    parsed = parse_due_date(due_date)
    if parsed is not None and parsed < today:
        raise ValidationError(DEADLINE_MESSAGE)
    return parsed
