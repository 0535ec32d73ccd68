"""Display formatting helpers for dates and enum values."""

from datetime import datetime, timezone
from typing import Optional, Union

INVALID_DATE = "Invalid Date"


def _parse_date(value: Union[str, datetime, None]) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        return None

    value = value.strip()
    try:
        # All-digit strings are epoch timestamps in milliseconds
        if value.isdigit():
            return datetime.fromtimestamp(int(value) / 1000, tz=timezone.utc)
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        return datetime.fromisoformat(value)
    except (ValueError, OverflowError, OSError):
        return None


def format_date(value: Union[str, datetime, None]) -> str:
    """
    Format a date as e.g. "Sun Oct 18 2026".

    Accepts a datetime, an ISO 8601 string, or a string of digits holding
    an epoch timestamp in milliseconds. Anything unparsable yields
    "Invalid Date".

    Examples:
        >>> format_date("2026-10-18T09:30:00Z")
        'Sun Oct 18 2026'
        >>> format_date("1700000000000")
        'Tue Nov 14 2023'
        >>> format_date("not a date")
        'Invalid Date'
    """
    parsed = _parse_date(value)
    if parsed is None:
        return INVALID_DATE
    return parsed.strftime("%a %b %d %Y")


def format_issue_type(issue_type: str) -> str:
    """Capitalize an enum value for display ("SUBTASK" -> "Subtask")."""
    if not issue_type:
        return ""
    return issue_type[0].upper() + issue_type[1:].lower()
