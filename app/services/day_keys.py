"""
GymPortal API - Day-Key Normalization.

Every completion day is stored and compared as a calendar date in UTC.
Aware datetimes are converted to UTC before the time of day is dropped;
naive datetimes are already UTC (that is what MongoDB hands back).
A date-only string names the calendar day itself, so a client that
wants its own local day sends ``YYYY-MM-DD`` rather than a timestamp.
"""

import re
from datetime import date, datetime, timezone
from typing import Optional, Tuple, Union

from app.utils.errors import InvalidTimestampError, ValidationError

Timestamp = Union[datetime, date]

# "+02:00" sent unencoded in a query string arrives as " 02:00"
_DECODED_PLUS_OFFSET = re.compile(r"(T\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?) (\d{2}(?::?\d{2})?)$")


def utc_now() -> datetime:
    """Server wall clock in the reference time base."""
    return datetime.now(timezone.utc)


def normalize(value: Timestamp) -> date:
    """
    Reduce a timestamp to its UTC calendar day.

    Args:
        value: datetime (aware or naive-UTC) or date.

    Returns:
        date: The day-key.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


def same_day(a: Timestamp, b: Timestamp) -> bool:
    """Whether two timestamps fall on the same UTC day."""
    return normalize(a) == normalize(b)


def today(now: datetime) -> date:
    return normalize(now)


def to_storage(day: Timestamp) -> datetime:
    """
    Day-key as persisted: naive datetime at UTC midnight.

    BSON has no date-only type.
    """
    day = normalize(day)
    return datetime(day.year, day.month, day.day)


def to_naive_utc(value: datetime) -> datetime:
    """Strip tzinfo after converting to UTC, for storage."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    """
    Half-open day interval covering a month.

    Returns:
        Tuple[date, date]: (first day of month, first day of next month)

    Raises:
        ValidationError: If month is not 1-12 or the year is out of range.
    """
    if not 1 <= month <= 12:
        raise ValidationError("Month must be between 1 and 12")
    if not 1 <= year < 9999:
        raise ValidationError("Year is out of range")

    start = date(year, month, 1)
    if month == 12:
        end = date(year + 1, 1, 1)
    else:
        end = date(year, month + 1, 1)
    return start, end


def parse_timestamp(text: Optional[str]) -> Optional[datetime]:
    """
    Parse a client-supplied ISO-8601 date or datetime.

    Args:
        text: e.g. "2024-03-05", "2024-03-05T18:30:00+02:00", "2024-03-05T09:00:00Z".
            None or blank means "not supplied". A positive offset whose
            "+" was decoded to a space by a query string is restored.

    Returns:
        Optional[datetime]: Parsed value, or None when not supplied.

    Raises:
        InvalidTimestampError: If the text is not a valid ISO-8601 value.
    """
    if text is None or not text.strip():
        return None

    raw = text.strip()
    try:
        return datetime.fromisoformat(_DECODED_PLUS_OFFSET.sub(r"\1+\2", raw))
    except ValueError:
        raise InvalidTimestampError(detail=f"Invalid date format: {raw!r}")


def parse_day(text: str) -> date:
    """
    Parse a strict ``YYYY-MM-DD`` day.

    Raises:
        ValidationError: If the text is not a calendar date.
    """
    try:
        return date.fromisoformat(text.strip())
    except (ValueError, AttributeError):
        raise ValidationError("Invalid date, expected YYYY-MM-DD")
