"""Date parsing and formatting for RSS (RFC 822) and Atom/DC (W3C) dates."""

import time
from datetime import datetime, timezone
from email.utils import format_datetime, parsedate_to_datetime

from dateutil import parser as date_parser


def _as_utc(value: datetime) -> datetime:
    # Naive datetimes are taken as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_rfc822(text: str | None) -> datetime | None:
    """Parse an RFC 822 date ("Mon, 01 Jan 2001 00:00:00 GMT").

    Returns:
        Timezone-aware UTC datetime, None if the text is not an RFC 822 date
    """
    if not text or not text.strip():
        return None
    try:
        return _as_utc(parsedate_to_datetime(text.strip()))
    except (TypeError, ValueError, IndexError):
        pass
    try:
        # Lenient fallback for feeds with odd zone names or spacing
        return _as_utc(date_parser.parse(text, fuzzy=False))
    except (ValueError, OverflowError):
        return None


def parse_w3c(text: str | None) -> datetime | None:
    """Parse a W3C / ISO 8601 date ("2001-01-01T00:00:00Z", "2001-01").

    Returns:
        Timezone-aware UTC datetime, None if the text is not a W3C date
    """
    if not text or not text.strip():
        return None
    try:
        return _as_utc(date_parser.isoparse(text.strip()))
    except (ValueError, OverflowError):
        return None


def parse_date(text: str | None) -> datetime | None:
    """Parse a date in W3C format first, then in RFC 822 format."""
    return parse_w3c(text) or parse_rfc822(text)


def from_struct_time(value: time.struct_time | None) -> datetime | None:
    """Convert a UTC ``struct_time`` (as produced by feedparser) to a datetime."""
    if value is None:
        return None
    try:
        return datetime(*value[:6], tzinfo=timezone.utc)
    except (TypeError, ValueError):
        return None


def format_rfc822(value: datetime | None) -> str | None:
    """Format a datetime as an RFC 822 date in GMT."""
    if value is None:
        return None
    return format_datetime(_as_utc(value), usegmt=True)


def format_w3c(value: datetime | None) -> str | None:
    """Format a datetime as a W3C date-time in UTC ("...Z")."""
    if value is None:
        return None
    return _as_utc(value).strftime("%Y-%m-%dT%H:%M:%SZ")
