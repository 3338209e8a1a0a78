"""Time helpers shared by sessions, expiry views and the notification scan."""

from datetime import UTC, date, datetime


def utcnow() -> datetime:
    """Current UTC time as a naive datetime (the form stored in the database)."""
    return datetime.now(UTC).replace(tzinfo=None)


def today() -> date:
    return utcnow().date()
