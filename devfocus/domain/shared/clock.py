"""Timestamp helpers.

Timestamps are carried as RFC 3339 strings in UTC, the same text that is
persisted. These helpers are the only place that converts between that
text and ``datetime``.
"""

from datetime import UTC, date, datetime


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def to_timestamp(moment: datetime) -> str:
    """Format a datetime as an RFC 3339 UTC string.

    Naive datetimes are assumed to already be in UTC.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC).isoformat()


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse a stored timestamp, returning None if missing or unparsable."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def timestamp_date(value: str | None) -> date | None:
    """Return the UTC calendar date of a stored timestamp, if parsable."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return None
    return parsed.date()
