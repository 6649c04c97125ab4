"""
Instant helpers for Chronoshift.

An instant is a timezone-aware ``datetime`` pinned to UTC. Conversions to and
from epoch milliseconds are done with integer ``timedelta`` arithmetic so that
large millisecond values never pass through a float.
"""

from datetime import UTC, datetime, timedelta

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_ONE_MILLISECOND = timedelta(milliseconds=1)

MIN_YEAR = 1900
MAX_YEAR = 2100


def instant_from_millis(millis: int) -> datetime:
    """
    Build a UTC instant from epoch milliseconds.

    Raises:
        OverflowError: If the value is outside the range ``datetime`` supports
    """
    return EPOCH + timedelta(milliseconds=millis)


def instant_to_millis(instant: datetime) -> int:
    """Return whole epoch milliseconds for an aware datetime."""
    return (instant - EPOCH) // _ONE_MILLISECOND


def to_instant(dt: datetime) -> datetime:
    """Normalize an aware datetime to UTC."""
    return dt.astimezone(UTC)


def is_within_bounds(instant: datetime) -> bool:
    """
    Check that an instant falls inside the supported calendar range.

    Examples:
        >>> is_within_bounds(datetime(1900, 1, 1, tzinfo=UTC))
        True
        >>> is_within_bounds(datetime(2101, 1, 1, tzinfo=UTC))
        False
    """
    return MIN_YEAR <= instant.astimezone(UTC).year <= MAX_YEAR


def utc_iso_string(instant: datetime) -> str:
    """Canonical UTC ISO rendering with millisecond precision and a ``Z`` suffix."""
    utc_dt = instant.astimezone(UTC)
    return utc_dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc_dt.microsecond // 1000:03d}Z"
