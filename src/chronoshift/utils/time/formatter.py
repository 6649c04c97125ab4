"""
Timestamp rendering for Chronoshift.

Every function here takes an instant and a zone identifier and returns text.
None of them raise: when the calendar engine cannot handle a zone the
rendering degrades to a fixed fallback (UTC ISO string, ``Z`` offset, the
zone id itself) and the failure is logged at debug level.
"""

import logging
from datetime import datetime, timedelta, timezone

from ..core.exceptions import OffsetResolutionError
from .instant import instant_to_millis, utc_iso_string
from .timezone import localize, parse_offset_label, resolve_offset_minutes
from .types import FormattedTimestamp

logger = logging.getLogger(__name__)


def format_epoch(instant: datetime) -> int:
    """
    Whole seconds since the epoch, floored.

    Examples:
        >>> from datetime import UTC
        >>> format_epoch(datetime(1969, 12, 31, 23, 59, 59, 500000, tzinfo=UTC))
        -1
    """
    return instant_to_millis(instant) // 1000


def format_epoch_millis(instant: datetime) -> int:
    """Whole milliseconds since the epoch."""
    return instant_to_millis(instant)


def _format_minutes(total_minutes: int) -> str:
    """Render signed minutes as ``±HH:MM`` (``Z`` for zero)."""
    if total_minutes == 0:
        return "Z"
    sign = "-" if total_minutes < 0 else "+"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


def _zone_offset_minutes(instant: datetime, zone_id: str) -> int:
    """Whole-minute offset of a zone at an instant, read from the label when fixed."""
    if zone_id == "UTC":
        return 0

    fixed_minutes = parse_offset_label(zone_id)
    if fixed_minutes is not None:
        return fixed_minutes

    return resolve_offset_minutes(instant, zone_id)


def format_offset(instant: datetime, zone_id: str) -> str:
    """
    UTC offset of a zone at an instant as ``±HH:MM``, or ``Z`` for zero.

    Fixed-offset labels (``UTC+5``) are read from the identifier itself.

    Examples:
        >>> from datetime import UTC
        >>> format_offset(datetime(2024, 1, 15, tzinfo=UTC), "UTC+5")
        '+05:00'
        >>> format_offset(datetime(2024, 1, 15, tzinfo=UTC), "America/New_York")
        '-05:00'
    """
    try:
        return _format_minutes(_zone_offset_minutes(instant, zone_id))
    except Exception as e:
        logger.debug(f"Offset formatting failed for '{zone_id}': {e}")
        return "Z"


def format_iso8601(instant: datetime, zone_id: str) -> str:
    """
    ISO-8601 rendering of an instant in a zone, with its offset.

    Calendar fields are computed with the same whole-minute offset that is
    printed, so historical offsets with a seconds part (local mean time)
    still name the original instant. Falls back to the canonical UTC string
    if the zone cannot be used.

    Examples:
        >>> from datetime import UTC
        >>> format_iso8601(datetime(2024, 1, 15, 10, 30, tzinfo=UTC), "Asia/Kolkata")
        '2024-01-15T16:00:00+05:30'
    """
    try:
        _ = localize(instant, zone_id)
        offset_minutes = _zone_offset_minutes(instant, zone_id)
        local = instant.astimezone(timezone(timedelta(minutes=offset_minutes)))
    except (OffsetResolutionError, OverflowError) as e:
        logger.debug(f"ISO formatting fell back to UTC: {e}")
        return utc_iso_string(instant)

    return (
        f"{local.year:04d}-{local.month:02d}-{local.day:02d}"
        f"T{local.hour:02d}:{local.minute:02d}:{local.second:02d}"
        f"{_format_minutes(offset_minutes)}"
    )


def zone_abbreviation(instant: datetime, zone_id: str) -> str:
    """
    Short zone label at an instant (``PST``, ``IST``, ``+0545``).

    Returns the identifier unchanged when the engine has no label for it.
    """
    try:
        name = localize(instant, zone_id).tzname()
    except OffsetResolutionError as e:
        logger.debug(f"Abbreviation lookup failed: {e}")
        return zone_id
    return name or zone_id


def format_human(instant: datetime, zone_id: str) -> str:
    """
    Long-form rendering such as ``Monday, January 15, 2024 at 10:30 AM EST``.

    Falls back to the instant's default string representation on failure.
    """
    try:
        local = localize(instant, zone_id)
    except OffsetResolutionError as e:
        logger.debug(f"Human formatting fell back to default: {e}")
        return str(instant)

    hour12 = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return (
        f"{local.strftime('%A')}, {local.strftime('%B')} {local.day}, {local.year}"
        f" at {hour12}:{local.minute:02d} {meridiem} {zone_abbreviation(instant, zone_id)}"
    )


def render_row(instant: datetime, zone_id: str) -> FormattedTimestamp:
    """Bundle every rendering of an instant for one zone."""
    return FormattedTimestamp(
        timezone=zone_id,
        abbreviation=zone_abbreviation(instant, zone_id),
        offset=format_offset(instant, zone_id),
        offset_minutes=resolve_offset_minutes(instant, zone_id),
        iso8601=format_iso8601(instant, zone_id),
        human=format_human(instant, zone_id),
        epoch_seconds=format_epoch(instant),
        epoch_milliseconds=format_epoch_millis(instant),
    )
