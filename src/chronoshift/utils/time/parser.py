"""
Timestamp parsing for Chronoshift.

Raw text is matched against three encodings in a fixed order: 10-digit epoch
seconds, 13-digit epoch milliseconds, then ISO-8601. The first encoding that
yields an instant inside the supported calendar range wins. Failures are
returned as values so callers can show a message without try/except.
"""

import logging
import re
from datetime import UTC, datetime

from ..core.exceptions import OffsetResolutionError, ParseError
from .instant import instant_from_millis, is_within_bounds, to_instant
from .offset_map import lookup_offset_zone
from .timezone import get_local_timezone_name, resolve_zone
from .types import FormatKind, ParseResult, TimestampValue

logger = logging.getLogger(__name__)

_EPOCH_SECONDS_PATTERN = re.compile(r"[0-9]{10}")
_EPOCH_MILLIS_PATTERN = re.compile(r"[0-9]{13}")
_ISO_OFFSET_SUFFIX = re.compile(r"([+-][0-9]{2}):?([0-9]{2})$")


def _from_epoch_millis(millis: int) -> datetime | None:
    """Build an instant from epoch milliseconds, or None if out of range."""
    try:
        instant = instant_from_millis(millis)
    except OverflowError:
        return None
    return instant if is_within_bounds(instant) else None


def infer_source_timezone(text: str, local_timezone: str | None = None) -> str:
    """
    Work out which zone an ISO-8601 string was written in.

    Args:
        text: Trimmed ISO-8601 text
        local_timezone: Override for the environment's default timezone

    Returns:
        ``UTC`` for a zulu suffix, a representative zone for a numeric
        offset, otherwise the local timezone

    Examples:
        >>> infer_source_timezone("2024-01-15T10:30:00Z")
        'UTC'
        >>> infer_source_timezone("2024-01-15T10:30:00-0500")
        'America/New_York'
    """
    if text.endswith("Z"):
        return "UTC"

    offset_match = _ISO_OFFSET_SUFFIX.search(text)
    if offset_match:
        return lookup_offset_zone(offset_match.group(1) + offset_match.group(2))

    return get_local_timezone_name(local_timezone)


def _parse_iso8601(text: str, source_timezone: str) -> datetime | None:
    """Parse ISO-8601 text into an in-range instant, or None."""
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None

    if parsed.tzinfo is None:
        # No offset in the text: the wall-clock time belongs to the source zone
        try:
            parsed = parsed.replace(tzinfo=resolve_zone(source_timezone))
        except OffsetResolutionError:
            parsed = parsed.replace(tzinfo=UTC)

    try:
        instant = to_instant(parsed)
    except (OverflowError, ValueError):
        return None

    return instant if is_within_bounds(instant) else None


def parse_timestamp(text: str, local_timezone: str | None = None) -> ParseResult:
    """
    Detect the encoding of raw text and parse it.

    Args:
        text: Raw user input
        local_timezone: Override for the environment's default timezone,
            used when ISO-8601 input carries no offset

    Returns:
        ParseResult holding either a TimestampValue or a ParseError

    Examples:
        >>> result = parse_timestamp("1705314600")
        >>> result.value.format_kind.value
        'epoch-seconds'
        >>> parse_timestamp("not-a-timestamp").success
        False
    """
    trimmed = text.strip()

    if not trimmed:
        return ParseResult(error=ParseError(text))

    if _EPOCH_SECONDS_PATTERN.fullmatch(trimmed):
        instant = _from_epoch_millis(int(trimmed) * 1000)
        if instant is not None:
            logger.debug(f"Parsed {trimmed!r} as epoch seconds")
            return ParseResult(
                value=TimestampValue(instant, FormatKind.EPOCH_SECONDS, "UTC")
            )

    if _EPOCH_MILLIS_PATTERN.fullmatch(trimmed):
        instant = _from_epoch_millis(int(trimmed))
        if instant is not None:
            logger.debug(f"Parsed {trimmed!r} as epoch milliseconds")
            return ParseResult(
                value=TimestampValue(instant, FormatKind.EPOCH_MILLISECONDS, "UTC")
            )

    if "T" in trimmed or "-" in trimmed:
        source_timezone = infer_source_timezone(trimmed, local_timezone)
        instant = _parse_iso8601(trimmed, source_timezone)
        if instant is not None:
            logger.debug(f"Parsed {trimmed!r} as ISO-8601 from {source_timezone}")
            return ParseResult(
                value=TimestampValue(instant, FormatKind.ISO8601, source_timezone)
            )

    logger.debug(f"No timestamp encoding matched {trimmed!r}")
    return ParseResult(error=ParseError(text))
