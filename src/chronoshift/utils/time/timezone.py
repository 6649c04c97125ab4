"""
Timezone resolution utilities for Chronoshift.

This module is the single boundary to the calendar engine. Zone identifiers
are resolved through ``zoneinfo`` (backed by the system database or the
``tzdata`` distribution); fixed-offset labels such as ``UTC+5`` or
``GMT+5:30`` are resolved directly without consulting the database.
"""

import logging
import os
import re
from datetime import datetime, timedelta, timezone, tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.exceptions import OffsetResolutionError

logger = logging.getLogger(__name__)

# Labels like "GMT", "GMT+5:30", "GMT-8", "UTC+5", "UTC-03"
_OFFSET_LABEL_PATTERN = re.compile(
    r"^(?:UTC|GMT)(?:([+-]?)(\d{1,2})(?::(\d{1,2}))?)?$"
)

_MAX_OFFSET_MINUTES = 14 * 60


def _clean_label(label: str) -> str:
    """Drop whitespace and stray non-ASCII characters left by copy/paste."""
    return "".join(ch for ch in label if ch.isascii() and not ch.isspace())


def parse_offset_label(label: str) -> int | None:
    """
    Parse a short numeric offset label into signed minutes.

    A missing sign means positive, missing minutes mean zero and a bare
    ``GMT``/``UTC`` token means a zero offset.

    Args:
        label: Offset label such as ``GMT+5:30`` or ``UTC-8``

    Returns:
        Offset in minutes east of UTC, or None if the label is not an offset label

    Examples:
        >>> parse_offset_label("GMT+5:30")
        330
        >>> parse_offset_label("GMT-8")
        -480
        >>> parse_offset_label("GMT")
        0
        >>> parse_offset_label("America/New_York") is None
        True
    """
    match = _OFFSET_LABEL_PATTERN.match(_clean_label(label))
    if match is None:
        return None

    sign, hours, minutes = match.groups()
    if hours is None:
        return 0

    total = int(hours) * 60 + int(minutes or "0")
    if int(minutes or "0") >= 60 or total > _MAX_OFFSET_MINUTES:
        return None

    return -total if sign == "-" else total


def resolve_zone(zone_id: str) -> tzinfo:
    """
    Resolve a zone identifier into a ``tzinfo``.

    Args:
        zone_id: IANA identifier or fixed-offset label

    Returns:
        A ``ZoneInfo`` for IANA identifiers, a fixed ``timezone`` for offset labels

    Raises:
        OffsetResolutionError: If the identifier cannot be resolved
    """
    fixed_minutes = parse_offset_label(zone_id)
    if fixed_minutes is not None and zone_id not in ("UTC", "GMT"):
        return timezone(timedelta(minutes=fixed_minutes))

    try:
        return ZoneInfo(zone_id)
    except (ZoneInfoNotFoundError, ValueError, TypeError, OSError) as e:
        raise OffsetResolutionError(
            f"Unknown timezone '{zone_id}': {e}", zone_id=zone_id
        ) from e


def is_valid_zone(zone_id: str) -> bool:
    """Check whether a zone identifier can be resolved."""
    try:
        _ = resolve_zone(zone_id)
    except OffsetResolutionError:
        return False
    return True


def localize(instant: datetime, zone_id: str) -> datetime:
    """
    Express an instant in the given zone.

    Raises:
        OffsetResolutionError: If the zone cannot be resolved or the instant
            cannot be represented in it
    """
    tz = resolve_zone(zone_id)
    try:
        return instant.astimezone(tz)
    except (OverflowError, ValueError) as e:
        raise OffsetResolutionError(
            f"Cannot express {instant!r} in '{zone_id}': {e}", zone_id=zone_id
        ) from e


def resolve_offset_minutes(instant: datetime, zone_id: str) -> int:
    """
    Get the UTC offset of a zone at a given instant.

    Seconds in historical offsets (local mean time) are truncated toward
    zero. Any failure resolves to 0 so callers can always sort and display.

    Args:
        instant: Aware datetime
        zone_id: IANA identifier or fixed-offset label

    Returns:
        Signed offset in minutes, east-positive

    Examples:
        >>> from datetime import UTC
        >>> resolve_offset_minutes(datetime(2024, 1, 15, tzinfo=UTC), "Asia/Kolkata")
        330
        >>> resolve_offset_minutes(datetime(2024, 1, 15, tzinfo=UTC), "Not/AZone")
        0
    """
    try:
        offset = localize(instant, zone_id).utcoffset()
    except OffsetResolutionError as e:
        logger.debug(f"Offset resolution failed, treating as UTC: {e}")
        return 0

    if offset is None:
        return 0

    total_seconds = int(offset.total_seconds())
    minutes = abs(total_seconds) // 60
    return -minutes if total_seconds < 0 else minutes


def _zone_from_localtime_link() -> str | None:
    """Read the IANA key from the /etc/localtime symlink, if there is one."""
    try:
        tz_link = Path("/etc/localtime")
        if tz_link.is_symlink():
            parts = str(tz_link.readlink()).split("/")
            if "zoneinfo" in parts:
                idx = parts.index("zoneinfo")
                return "/".join(parts[idx + 1 :]) or None
    except OSError as e:
        logger.debug(f"Could not read /etc/localtime: {e}")
    return None


def get_local_timezone_name(override: str | None = None) -> str:
    """
    Get the caller's default timezone as an IANA identifier.

    Detection order: explicit override, ``TZ`` environment variable,
    ``/etc/localtime`` symlink, the key reported by ``datetime.now()``.
    Falls back to ``UTC`` when nothing usable is found.

    Args:
        override: Configured timezone that takes precedence when valid

    Returns:
        Zone identifier string
    """
    candidates: list[str | None] = [override]

    tz_env = os.environ.get("TZ")
    if tz_env:
        candidates.append(tz_env.lstrip(":"))

    candidates.append(_zone_from_localtime_link())

    local_tz = datetime.now().astimezone().tzinfo
    key = getattr(local_tz, "key", None)
    if isinstance(key, str):
        candidates.append(key)

    for candidate in candidates:
        if candidate and is_valid_zone(candidate):
            return candidate

    logger.debug("Could not detect local timezone, using UTC")
    return "UTC"
