"""
Timezone working-set derivation.

The working set is the list of zones actually displayed: the user's selection
plus the source zone of the current timestamp, ordered west to east by their
offset at that timestamp. It is rebuilt from scratch on every change.
"""

from collections.abc import Iterable

from .timezone import resolve_offset_minutes
from .types import TimestampValue


def derive_working_set(
    timestamp: TimestampValue | None, selection: Iterable[str]
) -> tuple[str, ...]:
    """
    Build the ordered, deduplicated list of zones to display.

    Args:
        timestamp: Current parsed timestamp, if any
        selection: User-selected zone identifiers in their stored order

    Returns:
        Zones sorted ascending by UTC offset at the timestamp's instant
        (stable for equal offsets), or the deduplicated selection unsorted
        when there is no timestamp

    Examples:
        >>> derive_working_set(None, ["America/New_York", "UTC"])
        ('America/New_York', 'UTC')
    """
    zones = list(dict.fromkeys(selection))

    if timestamp is None:
        return tuple(zones)

    if timestamp.source_timezone not in zones:
        zones.append(timestamp.source_timezone)

    instant = timestamp.instant
    return tuple(sorted(zones, key=lambda zone: resolve_offset_minutes(instant, zone)))
