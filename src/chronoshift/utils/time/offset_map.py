"""
Offset-to-zone lookup for Chronoshift.

ISO-8601 input often carries a numeric offset (``+05:30``) but no zone name.
This table picks one representative IANA zone per common offset so the source
of a timestamp can be shown next to the other zones.

The mapping is approximate: several real zones share each offset (``+0100``
is London in summer, Paris in winter, Lagos all year), and the chosen zone
may observe DST at the parsed instant even though the input offset did not.
It is meant for display grouping, not for legal or historical accuracy.
"""

from types import MappingProxyType

OFFSET_ZONE_MAP: MappingProxyType[str, str] = MappingProxyType(
    {
        "-1200": "Etc/GMT+12",
        "-1100": "Pacific/Midway",
        "-1000": "Pacific/Honolulu",
        "-0930": "Pacific/Marquesas",
        "-0900": "America/Anchorage",
        "-0800": "America/Los_Angeles",
        "-0700": "America/Denver",
        "-0600": "America/Chicago",
        "-0500": "America/New_York",
        "-0400": "America/Halifax",
        "-0330": "America/St_Johns",
        "-0300": "America/Sao_Paulo",
        "-0200": "Atlantic/South_Georgia",
        "-0100": "Atlantic/Azores",
        "+0000": "UTC",
        "+0100": "Europe/London",
        "+0200": "Europe/Paris",
        "+0300": "Europe/Moscow",
        "+0330": "Asia/Tehran",
        "+0400": "Asia/Dubai",
        "+0430": "Asia/Kabul",
        "+0500": "Asia/Karachi",
        "+0530": "Asia/Kolkata",
        "+0545": "Asia/Kathmandu",
        "+0600": "Asia/Dhaka",
        "+0630": "Asia/Yangon",
        "+0700": "Asia/Bangkok",
        "+0800": "Asia/Singapore",
        "+0845": "Australia/Eucla",
        "+0900": "Asia/Tokyo",
        "+0930": "Australia/Adelaide",
        "+1000": "Australia/Sydney",
        "+1030": "Australia/Lord_Howe",
        "+1100": "Pacific/Guadalcanal",
        "+1200": "Pacific/Fiji",
        "+1245": "Pacific/Chatham",
        "+1300": "Pacific/Tongatapu",
        "+1400": "Pacific/Kiritimati",
    }
)


def lookup_offset_zone(offset_key: str) -> str:
    """
    Map a signed 4-digit offset to a representative zone.

    Args:
        offset_key: Offset like ``+0530`` or ``-0500``

    Returns:
        IANA zone id, or ``UTC`` for offsets not in the table

    Examples:
        >>> lookup_offset_zone("+0530")
        'Asia/Kolkata'
        >>> lookup_offset_zone("+0115")
        'UTC'
    """
    return OFFSET_ZONE_MAP.get(offset_key, "UTC")
