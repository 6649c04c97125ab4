"""
Chronoshift - convert epoch and ISO-8601 timestamps across a sorted set of timezones.
"""

from .utils.time import (
    derive_working_set,
    format_epoch,
    format_human,
    format_iso8601,
    format_offset,
    parse_timestamp,
    resolve_offset_minutes,
    zone_abbreviation,
)

__all__ = [
    "derive_working_set",
    "format_epoch",
    "format_human",
    "format_iso8601",
    "format_offset",
    "parse_timestamp",
    "resolve_offset_minutes",
    "zone_abbreviation",
]
