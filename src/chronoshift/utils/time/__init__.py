"""
Timestamp parsing, timezone resolution and formatting for Chronoshift.

This package is the conversion engine: it has no I/O beyond reading the
system timezone and is safe to call from any context.
"""

from .formatter import (
    format_epoch,
    format_epoch_millis,
    format_human,
    format_iso8601,
    format_offset,
    render_row,
    zone_abbreviation,
)
from .instant import instant_from_millis, instant_to_millis
from .offset_map import OFFSET_ZONE_MAP, lookup_offset_zone
from .parser import infer_source_timezone, parse_timestamp
from .timezone import (
    get_local_timezone_name,
    is_valid_zone,
    parse_offset_label,
    resolve_offset_minutes,
)
from .types import FormatKind, FormattedTimestamp, ParseResult, TimestampValue
from .working_set import derive_working_set

__all__ = [
    "format_epoch",
    "format_epoch_millis",
    "format_human",
    "format_iso8601",
    "format_offset",
    "render_row",
    "zone_abbreviation",
    "instant_from_millis",
    "instant_to_millis",
    "OFFSET_ZONE_MAP",
    "lookup_offset_zone",
    "infer_source_timezone",
    "parse_timestamp",
    "get_local_timezone_name",
    "is_valid_zone",
    "parse_offset_label",
    "resolve_offset_minutes",
    "FormatKind",
    "FormattedTimestamp",
    "ParseResult",
    "TimestampValue",
    "derive_working_set",
]
