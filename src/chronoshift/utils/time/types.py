"""
Core value types for timestamp parsing and rendering.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from ..core.exceptions import ParseError


class FormatKind(Enum):
    """Encoding detected in the raw input."""

    EPOCH_SECONDS = "epoch-seconds"
    EPOCH_MILLISECONDS = "epoch-milliseconds"
    ISO8601 = "iso8601"


@dataclass(frozen=True, slots=True)
class TimestampValue:
    """A parsed timestamp: the instant plus where it came from."""

    instant: datetime  # aware, UTC
    format_kind: FormatKind
    source_timezone: str


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Outcome of parsing raw text; exactly one of value/error is set."""

    value: TimestampValue | None = None
    error: ParseError | None = None

    def __post_init__(self) -> None:
        if (self.value is None) == (self.error is None):
            raise ValueError("ParseResult needs exactly one of value or error")

    @property
    def success(self) -> bool:
        return self.value is not None

    @property
    def message(self) -> str | None:
        """User-facing error message, if parsing failed."""
        return self.error.user_message if self.error is not None else None

    def unwrap(self) -> TimestampValue:
        """
        Return the parsed value.

        Raises:
            ParseError: If parsing failed
        """
        if self.value is None:
            assert self.error is not None
            raise self.error
        return self.value


@dataclass(frozen=True, slots=True)
class FormattedTimestamp:
    """All renderings of one instant for one zone."""

    timezone: str
    abbreviation: str
    offset: str
    offset_minutes: int
    iso8601: str
    human: str
    epoch_seconds: int
    epoch_milliseconds: int

    def to_dict(self) -> dict[str, object]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "timezone": self.timezone,
            "abbreviation": self.abbreviation,
            "offset": self.offset,
            "offset_minutes": self.offset_minutes,
            "iso8601": self.iso8601,
            "human": self.human,
            "epoch_seconds": self.epoch_seconds,
            "epoch_milliseconds": self.epoch_milliseconds,
        }
