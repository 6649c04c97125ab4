"""Configuration schema for Chronoshift using nested Pydantic models."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from ..utils.time.timezone import is_valid_zone


DEFAULT_TIMEZONES: list[str] = [
    "America/Los_Angeles",
    "America/New_York",
    "Europe/London",
    "Asia/Kolkata",
    "Asia/Tokyo",
]


class TimezonesConfig(BaseModel):
    """Timezone selection configuration."""

    default_timezones: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TIMEZONES),
        description="Zones shown when no selection has been stored yet",
    )
    local_timezone: str | None = Field(
        default=None,
        description="Override for the system timezone, used for ISO input without an offset",
    )

    @field_validator("default_timezones")
    @classmethod
    def validate_default_timezones(cls, v: list[str]) -> list[str]:
        """Reject unknown zones and drop duplicates, keeping first occurrence."""
        unknown = [zone for zone in v if not is_valid_zone(zone)]
        if unknown:
            raise ValueError(f"Unknown timezones: {', '.join(unknown)}")
        return list(dict.fromkeys(v))

    @field_validator("local_timezone")
    @classmethod
    def validate_local_timezone(cls, v: str | None) -> str | None:
        """Validate the local timezone override."""
        if v is not None and not is_valid_zone(v):
            raise ValueError(f"Unknown timezone: {v}")
        return v


class StorageConfig(BaseModel):
    """Persistence configuration for the timezone selection."""

    file_name: str = Field(
        default="timezones.json",
        description="JSON store file name inside the data folder",
        pattern=r"^[\w.-]+\.json$",
    )
    key: str = Field(
        default="datetime-converter-timezones",
        description="Key under which the timezone list is stored",
        min_length=1,
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Minimum level written to the log file",
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: object) -> object:
        """Accept lowercase level names."""
        return v.upper() if isinstance(v, str) else v


class ChronoshiftConfig(BaseModel):
    """Top-level Chronoshift configuration."""

    timezones: TimezonesConfig = Field(default_factory=TimezonesConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
