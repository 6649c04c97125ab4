"""
Global test configuration fixtures for Chronoshift tests.

This module provides reusable pytest fixtures for instants, parsed timestamps,
configuration objects and temporary timezone stores.
"""

from __future__ import annotations

from collections.abc import Generator
from datetime import UTC, datetime
from pathlib import Path
from unittest.mock import patch

import pytest

from src.chronoshift.config.schema import ChronoshiftConfig, TimezonesConfig
from src.chronoshift.state.storage import TimezoneStorage
from src.chronoshift.utils.time.types import FormatKind, TimestampValue


@pytest.fixture
def winter_instant() -> datetime:
    """2024-01-15T10:30:00Z, a Monday outside northern-hemisphere DST."""
    return datetime(2024, 1, 15, 10, 30, 0, tzinfo=UTC)


@pytest.fixture
def summer_instant() -> datetime:
    """2024-07-01T12:00:00Z, inside northern-hemisphere DST."""
    return datetime(2024, 7, 1, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def kolkata_timestamp(winter_instant: datetime) -> TimestampValue:
    """An ISO-8601 timestamp that was written with a +05:30 offset."""
    return TimestampValue(winter_instant, FormatKind.ISO8601, "Asia/Kolkata")


@pytest.fixture
def storage(tmp_path: Path) -> TimezoneStorage:
    """A timezone store backed by a file in a temporary directory."""
    return TimezoneStorage(tmp_path / "timezones.json")


@pytest.fixture
def base_config() -> ChronoshiftConfig:
    """Configuration with a short, fixed default selection."""
    return ChronoshiftConfig(
        timezones=TimezonesConfig(
            default_timezones=["UTC", "Asia/Tokyo"],
            local_timezone="America/New_York",
        )
    )


@pytest.fixture
def new_york_local() -> Generator[None, None, None]:
    """Make America/New_York the detected local timezone."""
    with patch(
        "src.chronoshift.utils.time.parser.get_local_timezone_name",
        return_value="America/New_York",
    ):
        yield
