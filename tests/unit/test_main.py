"""
Tests for the Chronoshift command-line entry point.

This module tests the end-to-end flow from arguments to printed output,
including selection persistence and error exits.
"""

import json
import logging
import logging.handlers
from collections.abc import Callable, Generator
from pathlib import Path
from unittest.mock import patch

import pytest

from src.chronoshift.main import main, render_json, render_text, setup_logging
from src.chronoshift.state.storage import TimezoneStorage
from src.chronoshift.utils.cli.paths import get_path_config
from src.chronoshift.utils.time import render_row
from src.chronoshift.utils.time.types import TimestampValue
from tests.utils.test_helpers import create_temp_config_file

RunMain = Callable[..., int]


@pytest.fixture
def run_main(tmp_path: Path) -> Generator[RunMain, None, None]:
    """Run main() against temporary paths with logging setup disabled."""
    path_config = get_path_config()
    original = (path_config.config_file, path_config.data_folder, path_config.log_folder)

    def _run(*args: str, config_file: Path | None = None) -> int:
        argv = [
            *args,
            "--config-file",
            str(config_file or tmp_path / "config.yml"),
            "--data-folder",
            str(tmp_path / "data"),
            "--log-folder",
            str(tmp_path / "logs"),
        ]
        return main(argv)

    with patch("src.chronoshift.main.setup_logging"):
        yield _run

    path_config.set_paths(*original)


def stored_selection(tmp_path: Path) -> list[str] | None:
    """Read the persisted selection written by main()."""
    return TimezoneStorage(tmp_path / "data" / "timezones.json").load_timezones()


class TestMainOutput:
    """Test what main() prints."""

    def test_epoch_seconds_text(self, run_main: RunMain, capsys: pytest.CaptureFixture[str]) -> None:
        """Test the text table for an epoch-seconds timestamp."""
        assert run_main("1705314600", "--tz", "Asia/Tokyo", "--tz", "America/New_York") == 0

        out = capsys.readouterr().out
        lines = out.splitlines()
        assert lines[0] == "Format: epoch-seconds"
        assert lines[1] == "Source timezone: UTC"
        assert lines[2] == "Epoch seconds: 1705314600"
        assert lines[3] == "Epoch milliseconds: 1705314600000"

        rows = lines[5:]
        assert [row[2:].split()[0] for row in rows] == ["America/New_York", "UTC", "Asia/Tokyo"]
        assert rows[1].startswith("* UTC")
        assert "Monday, January 15, 2024 at 7:30 PM JST" in rows[2]

    def test_json_output(self, run_main: RunMain, capsys: pytest.CaptureFixture[str]) -> None:
        """Test the JSON document for an ISO-8601 timestamp."""
        assert run_main("2024-01-15T10:30:00+05:30", "--tz", "UTC", "--json") == 0

        data = json.loads(capsys.readouterr().out)
        assert data["format"] == "iso8601"
        assert data["source_timezone"] == "Asia/Kolkata"
        assert [row["timezone"] for row in data["timezones"]] == ["UTC", "Asia/Kolkata"]
        assert data["timezones"][1]["iso8601"] == "2024-01-15T10:30:00+05:30"
        assert data["timezones"][0]["epoch_milliseconds"] == 1705294800000

    def test_defaults_to_now(self, run_main: RunMain, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that the current time is used when no timestamp is given."""
        assert run_main("--tz", "UTC", "--json") == 0

        data = json.loads(capsys.readouterr().out)
        assert data["format"] == "epoch-milliseconds"
        assert data["source_timezone"] == "UTC"

    def test_uses_configured_defaults(self, run_main: RunMain, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that the configured default selection is shown."""
        config_file = tmp_path / "config.yml"
        config_file.write_text(
            "timezones:\n  default_timezones:\n    - Asia/Tokyo\n    - Europe/Paris\n",
            encoding="utf-8",
        )

        assert run_main("1705314600", "--json", config_file=config_file) == 0

        data = json.loads(capsys.readouterr().out)
        assert [row["timezone"] for row in data["timezones"]] == ["UTC", "Europe/Paris", "Asia/Tokyo"]

    def test_invalid_timestamp(self, run_main: RunMain, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that unparseable input exits with 1 and a friendly message."""
        assert run_main("not-a-date") == 1

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "That doesn't look like a timestamp I recognize" in captured.err

    def test_invalid_config(self, run_main: RunMain, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that a broken configuration file exits with 1."""
        with create_temp_config_file({"logging": {"level": "LOUD"}}) as config_file:
            assert run_main("1705314600", config_file=config_file) == 1

        assert capsys.readouterr().err.startswith("Error: Invalid configuration")


class TestSelectionPersistence:
    """Test --add-tz, --remove-tz and --tz."""

    def test_add_and_remove_persist(self, run_main: RunMain, tmp_path: Path) -> None:
        """Test that selection edits are saved for the next run."""
        with create_temp_config_file({"timezones": {"default_timezones": ["UTC", "Europe/London"]}}) as config_file:
            assert run_main(
                "1705314600",
                "--add-tz",
                "Asia/Tokyo",
                "--remove-tz",
                "Europe/London",
                config_file=config_file,
            ) == 0

        assert stored_selection(tmp_path) == ["UTC", "Asia/Tokyo"]

    def test_unknown_zone_rejected(self, run_main: RunMain, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that an unknown zone aborts without saving."""
        assert run_main("1705314600", "--add-tz", "Mars/Olympus_Mons") == 1

        assert "Unknown timezone(s): Mars/Olympus_Mons" in capsys.readouterr().err
        assert stored_selection(tmp_path) is None

    def test_tz_does_not_persist(self, run_main: RunMain, tmp_path: Path) -> None:
        """Test that --tz only affects the current run."""
        assert run_main("1705314600", "--tz", "Asia/Tokyo") == 0

        assert stored_selection(tmp_path) is None


class TestRendering:
    """Test the output renderers directly."""

    def test_text_marks_source_zone(self, kolkata_timestamp: TimestampValue) -> None:
        """Test that only the source zone row carries the marker."""
        rows = [render_row(kolkata_timestamp.instant, zone) for zone in ("UTC", "Asia/Kolkata")]

        lines = render_text(kolkata_timestamp, rows).splitlines()

        assert lines[-2].startswith("  UTC")
        assert lines[-1].startswith("* Asia/Kolkata")

    def test_json_is_valid(self, kolkata_timestamp: TimestampValue) -> None:
        """Test that the JSON renderer produces one entry per row."""
        rows = [render_row(kolkata_timestamp.instant, "UTC")]

        data = json.loads(render_json(kolkata_timestamp, rows))

        assert data["format"] == "iso8601"
        assert len(data["timezones"]) == 1


class TestSetupLogging:
    """Test logging configuration."""

    def test_setup_logging_configures_handlers(self, tmp_path: Path) -> None:
        """Test that a rotating file handler and a stderr handler are installed."""
        root_logger = logging.getLogger()
        original_handlers = root_logger.handlers[:]
        original_level = root_logger.level
        logs_dir = tmp_path / "logs"

        try:
            setup_logging(logs_dir, "DEBUG")

            handlers = root_logger.handlers
            file_handlers = [
                h for h in handlers if isinstance(h, logging.handlers.RotatingFileHandler)
            ]
            assert logs_dir.is_dir()
            assert len(handlers) == 2
            assert len(file_handlers) == 1
            assert file_handlers[0].level == logging.DEBUG
            assert Path(file_handlers[0].baseFilename) == logs_dir / "chronoshift.log"
            console = next(h for h in handlers if h is not file_handlers[0])
            assert console.level == logging.WARNING
        finally:
            for handler in root_logger.handlers[:]:
                root_logger.removeHandler(handler)
                handler.close()
            for handler in original_handlers:
                root_logger.addHandler(handler)
            root_logger.setLevel(original_level)
