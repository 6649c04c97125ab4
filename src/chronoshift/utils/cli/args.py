"""
Command-line argument parsing for Chronoshift.

This module parses the timestamp to convert, the zones to show or persist,
and custom locations for the config file, data folder and log folder.
"""

import argparse
import sys
from pathlib import Path
from typing import NamedTuple

from ..core.version import get_version
from .paths import APP_HOME


class PathValidationError(Exception):
    """Raised when a path validation fails."""

    pass


class ParsedArgs(NamedTuple):
    """Container for parsed command-line arguments."""

    timestamp: str | None
    timezones: list[str]
    add_timezones: list[str]
    remove_timezones: list[str]
    output_json: bool
    config_file: Path
    data_folder: Path
    log_folder: Path


class DefaultPaths:
    """Default paths for Chronoshift."""

    CONFIG_FILE: Path = APP_HOME / "config.yml"
    DATA_FOLDER: Path = APP_HOME / "data"
    LOG_FOLDER: Path = APP_HOME / "logs"


def validate_config_file_path(config_file_str: str) -> Path:
    """
    Validate configuration file path.

    Args:
        config_file_str: String path to configuration file

    Returns:
        Resolved Path object for the configuration file

    Raises:
        PathValidationError: If the configuration file path is invalid
    """
    try:
        # Expand tilde if present, then resolve
        config_file = Path(config_file_str).expanduser().resolve()
    except (OSError, ValueError) as e:
        raise PathValidationError(f"Invalid config file path: {e}") from e

    # Check if the path is a directory
    if config_file.exists() and config_file.is_dir():
        raise PathValidationError(
            f"Config file path exists but is not a file: {config_file}"
        )

    return config_file


def validate_folder_path(path_str: str, folder_name: str) -> Path:
    """
    Validate and resolve a folder path.

    Args:
        path_str: String representation of the folder path
        folder_name: Name of the folder (for error messages)

    Returns:
        Resolved absolute path to the folder

    Raises:
        PathValidationError: If the path is invalid
    """
    try:
        # Expand tilde if present
        path = Path(path_str).expanduser().resolve()
    except (OSError, ValueError) as e:
        raise PathValidationError(f"Invalid {folder_name} path: {e}") from e

    # If the path exists, it must be a directory
    if path.exists() and not path.is_dir():
        raise PathValidationError(
            f"{folder_name.capitalize()} path exists but is not a directory: {path}"
        )

    return path


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser for Chronoshift.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="chronoshift",
        description="Chronoshift - convert epoch and ISO-8601 timestamps across timezones",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  chronoshift 1705314600
    Show an epoch-seconds timestamp in the saved timezones

  chronoshift 2024-01-15T10:30:00+05:30 --tz Europe/Berlin --tz UTC
    Show an ISO-8601 timestamp in the given timezones only

  chronoshift --add-tz Asia/Tokyo --remove-tz Europe/London
    Update the saved timezone selection and show the current time

  chronoshift 1705314600123 --json
    Emit the conversion as JSON
""",
    )

    defaults = DefaultPaths()

    _ = parser.add_argument(
        "timestamp",
        nargs="?",
        default=None,
        help="Epoch seconds, epoch milliseconds or ISO-8601 text (default: now)",
    )

    _ = parser.add_argument(
        "--tz",
        dest="timezones",
        action="append",
        default=[],
        metavar="ZONE",
        help="Timezone to show instead of the saved selection (repeatable)",
    )

    _ = parser.add_argument(
        "--add-tz",
        dest="add_timezones",
        action="append",
        default=[],
        metavar="ZONE",
        help="Add a timezone to the saved selection (repeatable)",
    )

    _ = parser.add_argument(
        "--remove-tz",
        dest="remove_timezones",
        action="append",
        default=[],
        metavar="ZONE",
        help="Remove a timezone from the saved selection (repeatable)",
    )

    _ = parser.add_argument(
        "--json",
        dest="output_json",
        action="store_true",
        help="Print the conversion as JSON",
    )

    _ = parser.add_argument(
        "--config-file",
        type=str,
        default=str(defaults.CONFIG_FILE),
        help=(
            "Path to the configuration file (default: %(default)s). "
            "Defaults are used if the file doesn't exist."
        ),
        metavar="PATH",
    )

    _ = parser.add_argument(
        "--data-folder",
        type=str,
        default=str(defaults.DATA_FOLDER),
        help=(
            "Path to the data folder holding the saved timezone selection "
            "(default: %(default)s). The directory will be created if it doesn't exist."
        ),
        metavar="PATH",
    )

    _ = parser.add_argument(
        "--log-folder",
        type=str,
        default=str(defaults.LOG_FOLDER),
        help=(
            "Path to the log folder (default: %(default)s). "
            "The directory will be created if it doesn't exist."
        ),
        metavar="PATH",
    )

    _ = parser.add_argument(
        "--version", action="version", version=f"%(prog)s {get_version()}"
    )

    return parser


def parse_arguments(args: list[str] | None = None) -> ParsedArgs:
    """
    Parse command-line arguments.

    Args:
        args: List of arguments to parse (defaults to sys.argv[1:])

    Returns:
        ParsedArgs containing validated and resolved paths

    Raises:
        SystemExit: If argument parsing fails, a path is invalid or --help is requested
    """
    parser = create_argument_parser()

    parsed = parser.parse_args(args)

    try:
        config_file = validate_config_file_path(getattr(parsed, "config_file"))
        data_folder = validate_folder_path(getattr(parsed, "data_folder"), "data folder")
        log_folder = validate_folder_path(getattr(parsed, "log_folder"), "log folder")
    except PathValidationError as e:
        # Print error to stderr and exit with error code
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    return ParsedArgs(
        timestamp=getattr(parsed, "timestamp"),
        timezones=list(getattr(parsed, "timezones")),
        add_timezones=list(getattr(parsed, "add_timezones")),
        remove_timezones=list(getattr(parsed, "remove_timezones")),
        output_json=bool(getattr(parsed, "output_json")),
        config_file=config_file,
        data_folder=data_folder,
        log_folder=log_folder,
    )


def ensure_directories_exist(parsed_args: ParsedArgs) -> None:
    """
    Ensure that the config, data and log directories exist.

    Does not create the config file itself.

    Raises:
        OSError: If directory creation fails
    """
    parsed_args.config_file.parent.mkdir(parents=True, exist_ok=True)
    parsed_args.data_folder.mkdir(parents=True, exist_ok=True)
    parsed_args.log_folder.mkdir(parents=True, exist_ok=True)


def get_parsed_args(args: list[str] | None = None) -> ParsedArgs:
    """
    Parse arguments and ensure directories exist.

    Raises:
        SystemExit: If argument parsing fails
        OSError: If directory creation fails
    """
    parsed_args = parse_arguments(args)
    ensure_directories_exist(parsed_args)
    return parsed_args
