"""
Main entry point for Chronoshift.

This module parses command-line arguments, loads configuration, sets up
logging, restores the saved timezone selection and prints the conversion of
one timestamp across the active timezones.
"""

import json
import logging
import logging.handlers
import sys
from datetime import UTC, datetime
from pathlib import Path

from .config.manager import ConfigManager
from .config.schema import ChronoshiftConfig
from .state.storage import TimezoneStorage
from .state.store import ConverterState
from .utils.cli.args import ParsedArgs, get_parsed_args
from .utils.cli.paths import get_path_config
from .utils.core.exceptions import ConfigurationError
from .utils.time import (
    FormattedTimestamp,
    TimestampValue,
    instant_to_millis,
    is_valid_zone,
    render_row,
)


def setup_logging(logs_dir: Path, level: str = "INFO") -> None:
    """
    Configure file and console logging.

    The log file rotates by size; the console only shows warnings and errors
    on stderr so stdout stays clean for the conversion output.

    Args:
        logs_dir: Directory for log files
        level: Minimum level written to the log file
    """
    _ = logs_dir.mkdir(exist_ok=True, parents=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Clear any existing handlers
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    detailed_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
    )
    simple_formatter = logging.Formatter("%(levelname)s - %(message)s")

    # File handler with rotation (1MB max, keep 3 backups)
    file_handler = logging.handlers.RotatingFileHandler(
        logs_dir / "chronoshift.log",
        maxBytes=1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setLevel(getattr(logging, level, logging.INFO))
    file_handler.setFormatter(detailed_formatter)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(simple_formatter)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)


logger = logging.getLogger(__name__)


def apply_selection_changes(state: ConverterState, parsed_args: ParsedArgs) -> bool:
    """
    Apply --add-tz / --remove-tz to the saved selection.

    Returns:
        False if any zone to add is unknown (nothing is changed in that case)
    """
    unknown = [zone for zone in parsed_args.add_timezones if not is_valid_zone(zone)]
    if unknown:
        print(f"Error: Unknown timezone(s): {', '.join(unknown)}", file=sys.stderr)
        return False

    for zone in parsed_args.add_timezones:
        if state.add_timezone(zone):
            logger.info(f"Added timezone {zone}")

    for zone in parsed_args.remove_timezones:
        if not state.remove_timezone(zone):
            logger.warning(f"Timezone {zone} is not in the saved selection")

    return True


def build_display_state(
    config: ChronoshiftConfig, saved_state: ConverterState, parsed_args: ParsedArgs
) -> ConverterState:
    """Pick the state to render: --tz zones override the saved selection without persisting."""
    if not parsed_args.timezones:
        return saved_state

    return ConverterState(
        storage=None,
        default_timezones=parsed_args.timezones,
        local_timezone=config.timezones.local_timezone,
    )


def render_text(value: TimestampValue, rows: list[FormattedTimestamp]) -> str:
    """Render the conversion as an aligned text table."""
    zone_width = max((len(row.timezone) for row in rows), default=0)
    abbr_width = max((len(row.abbreviation) for row in rows), default=0)

    lines = [
        f"Format: {value.format_kind.value}",
        f"Source timezone: {value.source_timezone}",
        f"Epoch seconds: {rows[0].epoch_seconds if rows else ''}",
        f"Epoch milliseconds: {rows[0].epoch_milliseconds if rows else ''}",
        "",
    ]
    for row in rows:
        marker = "*" if row.timezone == value.source_timezone else " "
        lines.append(
            f"{marker} {row.timezone:<{zone_width}}  {row.abbreviation:<{abbr_width}}"
            f"  {row.offset:>6}  {row.iso8601}  {row.human}"
        )
    return "\n".join(lines)


def render_json(value: TimestampValue, rows: list[FormattedTimestamp]) -> str:
    """Render the conversion as a JSON document."""
    return json.dumps(
        {
            "format": value.format_kind.value,
            "source_timezone": value.source_timezone,
            "timezones": [row.to_dict() for row in rows],
        },
        indent=2,
        ensure_ascii=False,
    )


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the Chronoshift command line.

    Returns:
        Process exit code
    """
    parsed_args = get_parsed_args(argv)
    path_config = get_path_config()
    path_config.set_paths(
        config_file=parsed_args.config_file,
        data_folder=parsed_args.data_folder,
        log_folder=parsed_args.log_folder,
    )

    try:
        config = ConfigManager.load_config(path_config.config_file)
    except ConfigurationError as e:
        print(f"Error: {e.user_message}", file=sys.stderr)
        return 1

    setup_logging(path_config.log_folder, config.logging.level)
    logger.debug("Chronoshift starting up")

    storage = TimezoneStorage(
        path_config.get_storage_path(config.storage.file_name),
        key=config.storage.key,
    )
    saved_state = ConverterState(
        storage=storage,
        default_timezones=config.timezones.default_timezones,
        local_timezone=config.timezones.local_timezone,
    )

    if not apply_selection_changes(saved_state, parsed_args):
        return 1

    state = build_display_state(config, saved_state, parsed_args)

    text = parsed_args.timestamp
    if text is None:
        text = str(instant_to_millis(datetime.now(UTC)))

    result = state.set_input(text)
    if result.value is None:
        print(result.message, file=sys.stderr)
        return 1

    value = result.value
    rows = [render_row(value.instant, zone) for zone in state.active_timezones]

    if parsed_args.output_json:
        print(render_json(value, rows))
    else:
        print(render_text(value, rows))

    return 0


if __name__ == "__main__":
    sys.exit(main())
