"""
Persistence of the user's timezone selection.

The selection is stored as a JSON array under a single key in a small JSON
key-value file. Writes are atomic (temporary file + rename). Public methods
never raise: failures are logged and reported as ``False`` / ``None``.
"""

import json
import logging
import tempfile
from pathlib import Path

from ..utils.core.exceptions import PersistenceError

logger = logging.getLogger(__name__)

STORAGE_KEY_TIMEZONES = "datetime-converter-timezones"


class TimezoneStorage:
    """JSON key-value store holding the selected timezone list."""

    def __init__(self, file_path: Path, key: str = STORAGE_KEY_TIMEZONES) -> None:
        """
        Initialize the store.

        Args:
            file_path: JSON file backing the store
            key: Key under which the timezone list is stored
        """
        self.file_path: Path = file_path
        self.key: str = key

        logger.debug(f"TimezoneStorage initialized with file: {self.file_path}")

    def _read_all(self) -> dict[str, object]:
        """
        Read every key from the backing file.

        Raises:
            PersistenceError: If the file cannot be read or is not a JSON object
        """
        if not self.file_path.exists():
            return {}

        try:
            with self.file_path.open("r", encoding="utf-8") as f:
                data: object = json.load(f)
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Failed to read {self.file_path}: {e}") from e

        if not isinstance(data, dict):
            raise PersistenceError(
                f"Store {self.file_path} does not contain a JSON object"
            )
        return data

    def _write_all(self, data: dict[str, object]) -> None:
        """
        Atomically replace the backing file.

        Raises:
            PersistenceError: If the file cannot be written
        """
        temp_file = None
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=self.file_path.parent,
                prefix=f".{self.file_path.name}.",
                suffix=".tmp",
                delete=False,
            ) as temp_file:
                json.dump(data, temp_file, indent=2, ensure_ascii=False)
                temp_file.flush()
                temp_path = Path(temp_file.name)

            # Atomic move
            _ = temp_path.replace(self.file_path)

        except (OSError, TypeError, ValueError) as e:
            # Clean up temporary file if it exists
            if temp_file and Path(temp_file.name).exists():
                Path(temp_file.name).unlink(missing_ok=True)
            raise PersistenceError(f"Failed to write {self.file_path}: {e}") from e

    def save_timezones(self, timezones: object) -> bool:
        """
        Save the timezone list.

        Args:
            timezones: List of zone identifiers

        Returns:
            True on success, False if the input is not a list or the write failed
        """
        if not isinstance(timezones, list):
            logger.error(
                f"save_timezones: Expected list, got {type(timezones).__name__}"
            )
            return False

        try:
            data = self._read_all()
        except PersistenceError as e:
            logger.warning(f"Existing store unreadable, starting fresh: {e}")
            data = {}

        data[self.key] = list(timezones)

        try:
            self._write_all(data)
        except PersistenceError as e:
            logger.error(f"Timezone save failed: {e}")
            return False

        logger.debug(f"Saved {len(timezones)} timezones to {self.file_path}")
        return True

    def load_timezones(self) -> list[str] | None:
        """
        Load the timezone list.

        A stored value that is not a list is removed from the store.

        Returns:
            The stored list, or None if nothing valid is stored
        """
        try:
            data = self._read_all()
        except PersistenceError as e:
            logger.error(f"Timezone load failed: {e}")
            return None

        stored = data.get(self.key)
        if stored is None:
            return None

        if not isinstance(stored, list):
            logger.warning("load_timezones: Stored value is not a list, clearing")
            self.clear()
            return None

        return [str(zone) for zone in stored]

    def clear(self) -> bool:
        """
        Remove the stored timezone list.

        Returns:
            True if the key is no longer stored, False if the removal failed
        """
        try:
            data = self._read_all()
            if self.key not in data:
                return True
            del data[self.key]
            self._write_all(data)
        except PersistenceError as e:
            logger.error(f"Failed to clear stored timezones: {e}")
            return False

        logger.info(f"Cleared stored timezones from {self.file_path}")
        return True
