"""
Observable converter state.

Holds the current parsed timestamp and the user's timezone selection. Every
change recomputes the active working set from scratch and pushes it to
subscribers.
"""

import logging
import threading
from collections.abc import Callable, Iterable

from ..utils.time.parser import parse_timestamp
from ..utils.time.types import ParseResult, TimestampValue
from ..utils.time.working_set import derive_working_set
from .storage import TimezoneStorage

logger = logging.getLogger(__name__)

WorkingSetCallback = Callable[[tuple[str, ...]], None]


class ConverterState:
    """
    Single-writer state container for the converter.

    The selection is persisted through an optional ``TimezoneStorage``. A
    failed save keeps the in-memory selection.
    """

    def __init__(
        self,
        storage: TimezoneStorage | None = None,
        default_timezones: Iterable[str] = (),
        local_timezone: str | None = None,
    ) -> None:
        """
        Initialize state, restoring the stored selection when there is one.

        Args:
            storage: Backing store for the selection
            default_timezones: Selection to use when nothing is stored
            local_timezone: Override for the system timezone used when parsing
        """
        self._lock: threading.RLock = threading.RLock()
        self._callbacks: list[WorkingSetCallback] = []
        self._storage: TimezoneStorage | None = storage
        self._local_timezone: str | None = local_timezone
        self._timestamp: TimestampValue | None = None
        self._last_error: str | None = None

        stored = storage.load_timezones() if storage is not None else None
        self._timezones: tuple[str, ...] = tuple(
            dict.fromkeys(stored if stored is not None else default_timezones)
        )
        self._active: tuple[str, ...] = derive_working_set(None, self._timezones)

    @property
    def timestamp(self) -> TimestampValue | None:
        """Current parsed timestamp."""
        return self._timestamp

    @property
    def timezones(self) -> tuple[str, ...]:
        """User-selected zones in stored order."""
        return self._timezones

    @property
    def active_timezones(self) -> tuple[str, ...]:
        """Working set derived from the current timestamp and selection."""
        return self._active

    @property
    def last_error(self) -> str | None:
        """User-facing message from the most recent failed parse."""
        return self._last_error

    def subscribe(self, callback: WorkingSetCallback) -> Callable[[], None]:
        """
        Register a callback for working-set changes.

        The callback is invoked immediately with the current working set.

        Returns:
            A function that removes the subscription
        """
        with self._lock:
            self._callbacks.append(callback)
            self._notify_one(callback, self._active)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._callbacks:
                    self._callbacks.remove(callback)

        return unsubscribe

    def _notify_one(self, callback: WorkingSetCallback, working_set: tuple[str, ...]) -> None:
        try:
            callback(working_set)
        except Exception as e:
            logger.error(f"Working-set subscriber failed: {e}")

    def _recompute(self) -> None:
        """Rebuild the working set and notify subscribers."""
        self._active = derive_working_set(self._timestamp, self._timezones)
        for callback in list(self._callbacks):
            self._notify_one(callback, self._active)

    def _persist(self) -> None:
        if self._storage is None:
            return
        if not self._storage.save_timezones(list(self._timezones)):
            logger.warning("Could not persist timezone selection, keeping it in memory")

    def set_input(self, text: str) -> ParseResult:
        """
        Parse raw text and make it the current timestamp on success.

        A failed parse keeps the previous timestamp and records the message.
        """
        result = parse_timestamp(text, self._local_timezone)
        with self._lock:
            if result.value is not None:
                self._last_error = None
                self._timestamp = result.value
                self._recompute()
            else:
                self._last_error = result.message
        return result

    def set_timestamp(self, value: TimestampValue | None) -> None:
        """Replace the current timestamp."""
        with self._lock:
            self._timestamp = value
            self._recompute()

    def clear(self) -> None:
        """Drop the current timestamp and any parse error."""
        with self._lock:
            self._last_error = None
            self._timestamp = None
            self._recompute()

    def set_timezones(self, timezones: Iterable[str]) -> None:
        """Replace the selection, dropping duplicates."""
        with self._lock:
            self._timezones = tuple(dict.fromkeys(timezones))
            self._persist()
            self._recompute()

    def add_timezone(self, zone_id: str) -> bool:
        """
        Append a zone to the selection.

        Returns:
            False if the zone was already selected
        """
        with self._lock:
            if zone_id in self._timezones:
                return False
            self.set_timezones((*self._timezones, zone_id))
            return True

    def remove_timezone(self, zone_id: str) -> bool:
        """
        Remove a zone from the selection.

        Returns:
            False if the zone was not selected
        """
        with self._lock:
            if zone_id not in self._timezones:
                return False
            self.set_timezones(zone for zone in self._timezones if zone != zone_id)
            return True
