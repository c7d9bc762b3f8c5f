"""Flushes serialized store state to storage, optionally debounced."""

import threading
from collections.abc import Callable

import structlog

from lingonotes.client.storage import KeyValueStorage

logger = structlog.get_logger(__name__)


class StatePersister:
    """
    Writes the latest serialized state under a fixed key.

    With ``debounce_seconds`` of 0 every ``schedule`` writes immediately and
    storage errors reach the caller. Otherwise writes are coalesced on a timer
    thread and only the last state is written; ``flush`` forces a pending write.
    """

    def __init__(
        self, storage: KeyValueStorage, key: str, debounce_seconds: float = 0.0
    ) -> None:
        self.storage = storage
        self.key = key
        self.debounce_seconds = debounce_seconds
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._pending: Callable[[], str] | None = None

    def load(self) -> str | None:
        return self.storage.get_item(self.key)

    def schedule(self, serialize: Callable[[], str]) -> None:
        if self.debounce_seconds <= 0:
            self.storage.set_item(self.key, serialize())
            return

        with self._lock:
            self._pending = serialize
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self.debounce_seconds, self._flush_from_timer)
            self._timer.daemon = True
            self._timer.start()

    def flush(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            serialize, self._pending = self._pending, None
        if serialize is not None:
            self.storage.set_item(self.key, serialize())

    def _flush_from_timer(self) -> None:
        # No caller to report to on the timer thread
        try:
            self.flush()
        except OSError as e:
            logger.error("state_persist_failed", key=self.key, error=str(e))
