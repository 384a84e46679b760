"""In-memory ring buffer of user-facing notifications."""

import itertools
import logging
import threading
from dataclasses import dataclass

from logger_dashboard.models import utc_timestamp

logger = logging.getLogger(__name__)

SUCCESS = "success"
ERROR = "error"
INFO = "info"

_LOG_LEVELS = {SUCCESS: logging.INFO, INFO: logging.INFO, ERROR: logging.WARNING}


@dataclass(frozen=True)
class Notification:
    id: int
    kind: str
    message: str
    timestamp: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "kind": self.kind,
            "message": self.message,
            "timestamp": self.timestamp,
        }


class NotificationFeed:
    """Bounded, thread-safe feed of transient notifications.

    Ids increase monotonically so pollers can ask for everything after the
    last id they saw.
    """

    def __init__(self, max_size: int = 50):
        self._max_size = max_size
        self._items: list[Notification] = []
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def push(self, kind: str, message: str) -> Notification:
        """Store a notification, evicting the oldest if at capacity."""
        with self._lock:
            item = Notification(next(self._ids), kind, message, utc_timestamp())
            self._items.append(item)
            if len(self._items) > self._max_size:
                self._items.pop(0)
        logger.log(_LOG_LEVELS.get(kind, logging.INFO), "[%s] %s", kind, message)
        return item

    def success(self, message: str) -> Notification:
        return self.push(SUCCESS, message)

    def error(self, message: str) -> Notification:
        return self.push(ERROR, message)

    def info(self, message: str) -> Notification:
        return self.push(INFO, message)

    def get_recent(self, n: int = 10) -> list[Notification]:
        """Return the N most recent notifications, oldest first."""
        with self._lock:
            if n <= 0:
                return []
            return list(self._items[-n:])

    def since(self, last_id: int) -> list[Notification]:
        """Return notifications with an id greater than last_id."""
        with self._lock:
            return [n for n in self._items if n.id > last_id]

    @property
    def count(self) -> int:
        with self._lock:
            return len(self._items)
