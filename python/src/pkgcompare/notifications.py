"""
Notifications

Transient, non-blocking user notifications (toasts) raised when a fetch fails.
"""

from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone

from .config import compare_logger


@dataclass
class Notification:
    """A single toast shown to the user."""
    level: str
    message: str
    package: str | None = None
    dimension: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


NotificationListener = Callable[[Notification], None]


class Notifier:
    """Collects notifications for whichever display surface shows them."""

    def __init__(self, max_pending: int = 50):
        self._pending: deque[Notification] = deque(maxlen=max_pending)
        self._listeners: list[NotificationListener] = []

    def subscribe(self, listener: NotificationListener):
        self._listeners.append(listener)

    def unsubscribe(self, listener: NotificationListener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def error(self, message: str, package: str | None = None, dimension: str | None = None) -> Notification:
        """Push an error toast."""
        compare_logger.warning(f"Notification: {message}")
        return self._push(Notification("error", message, package, dimension))

    def _push(self, notification: Notification) -> Notification:
        self._pending.append(notification)
        for listener in list(self._listeners):
            listener(notification)
        return notification

    @property
    def pending(self) -> list[Notification]:
        return list(self._pending)

    def drain(self) -> list[Notification]:
        """Return and clear all pending notifications."""
        drained = list(self._pending)
        self._pending.clear()
        return drained
