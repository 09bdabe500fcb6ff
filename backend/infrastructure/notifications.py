"""
Notification delivery.

The reminder evaluator only knows the NotificationDispatcher protocol. The
server ships a dispatcher that logs and keeps the most recent notifications in
memory so clients can poll them.
"""

import logging
from collections import deque
from datetime import datetime
from typing import Deque, List, Optional, Protocol, Tuple

from domain.value_objects.time_models import NotificationRequest

logger = logging.getLogger("Notifications")


class NotificationDispatcher(Protocol):
    """Fire-and-forget notification sink. May raise; callers log and continue."""

    def notify(self, title: str, body: str) -> None: ...


class LoggingNotificationDispatcher:
    def __init__(self, max_recent: int = 50):
        self._recent: Deque[Tuple[datetime, NotificationRequest]] = deque(maxlen=max_recent)

    def notify(self, title: str, body: str) -> None:
        logger.info(f"🔔 {title}: {body}")
        self._recent.append((datetime.now(), NotificationRequest(title=title, body=body)))

    def recent(self, since: Optional[datetime] = None) -> List[NotificationRequest]:
        """Delivered notifications, oldest first, optionally only those after `since`."""
        return [req for sent_at, req in self._recent if since is None or sent_at > since]

    def clear(self) -> None:
        self._recent.clear()


class RecordingDispatcher:
    """Collects requests in a list. Used by tests and dry runs."""

    def __init__(self, fail: bool = False):
        self.sent: List[NotificationRequest] = []
        self.fail = fail

    def notify(self, title: str, body: str) -> None:
        if self.fail:
            raise RuntimeError("notification permission denied")
        self.sent.append(NotificationRequest(title=title, body=body))

    @property
    def titles(self) -> List[str]:
        return [req.title for req in self.sent]
