"""
Notification Store Module

In-memory list of notifications shared by the screens that show them.
One store instance is created by the application and handed to whoever
needs it; readers get copies, and every change goes through a method that
notifies subscribers.
"""

import logging
from dataclasses import dataclass, replace
from typing import Callable, Iterable, List, Optional


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    """A single notification."""
    id: str
    title: str
    description: str
    time: str
    read: bool = False


Listener = Callable[[List[Notification]], None]


class NotificationStore:
    """
    Holds the notification list.

    Reads: all(), get(), unread_count().
    Writes: mark_as_read(), mark_all_as_read(), delete(); each write calls
    every subscriber with a snapshot of the new list.
    """

    def __init__(self, notifications: Optional[Iterable[Notification]] = None):
        self._items: List[Notification] = list(notifications or [])
        self._listeners: List[Listener] = []

    @classmethod
    def with_samples(cls) -> "NotificationStore":
        """Create a store seeded with the sample notifications."""
        return cls(SAMPLE_NOTIFICATIONS)

    def all(self) -> List[Notification]:
        return list(self._items)

    def get(self, notification_id: str) -> Notification:
        """
        Raises:
            KeyError: If no notification has this id.
        """
        for item in self._items:
            if item.id == notification_id:
                return item
        raise KeyError(notification_id)

    def unread_count(self) -> int:
        return sum(1 for item in self._items if not item.read)

    def mark_as_read(self, notification_id: str) -> None:
        index = self._index(notification_id)
        self._items[index] = replace(self._items[index], read=True)
        self._changed()

    def mark_all_as_read(self) -> None:
        self._items = [replace(item, read=True) for item in self._items]
        self._changed()

    def delete(self, notification_id: str) -> None:
        del self._items[self._index(notification_id)]
        self._changed()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called after every change.

        Returns:
            A callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _index(self, notification_id: str) -> int:
        for index, item in enumerate(self._items):
            if item.id == notification_id:
                return index
        raise KeyError(notification_id)

    def _changed(self) -> None:
        logger.debug(f"Notifications changed ({self.unread_count()} unread)")
        snapshot = self.all()
        for listener in list(self._listeners):
            listener(snapshot)


SAMPLE_NOTIFICATIONS = [
    Notification(
        id="1",
        title="New Message",
        description="You have received a new message from John Doe",
        time="10 min ago",
    ),
    Notification(
        id="2",
        title="Calendar Event",
        description="Meeting with the design team tomorrow at 10:00 AM",
        time="1 hour ago",
    ),
    Notification(
        id="3",
        title="Friend Request",
        description="Sarah Smith sent you a friend request",
        time="3 hours ago",
    ),
    Notification(
        id="4",
        title="System Update",
        description="Your app has been updated to the latest version",
        time="Yesterday",
        read=True,
    ),
    Notification(
        id="5",
        title="Payment Received",
        description="You received a payment of $50.00 from Michael Brown",
        time="2 days ago",
        read=True,
    ),
]
