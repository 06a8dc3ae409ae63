"""
Notifications Module

Provides the in-memory notification store.
"""

from .store import Notification, NotificationStore

__all__ = ["Notification", "NotificationStore"]
