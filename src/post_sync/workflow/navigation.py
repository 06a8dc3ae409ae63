"""
Navigation and alert collaborators used by the screen controllers.

The controllers never talk to a UI toolkit directly: they push routes on a
Navigator and report outcomes through an Alerter. The implementations here
keep everything in memory and log, which is what the command line front-end
and the tests need.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from ..api.errors import PostClientError, ServerError, TransportError


logger = logging.getLogger(__name__)


POSTS_ROUTE = "/posts"
CREATE_ROUTE = "/posts/create"
EDIT_ROUTE = "/posts/edit"
NOTIFICATIONS_ROUTE = "/notifications"


def post_route(post_id: int) -> str:
    return f"{POSTS_ROUTE}/{post_id}"


def edit_route(post_id: int) -> str:
    return f"{EDIT_ROUTE}?id={post_id}"


class Navigator:
    """In-memory route stack."""

    def __init__(self, initial: str = POSTS_ROUTE):
        self.stack: List[str] = [initial]

    @property
    def current(self) -> str:
        return self.stack[-1]

    def push(self, route: str) -> None:
        logger.debug(f"Navigate: push {route}")
        self.stack.append(route)

    def replace(self, route: str) -> None:
        logger.debug(f"Navigate: replace {self.current} with {route}")
        self.stack[-1] = route

    def back(self) -> None:
        if len(self.stack) > 1:
            popped = self.stack.pop()
            logger.debug(f"Navigate: back from {popped}")


@dataclass
class Alert:
    """A user-facing message."""
    title: str
    message: str


class Alerter:
    """Collects alerts and mirrors them to the log."""

    def __init__(self):
        self.alerts: List[Alert] = []

    def alert(self, title: str, message: str) -> None:
        level = logging.ERROR if title == "Error" else logging.INFO
        logger.log(level, f"{title}: {message}")
        self.alerts.append(Alert(title, message))

    @property
    def last(self) -> Optional[Alert]:
        return self.alerts[-1] if self.alerts else None


def describe_failure(action: str, error: Exception) -> str:
    """Build a user-facing message for a failed remote call."""
    if isinstance(error, TransportError):
        return f"Failed to {action}. Please check your connection and try again."
    if isinstance(error, ServerError):
        return f"Failed to {action}. The server rejected the request (HTTP {error.status_code})."
    if isinstance(error, PostClientError):
        return f"Failed to {action}. The server sent an unexpected response."
    return f"Failed to {action}. An unexpected error occurred."
