"""
Errors raised by the post client.

Callers can tell apart a request that never reached the server
(TransportError), a request the server rejected (ServerError) and a
response that could not be understood (DecodeError). ValidationError is
raised before any request is made.
"""

from typing import Dict, Optional


class PostClientError(Exception):
    """Base class for every post client failure."""


class ValidationError(PostClientError):
    """Post fields failed local validation; nothing was sent."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(self.errors.values()) or "Invalid post")


class TransportError(PostClientError):
    """No response was received (network down, DNS failure, timeout)."""


class ServerError(PostClientError):
    """The server answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str = "", body: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        super().__init__(message or f"Server responded with HTTP {status_code}")


class NotFoundError(ServerError):
    """The addressed post does not exist."""

    def __init__(self, post_id: int, body: Optional[str] = None):
        self.post_id = post_id
        super().__init__(404, f"Post {post_id} not found", body)


class DecodeError(PostClientError):
    """The response body was malformed or had an unexpected shape."""
