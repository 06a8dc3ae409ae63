"""
API Client Module

Provides the async client for the remote post collection.
"""

from .client import PostClient
from .errors import (
    DecodeError,
    NotFoundError,
    PostClientError,
    ServerError,
    TransportError,
    ValidationError,
)
from .models import NO_IMAGE, ImageSelection, LocalFileReference, NoImage, Post, RemoteImageRef

__all__ = [
    "PostClient",
    "Post",
    "NoImage",
    "NO_IMAGE",
    "LocalFileReference",
    "RemoteImageRef",
    "ImageSelection",
    "PostClientError",
    "ValidationError",
    "TransportError",
    "ServerError",
    "NotFoundError",
    "DecodeError",
]
