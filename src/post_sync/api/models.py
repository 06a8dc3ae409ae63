"""
Post data contract and image selections.

The remote collection speaks camelCase JSON (``imageUrl``); the client uses
snake_case attributes and converts at the edges.
"""

import base64
import binascii
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from .errors import DecodeError


@dataclass
class Post:
    """A post as stored by the remote collection."""
    title: str
    content: str
    id: Optional[int] = None
    image_url: Optional[str] = None
    image: Optional[str] = None  # base64 payload, only present on detail reads

    @property
    def is_persisted(self) -> bool:
        """A post without an id has never been stored remotely."""
        return self.id is not None

    def to_payload(self) -> Dict[str, Any]:
        """Serialize the writable fields for a create or update request."""
        payload: Dict[str, Any] = {"title": self.title, "content": self.content}
        if self.id is not None:
            payload["id"] = self.id
        if self.image_url:
            payload["imageUrl"] = self.image_url
        return payload

    def image_bytes(self) -> Optional[bytes]:
        """
        Decode the base64 image payload returned by a detail read.

        Raises:
            DecodeError: If the payload is not valid base64.
        """
        if not self.image:
            return None
        try:
            return base64.b64decode(self.image, validate=True)
        except (binascii.Error, ValueError) as e:
            raise DecodeError(f"Post {self.id} carries an invalid image payload: {e}") from e

    @classmethod
    def from_dict(cls, data: Any) -> "Post":
        """
        Build a Post from a decoded JSON object.

        Raises:
            DecodeError: If the object does not have the shape of a post.
        """
        if not isinstance(data, dict):
            raise DecodeError(f"Expected a post object, got {type(data).__name__}")

        title = data.get("title")
        content = data.get("content")
        if not isinstance(title, str) or not isinstance(content, str):
            raise DecodeError("Post object is missing 'title' or 'content'")

        post_id = data.get("id")
        # bool is an int subclass but never a valid identifier
        if post_id is not None and (isinstance(post_id, bool) or not isinstance(post_id, int)):
            raise DecodeError(f"Post id must be an integer, got {post_id!r}")

        image_url = data.get("imageUrl")
        image = data.get("image")
        if image_url is not None and not isinstance(image_url, str):
            raise DecodeError("Post 'imageUrl' must be a string")
        if image is not None and not isinstance(image, str):
            raise DecodeError("Post 'image' must be base64 text")

        return cls(
            id=post_id,
            title=title,
            content=content,
            image_url=image_url,
            image=image,
        )


@dataclass(frozen=True)
class NoImage:
    """No image selected."""


@dataclass(frozen=True)
class LocalFileReference:
    """A local file picked by the user, pending upload."""
    uri: str
    filename: str
    mime_type: str


@dataclass(frozen=True)
class RemoteImageRef:
    """An image already stored server-side."""
    url: str


ImageSelection = Union[NoImage, LocalFileReference, RemoteImageRef]

NO_IMAGE = NoImage()
