"""
Post Client Module

Async HTTP client for the remote post collection. Encodes posts (with an
optional image) as multipart requests, decodes responses into Post objects
and maps every failure onto the error taxonomy in ``errors``.
"""

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional

import httpx

from ..config import config
from ..files import images as image_files
from .errors import DecodeError, NotFoundError, ServerError, TransportError
from .models import (
    NO_IMAGE,
    ImageSelection,
    LocalFileReference,
    Post,
    RemoteImageRef,
)
from .validation import validate_post


logger = logging.getLogger(__name__)


class PostClient:
    """
    Client for the remote post collection.

    One instance holds the base endpoint and a pooled ``httpx.AsyncClient``.
    Every call is a single request with an explicit timeout and no retries;
    cancelling the awaiting task cancels the request.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        json_field: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize the post client.

        Args:
            base_url: Collection endpoint (uses config default if None).
            timeout: Per-request timeout in seconds (uses config default if None).
            json_field: Multipart part name carrying the post JSON.
            transport: Optional transport, mainly for tests.

        Raises:
            ValueError: If no base endpoint is configured.
        """
        base_url = base_url or config.api.base_url
        if not base_url:
            raise ValueError("No post API endpoint configured (set POST_API_URL)")

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout if timeout is not None else config.api.timeout_seconds
        self.json_field = json_field or config.api.json_field
        self.image_field = config.api.image_field
        self._http = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            headers={"Accept": "application/json"},
            transport=transport,
        )
        logger.info(f"PostClient initialized (base_url: {self.base_url})")

    async def __aenter__(self) -> "PostClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        """Release pooled connections."""
        await self._http.aclose()

    async def create(self, post: Post, image: ImageSelection = NO_IMAGE) -> Post:
        """
        Create a new post.

        Args:
            post: Post without an id.
            image: Optional image to attach.

        Returns:
            The created post, including the id assigned by the server.

        Raises:
            ValueError: If the post already has an id.
            ValidationError: If title or content is blank.
            TransportError, ServerError, DecodeError: On request failure.
        """
        if post.is_persisted:
            raise ValueError(f"Post {post.id} already exists; use update()")
        validate_post(post.title, post.content)

        payload = self._payload_for(post, image)
        files = await self._multipart(payload, image)

        logger.info(f"Creating post '{post.title}'")
        response = await self._send("POST", self.base_url, files=files)
        created = Post.from_dict(self._json(response))
        logger.info(f"Created post {created.id}")
        return created

    async def list(self) -> List[Post]:
        """
        Fetch every post in the order the server returns them.

        Raises:
            TransportError, ServerError, DecodeError: On request failure.
        """
        logger.info(f"Fetching posts from {self.base_url}")
        response = await self._send("GET", self.base_url)
        data = self._json(response)

        # Some deployments wrap the collection: {"posts": [...]}
        if isinstance(data, dict) and "posts" in data:
            items = data["posts"]
        else:
            items = data
        if not isinstance(items, list):
            raise DecodeError(f"Unexpected post list format: {type(items).__name__}")

        posts = [Post.from_dict(item) for item in items]
        logger.info(f"Fetched {len(posts)} posts")
        return posts

    async def get_by_id(self, post_id: int) -> Optional[Post]:
        """
        Fetch a single post with its image payload.

        Returns:
            The post, or None if no post has this id.

        Raises:
            ValueError: If post_id is not a positive integer.
            TransportError, ServerError, DecodeError: On request failure.
        """
        self._check_id(post_id)
        logger.info(f"Fetching post {post_id}")
        try:
            response = await self._send("GET", self._item_url(post_id), post_id=post_id)
        except NotFoundError:
            logger.info(f"Post {post_id} not found")
            return None
        return Post.from_dict(self._json(response))

    async def update(self, post: Post, image: ImageSelection = NO_IMAGE) -> Post:
        """
        Update an existing post with a partial-update request.

        Without a new image, an existing ``post.image_url`` is sent back so
        the server keeps the current attachment. A new local image replaces
        any previous reference.

        Args:
            post: Post with an id.
            image: New image, an existing remote reference, or NO_IMAGE.

        Returns:
            The updated post.

        Raises:
            ValueError: If the post has no id.
            ValidationError: If title or content is blank.
            TransportError, ServerError, DecodeError: On request failure.
        """
        if not post.is_persisted:
            raise ValueError("Cannot update a post that has no id; use create()")
        self._check_id(post.id)
        validate_post(post.title, post.content)

        payload = self._payload_for(post, image)
        files = await self._multipart(payload, image)

        logger.info(f"Updating post {post.id}")
        response = await self._send(
            "PATCH", self._item_url(post.id), files=files, post_id=post.id
        )
        updated = Post.from_dict(self._json(response))
        logger.info(f"Updated post {updated.id}")
        return updated

    async def delete(self, post_id: int) -> bool:
        """
        Delete a post.

        Returns:
            True once the server has accepted the deletion.

        Raises:
            NotFoundError: If the server reports the post as missing.
            TransportError, ServerError: On request failure.
        """
        self._check_id(post_id)
        logger.info(f"Deleting post {post_id}")
        await self._send("DELETE", self._item_url(post_id), post_id=post_id)
        logger.info(f"Deleted post {post_id}")
        return True

    def _item_url(self, post_id: int) -> str:
        return f"{self.base_url}/{post_id}"

    @staticmethod
    def _check_id(post_id: Any) -> None:
        if isinstance(post_id, bool) or not isinstance(post_id, int) or post_id <= 0:
            raise ValueError(f"Post id must be a positive integer, got {post_id!r}")

    @staticmethod
    def _payload_for(post: Post, image: ImageSelection) -> Dict[str, Any]:
        """Post JSON with imageUrl reconciled against the image selection."""
        payload = post.to_payload()
        if isinstance(image, LocalFileReference):
            # New upload supersedes the old attachment
            payload.pop("imageUrl", None)
        elif isinstance(image, RemoteImageRef):
            payload["imageUrl"] = image.url
        return payload

    async def _multipart(
        self,
        payload: Dict[str, Any],
        image: ImageSelection
    ) -> Dict[str, tuple]:
        """Build the multipart parts: post JSON plus optional image bytes."""
        files: Dict[str, tuple] = {
            self.json_field: (
                None,
                json.dumps(payload).encode("utf-8"),
                "application/json",
            ),
        }
        if isinstance(image, LocalFileReference):
            # File I/O runs off the event loop
            data = await asyncio.to_thread(image_files.read_image_bytes, image)
            files[self.image_field] = (image.filename, data, image.mime_type)
            logger.debug(f"Attaching image {image.filename} ({len(data)} bytes)")
        return files

    async def _send(
        self,
        method: str,
        url: str,
        post_id: Optional[int] = None,
        **kwargs
    ) -> httpx.Response:
        """
        Issue one request and check its status.

        Raises:
            TransportError: If no response was received.
            NotFoundError: On 404 for an addressed post.
            ServerError: On any other non-2xx status.
        """
        try:
            response = await self._http.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning(f"{method} {url} timed out after {self.timeout}s")
            raise TransportError(f"Request timed out: {e}") from e
        except httpx.TransportError as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise TransportError(f"No response from server: {e}") from e

        if response.is_success:
            return response

        logger.warning(f"{method} {url} returned HTTP {response.status_code}")
        if response.status_code == 404 and post_id is not None:
            raise NotFoundError(post_id, body=response.text)
        raise ServerError(response.status_code, body=response.text)

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"Response is not valid JSON: {e}") from e
