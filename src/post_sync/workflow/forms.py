"""
Create and edit form controllers.

Forms validate locally before calling the client, keep the submitting flag
up while a request is outstanding and always drop it afterwards, whatever
the outcome.
"""

import logging
from typing import Dict, Optional

from ..api import (
    NO_IMAGE,
    ImageSelection,
    LocalFileReference,
    Post,
    PostClient,
    RemoteImageRef,
    ValidationError,
)
from ..api.validation import collect_errors
from .navigation import POSTS_ROUTE, Alerter, Navigator, describe_failure


logger = logging.getLogger(__name__)


class _PostForm:
    """Fields and flags shared by the create and edit forms."""

    action = "save post"

    def __init__(self, client: PostClient, navigator: Navigator, alerter: Alerter):
        self.client = client
        self.navigator = navigator
        self.alerter = alerter
        self.title = ""
        self.content = ""
        self.image: ImageSelection = NO_IMAGE
        self.errors: Dict[str, str] = {}
        self.is_submitting = False

    def pick_image(self, ref: LocalFileReference) -> None:
        """Select a local image; replaces any previous selection."""
        self.image = ref

    def remove_image(self) -> None:
        self.image = NO_IMAGE

    def validate(self) -> bool:
        self.errors = collect_errors(self.title, self.content)
        return not self.errors

    async def submit(self) -> Optional[Post]:
        """
        Validate and send the form.

        Returns:
            The saved post, or None if validation or the request failed.
        """
        if self.is_submitting:
            return None
        if not self.validate():
            return None

        self.is_submitting = True
        try:
            saved = await self._send()
        except ValidationError as e:
            self.errors = e.errors
            return None
        except Exception as e:
            logger.exception(f"Failed to {self.action}")
            self.alerter.alert("Error", describe_failure(self.action, e))
            return None
        finally:
            self.is_submitting = False

        self._on_saved(saved)
        return saved

    async def _send(self) -> Post:
        raise NotImplementedError

    def _on_saved(self, post: Post) -> None:
        raise NotImplementedError


class CreatePostForm(_PostForm):
    """
    State behind the create post screen.
    """

    action = "create post"

    async def _send(self) -> Post:
        post = Post(title=self.title, content=self.content)
        return await self.client.create(post, self.image)

    def _on_saved(self, post: Post) -> None:
        self.title = ""
        self.content = ""
        self.image = NO_IMAGE
        self.errors = {}
        self.navigator.push(POSTS_ROUTE)
        self.alerter.alert("Success", "Post created successfully")

    def cancel(self) -> None:
        self.navigator.back()


class EditPostForm(_PostForm):
    """
    State behind the edit post screen.

    An image already stored with the post is held as a RemoteImageRef so
    that saving without touching the image keeps it.
    """

    action = "update post"

    def __init__(self, client: PostClient, navigator: Navigator, alerter: Alerter):
        super().__init__(client, navigator, alerter)
        self.post: Optional[Post] = None
        self.loading = False

    @property
    def existing_image_url(self) -> Optional[str]:
        if isinstance(self.image, RemoteImageRef):
            return self.image.url
        return None

    async def load(self, post_id: int) -> bool:
        """
        Fill the form from the stored post; a missing post sends the user back.
        """
        self.loading = True
        try:
            post = await self.client.get_by_id(post_id)
        except Exception as e:
            logger.exception(f"Error fetching post {post_id}")
            self.alerter.alert("Error", describe_failure("load post", e))
            self.navigator.back()
            return False
        finally:
            self.loading = False

        if post is None:
            self.alerter.alert("Error", "Post not found")
            self.navigator.back()
            return False

        self.post = post
        self.title = post.title
        self.content = post.content
        self.image = RemoteImageRef(post.image_url) if post.image_url else NO_IMAGE
        return True

    async def submit(self) -> Optional[Post]:
        if self.post is None or self.post.id is None:
            return None
        return await super().submit()

    async def _send(self) -> Post:
        post = Post(
            id=self.post.id,
            title=self.title,
            content=self.content,
            image_url=self.existing_image_url,
        )
        return await self.client.update(post, self.image)

    def _on_saved(self, post: Post) -> None:
        self.post = post
        self.navigator.push(POSTS_ROUTE)
        self.alerter.alert("Success", "Post updated successfully")

    def cancel(self) -> None:
        self.navigator.back()
