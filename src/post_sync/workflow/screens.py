"""
Post list and detail controllers.

Each controller owns the state one screen renders (loading flag, posts) and
turns every remote failure into an alert instead of letting it escape.
"""

import logging
from typing import List, Optional

from ..api import Post, PostClient
from .navigation import (
    CREATE_ROUTE,
    POSTS_ROUTE,
    Alerter,
    Navigator,
    describe_failure,
    edit_route,
    post_route,
)


logger = logging.getLogger(__name__)


class PostListController:
    """
    State behind the post list screen.
    """

    def __init__(self, client: PostClient, navigator: Navigator, alerter: Alerter):
        self.client = client
        self.navigator = navigator
        self.alerter = alerter
        self.posts: List[Post] = []
        self.loading = False

    async def load(self) -> bool:
        """
        Reload every post.

        Returns:
            True if the list was refreshed, False if loading failed.
        """
        self.loading = True
        try:
            self.posts = await self.client.list()
            return True
        except Exception as e:
            logger.exception("Error loading posts")
            self.alerter.alert("Error", describe_failure("load posts", e))
            return False
        finally:
            self.loading = False

    async def delete(self, post_id: int) -> bool:
        """Delete a post and refresh the list."""
        try:
            await self.client.delete(post_id)
        except Exception as e:
            logger.exception(f"Error deleting post {post_id}")
            self.alerter.alert("Error", describe_failure("delete post", e))
            return False

        await self.load()
        return True

    def open(self, post_id: int) -> None:
        self.navigator.push(post_route(post_id))

    def edit(self, post_id: int) -> None:
        self.navigator.push(edit_route(post_id))

    def new(self) -> None:
        self.navigator.push(CREATE_ROUTE)


class PostDetailController:
    """
    State behind the post detail screen.
    """

    def __init__(self, client: PostClient, navigator: Navigator, alerter: Alerter):
        self.client = client
        self.navigator = navigator
        self.alerter = alerter
        self.post: Optional[Post] = None
        self.image: Optional[bytes] = None
        self.loading = False

    async def load(self, post_id: int) -> Optional[Post]:
        """
        Fetch the post and decode its image; a missing post sends the user back.
        """
        self.loading = True
        try:
            post = await self.client.get_by_id(post_id)
            if post is None:
                self.alerter.alert("Error", "Post not found")
                self.navigator.back()
                return None
            self.image = post.image_bytes()
            self.post = post
            return self.post
        except Exception as e:
            logger.exception(f"Error fetching post {post_id}")
            self.post = None
            self.image = None
            self.alerter.alert("Error", describe_failure("load post", e))
            self.navigator.back()
            return None
        finally:
            self.loading = False

    def image_bytes(self) -> Optional[bytes]:
        """Decoded image of the loaded post, if any."""
        return self.image

    def edit(self) -> None:
        if self.post and self.post.id is not None:
            self.navigator.push(edit_route(self.post.id))

    async def delete(self) -> bool:
        """Delete the loaded post and return to the list."""
        if not self.post or self.post.id is None:
            return False
        try:
            await self.client.delete(self.post.id)
        except Exception as e:
            logger.exception(f"Error deleting post {self.post.id}")
            self.alerter.alert("Error", describe_failure("delete post", e))
            return False

        self.post = None
        self.image = None
        self.navigator.replace(POSTS_ROUTE)
        return True
