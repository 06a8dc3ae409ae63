"""
Shared fixtures: an in-memory post server behind httpx.MockTransport.
"""

import base64
import json
import sys
from email.parser import BytesParser
from email.policy import default as default_policy
from pathlib import Path
from typing import Dict, List

import httpx
import pytest
import pytest_asyncio

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from post_sync.api.client import PostClient


BASE_URL = "http://testserver/api/posts"
BASE_PATH = "/api/posts"


def parse_multipart(request: httpx.Request) -> Dict[str, dict]:
    """Split a multipart request body into {name: {data, filename, content_type}}."""
    header = request.headers["content-type"].encode("ascii")
    raw = b"Content-Type: " + header + b"\r\n\r\n" + request.content
    message = BytesParser(policy=default_policy).parsebytes(raw)

    parts = {}
    for part in message.iter_parts():
        name = part.get_param("name", header="content-disposition")
        parts[name] = {
            "data": part.get_payload(decode=True),
            "filename": part.get_filename(),
            "content_type": part.get_content_type(),
        }
    return parts


class FakePostServer:
    """
    Minimal post collection that follows the wire contract of the real one.
    """

    def __init__(self, json_field: str = "post"):
        self.json_field = json_field
        self.posts: Dict[int, dict] = {}
        self.images: Dict[int, bytes] = {}
        self.requests: List[httpx.Request] = []
        self.received_parts: List[Dict[str, dict]] = []
        self._next_id = 1
        self._image_version = 0

    def seed(self, post_id: int, title: str, content: str) -> None:
        self.posts[post_id] = {"id": post_id, "title": title, "content": content}
        self._next_id = max(self._next_id, post_id + 1)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.rstrip("/")

        if path == BASE_PATH:
            if request.method == "GET":
                return httpx.Response(200, json=list(self.posts.values()))
            if request.method == "POST":
                return self._create(request)
            return httpx.Response(405)

        post_id = int(path.rsplit("/", 1)[-1])
        if post_id not in self.posts:
            return httpx.Response(404, json={"detail": "Not found"})

        if request.method == "GET":
            body = dict(self.posts[post_id])
            if post_id in self.images:
                body["image"] = base64.b64encode(self.images[post_id]).decode("ascii")
            return httpx.Response(200, json=body)
        if request.method == "PATCH":
            return self._update(post_id, request)
        if request.method == "DELETE":
            del self.posts[post_id]
            self.images.pop(post_id, None)
            return httpx.Response(204)
        return httpx.Response(405)

    def _create(self, request: httpx.Request) -> httpx.Response:
        parts = parse_multipart(request)
        self.received_parts.append(parts)
        fields = json.loads(parts[self.json_field]["data"])

        post_id = self._next_id
        self._next_id += 1
        post = {"id": post_id, "title": fields["title"], "content": fields["content"]}
        if "image" in parts:
            self.images[post_id] = parts["image"]["data"]
            post["imageUrl"] = self._image_url(post_id)
        self.posts[post_id] = post
        return httpx.Response(201, json=post)

    def _update(self, post_id: int, request: httpx.Request) -> httpx.Response:
        parts = parse_multipart(request)
        self.received_parts.append(parts)
        fields = json.loads(parts[self.json_field]["data"])

        post = self.posts[post_id]
        post["title"] = fields["title"]
        post["content"] = fields["content"]
        if "image" in parts:
            self.images[post_id] = parts["image"]["data"]
            post["imageUrl"] = self._image_url(post_id)
        elif not fields.get("imageUrl"):
            # Absent reference means the image was removed
            self.images.pop(post_id, None)
            post.pop("imageUrl", None)
        return httpx.Response(200, json=post)

    def _image_url(self, post_id: int) -> str:
        self._image_version += 1
        return f"http://testserver/images/{post_id}-{self._image_version}.jpg"


@pytest.fixture
def server():
    """Create an empty fake post server."""
    return FakePostServer()


@pytest_asyncio.fixture
async def client(server):
    """Create a PostClient talking to the fake server."""
    post_client = PostClient(
        base_url=BASE_URL,
        timeout=5.0,
        transport=httpx.MockTransport(server.handle),
    )
    yield post_client
    await post_client.close()


@pytest.fixture
def image_file(tmp_path):
    """Write a small fake PNG file."""
    path = tmp_path / "photo.png"
    path.write_bytes(b"fake-png-bytes-1")
    return path
