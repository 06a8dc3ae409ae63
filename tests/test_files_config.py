"""
Tests for Image Files and Configuration
"""

from pathlib import Path

import pytest

from post_sync.api.models import LocalFileReference
from post_sync.config import load_config
from post_sync.files import read_image_bytes, reference_from_path, resolve_path


class TestImageFiles:
    """Tests for picking and reading local images."""

    def test_reference_from_path(self, image_file):
        ref = reference_from_path(image_file)

        assert ref.filename == "photo.png"
        assert ref.mime_type == "image/png"
        assert ref.uri.startswith("file://")
        assert read_image_bytes(ref) == b"fake-png-bytes-1"

    def test_defaults_for_unknown_type(self, tmp_path):
        path = tmp_path / "capture"
        path.write_bytes(b"raw")

        ref = reference_from_path(path)

        assert ref.mime_type == "image/jpeg"
        assert ref.filename == "capture"

    def test_explicit_metadata(self, image_file):
        ref = reference_from_path(image_file, filename="upload.bin", mime_type="image/webp")

        assert ref.filename == "upload.bin"
        assert ref.mime_type == "image/webp"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            reference_from_path(tmp_path / "nope.png")

    def test_plain_path_uri(self, image_file):
        ref = LocalFileReference(uri=str(image_file), filename="photo.png", mime_type="image/png")

        assert read_image_bytes(ref) == b"fake-png-bytes-1"

    def test_rejects_remote_uri(self):
        with pytest.raises(ValueError):
            resolve_path("https://example.com/a.png")

    def test_colon_in_filename(self, tmp_path, monkeypatch):
        (tmp_path / "shot:1.png").write_bytes(b"colon")
        monkeypatch.chdir(tmp_path)

        ref = reference_from_path("shot:1.png")

        assert resolve_path("shot:1.png") == Path("shot:1.png")
        assert ref.filename == "shot:1.png"
        assert read_image_bytes(ref) == b"colon"


class TestConfig:
    """Tests for environment-driven configuration."""

    def test_base_url_from_environment(self, monkeypatch):
        monkeypatch.setenv("POST_API_URL", "http://api.local/posts")
        monkeypatch.setenv("POST_API_TIMEOUT", "2.5")

        cfg = load_config()

        assert cfg.api.base_url == "http://api.local/posts"
        assert cfg.api.timeout_seconds == 2.5

    def test_override(self, monkeypatch):
        monkeypatch.setenv("POST_API_URL", "http://api.local/posts")

        cfg = load_config(base_url="http://other/posts")

        assert cfg.api.base_url == "http://other/posts"

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("POST_API_TIMEOUT", raising=False)
        monkeypatch.delenv("POST_API_JSON_FIELD", raising=False)

        cfg = load_config()

        assert cfg.api.timeout_seconds == 10.0
        assert cfg.api.json_field == "post"
        assert cfg.api.image_field == "image"

    def test_bad_timeout(self, monkeypatch):
        monkeypatch.setenv("POST_API_TIMEOUT", "soon")

        with pytest.raises(ValueError):
            load_config()
