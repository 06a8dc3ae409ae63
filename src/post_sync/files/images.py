"""
Image File Module

Builds references to local image files picked for upload and reads their
bytes when a request is encoded.
"""

import logging
import mimetypes
from pathlib import Path
from typing import Optional, Union
from urllib.parse import unquote, urlparse

from ..config import config
from ..api.models import LocalFileReference


logger = logging.getLogger(__name__)


def reference_from_path(
    path: Union[str, Path],
    filename: Optional[str] = None,
    mime_type: Optional[str] = None
) -> LocalFileReference:
    """
    Create a reference to a local image file.

    Missing metadata falls back to the configured defaults.

    Args:
        path: Path or file:// URI of the image.
        filename: Name reported to the server (defaults to the file's name).
        mime_type: MIME type (guessed from the extension when omitted).

    Returns:
        LocalFileReference pointing at the file.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    file_path = resolve_path(str(path))
    if not file_path.is_file():
        raise FileNotFoundError(f"Image not found: {file_path}")

    if mime_type is None:
        mime_type, _ = mimetypes.guess_type(file_path.name)

    ref = LocalFileReference(
        uri=file_path.resolve().as_uri(),
        filename=filename or file_path.name or config.image.default_filename,
        mime_type=mime_type or config.image.default_mime_type,
    )
    logger.debug(f"Picked image {ref.filename} ({ref.mime_type})")
    return ref


def resolve_path(uri: str) -> Path:
    """
    Turn a file:// URI or a plain path into a Path.

    Only inputs of the form scheme://... are URIs; anything else, including
    names containing a colon, is a filesystem path.

    Raises:
        ValueError: For a URI that does not point at a local file.
    """
    if "://" not in uri:
        return Path(uri)
    parsed = urlparse(uri)
    if parsed.scheme != "file":
        raise ValueError(f"Unsupported image URI scheme: {parsed.scheme}")
    return Path(unquote(parsed.path))


def read_image_bytes(ref: LocalFileReference) -> bytes:
    """
    Read the bytes of a picked image.

    Raises:
        FileNotFoundError: If the file has gone away since it was picked.
    """
    file_path = resolve_path(ref.uri)
    data = file_path.read_bytes()
    logger.debug(f"Read {len(data)} bytes from {file_path}")
    return data
