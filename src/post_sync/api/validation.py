"""
Local validation of post fields.

Runs before any network call so blank posts never reach the server.
"""

from typing import Dict

from .errors import ValidationError


TITLE_REQUIRED = "Title is required"
CONTENT_REQUIRED = "Content is required"


def collect_errors(title: str, content: str) -> Dict[str, str]:
    """Return field -> message for every blank field (empty when valid)."""
    errors: Dict[str, str] = {}
    if not (title or "").strip():
        errors["title"] = TITLE_REQUIRED
    if not (content or "").strip():
        errors["content"] = CONTENT_REQUIRED
    return errors


def validate_post(title: str, content: str) -> None:
    """
    Check that title and content are non-blank.

    Raises:
        ValidationError: Listing every blank field.
    """
    errors = collect_errors(title, content)
    if errors:
        raise ValidationError(errors)
