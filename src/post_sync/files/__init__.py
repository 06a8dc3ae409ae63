"""
Image File Module

Provides local image references for uploads.
"""

from .images import reference_from_path, read_image_bytes, resolve_path

__all__ = ["reference_from_path", "read_image_bytes", "resolve_path"]
