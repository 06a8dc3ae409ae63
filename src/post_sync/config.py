"""
Configuration for the Post Sync client.

This module centralizes all configurable parameters. The base endpoint of
the remote post collection is read from the environment (a local .env file
is honoured) when the configuration is built.
"""

import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv


load_dotenv()


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}")


@dataclass
class APIConfig:
    """Remote post collection settings."""
    base_url: str = field(default_factory=lambda: os.getenv("POST_API_URL", ""))
    timeout_seconds: float = field(
        default_factory=lambda: _env_float("POST_API_TIMEOUT", 10.0)
    )

    # Multipart part carrying the post JSON, shared by create and update
    json_field: str = field(
        default_factory=lambda: os.getenv("POST_API_JSON_FIELD", "post")
    )
    image_field: str = "image"


@dataclass
class ImageConfig:
    """Defaults applied to picked images missing metadata."""
    default_filename: str = "image.jpg"
    default_mime_type: str = "image/jpeg"


@dataclass
class LogConfig:
    """Logging configuration."""
    log_directory: Path = field(default_factory=lambda: Path("logs"))
    log_filename: str = "post_sync.log"
    log_level: str = field(
        default_factory=lambda: os.getenv("POST_SYNC_LOG_LEVEL", "INFO")
    )
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_to_file: bool = False

    @property
    def log_file_path(self) -> Path:
        """Get full path to the log file."""
        return self.log_directory / self.log_filename


@dataclass
class Config:
    """Master configuration combining all sub-configurations."""
    api: APIConfig = field(default_factory=APIConfig)
    image: ImageConfig = field(default_factory=ImageConfig)
    log: LogConfig = field(default_factory=LogConfig)


def load_config(base_url: Optional[str] = None) -> Config:
    """
    Build a fresh configuration from the current environment.

    Args:
        base_url: Overrides POST_API_URL when given.
    """
    cfg = Config()
    if base_url:
        cfg.api.base_url = base_url
    return cfg


# Global configuration instance
config = Config()
