"""
Configuration management for the article store.
Loads environment variables and provides access to configuration settings.
"""
import logging
import os
from typing import Optional

from dotenv import load_dotenv

# Configure logging
logger = logging.getLogger(__name__)


class Config:
    """Configuration settings loaded from environment variables."""

    def __init__(self):
        """Initialize configuration by loading environment variables."""
        load_dotenv()

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """
        Get a configuration value by key.

        Args:
            key: Configuration key name
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        return os.getenv(key, default)

    def _get_int(self, key: str, default: int) -> int:
        """Read an integer setting, falling back to the default on bad input."""
        raw = os.getenv(key)
        if raw is None or raw.strip() == "":
            return default
        try:
            return int(raw)
        except ValueError:
            logger.warning("Invalid integer for %s: %r, using default %s", key, raw, default)
            return default

    @property
    def articles_dir(self) -> str:
        """Get the local directory holding article files."""
        return os.getenv("ARTICLES_DIR", "articles")

    @property
    def article_storage_type(self) -> str:
        """Get the article storage backend ('local' or 'tigris')."""
        return os.getenv("ARTICLE_STORAGE_TYPE", "local").lower()

    @property
    def articles_prefix(self) -> str:
        """Get the object key prefix used by the Tigris backend."""
        return os.getenv("ARTICLES_PREFIX", "articles/")

    @property
    def excerpt_length(self) -> int:
        """Get the number of body characters kept in listing excerpts."""
        return self._get_int("EXCERPT_LENGTH", 150)

    @property
    def images_dir(self) -> str:
        """Get the directory uploaded images are written to."""
        return os.getenv("IMAGES_DIR", os.path.join("public", "images"))

    @property
    def max_image_size(self) -> int:
        """Get the upload size ceiling for images, in bytes."""
        return self._get_int("MAX_IMAGE_SIZE", 5 * 1024 * 1024)

    @property
    def server_host(self) -> str:
        """Get server host."""
        return os.getenv("SERVER_HOST", "127.0.0.1")

    @property
    def server_port(self) -> int:
        """Get server port."""
        return self._get_int("SERVER_PORT", 3000)

    @property
    def log_level(self) -> str:
        """Get the log level name for the server loggers."""
        return os.getenv("LOG_LEVEL", "INFO").upper()
