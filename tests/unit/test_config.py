"""
Unit tests for configuration management.
"""
import os

from src.config import Config


class TestConfig:
    """Test suite for Config class."""

    def test_config_initialization(self):
        """Test that Config initializes properly."""
        config = Config()
        assert config is not None

    def test_get_with_default(self):
        """Test get method with default value."""
        config = Config()
        assert config.get("NONEXISTENT_KEY", "default_value") == "default_value"

    def test_defaults(self, monkeypatch):
        """Test default values when nothing is set."""
        for key in ("ARTICLES_DIR", "ARTICLE_STORAGE_TYPE", "ARTICLES_PREFIX", "EXCERPT_LENGTH",
                    "IMAGES_DIR", "MAX_IMAGE_SIZE", "SERVER_HOST", "SERVER_PORT", "LOG_LEVEL"):
            monkeypatch.delenv(key, raising=False)
        config = Config()
        assert config.articles_dir == "articles"
        assert config.article_storage_type == "local"
        assert config.articles_prefix == "articles/"
        assert config.excerpt_length == 150
        assert config.images_dir == os.path.join("public", "images")
        assert config.max_image_size == 5 * 1024 * 1024
        assert config.server_host == "127.0.0.1"
        assert config.server_port == 3000
        assert config.log_level == "INFO"

    def test_articles_dir_property(self, monkeypatch):
        """Test articles_dir property."""
        monkeypatch.setenv("ARTICLES_DIR", "/srv/articles")
        assert Config().articles_dir == "/srv/articles"

    def test_storage_type_is_lowercased(self, monkeypatch):
        """Test that article_storage_type is case-insensitive."""
        monkeypatch.setenv("ARTICLE_STORAGE_TYPE", "TIGRIS")
        assert Config().article_storage_type == "tigris"

    def test_excerpt_length_property(self, monkeypatch):
        """Test excerpt_length property returns integer."""
        monkeypatch.setenv("EXCERPT_LENGTH", "80")
        config = Config()
        assert config.excerpt_length == 80
        assert isinstance(config.excerpt_length, int)

    def test_invalid_integer_falls_back(self, monkeypatch):
        """Test that malformed integers use the default."""
        monkeypatch.setenv("SERVER_PORT", "not-a-port")
        monkeypatch.setenv("MAX_IMAGE_SIZE", "")
        config = Config()
        assert config.server_port == 3000
        assert config.max_image_size == 5 * 1024 * 1024

    def test_log_level_is_uppercased(self, monkeypatch):
        """Test log_level normalisation."""
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert Config().log_level == "DEBUG"
