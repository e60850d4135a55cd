"""
Exception types raised by the article store.

Callers (the HTTP layer) map these onto user-facing responses:
not found and invalid ids become 404s, I/O failures become 500s.
"""


class ArticleStoreError(Exception):
    """Base class for all article store errors."""


class ArticleNotFoundError(ArticleStoreError):
    """Raised when an article id has no backing entry."""

    def __init__(self, article_id: str):
        super().__init__(f"Article not found: {article_id}")
        self.article_id = article_id


class ArticleIOError(ArticleStoreError):
    """Raised when the underlying storage fails to read, write or delete."""


class InvalidArticleIdError(ArticleStoreError, ValueError):
    """Raised when an article id cannot be mapped to a storage key."""

    def __init__(self, article_id: str):
        super().__init__(f"Invalid article id: {article_id!r}")
        self.article_id = article_id


class ImageUploadError(ValueError):
    """Raised when an uploaded image is rejected."""
