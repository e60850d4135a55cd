"""
Abstract interface for article storage backends.

A store is a flat key/value space: article id -> encoded article text.
It knows nothing about metadata or markdown; the repository layers the
frontmatter codec on top. Implementations can keep articles in a local
directory or in distributed storage (Tigris/S3).
"""
from abc import ABC, abstractmethod
from typing import List

from src.errors import InvalidArticleIdError

ARTICLE_EXTENSION = ".md"


def validate_article_id(article_id: str) -> str:
    """
    Check that an id can be used as a storage key.

    Args:
        article_id: Candidate id.

    Returns:
        The id unchanged.

    Raises:
        InvalidArticleIdError: If the id is empty, contains path separators,
            "..", control line breaks or NUL, starts with "." or already
            carries the article extension.
    """
    if not isinstance(article_id, str) or not article_id.strip():
        raise InvalidArticleIdError(article_id)
    if any(bad in article_id for bad in ("/", "\\", "..", "\x00", "\n", "\r")):
        raise InvalidArticleIdError(article_id)
    if article_id.startswith(".") or article_id.lower().endswith(ARTICLE_EXTENSION):
        raise InvalidArticleIdError(article_id)
    return article_id


def id_to_filename(article_id: str) -> str:
    """Build the storage filename for an article id."""
    return validate_article_id(article_id) + ARTICLE_EXTENSION


def filename_to_id(filename: str) -> str:
    """Recover the article id from a storage filename (inverse of id_to_filename)."""
    return filename[:-len(ARTICLE_EXTENSION)]


class ArticleStore(ABC):
    """Abstract base class for article storage backends."""

    @abstractmethod
    def ensure(self) -> None:
        """Create the backing location if needed. Idempotent."""

    @abstractmethod
    def list_ids(self) -> List[str]:
        """
        List the ids of all stored articles.

        Returns:
            Article ids in a stable enumeration order.
        """

    @abstractmethod
    def read(self, article_id: str) -> str:
        """
        Read the encoded text of one article.

        Args:
            article_id: The unique identifier of the article.

        Returns:
            The stored text.

        Raises:
            ArticleNotFoundError: If there is no entry for the id.
            ArticleIOError: If the entry exists but cannot be read.
        """

    @abstractmethod
    def write(self, article_id: str, text: str) -> None:
        """
        Create or replace the encoded text of one article.

        Args:
            article_id: The unique identifier of the article.
            text: Full encoded article text.
        """

    @abstractmethod
    def delete(self, article_id: str) -> bool:
        """
        Delete an article by ID.

        Returns:
            True if the entry was deleted, False if it was not found.
        """

    @abstractmethod
    def exists(self, article_id: str) -> bool:
        """Check whether an entry exists for the id."""
