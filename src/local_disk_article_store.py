"""
Local disk implementation of article storage.

Stores one UTF-8 file per article on the local filesystem.
Default location: articles/<id>.md
"""
import logging
import os
from typing import List

from src.article_store import (
    ARTICLE_EXTENSION,
    ArticleStore,
    filename_to_id,
    id_to_filename,
    validate_article_id,
)
from src.errors import ArticleIOError, ArticleNotFoundError, InvalidArticleIdError
from src.file_utils import atomic_write_text

logger = logging.getLogger(__name__)


class LocalDiskArticleStore(ArticleStore):
    """
    Local disk implementation of article storage.

    Each article lives in its own file named <id>.md inside articles_dir.
    """

    def __init__(self, articles_dir: str = "articles"):
        """
        Initialize local disk store.

        Args:
            articles_dir: Directory holding the article files (default: "articles")
        """
        self.articles_dir = articles_dir
        self.ensure()

    def ensure(self) -> None:
        """Create the articles directory if it does not exist."""
        try:
            os.makedirs(self.articles_dir, exist_ok=True)
        except OSError as e:
            raise ArticleIOError(f"Cannot create articles directory {self.articles_dir}: {e}") from e

    def _get_filepath(self, article_id: str) -> str:
        """Get the full file path for an article."""
        return os.path.join(self.articles_dir, id_to_filename(article_id))

    def list_ids(self) -> List[str]:
        """
        List article ids from the files in the articles directory.

        Hidden files (temporary writes) and files without the article
        extension are ignored. Ids are returned in filename order.
        """
        try:
            names = sorted(os.listdir(self.articles_dir))
        except OSError as e:
            raise ArticleIOError(f"Cannot list articles directory {self.articles_dir}: {e}") from e

        ids = []
        for name in names:
            if name.startswith(".") or not name.endswith(ARTICLE_EXTENSION):
                continue
            if not os.path.isfile(os.path.join(self.articles_dir, name)):
                continue
            article_id = filename_to_id(name)
            try:
                validate_article_id(article_id)
            except InvalidArticleIdError:
                logger.warning("Ignoring file with unusable article id: %s", name)
                continue
            ids.append(article_id)
        return ids

    def read(self, article_id: str) -> str:
        """Read an article file as UTF-8 text."""
        filepath = self._get_filepath(article_id)
        try:
            with open(filepath, "r", encoding="utf-8", newline="") as f:
                return f.read()
        except FileNotFoundError as e:
            raise ArticleNotFoundError(article_id) from e
        except (OSError, UnicodeDecodeError) as e:
            raise ArticleIOError(f"Cannot read article {article_id}: {e}") from e

    def write(self, article_id: str, text: str) -> None:
        """Atomically replace an article file."""
        filepath = self._get_filepath(article_id)
        try:
            atomic_write_text(filepath, text)
        except OSError as e:
            raise ArticleIOError(f"Cannot write article {article_id}: {e}") from e
        logger.debug("Wrote article %s to %s", article_id, filepath)

    def delete(self, article_id: str) -> bool:
        """Remove an article file. Returns False if it did not exist."""
        filepath = self._get_filepath(article_id)
        try:
            os.remove(filepath)
        except FileNotFoundError:
            return False
        except OSError as e:
            raise ArticleIOError(f"Cannot delete article {article_id}: {e}") from e
        return True

    def exists(self, article_id: str) -> bool:
        """Check whether an article file exists."""
        return os.path.isfile(self._get_filepath(article_id))
