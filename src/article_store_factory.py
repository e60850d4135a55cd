"""
Factory function for creating article stores.
"""
from typing import Optional

from src.article_store import ArticleStore
from src.config import Config
from src.local_disk_article_store import LocalDiskArticleStore
from src.tigris_article_store import TigrisArticleStore


def create_article_store(articles_dir: Optional[str] = None, config: Optional[Config] = None) -> ArticleStore:
    """
    Create an article store based on environment configuration.

    Reads the ARTICLE_STORAGE_TYPE environment variable to determine
    which implementation to use:
    - 'local' or unset: LocalDiskArticleStore (default)
    - 'tigris': TigrisArticleStore

    Args:
        articles_dir: Directory for local disk storage (defaults to ARTICLES_DIR)
        config: Optional Config instance (created if not provided)

    Returns:
        ArticleStore: Configured article store instance
    """
    config = config or Config()

    if config.article_storage_type == 'tigris':
        return TigrisArticleStore(prefix=config.articles_prefix)
    # Default to local disk storage
    return LocalDiskArticleStore(articles_dir=articles_dir or config.articles_dir)
