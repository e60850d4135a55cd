"""
Article repository: CRUD over a store of frontmatter-encoded articles.

The repository is the only component that reads or writes articles. It
decodes stored text with the frontmatter codec, keeps the createdAt and
updatedAt timestamps, and renders markdown bodies for the reader view.
Every call goes back to the store; nothing is cached between calls.
"""
import logging
import re
import uuid
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from src import frontmatter
from src.article_store import ArticleStore, validate_article_id
from src.errors import ArticleNotFoundError, ArticleStoreError
from src.file_utils import format_timestamp, parse_timestamp
from src.markdown_renderer import render_markdown
from src.models import DEFAULT_TITLE, ArticleDetail, ArticleSummary

logger = logging.getLogger(__name__)

DEFAULT_EXCERPT_LENGTH = 150
ELLIPSIS = "..."

_LINE_BREAKS_RE = re.compile(r"[\r\n]+")


def make_excerpt(body: str, length: int = DEFAULT_EXCERPT_LENGTH) -> str:
    """
    Build a listing preview from a markdown body.

    Bodies longer than ``length`` characters are cut and suffixed with "...".
    """
    text = (body or "").strip()
    if len(text) > length:
        return text[:length] + ELLIPSIS
    return text


def sort_by_created_at(articles: Iterable[ArticleSummary]) -> List[ArticleSummary]:
    """
    Order articles newest first by createdAt.

    Missing or unparsable timestamps sort last. The sort is stable, so
    articles with equal timestamps keep their enumeration order.
    """
    return sorted(articles, key=lambda a: parse_timestamp(a.created_at), reverse=True)


def _single_line(value: Optional[str]) -> str:
    if value is None:
        return ""
    return _LINE_BREAKS_RE.sub(" ", str(value)).strip()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ArticleRepository:
    """Reads and writes articles through an ArticleStore."""

    def __init__(
        self,
        store: ArticleStore,
        renderer: Optional[Callable[[str], str]] = None,
        excerpt_length: int = DEFAULT_EXCERPT_LENGTH,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the repository.

        Args:
            store: Backing key/value store for encoded articles
            renderer: Markdown to HTML function (default: render_markdown)
            excerpt_length: Characters kept in listing excerpts
            clock: Returns the current aware datetime (default: UTC now)
        """
        self.store = store
        self.renderer = renderer or render_markdown
        self.excerpt_length = excerpt_length
        self.clock = clock or _utc_now

    def _now(self) -> str:
        return format_timestamp(self.clock())

    def _load(self, article_id: str) -> Tuple[Dict[str, str], str]:
        return frontmatter.decode(self.store.read(article_id))

    def _generate_id(self) -> str:
        while True:
            article_id = uuid.uuid4().hex
            if not self.store.exists(article_id):
                return article_id

    def _build_summary(self, article_id: str, metadata: Dict[str, str], body: str) -> ArticleSummary:
        return ArticleSummary(
            id=article_id,
            title=metadata.get("title") or DEFAULT_TITLE,
            image=metadata.get("image", ""),
            created_at=metadata.get("createdAt", ""),
            updated_at=metadata.get("updatedAt", ""),
            excerpt=make_excerpt(body, self.excerpt_length),
        )

    def list_articles(self) -> List[ArticleSummary]:
        """
        Load every stored article as a summary, newest first.

        Entries that cannot be read are skipped and logged; one bad file
        does not fail the listing. Failing to enumerate the store does.

        Returns:
            Article summaries sorted by createdAt descending.
        """
        summaries = []
        skipped = 0
        for article_id in self.store.list_ids():
            try:
                metadata, body = self._load(article_id)
            except ArticleStoreError as e:
                skipped += 1
                logger.warning("Skipping unreadable article %s: %s", article_id, e)
                continue
            summaries.append(self._build_summary(article_id, metadata, body))

        if skipped:
            logger.warning(
                "Partial listing: %d articles listed, %d skipped", len(summaries), skipped
            )
        return sort_by_created_at(summaries)

    def get_article(self, article_id: str) -> ArticleDetail:
        """
        Load one article with its raw and rendered body.

        Args:
            article_id: The unique identifier of the article.

        Returns:
            ArticleDetail with ``body`` (markdown) and ``body_html``.

        Raises:
            InvalidArticleIdError: If the id is malformed.
            ArticleNotFoundError: If no article has this id.
            ArticleIOError: If the article exists but cannot be read.
        """
        metadata, body = self._load(article_id)
        return ArticleDetail(
            id=article_id,
            title=metadata.get("title") or DEFAULT_TITLE,
            image=metadata.get("image", ""),
            created_at=metadata.get("createdAt", ""),
            updated_at=metadata.get("updatedAt", ""),
            body=body,
            body_html=self.renderer(body),
        )

    def save_article(
        self,
        article_id: Optional[str] = None,
        title: Optional[str] = None,
        body: Optional[str] = None,
        image: Optional[str] = None,
    ) -> str:
        """
        Create or update an article.

        Without an id a fresh random id is allocated. With an id, the stored
        createdAt is kept; if the previous entry cannot be read, createdAt
        falls back to now rather than failing the save. updatedAt is always
        refreshed and never moves backwards.

        Args:
            article_id: Existing or caller-chosen id, or None to create
            title: Article title (blank becomes the default title)
            body: Markdown body, stored verbatim
            image: Relative image path or empty string

        Returns:
            The article id.
        """
        now = self._now()
        created_at = now
        updated_at = now
        is_new = True

        if article_id:
            validate_article_id(article_id)
            try:
                previous, _ = self._load(article_id)
            except ArticleNotFoundError:
                pass
            except ArticleStoreError as e:
                is_new = False
                logger.warning(
                    "Could not read previous version of article %s, resetting createdAt: %s",
                    article_id, e
                )
            else:
                is_new = False
                created_at = previous.get("createdAt") or now
                previous_updated = previous.get("updatedAt", "")
                if parse_timestamp(previous_updated) > parse_timestamp(now):
                    updated_at = previous_updated
        else:
            article_id = self._generate_id()

        metadata = {
            "title": _single_line(title) or DEFAULT_TITLE,
            "image": _single_line(image),
            "createdAt": created_at,
            "updatedAt": updated_at,
        }
        self.store.write(article_id, frontmatter.encode(metadata, body or ""))
        logger.info("%s article %s", "Created" if is_new else "Updated", article_id)
        return article_id

    def delete_article(self, article_id: str) -> None:
        """
        Delete an article. Its image file, if any, is left in place.

        Raises:
            ArticleNotFoundError: If no article has this id.
        """
        if not self.store.delete(article_id):
            raise ArticleNotFoundError(article_id)
        logger.info("Deleted article %s", article_id)

    def article_exists(self, article_id: str) -> bool:
        """Check whether an article with this id is stored."""
        return self.store.exists(article_id)
