"""
Article view models returned by the repository.
"""
from dataclasses import dataclass
from typing import Any, Dict

DEFAULT_TITLE = "Untitled"


@dataclass(frozen=True)
class ArticleSummary:
    """An article as shown in the listing feed (no full body)."""

    id: str
    title: str
    image: str
    created_at: str
    updated_at: str
    excerpt: str

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON shape used by the HTTP API."""
        return {
            "id": self.id,
            "title": self.title,
            "image": self.image,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "excerpt": self.excerpt,
        }


@dataclass(frozen=True)
class ArticleDetail:
    """
    A single article with both representations of its body.

    ``body`` is the raw markdown for the editor, ``body_html`` the rendered
    HTML for the reader view.
    """

    id: str
    title: str
    image: str
    created_at: str
    updated_at: str
    body: str
    body_html: str

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON shape used by the HTTP API."""
        return {
            "id": self.id,
            "title": self.title,
            "image": self.image,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "body": self.body,
            "bodyHtml": self.body_html,
        }
