"""
Markdown to HTML rendering for article bodies.

Bodies are stored as markdown and rendered on every display read, so the
output always reflects the current renderer. Raw HTML inside a body is
filtered through an allow-list before it reaches a browser.
"""
import html
import logging

import bleach
import markdown as md

logger = logging.getLogger(__name__)

MD_EXTENSIONS = ["fenced_code", "tables", "sane_lists"]

ALLOWED_TAGS = [
    "a", "p", "br", "hr", "img",
    "strong", "em", "del", "code", "pre", "blockquote",
    "ul", "ol", "li",
    "h1", "h2", "h3", "h4", "h5", "h6",
    "table", "thead", "tbody", "tr", "th", "td",
]

ALLOWED_ATTRS = {
    "a": ["href", "title"],
    "img": ["src", "alt", "title"],
    "th": ["align"],
    "td": ["align"],
    "code": ["class"],
}

ALLOWED_PROTOCOLS = ["http", "https", "mailto"]


class MarkdownRenderer:
    """Converts markdown text to sanitized HTML."""

    def __init__(self, extensions=None):
        """
        Initialize the renderer.

        Args:
            extensions: Python-Markdown extension names (default: MD_EXTENSIONS)
        """
        self.extensions = list(extensions) if extensions is not None else list(MD_EXTENSIONS)

    def render(self, text: str) -> str:
        """
        Render markdown to sanitized HTML.

        Never raises: if the markdown library fails on some input, the escaped
        source is returned inside a <pre> block.
        """
        try:
            rendered = md.markdown(text or "", extensions=self.extensions)
        except Exception:  # pylint: disable=broad-exception-caught
            logger.exception("Markdown rendering failed, falling back to escaped source")
            return f"<pre>{html.escape(text or '')}</pre>"

        return bleach.clean(
            rendered,
            tags=ALLOWED_TAGS,
            attributes=ALLOWED_ATTRS,
            protocols=ALLOWED_PROTOCOLS,
            strip=True,
        )

    def __call__(self, text: str) -> str:
        return self.render(text)


_default_renderer = MarkdownRenderer()


def render_markdown(text: str) -> str:
    """Render markdown with the default extensions."""
    return _default_renderer.render(text)
