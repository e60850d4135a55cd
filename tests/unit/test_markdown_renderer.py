"""
Unit tests for markdown rendering.
"""
from unittest.mock import patch

from src.markdown_renderer import MarkdownRenderer, render_markdown


class TestMarkdownRenderer:
    """Test suite for MarkdownRenderer."""

    def test_renders_heading_and_emphasis(self):
        """Test basic markdown conversion."""
        html_out = render_markdown("# Title\n\nSome *emphasis* and **bold**.")
        assert "<h1>Title</h1>" in html_out
        assert "<em>emphasis</em>" in html_out
        assert "<strong>bold</strong>" in html_out

    def test_renders_images(self):
        """Test that images survive sanitizing."""
        html_out = render_markdown("![alt text](/images/1.png)")
        assert "<img" in html_out
        assert 'src="/images/1.png"' in html_out

    def test_renders_fenced_code(self):
        """Test fenced code block support."""
        html_out = render_markdown("```\nprint('hi')\n```")
        assert "<pre>" in html_out
        assert "<code>" in html_out

    def test_strips_script_tags(self):
        """Test that raw script tags are not passed through."""
        html_out = render_markdown("Hello <script>alert(1)</script>")
        assert "<script>" not in html_out

    def test_strips_javascript_links(self):
        """Test that javascript: URLs are removed from links."""
        html_out = render_markdown("[click](javascript:alert(1))")
        assert "javascript:" not in html_out

    def test_empty_input(self):
        """Test that empty and None input render to empty output."""
        assert render_markdown("") == ""
        assert MarkdownRenderer().render(None) == ""

    def test_deterministic(self):
        """Test that rendering the same text twice gives the same HTML."""
        text = "# A\n\n- one\n- two\n"
        assert render_markdown(text) == render_markdown(text)

    def test_falls_back_when_markdown_fails(self):
        """Test that a renderer failure returns escaped source instead of raising."""
        renderer = MarkdownRenderer()
        with patch("src.markdown_renderer.md.markdown", side_effect=RuntimeError("boom")):
            html_out = renderer.render("<b>text</b>")
        assert html_out == "<pre>&lt;b&gt;text&lt;/b&gt;</pre>"

    def test_renderer_is_callable(self):
        """Test that a renderer instance can be used as a plain function."""
        renderer = MarkdownRenderer(extensions=[])
        assert "<p>hi</p>" in renderer("hi")
