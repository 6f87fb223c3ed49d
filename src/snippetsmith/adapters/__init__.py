"""Host Markdown engine integrations and HTML page rendering."""

from __future__ import annotations

from .markdown import (
    DEFAULT_ENGINE,
    DEFAULT_MARKDOWN_EXTENSIONS,
    ENGINES,
    MarkdownDocument,
    parse_snippets,
    render_markdown,
    resolve_markdown_extensions,
    split_front_matter,
)
from .markdown_it import playground_plugin
from .page import PageFormatter, render_page
from .python_markdown import PlaygroundExtension


__all__ = [
    "DEFAULT_ENGINE",
    "DEFAULT_MARKDOWN_EXTENSIONS",
    "ENGINES",
    "MarkdownDocument",
    "PageFormatter",
    "PlaygroundExtension",
    "parse_snippets",
    "playground_plugin",
    "render_markdown",
    "render_page",
    "resolve_markdown_extensions",
    "split_front_matter",
]
