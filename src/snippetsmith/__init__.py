"""Playground snippet fences for Markdown documentation sites."""

from __future__ import annotations

from snippetsmith.adapters import (
    MarkdownDocument,
    PlaygroundExtension,
    playground_plugin,
    render_markdown,
    render_page,
)
from snippetsmith.api import Snippet, export_snippets, extract_snippets
from snippetsmith.core import (
    ConfigError,
    MarkdownConversionError,
    PlaygroundConfig,
    PlaygroundToken,
    SiteConfig,
    SnippetExportError,
    SnippetsmithError,
    build_snippet_markup,
    encode_content,
    load_site_config,
    scan_fence,
)
from snippetsmith.version import get_version


__version__ = get_version()

__all__ = [
    "ConfigError",
    "MarkdownConversionError",
    "MarkdownDocument",
    "PlaygroundConfig",
    "PlaygroundExtension",
    "PlaygroundToken",
    "SiteConfig",
    "Snippet",
    "SnippetExportError",
    "SnippetsmithError",
    "__version__",
    "build_snippet_markup",
    "encode_content",
    "export_snippets",
    "extract_snippets",
    "load_site_config",
    "playground_plugin",
    "render_markdown",
    "render_page",
    "scan_fence",
]
