"""High-level helpers built on the rendering adapters."""

from __future__ import annotations

from .snippets import DEFAULT_SNIPPET_FILENAME, Snippet, export_snippets, extract_snippets


__all__ = ["DEFAULT_SNIPPET_FILENAME", "Snippet", "export_snippets", "extract_snippets"]
