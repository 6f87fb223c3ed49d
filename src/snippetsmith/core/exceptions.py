"""Custom exception hierarchy for the snippet rendering pipeline."""

from __future__ import annotations


class SnippetsmithError(RuntimeError):
    """Base exception for rendering and export failures."""


class ConfigError(SnippetsmithError):
    """Raised when a configuration file cannot be read or validated."""


class MarkdownConversionError(SnippetsmithError):
    """Raised when Markdown cannot be converted into HTML."""


class SnippetExportError(SnippetsmithError):
    """Raised when extracted snippets cannot be written to disk."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "ConfigError",
    "MarkdownConversionError",
    "SnippetExportError",
    "SnippetsmithError",
    "exception_hint",
    "exception_messages",
]
