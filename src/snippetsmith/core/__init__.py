"""Engine-agnostic core of the playground fence extension."""

from __future__ import annotations

from .config import PlaygroundConfig, SiteConfig, load_site_config
from .emitter import (
    TOKEN_TYPE,
    ParseContext,
    PlaygroundMatch,
    PlaygroundToken,
    build_snippet_markup,
    match_playground_block,
)
from .exceptions import (
    ConfigError,
    MarkdownConversionError,
    SnippetExportError,
    SnippetsmithError,
)
from .lines import LineIndex, LineSpan
from .markup import Markup, encode_content
from .scanner import FenceScan, FenceState, fence_content, opens_fence, scan_fence


__all__ = [
    "TOKEN_TYPE",
    "ConfigError",
    "FenceScan",
    "FenceState",
    "LineIndex",
    "LineSpan",
    "MarkdownConversionError",
    "Markup",
    "ParseContext",
    "PlaygroundConfig",
    "PlaygroundMatch",
    "PlaygroundToken",
    "SiteConfig",
    "SnippetExportError",
    "SnippetsmithError",
    "build_snippet_markup",
    "encode_content",
    "fence_content",
    "load_site_config",
    "match_playground_block",
    "opens_fence",
    "scan_fence",
]
