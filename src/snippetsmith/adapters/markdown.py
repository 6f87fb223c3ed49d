"""Markdown conversion utilities for snippetsmith."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
import logging
import re
from threading import Lock
from typing import Any

import yaml

from snippetsmith.core.config import PlaygroundConfig
from snippetsmith.core.diagnostics import DiagnosticEmitter, LoggingEmitter
from snippetsmith.core.emitter import TOKEN_TYPE, PlaygroundToken
from snippetsmith.core.exceptions import MarkdownConversionError
from snippetsmith.core.markup import Markup


__all__ = [
    "DEFAULT_ENGINE",
    "DEFAULT_MARKDOWN_EXTENSIONS",
    "ENGINES",
    "MarkdownConversionError",
    "MarkdownDocument",
    "deduplicate_markdown_extensions",
    "normalize_markdown_extensions",
    "parse_snippets",
    "render_markdown",
    "resolve_markdown_extensions",
    "split_front_matter",
]


logger = logging.getLogger(__name__)

ENGINES = ("markdown-it", "python-markdown")
DEFAULT_ENGINE = "markdown-it"

# Applies to the python-markdown engine; the playground extension is always added.
DEFAULT_MARKDOWN_EXTENSIONS = [
    "pymdownx.highlight",
    "pymdownx.superfences",
    "abbr",
    "admonition",
    "attr_list",
    "def_list",
    "footnotes",
    "md_in_html",
    "pymdownx.mark",
    "pymdownx.tasklist",
    "pymdownx.tilde",
    "tables",
]

DEFAULT_EXTENSION_CONFIGS: dict[str, dict[str, object]] = {
    "pymdownx.highlight": {
        "pygments_lang_class": True,
    },
}

# Rules enabled on top of the markdown-it commonmark preset.
MARKDOWN_IT_RULES = ("table", "strikethrough")


@dataclass(slots=True)
class MarkdownDocument:
    """Result of converting Markdown into HTML.

    Snippet line ranges are relative to the body left after front matter
    removal.
    """

    html: str
    front_matter: dict[str, Any]
    snippets: list[PlaygroundToken] = field(default_factory=list)


class _MarkdownCacheEntry:
    __slots__ = ("lock", "processor")

    def __init__(self, processor: Any) -> None:
        self.processor = processor
        self.lock = Lock()


_MARKDOWN_CACHE: dict[tuple[str, tuple[str, ...], str], _MarkdownCacheEntry] = {}
_MARKDOWN_CACHE_GUARD = Lock()


def resolve_markdown_extensions(
    requested: Iterable[str] | None,
    disabled: Iterable[str] | None,
) -> list[str]:
    """Return the active Markdown extension list after applying overrides."""
    enabled = normalize_markdown_extensions(requested)
    disabled_normalized = {
        extension.lower() for extension in normalize_markdown_extensions(disabled)
    }

    combined = deduplicate_markdown_extensions(list(DEFAULT_MARKDOWN_EXTENSIONS) + enabled)

    if not disabled_normalized:
        return combined

    return [extension for extension in combined if extension.lower() not in disabled_normalized]


def deduplicate_markdown_extensions(values: Iterable[str]) -> list[str]:
    """Remove duplicate extensions while preserving order and case."""
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        if not isinstance(value, str):
            continue
        key = value.lower()
        if key in seen:
            continue
        seen.add(key)
        result.append(value)
    return result


def normalize_markdown_extensions(
    values: Iterable[str] | str | None,
) -> list[str]:
    """Normalise extension names from CLI-friendly strings into a flat list."""
    if values is None:
        return []

    if isinstance(values, str):
        candidates: Iterable[str] = [values]
    else:
        candidates = values

    normalized: list[str] = []
    for value in candidates:
        if not isinstance(value, str):
            continue
        chunks = re.split(r"[,\s\x00]+", value)
        normalized.extend(chunk for chunk in chunks if chunk)
    return normalized


def render_markdown(
    source: str,
    *,
    engine: str = DEFAULT_ENGINE,
    config: PlaygroundConfig | None = None,
    extensions: Sequence[str] | None = None,
    emitter: DiagnosticEmitter | None = None,
) -> MarkdownDocument:
    """Convert Markdown source into HTML while collecting front matter and snippets.

    ``extensions`` only applies to the ``python-markdown`` engine and defaults
    to :data:`DEFAULT_MARKDOWN_EXTENSIONS`. Without an ``emitter`` diagnostics go
    to the ``snippetsmith`` loggers.
    """
    if engine not in ENGINES:
        raise MarkdownConversionError(
            f"Unknown Markdown engine '{engine}', expected one of: {', '.join(ENGINES)}."
        )
    config = config or PlaygroundConfig()
    emitter = emitter or LoggingEmitter()
    metadata, markdown_body = split_front_matter(source)

    if engine == "markdown-it":
        html, snippets = _render_markdown_it(markdown_body, config)
    else:
        active = tuple(DEFAULT_MARKDOWN_EXTENSIONS if extensions is None else extensions)
        html, snippets = _render_python_markdown(markdown_body, config, active)

    for snippet in snippets:
        emitter.event(
            "playground_snippet",
            {
                "lines": snippet.line_range,
                "closed": snippet.closed,
                "level": snippet.level,
                "info": snippet.info,
            },
        )
    logger.debug("rendered %d playground snippet(s) with %s", len(snippets), engine)
    return MarkdownDocument(html=html, front_matter=metadata, snippets=snippets)


def parse_snippets(source: str, config: PlaygroundConfig | None = None) -> list[PlaygroundToken]:
    """Return the playground tokens of ``source`` without rendering HTML."""
    config = config or PlaygroundConfig()
    entry = _resolve_entry("markdown-it", (), config)
    try:
        with entry.lock:
            tokens = entry.processor.parse(source)
    except Exception as exc:  # pragma: no cover - library-controlled
        raise MarkdownConversionError(f"Failed to parse Markdown source: {exc}") from exc
    return _collect_tokens(tokens)


def split_front_matter(source: str) -> tuple[dict[str, Any], str]:
    """Split YAML front matter from Markdown content, returning metadata and body."""
    candidate = source.lstrip("\ufeff")
    prefix_len = len(source) - len(candidate)
    # Only "\n" separates lines; other line boundaries belong to the body text.
    lines = candidate.split("\n")
    if not lines or lines[0].strip() != "---":
        return {}, source

    front_matter_lines: list[str] = []
    closing_index: int | None = None
    for idx, line in enumerate(lines[1:], start=1):
        stripped = line.strip()
        if stripped in {"---", "..."}:
            closing_index = idx
            break
        front_matter_lines.append(line)

    if closing_index is None:
        return {}, source

    raw_block = "\n".join(front_matter_lines)
    try:
        metadata = yaml.safe_load(raw_block) or {}
    except yaml.YAMLError:
        logger.debug("ignoring unparsable front matter", exc_info=True)
        return {}, source

    if not isinstance(metadata, dict):
        metadata = {}

    body = "\n".join(lines[closing_index + 1 :])

    prefix = source[:prefix_len]
    return metadata, prefix + body


def _render_markdown_it(
    body: str, config: PlaygroundConfig
) -> tuple[str, list[PlaygroundToken]]:
    entry = _resolve_entry("markdown-it", (), config)
    try:
        with entry.lock:
            md = entry.processor
            env: dict[str, Any] = {}
            tokens = md.parse(body, env)
            html = md.renderer.render(tokens, md.options, env)
    except Exception as exc:  # pragma: no cover - library-controlled
        raise MarkdownConversionError(f"Failed to convert Markdown source: {exc}") from exc
    return html, _collect_tokens(tokens)


def _render_python_markdown(
    body: str,
    config: PlaygroundConfig,
    extensions: tuple[str, ...],
) -> tuple[str, list[PlaygroundToken]]:
    entry = _resolve_entry("python-markdown", extensions, config)
    try:
        with entry.lock:
            processor, playground = entry.processor
            processor.reset()
            html = processor.convert(body)
            snippets = playground.tokens
    except Exception as exc:  # pragma: no cover - library-controlled
        raise MarkdownConversionError(f"Failed to convert Markdown source: {exc}") from exc
    return html, snippets


def _collect_tokens(tokens: Sequence[Any]) -> list[PlaygroundToken]:
    snippets: list[PlaygroundToken] = []
    for token in tokens:
        if token.type != TOKEN_TYPE:
            continue
        meta = token.meta or {}
        start, end = token.map or (0, 0)
        snippets.append(
            PlaygroundToken(
                content=Markup(token.content),
                code=meta.get("code", ""),
                line_range=(start, end),
                level=token.level,
                info=token.info,
                closed=bool(meta.get("closed", True)),
            )
        )
    return snippets


def _resolve_entry(
    engine: str,
    extensions: tuple[str, ...],
    config: PlaygroundConfig,
) -> _MarkdownCacheEntry:
    cache_key = (engine, extensions, config.model_dump_json())
    entry = _MARKDOWN_CACHE.get(cache_key)
    if entry is not None:
        return entry
    with _MARKDOWN_CACHE_GUARD:
        entry = _MARKDOWN_CACHE.get(cache_key)
        if entry is None:
            if engine == "markdown-it":
                processor: Any = _build_markdown_it(config)
            else:
                processor = _build_python_markdown(extensions, config)
            entry = _MarkdownCacheEntry(processor)
            _MARKDOWN_CACHE[cache_key] = entry
    return entry


def _build_markdown_it(config: PlaygroundConfig) -> Any:
    from markdown_it import MarkdownIt

    from .markdown_it import playground_plugin

    md = MarkdownIt("commonmark").enable(list(MARKDOWN_IT_RULES))
    md.use(playground_plugin, config=config)
    return md


def _build_python_markdown(extensions: tuple[str, ...], config: PlaygroundConfig) -> Any:
    import markdown

    from .python_markdown import PlaygroundExtension

    playground = PlaygroundExtension(**config.model_dump())
    extension_configs = {
        name: dict(DEFAULT_EXTENSION_CONFIGS[name])
        for name in extensions
        if name in DEFAULT_EXTENSION_CONFIGS
    }
    try:
        processor = markdown.Markdown(
            extensions=[*extensions, playground], extension_configs=extension_configs
        )
    except Exception as exc:  # pragma: no cover - library-controlled
        raise MarkdownConversionError(f"Failed to initialize Markdown processor: {exc}") from exc
    return processor, playground
